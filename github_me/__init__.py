# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
github-me release tooling.

Builds the `api` and `job` Lambda binaries with cargo-lambda, validates them
with a dry-run deploy, and stages their zip archives for upload.
"""

__version__ = "0.1.0"
