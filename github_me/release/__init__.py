# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release subsystem: compile the Lambda targets with cargo-lambda, validate
them with a dry-run deploy, and stage their zip archives for upload.
"""
