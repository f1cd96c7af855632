# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for github-me tests.

The release tests never run the real cargo. `fake_cargo` patches
subprocess.run inside the toolchain module with a stand-in that records
every command, writes bootstrap.zip on `deploy --dry` like cargo-lambda does,
and can be told to fail a given command.
"""

import subprocess
import textwrap
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from github_me.config.schema import GithubMeConfig
from github_me.logging.logger import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging():  # type: ignore[no-untyped-def]
    """Point the package log handler back at the real stdout after each test."""
    yield
    configure_logging("INFO")


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes validation and sets something."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "github-me-test"
          log_level: "DEBUG"
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """Valid YAML that fails schema validation (unsupported architecture)."""
    config_content = textwrap.dedent("""\
        release:
          architecture: "riscv64"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """An empty cargo workspace directory."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture()
def downloads(tmp_path: Path) -> Path:
    """The directory destination archives get staged into."""
    path = tmp_path / "Downloads"
    path.mkdir()
    return path


@pytest.fixture()
def release_config(workspace: Path, downloads: Path) -> GithubMeConfig:
    """Default config pointed at the temp workspace and downloads directory."""
    return GithubMeConfig.model_validate(
        {
            "release": {
                "workspace_dir": str(workspace),
                "destination_dir": str(downloads),
            }
        }
    )


def write_bootstrap_zip(path: Path, payload: bytes) -> None:
    """Write a zip shaped like cargo-lambda's: a single `bootstrap` entry."""
    path.parent.mkdir(parents=True, exist_ok=True)
    info = zipfile.ZipInfo("bootstrap", date_time=(2024, 1, 1, 0, 0, 0))
    info.external_attr = 0o755 << 16
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(info, payload)


class FakeCargo:
    """
    Stand-in for `cargo lambda`.

    `failures` maps a command key ("build" or "deploy:<target>") to the exit
    code that command should return.
    """

    def __init__(self, build_root: Path) -> None:
        self.build_root = build_root
        self.calls: list[list[str]] = []
        self.failures: dict[str, int] = {}

    @staticmethod
    def key(command: list[str]) -> str:
        if "deploy" in command:
            return f"deploy:{command[command.index('--binary-name') + 1]}"
        return "build"

    def __call__(self, command, **kwargs) -> subprocess.CompletedProcess:  # type: ignore[no-untyped-def]
        command = list(command)
        self.calls.append(command)
        key = self.key(command)

        returncode = self.failures.get(key, 0)
        if returncode == 0 and key.startswith("deploy:"):
            target = key.split(":", 1)[1]
            payload = f"{target}-binary".encode()
            write_bootstrap_zip(self.build_root / target / "bootstrap.zip", payload)

        return subprocess.CompletedProcess(args=command, returncode=returncode)

    @property
    def keys(self) -> list[str]:
        return [self.key(call) for call in self.calls]


@pytest.fixture()
def fake_cargo(workspace: Path):  # type: ignore[no-untyped-def]
    cargo = FakeCargo(workspace / "target" / "lambda")
    with patch("github_me.release.toolchain.subprocess.run", side_effect=cargo):
        yield cargo
