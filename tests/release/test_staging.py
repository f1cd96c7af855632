# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for stale-archive removal and archive staging.
"""

from pathlib import Path

import pytest

from github_me.config.schema import GithubMeConfig
from github_me.release.errors import StagingError
from github_me.release.staging import clean_destinations, remove_stale, stage_archive
from github_me.release.steps import PipelineStep, StepKind
from github_me.release.targets import ReleaseTarget, resolve_layout
from github_me.utils.hashing import compute_sha256
from tests.conftest import write_bootstrap_zip


def _target(tmp_path: Path, name: str = "api") -> ReleaseTarget:
    return ReleaseTarget(
        name=name,
        architecture="arm64",
        profile="release",
        build_archive=tmp_path / "target" / "lambda" / name / "bootstrap.zip",
        destination_archive=tmp_path / "Downloads" / f"github-me-{name}.zip",
    )


class TestRemoveStale:
    def test_removes_existing_archive(self, tmp_path: Path) -> None:
        archive = tmp_path / "github-me-api.zip"
        archive.write_bytes(b"old")

        assert remove_stale(archive) is True
        assert not archive.exists()

    def test_absent_archive_is_not_an_error(self, tmp_path: Path) -> None:
        archive = tmp_path / "github-me-api.zip"

        assert remove_stale(archive) is False
        assert not archive.exists()
        assert list(tmp_path.iterdir()) == []

    def test_idempotent(self, tmp_path: Path) -> None:
        archive = tmp_path / "github-me-job.zip"
        archive.write_bytes(b"old")

        remove_stale(archive)
        assert remove_stale(archive) is False

    def test_directory_in_the_way_is_a_staging_error(self, tmp_path: Path) -> None:
        archive = tmp_path / "github-me-api.zip"
        archive.mkdir()
        step = PipelineStep(ordinal=2, kind=StepKind.REMOVE_STALE, target="api")

        with pytest.raises(StagingError) as exc_info:
            remove_stale(archive, step=step)

        assert exc_info.value.step == step
        assert isinstance(exc_info.value.__cause__, OSError)


class TestStageArchive:
    def test_copies_byte_identical(self, tmp_path: Path) -> None:
        target = _target(tmp_path)
        write_bootstrap_zip(target.build_archive, b"\x7fELF api")
        target.destination_archive.parent.mkdir()

        staged = stage_archive(target)

        assert target.destination_archive.read_bytes() == target.build_archive.read_bytes()
        assert staged.sha256 == compute_sha256(target.build_archive)
        assert staged.size_bytes == target.build_archive.stat().st_size
        assert staged.target == "api"

    def test_missing_source(self, tmp_path: Path) -> None:
        target = _target(tmp_path)
        target.destination_archive.parent.mkdir()

        with pytest.raises(StagingError, match="Cannot stage api"):
            stage_archive(target)

        assert not target.destination_archive.exists()

    def test_missing_destination_dir_is_not_created(self, tmp_path: Path) -> None:
        target = _target(tmp_path)
        write_bootstrap_zip(target.build_archive, b"api")

        with pytest.raises(StagingError):
            stage_archive(target)

        assert not target.destination_archive.parent.exists()

    def test_overwrites_existing_destination(self, tmp_path: Path) -> None:
        target = _target(tmp_path)
        write_bootstrap_zip(target.build_archive, b"fresh")
        target.destination_archive.parent.mkdir()
        target.destination_archive.write_bytes(b"stale")

        stage_archive(target)

        assert target.destination_archive.read_bytes() == target.build_archive.read_bytes()


class TestCleanDestinations:
    def test_removes_only_existing(self, release_config: GithubMeConfig, downloads: Path) -> None:
        (downloads / "github-me-job.zip").write_bytes(b"old")
        (downloads / "unrelated.zip").write_bytes(b"keep")

        removed = clean_destinations(resolve_layout(release_config))

        assert [Path(p).name for p in removed] == ["github-me-job.zip"]
        assert (downloads / "unrelated.zip").exists()
        assert not (downloads / "github-me-job.zip").exists()
