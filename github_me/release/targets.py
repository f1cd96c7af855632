# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release targets and where their archives live.

A target's Build Output Archive is owned by cargo-lambda:

    <workspace>/<build_root>/<target>/bootstrap.zip

Its Destination Archive is the copy we hand out for upload:

    <destination_dir>/<project>-<target>.zip
"""

from dataclasses import dataclass
from pathlib import Path

from github_me.config.schema import GithubMeConfig
from github_me.utils.paths import expand_path


@dataclass(frozen=True)
class ReleaseTarget:
    """One Lambda binary built and packaged by the pipeline."""

    name: str
    architecture: str
    profile: str
    build_archive: Path
    destination_archive: Path


@dataclass(frozen=True)
class ReleaseLayout:
    """Everything the pipeline needs to know about paths, resolved once."""

    project_name: str
    workspace_dir: Path
    build_root: Path
    destination_dir: Path
    targets: tuple[ReleaseTarget, ...]

    def target(self, name: str) -> ReleaseTarget:
        for candidate in self.targets:
            if candidate.name == name:
                return candidate
        raise KeyError(f"Unknown target: {name}")

    @property
    def target_names(self) -> list[str]:
        return [t.name for t in self.targets]


def resolve_layout(config: GithubMeConfig) -> ReleaseLayout:
    """
    Turn config strings into absolute paths for every target.

    Nothing is checked for existence here. A missing destination directory
    only becomes an error when the pipeline tries to stage into it.
    """
    release = config.release
    project_name = config.global_config.project_name

    workspace_dir = expand_path(release.workspace_dir)
    build_root = expand_path(release.build_root, base=workspace_dir)
    destination_dir = expand_path(release.destination_dir)

    targets = tuple(
        ReleaseTarget(
            name=name,
            architecture=release.architecture,
            profile=release.profile,
            build_archive=build_root / name / release.archive_name,
            destination_archive=destination_dir / f"{project_name}-{name}.zip",
        )
        for name in release.targets
    )

    return ReleaseLayout(
        project_name=project_name,
        workspace_dir=workspace_dir,
        build_root=build_root,
        destination_dir=destination_dir,
        targets=targets,
    )
