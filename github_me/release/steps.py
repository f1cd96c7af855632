# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""The fixed sequence of pipeline steps."""

from dataclasses import dataclass
from enum import Enum


class StepKind(str, Enum):
    COMPILE = "compile"
    REMOVE_STALE = "remove_stale"
    VALIDATE = "validate"
    STAGE = "stage"


@dataclass(frozen=True)
class PipelineStep:
    """
    One entry in the release plan.

    `ordinal` is 1-based and reflects execution order. `target` is None only
    for the compile step, which builds every target in one invocation.
    """

    ordinal: int
    kind: StepKind
    target: str | None = None

    @property
    def name(self) -> str:
        if self.target is None:
            return self.kind.value
        return f"{self.kind.value}:{self.target}"


def plan_steps(targets: list[str]) -> list[PipelineStep]:
    """
    Lay out the full step sequence for the given targets.

    compile, then remove every stale archive, then validate every target in
    reverse order, then stage every target. For ["api", "job"] that is:

        1 compile
        2 remove_stale:api
        3 remove_stale:job
        4 validate:job
        5 validate:api
        6 stage:api
        7 stage:job
    """
    kinds_and_targets: list[tuple[StepKind, str | None]] = [(StepKind.COMPILE, None)]
    kinds_and_targets += [(StepKind.REMOVE_STALE, name) for name in targets]
    kinds_and_targets += [(StepKind.VALIDATE, name) for name in reversed(targets)]
    kinds_and_targets += [(StepKind.STAGE, name) for name in targets]

    return [
        PipelineStep(ordinal=index, kind=kind, target=target)
        for index, (kind, target) in enumerate(kinds_and_targets, start=1)
    ]
