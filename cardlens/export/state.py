"""
Export run state.

An export run moves strictly forward:

    IDLE -> CAPTURING -> BUILDING -> UPLOADING -> ENCODING -> DONE

and can drop into FAILED from any non-terminal stage. ExportState is an
immutable value; every transition returns a new one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ExportError
from .models import RetrievalCode


class ExportStage(Enum):
    """Stage of an export run."""
    IDLE = "idle"
    CAPTURING = "capturing"
    BUILDING = "building"
    UPLOADING = "uploading"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


STAGE_SEQUENCE = (
    ExportStage.IDLE,
    ExportStage.CAPTURING,
    ExportStage.BUILDING,
    ExportStage.UPLOADING,
    ExportStage.ENCODING,
    ExportStage.DONE,
)

IN_FLIGHT_STAGES = frozenset({
    ExportStage.CAPTURING,
    ExportStage.BUILDING,
    ExportStage.UPLOADING,
    ExportStage.ENCODING,
})

TERMINAL_STAGES = frozenset({ExportStage.DONE, ExportStage.FAILED})


class InvalidTransitionError(Exception):
    """Raised on a transition the state machine does not allow."""
    pass


@dataclass(frozen=True)
class ExportState:
    """Snapshot of one export run."""
    stage: ExportStage = ExportStage.IDLE
    failed_stage: Optional[ExportStage] = None
    cause: Optional[ExportError] = None
    retrieval_code: Optional[RetrievalCode] = None

    @property
    def in_flight(self) -> bool:
        return self.stage in IN_FLIGHT_STAGES

    @property
    def is_terminal(self) -> bool:
        return self.stage in TERMINAL_STAGES

    @property
    def succeeded(self) -> bool:
        return self.stage is ExportStage.DONE

    def advance(self, next_stage: ExportStage) -> "ExportState":
        """Move to the next stage in STAGE_SEQUENCE."""
        if self.is_terminal:
            raise InvalidTransitionError(f"Cannot leave terminal stage {self.stage.value}")
        expected = STAGE_SEQUENCE[STAGE_SEQUENCE.index(self.stage) + 1]
        if next_stage is not expected or next_stage is ExportStage.DONE:
            raise InvalidTransitionError(
                f"Invalid transition {self.stage.value} -> {next_stage.value}"
            )
        return ExportState(stage=next_stage)

    def complete(self, retrieval_code: RetrievalCode) -> "ExportState":
        """ENCODING -> DONE, carrying the new retrieval code."""
        if self.stage is not ExportStage.ENCODING:
            raise InvalidTransitionError(f"Cannot complete from {self.stage.value}")
        return ExportState(stage=ExportStage.DONE, retrieval_code=retrieval_code)

    def fail(self, cause: ExportError) -> "ExportState":
        """Any non-terminal stage -> FAILED(stage, cause)."""
        if self.is_terminal:
            raise InvalidTransitionError(f"Cannot fail from terminal stage {self.stage.value}")
        return ExportState(stage=ExportStage.FAILED, failed_stage=self.stage, cause=cause)

    def describe(self) -> str:
        if self.stage is ExportStage.FAILED:
            return f"failed while {self.failed_stage.value}: {self.cause}"
        return self.stage.value
