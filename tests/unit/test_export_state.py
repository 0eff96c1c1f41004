"""
Unit tests for cardlens/export/state.py - export state machine.
"""
import pytest

from cardlens.export.errors import CaptureError, UploadError
from cardlens.export.models import RetrievalCode
from cardlens.export.state import ExportStage, ExportState, InvalidTransitionError


def run_to(stage: ExportStage) -> ExportState:
    state = ExportState()
    for next_stage in (ExportStage.CAPTURING, ExportStage.BUILDING, ExportStage.UPLOADING, ExportStage.ENCODING):
        if state.stage is stage:
            break
        state = state.advance(next_stage)
    return state


class TestExportState:

    def test_initial_state(self):
        state = ExportState()
        assert state.stage is ExportStage.IDLE
        assert not state.in_flight
        assert not state.is_terminal
        assert state.retrieval_code is None

    def test_forward_sequence(self):
        state = run_to(ExportStage.ENCODING)
        assert state.stage is ExportStage.ENCODING
        assert state.in_flight

        code = RetrievalCode(download_url="https://example.com/f", code_image=b"png")
        done = state.complete(code)
        assert done.stage is ExportStage.DONE
        assert done.succeeded
        assert done.is_terminal
        assert done.retrieval_code is code

    def test_skipping_a_stage_is_rejected(self):
        with pytest.raises(InvalidTransitionError):
            ExportState().advance(ExportStage.BUILDING)

    def test_done_only_through_complete(self):
        with pytest.raises(InvalidTransitionError):
            run_to(ExportStage.ENCODING).advance(ExportStage.DONE)
        with pytest.raises(InvalidTransitionError):
            run_to(ExportStage.UPLOADING).complete(RetrievalCode("u", b""))

    @pytest.mark.parametrize("stage", [
        ExportStage.IDLE,
        ExportStage.CAPTURING,
        ExportStage.BUILDING,
        ExportStage.UPLOADING,
        ExportStage.ENCODING,
    ])
    def test_fail_from_any_non_terminal_stage(self, stage):
        cause = CaptureError("boom")
        failed = run_to(stage).fail(cause)
        assert failed.stage is ExportStage.FAILED
        assert failed.failed_stage is stage
        assert failed.cause is cause
        assert failed.is_terminal
        assert not failed.in_flight

    def test_terminal_states_are_absorbing(self):
        failed = run_to(ExportStage.UPLOADING).fail(UploadError("nope"))
        with pytest.raises(InvalidTransitionError):
            failed.advance(ExportStage.CAPTURING)
        with pytest.raises(InvalidTransitionError):
            failed.fail(UploadError("again"))

    def test_describe(self):
        failed = run_to(ExportStage.UPLOADING).fail(UploadError("HTTP 500"))
        assert failed.describe() == "failed while uploading: HTTP 500"
        assert ExportState().describe() == "idle"
