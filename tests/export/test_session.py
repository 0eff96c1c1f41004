"""
Tests for cardlens/session.py - analysis text shared with the exporter.
"""
import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from cardlens.clients.analysis_client import AnalysisResult
from cardlens.export.errors import ExportInProgressError, NoExportableResultError
from cardlens.export.models import RetrievalCode
from cardlens.export.orchestrator import ExportOrchestrator
from cardlens.export.state import ExportStage, ExportState
from cardlens.session import AnalysisSession
from config.settings import Settings


@pytest.fixture
def analysis_client(sample_analysis):
    client = Mock()
    client.analyze = AsyncMock(return_value=AnalysisResult(sample_analysis["full"], succeeded=True))
    return client


@pytest.fixture
def orchestrator():
    orchestrator = Mock()
    orchestrator.export = AsyncMock(return_value=ExportState(stage=ExportStage.DONE))
    orchestrator.retrieval_code = None
    orchestrator.busy = False
    return orchestrator


@pytest.fixture
def session(analysis_client, orchestrator):
    return AnalysisSession(analysis_client=analysis_client, orchestrator=orchestrator)


class TestAnalysisSession:

    @pytest.mark.asyncio
    async def test_analyze_stores_text_verbatim(self, session, sample_analysis):
        result = await session.analyze(b"JPEG", "card.jpg")
        assert result.succeeded
        assert session.analysis_text == sample_analysis["full"]
        assert session.has_exportable_result
        assert "<strong" in session.formatted_markup

    @pytest.mark.asyncio
    async def test_analyze_clears_previous_export(self, session, orchestrator):
        await session.analyze(b"JPEG")
        orchestrator.clear.assert_called_once()

    @pytest.mark.asyncio
    async def test_export_captures_formatted_markup(self, session, orchestrator):
        await session.analyze(b"JPEG")
        state = await session.export("document")

        assert state.succeeded
        region, variant = orchestrator.export.await_args.args
        assert region.markup == session.formatted_markup
        assert variant == "document"

    @pytest.mark.asyncio
    async def test_export_without_analysis(self, session, orchestrator):
        with pytest.raises(NoExportableResultError):
            await session.export()
        orchestrator.export.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_export_after_failed_analysis(self, session, analysis_client, orchestrator):
        analysis_client.analyze.return_value = AnalysisResult("Communication error: HTTP 502")
        await session.analyze(b"JPEG")

        assert session.analysis_text == "Communication error: HTTP 502"
        with pytest.raises(NoExportableResultError):
            await session.export()
        orchestrator.export.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_analyze_refused_while_exporting(self, session, analysis_client, orchestrator, sample_analysis):
        await session.analyze(b"JPEG")
        orchestrator.busy = True
        orchestrator.clear.reset_mock()

        with pytest.raises(ExportInProgressError):
            await session.analyze(b"OTHER")

        assert analysis_client.analyze.await_count == 1
        orchestrator.clear.assert_not_called()
        assert session.analysis_text == sample_analysis["full"]

    @pytest.mark.asyncio
    async def test_analyze_after_cancelled_export(self, analysis_client, sample_analysis):
        capturer = Mock()

        async def stuck_capture(region, options):
            await asyncio.Event().wait()

        capturer.capture = AsyncMock(side_effect=stuck_capture)
        orchestrator = ExportOrchestrator(capturer=capturer, builder=Mock(), uploader=Mock(), encoder=Mock())
        session = AnalysisSession(analysis_client=analysis_client, orchestrator=orchestrator)
        await session.analyze(b"JPEG")

        task = asyncio.create_task(session.export())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        result = await session.analyze(b"JPEG")
        assert result.succeeded
        assert orchestrator.state.stage is ExportStage.IDLE

    def test_clear(self, session, orchestrator):
        session.clear()
        assert session.analysis_text == ""
        assert session.formatted_markup == ""
        assert not session.has_exportable_result

    def test_retrieval_code_comes_from_orchestrator(self, session, orchestrator):
        code = RetrievalCode("https://cdn.test/r", b"QR")
        orchestrator.retrieval_code = code
        assert session.retrieval_code is code


class TestFromSettings:

    def test_wires_collaborators(self):
        config = Settings(
            api_base_url="https://backend.test/",
            export_variant="document",
            page_size="LETTER",
            qr_width=512,
        )
        session = AnalysisSession.from_settings(config)

        assert isinstance(session.orchestrator, ExportOrchestrator)
        assert session.analysis_client.base_url == "https://backend.test"
        assert session.orchestrator.uploader.base_url == "https://backend.test"
        assert session.orchestrator.config.variant.value == "document"
        assert session.orchestrator.config.code_options.width == 512
        assert session.orchestrator.encoder.options.width == 512
