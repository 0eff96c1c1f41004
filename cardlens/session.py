#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Analysis session: one image analysis and its exports.

Holds the current analysis text and hands exports to the orchestrator.
The text is kept exactly as received; markup is rebuilt from it on every
access.

Usage:
    session = AnalysisSession.from_settings()
    await session.analyze(image_bytes, "card.jpg")
    html = session.formatted_markup
    state = await session.export("document")
    state.retrieval_code.download_url
"""

from typing import Optional, Union

from config.logging_config import get_logger
from config.settings import Settings, settings as default_settings

from .clients.analysis_client import AnalysisClient, AnalysisResult
from .clients.upload_client import UploadClient
from .export.artifact_builder import ArtifactBuilder
from .export.capture import CaptureRegion, RasterCaptureAdapter
from .export.errors import ExportInProgressError, NoExportableResultError
from .export.models import ArtifactVariant, RetrievalCode
from .export.orchestrator import ExportConfig, ExportOrchestrator
from .export.qr_encoder import QRCodeEncoder
from .export.state import ExportState
from .formatting import AnalysisFormatter

logger = get_logger(__name__)


class AnalysisSession:
    """
    Current analysis text plus the export pipeline that shares it.

    Args:
        analysis_client: Client for the analysis endpoint.
        orchestrator: Export orchestrator.
        formatter: Formatter for the analysis text.
    """

    def __init__(
        self,
        analysis_client: Optional[AnalysisClient] = None,
        orchestrator: Optional[ExportOrchestrator] = None,
        formatter: Optional[AnalysisFormatter] = None,
    ):
        self.analysis_client = analysis_client or AnalysisClient()
        self.orchestrator = orchestrator or ExportOrchestrator()
        self.formatter = formatter or AnalysisFormatter()
        self._result: Optional[AnalysisResult] = None

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "AnalysisSession":
        """Wire every collaborator from application settings."""
        config = config or default_settings
        export_config = ExportConfig(
            variant=ArtifactVariant.parse(config.export_variant),
            capture_options=config.get_capture_options(),
            code_options=config.get_code_options(),
        )
        orchestrator = ExportOrchestrator(
            capturer=RasterCaptureAdapter(),
            builder=ArtifactBuilder(page_size=config.page_size),
            uploader=UploadClient(base_url=config.api_base_url, timeout=config.request_timeout),
            encoder=QRCodeEncoder(export_config.code_options),
            config=export_config,
        )
        logger.debug(f"Session configured: {config.describe()}")
        return cls(
            analysis_client=AnalysisClient(base_url=config.api_base_url, timeout=config.request_timeout),
            orchestrator=orchestrator,
        )

    @property
    def analysis_text(self) -> str:
        return self._result.text if self._result else ""

    @property
    def has_exportable_result(self) -> bool:
        return bool(self._result and self._result.succeeded)

    @property
    def formatted_markup(self) -> str:
        return self.formatter.format(self.analysis_text)

    @property
    def retrieval_code(self) -> Optional[RetrievalCode]:
        return self.orchestrator.retrieval_code

    def clear(self):
        """
        Drop the current analysis and retrieval code.

        Raises:
            ExportInProgressError: If an export is running.
        """
        self.orchestrator.clear()
        self._result = None

    async def analyze(self, image: bytes, filename: str = "card.jpg", content_type: str = "image/jpeg") -> AnalysisResult:
        """
        Start a new analysis, replacing the previous text and code.

        A running export is never interrupted: analysis is refused until it
        has finished.

        Raises:
            ExportInProgressError: If an export is running.
        """
        if self.orchestrator.busy:
            logger.warning("Analysis rejected: an export is still running")
            raise ExportInProgressError("Cannot start a new analysis while an export is running")
        self.clear()
        self._result = await self.analysis_client.analyze(image, filename, content_type)
        return self._result

    async def export(self, variant: Optional[Union[ArtifactVariant, str]] = None) -> ExportState:
        """
        Export the current analysis.

        Raises:
            NoExportableResultError: If there is no successful analysis.
            ExportInProgressError: If an export is already running.
        """
        if not self.has_exportable_result:
            raise NoExportableResultError("No valid analysis result to export")
        region = CaptureRegion(markup=self.formatted_markup)
        return await self.orchestrator.export(region, variant)
