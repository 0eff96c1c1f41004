#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Export orchestrator: capture -> build -> upload -> encode.

Runs one export at a time. Each stage starts only after the previous
stage's result is available; no stage is retried. A failure ends the run
in FAILED(stage, cause) and leaves the last retrieval code in place.

Usage:
    orchestrator = ExportOrchestrator(
        capturer=RasterCaptureAdapter(),
        builder=ArtifactBuilder(),
        uploader=UploadClient(),
        encoder=QRCodeEncoder(),
    )
    state = await orchestrator.export(CaptureRegion(markup=markup))
    if state.succeeded:
        state.retrieval_code.download_url
"""

import asyncio
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Type, Union

from config.logging_config import get_logger

from .artifact_builder import ArtifactBuilder
from .capture import CaptureOptions, CaptureRegion, RasterCaptureAdapter
from .errors import (
    ArtifactBuildError,
    CaptureError,
    EncodeCodeError,
    ExportError,
    ExportInProgressError,
    ExportInterruptedError,
    UploadError,
)
from .models import ArtifactVariant, RetrievalCode
from .qr_encoder import CodeOptions, QRCodeEncoder
from .state import ExportStage, ExportState

logger = get_logger(__name__)


# Called with the new state after every transition
StateCallback = Callable[[ExportState], None]


@dataclass
class ExportConfig:
    """Configuration for ExportOrchestrator."""
    variant: ArtifactVariant = ArtifactVariant.IMAGE
    capture_options: CaptureOptions = field(default_factory=CaptureOptions)
    code_options: CodeOptions = field(default_factory=CodeOptions)


class ExportOrchestrator:
    """
    Owns the export state machine and the latest retrieval code.

    Collaborators only need the methods used here, so tests can pass
    mocks:
    - capturer.capture(region, options) -> CaptureResult (async)
    - builder.build(raster, link_regions, variant) -> ExportArtifact
    - uploader.upload(data, filename, content_type) -> download URL (async)
    - encoder.encode(download_url, options) -> PNG bytes
    """

    def __init__(
        self,
        capturer: Optional[RasterCaptureAdapter] = None,
        builder: Optional[ArtifactBuilder] = None,
        uploader: Any = None,
        encoder: Optional[QRCodeEncoder] = None,
        config: Optional[ExportConfig] = None,
        state_callback: Optional[StateCallback] = None,
    ):
        if uploader is None:
            from cardlens.clients.upload_client import UploadClient
            uploader = UploadClient()

        self.capturer = capturer or RasterCaptureAdapter()
        self.builder = builder or ArtifactBuilder()
        self.uploader = uploader
        self.encoder = encoder or QRCodeEncoder()
        self.config = config or ExportConfig()
        self.state_callback = state_callback

        self._state = ExportState()
        self._retrieval_code: Optional[RetrievalCode] = None

    @property
    def state(self) -> ExportState:
        return self._state

    @property
    def retrieval_code(self) -> Optional[RetrievalCode]:
        """Code of the last successful export, if any."""
        return self._retrieval_code

    @property
    def busy(self) -> bool:
        return self._state.in_flight

    def reset(self):
        """Return a finished run to IDLE."""
        if self._state.in_flight:
            raise ExportInProgressError("Cannot reset while an export is running")
        self._state = ExportState()

    def clear(self):
        """Forget the state and the retrieval code, e.g. when a new analysis starts."""
        self.reset()
        self._retrieval_code = None

    async def export(
        self,
        region: CaptureRegion,
        variant: Optional[Union[ArtifactVariant, str]] = None,
    ) -> ExportState:
        """
        Run one export end-to-end.

        Args:
            region: Rendered markup to capture.
            variant: Artifact variant; defaults to config.variant.

        Returns:
            The terminal state, DONE or FAILED.

        Raises:
            ExportInProgressError: If another export is still running.
            asyncio.CancelledError: If the run is cancelled; the state is
                FAILED(stage, ExportInterruptedError) by then.
        """
        # Checked and claimed before the first await
        if self._state.in_flight:
            logger.warning(f"Export rejected: another export is {self._state.stage.value}")
            raise ExportInProgressError(f"An export is already {self._state.stage.value}")
        options = self.config
        variant = ArtifactVariant.parse(variant or options.variant)
        self.reset()

        run_id = uuid.uuid4().hex[:8]
        started = time.monotonic()
        logger.info(f"Export {run_id} started (variant={variant.value})")

        try:
            capture = await self._run_stage(
                ExportStage.CAPTURING, CaptureError,
                lambda: self.capturer.capture(region, options.capture_options),
            )
            artifact = await self._run_stage(
                ExportStage.BUILDING, ArtifactBuildError,
                lambda: asyncio.to_thread(self.builder.build, capture.raster, capture.link_regions, variant),
            )
            capture = None
            download_url = await self._run_stage(
                ExportStage.UPLOADING, UploadError,
                lambda: self.uploader.upload(artifact.data, artifact.filename, artifact.content_type),
            )
            artifact = None
            code_image = await self._run_stage(
                ExportStage.ENCODING, EncodeCodeError,
                lambda: asyncio.to_thread(self.encoder.encode, download_url, options.code_options),
            )
        except ExportError as error:
            failed = self._state.fail(error)
            logger.error(f"Export {run_id} {failed.describe()}")
            self._transition(failed)
            return failed
        except BaseException as e:
            # Cancelled or interrupted: end the run as FAILED, then propagate
            if self._state.in_flight:
                failed = self._state.fail(ExportInterruptedError(f"Export interrupted: {type(e).__name__}"))
                logger.warning(f"Export {run_id} {failed.describe()}")
                self._transition(failed)
            raise

        code = RetrievalCode(download_url=download_url, code_image=code_image)
        self._retrieval_code = code
        self._transition(self._state.complete(code))
        logger.info(f"Export {run_id} done in {time.monotonic() - started:.2f}s: {download_url}")
        return self._state

    async def _run_stage(
        self,
        stage: ExportStage,
        error_class: Type[ExportError],
        call: Callable[[], Awaitable[Any]],
    ) -> Any:
        self._transition(self._state.advance(stage))
        try:
            return await call()
        except error_class:
            raise
        except Exception as e:
            raise error_class(f"{type(e).__name__}: {e}") from e

    def _transition(self, new_state: ExportState):
        old_state = self._state
        self._state = new_state
        logger.debug(f"Export state: {old_state.stage.value} → {new_state.stage.value}")

        if self.state_callback:
            try:
                self.state_callback(new_state)
            except Exception as e:
                logger.error(f"Export state callback error: {e}")
