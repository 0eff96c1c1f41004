#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Capture-and-Export Pipeline

Module structure:
- geometry: fit-to-page rule and link region remapping (pure)
- page_template: HTML page used to render markup for capture
- capture: Playwright raster capture and link region discovery
- artifact_builder: PNG or single-page PDF artifacts (ReportLab)
- qr_encoder: QR code PNG of the download URL
- state: export state machine value object
- orchestrator: capture -> build -> upload -> encode
"""

from .errors import (
    ExportError,
    CaptureError,
    ArtifactBuildError,
    UploadError,
    EncodeCodeError,
    ExportInProgressError,
    ExportInterruptedError,
    NoExportableResultError,
)
from .geometry import LinkRegion, FitPlacement, fit_to_page, clip_region, remap_link_regions
from .models import ArtifactVariant, RasterImage, CaptureResult, ExportArtifact, RetrievalCode
from .page_template import render_capture_page
from .capture import CaptureOptions, CaptureRegion, RasterCaptureAdapter, capture_locator, collect_link_regions
from .artifact_builder import ArtifactBuilder, PAGE_SIZES, resolve_page_size
from .qr_encoder import CodeOptions, QRCodeEncoder, encode_as_code, ERROR_CORRECTION_LEVELS
from .state import ExportStage, ExportState, InvalidTransitionError
from .orchestrator import ExportConfig, ExportOrchestrator

__all__ = [
    # Errors
    "ExportError",
    "CaptureError",
    "ArtifactBuildError",
    "UploadError",
    "EncodeCodeError",
    "ExportInProgressError",
    "ExportInterruptedError",
    "NoExportableResultError",
    # Geometry
    "LinkRegion",
    "FitPlacement",
    "fit_to_page",
    "clip_region",
    "remap_link_regions",
    # Models
    "ArtifactVariant",
    "RasterImage",
    "CaptureResult",
    "ExportArtifact",
    "RetrievalCode",
    # Capture
    "render_capture_page",
    "CaptureOptions",
    "CaptureRegion",
    "RasterCaptureAdapter",
    "capture_locator",
    "collect_link_regions",
    # Artifacts
    "ArtifactBuilder",
    "PAGE_SIZES",
    "resolve_page_size",
    # QR code
    "CodeOptions",
    "QRCodeEncoder",
    "encode_as_code",
    "ERROR_CORRECTION_LEVELS",
    # Orchestration
    "ExportStage",
    "ExportState",
    "InvalidTransitionError",
    "ExportConfig",
    "ExportOrchestrator",
]
