"""
Export pipeline errors.

Each pipeline stage raises its own subclass of ExportError. The
orchestrator records the error as the cause of its FAILED state.
"""

from typing import Optional


class ExportError(Exception):
    """Base error for the capture/build/upload/encode pipeline."""
    stage = "export"


class CaptureError(ExportError):
    """Raised when the region cannot be rendered to a raster."""
    stage = "capturing"


class ArtifactBuildError(ExportError):
    """Raised when the raster cannot be turned into an image or PDF artifact."""
    stage = "building"


class UploadError(ExportError):
    """Raised on transport failure or a non-success upload response."""
    stage = "uploading"

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class EncodeCodeError(ExportError):
    """Raised when the download URL cannot be encoded as a QR code."""
    stage = "encoding"


class ExportInProgressError(ExportError):
    """Raised when an export is requested while another one is running."""
    pass


class NoExportableResultError(ExportError):
    """Raised when there is no successful analysis to export."""
    pass


class ExportInterruptedError(ExportError):
    """Recorded when a run is cancelled or interrupted mid-stage."""
    pass
