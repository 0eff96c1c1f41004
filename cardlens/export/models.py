"""
Data carried between export stages.

All records are frozen: a raster or artifact is built once per export
run and never modified afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .geometry import LinkRegion


class ArtifactVariant(Enum):
    """Kind of artifact produced by an export."""
    IMAGE = "image"
    DOCUMENT = "document"

    @classmethod
    def parse(cls, value) -> "ArtifactVariant":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown artifact variant: {value!r} (expected 'image' or 'document')")


@dataclass(frozen=True)
class RasterImage:
    """PNG bytes of a captured region."""
    data: bytes = field(repr=False)
    pixel_width: int
    pixel_height: int
    scale: float = 1.0  # output pixels per layout unit

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return (self.pixel_width, self.pixel_height)

    @property
    def layout_size(self) -> Tuple[float, float]:
        """Size in the layout units that link regions are measured in."""
        return (self.pixel_width / self.scale, self.pixel_height / self.scale)


@dataclass(frozen=True)
class CaptureResult:
    """Raster plus the link regions found inside the captured region."""
    raster: RasterImage
    link_regions: Tuple[LinkRegion, ...] = ()


@dataclass(frozen=True)
class ExportArtifact:
    """Uploadable image or PDF."""
    variant: ArtifactVariant
    data: bytes = field(repr=False)
    filename: str
    content_type: str
    link_regions: Tuple[LinkRegion, ...] = ()

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class RetrievalCode:
    """Download URL of an uploaded artifact and its QR code image."""
    download_url: str
    code_image: bytes = field(repr=False)
