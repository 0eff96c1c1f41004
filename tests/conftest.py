"""
Pytest configuration and shared fixtures for Card Insight Export tests.
"""
import io
import sys
import pytest
from pathlib import Path
from typing import Callable

from PIL import Image

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cardlens.export.geometry import LinkRegion
from cardlens.export.models import RasterImage, CaptureResult


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

@pytest.fixture
def sample_analysis():
    """Analysis texts as returned by the backend."""
    return {
        "plain": "Jane Doe, Product Manager at Example Corp.",
        "contact": "【Contact】\n- Phone: 555-0100\n- Email: jane@example.com",
        "full": (
            "【Profile】\n"
            "**Jane Doe** works at Example Corp.\n\n"
            "---\n"
            "【Links】\n"
            "- [Company site](https://example.com)\n"
            "- Blog: https://blog.example.com/jane\n"
        ),
    }


# ============================================================================
# Fixtures: Images
# ============================================================================

@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """Factory for encoded test images."""
    def _make(width: int = 200, height: int = 100, fmt: str = "PNG", color=(31, 41, 55)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color).save(buffer, format=fmt)
        return buffer.getvalue()
    return _make


@pytest.fixture
def raster(make_image_bytes) -> RasterImage:
    """400x200 px raster captured at scale 2 (200x100 CSS px)."""
    return RasterImage(data=make_image_bytes(400, 200), pixel_width=400, pixel_height=200, scale=2.0)


@pytest.fixture
def capture_result(raster) -> CaptureResult:
    """Capture with one link in the top-left quarter."""
    return CaptureResult(
        raster=raster,
        link_regions=(LinkRegion("https://example.com", 10, 10, 80, 20),),
    )
