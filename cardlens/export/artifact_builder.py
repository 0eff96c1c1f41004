#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Artifact Builder - turns a captured raster into an uploadable file.

Variants:
1. Image - the raster itself as PNG. Links are not interactive.
2. Document - a single fixed-size PDF page (ReportLab) with the raster
   fitted to the page and one URI annotation per link region.

Link regions arrive in the capture's layout units (CSS pixels). They are
remapped with the same fit-to-page rule used to place the image, then
flipped into PDF's bottom-left coordinate system.
"""

import io
from typing import Iterable, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from config.constants import (
    IMAGE_FILENAME,
    DOCUMENT_FILENAME,
    IMAGE_CONTENT_TYPE,
    DOCUMENT_CONTENT_TYPE,
)
from config.logging_config import get_logger

from .errors import ArtifactBuildError
from .geometry import LinkRegion, fit_to_page, remap_link_regions
from .models import ArtifactVariant, ExportArtifact, RasterImage

logger = get_logger(__name__)


PAGE_SIZES = {
    "A4": A4,
    "LETTER": LETTER,
}


def resolve_page_size(page_size: Union[str, Tuple[float, float]]) -> Tuple[float, float]:
    """Accept a page size name or a (width, height) tuple in points."""
    if isinstance(page_size, str):
        try:
            return PAGE_SIZES[page_size.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown page size: {page_size!r} (expected one of {sorted(PAGE_SIZES)})")
    width, height = page_size
    return (float(width), float(height))


def _decode_raster(raster: RasterImage) -> Image.Image:
    if not raster.data:
        raise ArtifactBuildError("Raster image is empty")
    try:
        image = Image.open(io.BytesIO(raster.data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ArtifactBuildError(f"Raster image cannot be decoded: {e}") from e
    return image


class ArtifactBuilder:
    """
    Builds image or PDF artifacts from captured rasters.

    Args:
        page_size: PDF page size, a name from PAGE_SIZES or (width, height)
            in points. Defaults to A4 portrait.
        title: PDF document title.
    """

    def __init__(self, page_size: Union[str, Tuple[float, float]] = A4, title: str = "Analysis Result"):
        self.page_size = resolve_page_size(page_size)
        self.title = title

    def build(
        self,
        raster: RasterImage,
        link_regions: Iterable[LinkRegion] = (),
        variant: Optional[Union[ArtifactVariant, str]] = None,
    ) -> ExportArtifact:
        """
        Build the requested variant.

        Raises:
            ArtifactBuildError: If the raster cannot be decoded or encoded.
        """
        variant = ArtifactVariant.parse(variant or ArtifactVariant.IMAGE)
        if variant is ArtifactVariant.DOCUMENT:
            return self.build_document(raster, link_regions)
        return self.build_image(raster)

    def build_image(self, raster: RasterImage) -> ExportArtifact:
        """Wrap the raster as a PNG artifact, re-encoding if it is not PNG."""
        image = _decode_raster(raster)
        try:
            if image.format == "PNG":
                data = raster.data
            else:
                buffer = io.BytesIO()
                image.save(buffer, format="PNG")
                data = buffer.getvalue()
        except (OSError, ValueError) as e:
            raise ArtifactBuildError(f"PNG encoding failed: {e}") from e
        finally:
            image.close()

        logger.info(f"Image artifact built: {raster.pixel_width}x{raster.pixel_height} px, {len(data):,} bytes")
        return ExportArtifact(
            variant=ArtifactVariant.IMAGE,
            data=data,
            filename=IMAGE_FILENAME,
            content_type=IMAGE_CONTENT_TYPE,
        )

    def build_document(self, raster: RasterImage, link_regions: Iterable[LinkRegion] = ()) -> ExportArtifact:
        """Place the raster on one PDF page and attach link annotations."""
        image = _decode_raster(raster)
        page_width, page_height = self.page_size

        try:
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            source_size = raster.layout_size
            placement = fit_to_page(source_size, self.page_size)
            links = remap_link_regions(link_regions, source_size, self.page_size)

            buffer = io.BytesIO()
            pdf = canvas.Canvas(buffer, pagesize=self.page_size)
            pdf.setTitle(self.title)
            pdf.drawImage(
                ImageReader(image),
                placement.left,
                page_height - placement.top - placement.height,
                width=placement.width,
                height=placement.height,
            )
            for link in links:
                pdf.linkURL(
                    link.url,
                    (link.left, page_height - link.bottom, link.right, page_height - link.top),
                    relative=0,
                    thickness=0,
                )
            pdf.showPage()
            pdf.save()
        except ArtifactBuildError:
            raise
        except Exception as e:
            logger.error(f"PDF generation failed: {type(e).__name__}: {e}")
            raise ArtifactBuildError(f"PDF generation failed: {e}") from e
        finally:
            image.close()

        data = buffer.getvalue()
        logger.info(
            f"Document artifact built: page {page_width:.0f}x{page_height:.0f} pt, "
            f"scale {placement.scale:.3f}, {len(links)} links, {len(data):,} bytes"
        )
        return ExportArtifact(
            variant=ArtifactVariant.DOCUMENT,
            data=data,
            filename=DOCUMENT_FILENAME,
            content_type=DOCUMENT_CONTENT_TYPE,
            link_regions=tuple(links),
        )
