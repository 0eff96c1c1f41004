#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Raster capture of rendered analysis markup.

Renders a CaptureRegion in headless Chromium through Playwright and takes
a PNG screenshot of the region element. While the page is open, every
link inside the region is located and its bounding box is read relative
to the region's own top-left corner, so link positions come from the
rendered layout rather than from re-parsing the text.

Usage:
    adapter = RasterCaptureAdapter()
    result = await adapter.capture(
        CaptureRegion(markup=format_analysis(text)),
        CaptureOptions(background_color="#1f2937", scale=2),
    )
    result.raster.pixel_size   # (width, height) in output pixels
    result.link_regions        # LinkRegion tuple in CSS pixels

Requirements:
- playwright install chromium
"""

import io
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from PIL import Image, UnidentifiedImageError
from playwright.async_api import Browser, Locator, async_playwright
from playwright.async_api import Error as PlaywrightError

from config.constants import (
    CAPTURE_BACKGROUND_COLOR,
    CAPTURE_SCALE,
    CAPTURE_VIEWPORT_WIDTH,
    CAPTURE_VIEWPORT_HEIGHT,
    CAPTURE_REGION_SELECTOR,
    LINK_SELECTOR,
)
from config.logging_config import get_logger

from .errors import CaptureError
from .geometry import LinkRegion
from .models import CaptureResult, RasterImage
from .page_template import render_capture_page

logger = get_logger(__name__)


@dataclass(frozen=True)
class CaptureOptions:
    """How a region is rasterized."""
    background_color: str = CAPTURE_BACKGROUND_COLOR
    scale: float = CAPTURE_SCALE
    fixed_width: Optional[int] = None
    viewport_width: int = CAPTURE_VIEWPORT_WIDTH

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"Capture scale must be positive, got {self.scale}")
        if self.fixed_width is not None and self.fixed_width <= 0:
            raise ValueError(f"Fixed width must be positive, got {self.fixed_width}")


@dataclass(frozen=True)
class CaptureRegion:
    """Formatted markup and the selector of the element to capture."""
    markup: str = field(repr=False)
    selector: str = CAPTURE_REGION_SELECTOR


async def collect_link_regions(region: Locator, origin: Dict[str, float]) -> List[LinkRegion]:
    """
    Read the bounding box of every link inside a rendered region.

    Args:
        region: Locator of the captured element.
        origin: The element's own bounding box; link positions are made
            relative to its top-left corner.

    Returns:
        LinkRegion list in CSS pixels. Links without a box (hidden) or
        without an href are skipped.
    """
    regions = []
    for anchor in await region.locator(LINK_SELECTOR).all():
        box = await anchor.bounding_box()
        if box is None:
            continue
        url = await anchor.get_attribute("href")
        if not url:
            continue
        regions.append(LinkRegion(
            url=url,
            left=box["x"] - origin["x"],
            top=box["y"] - origin["y"],
            width=box["width"],
            height=box["height"],
        ))
    return regions


def _png_size(data: bytes) -> tuple:
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError) as e:
        raise CaptureError(f"Renderer returned an unreadable image: {e}") from e


async def capture_locator(region: Locator, scale: float) -> CaptureResult:
    """
    Screenshot one rendered element and collect its link regions.

    Raises:
        CaptureError: If the element is missing or has no area.
    """
    if await region.count() == 0:
        raise CaptureError("Capture region is not attached to the page")
    region = region.first

    origin = await region.bounding_box()
    if origin is None or origin["width"] <= 0 or origin["height"] <= 0:
        raise CaptureError("Capture region is empty")

    data = await region.screenshot(type="png", animations="disabled")
    pixel_width, pixel_height = _png_size(data)
    links = await collect_link_regions(region, origin)

    logger.debug(
        f"Captured region {origin['width']:.0f}x{origin['height']:.0f} CSS px "
        f"-> {pixel_width}x{pixel_height} px, {len(links)} links"
    )
    return CaptureResult(
        raster=RasterImage(data=data, pixel_width=pixel_width, pixel_height=pixel_height, scale=scale),
        link_regions=tuple(links),
    )


class RasterCaptureAdapter:
    """
    Renders capture regions to PNG with Playwright.

    Args:
        browser: Running Playwright browser to reuse. When None, a
            Chromium instance is launched and closed for every capture.
        launch_options: Extra keyword arguments for chromium.launch().
    """

    def __init__(self, browser: Optional[Browser] = None, launch_options: Optional[Dict[str, Any]] = None):
        self._browser = browser
        self.launch_options = launch_options or {}

    async def capture(self, region: CaptureRegion, options: Optional[CaptureOptions] = None) -> CaptureResult:
        """
        Render a region and capture it.

        Raises:
            CaptureError: If the region is empty or missing, or the
                renderer reports a fault.
        """
        options = options or CaptureOptions()
        if not region.markup or not region.markup.strip():
            raise CaptureError("Capture region is empty")

        try:
            if self._browser is not None:
                return await self._capture_with(self._browser, region, options)

            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(**self.launch_options)
                try:
                    return await self._capture_with(browser, region, options)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.error(f"Renderer fault during capture: {e}")
            raise CaptureError(f"Renderer fault: {e}") from e

    async def _capture_with(self, browser: Browser, region: CaptureRegion, options: CaptureOptions) -> CaptureResult:
        width = options.fixed_width or options.viewport_width
        context = await browser.new_context(
            viewport={"width": width, "height": CAPTURE_VIEWPORT_HEIGHT},
            device_scale_factor=options.scale,
        )
        try:
            page = await context.new_page()
            await page.set_content(
                render_capture_page(region.markup, options.background_color, options.fixed_width)
            )
            return await capture_locator(page.locator(region.selector), options.scale)
        finally:
            await context.close()
