#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Coordinate remapping between the on-screen layout and a fixed-size page.

Pure geometry with no rendering dependency. Both spaces use a top-left
origin with y growing downwards; the PDF writer flips y itself.

A source of size (sw, sh) is fitted to a page of size (pw, ph) with one
uniform factor s = min(pw / sw, ph / sh). The result is centred
horizontally and anchored to the top of the page.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

Size = Tuple[float, float]


@dataclass(frozen=True)
class LinkRegion:
    """Clickable area, in the units of whichever space it belongs to."""
    url: str
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class FitPlacement:
    """Where a fitted source lands on the page."""
    scale: float
    left: float
    top: float
    width: float
    height: float


def _check_size(size: Size, label: str) -> Tuple[float, float]:
    width, height = size
    if width <= 0 or height <= 0:
        raise ValueError(f"{label} size must be positive, got {width}x{height}")
    return float(width), float(height)


def fit_to_page(source_size: Size, page_size: Size) -> FitPlacement:
    """
    Fit source_size inside page_size, preserving aspect ratio.

    Raises:
        ValueError: If either size has a non-positive dimension.
    """
    source_w, source_h = _check_size(source_size, "Source")
    page_w, page_h = _check_size(page_size, "Page")

    scale = min(page_w / source_w, page_h / source_h)
    width = source_w * scale
    height = source_h * scale
    return FitPlacement(
        scale=scale,
        left=(page_w - width) / 2,
        top=0.0,
        width=width,
        height=height,
    )


def clip_region(region: LinkRegion, source_size: Size) -> LinkRegion:
    """Clip a region to the source bounds."""
    source_w, source_h = source_size
    left = min(max(region.left, 0.0), source_w)
    top = min(max(region.top, 0.0), source_h)
    right = min(max(region.right, 0.0), source_w)
    bottom = min(max(region.bottom, 0.0), source_h)
    return LinkRegion(region.url, left, top, right - left, bottom - top)


def remap_link_regions(
    regions: Iterable[LinkRegion],
    source_size: Size,
    page_size: Size,
) -> List[LinkRegion]:
    """
    Map link regions from source layout units into page units.

    Regions are clipped to the source first, so every result lies inside
    the page. Regions without area (before or after clipping) are dropped.

    Args:
        regions: Link regions in source layout units.
        source_size: (width, height) of the captured layout.
        page_size: (width, height) of the output page.

    Returns:
        Remapped regions, in input order.
    """
    placement = fit_to_page(source_size, page_size)
    bounds = (float(source_size[0]), float(source_size[1]))

    remapped = []
    for region in regions:
        if not region.has_area:
            continue
        clipped = clip_region(region, bounds)
        if not clipped.has_area:
            continue
        remapped.append(LinkRegion(
            url=clipped.url,
            left=placement.left + clipped.left * placement.scale,
            top=placement.top + clipped.top * placement.scale,
            width=clipped.width * placement.scale,
            height=clipped.height * placement.scale,
        ))
    return remapped
