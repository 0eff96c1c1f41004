"""
Tests for cardlens/export/capture.py using fake Playwright objects.
No browser is launched.
"""
from unittest.mock import AsyncMock, Mock

import pytest
from playwright.async_api import Error as PlaywrightError

from cardlens.export.capture import (
    CaptureOptions,
    CaptureRegion,
    RasterCaptureAdapter,
    capture_locator,
    collect_link_regions,
)
from cardlens.export.errors import CaptureError
from cardlens.export.geometry import LinkRegion
from cardlens.export.page_template import render_capture_page


class FakeAnchor:
    def __init__(self, href, box):
        self.href = href
        self.box = box

    async def bounding_box(self):
        return self.box

    async def get_attribute(self, name):
        return self.href if name == "href" else None


class FakeAnchorList:
    def __init__(self, anchors):
        self.anchors = anchors

    async def all(self):
        return list(self.anchors)


class FakeRegion:
    """Stands in for a Playwright Locator of the captured element."""

    def __init__(self, box, png=b"", anchors=(), count=1):
        self.box = box
        self.png = png
        self.anchors = list(anchors)
        self._count = count
        self.selectors = []
        self.screenshot_kwargs = None

    async def count(self):
        return self._count

    @property
    def first(self):
        return self

    async def bounding_box(self):
        return self.box

    async def screenshot(self, **kwargs):
        self.screenshot_kwargs = kwargs
        return self.png

    def locator(self, selector):
        self.selectors.append(selector)
        return FakeAnchorList(self.anchors)


def box(x, y, width, height):
    return {"x": x, "y": y, "width": width, "height": height}


class TestCollectLinkRegions:

    @pytest.mark.asyncio
    async def test_positions_relative_to_region(self):
        region = FakeRegion(box(8, 16, 400, 300), anchors=[
            FakeAnchor("https://example.com", box(28, 46, 120, 20)),
        ])
        regions = await collect_link_regions(region, box(8, 16, 400, 300))
        assert regions == [LinkRegion("https://example.com", 20, 30, 120, 20)]
        assert region.selectors == ["a[href]"]

    @pytest.mark.asyncio
    async def test_hidden_and_hrefless_anchors_skipped(self):
        region = FakeRegion(box(0, 0, 100, 100), anchors=[
            FakeAnchor("https://example.com/hidden", None),
            FakeAnchor(None, box(0, 0, 10, 10)),
            FakeAnchor("https://example.com/ok", box(5, 5, 10, 10)),
        ])
        regions = await collect_link_regions(region, box(0, 0, 100, 100))
        assert [r.url for r in regions] == ["https://example.com/ok"]


class TestCaptureLocator:

    @pytest.mark.asyncio
    async def test_raster_and_links(self, make_image_bytes):
        region = FakeRegion(
            box(0, 0, 200, 100),
            png=make_image_bytes(400, 200),
            anchors=[FakeAnchor("https://example.com", box(10, 10, 80, 20))],
        )
        result = await capture_locator(region, scale=2.0)

        assert result.raster.pixel_size == (400, 200)
        assert result.raster.scale == 2.0
        assert result.raster.layout_size == (200.0, 100.0)
        assert result.link_regions == (LinkRegion("https://example.com", 10, 10, 80, 20),)
        assert region.screenshot_kwargs["type"] == "png"

    @pytest.mark.asyncio
    async def test_missing_region(self):
        with pytest.raises(CaptureError, match="not attached"):
            await capture_locator(FakeRegion(box(0, 0, 10, 10), count=0), scale=1.0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("region_box", [None, box(0, 0, 0, 50), box(0, 0, 50, 0)])
    async def test_empty_region(self, region_box):
        with pytest.raises(CaptureError, match="empty"):
            await capture_locator(FakeRegion(region_box), scale=1.0)

    @pytest.mark.asyncio
    async def test_unreadable_screenshot(self):
        with pytest.raises(CaptureError):
            await capture_locator(FakeRegion(box(0, 0, 10, 10), png=b"nope"), scale=1.0)


class TestRasterCaptureAdapter:

    @pytest.fixture
    def browser_parts(self, make_image_bytes):
        region = FakeRegion(box(0, 0, 300, 120), png=make_image_bytes(600, 240))
        page = Mock()
        page.set_content = AsyncMock()
        page.locator = Mock(return_value=region)
        context = Mock()
        context.new_page = AsyncMock(return_value=page)
        context.close = AsyncMock()
        browser = Mock()
        browser.new_context = AsyncMock(return_value=context)
        return browser, context, page, region

    @pytest.mark.asyncio
    async def test_capture_with_shared_browser(self, browser_parts):
        browser, context, page, region = browser_parts
        adapter = RasterCaptureAdapter(browser=browser)

        result = await adapter.capture(
            CaptureRegion(markup="<strong>Jane</strong>"),
            CaptureOptions(background_color="#101010", scale=2.0, fixed_width=300),
        )

        browser.new_context.assert_awaited_once_with(
            viewport={"width": 300, "height": 600},
            device_scale_factor=2.0,
        )
        html = page.set_content.await_args.args[0]
        assert "<strong>Jane</strong>" in html
        assert "#101010" in html
        assert "width: 300px" in html
        page.locator.assert_called_once_with("#analysis-result")
        context.close.assert_awaited_once()
        assert result.raster.pixel_size == (600, 240)

    @pytest.mark.asyncio
    async def test_renderer_fault_becomes_capture_error(self, browser_parts):
        browser, context, page, _ = browser_parts
        page.set_content.side_effect = PlaywrightError("net::ERR_FAILED")

        with pytest.raises(CaptureError, match="Renderer fault"):
            await RasterCaptureAdapter(browser=browser).capture(CaptureRegion(markup="x"))
        context.close.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("markup", ["", "   \n"])
    async def test_empty_markup(self, markup):
        browser = Mock()
        with pytest.raises(CaptureError):
            await RasterCaptureAdapter(browser=browser).capture(CaptureRegion(markup=markup))
        browser.new_context.assert_not_called()


class TestCaptureOptions:

    def test_defaults(self):
        options = CaptureOptions()
        assert options.background_color == "#1f2937"
        assert options.scale == 2.0
        assert options.fixed_width is None

    @pytest.mark.parametrize("kwargs", [{"scale": 0}, {"fixed_width": -1}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            CaptureOptions(**kwargs)


class TestCapturePage:

    def test_full_width_by_default(self):
        html = render_capture_page("<br>", "#1f2937")
        assert 'id="analysis-result"' in html
        assert "width: 100%" in html
        assert "background: #1f2937" in html

    def test_markup_is_inserted_verbatim(self):
        html = render_capture_page("cost $5 <em>now</em>", "#000", fixed_width=480)
        assert "cost $5 <em>now</em>" in html
        assert "width: 480px" in html

    def test_whitespace_is_preserved(self):
        html = render_capture_page("x<br>  • nested", "#1f2937")
        assert "white-space: pre-wrap" in html
        assert "x<br>  • nested" in html
