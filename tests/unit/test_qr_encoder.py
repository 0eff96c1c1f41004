"""
Unit tests for cardlens/export/qr_encoder.py
"""
import io

import pytest
from PIL import Image

from cardlens.export.errors import EncodeCodeError
from cardlens.export.qr_encoder import CodeOptions, QRCodeEncoder, encode_as_code

URL = "https://files.example.com/download/result.png"


def open_png(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    assert image.format == "PNG"
    return image.convert("RGB")


class TestQRCodeEncoder:

    def test_default_size(self):
        image = open_png(QRCodeEncoder().encode(URL))
        assert image.size == (1024, 1024)

    def test_custom_width(self):
        image = open_png(encode_as_code(URL, CodeOptions(width=300)))
        assert image.size == (300, 300)

    def test_deterministic(self):
        encoder = QRCodeEncoder(CodeOptions(width=256))
        assert encoder.encode(URL) == encoder.encode(URL)

    def test_different_urls_differ(self):
        encoder = QRCodeEncoder(CodeOptions(width=256))
        assert encoder.encode(URL) != encoder.encode(URL + "?v=2")

    def test_colours(self):
        options = CodeOptions(width=256, dark_color="#0000FF", light_color="#FF0000")
        image = open_png(QRCodeEncoder().encode(URL, options))
        # Quiet zone corner is light, the finder pattern next to it is dark
        assert image.getpixel((0, 0)) == (255, 0, 0)
        colours = {colour for _, colour in image.getcolors()}
        assert colours == {(255, 0, 0), (0, 0, 255)}

    def test_default_colours_black_on_white(self):
        image = open_png(QRCodeEncoder(CodeOptions(width=200)).encode(URL))
        assert image.getpixel((0, 0)) == (255, 255, 255)
        assert (0, 0, 0) in {colour for _, colour in image.getcolors()}

    @pytest.mark.parametrize("level", ["L", "m", "Q", "H"])
    def test_error_correction_levels(self, level):
        data = QRCodeEncoder().encode(URL, CodeOptions(width=200, error_correction=level))
        assert open_png(data).size == (200, 200)

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_empty_url(self, url):
        with pytest.raises(EncodeCodeError):
            QRCodeEncoder().encode(url)

    def test_unknown_error_correction(self):
        with pytest.raises(EncodeCodeError):
            QRCodeEncoder().encode(URL, CodeOptions(error_correction="X"))

    def test_invalid_width(self):
        with pytest.raises(EncodeCodeError):
            QRCodeEncoder().encode(URL, CodeOptions(width=0))

    def test_url_too_long(self):
        with pytest.raises(EncodeCodeError):
            QRCodeEncoder().encode("https://example.com/" + "x" * 5000)

    def test_invalid_colour(self):
        with pytest.raises(EncodeCodeError):
            QRCodeEncoder().encode(URL, CodeOptions(width=100, dark_color="not-a-colour"))
