"""
Tests for the logo band.
"""

import pytest

from pdfcomposer.backend import ImageHandle
from pdfcomposer.exceptions import InvalidConfigurationError
from pdfcomposer.layout import Logo, LogoStyle


class TestLogo:
    """Test cases for Logo."""

    def test_style_defaults(self):
        style = LogoStyle()
        assert style.font.name == "Helvetica-Bold"
        assert style.image_width == 30

    def test_style_validation(self):
        with pytest.raises(InvalidConfigurationError):
            LogoStyle(font_size=0)
        with pytest.raises(InvalidConfigurationError):
            LogoStyle(image_width=-1)

    def test_total_height(self):
        # max(12, 30) + 20 + (1 + 10)
        assert Logo("Title").total_height == 61
        assert Logo("Title", LogoStyle(draw_line=False)).total_height == 50

    def test_image_size_keeps_aspect(self):
        logo = Logo(style=LogoStyle(image_width=40, image_height=40))
        assert logo.image_size(ImageHandle("wide", 200, 100)) == (40, 20)

    def test_image_size_without_aspect(self):
        logo = Logo(style=LogoStyle(image_width=40, image_height=25, maintain_aspect_ratio=False))
        assert logo.image_size(ImageHandle("wide", 200, 100)) == (40, 25)

    def test_render(self, stream, page):
        left = ImageHandle("left", 100, 100)
        right = ImageHandle("right", 100, 100)
        logo = Logo("Company", left_image=left, right_image=right)
        logo.render(stream, 600, 700, 50, 50)

        images = list(page.iter_images())
        assert [op.args["name"] for op in images] == ["left", "right"]
        assert images[0].args["x"] == 60
        assert images[1].args["x"] == 600 - 50 - 30 - 10
        assert images[0].args["y"] == pytest.approx(700 - 30 + 6)

        title = next(page.iter_text())
        assert title.args["text"] == "Company"
        assert title.args["y"] == 700

        rule = next(page.iter_lines()).args
        assert rule["y1"] == pytest.approx(700 - 6 - 5)
        assert (rule["x1"], rule["x2"]) == (50, 550)

    def test_render_without_title(self, stream, page):
        Logo(style=LogoStyle(draw_line=False)).render(stream, 600, 700, 50, 50)
        assert page.ops == []
