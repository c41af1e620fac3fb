"""
Tests for PDFConfiguration and configuration files.
"""

import json

import pytest

from pdfcomposer.configuration import PDFConfiguration, load_configuration
from pdfcomposer.engine import A4, LETTER, PageSize, SafeArea
from pdfcomposer.exceptions import InvalidConfigurationError


class TestPDFConfiguration:
    """Test cases for PDFConfiguration."""

    def test_defaults(self):
        config = PDFConfiguration()
        assert config.page_size == A4
        assert config.dpi == 300
        assert config.compression_quality == 0.7
        assert config.font_size == 12
        assert config.line_spacing == 1.5

    @pytest.mark.parametrize(
        "options",
        [
            {"dpi": 0},
            {"compression_quality": 1.1},
            {"font_size": 0},
            {"line_spacing": -1},
            {"page_size": None},
            {"safe_area": SafeArea.uniform(500)},
        ],
    )
    def test_invalid_values(self, options):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration(**options)

    def test_with_methods_return_copies(self):
        config = PDFConfiguration()
        changed = config.with_page_size(LETTER).with_dpi(150).with_font_size(10)
        assert changed.page_size == LETTER
        assert changed.dpi == 150
        assert changed.font_size == 10
        assert config.page_size == A4

    def test_with_margins(self):
        config = PDFConfiguration(page_size=PageSize(600, 800)).with_margins(10, 20, 30, 40)
        area = config.content_area
        assert (area.left, area.right, area.bottom, area.top) == (10, 580, 40, 770)

    def test_with_invalid_quality(self):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration().with_compression_quality(2)


class TestConfigurationFromDict:
    """Test cases for building configurations from plain data."""

    def test_named_page_size_and_landscape(self):
        config = PDFConfiguration.from_dict({"page_size": "letter", "landscape": True})
        assert config.page_size == PageSize(792, 612)

    def test_explicit_page_size_and_margins(self):
        config = PDFConfiguration.from_dict({"page_size": [600, 800], "margins": [10, 10, 20, 20]})
        assert config.page_size == PageSize(600, 800)
        assert config.safe_area.margin_top == 20

    def test_uniform_margins_and_bands(self):
        config = PDFConfiguration.from_dict({"margins": 36, "header": True, "footer": True})
        assert config.safe_area.margin_left == 36
        assert config.safe_area.has_header
        assert config.safe_area.has_footer

    def test_unknown_keys(self):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration.from_dict({"colour": "red"})

    def test_unknown_page_size(self):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration.from_dict({"page_size": "B7"})

    def test_bad_margins(self):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration.from_dict({"margins": [1, 2]})

    def test_bad_number(self):
        with pytest.raises(InvalidConfigurationError):
            PDFConfiguration.from_dict({"dpi": "many"})

    def test_round_trip_through_dict(self):
        config = PDFConfiguration.from_dict({"page_size": "A5", "margins": 20, "footer": True, "dpi": 96})
        assert PDFConfiguration.from_dict(config.to_dict()) == config


class TestLoadConfiguration:
    """Test cases for JSON configuration files."""

    def test_load(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"page_size": "A4", "font_size": 11}))
        assert load_configuration(path).font_size == 11

    def test_missing_file(self, temp_dir):
        with pytest.raises(InvalidConfigurationError):
            load_configuration(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")
        with pytest.raises(InvalidConfigurationError):
            load_configuration(path)

    def test_non_object(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(InvalidConfigurationError):
            load_configuration(path)
