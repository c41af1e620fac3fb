"""Tests for pdfcomposer.renderers."""
