"""Tests for pdfcomposer.utils."""
