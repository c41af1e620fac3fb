"""Tests for pdfcomposer.layout."""
