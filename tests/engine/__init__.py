"""Tests for pdfcomposer.engine."""
