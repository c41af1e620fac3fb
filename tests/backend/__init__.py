"""Tests for pdfcomposer.backend."""
