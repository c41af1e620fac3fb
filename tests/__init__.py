"""Test suite for PDF Composer."""
