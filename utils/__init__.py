"""Utilities - input validation and PDF text extraction."""
