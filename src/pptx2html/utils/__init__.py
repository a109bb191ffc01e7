#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/utils/__init__.py
"""Shared helpers for HTML output and image embedding."""
