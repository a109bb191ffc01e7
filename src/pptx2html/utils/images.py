#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/utils/images.py
"""Image helpers for embedding pictures as data URIs."""

from __future__ import annotations

import base64
import logging

logger = logging.getLogger(__name__)

_FORMAT_MIME = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "svg": "image/svg+xml",
    "emf": "image/emf",
    "wmf": "image/wmf",
}


def detect_image_format_from_bytes(data: bytes) -> str | None:
    r"""Detect image format from file content using magic bytes.

    Parameters
    ----------
    data : bytes
        Image file content (the first 32 bytes are enough)

    Returns
    -------
    str or None
        Image format (lowercase extension without dot) or None if unrecognized

    Notes
    -----
    Recognised signatures: PNG (``\x89PNG``), JPEG (``\xff\xd8\xff``), GIF,
    WebP (``RIFF....WEBP``), BMP (``BM``), TIFF, EMF (``\x01\x00\x00\x00``
    header with `` EMF`` at offset 40), WMF (placeable ``\xd7\xcd\xc6\x9a``)
    and SVG.

    """
    if not data or len(data) < 4:
        return None
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data.startswith(b"\xff\xd8\xff"):
        return "jpg"
    if data.startswith(b"GIF87a") or data.startswith(b"GIF89a"):
        return "gif"
    if len(data) >= 12 and data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return "webp"
    if data.startswith(b"BM"):
        return "bmp"
    if data.startswith(b"II*\x00") or data.startswith(b"MM\x00*"):
        return "tiff"
    if len(data) >= 44 and data.startswith(b"\x01\x00\x00\x00") and data[40:44] == b" EMF":
        return "emf"
    if data.startswith(b"\xd7\xcd\xc6\x9a"):
        return "wmf"
    stripped = data.lstrip()
    if stripped.startswith(b"<svg") or stripped.startswith(b"<?xml"):
        return "svg"
    return None


def encode_data_uri(data: bytes, content_type: str | None = None) -> str:
    """Encode image bytes as a ``data:`` URI.

    The MIME type is taken from ``content_type`` when given, otherwise it is
    sniffed from the bytes (falling back to ``application/octet-stream``).
    """
    mime = content_type
    if not mime:
        fmt = detect_image_format_from_bytes(data[:64])
        mime = _FORMAT_MIME.get(fmt or "", "application/octet-stream")
        if fmt is None:
            logger.debug("Could not detect image format, using %s", mime)
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{payload}"
