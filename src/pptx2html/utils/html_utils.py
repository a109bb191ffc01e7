#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/pptx2html/utils/html_utils.py
"""HTML-related utility helpers."""

from __future__ import annotations

import json
from html import escape as _html_escape
from typing import Any, Iterable, Mapping


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def style_attr(declarations: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str:
    """Join CSS declarations into an inline style value.

    Declarations whose value is ``None`` or ``""`` are skipped, so optional
    properties can be passed unconditionally.

    Examples
    --------
    >>> style_attr({"left": "10px", "clip-path": None, "z-index": 3})
    'left: 10px; z-index: 3;'

    """
    items = declarations.items() if isinstance(declarations, Mapping) else declarations
    parts = [f"{name}: {value};" for name, value in items if value is not None and value != ""]
    return " ".join(parts)


def json_attr(value: Any) -> str:
    """Serialize ``value`` as JSON escaped for use inside a double-quoted attribute."""
    return escape_html(json.dumps(value, separators=(",", ":"), sort_keys=True))


def error_placeholder(message: str, name: str = "", css: str = "") -> str:
    """Inline "could not render" fragment shown in place of a failed element."""
    return (
        f'<div class="render-error" data-name="{escape_html(name)}" style="{css}">'
        f"Could not render element: {escape_html(message)}</div>"
    )
