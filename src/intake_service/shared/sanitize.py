"""
Input Sanitizing
================

Strips markup from free text before it reaches the classifier or the
database. No tags or attributes survive; script and style contents are
dropped entirely.

Values are stored and returned as JSON, not HTML, so the entities nh3
writes for the remaining text are decoded again.
"""

import html
from typing import Any, Mapping

import nh3


def clean_text(value: Any) -> Any:
    """Remove all HTML from a string. Non-strings are returned unchanged."""
    if not isinstance(value, str):
        return value
    return html.unescape(nh3.clean(value, tags=set(), attributes={}))


def sanitize_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with every string value cleaned."""
    return {key: clean_text(value) for key, value in data.items()}
