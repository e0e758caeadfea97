"""
Sanitizer: single-value and recursive payload sanitization.

Full sanitization (default) strips every tag and template expression.
Fields in the exception set keep their markup, except denylisted form tags,
and only at the top level of the payload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.core.sanitize.filters import (
    strip_all_tags,
    strip_denylisted_tags,
    strip_expression_delimiters,
)
from app.core.sanitize.rich_text import (
    DO_NOT_SANITIZE_KEY,
    encode_exceptions,
    merge_declared_exceptions,
    resolve_exceptions,
)
from app.models import ScreenDefinition


def _full_strip(value: str) -> str:
    while True:
        stripped = strip_expression_delimiters(
            strip_all_tags(strip_denylisted_tags(value))
        )
        if stripped == value:
            return value
        value = stripped


def sanitize(value: Any, strip_tags: bool = True) -> Any:
    """
    Sanitize a single value. Non-strings are returned unchanged.

    strip_tags=True removes all markup and ``{{ }}`` expressions;
    strip_tags=False removes only the denylisted form tags.
    """
    if not isinstance(value, str):
        return value
    if strip_tags:
        return _full_strip(value)
    return strip_denylisted_tags(value)


def _sanitize_nested(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _sanitize_nested(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_nested(item) for item in value]
    return sanitize(value, strip_tags=True)


def sanitize_with_exceptions(
    data: Mapping[str, Any], exceptions: list[str] | set[str] | frozenset[str]
) -> dict[str, Any]:
    """Sanitize ``data``; top-level string values whose key is in ``exceptions`` keep markup."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, (Mapping, list, tuple)):
            result[key] = _sanitize_nested(value)
        else:
            result[key] = sanitize(value, strip_tags=key not in exceptions)
    return result


def sanitize_data(
    data: Mapping[str, Any], screen: ScreenDefinition | None = None
) -> dict[str, Any]:
    """
    Sanitize a form payload against the screen's rich-text fields.

    The merged exception list is written back under ``_DO_NOT_SANITIZE`` so
    the returned payload carries it into the next pass.
    """
    exceptions = merge_declared_exceptions(data, resolve_exceptions(screen))
    result = sanitize_with_exceptions(data, frozenset(exceptions))
    result[DO_NOT_SANITIZE_KEY] = encode_exceptions(exceptions)
    return result
