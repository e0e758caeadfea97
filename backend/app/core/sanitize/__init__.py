"""
Form payload sanitization.

Exports: sanitize, sanitize_data, resolve_exceptions, merge_declared_exceptions,
sanitize_email, sanitize_phone_number, DO_NOT_SANITIZE_KEY.
"""

from .filters import (
    DENYLISTED_TAGS,
    strip_all_tags,
    strip_denylisted_tags,
    strip_expression_delimiters,
)
from .rich_text import (
    DO_NOT_SANITIZE_KEY,
    merge_declared_exceptions,
    resolve_exceptions,
)
from .sanitizer import sanitize, sanitize_data, sanitize_with_exceptions
from .validators import sanitize_email, sanitize_phone_number

__all__ = [
    "DENYLISTED_TAGS",
    "DO_NOT_SANITIZE_KEY",
    "merge_declared_exceptions",
    "resolve_exceptions",
    "sanitize",
    "sanitize_data",
    "sanitize_email",
    "sanitize_phone_number",
    "sanitize_with_exceptions",
    "strip_all_tags",
    "strip_denylisted_tags",
    "strip_expression_delimiters",
]
