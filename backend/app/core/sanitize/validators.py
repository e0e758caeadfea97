"""Fail-closed validators: return the value when valid, ``""`` otherwise."""

import re
from typing import Any

from email_validator import EmailNotValidError, validate_email

_PHONE_RE = re.compile(r"\+*[-\s./0-9]*(?:\([0-9]{1,4}\)[-\s./0-9]*)?", re.ASCII)


def sanitize_email(value: Any) -> str:
    if not isinstance(value, str) or not value:
        return ""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return ""
    return value


def sanitize_phone_number(value: Any) -> str:
    """Digits with optional leading ``+``, one ``(...)`` group and ``- . /`` or space separators."""
    if not isinstance(value, str):
        return ""
    if not _PHONE_RE.fullmatch(value) or not any(c.isdigit() for c in value):
        return ""
    return value
