"""
Low-level string filters used by the sanitizer.

- strip_denylisted_tags: removes structural/form tags (always applied).
- strip_all_tags: removes every markup tag, keeping the enclosed text.
- strip_expression_delimiters: removes client-side template expressions ``{{ ... }}``.

All filters are pure and total: they never raise and never lengthen the input.
"""

import re

# Tags removed from every string, rich-text fields included.
DENYLISTED_TAGS: tuple[str, ...] = (
    "form",
    "input",
    "textarea",
    "button",
    "select",
    "option",
    "optgroup",
    "fieldset",
    "label",
    "output",
)


def _tag_pattern(tag: str) -> re.Pattern[str]:
    """Opening or closing form of ``tag``: ``<form ...>``, ``</form>``, ``< / FORM>``."""
    return re.compile(rf"<[\s/]*{re.escape(tag)}\b[^>]*>", re.IGNORECASE)


_DENYLIST_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    _tag_pattern(tag) for tag in DENYLISTED_TAGS
)

_COMMENT_RE = re.compile(r"<!--.*?(?:-->|$)", re.DOTALL)
# A tag starts with a name, a slash, "!" or "?"; an unterminated tag runs to end of string.
_TAG_RE = re.compile(r"<[a-zA-Z/!?][^>]*(?:>|$)")

_EXPRESSION_RE = re.compile(r"\{\{.*?\}\}", re.DOTALL)
_DELIMITERS = ("{{", "}}")


def _until_stable(value: str, step) -> str:
    # Each step only removes characters, so this terminates.
    while True:
        reduced = step(value)
        if reduced == value:
            return value
        value = reduced


def _remove_denylisted(value: str) -> str:
    for pattern in _DENYLIST_PATTERNS:
        value = pattern.sub("", value)
    return value


def strip_denylisted_tags(value: str) -> str:
    """Remove every denylisted tag (case-insensitive, attributes included), keep inner text."""
    return _until_stable(value, _remove_denylisted)


def _remove_tags(value: str) -> str:
    return _TAG_RE.sub("", _COMMENT_RE.sub("", value))


def strip_all_tags(value: str) -> str:
    """Remove all markup tags and comments; text between tags is retained."""
    return _until_stable(value, _remove_tags)


def _remove_expressions(value: str) -> str:
    value = _EXPRESSION_RE.sub("", value)
    for delimiter in _DELIMITERS:
        value = value.replace(delimiter, "")
    return value


def strip_expression_delimiters(value: str) -> str:
    """
    Remove template expressions so a client template engine cannot evaluate them.

    ``"a{{name}}c"`` -> ``"ac"``; unmatched ``{{`` / ``}}`` are dropped as well.
    """
    return _until_stable(value, _remove_expressions)
