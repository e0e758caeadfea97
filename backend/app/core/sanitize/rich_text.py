"""
Rich-text exception set: top-level field names allowed to keep markup.

The screen definition is the authoritative floor; a payload may widen it by
declaring names under the reserved ``_DO_NOT_SANITIZE`` key (JSON list).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from app.models import ScreenDefinition

logger = logging.getLogger(__name__)

DO_NOT_SANITIZE_KEY = "_DO_NOT_SANITIZE"
RICH_TEXT_COMPONENT = "FormTextArea"


def _rich_text_name(item: Any) -> str | None:
    """Field name of a rich-text leaf item, else None."""
    if not isinstance(item, Mapping):
        return None
    if item.get("component") != RICH_TEXT_COMPONENT:
        return None
    config = item.get("config")
    if not isinstance(config, Mapping) or config.get("richtext") is not True:
        return None
    name = config.get("name")
    return name if isinstance(name, str) and name else None


def _leaf_names(items: Iterable[Any]) -> list[str]:
    names: list[str] = []
    for item in items:
        name = _rich_text_name(item)
        if name is not None:
            names.append(name)
    return names


def _page_names(items: Iterable[Any]) -> list[str]:
    names: list[str] = []
    for item in items:
        children = item.get("items") if isinstance(item, Mapping) else None
        if not isinstance(children, list):
            name = _rich_text_name(item)
            if name is not None:
                names.append(name)
            continue
        # Container (e.g. table): look one level down, into each cell.
        for cell in children:
            if isinstance(cell, list):
                names.extend(_leaf_names(cell))
            else:
                names.extend(_leaf_names([cell]))
    return names


def resolve_exceptions(screen: ScreenDefinition | None) -> list[str]:
    """Names of rich-text fields declared by the screen, in page order, no duplicates."""
    if screen is None:
        return []
    names: list[str] = []
    for page in screen.pages:
        names.extend(_page_names(page.items))
    return list(dict.fromkeys(names))


def decode_declared(raw: Any) -> list[str]:
    """Parse a reserved-key value into field names; anything malformed yields []."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Ignoring undecodable %s value: %r", DO_NOT_SANITIZE_KEY, raw)
            return []
    if not isinstance(raw, list):
        return []
    return [name for name in raw if isinstance(name, str)]


def merge_declared_exceptions(
    payload: Mapping[str, Any], base: Iterable[str]
) -> list[str]:
    """Union of the payload's declared exceptions and ``base`` (declared first)."""
    declared = decode_declared(payload.get(DO_NOT_SANITIZE_KEY))
    return list(dict.fromkeys([*declared, *base]))


def encode_exceptions(names: Iterable[str]) -> str:
    return json.dumps(list(names))
