from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel


class DraftValidation(BaseModel):
    valid: bool
    missing: List[str]


def read_field(source: Any, field: str) -> Any:
    """Read ``field`` from a mapping, a pydantic model or any attribute holder."""
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(field)
    return getattr(source, field, None)


def coalesce(value: Any, default: Any) -> Any:
    return default if value is None else value


def merge_nested(defaults: Mapping[str, Any], value: Any) -> Dict[str, Any]:
    """
    Merge a partial nested object onto its defaults key by key.

    Keys missing from ``value`` (or set to None) keep the default, so a partial
    nested object never erases its siblings.
    """
    merged = dict(defaults)
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, Mapping):
        for key, item in value.items():
            if item is not None:
                merged[key] = item
    return merged


def clean_value(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def drop_unset(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


_INVALID_KEY_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def slugify(value: str) -> str:
    """
    Turn a display name into a stable key.

    >>> slugify(" Cover Verticale 16:9 ")
    'cover-verticale-169'
    """
    slug = value.lower().strip()
    slug = _INVALID_KEY_CHARS.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    return _DASHES.sub("-", slug)


def labels_for(missing: Iterable[str], labels: Mapping[str, str]) -> List[str]:
    return [labels.get(key, key) for key in missing]
