"""Utility helpers for the Cataloog service."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import parse_qsl


def normalize_catalog_key(value: str) -> str:
    """Return the canonical slug form of a catalog key."""

    slug = value.strip().replace("_", "-").replace(" ", "-").lower()
    return "-".join(part for part in slug.split("-") if part)


def parse_skip(value: object) -> int:
    """Parse the Stremio ``skip`` extra, falling back to 0."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    try:
        skip = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return max(skip, 0)


def parse_extra_segment(segment: str | None) -> dict[str, str]:
    """Decode the ``skip=20&search=foo`` path segment used by Stremio."""

    if not segment:
        return {}
    if segment.endswith(".json"):
        segment = segment[: -len(".json")]
    return dict(parse_qsl(segment, keep_blank_values=True))


def merge_extra(*sources: Mapping[str, str] | None) -> dict[str, str]:
    """Merge extra mappings, later sources taking precedence."""

    merged: dict[str, str] = {}
    for source in sources:
        if source:
            merged.update(source)
    return merged
