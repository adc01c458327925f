from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping
from urllib.parse import parse_qs, unquote, urlsplit

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "dropped pin"

_LOCATION_KEY = "location"
_ADDRESS_KEYS = ("address", "Address")
_MAP_URL_KEYS = ("google_maps_url", "google maps url")
_PLACE_SEGMENT_RE = re.compile(r"/place/([^/@?]+)")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _usable(candidate: Any) -> str | None:
    """Return the trimmed candidate, or None for non-strings, blanks and placeholders."""
    if not isinstance(candidate, str):
        return None
    name = candidate.strip()
    if not name or name.lower() == PLACEHOLDER_NAME:
        return None
    return name


def _get_ci(mapping: Mapping[str, Any], *keys: str) -> Any:
    """Look up the first of ``keys`` present, ignoring key case."""
    for key in keys:
        if key in mapping:
            return mapping[key]
    lowered = {k.lower(): v for k, v in mapping.items() if isinstance(k, str)}
    for key in keys:
        if key.lower() in lowered:
            return lowered[key.lower()]
    return None


def _location(props: Mapping[str, Any]) -> Mapping[str, Any] | None:
    # "Location" (Takeout CSV-to-JSON) wins over "location" (GeoJSON saved places)
    loc = props.get("Location")
    if not isinstance(loc, Mapping):
        loc = _get_ci(props, _LOCATION_KEY)
    return loc if isinstance(loc, Mapping) else None


# ---------------------------------------------------------------------------
# Record gates
# ---------------------------------------------------------------------------


def _properties(record: Any) -> Mapping[str, Any] | None:
    if not isinstance(record, Mapping):
        return None
    props = record.get("properties")
    return props if isinstance(props, Mapping) else None


def _is_null_island(record: Mapping[str, Any]) -> bool:
    """True when the record's coordinates are exactly (0, 0)."""
    geometry = record.get("geometry")
    if not isinstance(geometry, Mapping):
        return False
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        return False
    return all(
        isinstance(c, (int, float)) and not isinstance(c, bool) and c == 0
        for c in coords[:2]
    )


# ---------------------------------------------------------------------------
# Name extractors (highest priority first)
# ---------------------------------------------------------------------------


def _from_location_name(props: Mapping[str, Any]) -> str | None:
    loc = props.get("location")
    if not isinstance(loc, Mapping):
        return None
    return _usable(loc.get("name"))


def _from_title(props: Mapping[str, Any]) -> str | None:
    return _usable(props.get("Title"))


def _from_location_fields(props: Mapping[str, Any]) -> str | None:
    loc = _location(props)
    if loc is None:
        return None
    return _usable(loc.get("Business Name")) or _usable(loc.get("name"))


def _name_from_map_url(url: str) -> str | None:
    match = _PLACE_SEGMENT_RE.search(url)
    if match:
        segment = match.group(1)
        if _BAD_ESCAPE_RE.search(segment):
            raise ValueError(f"invalid percent escape in {segment!r}")
        name = _usable(unquote(segment.replace("+", " "), errors="strict"))
        if name:
            return name

    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"not an absolute URL: {url!r}")
    values = parse_qs(parts.query).get("q")
    if not values:
        return None
    return _usable(values[0].split(",")[0])


def _from_map_url(props: Mapping[str, Any]) -> str | None:
    url = _get_ci(props, *_MAP_URL_KEYS)
    if not isinstance(url, str) or not url:
        return None
    try:
        return _name_from_map_url(url)
    except ValueError:
        # UnicodeDecodeError is a ValueError too
        logger.debug("Could not parse map URL %r", url, exc_info=True)
        return None


def _from_address(props: Mapping[str, Any]) -> str | None:
    loc = _location(props)
    if loc is None:
        return None
    address = _get_ci(loc, *_ADDRESS_KEYS)
    if not isinstance(address, str):
        return None
    head = [part.strip() for part in address.split(",")[:2]]
    return _usable(", ".join(part for part in head if part))


@dataclass(frozen=True)
class NameRule:
    name: str
    extract: Callable[[Mapping[str, Any]], str | None]


NAME_RULES: tuple[NameRule, ...] = (
    NameRule("location_name", _from_location_name),
    NameRule("title", _from_title),
    NameRule("location_fields", _from_location_fields),
    NameRule("map_url", _from_map_url),
    NameRule("address", _from_address),
)


def normalize_record(record: Any) -> str | None:
    """
    Extract a canonical place name from one export record.

    Records without a ``properties`` object, or pinned at (0, 0), yield
    None. Otherwise the first rule in ``NAME_RULES`` that produces a
    non-empty, non-placeholder name wins.
    """
    props = _properties(record)
    if props is None or _is_null_island(record):
        return None

    for rule in NAME_RULES:
        name = rule.extract(props)
        if name:
            return name
    return None
