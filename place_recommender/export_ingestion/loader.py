from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from ..errors import InvalidExportFormatError, NoUsablePlacesError
from .config import DEFAULT_EXPORT_CONFIG, ExportConfig
from .normalizer import normalize_record

logger = logging.getLogger(__name__)


def parse_export(
    document: bytes | str | Any,
    config: ExportConfig = DEFAULT_EXPORT_CONFIG,
) -> list[Any]:
    """
    Return the list of records held by an export document.

    Accepts raw JSON (bytes or str) or an already-decoded object. The
    document must be a list of records or an object whose ``features``
    value is one.
    """
    if isinstance(document, (bytes, bytearray, str)):
        try:
            document = json.loads(document)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise InvalidExportFormatError() from exc

    if isinstance(document, list):
        return document
    if isinstance(document, dict) and isinstance(document.get(config.features_key), list):
        return document[config.features_key]
    raise InvalidExportFormatError()


def extract_place_names(records: Iterable[Any]) -> list[str]:
    """Normalize every record, keeping usable names in export order."""
    names = [name for name in map(normalize_record, records) if name]
    if not names:
        raise NoUsablePlacesError()
    return names


def load_place_names(
    document: bytes | str | Any,
    config: ExportConfig = DEFAULT_EXPORT_CONFIG,
) -> list[str]:
    records = parse_export(document, config)
    names = extract_place_names(records)
    logger.info("Export parsed: %d records, %d usable place names", len(records), len(names))
    return names
