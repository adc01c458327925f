from __future__ import annotations

import json

import pytest

from place_recommender.errors import InvalidExportFormatError, NoUsablePlacesError
from place_recommender.export_ingestion.loader import (
    extract_place_names,
    load_place_names,
    parse_export,
)

VALID_RECORDS = [
    {"properties": {"Title": "Gyeongbokgung"}},
    {"properties": {"location": {"name": "Cafe Onion"}}},
    {"properties": {"google_maps_url": "https://maps.google.com/?q=Seoul+Tower,37.5,127.0"}},
]

UNUSABLE_RECORDS = [
    {"geometry": {"coordinates": [0, 0]}, "properties": {"Title": "Somewhere"}},
    {"properties": {"Title": "Dropped pin"}},
]


def test_parse_top_level_list():
    assert parse_export(json.dumps(VALID_RECORDS).encode()) == VALID_RECORDS


def test_parse_feature_collection():
    document = {"type": "FeatureCollection", "features": VALID_RECORDS}
    assert parse_export(json.dumps(document)) == VALID_RECORDS


def test_parse_decoded_object():
    assert parse_export({"features": []}) == []


@pytest.mark.parametrize(
    "document",
    [
        b"{not json",
        b"\xff\xfe\x00",
        json.dumps({"places": VALID_RECORDS}),
        json.dumps({"features": {"a": 1}}),
        json.dumps("Gyeongbokgung"),
        json.dumps(42),
    ],
)
def test_parse_rejects_other_shapes(document):
    with pytest.raises(InvalidExportFormatError):
        parse_export(document)


def test_unusable_records_are_skipped():
    records = [VALID_RECORDS[0], UNUSABLE_RECORDS[0], VALID_RECORDS[1], UNUSABLE_RECORDS[1], VALID_RECORDS[2]]
    names = extract_place_names(records)
    assert names == ["Gyeongbokgung", "Cafe Onion", "Seoul Tower"]


def test_duplicates_are_preserved():
    names = extract_place_names([VALID_RECORDS[0], VALID_RECORDS[0]])
    assert names == ["Gyeongbokgung", "Gyeongbokgung"]


def test_no_usable_places():
    with pytest.raises(NoUsablePlacesError):
        extract_place_names(UNUSABLE_RECORDS)


def test_empty_export_has_no_usable_places():
    with pytest.raises(NoUsablePlacesError):
        load_place_names(b"[]")


def test_load_utf8_export():
    document = json.dumps({"features": [{"properties": {"Title": "경복궁"}}]}, ensure_ascii=False)
    assert load_place_names(document.encode("utf-8")) == ["경복궁"]
