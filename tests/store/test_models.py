"""Tests for blogmcp.store.models - BSON-aware document rendering."""

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from bson import Decimal128, ObjectId

from blogmcp.store.models import encode_bson_value, format_timestamp, serialize_documents


def test_object_id_becomes_hex_string():
    oid = ObjectId()
    payload = json.loads(serialize_documents([{"_id": oid, "title": "Hello"}]))
    assert payload == [{"_id": str(oid), "title": "Hello"}]


def test_naive_timestamp_is_utc_iso():
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


def test_timestamp_keeps_milliseconds():
    value = datetime(2024, 1, 2, 3, 4, 5, 678901)
    assert format_timestamp(value) == "2024-01-02T03:04:05.678Z"


def test_aware_timestamp_is_converted_to_utc():
    value = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(value) == "2024-01-02T03:04:05.000Z"


def test_other_bson_values_fall_back_to_str():
    assert encode_bson_value(Decimal128(Decimal("1.50"))) == "1.50"


def test_documents_pass_through_unchanged():
    oid = ObjectId()
    doc = {
        "_id": oid,
        "title": None,
        "tags": ["z", "a"],
        "author": None,
        "createdAt": datetime(2024, 1, 2, 3, 4, 5),
        "__v": 0,
    }

    payload = json.loads(serialize_documents([doc]))

    assert payload == [
        {
            "_id": str(oid),
            "title": None,
            "tags": ["z", "a"],
            "author": None,
            "createdAt": "2024-01-02T03:04:05.000Z",
            "__v": 0,
        }
    ]
    assert list(payload[0]) == list(doc)


def test_missing_fields_are_not_filled_in():
    payload = json.loads(serialize_documents([{"_id": "1"}]))
    assert payload == [{"_id": "1"}]


def test_serialize_keeps_order():
    docs = [{"_id": "2", "title": "b"}, {"_id": "1", "title": "a"}]
    payload = json.loads(serialize_documents(docs))
    assert [p["title"] for p in payload] == ["b", "a"]


def test_serialize_is_indented_and_keeps_unicode():
    text = serialize_documents([{"_id": "1", "title": "博客"}])
    assert "\n  {" in text
    assert "博客" in text


def test_serialize_empty():
    assert serialize_documents([]) == "[]"
