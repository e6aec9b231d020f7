"""Tests for query string and body encoding."""

from __future__ import annotations

import pytest

from core.encoding import encode_body, encode_multipart, encode_query
from core.exceptions import EncodingError
from core.request_types import MultipartForm


class TestEncodeQuery:
    def test_flat_mapping_keeps_key_order(self):
        assert encode_query({"b": 2, "a": 1}) == "b=2&a=1"

    def test_values_are_url_encoded(self):
        assert encode_query({"q": "red shirt", "sku": "a&b"}) == "q=red+shirt&sku=a%26b"

    def test_nested_mapping_uses_brackets(self):
        assert encode_query({"filter": {"status": "open"}}) == "filter%5Bstatus%5D=open"

    def test_sequence_repeats_key(self):
        assert encode_query({"id": [1, 2]}) == "id=1&id=2"

    def test_none_dropped_and_bools_lowercase(self):
        assert encode_query({"a": None, "b": True, "c": False}) == "b=true&c=false"

    def test_non_mapping_rejected(self):
        with pytest.raises(EncodingError):
            encode_query(["a", "b"])


class TestEncodeBody:
    def test_compact_json(self):
        assert encode_body({"id": 7, "tags": ["a", "b"]}) == '{"id":7,"tags":["a","b"]}'

    def test_non_ascii_kept(self):
        assert encode_body({"name": "Café"}) == '{"name":"Café"}'

    def test_circular_structure(self):
        data: dict = {}
        data["self"] = data

        with pytest.raises(EncodingError):
            encode_body(data)

    def test_unserializable_value(self):
        with pytest.raises(EncodingError):
            encode_body({"when": object()})


class TestEncodeMultipart:
    def test_form_passes_through(self):
        form = MultipartForm(fields={"name": "x"}, files={"file": ("a.csv", b"1,2")})

        assert encode_multipart(form) is form

    def test_mapping_becomes_fields(self):
        assert encode_multipart({"name": "x"}) == MultipartForm(fields={"name": "x"})

    def test_other_payload_rejected(self):
        with pytest.raises(EncodingError):
            encode_multipart(b"raw")
