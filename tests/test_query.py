"""Tests for the option-bag query encoder and request descriptors."""

from __future__ import annotations

from nylasclient import ListOptions, Request, encode_query
from nylasclient.models import RequestBody
from nylasclient.query import build_params


class TestEncodeQuery:
    def test_none_and_empty(self):
        assert encode_query(None) == []
        assert encode_query({}) == []

    def test_scalars(self):
        pairs = encode_query({"q": "hello world", "limit": 10, "unread": True, "starred": False})
        assert pairs == [
            ("q", "hello world"),
            ("limit", "10"),
            ("unread", "true"),
            ("starred", "false"),
        ]

    def test_string_list_repeats_key(self):
        assert encode_query({"any_email": ["a@x.com", "b@x.com"]}) == [
            ("any_email", "a@x.com"),
            ("any_email", "b@x.com"),
        ]

    def test_unsupported_types_skipped(self):
        assert encode_query({"ratio": 1.5, "meta": {"k": "v"}, "none": None}) == []


class TestBuildParams:
    def test_merges_options_and_extras(self):
        params = build_params(ListOptions(limit=5), calendar_id="primary", skip=None)
        assert params == {"limit": 5, "calendar_id": "primary"}

    def test_mapping_options(self):
        assert build_params({"a": "1"}) == {"a": "1"}

    def test_extras_override(self):
        assert build_params(ListOptions(limit=5), limit=50) == {"limit": 50}


class _Body(RequestBody):
    name: str
    note: str | None = None


class TestRequest:
    def test_json_body_from_model(self):
        req = Request("POST", "/v3/x", body=_Body(name="n"))
        assert req.json_body() == {"name": "n"}

    def test_json_body_passthrough(self):
        assert Request("POST", "/v3/x", body={"a": 1}).json_body() == {"a": 1}
        assert Request("GET", "/v3/x").json_body() is None

    def test_query(self):
        assert Request("GET", "/v3/x", params={"limit": 2}).query() == [("limit", "2")]
