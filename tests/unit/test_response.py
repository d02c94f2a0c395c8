"""Tests for response body parsing and the result shape."""

import json

import pytest

from apicore import (
    RawExchange,
    RawRequest,
    RawResponse,
    ResponseParseError,
    ResponseResult,
    encode_payload,
)
from apicore.response import parse_body


class TestParseBody:
    def test_json(self):
        data, error = parse_body({"content-type": "application/json"}, b'{"id": 1}')
        assert data == {"id": 1}
        assert error is None

    def test_json_family_with_charset(self):
        data, _ = parse_body(
            {"Content-Type": "application/problem+json; charset=utf-8"}, b'{"title": "x"}'
        )
        assert data == {"title": "x"}

    def test_text_stays_text(self):
        data, error = parse_body({"content-type": "text/plain"}, b"hello")
        assert data == "hello"
        assert error is None

    def test_missing_content_type_is_text(self):
        data, _ = parse_body({}, b'{"id": 1}')
        assert data == '{"id": 1}'

    def test_empty_json_body(self):
        data, error = parse_body({"content-type": "application/json"}, b"")
        assert data == ""
        assert error is None

    def test_invalid_json_keeps_raw_text(self):
        data, error = parse_body({"content-type": "application/json"}, b"<html>oops</html>")
        assert data == "<html>oops</html>"
        assert isinstance(error, ResponseParseError)
        assert error.body == "<html>oops</html>"
        assert error.content_type == "application/json"

    def test_invalid_utf8_in_json_is_a_parse_error(self):
        data, error = parse_body({"content-type": "application/json"}, b'{"name": "\xff\xfe"}')
        assert isinstance(error, ResponseParseError)
        assert data == '{"name": "\ufffd\ufffd"}'
        assert error.body == data

    def test_undecodable_text_body_stays_bytes(self):
        body = b"\x89PNG\r\n\x1a\n\x00\xff"
        data, error = parse_body({"content-type": "image/png"}, body)
        assert data == body
        assert error is None

    def test_declared_charset(self):
        content_type = "text/plain; charset=latin-1"
        data, _ = parse_body({"content-type": content_type}, "café".encode("latin-1"))
        assert data == "café"

    def test_unknown_charset_falls_back_to_utf8(self):
        data, _ = parse_body({"content-type": "text/plain; charset=bogus"}, "café".encode())
        assert data == "café"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [
            {"name": "a", "nested": {"list": [1, 2.5, None, True]}},
            [{"id": 1}, {"id": 2}],
            {"unicode": "日本語"},
        ],
    )
    def test_json_encode_then_parse(self, value):
        body = encode_payload("application/json", value)
        data, error = parse_body({"content-type": "application/json"}, body.content)
        assert error is None
        assert data == value


class TestResponseResult:
    def test_ok(self):
        assert ResponseResult(204, "").ok
        assert not ResponseResult(404, {"error": "not found"}).ok

    def test_to_dict_without_raw(self):
        assert ResponseResult(200, {"a": 1}).to_dict() == {"statusCode": 200, "data": {"a": 1}}

    def test_to_dict_with_raw(self):
        raw = RawExchange(
            request=RawRequest("POST", "https://api.example.com/x", {"A": "1"}, b'{"a":1}'),
            response=RawResponse(201, (("content-type", "application/json"),), b"{}"),
        )
        result = ResponseResult(201, {}, raw=raw).to_dict()
        assert result["raw"]["response"]["headers"] == [["content-type", "application/json"]]
        assert result["raw"]["request"] == {
            "method": "POST",
            "url": "https://api.example.com/x",
            "headers": {"A": "1"},
            "body": '{"a":1}',
        }
        assert result["raw"]["response"]["statusCode"] == 201
        assert json.loads(result["raw"]["response"]["body"]) == {}

    def test_raise_for_parse_error(self):
        error = ResponseParseError("bad", content_type="application/json", body="x")
        result = ResponseResult(200, "x", parse_error=error)
        with pytest.raises(ResponseParseError):
            result.raise_for_parse_error()
        ResponseResult(200, {}).raise_for_parse_error()
