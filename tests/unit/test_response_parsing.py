from __future__ import annotations

import pytest

from boj_client.core.errors import BojDecodeError
from boj_client.core.response_parsing import (
    PayloadKind,
    classify_content_type,
    load_json_object,
    looks_like_json,
)


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (b'{"STATUS":200}', True),
        (b"  \r\n\t[1]", True),
        (b"STATUS,200\r\n", False),
        (b"", False),
        (b"\xef\xbb\xbf{}", False),
    ],
    ids=["object", "array-after-whitespace", "csv", "empty", "bom"],
)
def test_looks_like_json(body: bytes, expected: bool):
    assert looks_like_json(body) is expected


@pytest.mark.parametrize(
    ("content_type", "expected"),
    [
        ("application/json; charset=utf-8", PayloadKind.JSON),
        ("TEXT/CSV", PayloadKind.CSV),
        ("text/plain", PayloadKind.UNKNOWN),
        ("", PayloadKind.UNKNOWN),
        (None, PayloadKind.UNKNOWN),
    ],
)
def test_classify_content_type(content_type, expected):
    assert classify_content_type(content_type) is expected


def test_load_json_object_keeps_numbers_as_text():
    text, payload = load_json_object(b'{"STATUS": 200, "V": 1.50, "N": null}')
    assert text == '{"STATUS": 200, "V": 1.50, "N": null}'
    assert payload == {"STATUS": "200", "V": "1.50", "N": None}


@pytest.mark.parametrize(
    ("body", "message"),
    [
        (b"[]", "top-level JSON object"),
        (b'"x"', "top-level JSON object"),
        (b"{", "invalid JSON"),
        (b'{"A": "\xff"}', "invalid UTF-8"),
    ],
    ids=["array", "string", "truncated", "bad-utf8"],
)
def test_load_json_object_rejects_invalid_payloads(body: bytes, message: str):
    with pytest.raises(BojDecodeError, match=message):
        load_json_object(body)
