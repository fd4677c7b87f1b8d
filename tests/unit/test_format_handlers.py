"""Unit tests for the built-in format handlers.

This module tests the JSON, JSONP, URL-encoded and XML handlers
that the default format registry instantiates.
"""

import json

import pytest
from pydantic import BaseModel

from restful_formats.config.settings import Settings
from restful_formats.exceptions import InvalidInputError, MalformedDocumentError, MappingError
from restful_formats.formats import (
    JsonFormat,
    JsonpFormat,
    QueryFormat,
    XmlFormat,
    default_formats,
)
from restful_formats.formats.query import flatten, unflatten


def test_default_formats_content_types():
    for mime_type, factory in default_formats().items():
        assert factory(None).content_type == mime_type


def test_json_pretty_and_compact():
    h = JsonFormat(Settings(json_indent=2))
    assert h.encode({"a": [1, 2]}, pretty_print=False) == b'{"a": [1, 2]}'
    assert h.encode({"a": 1}, pretty_print=True) == b'{\n  "a": 1\n}'


def test_json_keeps_unicode():
    assert JsonFormat().encode({"a": "žluť"}, pretty_print=False) == '{"a": "žluť"}'.encode("utf-8")


def test_json_encodes_pydantic_models():
    class Item(BaseModel):
        id: int

    payload = JsonFormat().encode({"items": [Item(id=1)]}, pretty_print=False)
    assert json.loads(payload) == {"items": [{"id": 1}]}


def test_json_unserializable_raises_mapping_error():
    with pytest.raises(MappingError) as exc:
        JsonFormat().encode({"a": object()})
    assert exc.value.details["error_type"] == "TypeError"


def test_json_decode():
    assert JsonFormat().decode(b'{"a": [1, "x"]}') == {"a": [1, "x"]}


def test_json_decode_malformed_reports_position():
    with pytest.raises(MalformedDocumentError) as exc:
        JsonFormat().decode(b'{\n  "a": }')
    assert exc.value.line == 2
    assert exc.value.column is not None


def test_json_decode_invalid_utf8():
    with pytest.raises(MalformedDocumentError):
        JsonFormat().decode(b'{"a": "\xff"}')


def test_jsonp_wraps_callback():
    payload = JsonpFormat().encode({"a": 1}, pretty_print=False, callback="app.handle")
    assert payload == b'app.handle({"a": 1});'


@pytest.mark.parametrize("callback", [None, "", "alert(1)", "1abc", "a..b"])
def test_jsonp_rejects_invalid_callback(callback):
    with pytest.raises(InvalidInputError):
        JsonpFormat().encode({"a": 1}, callback=callback)


def test_jsonp_cannot_decode():
    with pytest.raises(MappingError):
        JsonpFormat().decode(b"cb({});")


def test_query_flatten_nested():
    assert flatten({"user": {"name": "a"}, "tags": ["x", "y"], "skip": None, "ok": True}) == [
        ("user[name]", "a"),
        ("tags[0]", "x"),
        ("tags[1]", "y"),
        ("ok", "true"),
    ]


def test_query_encode():
    assert (
        QueryFormat().encode({"q": "a b", "page": 2, "f": {"x": "1"}})
        == b"q=a+b&page=2&f%5Bx%5D=1"
    )


def test_query_encode_rejects_scalar():
    with pytest.raises(InvalidInputError):
        QueryFormat().encode("q=1")


def test_query_decode_rebuilds_nesting():
    assert QueryFormat().decode(b"user%5Bname%5D=a&tags%5B0%5D=x&tags%5B1%5D=y&q=") == {
        "user": {"name": "a"},
        "tags": ["x", "y"],
        "q": "",
    }


def test_query_decode_repeated_and_appended_keys():
    assert unflatten([("a", "1"), ("a", "2"), ("b[]", "x"), ("b[]", "y")]) == {
        "a": ["1", "2"],
        "b": ["x", "y"],
    }


def test_query_decode_unbalanced_brackets_are_plain_keys():
    assert unflatten([("a[b", "1")]) == {"a[b": "1"}


def test_xml_uses_configured_elements():
    h = XmlFormat(Settings(xml_root_element="response", xml_item_element="entry"))
    payload = h.encode(["x"], pretty_print=False)
    assert payload.endswith(b"<response><entry>x</entry></response>")
    assert h.decode(payload) == {"entry": "x"}


def test_xml_without_root_element():
    h = XmlFormat(Settings(xml_root_element=""))
    assert h.encode({"a": "1"}, pretty_print=False) == b"<a>1</a>"


def test_handler_repr():
    assert "application/xml" in repr(XmlFormat())
