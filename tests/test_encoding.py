import datetime
import uuid
from dataclasses import dataclass
from typing import List

import pytest
from defusedxml import EntitiesForbidden
from pydantic import BaseModel

from clientparty import BodyEncoding, EncodingError
from clientparty._encoding import (
    decode_body,
    decode_form,
    decode_json,
    decode_xml,
    encode_body,
    encode_form,
    encode_json,
    encode_xml,
    media_type,
)


class Item(BaseModel):
    name: str
    color: str


@dataclass
class Point:
    x: str
    y: str


@dataclass
class Route:
    name: str
    points: List[Point]


class TestBodyEncoding:
    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("application/json", BodyEncoding.JSON),
            ("application/xml", BodyEncoding.XML),
            ("text/xml", BodyEncoding.XML),
            ("application/x-www-form-urlencoded", BodyEncoding.FORM_URLENCODED),
            ("multipart/form-data", BodyEncoding.MULTIPART),
            ("application/json; charset=utf-8", BodyEncoding.JSON),
            ("Text/XML; charset=utf-8", BodyEncoding.XML),
            ("text/plain", BodyEncoding.JSON),
            ("application/x-yaml", BodyEncoding.JSON),
            ("", BodyEncoding.JSON),
            (None, BodyEncoding.JSON),
        ],
    )
    def test_from_content_type(self, content_type, expected):
        assert BodyEncoding.from_content_type(content_type) is expected

    def test_media_type_strips_parameters(self):
        assert media_type("multipart/form-data; boundary=abc") == "multipart/form-data"

    def test_multipart_and_raw_are_not_value_driven(self):
        assert encode_body({"a": "1"}, BodyEncoding.MULTIPART) is None
        assert encode_body({"a": "1"}, BodyEncoding.RAW) is None

    def test_decode_body_without_decoder(self):
        with pytest.raises(ValueError):
            decode_body(b"", BodyEncoding.RAW)


class TestJson:
    def test_compact_output(self):
        assert encode_json({"name": "a"}) == b'{"name":"a"}'

    def test_pydantic_model(self):
        assert encode_json(Item(name="a", color="red")) == b'{"name":"a","color":"red"}'

    def test_rich_types(self):
        value = {
            "id": uuid.UUID("12345678-1234-5678-1234-567812345678"),
            "at": datetime.date(2024, 1, 2),
        }
        assert decode_json(encode_json(value)) == {
            "id": "12345678-1234-5678-1234-567812345678",
            "at": "2024-01-02",
        }

    def test_unsupported_type(self):
        with pytest.raises(EncodingError) as exc_info:
            encode_json({"handle": object()})
        assert exc_info.value.content_type == "application/json"

    @pytest.mark.parametrize(
        "value",
        [
            {"name": "a", "tags": ["x", "y"], "count": 3, "ok": True, "none": None},
            [1, 2.5, "three"],
            "plain",
            {},
        ],
    )
    def test_round_trip(self, value):
        assert decode_body(encode_body(value, BodyEncoding.JSON), BodyEncoding.JSON) == value


class TestForm:
    def test_sorted_by_key(self):
        assert encode_form({"b": "2", "a": "1"}) == b"a=1&b=2"

    def test_percent_encoding(self):
        assert encode_form({"q": "red shoes", "x": "a&b=c"}) == b"q=red+shoes&x=a%26b%3Dc"

    def test_pydantic_model(self):
        assert encode_form(Item(name="a", color="red")) == b"color=red&name=a"

    def test_dataclass(self):
        assert encode_form(Point(x="1", y="2")) == b"x=1&y=2"

    def test_non_string_value(self):
        with pytest.raises(EncodingError, match="'count'"):
            encode_form({"count": 3})

    def test_non_mapping(self):
        with pytest.raises(EncodingError):
            encode_form(["a", "b"])

    def test_round_trip(self):
        value = {"a": "1", "b": "two words", "c": "", "d": "ünï"}
        assert decode_form(encode_form(value)) == value


class TestXml:
    def test_single_root(self):
        assert encode_xml({"item": {"name": "a"}}) == b"<item><name>a</name></item>"

    def test_repeated_elements(self):
        assert (
            encode_xml({"item": {"tag": ["x", "y"]}})
            == b"<item><tag>x</tag><tag>y</tag></item>"
        )

    def test_scalars(self):
        assert (
            encode_xml({"item": {"ok": True, "n": 2, "empty": None}})
            == b"<item><ok>true</ok><n>2</n><empty /></item>"
        )

    def test_escapes_text(self):
        assert encode_xml({"note": "a < b & c"}) == b"<note>a &lt; b &amp; c</note>"

    def test_pydantic_model_rooted_at_class_name(self):
        assert (
            encode_xml(Item(name="a", color="red"))
            == b"<Item><name>a</name><color>red</color></Item>"
        )

    def test_dataclass_rooted_at_class_name(self):
        assert encode_xml(Point(x="1", y="2")) == b"<Point><x>1</x><y>2</y></Point>"

    def test_nested_dataclasses(self):
        route = Route(name="p", points=[Point(x="1", y="2"), Point(x="3", y="4")])

        assert decode_xml(encode_xml(route)) == {
            "Route": {
                "name": "p",
                "points": [{"x": "1", "y": "2"}, {"x": "3", "y": "4"}],
            }
        }

    def test_dataclass_under_a_root(self):
        assert encode_xml({"at": Point(x="1", y="2")}) == b"<at><x>1</x><y>2</y></at>"

    def test_dataclass_type_is_not_a_body(self):
        with pytest.raises(EncodingError):
            encode_xml(Point)

    @pytest.mark.parametrize(
        "value",
        [
            {"a": "1", "b": "2"},
            {},
            ["a"],
            {"root": ["a", "b"]},
            {"bad name": "x"},
            {"item": {"1st": "x"}},
            {"item": {"nested": [["x"]]}},
            {"item": {"handle": object()}},
        ],
    )
    def test_unrepresentable(self, value):
        with pytest.raises(EncodingError):
            encode_xml(value)

    def test_round_trip(self):
        value = {
            "order": {
                "id": "42",
                "customer": {"name": "Ann", "email": "ann@example.test"},
                "line": [{"sku": "a-1", "qty": "2"}, {"sku": "b-2", "qty": "1"}],
                "note": "fragile & heavy",
            }
        }
        assert decode_xml(encode_xml(value)) == value

    def test_decoder_rejects_entity_expansion(self):
        payload = (
            b'<?xml version="1.0"?><!DOCTYPE x [<!ENTITY a "aaaa">]><x>&a;</x>'
        )
        with pytest.raises(EntitiesForbidden):
            decode_xml(payload)
