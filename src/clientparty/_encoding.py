"""Body encodings selected by the declared ``Content-Type``.

The content type is the only signal used to pick a serializer. Selection is a
closed mapping from media type to :class:`BodyEncoding`; anything unknown or
unset falls back to JSON. Each text encoding has a paired decoder so that a
value representable in the format survives ``decode(encode(value))``.
"""

import dataclasses
import json
import re
import xml.etree.ElementTree as ET
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode

from defusedxml import ElementTree as DefusedET
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from ._utils.constants import (
    MIME_JSON,
    MIME_MULTIPART_POST_FORM,
    MIME_POST_FORM,
    MIME_XML,
    MIME_XML2,
)
from .models.errors import EncodingError

_XML_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")


class BodyEncoding(str, Enum):
    """How a request body value is turned into bytes."""

    JSON = "json"
    XML = "xml"
    FORM_URLENCODED = "form_urlencoded"
    MULTIPART = "multipart"
    RAW = "raw"

    @classmethod
    def from_content_type(cls, content_type: Optional[str]) -> "BodyEncoding":
        """Pick the encoding for a ``Content-Type`` header value.

        Media-type parameters and case are ignored. Unset or unrecognized
        content types select JSON.
        """
        return _BY_MEDIA_TYPE.get(media_type(content_type), cls.JSON)


_BY_MEDIA_TYPE: dict[str, BodyEncoding] = {
    MIME_JSON: BodyEncoding.JSON,
    MIME_XML: BodyEncoding.XML,
    MIME_XML2: BodyEncoding.XML,
    MIME_POST_FORM: BodyEncoding.FORM_URLENCODED,
    MIME_MULTIPART_POST_FORM: BodyEncoding.MULTIPART,
}


def media_type(content_type: Optional[str]) -> str:
    """``"Text/XML; charset=utf-8"`` -> ``"text/xml"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def encode_json(value: Any) -> bytes:
    try:
        return to_json(value)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(
            f"cannot encode {type(value).__name__} as JSON: {e}", MIME_JSON
        ) from e


def decode_json(data: Union[bytes, str]) -> Any:
    return json.loads(data)


def encode_form(value: Any) -> bytes:
    """Percent-encode a flat ``str -> str`` mapping, sorted by key."""
    return urlencode(_form_items(value)).encode("ascii")


def decode_form(data: Union[bytes, str]) -> dict[str, str]:
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    return dict(parse_qsl(text, keep_blank_values=True))


def _is_record(value: Any) -> bool:
    """True for pydantic model and dataclass instances."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _dump_record(value: Any, mime: str) -> Any:
    """Models and dataclass instances as plain data; anything else unchanged."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if not _is_record(value):
        return value
    try:
        return to_jsonable_python(value, by_alias=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(
            f"cannot encode {type(value).__name__}: {e}", mime
        ) from e


def _form_items(value: Any) -> list[tuple[str, str]]:
    value = _dump_record(value, MIME_POST_FORM)
    if not isinstance(value, Mapping):
        raise EncodingError(
            f"form body must be a mapping, got {type(value).__name__}", MIME_POST_FORM
        )

    items = []
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            raise EncodingError(
                f"form field {key!r} must map a string to a string, "
                f"got {type(item).__name__}",
                MIME_POST_FORM,
            )
        items.append((key, item))
    return sorted(items)


def encode_xml(value: Any) -> bytes:
    """Serialize a single-root mapping, pydantic model or dataclass as XML.

    ``{"item": {"name": "a", "tag": ["x", "y"]}}`` becomes
    ``<item><name>a</name><tag>x</tag><tag>y</tag></item>``. Models and
    dataclass instances are rooted at their class name.
    """
    if _is_record(value):
        value = {type(value).__name__: _dump_record(value, MIME_XML)}
    if not isinstance(value, Mapping) or len(value) != 1:
        raise EncodingError(
            "XML body must be a mapping with exactly one root element", MIME_XML
        )

    ((tag, content),) = value.items()
    if isinstance(content, (list, tuple)):
        raise EncodingError("XML body must have exactly one root element", MIME_XML)
    return ET.tostring(_xml_element(tag, content), encoding="unicode").encode("utf-8")


def decode_xml(data: Union[bytes, str]) -> dict[str, Any]:
    """Inverse of :func:`encode_xml`. Leaves come back as strings."""
    root = DefusedET.fromstring(data)
    return {root.tag: _xml_value(root)}


def _xml_element(tag: Any, content: Any) -> ET.Element:
    if not isinstance(tag, str) or not _XML_NAME.match(tag):
        raise EncodingError(f"invalid XML element name: {tag!r}", MIME_XML)

    element = ET.Element(tag)
    content = _dump_record(content, MIME_XML)
    if isinstance(content, Mapping):
        for child_tag, child in content.items():
            if isinstance(child, (list, tuple)):
                for item in child:
                    element.append(_xml_element(child_tag, item))
            else:
                element.append(_xml_element(child_tag, child))
    elif isinstance(content, (list, tuple)):
        raise EncodingError(f"list under <{tag}> has no element name", MIME_XML)
    else:
        element.text = _xml_text(content)
    return element


def _xml_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, Decimal)):
        return str(value)
    raise EncodingError(f"cannot encode {type(value).__name__} as XML", MIME_XML)


def _xml_value(element: Any) -> Any:
    children = list(element)
    if not children:
        return element.text or ""

    value: dict[str, Any] = {}
    for child in children:
        item = _xml_value(child)
        if child.tag not in value:
            value[child.tag] = item
        elif isinstance(value[child.tag], list):
            value[child.tag].append(item)
        else:
            value[child.tag] = [value[child.tag], item]
    return value


_ENCODERS: dict[BodyEncoding, Callable[[Any], bytes]] = {
    BodyEncoding.JSON: encode_json,
    BodyEncoding.XML: encode_xml,
    BodyEncoding.FORM_URLENCODED: encode_form,
}

_DECODERS: dict[BodyEncoding, Callable[[Union[bytes, str]], Any]] = {
    BodyEncoding.JSON: decode_json,
    BodyEncoding.XML: decode_xml,
    BodyEncoding.FORM_URLENCODED: decode_form,
}


def encode_body(value: Any, encoding: BodyEncoding) -> Optional[bytes]:
    """Serialize ``value`` with ``encoding``.

    Returns None for encodings that are not driven by a value (multipart
    bodies are assembled from files and fields, raw bodies are set as-is).

    Raises:
        EncodingError: if the value cannot be represented.
    """
    encoder = _ENCODERS.get(encoding)
    if encoder is None:
        return None
    return encoder(value)


def decode_body(data: Union[bytes, str], encoding: BodyEncoding) -> Any:
    decoder = _DECODERS.get(encoding)
    if decoder is None:
        raise ValueError(f"no decoder for {encoding.value} bodies")
    return decoder(data)
