"""
Payload Codecs

JSON and XML encoding for request bodies and decoding for response bodies.

JSON goes through pydantic-core, so pydantic models, dataclasses, dicts and
lists all serialize. XML is built with lxml: mapping keys and model fields
become child elements, sequences become repeated elements, None is omitted.
Decoded XML is a dict of element text; when a target type is given, values
are reshaped (single items wrapped for list fields) and validated by pydantic.
"""

from __future__ import annotations

import dataclasses
import json
import types
from collections.abc import Mapping
from typing import Any, Optional, Union, get_args, get_origin

from lxml import etree
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from httpc.errors import DecodeException, SerializationException


_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)


# =============================================================================
# JSON
# =============================================================================

def encode_json(obj: Any) -> bytes:
    """Serialize obj to compact JSON bytes."""
    try:
        return to_json(obj)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise SerializationException(str(e), format="json") from e


def decode_json(data: bytes, type_: Any = None) -> Any:
    """
    Decode JSON bytes.

    Without type_ the plain Python value is returned; otherwise the data is
    validated into type_ (a pydantic model, dataclass or any annotation).
    """
    try:
        if type_ is None:
            return json.loads(data)
        return TypeAdapter(type_).validate_json(data)
    except (ValidationError, ValueError) as e:
        raise DecodeException(str(e), format="json") from e


# =============================================================================
# XML
# =============================================================================

def _as_plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _fill(element: etree._Element, value: Any) -> None:
    value = _as_plain(value)
    if isinstance(value, Mapping):
        for key, child in value.items():
            if child is None:
                continue
            if isinstance(child, (list, tuple)):
                for item in child:
                    element.append(_build(str(key), item))
            else:
                element.append(_build(str(key), child))
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    elif value is not None:
        element.text = str(value)


def _build(tag: str, value: Any) -> etree._Element:
    element = etree.Element(tag)
    _fill(element, value)
    return element


def _default_root(obj: Any) -> Optional[str]:
    if isinstance(obj, BaseModel) or (dataclasses.is_dataclass(obj) and not isinstance(obj, type)):
        return type(obj).__name__
    return None


def encode_xml(obj: Any, root: Optional[str] = None) -> bytes:
    """
    Serialize obj to XML bytes.

    The root element is named by root, or by the class name for pydantic
    models and dataclasses. An lxml element is serialized as-is.
    """
    if isinstance(obj, etree._Element):
        return etree.tostring(obj)
    if isinstance(obj, (list, tuple, set)):
        raise SerializationException("xml: top-level sequences have no single root element", format="xml")

    tag = root or _default_root(obj)
    if not tag:
        raise SerializationException(
            f"xml: root element name required for {type(obj).__name__}", format="xml"
        )
    try:
        return etree.tostring(_build(tag, obj))
    except (ValueError, TypeError) as e:
        raise SerializationException(f"xml: {e}", format="xml") from e


def element_to_dict(element: etree._Element) -> Any:
    """
    Convert an element to plain data.

    A leaf without attributes becomes its text. Otherwise the result is a
    dict of attributes (keys prefixed with "@") and children; repeated child
    tags collect into a list.
    """
    children = [child for child in element if isinstance(child.tag, str)]
    if not children and not element.attrib:
        return element.text or ""

    result: dict[str, Any] = {f"@{name}": value for name, value in element.attrib.items()}
    for child in children:
        tag = etree.QName(child).localname
        value = element_to_dict(child)
        if tag not in result:
            result[tag] = value
        elif isinstance(result[tag], list):
            result[tag].append(value)
        else:
            result[tag] = [result[tag], value]
    if not children and element.text and element.text.strip():
        result["#text"] = element.text
    return result


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _shape(annotation: Any, value: Any) -> Any:
    annotation = _unwrap_optional(annotation)
    origin = get_origin(annotation)
    if origin in _SEQUENCE_ORIGINS or annotation in _SEQUENCE_ORIGINS:
        items = value if isinstance(value, list) else [value]
        args = get_args(annotation)
        inner = args[0] if args else Any
        return [_shape(inner, item) for item in items]
    if isinstance(annotation, type) and issubclass(annotation, BaseModel) and isinstance(value, dict):
        shaped = dict(value)
        for name, info in annotation.model_fields.items():
            key = info.alias or name
            if key in shaped:
                shaped[key] = _shape(info.annotation, shaped[key])
        return shaped
    return value


def decode_xml(data: bytes, type_: Any = None) -> Any:
    """
    Decode XML bytes.

    Without type_ the root element is returned as plain data (see
    element_to_dict); otherwise it is validated into type_.
    """
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise DecodeException(f"xml: {e}", format="xml") from e

    value = element_to_dict(root)
    if type_ is None:
        return value
    try:
        return TypeAdapter(type_).validate_python(_shape(type_, value))
    except ValidationError as e:
        raise DecodeException(str(e), format="xml") from e
