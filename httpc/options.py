"""
Send Options

SendConfig accumulates what a single send() call needs. Options are
callables applied to it in order; each returns None on success or the
exception describing why it failed, which stops option application.

Body options switch the method to POST; a later with_method() wins.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Mapping, Optional, Union

import requests

from httpc import codec
from httpc.errors import HttpcException
from httpc.handlers import (
    CallbackHeaderHandler,
    CallbackResponseHandler,
    CaptureHeaders,
    CaptureResponse,
    DecodeJson,
    DecodeXml,
    HeaderHandler,
    IgnoreHeaders,
    ReadBytes,
    ResponseHandler,
    Slot,
    StatusCheck,
)
from httpc.http.header import Header


METHOD_GET = "GET"
METHOD_POST = "POST"


@dataclass
class SendConfig:
    """Per-call configuration built from the default and the options."""
    method: str = METHOD_GET
    body: Optional[BinaryIO] = None
    header: Header = field(default_factory=Header)
    response_handler: ResponseHandler = field(default_factory=StatusCheck)
    header_handler: HeaderHandler = field(default_factory=IgnoreHeaders)


Option = Callable[[SendConfig], Optional[Exception]]


def apply_options(config: SendConfig, options: tuple[Option, ...] | list[Option]) -> Optional[Exception]:
    """Apply options in order, stopping at and returning the first failure."""
    for option in options:
        err = option(config)
        if err is not None:
            return err
    return None


# =============================================================================
# Request Options
# =============================================================================

def with_header(header: Union[Header, Mapping[str, Any]]) -> Option:
    """
    Replace the whole outbound header mapping.

    The mapping is copied when the option is applied, so a Header reused
    across calls never carries a request id generated for an earlier call.
    """
    def apply(config: SendConfig) -> Optional[Exception]:
        config.header = header.copy() if isinstance(header, Header) else Header(header)
        return None
    return apply


def with_method(method: str) -> Option:
    def apply(config: SendConfig) -> Optional[Exception]:
        config.method = method
        return None
    return apply


def with_body(body: BinaryIO) -> Option:
    """Send body (any readable binary stream) as the request payload."""
    def apply(config: SendConfig) -> Optional[Exception]:
        config.body = body
        config.method = METHOD_POST
        return None
    return apply


def with_bytes_body(data: bytes) -> Option:
    def apply(config: SendConfig) -> Optional[Exception]:
        config.body = io.BytesIO(data)
        config.method = METHOD_POST
        return None
    return apply


def with_struct_body_to_json(obj: Any) -> Option:
    """Send obj serialized as JSON; serialization failure is reported."""
    def apply(config: SendConfig) -> Optional[Exception]:
        try:
            payload = codec.encode_json(obj)
        except HttpcException as e:
            return e
        config.body = io.BytesIO(payload)
        config.method = METHOD_POST
        return None
    return apply


def with_struct_body_to_xml(obj: Any, root: Optional[str] = None) -> Option:
    """
    Send obj serialized as XML; serialization failure is reported.

    root names the document element; pydantic models and dataclasses
    default to their class name.
    """
    def apply(config: SendConfig) -> Optional[Exception]:
        try:
            payload = codec.encode_xml(obj, root=root)
        except HttpcException as e:
            return e
        config.body = io.BytesIO(payload)
        config.method = METHOD_POST
        return None
    return apply


# =============================================================================
# Response Options
# =============================================================================

def with_response(slot: Slot[requests.Response]) -> Option:
    """Capture the unread response; the caller must close it."""
    def apply(config: SendConfig) -> Optional[Exception]:
        config.response_handler = CaptureResponse(slot)
        return None
    return apply


def with_bytes_response(slot: Slot[bytes]) -> Option:
    def apply(config: SendConfig) -> Optional[Exception]:
        config.response_handler = ReadBytes(slot)
        return None
    return apply


def with_struct_response_from_json(slot: Slot[Any], type_: Any = None) -> Option:
    """Decode a JSON response into slot, validated into type_ when given."""
    def apply(config: SendConfig) -> Optional[Exception]:
        config.response_handler = DecodeJson(slot, type_)
        return None
    return apply


def with_struct_response_from_xml(slot: Slot[Any], type_: Any = None) -> Option:
    """Decode an XML response into slot, validated into type_ when given."""
    def apply(config: SendConfig) -> Optional[Exception]:
        config.response_handler = DecodeXml(slot, type_)
        return None
    return apply


def with_response_handler(func: Callable[[requests.Response], Any]) -> Option:
    """
    Handle the response with func.

    func owns the response (status check, reading, closing); any exception
    it raises is returned from send() unchanged.
    """
    def apply(config: SendConfig) -> Optional[Exception]:
        config.response_handler = CallbackResponseHandler(func)
        return None
    return apply


def with_response_header(slot: Slot[Header]) -> Option:
    def apply(config: SendConfig) -> Optional[Exception]:
        config.header_handler = CaptureHeaders(slot)
        return None
    return apply


def with_response_header_handler(func: Callable[[Header], Any]) -> Option:
    def apply(config: SendConfig) -> Optional[Exception]:
        config.header_handler = CallbackHeaderHandler(func)
        return None
    return apply
