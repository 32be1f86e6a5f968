"""
httpc

Option-driven HTTP sending on top of requests, plus URL normalization.

Usage:
    from httpc import Context, Slot, send, with_struct_body_to_json, with_struct_response_from_json

    reply: Slot[dict] = Slot()
    send(
        Context.background().with_timeout(5.0),
        "http://localhost:8080/echo",
        with_struct_body_to_json({"name": "widget"}),
        with_struct_response_from_json(reply),
    )
"""

from httpc.context import Context
from httpc.errors import (
    CancelledException,
    DeadlineExceededException,
    DecodeException,
    ErrorCodes,
    HttpcError,
    HttpcException,
    RequestConstructionException,
    SerializationException,
    StatusException,
    TransportException,
)
from httpc.handlers import Slot
from httpc.http import Header, HttpClient, init_default_client, set_default_client
from httpc.options import (
    Option,
    SendConfig,
    with_body,
    with_bytes_body,
    with_bytes_response,
    with_header,
    with_method,
    with_response,
    with_response_handler,
    with_response_header,
    with_response_header_handler,
    with_struct_body_to_json,
    with_struct_body_to_xml,
    with_struct_response_from_json,
    with_struct_response_from_xml,
)
from httpc.sender import send
from httpc.url import RawURL, normalize_url

__version__ = "0.1.0"

__all__ = [
    "send",
    "Context",
    "Slot",
    "Header",
    "HttpClient",
    "init_default_client",
    "set_default_client",
    "Option",
    "SendConfig",
    "with_body",
    "with_bytes_body",
    "with_bytes_response",
    "with_header",
    "with_method",
    "with_response",
    "with_response_handler",
    "with_response_header",
    "with_response_header_handler",
    "with_struct_body_to_json",
    "with_struct_body_to_xml",
    "with_struct_response_from_json",
    "with_struct_response_from_xml",
    "RawURL",
    "normalize_url",
    "ErrorCodes",
    "HttpcError",
    "HttpcException",
    "SerializationException",
    "RequestConstructionException",
    "TransportException",
    "CancelledException",
    "DeadlineExceededException",
    "StatusException",
    "DecodeException",
]
