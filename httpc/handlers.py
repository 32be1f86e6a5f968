"""
Response Handlers

Strategies applied to a received response: a ResponseHandler sees the
response first, then a HeaderHandler sees its headers. Handlers report
failure by raising.

Defaults:
- StatusCheck: fail unless the status is 200
- IgnoreHeaders: no-op
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import requests

from httpc import codec
from httpc.errors import StatusException, TransportException
from httpc.http.header import Header


T = TypeVar("T")

STATUS_OK = 200


@dataclass
class Slot(Generic[T]):
    """
    Caller-owned holder filled in by a handler.

    Usage:
        body: Slot[bytes] = Slot()
        send(ctx, url, with_bytes_response(body))
        print(body.value)
    """
    value: Optional[T] = None

    @property
    def is_set(self) -> bool:
        return self.value is not None


def status_error(response: requests.Response) -> StatusException:
    return StatusException(
        response.status_code,
        reason=response.reason,
        url=getattr(response, "url", None) or None,
    )


def read_response(response: requests.Response) -> bytes:
    """
    Read the full body of a 200 response and close it.

    A non-200 response fails with its status line; its body is closed
    without being read.
    """
    try:
        if response.status_code != STATUS_OK:
            raise status_error(response)
        return response.content
    except requests.RequestException as e:
        raise TransportException(f"reading response body: {e}") from e
    finally:
        response.close()


# =============================================================================
# Response Handlers
# =============================================================================

class ResponseHandler(ABC):
    """Inspects, consumes or captures a received response."""

    @abstractmethod
    def handle(self, response: requests.Response) -> None:
        ...


class StatusCheck(ResponseHandler):
    """Default handler: fail unless the status is 200. Nothing is read."""

    def handle(self, response: requests.Response) -> None:
        try:
            if response.status_code != STATUS_OK:
                raise status_error(response)
        finally:
            response.close()


class CaptureResponse(ResponseHandler):
    """Hand the unread response to the caller, who must close it."""

    def __init__(self, slot: Slot[requests.Response]) -> None:
        self.slot = slot

    def handle(self, response: requests.Response) -> None:
        self.slot.value = response


class ReadBytes(ResponseHandler):
    """Read the full body of a 200 response into a slot."""

    def __init__(self, slot: Slot[bytes]) -> None:
        self.slot = slot

    def handle(self, response: requests.Response) -> None:
        self.slot.value = read_response(response)


class DecodeJson(ResponseHandler):
    """Read a 200 response and decode its JSON body into a slot."""

    def __init__(self, slot: Slot[Any], type_: Any = None) -> None:
        self.slot = slot
        self.type_ = type_

    def handle(self, response: requests.Response) -> None:
        body = read_response(response)
        self.slot.value = codec.decode_json(body, self.type_)


class DecodeXml(ResponseHandler):
    """Read a 200 response and decode its XML body into a slot."""

    def __init__(self, slot: Slot[Any], type_: Any = None) -> None:
        self.slot = slot
        self.type_ = type_

    def handle(self, response: requests.Response) -> None:
        body = read_response(response)
        self.slot.value = codec.decode_xml(body, self.type_)


class CallbackResponseHandler(ResponseHandler):
    """Delegate to a caller function; whatever it raises propagates."""

    def __init__(self, func: Callable[[requests.Response], Any]) -> None:
        self.func = func

    def handle(self, response: requests.Response) -> None:
        self.func(response)


# =============================================================================
# Header Handlers
# =============================================================================

class HeaderHandler(ABC):
    """Inspects or captures response headers."""

    @abstractmethod
    def handle(self, header: Header) -> None:
        ...


class IgnoreHeaders(HeaderHandler):
    """Default handler: headers are not inspected."""

    def handle(self, header: Header) -> None:
        pass


class CaptureHeaders(HeaderHandler):
    def __init__(self, slot: Slot[Header]) -> None:
        self.slot = slot

    def handle(self, header: Header) -> None:
        self.slot.value = header


class CallbackHeaderHandler(HeaderHandler):
    """Delegate to a caller function; whatever it raises propagates."""

    def __init__(self, func: Callable[[Header], Any]) -> None:
        self.func = func

    def handle(self, header: Header) -> None:
        self.func(header)
