"""
CLI Send Command

Send one request and print the response body.

Usage:
    httpc send example.com/api/items
    httpc send https://api.example.com/items --json-body '{"name": "widget"}' -i
    httpc send api.local/upload --data-file payload.bin -H "Content-Type: application/octet-stream"
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Optional

from httpc import (
    Context,
    Header,
    HttpClient,
    HttpcException,
    RawURL,
    Slot,
    StatusException,
    send,
    with_body,
    with_bytes_body,
    with_bytes_response,
    with_header,
    with_method,
    with_response_header,
    with_struct_body_to_json,
    with_struct_body_to_xml,
    with_struct_response_from_json,
)
from httpc import reqid
from httpc.config import HttpcConfig
from httpc_cli.config import load_config


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_STATUS_ERROR = 2


def parse_header_args(values: Optional[list[str]]) -> Header:
    """Parse repeated "Key: Value" arguments."""
    header = Header()
    for raw in values or []:
        key, sep, value = raw.partition(":")
        if not sep or not key.strip():
            raise ValueError(f"invalid header {raw!r}, expected 'Key: Value'")
        header.add(key.strip(), value.strip())
    return header


def build_options(args: Namespace, body: Slot, response_header: Slot, stack: ExitStack) -> list:
    """Translate parsed arguments into send options."""
    header = parse_header_args(args.header)
    if args.request_id:
        header.set(reqid.HEADER_KEY, args.request_id)

    options = [with_header(header)]

    if args.data is not None:
        options.append(with_bytes_body(args.data.encode("utf-8")))
    elif args.data_file is not None:
        options.append(with_body(stack.enter_context(open(args.data_file, "rb"))))
    elif args.json_body is not None:
        options.append(with_struct_body_to_json(json.loads(args.json_body)))
    elif args.xml_body is not None:
        options.append(with_struct_body_to_xml(json.loads(args.xml_body), root=args.xml_root))

    if args.method:
        options.append(with_method(args.method.upper()))

    if args.decode == "json":
        options.append(with_struct_response_from_json(body))
    else:
        options.append(with_bytes_response(body))

    options.append(with_response_header(response_header))
    return options


def _write_body(value: Any, out: Optional[str]) -> None:
    if isinstance(value, (bytes, bytearray)):
        data = bytes(value)
    else:
        data = (json.dumps(value, indent=2) + "\n").encode("utf-8")

    if out:
        Path(out).write_bytes(data)
        logger.info(f"Wrote {len(data)} bytes to {out}")
    else:
        sys.stdout.buffer.write(data)
        sys.stdout.flush()


def _print_headers(header: Header) -> None:
    for key, values in header.items():
        for value in values:
            print(f"{key}: {value}", file=sys.stderr)


def send_cmd(args: Namespace) -> int:
    """Execute the send command."""
    # Get configuration from args (set by main)
    config: HttpcConfig = getattr(args, "cli_config", None)
    if config is None:
        config = load_config(args.config)
    if args.timeout is not None:
        config.http.timeout = args.timeout

    body: Slot[Any] = Slot()
    response_header: Slot[Header] = Slot()
    url = str(RawURL(args.url))

    with ExitStack() as stack:
        try:
            options = build_options(args, body, response_header, stack)
        except (ValueError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        client = stack.enter_context(HttpClient.from_config(config))
        ctx = stack.enter_context(
            Context.background().with_http(client).with_timeout(config.http.timeout)
        )
        try:
            send(ctx, url, *options)
        except HttpcException as e:
            if args.json_errors:
                print(e.to_error_model().model_dump_json(indent=2), file=sys.stderr)
            else:
                print(f"Error: {e.message}", file=sys.stderr)
            if isinstance(e, StatusException):
                return EXIT_STATUS_ERROR
            return EXIT_RUNTIME_ERROR

    if args.include and response_header.value is not None:
        _print_headers(response_header.value)

    _write_body(body.value, args.out)
    return EXIT_SUCCESS
