"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m httpc_cli send URL [-X METHOD] [-H "K: V"]... [-d DATA] [-i] [-o PATH]
    python -m httpc_cli url RAW...
    python -m httpc_cli config --show
    python -m httpc_cli config --init [--path httpc.yaml]

Environment Variables:
    HTTPC_TIMEOUT       Request timeout in seconds (default: 30)
    HTTPC_USER_AGENT    User-Agent header
    HTTPC_MAX_WORKERS   Concurrent in-flight requests
    HTTPC_PROXY         Proxy URL
    HTTPC_LOG_LEVEL     Log level (default: INFO)
    HTTPC_LOG_FILE      Log file path
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from httpc.config import HttpcConfig, get_default_config_template
from httpc.errors import ConfigException
from httpc_cli.commands import send, url
from httpc_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="httpc",
        description="httpc - send HTTP requests and normalize URLs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./httpc.yaml or ~/.config/httpc/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- send command ---
    send_parser = subparsers.add_parser(
        "send",
        help="Send a request and print the response body",
        description="Send one HTTP request. The URL is normalized first (scheme defaults to http).",
    )
    send_parser.add_argument("url", type=str, help="Target URL")
    send_parser.add_argument(
        "--method", "-X",
        type=str,
        default=None,
        help="HTTP method (default: GET, or POST when a body is given)",
    )
    send_parser.add_argument(
        "--header", "-H",
        action="append",
        default=None,
        help="Request header 'Key: Value' (repeatable)",
    )
    body_group = send_parser.add_mutually_exclusive_group()
    body_group.add_argument("--data", "-d", type=str, default=None, help="Raw request body")
    body_group.add_argument("--data-file", type=str, default=None, help="Stream the request body from a file")
    body_group.add_argument("--json-body", type=str, default=None, help="JSON value sent as the body")
    body_group.add_argument("--xml-body", type=str, default=None, help="JSON object sent as an XML body")
    send_parser.add_argument(
        "--xml-root",
        type=str,
        default="request",
        help="Root element for --xml-body (default: request)",
    )
    send_parser.add_argument(
        "--request-id",
        type=str,
        default=None,
        help="Request id sent in the X-Req-Id header (default: generated)",
    )
    send_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds (overrides config)",
    )
    send_parser.add_argument(
        "--decode",
        type=str,
        choices=["raw", "json"],
        default="raw",
        help="Print the body as received (raw) or pretty-printed JSON",
    )
    send_parser.add_argument(
        "--include", "-i",
        action="store_true",
        default=False,
        help="Print response headers to stderr",
    )
    send_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the body to a file instead of stdout",
    )
    send_parser.add_argument(
        "--json-errors",
        action="store_true",
        default=False,
        help="Report errors as JSON on stderr",
    )
    send_parser.set_defaults(func=send.send_cmd)

    # --- url command ---
    url_parser = subparsers.add_parser(
        "url",
        help="Normalize raw URLs",
        description="Clean the path and default the scheme of each URL.",
    )
    url_parser.add_argument("urls", nargs="+", help="Raw URLs")
    url_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    url_parser.set_defaults(func=url.url_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="httpc.yaml",
        help="Path for config file (default: httpc.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (HTTPC_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        # Get configuration from args (set by main)
        config: HttpcConfig = getattr(args, "cli_config", None)
        if config is None:
            config = load_config(args.config)
        print(json.dumps(config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: httpc config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        config = load_config(args.config)
    except (ConfigException, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(args.log_level or config.logging.level, config.logging.log_file)

    args.cli_config = config
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
