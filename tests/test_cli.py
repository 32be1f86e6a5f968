"""
Tests for the httpc command-line interface.

Runs main() in-process; the send command talks to the local echo server.
"""

import json
from unittest.mock import patch

import pytest

from httpc_cli.config import load_config
from httpc_cli.main import create_parser, main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config discovery away from the developer's files."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class TestParser:
    """Tests for argument parsing."""

    def test_send_defaults(self):
        args = create_parser().parse_args(["send", "example.com"])

        assert args.command == "send"
        assert args.method is None
        assert args.decode == "raw"
        assert args.xml_root == "request"

    def test_body_options_exclusive(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["send", "example.com", "-d", "a", "--json-body", "{}"])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out


class TestUrlCommand:
    """Tests for `httpc url`."""

    def test_plain(self, capsys):
        assert main(["url", "example.com//a/../b", "https://example.com/a/"]) == 0

        assert capsys.readouterr().out.splitlines() == [
            "http://example.com/b",
            "https://example.com/a",
        ]

    def test_json(self, capsys):
        assert main(["url", "--json", "host/x/"]) == 0

        assert json.loads(capsys.readouterr().out) == [{"raw": "host/x/", "url": "http://host/x"}]


class TestConfigCommand:
    """Tests for `httpc config`."""

    def test_init_creates_template(self, isolated_cwd, capsys):
        path = isolated_cwd / "custom.yaml"

        assert main(["config", "--init", "--path", str(path)]) == 0
        assert "http:" in path.read_text()

    def test_init_refuses_to_overwrite(self, isolated_cwd):
        path = isolated_cwd / "custom.yaml"
        path.write_text("http: {}\n")

        assert main(["config", "--init", "--path", str(path)]) == 1

    def test_show_with_env(self, monkeypatch, capsys):
        monkeypatch.setenv("HTTPC_TIMEOUT", "9")

        assert main(["config", "--show"]) == 0

        assert json.loads(capsys.readouterr().out)["http"]["timeout"] == 9.0

    def test_show_discovers_local_file(self, isolated_cwd, capsys):
        (isolated_cwd / "httpc.yaml").write_text("http:\n  user_agent: local/1\n")

        assert main(["config", "--show"]) == 0

        assert json.loads(capsys.readouterr().out)["http"]["user_agent"] == "local/1"

    def test_missing_explicit_config(self, isolated_cwd, capsys):
        assert main(["--config", str(isolated_cwd / "nope.yaml"), "config", "--show"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_env(self, monkeypatch, capsys):
        monkeypatch.setenv("HTTPC_MAX_WORKERS", "many")

        assert main(["url", "x"]) == 1


@pytest.mark.integration
class TestSendCommand:
    """Tests for `httpc send` against the echo server."""

    def test_get(self, echo_server, capsys):
        assert main(["send", echo_server.url("/echo")]) == 0

        assert capsys.readouterr().out == ""

    def test_data_echoed(self, echo_server, capsys):
        assert main(["send", echo_server.url("/echo"), "-d", "hello"]) == 0

        assert capsys.readouterr().out == "hello"

    def test_json_body_decoded(self, echo_server, capsys):
        code = main([
            "send", echo_server.url("/echo"),
            "--json-body", '{"name": "widget", "count": 2}',
            "--decode", "json",
        ])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {"name": "widget", "count": 2}

    def test_headers_and_request_id(self, echo_server, capsys):
        code = main([
            "send", echo_server.url("/echo"),
            "-X", "put",
            "-H", "X-Trace: t1",
            "--request-id", "cli-42",
            "--include",
        ])

        err = capsys.readouterr().err
        assert code == 0
        assert "X-Seen-Method: PUT" in err
        assert "X-Seen-Req-Id: cli-42" in err

    def test_data_file_and_out(self, echo_server, isolated_cwd):
        source = isolated_cwd / "payload.bin"
        source.write_bytes(b"\x01\x02file")
        target = isolated_cwd / "reply.bin"

        code = main(["send", echo_server.url("/echo"), "--data-file", str(source), "-o", str(target)])

        assert code == 0
        assert target.read_bytes() == b"\x01\x02file"

    def test_status_error_exit_code(self, echo_server, capsys):
        assert main(["send", echo_server.url("/status/404")]) == 2
        assert "404 Not Found" in capsys.readouterr().err

    def test_status_error_as_json(self, echo_server, capsys):
        assert main(["send", echo_server.url("/status/503"), "--json-errors"]) == 2

        err = capsys.readouterr().err
        error = json.loads(err[err.index("{\n"):])
        assert error["code"] == "HTTP_STATUS_ERROR"
        assert error["message"] == "503 Service Unavailable"
        assert error["details"]["status_code"] == 503
        assert error["retryable"] is True

    def test_config_loaded_once(self, echo_server):
        with patch("httpc_cli.main.load_config", wraps=load_config) as main_load, \
                patch("httpc_cli.commands.send.load_config") as send_load:
            assert main(["send", echo_server.url("/echo")]) == 0

        main_load.assert_called_once()
        send_load.assert_not_called()

    def test_invalid_header(self, echo_server, capsys):
        assert main(["send", echo_server.url("/echo"), "-H", "no-colon"]) == 1
        assert "invalid header" in capsys.readouterr().err

    def test_transport_error_as_json(self, echo_server, capsys):
        url = echo_server.url("/echo")
        echo_server.stop()

        assert main(["send", url, "--json-errors"]) == 1

        err = capsys.readouterr().err
        error = json.loads(err[err.index("{\n"):])
        assert error["code"] == "TRANSPORT_ERROR"
        assert error["retryable"] is True

    def test_timeout(self, echo_server, capsys):
        code = main(["send", echo_server.url("/slow?seconds=3"), "--timeout", "0.2"])

        assert code == 1
        assert "deadline exceeded" in capsys.readouterr().err
