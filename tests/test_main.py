"""
Entry Point Tests
=================

End-to-end tests for run_bridge and the command line.
"""

import json
import os
import socket
import subprocess
import sys

import pytest

from mirror_bridge import __version__
from mirror_bridge.config import BridgeConfig
from mirror_bridge.errors import BridgeConnectionError, TransportError
from mirror_bridge.main import main, run_bridge
from mirror_bridge.stream import encode_frame, open_connection
from mirror_bridge.transport import NoopPreparer


class FailingPreparer:
    """Preparer that always fails with a fixed message."""

    def __init__(self, message: str) -> None:
        self.message = message

    def prepare_transport(self, port, device=None):
        raise TransportError(self.message)


class TestRunBridge:
    """Tests for bootstrap -> connect -> decode."""

    def test_bootstrap_failure_reported_before_connect(self, sink, scenario_bytes):
        seen_at_connect = []

        def fake_connect(host, port):
            seen_at_connect.append(sink.getvalue())
            server, client = socket.socketpair()
            server.sendall(scenario_bytes)
            server.close()
            return client

        frames = run_bridge(
            BridgeConfig(),
            sink,
            preparer=FailingPreparer("no device found"),
            connect=fake_connect,
        )

        events = [json.loads(line) for line in sink.lines()]
        assert len(seen_at_connect) == 1
        assert "no device found" in seen_at_connect[0]
        assert events[0] == {"type": "error", "error": "no device found"}
        assert events[1]["data"] == "QUJD"
        assert events[2]["type"] == "error"
        assert frames == 1

    def test_streams_from_companion(self, sink, companion_server, encoded_three_frames):
        host, port = companion_server(encoded_three_frames)
        config = BridgeConfig(host=host, port=port, platform="ios-sim")

        frames = run_bridge(config, sink, preparer=NoopPreparer())

        types = [json.loads(line)["type"] for line in sink.lines()]
        assert frames == 3
        assert types == ["frame", "frame", "frame", "error"]

    def test_connection_failure_raises(self, sink, unused_port):
        config = BridgeConfig(port=unused_port)
        with pytest.raises(BridgeConnectionError, match="Failed to connect"):
            run_bridge(config, sink, preparer=NoopPreparer())
        assert sink.getvalue() == ""


class TestOpenConnection:
    """Tests for the TCP connect helper."""

    def test_connects_without_timeout(self, companion_server):
        host, port = companion_server(b"")
        with open_connection(host, port) as sock:
            assert sock.gettimeout() is None

    def test_refused(self, unused_port):
        with pytest.raises(BridgeConnectionError, match=f"127.0.0.1:{unused_port}"):
            open_connection("127.0.0.1", unused_port)


class TestMain:
    """Tests for the command-line entry point."""

    def test_streams_to_stdout(self, isolated_env, companion_server, capsys):
        host, port = companion_server(encode_frame(2, b"jpeg-bytes"))

        status = main(["--platform", "ios", "--host", host, "--port", str(port)])

        lines = capsys.readouterr().out.splitlines()
        assert status == 0
        assert json.loads(lines[0])["mime"] == "image/jpeg"
        assert json.loads(lines[-1])["type"] == "error"
        assert len(lines) == 2

    def test_connection_failure_exit_status(self, isolated_env, unused_port, capsys):
        status = main(["--platform", "ios", "--port", str(unused_port)])

        captured = capsys.readouterr()
        assert status == 1
        assert captured.out == ""
        assert "Failed to connect to mirror companion" in captured.err

    def test_invalid_port(self, isolated_env, capsys):
        status = main(["--port", "0"])
        assert status == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_malformed_config_exit_status(self, isolated_env, capsys):
        (isolated_env / "mirror-bridge.yaml").write_text("- not\n- a mapping\n")

        status = main(["--platform", "ios"])

        captured = capsys.readouterr()
        assert status == 1
        assert captured.out == ""
        assert "invalid configuration" in captured.err

    def test_closed_stdout_exit_status(self, isolated_env, companion_server, monkeypatch):
        class ClosedPipe:
            def write(self, data):
                raise BrokenPipeError(32, "Broken pipe")

            def flush(self):
                pass

        host, port = companion_server(encode_frame(1, b"png-bytes"))
        monkeypatch.setattr(sys, "stdout", ClosedPipe())

        status = main(["--platform", "ios", "--host", host, "--port", str(port)])

        assert status == 1


class TestImport:
    """Tests that the package imports in a fresh interpreter."""

    @pytest.mark.parametrize(
        "module",
        ["mirror_bridge.main", "mirror_bridge.stream", "mirror_bridge.models.events"],
    )
    def test_import_in_clean_interpreter(self, module):
        env = dict(os.environ, PYTHONPATH=os.pathsep.join(p for p in sys.path if p))
        result = subprocess.run(
            [sys.executable, "-c", f"import {module}"],
            capture_output=True,
            env=env,
        )
        assert result.returncode == 0, result.stderr.decode()
