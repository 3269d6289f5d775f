"""
Test Configuration
==================

Pytest fixtures and test configuration for mirror-bridge.
"""

import io
import socket
import threading

import pytest

from mirror_bridge.stream.protocol import encode_frame


class FlushCountingSink(io.StringIO):
    """StringIO that records how often it was flushed."""

    def __init__(self) -> None:
        super().__init__()
        self.flush_count = 0

    def flush(self) -> None:
        self.flush_count += 1
        super().flush()

    def lines(self) -> list:
        return self.getvalue().splitlines()


class ChunkedReader:
    """Binary reader that returns at most `chunk_size` bytes per read."""

    def __init__(self, data: bytes, chunk_size: int = 1) -> None:
        self._buffer = io.BytesIO(data)
        self.chunk_size = chunk_size

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(min(size, self.chunk_size))


@pytest.fixture
def scenario_bytes():
    """tag=1, length=3, payload "ABC"."""
    return bytes.fromhex("01 00 00 00 03 41 42 43")


@pytest.fixture
def three_frames():
    """Three complete frames with distinct tags and payloads."""
    return [
        (1, b"\x89PNG\r\n\x1a\n"),
        (2, b"\xff\xd8\xff\xe0jpeg"),
        (3, b"RIFF\x00\x00\x00\x00WEBP"),
    ]


@pytest.fixture
def encoded_three_frames(three_frames):
    """Wire bytes for the three_frames fixture."""
    return b"".join(encode_frame(tag, payload) for tag, payload in three_frames)


@pytest.fixture
def sink():
    """Output sink that counts flushes."""
    return FlushCountingSink()


@pytest.fixture
def companion_server():
    """
    Start a one-shot loopback companion.

    Call the fixture with the bytes to send; it returns (host, port).
    The server accepts one client, sends the bytes and closes.
    """
    servers = []
    threads = []

    def start(data: bytes):
        server = socket.create_server(("127.0.0.1", 0))
        servers.append(server)

        def serve():
            conn, _ = server.accept()
            with conn:
                conn.sendall(data)

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        threads.append(thread)
        return server.getsockname()

    yield start

    for thread in threads:
        thread.join(timeout=5)
    for server in servers:
        server.close()


@pytest.fixture
def unused_port():
    """A loopback port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run without config files or MIRROR_BRIDGE_* variables."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        "MIRROR_BRIDGE_DEVICE",
        "MIRROR_BRIDGE_PLATFORM",
        "MIRROR_BRIDGE_HOST",
        "MIRROR_BRIDGE_PORT",
        "MIRROR_BRIDGE_ADB",
        "MIRROR_BRIDGE_LOG_LEVEL",
        "MIRROR_BRIDGE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
