"""
Companion Connection
====================

Opens the TCP connection to the mirroring companion.

The socket is left in blocking mode with no timeout: a stalled
companion blocks the bridge until it is killed.
"""

import logging
import socket

from mirror_bridge.errors import BridgeConnectionError


logger = logging.getLogger(__name__)


def open_connection(host: str, port: int) -> socket.socket:
    """
    Connect to the companion at host:port.

    Args:
        host: Hostname or IP address of the companion
        port: TCP port the companion streams frames on

    Returns:
        Connected blocking socket

    Raises:
        BridgeConnectionError: If the connection cannot be established
    """
    addr = f"{host}:{port}"
    try:
        sock = socket.create_connection((host, port))
    except OSError as e:
        raise BridgeConnectionError(
            f"Failed to connect to mirror companion at {addr}: {e}"
        ) from e

    sock.settimeout(None)
    logger.info(f"Connected to mirror companion: {addr}")
    return sock
