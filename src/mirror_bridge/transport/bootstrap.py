"""
Transport Bootstrap
===================

Makes the companion's port reachable before the bridge connects.

This module provides the TransportPreparer protocol and its
implementations:
    - AdbForwarder: ``adb [-s DEVICE] forward tcp:PORT tcp:PORT``
    - NoopPreparer: For targets already reachable (iOS simulator, desktop)

Design Rules:
    - Success is silent; failure raises TransportError
    - Failure is advisory: the caller reports it and connects anyway,
      since a forward may already exist from an earlier run
"""

import logging
import subprocess
from typing import Optional, Protocol

from mirror_bridge.errors import TransportError


logger = logging.getLogger(__name__)

DEFAULT_PLATFORM = "android"


class TransportPreparer(Protocol):
    """
    Protocol for transport bootstrap backends.

    Implementations either return normally (the port is now reachable)
    or raise TransportError with a message fit for the event stream.
    """

    def prepare_transport(self, port: int, device: Optional[str] = None) -> None:
        """
        Establish a network path to `port`.

        Args:
            port: Port the companion listens on
            device: Optional device identifier

        Raises:
            TransportError: If the path could not be established
        """
        ...


class AdbForwarder:
    """
    Forwards a local TCP port to the same port on an Android device.

    Attributes:
        adb_path: adb executable, resolved through PATH when not absolute
    """

    def __init__(self, adb_path: str = "adb") -> None:
        self.adb_path = adb_path

    def build_command(self, port: int, device: Optional[str] = None) -> list[str]:
        """Assemble the adb command line."""
        cmd = [self.adb_path]
        if device:
            cmd += ["-s", device]
        cmd += ["forward", f"tcp:{port}", f"tcp:{port}"]
        return cmd

    def prepare_transport(self, port: int, device: Optional[str] = None) -> None:
        cmd = self.build_command(port, device)
        logger.info(f"Setting up port forward: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise TransportError(f"Failed to execute adb forward: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise TransportError(f"adb forward failed: {stderr}")

        logger.info(f"Forwarded tcp:{port} to device {device or '(default)'}")


class NoopPreparer:
    """Preparer for targets that need no forwarding."""

    def prepare_transport(self, port: int, device: Optional[str] = None) -> None:
        logger.debug(f"No transport preparation needed for port {port}")


def select_preparer(
    platform: Optional[str] = None,
    adb_path: str = "adb",
) -> TransportPreparer:
    """
    Pick the preparer for a platform hint.

    Args:
        platform: Platform hint (android, ios, ios-sim, ios-device, ...).
            None means DEFAULT_PLATFORM.
        adb_path: adb executable for Android platforms

    Returns:
        AdbForwarder for any "android*" hint, NoopPreparer otherwise
    """
    platform = platform or DEFAULT_PLATFORM
    if platform.startswith("android"):
        return AdbForwarder(adb_path)
    return NoopPreparer()
