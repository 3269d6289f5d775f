"""
mirror-bridge Entry Point
=========================

Command-line entry point for the bridge.

Flow:
    1. Load settings (YAML, environment, flags)
    2. Prepare transport (adb forward); failure becomes an error event
    3. Connect to the companion; failure exits with status 1
    4. Run the decode loop until the stream ends

Usage:
    mirror-bridge --device emulator-5554 --port 27183
    mirror-bridge --platform ios-sim --host 127.0.0.1

Exit Status:
    0   Stream ended (the last line on stdout is an error event)
    1   Invalid configuration, connection failure or closed stdout
    130 Interrupted
"""

import argparse
import logging
import socket
import sys
from typing import Callable, List, Optional, TextIO

import yaml

from mirror_bridge import __version__
from mirror_bridge.config import (
    BridgeConfig,
    apply_cli_overrides,
    load_config,
    setup_logging,
)
from mirror_bridge.errors import BridgeConnectionError, TransportError
from mirror_bridge.stream import (
    EventWriter,
    FrameDecoder,
    MirrorBridge,
    open_connection,
)
from mirror_bridge.transport import TransportPreparer, select_preparer


logger = logging.getLogger(__name__)


# =============================================================================
# Bridge Runner
# =============================================================================

def run_bridge(
    config: BridgeConfig,
    sink: TextIO,
    preparer: Optional[TransportPreparer] = None,
    connect: Callable[[str, int], socket.socket] = open_connection,
) -> int:
    """
    Bootstrap, connect and stream frames to `sink`.

    Args:
        config: Connection and device settings
        sink: Text stream receiving JSON-line events
        preparer: Transport preparer; chosen from config.platform if None
        connect: Connection factory, open_connection by default

    Returns:
        Number of frame events emitted

    Raises:
        BridgeConnectionError: If the companion cannot be reached
    """
    writer = EventWriter(sink)

    if preparer is None:
        preparer = select_preparer(config.platform, config.adb_path)

    try:
        preparer.prepare_transport(config.port, config.device)
    except TransportError as e:
        writer.write_error(str(e))

    sock = connect(config.host, config.port)
    with sock, sock.makefile("rb") as reader:
        bridge = MirrorBridge(FrameDecoder(reader), writer)
        return bridge.run()


# =============================================================================
# Command Line
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mirror-bridge",
        description="Stream mirrored screen frames as JSON lines on stdout",
    )
    parser.add_argument(
        "--device",
        type=str,
        default=None,
        help="Device id (adb device id). Optional for iOS/desktop.",
    )
    parser.add_argument(
        "--platform",
        type=str,
        default=None,
        help="Platform hint: android | ios | ios-sim | ios-device (default: android)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host where the companion app streams frames (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port where the companion app streams frames (default: 27183)",
    )
    parser.add_argument(
        "--adb",
        type=str,
        default=None,
        help="adb path, Android only (default: adb)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level for stderr diagnostics (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the bridge and return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = apply_cli_overrides(
            load_config(args.config),
            device=args.device,
            platform=args.platform,
            host=args.host,
            port=args.port,
            adb_path=args.adb,
            log_level=args.log_level,
        )
    except (ValueError, yaml.YAMLError) as e:
        print(f"mirror-bridge: invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(settings)

    try:
        run_bridge(settings.bridge, sys.stdout)
    except BridgeConnectionError as e:
        logger.error(str(e))
        return 1
    except BrokenPipeError:
        logger.info("Output closed by parent process")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
