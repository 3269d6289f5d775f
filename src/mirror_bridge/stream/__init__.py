"""
Stream Module
=============

Companion connection, frame decoding and event output.

This module provides the core of mirror-bridge:
    - Frame / FrameHeader: Decoded frame data model
    - FrameDecoder: Blocking reader for the length-prefixed wire protocol
    - EventWriter: JSON-lines writer with a flush per event
    - MirrorBridge: The decode loop tying the two together
    - open_connection: TCP connect to the companion

Example:
    from mirror_bridge.stream import (
        EventWriter, FrameDecoder, MirrorBridge, open_connection,
    )

    sock = open_connection("127.0.0.1", 27183)
    with sock, sock.makefile("rb") as reader:
        MirrorBridge(FrameDecoder(reader), EventWriter(sys.stdout)).run()
"""

from mirror_bridge.stream.frame import HEADER_SIZE, Frame, FrameHeader
from mirror_bridge.stream.protocol import FrameDecoder, encode_frame, parse_header
from mirror_bridge.stream.writer import EventWriter
from mirror_bridge.stream.bridge import MirrorBridge
from mirror_bridge.stream.connection import open_connection


__all__ = [
    "HEADER_SIZE",
    "Frame",
    "FrameHeader",
    "FrameDecoder",
    "encode_frame",
    "parse_header",
    "EventWriter",
    "MirrorBridge",
    "open_connection",
]
