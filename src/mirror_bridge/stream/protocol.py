"""
Frame Protocol
==============

Decoder for the companion's length-prefixed binary frame stream.

Wire Format (server -> client only, repeated until the stream closes):

    Offset  Size    Type        Field
    ------  ------  ----------  ------------------
    0       1       uint8       type tag
    1       4       uint32 BE   payload length
    5       length  bytes       payload

There is no handshake, terminator or acknowledgment. End of stream is
always a failure, even when it falls cleanly between two frames.

Example:
    sock = open_connection("127.0.0.1", 27183)
    decoder = FrameDecoder(sock.makefile("rb"))

    frame = decoder.read_frame()
    print(frame.media_type, len(frame.payload))
"""

import logging
import struct
from typing import BinaryIO, Iterator

from mirror_bridge.errors import FrameStreamError
from mirror_bridge.models.media import media_type_for_tag
from mirror_bridge.stream.frame import HEADER_SIZE, Frame, FrameHeader


logger = logging.getLogger(__name__)

_HEADER_STRUCT = struct.Struct(">BI")


def parse_header(header: bytes) -> FrameHeader:
    """
    Unpack the 5-byte frame header.

    Args:
        header: Exactly HEADER_SIZE bytes read from the stream

    Returns:
        FrameHeader with tag and payload length

    Raises:
        FrameStreamError: If the header is not exactly HEADER_SIZE bytes
    """
    if len(header) != HEADER_SIZE:
        raise FrameStreamError(
            f"Invalid header size: expected {HEADER_SIZE} bytes, got {len(header)}"
        )
    tag, length = _HEADER_STRUCT.unpack(header)
    return FrameHeader(tag=tag, length=length)


def encode_frame(tag: int, payload: bytes) -> bytes:
    """
    Serialize one frame to wire format.

    The bridge never sends frames; this is the inverse of the decoder
    for tests and fake companions.

    Args:
        tag: Type tag (0-255)
        payload: Image bytes

    Returns:
        Header followed by payload
    """
    return _HEADER_STRUCT.pack(tag, len(payload)) + payload


class FrameDecoder:
    """
    Blocking reader of frames from a byte stream.

    The decoder owns its reader for its whole lifetime and keeps no
    state between frames. Reads block without timeout.

    Attributes:
        reader: Binary file-like object (e.g. ``socket.makefile("rb")``)
        frames_decoded: Number of complete frames read so far
    """

    def __init__(self, reader: BinaryIO) -> None:
        self.reader = reader
        self.frames_decoded: int = 0

    def read_frame(self) -> Frame:
        """
        Read exactly one frame.

        Returns:
            The decoded Frame

        Raises:
            FrameStreamError: On end of stream or I/O failure in either
                the header or the payload read
        """
        header = parse_header(self._read_exact(HEADER_SIZE, "header"))
        payload = self._read_exact(header.length, "payload")

        frame = Frame(
            media_type=media_type_for_tag(header.tag),
            payload=payload,
        )
        self.frames_decoded += 1
        logger.debug(
            f"Decoded frame {self.frames_decoded}: tag={header.tag}, "
            f"length={header.length}"
        )
        return frame

    def __iter__(self) -> Iterator[Frame]:
        """
        Yield frames until the stream fails.

        The terminating FrameStreamError propagates to the caller.
        """
        while True:
            yield self.read_frame()

    def _read_exact(self, size: int, part: str) -> bytes:
        """Read exactly `size` bytes or raise FrameStreamError."""
        chunks = []
        remaining = size
        while remaining > 0:
            try:
                chunk = self.reader.read(remaining)
            except OSError as e:
                raise FrameStreamError(f"failed to read frame {part}: {e}") from e
            if not chunk:
                received = size - remaining
                raise FrameStreamError(
                    f"connection closed after {received} of {size} {part} bytes"
                )
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)
