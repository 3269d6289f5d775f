"""
Frame Data Model
================

Internal frame representation for the decode loop.

Design Rules:
    - Built by the decoder from exactly `length` payload bytes
    - Converted to an output event immediately, then discarded
    - Does NOT decode or inspect image data
"""

from dataclasses import dataclass

from mirror_bridge.models.media import MediaType


HEADER_SIZE = 5


@dataclass(frozen=True, slots=True)
class FrameHeader:
    """
    Fixed 5-byte prefix of every frame.

    Attributes:
        tag: 1-byte type tag
        length: Payload size in bytes (big-endian unsigned 32-bit on the wire)
    """

    tag: int
    length: int


@dataclass(frozen=True, slots=True)
class Frame:
    """
    One decoded frame from the companion.

    Attributes:
        media_type: Image encoding resolved from the header tag
        payload: Raw image bytes, exactly as long as the header declared
    """

    media_type: MediaType
    payload: bytes

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the full image."""
        return (
            f"Frame(media_type={self.media_type.value}, "
            f"size={len(self.payload)})"
        )
