"""
Output Event Schema
===================

Pydantic models for the JSON lines written to stdout.

Output Contract:
    {"type":"frame","mime":"image/png","data":"<base64 payload>"}
    {"type":"error","error":"<message>"}

Design Rules:
    - One event per line, compact JSON, keys in the order shown above
    - Events are independent; no event references another
    - Errors after connecting travel on the same channel as frames
"""

import base64
from typing import TYPE_CHECKING, Literal, Union

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from mirror_bridge.stream.frame import Frame


class FrameEvent(BaseModel):
    """
    A decoded frame, ready for the parent process.

    Attributes:
        type: Always "frame"
        mime: Media type resolved from the frame's type tag
        data: Standard base64 encoding of the payload bytes
    """

    type: Literal["frame"] = "frame"

    mime: str = Field(
        ...,
        description="Media type of the image payload",
    )

    data: str = Field(
        ...,
        description="Base64-encoded image payload",
    )

    @classmethod
    def from_frame(cls, frame: "Frame") -> "FrameEvent":
        """Build the event for a decoded frame."""
        return cls(
            mime=frame.media_type.value,
            data=base64.b64encode(frame.payload).decode("ascii"),
        )

    def payload_bytes(self) -> bytes:
        """Reverse the base64 encoding of `data`."""
        return base64.b64decode(self.data)


class ErrorEvent(BaseModel):
    """
    A bootstrap or stream failure.

    Attributes:
        type: Always "error"
        error: Human-readable description of the failure
    """

    type: Literal["error"] = "error"

    error: str = Field(
        ...,
        description="Description of the failure",
    )

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "type": "error",
                "error": "Mirror stream error: connection closed by companion",
            }
        }


OutputEvent = Union[FrameEvent, ErrorEvent]
