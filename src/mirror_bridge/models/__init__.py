"""
Data Models
===========

Media types and output event schemas for mirror-bridge.

Models:
    Media:
        - MediaType: Image encodings carried by the wire protocol
        - media_type_for_tag: Total tag -> media type lookup

    Output:
        - FrameEvent: One decoded frame
        - ErrorEvent: One bootstrap or stream failure
"""

from mirror_bridge.models.media import (
    DEFAULT_MEDIA_TYPE,
    TAG_MEDIA_TYPES,
    MediaType,
    media_type_for_tag,
)
from mirror_bridge.models.events import ErrorEvent, FrameEvent, OutputEvent

__all__ = [
    # Media
    "MediaType",
    "DEFAULT_MEDIA_TYPE",
    "TAG_MEDIA_TYPES",
    "media_type_for_tag",
    # Output
    "FrameEvent",
    "ErrorEvent",
    "OutputEvent",
]
