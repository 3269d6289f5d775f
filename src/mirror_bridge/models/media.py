"""
Media Types
===========

Fixed mapping from wire type tags to image media types.

Every possible tag maps to a media type: unknown tags fall back
to PNG, the companion's native capture format.
"""

from enum import Enum
from typing import Dict


class MediaType(str, Enum):
    """
    Image encodings the companion can send.

    Attributes:
        PNG: Lossless PNG screenshot (tag 1, also the fallback)
        JPEG: JPEG-compressed frame (tag 2)
        WEBP: WebP-compressed frame (tag 3)
    """

    PNG = "image/png"
    JPEG = "image/jpeg"
    WEBP = "image/webp"


DEFAULT_MEDIA_TYPE = MediaType.PNG

TAG_MEDIA_TYPES: Dict[int, MediaType] = {
    1: MediaType.PNG,
    2: MediaType.JPEG,
    3: MediaType.WEBP,
}


def media_type_for_tag(tag: int) -> MediaType:
    """
    Resolve a wire type tag to its media type.

    Args:
        tag: Type tag from the frame header (0-255)

    Returns:
        The mapped MediaType, or DEFAULT_MEDIA_TYPE for unknown tags
    """
    return TAG_MEDIA_TYPES.get(tag, DEFAULT_MEDIA_TYPE)
