"""
Transport Module
================

Device forwarding performed before the bridge connects.
"""

from mirror_bridge.transport.bootstrap import (
    DEFAULT_PLATFORM,
    AdbForwarder,
    NoopPreparer,
    TransportPreparer,
    select_preparer,
)

__all__ = [
    "DEFAULT_PLATFORM",
    "TransportPreparer",
    "AdbForwarder",
    "NoopPreparer",
    "select_preparer",
]
