"""
Bridge Errors
=============

Exception hierarchy for mirror-bridge.

Only BridgeConnectionError ends the process with a failure status.
TransportError and FrameStreamError are caught by the bridge and
turned into error events on the output stream.
"""


class MirrorBridgeError(Exception):
    """Base class for all bridge errors."""
    pass


class TransportError(MirrorBridgeError):
    """Raised when device forwarding could not be set up."""
    pass


class BridgeConnectionError(MirrorBridgeError):
    """Raised when the initial connection to the companion fails."""
    pass


class FrameStreamError(MirrorBridgeError):
    """Raised when a header or payload cannot be read from the stream."""
    pass
