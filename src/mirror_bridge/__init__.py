"""
mirror-bridge
=============

Bridge between a screen-mirroring companion and a parent process.

The bridge connects to the companion over TCP, decodes its length-prefixed
binary frame protocol, and re-emits every frame as one JSON line on stdout.

Components:
    - transport: Optional device forwarding (``adb forward``) before connecting
    - stream: Wire protocol decoder, JSON-lines writer and the decode loop
    - models: Media types and output event schemas
    - config: Settings loaded from YAML, environment and CLI flags

Example:
    $ mirror-bridge --platform android --port 27183
    {"type":"frame","mime":"image/png","data":"iVBORw0..."}
    {"type":"error","error":"Mirror stream error: ..."}
"""

__version__ = "0.1.0"
__author__ = "mirror-bridge contributors"

__all__ = [
    "__version__",
]
