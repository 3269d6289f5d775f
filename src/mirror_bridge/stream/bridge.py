"""
Mirror Bridge
=============

The decode loop: frames in, JSON lines out.

State machine:
    Reading  -> read header + payload; on success go to Emitting,
                on any failure go to Failed
    Emitting -> write one FrameEvent, flush, go back to Reading
    Failed   -> write one ErrorEvent and stop (terminal)

The loop never retries or reconnects, and always ends with exactly
one error event.
"""

import logging

from mirror_bridge.errors import FrameStreamError
from mirror_bridge.models.events import FrameEvent
from mirror_bridge.stream.protocol import FrameDecoder
from mirror_bridge.stream.writer import EventWriter


logger = logging.getLogger(__name__)

STREAM_ERROR_PREFIX = "Mirror stream error"


class MirrorBridge:
    """
    Translates decoded frames into output events.

    Attributes:
        decoder: FrameDecoder owning the companion stream
        writer: EventWriter for the output sink
        frames_emitted: Frame events written so far

    Example:
        sock = open_connection("127.0.0.1", 27183)
        with sock, sock.makefile("rb") as reader:
            bridge = MirrorBridge(FrameDecoder(reader), EventWriter(sys.stdout))
            bridge.run()
    """

    def __init__(self, decoder: FrameDecoder, writer: EventWriter) -> None:
        self.decoder = decoder
        self.writer = writer
        self.frames_emitted: int = 0

    def run(self) -> int:
        """
        Decode and emit frames until the stream fails.

        Returns:
            Number of frame events emitted before the terminal error event
        """
        logger.info("Mirror bridge started")

        try:
            for frame in self.decoder:
                self.writer.write(FrameEvent.from_frame(frame))
                self.frames_emitted += 1
        except FrameStreamError as e:
            self.writer.write_error(f"{STREAM_ERROR_PREFIX}: {e}")

        logger.info(f"Mirror bridge stopped after {self.frames_emitted} frames")
        return self.frames_emitted
