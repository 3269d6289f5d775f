"""
Event Writer
============

Line-oriented JSON output to the parent process.

Design Rules:
    - Exactly one write and one flush per event
    - No batching: the reader sees every frame as soon as it is decoded
    - Single writer; callers must not share the sink across threads
"""

import logging
from typing import TextIO

from mirror_bridge.models.events import ErrorEvent, OutputEvent


logger = logging.getLogger(__name__)


class EventWriter:
    """
    Writes output events as newline-terminated JSON.

    Attributes:
        sink: Text stream receiving the events (normally sys.stdout)
        events_written: Number of events written so far

    Example:
        writer = EventWriter(sys.stdout)
        writer.write(ErrorEvent(error="no device found"))
    """

    def __init__(self, sink: TextIO) -> None:
        self.sink = sink
        self.events_written: int = 0

    def write(self, event: OutputEvent) -> None:
        """Serialize, write and flush one event."""
        self.sink.write(event.model_dump_json() + "\n")
        self.sink.flush()
        self.events_written += 1

    def write_error(self, message: str) -> None:
        """Shortcut for writing an ErrorEvent."""
        logger.warning(message)
        self.write(ErrorEvent(error=message))
