"""In-memory sinks.

- BufferSink: a small editor model (lines plus cursor) that replays render into
- RecordingSink: records every sink call for assertions
"""

from retype.sinks.buffer import BufferSink
from retype.sinks.recording import RecordingSink

__all__ = ["BufferSink", "RecordingSink"]
