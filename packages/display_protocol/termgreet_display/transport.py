"""Output stream abstraction for writing composed frames to the terminal."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any

from .errors import OutputError


@dataclass
class WriteStats:
    bytes_written: int = 0
    writes: int = 0


class TerminalWriter:
    """Writes a whole frame as one sequence so protocol chunks are never interleaved."""

    def __init__(self, stream: Any | None = None, encoding: str = "utf-8") -> None:
        if stream is None:
            stream = getattr(sys.stdout, "buffer", sys.stdout)
        self._stream = stream
        self.encoding = encoding

    @property
    def is_tty(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def write(self, text: str) -> WriteStats:
        payload = text.encode(self.encoding, errors="replace")
        stats = WriteStats()
        view = memoryview(payload)
        try:
            while view:
                written = self._stream.write(view)
                if written is None:
                    raise OutputError("Output stream is not ready for writing")
                if written <= 0:
                    raise OutputError("Output stream accepted no data")
                stats.bytes_written += int(written)
                stats.writes += 1
                view = view[written:]
            self._stream.flush()
        except OSError as exc:
            raise OutputError(f"Failed to write to output stream: {exc}") from exc
        return stats
