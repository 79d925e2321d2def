"""A byte writer that logs each line it receives as a separate entry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Protocol

from zapkit.observer import Entry, Level


class _Checked(Protocol):
    def write(self, *fields: Any) -> None: ...


class _Core(Protocol):
    def enabled(self, level: Level) -> bool: ...

    def check(self, entry: Entry) -> _Checked | None: ...


class LineWriter:
    """Splits written bytes on newlines and logs each line at ``level``.

    Partial lines are buffered until a newline arrives or the writer is
    synced or closed. Use it as a context manager to flush on exit.
    """

    def __init__(self, log: _Core, level: Level = Level.INFO) -> None:
        self.log = log
        self.level = level
        self._buffer = bytearray()

    def __enter__(self) -> LineWriter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def write(self, data: bytes | bytearray | str) -> int:
        """Log every complete line in ``data``; return the input length."""
        size = len(data)
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not self.log.enabled(self.level):
            return size
        remaining = bytes(data)
        while remaining:
            line, sep, remaining = remaining.partition(b"\n")
            if not sep:
                self._buffer += line
                break
            if not self._buffer:
                self._log(line)
            else:
                self._buffer += line
                # Empty lines mid-stream are kept so "foo\n\nbar" loses nothing.
                self._flush(allow_empty=True)
        return size

    def sync(self) -> None:
        """Log any buffered partial line, skipping an empty one."""
        self._flush(allow_empty=False)

    def close(self) -> None:
        """Flush buffered data; always call this when done writing."""
        self.sync()

    def _flush(self, allow_empty: bool) -> None:
        if allow_empty or self._buffer:
            self._log(bytes(self._buffer))
        self._buffer.clear()

    def _log(self, line: bytes) -> None:
        checked = self.log.check(
            Entry(
                level=self.level,
                message=line.decode("utf-8", errors="replace"),
                time=datetime.now(timezone.utc),
            )
        )
        if checked is not None:
            checked.write()