"""Writers that can flush buffered data, plus locking and fan-out helpers."""

from __future__ import annotations

import abc
import threading
from collections.abc import Iterable
from typing import Any


class WriteSyncer(abc.ABC):
    """A byte writer that can also flush any buffered data."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""

    @abc.abstractmethod
    def sync(self) -> None:
        """Flush buffered data, raising on failure."""


def _is_write_syncer(obj: Any) -> bool:
    if isinstance(obj, WriteSyncer):
        return True
    return callable(getattr(obj, "write", None)) and callable(getattr(obj, "sync", None))


def _raise_combined(errors: list[Exception], message: str) -> None:
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise ExceptionGroup(message, errors)


class _WriterWrapper(WriteSyncer):
    """Adds a no-op sync to a plain writer."""

    def __init__(self, writer: Any) -> None:
        self._writer = writer

    def write(self, data: bytes) -> int:
        written = self._writer.write(data)
        return len(data) if written is None else written

    def sync(self) -> None:
        return None


def add_sync(writer: Any) -> WriteSyncer:
    """Return ``writer`` if it can already sync, otherwise wrap it with a no-op sync."""
    if _is_write_syncer(writer):
        return writer
    return _WriterWrapper(writer)


class LockedWriteSyncer(WriteSyncer):
    """Serialises writes and syncs to a wrapped syncer with a mutex."""

    def __init__(self, ws: WriteSyncer) -> None:
        self._ws = ws
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            return self._ws.write(data)

    def sync(self) -> None:
        with self._lock:
            self._ws.sync()


def lock(ws: WriteSyncer) -> WriteSyncer:
    """Wrap ``ws`` in a mutex, unless it is already locked."""
    if isinstance(ws, LockedWriteSyncer):
        return ws
    return LockedWriteSyncer(ws)


class MultiWriteSyncer(WriteSyncer):
    """Duplicates writes and syncs to every wrapped syncer."""

    def __init__(self, syncers: Iterable[WriteSyncer]) -> None:
        self._syncers = tuple(syncers)

    def write(self, data: bytes) -> int:
        """Write to every syncer; return the smallest non-zero count.

        Every syncer is written to even if an earlier one fails; failures are
        raised together afterwards.
        """
        errors: list[Exception] = []
        written = 0
        for ws in self._syncers:
            try:
                n = ws.write(data)
            except Exception as exc:  # noqa: BLE001 - collected and re-raised
                errors.append(exc)
                n = 0
            if written == 0 and n != 0:
                written = n
            elif n < written:
                written = n
        _raise_combined(errors, "write failed")
        return written

    def sync(self) -> None:
        errors: list[Exception] = []
        for ws in self._syncers:
            try:
                ws.sync()
            except Exception as exc:  # noqa: BLE001 - collected and re-raised
                errors.append(exc)
        _raise_combined(errors, "sync failed")


def new_multi_write_syncer(*args: WriteSyncer) -> WriteSyncer:
    """Create a syncer fanning out to all ``args``; a single one is returned as is."""
    if len(args) == 1:
        return args[0]
    return MultiWriteSyncer(args)