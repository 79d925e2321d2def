"""An in-memory core that records log entries without encoding them."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable, Iterable
from datetime import datetime
from enum import IntEnum
from typing import Any, Protocol


class Level(IntEnum):
    """Logging priority; higher is more important."""

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    DPANIC = 3
    PANIC = 4
    FATAL = 5

    def enabled(self, level: Level) -> bool:
        """Report whether ``level`` is at or above this level."""
        return level >= self

    def __str__(self) -> str:
        return self.name.lower()


class _LevelEnabler(Protocol):
    def enabled(self, level: Level) -> bool: ...


@dataclasses.dataclass(frozen=True)
class Entry:
    """A single log event, without its structured context."""

    level: Level = Level.INFO
    message: str = ""
    time: datetime | None = None
    logger_name: str = ""
    stack: str = ""


@dataclasses.dataclass(frozen=True)
class Field:
    """A key-value pair of structured context, or a namespace marker."""

    key: str
    value: Any = None
    namespace: bool = False


def namespace(key: str) -> Field:
    """Create a field that nests all following fields under ``key``."""
    return Field(key, namespace=True)


@dataclasses.dataclass(frozen=True)
class LoggedEntry:
    """An encoding-agnostic representation of a logged message."""

    entry: Entry
    context: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", tuple(self.context))

    @property
    def level(self) -> Level:
        return self.entry.level

    @property
    def message(self) -> str:
        return self.entry.message

    @property
    def time(self) -> datetime | None:
        return self.entry.time

    @property
    def logger_name(self) -> str:
        return self.entry.logger_name

    def context_map(self) -> dict[str, Any]:
        """Return the context as a dict, with namespaces as nested dicts."""
        result: dict[str, Any] = {}
        current = result
        for field in self.context:
            if field.namespace:
                nested: dict[str, Any] = {}
                current[field.key] = nested
                current = nested
            else:
                current[field.key] = field.value
        return result


class ObservedLogs:
    """A thread-safe, ordered collection of observed log entries."""

    def __init__(self, logs: Iterable[LoggedEntry] = ()) -> None:
        self._lock = threading.Lock()
        self._logs: list[LoggedEntry] = list(logs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    def all(self) -> list[LoggedEntry]:
        """Return a copy of all observed entries."""
        with self._lock:
            return list(self._logs)

    def take_all(self) -> list[LoggedEntry]:
        """Return all observed entries and clear the collection."""
        with self._lock:
            taken, self._logs = self._logs, []
        return taken

    def all_untimed(self) -> list[LoggedEntry]:
        """Return all entries with their timestamps cleared."""
        return [
            dataclasses.replace(logged, entry=dataclasses.replace(logged.entry, time=None))
            for logged in self.all()
        ]

    def filter_level_exact(self, level: Level) -> ObservedLogs:
        return self.filter(lambda e: e.level == level)

    def filter_message(self, msg: str) -> ObservedLogs:
        return self.filter(lambda e: e.message == msg)

    def filter_message_snippet(self, snippet: str) -> ObservedLogs:
        return self.filter(lambda e: snippet in e.message)

    def filter_field(self, field: Field) -> ObservedLogs:
        return self.filter(lambda e: any(f == field for f in e.context))

    def filter_field_key(self, key: str) -> ObservedLogs:
        return self.filter(lambda e: any(f.key == key for f in e.context))

    def filter(self, keep: Callable[[LoggedEntry], bool]) -> ObservedLogs:
        """Return a new collection holding only the entries ``keep`` accepts."""
        with self._lock:
            return ObservedLogs(e for e in self._logs if keep(e))

    def _add(self, logged: LoggedEntry) -> None:
        with self._lock:
            self._logs.append(logged)

    def _wait_for_writes(self) -> None:
        """Block until any write already in progress has been recorded."""
        self._lock.acquire()
        self._lock.release()


@dataclasses.dataclass(frozen=True)
class _CheckedEntry:
    entry: Entry
    core: ObserverCore

    def write(self, *fields: Field) -> None:
        self.core.write(self.entry, fields)


class ObserverCore:
    """A core that stores every enabled entry in an :class:`ObservedLogs`."""

    def __init__(
        self,
        enabler: _LevelEnabler,
        logs: ObservedLogs,
        context: Iterable[Field] = (),
    ) -> None:
        self._enabler = enabler
        self._logs = logs
        self._context = tuple(context)

    def enabled(self, level: Level) -> bool:
        return self._enabler.enabled(level)

    def check(self, entry: Entry) -> _CheckedEntry | None:
        """Return a writable handle for ``entry`` if its level is enabled."""
        if self.enabled(entry.level):
            return _CheckedEntry(entry, self)
        return None

    def with_fields(self, fields: Iterable[Field]) -> ObserverCore:
        """Return a child core that adds ``fields`` to every entry."""
        return ObserverCore(self._enabler, self._logs, (*self._context, *fields))

    def write(self, entry: Entry, fields: Iterable[Field]) -> None:
        self._logs._add(LoggedEntry(entry, (*self._context, *fields)))

    def sync(self) -> None:
        """Wait until every entry being written is visible in the logs."""
        self._logs._wait_for_writes()


def new_observer(enabler: _LevelEnabler) -> tuple[ObserverCore, ObservedLogs]:
    """Create a core that buffers entries in memory, and the logs it fills."""
    logs = ObservedLogs()
    return ObserverCore(enabler, logs), logs