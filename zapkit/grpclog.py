"""A logger exposing the gRPC logging interface on top of a logging core."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Protocol

from zapkit.observer import Entry, Level

GRPC_LEVEL_INFO = 0
GRPC_LEVEL_WARN = 1
GRPC_LEVEL_ERROR = 2
GRPC_LEVEL_FATAL = 3

_GRPC_TO_LEVEL = {
    GRPC_LEVEL_INFO: Level.INFO,
    GRPC_LEVEL_WARN: Level.WARN,
    GRPC_LEVEL_ERROR: Level.ERROR,
    GRPC_LEVEL_FATAL: Level.FATAL,
}


class _Checked(Protocol):
    def write(self, *fields: Any) -> None: ...


class _Core(Protocol):
    def enabled(self, level: Level) -> bool: ...

    def check(self, entry: Entry) -> _Checked | None: ...


Option = Callable[["GrpcLogger"], None]


def _format_value(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _sprint(args: tuple[Any, ...]) -> str:
    """Join operands, adding spaces only between two non-string operands."""
    parts: list[str] = []
    prev_is_string = False
    for index, arg in enumerate(args):
        is_string = isinstance(arg, str)
        if index > 0 and not is_string and not prev_is_string:
            parts.append(" ")
        parts.append(_format_value(arg))
        prev_is_string = is_string
    return "".join(parts)


def _sprintln(args: tuple[Any, ...]) -> str:
    """Join operands with single spaces, without a trailing newline."""
    return " ".join(_format_value(arg) for arg in args)


def _sprintf(template: str, args: tuple[Any, ...]) -> str:
    if not args:
        return template
    if not template:
        return _sprint(args)
    return template % args


@dataclasses.dataclass
class _Printer:
    """Print, printf and println operations bound to one level."""

    core: _Core
    level: Level

    def _log(self, message: str) -> None:
        fatal = self.level == Level.FATAL
        if self.level < Level.DPANIC and not self.core.enabled(self.level):
            return
        checked = self.core.check(
            Entry(level=self.level, message=message, time=datetime.now(timezone.utc))
        )
        if checked is not None:
            checked.write()
        if fatal:
            raise SystemExit(1)

    def print(self, *args: Any) -> None:
        if self.level < Level.DPANIC and not self.core.enabled(self.level):
            return
        self._log(_sprint(args))

    def printf(self, template: str, *args: Any) -> None:
        if self.level < Level.DPANIC and not self.core.enabled(self.level):
            return
        self._log(_sprintf(template, args))

    def println(self, *args: Any) -> None:
        if self.core.enabled(self.level):
            self._log(_sprintln(args))


class GrpcLogger:
    """Adapts a logging core to the gRPC logger interfaces (v1 and v2)."""

    def __init__(self, core: _Core) -> None:
        self._core = core
        self._info = _Printer(core, Level.INFO)
        self._warn = _Printer(core, Level.WARN)
        self._error = _Printer(core, Level.ERROR)
        self._print = _Printer(core, Level.INFO)
        self._fatal = _Printer(core, Level.FATAL)

    def print(self, *args: Any) -> None:
        """Log at the print level (info, or debug with :func:`with_debug`)."""
        self._print.print(*args)

    def printf(self, format: str, *args: Any) -> None:
        self._print.printf(format, *args)

    def println(self, *args: Any) -> None:
        self._print.println(*args)

    def info(self, *args: Any) -> None:
        self._info.print(*args)

    def infoln(self, *args: Any) -> None:
        self._info.println(*args)

    def infof(self, format: str, *args: Any) -> None:
        self._info.printf(format, *args)

    def warning(self, *args: Any) -> None:
        self._warn.print(*args)

    def warningln(self, *args: Any) -> None:
        self._warn.println(*args)

    def warningf(self, format: str, *args: Any) -> None:
        self._warn.printf(format, *args)

    def error(self, *args: Any) -> None:
        self._error.print(*args)

    def errorln(self, *args: Any) -> None:
        self._error.println(*args)

    def errorf(self, format: str, *args: Any) -> None:
        self._error.printf(format, *args)

    def fatal(self, *args: Any) -> None:
        """Log at fatal level, then exit the process with status 1."""
        self._fatal.print(*args)

    def fatalln(self, *args: Any) -> None:
        self._fatal.println(*args)

    def fatalf(self, format: str, *args: Any) -> None:
        self._fatal.printf(format, *args)

    def v(self, level: int) -> bool:
        """Report whether the given gRPC verbosity level is enabled."""
        return self._core.enabled(_GRPC_TO_LEVEL.get(level, Level.INFO))


def with_debug() -> Option:
    """Make print, printf and println log at debug instead of info."""

    def apply(logger: GrpcLogger) -> None:
        logger._print = _Printer(logger._core, Level.DEBUG)

    return apply


def _with_warn() -> Option:
    """Redirect the fatal methods to warn level, without exiting."""

    def apply(logger: GrpcLogger) -> None:
        logger._fatal = _Printer(logger._core, Level.WARN)

    return apply


def new_logger(core: _Core, *args: Option) -> GrpcLogger:
    """Create a gRPC-compatible logger writing to ``core``."""
    logger = GrpcLogger(core)
    for option in args:
        option(logger)
    return logger