# zapkit

Small building blocks for structured logging. The package needs nothing outside
the standard library.

## Install

```
pip install zapkit
pip install "zapkit[test]"   # adds pytest for running the test suite
```

## Modules

### `zapkit.write_syncer`

This module provides byte writers that can also flush buffered data. The abstract base class is
`WriteSyncer`, which has the methods `write(data) -> int` and `sync()`.

- `add_sync(writer)` returns `writer` unchanged if it already has callable
  `write` and `sync` methods. Otherwise it wraps the writer so that `sync()` does
  nothing. If the wrapped writer's `write` returns `None`, the wrapper reports
  `len(data)` bytes written.
- `lock(ws)` wraps a syncer in a `LockedWriteSyncer`, which serialises `write`
  and `sync` with a mutex. If `ws` is already a `LockedWriteSyncer`, it is
  returned unchanged.
- `new_multi_write_syncer(*syncers)` returns a `MultiWriteSyncer` that sends
  every write and every sync to all of its syncers. If you pass exactly one
  syncer, you get that syncer back.
  - Every syncer is called even when an earlier one fails.
  - A single failure is re-raised as it was raised.
  - Several failures are raised together as an `ExceptionGroup`.
  - `write` returns the smallest non-zero byte count that any syncer reported.

```python
import io
from zapkit.write_syncer import add_sync, new_multi_write_syncer

first, second = io.BytesIO(), io.BytesIO()
ws = new_multi_write_syncer(add_sync(first), add_sync(second))
ws.write(b"dumbledore")   # both buffers now hold b"dumbledore"
ws.sync()
```

### `zapkit.observer`

This module provides an in-memory core that records log entries without encoding them. It
is useful for asserting on log output in tests.

- `Level` is an `IntEnum` with the members `DEBUG`, `INFO`, `WARN`, `ERROR`,
  `DPANIC`, `PANIC` and `FATAL`. `level.enabled(other)` is true when `other`
  is the same level or a higher one, so a `Level` can act as the level filter
  of a core.
- `Entry` holds the level, message, time, logger name and stack of one event.
- `Field(key, value)` is one item of structured context.
- `namespace(key)` returns a marker field. The fields that follow it are
  nested under `key`.
- `new_observer(enabler)` returns a pair `(ObserverCore, ObservedLogs)`. The
  `ObserverCore` has the following methods:
  - `enabled(level)`
  - `check(entry)`: returns a handle with `write(*fields)`, or `None` when the
    entry's level is disabled.
  - `with_fields(fields)`: returns a child core that adds those fields to every
    entry.
  - `write(entry, fields)`
  - `sync()`: waits until any write in progress has been recorded.

```python
from zapkit.observer import Entry, Field, Level, new_observer

core, logs = new_observer(Level.INFO)
child = core.with_fields([Field("i", 1)])
child.write(Entry(level=Level.INFO, message="foo"), [])

assert len(logs) == 1
assert logs.all_untimed()[0].message == "foo"
assert logs.filter_field_key("i").all()
```

`ObservedLogs` is a thread-safe, ordered collection. It supports `len()` and
the following methods:

- `all()`
- `take_all()`: returns the entries and empties the collection.
- `all_untimed()`: returns the entries with their times set to `None`.
- The filters `filter_level_exact`, `filter_message`, `filter_message_snippet`,
  `filter_field`, `filter_field_key` and `filter(keep)`. Each filter returns a
  new `ObservedLogs`.

A `LoggedEntry` pairs an `Entry` with its context fields. It exposes the
properties `level`, `message`, `time` and `logger_name`. Its `context_map()`
method turns the fields into a dictionary, with namespaces as nested
dictionaries; a later field with the same key overwrites an earlier one.

### `zapkit.grpclog`

`new_logger(core, *options)` returns a `GrpcLogger` that offers the gRPC logger
methods on top of any core that has `enabled(level)` and `check(entry)`, such as
an `ObserverCore`.

The logging methods come in three families for each level:

| Level   | Methods                             |
|---------|-------------------------------------|
| Info    | `info`, `infoln`, `infof`           |
| Warning | `warning`, `warningln`, `warningf`  |
| Error   | `error`, `errorln`, `errorf`        |
| Fatal   | `fatal`, `fatalln`, `fatalf`        |
| Print   | `print`, `println`, `printf`        |

Each family formats its message the same way:

- The plain form joins its arguments and puts a space only between two
  operands that are both non-strings. For example, `info("s1", "s2", 1, 2)`
  logs `s1s21 2`.
- The `ln` form joins all of its arguments with single spaces.
- The `f` form applies Python `%`-formatting to its arguments.

Other behaviour:

- The print family logs at info level. Pass `with_debug()` to log it at debug
  level instead.
- The fatal family logs at fatal level and then raises `SystemExit(1)`.
- `v(level)` reports whether a gRPC verbosity level is enabled on the core. The
  levels are 0 for info, 1 for warning, 2 for error and 3 for fatal. Any other
  value is treated as info.

### `zapkit.line_writer`

`LineWriter(log, level=Level.INFO)` is a file-like writer that logs each line
written to it as a separate entry at `level`.

- `write(data)` accepts `bytes`, `bytearray` or `str` and returns the input's
  length.
- A partial line is held back until its newline arrives, or until `sync()` or
  `close()` is called.
- A blank line in the middle of the stream is logged as an empty message.
- `sync()` and `close()` do not log an empty trailing line.
- If `level` is disabled on the core, writes are accepted but nothing is
  logged.
- A `LineWriter` can be used as a context manager, which closes it on exit.

```python
from zapkit.observer import Level, new_observer
from zapkit.line_writer import LineWriter

core, logs = new_observer(Level.INFO)
with LineWriter(core, Level.INFO) as writer:
    writer.write(b"starting up\nrunning\n")
    writer.write(b"shutting down")
# three entries: "starting up", "running", "shutting down"
```

## What it does not do

zapkit has no encoders and no general-purpose logger front end. It never turns
entries into JSON or console text, and it never writes them to files or
streams by itself. The only core it ships is the in-memory `ObserverCore`. To
produce real output, supply your own object with `enabled(level)` and
`check(entry)`, and route bytes through the `write_syncer` helpers.