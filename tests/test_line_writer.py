import pytest

from zapkit.line_writer import LineWriter
from zapkit.observer import Entry, Level, LoggedEntry, new_observer

CASES = [
    (
        "simple",
        Level.INFO,
        ["foo\n", "bar\n", "baz\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    ("level too low", Level.DEBUG, ["foo\n", "bar\n"], []),
    (
        "multiple newlines in a message",
        Level.WARN,
        ["foo\nbar\n", "baz\n", "qux\nquux\n"],
        [
            (Level.WARN, "foo"),
            (Level.WARN, "bar"),
            (Level.WARN, "baz"),
            (Level.WARN, "qux"),
            (Level.WARN, "quux"),
        ],
    ),
    (
        "message split across multiple writes",
        Level.ERROR,
        ["foo", "bar\nbaz", "qux"],
        [(Level.ERROR, "foobar"), (Level.ERROR, "bazqux")],
    ),
    (
        "blank lines in the middle",
        Level.INFO,
        ["foo\n\nbar\nbaz"],
        [(Level.INFO, "foo"), (Level.INFO, ""), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    (
        "blank line at the end",
        Level.INFO,
        ["foo\nbar\nbaz\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    (
        "multiple blank line at the end",
        Level.INFO,
        ["foo\nbar\nbaz\n\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz"), (Level.INFO, "")],
    ),
]


@pytest.mark.parametrize("desc,level,writes,want", CASES, ids=[c[0] for c in CASES])
def test_writer(desc, level, writes, want):
    core, observed = new_observer(Level.INFO)
    writer = LineWriter(core, level)
    for chunk in writes:
        data = chunk.encode()
        assert writer.write(data) == len(data)
    writer.close()
    got = [e.entry for e in observed.all_untimed()]
    assert got == [Entry(level=lvl, message=msg) for lvl, msg in want]


def test_sync():
    core, observed = new_observer(Level.INFO)
    writer = LineWriter(core, Level.INFO)
    writer.write(b"foo")
    writer.write(b"bar")
    assert len(observed) == 0

    writer.sync()
    assert observed.all_untimed() == [LoggedEntry(Entry(message="foobar"), ())]
    observed.take_all()

    writer.sync()
    assert len(observed) == 0


def test_default_level_is_info():
    core, observed = new_observer(Level.DEBUG)
    writer = LineWriter(core)
    writer.write(b"hello\n")
    assert [(e.level, e.message) for e in observed.all()] == [(Level.INFO, "hello")]


def test_context_manager_flushes():
    core, observed = new_observer(Level.INFO)
    with LineWriter(core) as writer:
        writer.write("partial")
        assert len(observed) == 0
    assert [e.message for e in observed.all()] == ["partial"]


def test_disabled_level_reports_full_length_and_logs_nothing():
    core, observed = new_observer(Level.ERROR)
    writer = LineWriter(core, Level.INFO)
    assert writer.write(b"abc\ndef") == 7
    writer.close()
    assert observed.all() == []