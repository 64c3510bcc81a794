"""Tests for DebounceTimer and DebounceScheduler."""

from PyQt6.QtTest import QTest


def test_debounce_timer_trailing(qapp):
    """Test DebounceTimer fires once after the last trigger."""
    from pyqt_formstate.core import DebounceTimer

    called = []
    timer = DebounceTimer(delay_ms=30, handler=lambda: called.append(1))

    timer.trigger()
    timer.trigger()
    timer.trigger()
    assert timer.is_pending
    assert called == []

    QTest.qWait(150)
    assert called == [1]
    assert not timer.is_pending


def test_debounce_timer_zero_delay_is_synchronous(qapp):
    """Test a 0ms DebounceTimer runs inside trigger()."""
    from pyqt_formstate.core import DebounceTimer

    called = []
    DebounceTimer(delay_ms=0, handler=lambda: called.append(1)).trigger()

    assert called == [1]


def test_debounce_timer_cancel_and_force(qapp):
    """Test cancel() drops the pending call and force() runs it now."""
    from pyqt_formstate.core import DebounceTimer

    called = []
    timer = DebounceTimer(delay_ms=30, handler=lambda: called.append(1))

    timer.trigger()
    timer.cancel()
    QTest.qWait(100)
    assert called == []

    timer.trigger()
    timer.force()
    assert called == [1]
    QTest.qWait(100)
    assert called == [1]


def test_scheduler_coalesces_per_field(qapp):
    """Test five rapid schedules for one field run exactly one action."""
    from pyqt_formstate.core import DebounceScheduler

    scheduler = DebounceScheduler()
    runs = []

    for i in range(5):
        scheduler.schedule("name", 40, lambda i=i: runs.append(i))

    assert scheduler.pending_fields() == ["name"]
    QTest.qWait(200)
    assert runs == [4]
    assert not scheduler.is_pending("name")


def test_scheduler_fields_are_independent(qapp):
    """Test scheduling one field never cancels another."""
    from pyqt_formstate.core import DebounceScheduler

    scheduler = DebounceScheduler()
    runs = []

    scheduler.schedule("a", 30, lambda: runs.append("a"))
    scheduler.schedule("b", 30, lambda: runs.append("b"))
    QTest.qWait(150)

    assert sorted(runs) == ["a", "b"]


def test_scheduler_zero_delay_runs_synchronously(qapp):
    """Test delay 0 runs immediately and cancels any pending timer."""
    from pyqt_formstate.core import DebounceScheduler

    scheduler = DebounceScheduler()
    runs = []

    scheduler.schedule("a", 50, lambda: runs.append("late"))
    scheduler.schedule("a", 0, lambda: runs.append("now"))
    assert runs == ["now"]

    QTest.qWait(150)
    assert runs == ["now"]


def test_scheduler_cancel_all(qapp):
    """Test cancel_all leaves no action to fire."""
    from pyqt_formstate.core import DebounceScheduler

    scheduler = DebounceScheduler()
    runs = []

    scheduler.schedule("a", 30, lambda: runs.append("a"))
    scheduler.schedule("b", 30, lambda: runs.append("b"))
    scheduler.cancel_all()
    QTest.qWait(150)

    assert runs == []
    assert scheduler.pending_fields() == []


def test_scheduler_flush(qapp):
    """Test flush runs the pending action once, immediately."""
    from pyqt_formstate.core import DebounceScheduler

    scheduler = DebounceScheduler()
    runs = []

    scheduler.schedule("a", 50, lambda: runs.append("a"))
    assert scheduler.flush("a")
    assert runs == ["a"]
    assert not scheduler.flush("a")

    QTest.qWait(150)
    assert runs == ["a"]
