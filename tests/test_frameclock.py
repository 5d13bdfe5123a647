import pytest
from qtpy.QtCore import QEventLoop, QTimer

from roomview.frameclock import FrameClock


def test_invalid_fps():
    with pytest.raises(ValueError):
        FrameClock(targetFps=0)


def test_first_tick_reports_zero_elapsed(qapp):
    elapsed = []
    clock = FrameClock(callback=elapsed.append)
    clock.start()
    clock._timerEvent()
    clock._timerEvent()
    clock.stop()

    assert elapsed[0] == 0.0
    assert elapsed[1] >= 0.0
    assert clock.frameCount == 2
    assert not clock.isActive()


def test_returning_false_stops(qapp):
    clock = FrameClock(callback=lambda elapsed: False)
    clock.start()
    clock._timerEvent()
    assert not clock.isActive()
    assert clock.frameCount == 0


def test_exception_stops_and_propagates(qapp):
    def fail(elapsed):
        raise RuntimeError("boom")

    clock = FrameClock(callback=fail)
    clock.start()
    with pytest.raises(RuntimeError):
        clock._timerEvent()
    assert not clock.isActive()


def test_runs_in_event_loop(qapp):
    ticks = []

    def onTick(elapsed):
        ticks.append(elapsed)
        if len(ticks) == 3:
            loop.quit()
            return False

    loop = QEventLoop()
    clock = FrameClock(targetFps=120, callback=onTick)
    QTimer.singleShot(2000, loop.quit)
    clock.start()
    loop.exec_()

    assert len(ticks) == 3
    assert ticks[0] == 0.0
    assert all(elapsed > 0.0 for elapsed in ticks[1:])
    assert not clock.isActive()
