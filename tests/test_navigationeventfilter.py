"""NavigationEventFilter tests with lightweight stand-ins for Qt input events."""

import numpy as np
import pytest
from qtpy.QtCore import QEvent, QPoint, QPointF, Qt

from conftest import FakeSurface
from roomview.errors import ConfigurationError
from roomview.gestures import LINE_HEIGHT, GestureSampler
from roomview.navigationeventfilter import NavigationEventFilter


class FakeEvent:
    def __init__(self, eventType):
        self._type = eventType

    def type(self):
        return self._type


class FakeMouseEvent(FakeEvent):
    def __init__(self, eventType, x=0.0, y=0.0, button=Qt.LeftButton, modifiers=Qt.NoModifier):
        super().__init__(eventType)
        self._position = QPointF(x, y)
        self._button = button
        self._modifiers = modifiers

    def position(self):
        return self._position

    def button(self):
        return self._button

    def modifiers(self):
        return self._modifiers


class FakeWheelEvent(FakeEvent):
    def __init__(self, pixelDelta=(0, 0), angleDelta=(0, 0)):
        super().__init__(QEvent.Wheel)
        self._pixelDelta = QPoint(*pixelDelta)
        self._angleDelta = QPoint(*angleDelta)

    def pixelDelta(self):
        return self._pixelDelta

    def angleDelta(self):
        return self._angleDelta


class FakeTouchPoint:
    def __init__(self, x, y):
        self._position = QPointF(x, y)

    def position(self):
        return self._position


class FakeTouchEvent(FakeEvent):
    def __init__(self, eventType, points):
        super().__init__(eventType)
        self._points = [FakeTouchPoint(x, y) for x, y in points]

    def points(self):
        return self._points


@pytest.fixture
def sampler():
    return GestureSampler()


@pytest.fixture
def eventFilter(sampler):
    return NavigationEventFilter(sampler)


def send(eventFilter, event):
    return eventFilter.eventFilter(None, event)


def test_attach_and_release(eventFilter):
    surface = FakeSurface()
    subscription = eventFilter.attach(surface)
    assert surface.filters == [eventFilter]
    assert eventFilter.surface() is surface

    with pytest.raises(RuntimeError):
        eventFilter.attach(FakeSurface())

    eventFilter.sampler.pointerDown(0, 0)
    subscription.release()
    assert surface.filters == []
    assert eventFilter.surface() is None
    assert not eventFilter.sampler.dragging

    with pytest.raises(ConfigurationError):
        eventFilter.attach(None)


def test_mouse_drag(eventFilter, sampler):
    assert not send(eventFilter, FakeMouseEvent(QEvent.MouseMove, 5, 5))

    assert send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress, 10, 10))
    assert send(eventFilter, FakeMouseEvent(QEvent.MouseMove, 25, 5))
    assert send(eventFilter, FakeMouseEvent(QEvent.MouseButtonRelease, 25, 5))

    np.testing.assert_array_equal(sampler.sample.dragDelta, [15, -5])
    assert not sampler.sample.panMode
    assert not sampler.dragging


def test_pan_buttons_and_modifiers(eventFilter, sampler):
    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress, button=Qt.RightButton))
    assert sampler.sample.panMode
    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonRelease))

    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress, modifiers=Qt.ShiftModifier))
    assert sampler.sample.panMode
    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonRelease))

    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress))
    assert not sampler.sample.panMode


def test_unhandled_button_is_passed_on(eventFilter, sampler):
    assert not send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress, button=Qt.BackButton))
    assert not sampler.dragging


def test_wheel_angle_delta(eventFilter, sampler):
    # one notch away from the user
    assert send(eventFilter, FakeWheelEvent(angleDelta=(0, 120)))
    assert sampler.sample.zoomDelta == -3 * LINE_HEIGHT


def test_wheel_pixel_delta(eventFilter, sampler):
    assert send(eventFilter, FakeWheelEvent(pixelDelta=(0, -12), angleDelta=(0, -120)))
    assert sampler.sample.zoomDelta == 12


def test_touch(eventFilter, sampler):
    assert send(eventFilter, FakeTouchEvent(QEvent.TouchBegin, [(0, 0)]))
    assert not sampler.sample.panMode
    send(eventFilter, FakeTouchEvent(QEvent.TouchUpdate, [(4, 3)]))
    np.testing.assert_array_equal(sampler.sample.dragDelta, [4, 3])

    # a second finger turns the gesture into a pan
    send(eventFilter, FakeTouchEvent(QEvent.TouchUpdate, [(4, 3), (50, 50)]))
    assert sampler.sample.panMode
    send(eventFilter, FakeTouchEvent(QEvent.TouchUpdate, [(6, 3), (52, 50)]))
    np.testing.assert_array_equal(sampler.sample.dragDelta, [6, 3])

    assert send(eventFilter, FakeTouchEvent(QEvent.TouchEnd, []))
    assert not sampler.dragging


def test_touch_cancel(eventFilter, sampler):
    send(eventFilter, FakeTouchEvent(QEvent.TouchBegin, [(0, 0)]))
    assert send(eventFilter, FakeEvent(QEvent.TouchCancel))
    assert not sampler.dragging


def test_context_menu_is_consumed(eventFilter):
    assert send(eventFilter, FakeEvent(QEvent.ContextMenu))


@pytest.mark.parametrize("eventType", [QEvent.FocusOut, QEvent.WindowDeactivate, QEvent.Hide])
def test_focus_loss_ends_drag(eventFilter, sampler, eventType):
    send(eventFilter, FakeMouseEvent(QEvent.MouseButtonPress))
    assert sampler.dragging
    assert not send(eventFilter, FakeEvent(eventType))
    assert not sampler.dragging
    send(eventFilter, FakeMouseEvent(QEvent.MouseMove, 40, 40))
    assert sampler.sample.isEmpty()


def test_other_events_pass_through(eventFilter):
    assert not send(eventFilter, FakeEvent(QEvent.Paint))
