import gc

import pytest

from roomview.callbacks import CallbackRegistry, Subscription, SubscriptionScope


class Listener:
    def __init__(self):
        self.values = []

    def onValue(self, value):
        self.values.append(value)


def test_connect_and_process():
    registry = CallbackRegistry(["changed"])
    values = []
    registry.connect("changed", values.append)
    registry.process("changed", 1)
    registry.process("changed", 2)
    assert values == [1, 2]


def test_unknown_signal():
    registry = CallbackRegistry(["changed"])
    with pytest.raises(ValueError):
        registry.connect("removed", print)


def test_release_disconnects():
    registry = CallbackRegistry(["changed"])
    values = []
    subscription = registry.connect("changed", values.append)
    assert registry.connectionCount("changed") == 1

    subscription.release()
    subscription.release()
    registry.process("changed", 1)

    assert values == []
    assert not subscription.active
    assert registry.connectionCount("changed") == 0


def test_subscription_context_manager():
    registry = CallbackRegistry(["changed"])
    values = []
    with registry.connect("changed", values.append):
        registry.process("changed", 1)
    registry.process("changed", 2)
    assert values == [1]


def test_bound_methods_are_weak():
    registry = CallbackRegistry(["changed"])
    listener = Listener()
    registry.connect("changed", listener.onValue)
    registry.process("changed", 1)
    assert listener.values == [1]

    del listener
    gc.collect()
    registry.process("changed", 2)
    assert registry.connectionCount("changed") == 0


def test_disconnect_during_process():
    registry = CallbackRegistry(["changed"])
    values = []
    subscriptions = []

    def once(value):
        values.append(value)
        subscriptions[0].release()

    subscriptions.append(registry.connect("changed", once))
    registry.process("changed", 1)
    registry.process("changed", 2)
    assert values == [1]


def test_scope_releases_in_reverse_order():
    order = []
    scope = SubscriptionScope()
    scope.add(Subscription(lambda: order.append("first")))
    scope.add(Subscription(lambda: order.append("second")))
    assert len(scope) == 2

    scope.releaseAll()

    assert order == ["second", "first"]
    assert len(scope) == 0
    scope.releaseAll()
    assert order == ["second", "first"]
