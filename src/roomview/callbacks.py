"""Signal/callback registration with explicit subscription handles.

The registry follows the matplotlib.cbook CallbackRegistry design: bound
methods are held through weak references so a registered object can still
be garbage collected. Every connect() returns a Subscription; releasing it
disconnects the callback. A SubscriptionScope collects handles so an owner
can release all of them when it is disposed.
"""

import types
from weakref import ref


class Subscription:
    """Handle for one registration. Calling release() more than once is harmless."""

    def __init__(self, release):
        self._release = release

    @property
    def active(self):
        return self._release is not None

    def release(self):
        release, self._release = self._release, None
        if release is not None:
            release()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()


class SubscriptionScope:
    """Owns a set of subscriptions and releases them together."""

    def __init__(self):
        self._subscriptions = []

    def __len__(self):
        return len([s for s in self._subscriptions if s.active])

    def add(self, subscription):
        self._subscriptions.append(subscription)
        return subscription

    def releaseAll(self):
        subscriptions, self._subscriptions = self._subscriptions, []
        # last registered, first released
        for subscription in reversed(subscriptions):
            subscription.release()


class CallbackRegistry:
    """
    Handle registering and disconnecting for a set of signals and
    callbacks::

       registry = CallbackRegistry(['modeChanged', 'reset'])
       subscription = registry.connect('modeChanged', onModeChanged)
       registry.process('modeChanged', CameraMode.Orthographic)
       subscription.release()

    Connecting to a signal that was not declared raises ValueError.
    """

    def __init__(self, signals):
        self.signals = set(signals) if signals is not None else None
        # mapping from signal to the list of proxies, in connection order
        self.callbacks = {}

    def connect(self, signal, func):
        """Register *func* to be called when *signal* is processed."""
        if self.signals is not None and signal not in self.signals:
            raise ValueError("Unknown signal: %s" % signal)
        proxy = self._BoundMethodProxy(func)
        self.callbacks.setdefault(signal, []).append(proxy)
        return Subscription(lambda: self._disconnectProxy(signal, proxy))

    def connectionCount(self, signal):
        return len(self.callbacks.get(signal, []))

    def process(self, signal, *args, **kwargs):
        """Call every function connected to *signal* with the given arguments."""
        if signal not in self.callbacks:
            return
        # iterate over a copy, callbacks may disconnect during processing
        for proxy in list(self.callbacks[signal]):
            try:
                proxy(*args, **kwargs)
            except ReferenceError:
                self._disconnectProxy(signal, proxy)

    def _disconnectProxy(self, signal, proxy):
        proxies = self.callbacks.get(signal)
        if proxies is None:
            return
        for i, existing in enumerate(proxies):
            if existing is proxy:
                del proxies[i]
                break
        if not proxies:
            del self.callbacks[signal]

    class _BoundMethodProxy:
        """Calls a function, holding bound method receivers by weak reference."""

        def __init__(self, callback):
            if isinstance(callback, types.MethodType):
                self._obj = ref(callback.__self__)
                self._func = callback.__func__
            else:
                self._obj = None
                self._func = callback

        def __call__(self, *args, **kwargs):
            if self._obj is not None:
                obj = self._obj()
                if obj is None:
                    raise ReferenceError
                return self._func(obj, *args, **kwargs)
            return self._func(*args, **kwargs)
