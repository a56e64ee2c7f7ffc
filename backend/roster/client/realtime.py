import logging
import weakref
from typing import Callable

logger = logging.getLogger(__name__)

NAMESPACE = '/ws'
PLAYERS_CHANGED = 'players_changed'


class _PlayersDispatcher:
    """One per socket client: owns the event handler and the room membership.

    The server room is joined when the first handle opens and left when the
    last one closes; payloads fan out to every open handle.
    """

    def __init__(self, sio):
        self._sio = weakref.ref(sio)
        self.subscriptions = []
        sio.on(PLAYERS_CHANGED, self._dispatch, namespace=NAMESPACE)

    def _dispatch(self, payload):
        for subscription in list(self.subscriptions):
            subscription._deliver(payload)

    def add(self, subscription) -> None:
        first = not self.subscriptions
        self.subscriptions.append(subscription)
        if first:
            self._sio().emit('subscribe_players', {}, namespace=NAMESPACE)

    def remove(self, subscription) -> None:
        if subscription not in self.subscriptions:
            return
        self.subscriptions.remove(subscription)
        if self.subscriptions:
            return
        sio = self._sio()
        if sio is None:
            return
        try:
            sio.emit('unsubscribe_players', {}, namespace=NAMESPACE)
        except Exception as exc:
            # Connection may already be gone; delivery is stopped either way
            logger.warning(f"[realtime] unsubscribe failed: {exc}")


_dispatchers = weakref.WeakKeyDictionary()


def _dispatcher_for(sio) -> _PlayersDispatcher:
    dispatcher = _dispatchers.get(sio)
    if dispatcher is None:
        dispatcher = _dispatchers[sio] = _PlayersDispatcher(sio)
    return dispatcher


class PlayersSubscription:
    """Scoped subscription to player change notifications.

    The caller owns the handle and must call :meth:`close` (or use it as a
    context manager) when the consuming context ends. ``sio`` is a connected
    ``socketio.Client``; it is not disconnected on close. Several handles
    may share one client without affecting each other.
    """

    def __init__(self, dispatcher: _PlayersDispatcher, callback: Callable[[dict], None]):
        self.dispatcher = dispatcher
        self.callback = callback
        self.closed = False

    @classmethod
    def open(cls, sio, callback: Callable[[dict], None]) -> 'PlayersSubscription':
        dispatcher = _dispatcher_for(sio)
        subscription = cls(dispatcher, callback)
        dispatcher.add(subscription)
        return subscription

    def _deliver(self, payload):
        if self.closed:
            return
        self.callback(payload)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.dispatcher.remove(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def subscribe_players(sio, callback: Callable[[dict], None]) -> PlayersSubscription:
    return PlayersSubscription.open(sio, callback)
