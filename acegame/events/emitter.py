"""
Event emitter and global event bus for the ACE engine.

Handlers subscribe per event type or to every event, with priorities. A
failing handler is logged and skipped so that it can never corrupt a state
transition that is already under way.
"""

from collections import defaultdict
from typing import Any, Dict, Callable, Union
import threading
import logging
from enum import Enum

logger = logging.getLogger("acegame.events")


class EventPriority(Enum):
    """Order in which handlers of one event run, highest first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


class EventEmitter:
    """
    Dispatches engine events to subscribed handlers.

    Handlers are registered per event type with `on` or `once`, or for every
    event with `on_any`. Registration returns a callable that removes the
    handler again. Subscriptions may change from any thread.
    """

    def __init__(self):
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    @staticmethod
    def _insert_by_priority(handlers, handler) -> None:
        # Higher priorities run first; equal priorities keep subscription order
        for i, existing in enumerate(handlers):
            if existing["priority"] < handler["priority"]:
                handlers.insert(i, handler)
                return
        handlers.append(handler)

    @staticmethod
    def _key(event_type: Union[str, Enum]) -> str:
        return event_type.name if isinstance(event_type, Enum) else event_type

    def on(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """
        Register `callback` for one event type.

        Args:
            event_type: EngineEventType member or its name
            callback: Called as callback(payload) for each matching event
            priority: Where the handler runs relative to the others

        Returns:
            Callable that removes the handler
        """
        event_type = self._key(event_type)
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._listeners[event_type], handler)

        def unsubscribe():
            with self._listener_lock:
                handlers = self._listeners[event_type]
                if handler in handlers:
                    handlers.remove(handler)

        return unsubscribe

    def once(
        self,
        event_type: Union[str, Enum],
        callback: Callable,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable:
        """Like `on`, but the handler is removed after its first call."""
        unsubscribe_ref = []

        def one_time_handler(event_data):
            try:
                callback(event_data)
            finally:
                if unsubscribe_ref:
                    unsubscribe_ref[0]()

        unsubscribe_ref.append(self.on(event_type, one_time_handler, priority))
        return unsubscribe_ref[0]

    def on_any(
        self, callback: Callable, priority: EventPriority = EventPriority.NORMAL
    ) -> Callable:
        """
        Register `callback` for every event.

        The callback receives an (event name, payload) tuple.
        """
        handler = {"callback": callback, "priority": priority.value}

        with self._listener_lock:
            self._insert_by_priority(self._global_listeners, handler)

        def unsubscribe():
            with self._listener_lock:
                if handler in self._global_listeners:
                    self._global_listeners.remove(handler)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Deliver a payload to the handlers of `event_type`, then to the
        catch-all handlers.

        Exceptions raised by handlers are logged at ERROR and swallowed.
        """
        event_type = self._key(event_type)

        with self._listener_lock:
            calls = [(h["callback"], data) for h in self._listeners.get(event_type, [])]
            calls.extend(
                (h["callback"], (event_type, data)) for h in self._global_listeners
            )

        # Handlers may subscribe or emit themselves, so the lock is released
        for callback, args in calls:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """Drop the handlers of one event type, or every handler when None."""
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                self._listeners[self._key(event_type)].clear()


class EventBus:
    """Holder of the process-wide EventEmitter shared by all engines."""

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types published by the ACE engine.
    """

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    GAME_RESET = "game_reset"

    # Player events
    PLAYER_JOINED = "player_joined"
    PLAYER_ELIMINATED = "player_eliminated"
    TURN_CHANGED = "turn_changed"

    # Trick events
    CARD_PLAYED = "card_played"
    TRICK_ENDED = "trick_ended"
    PUNISHMENT = "punishment"
