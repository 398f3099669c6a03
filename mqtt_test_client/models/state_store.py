"""
Dashboard State Store.

Responsibility: Holds the process-wide dashboard state (connection,
status text, latest message, series) and notifies subscribed views
after every update. All updates are expected on the Tk main thread.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from .series import EMPTY_SERIES, Series

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle of the single broker connection."""
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    SUBSCRIBING = "subscribing"
    SUBSCRIBED = "subscribed"
    RECONNECTING = "reconnecting"
    OFFLINE = "offline"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class DashboardState:
    """Immutable snapshot of everything the views render."""
    connection_state: ConnectionState = ConnectionState.IDLE
    status: str = "Idle"
    is_connected: bool = False
    broker_url: str = ""
    topic: str = ""
    latest_raw: str = ""
    latest_topic: str = ""
    latest_time: Optional[datetime] = None
    series: Series = EMPTY_SERIES


StateListener = Callable[[DashboardState], None]


class StateStore:
    """
    Explicit state container with an observer mechanism.

    Features:
    - Snapshot replacement on every update
    - Subscribe/unsubscribe for listeners
    - Listener failures are logged and never reach the caller
    """

    def __init__(self, initial: Optional[DashboardState] = None):
        self._state = initial or DashboardState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Registers a listener called with the new state after each update.

        Returns:
            Function that removes the listener again
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes) -> DashboardState:
        """
        Replaces the current snapshot and notifies listeners.

        Raises:
            TypeError: If a field name is not part of DashboardState
        """
        self._state = dataclasses.replace(self._state, **changes)
        self._notify()
        return self._state

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"State listener error: {e}", exc_info=True)
