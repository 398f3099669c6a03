"""
Main Presenter for the MQTT test client.

Responsibility: Coordinates between views and models, handles user
actions and connection events. Follows MVP pattern - the view only
sees the state store, never the connection manager.
"""

import dataclasses
import logging
import random
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from ..models.sample import Accepted
from ..models.series import EMPTY_SERIES, append
from ..models.state_store import ConnectionState, StateStore
from ..processing.broker_url import BrokerUrlError
from ..processing.message_parser import generate_test_payload, interpret, utc_now
from ..processing.mqtt_client import ConnectionEvent, ConnectionManager, EventKind

logger = logging.getLogger(__name__)


class MainPresenter:
    """
    Main presenter that orchestrates the application.

    Responsibilities:
    - Handle user interactions from the view
    - Own the connection manager and drain its events
    - Feed payloads through the message interpreter
    - Keep the state store current
    """

    def __init__(self, store: StateStore, connection_manager: ConnectionManager,
                 max_samples: Optional[int] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.connection_manager = connection_manager
        self.max_samples = max_samples
        self._clock = clock or utc_now
        self._rng = rng

        self.view = None
        self.poll_interval_ms = 100

        self.stats = {
            "messages_received": 0,
            "samples_accepted": 0,
            "payloads_rejected": 0,
        }

        logger.info("MainPresenter initialized")

    def initialize(self, view, poll_interval_ms: int = 100):
        """
        Attaches the view and starts the event pump.

        Args:
            view: Main window view
            poll_interval_ms: Interval for draining connection events
        """
        self.view = view
        self.poll_interval_ms = poll_interval_ms

        self.view.set_callbacks({
            'on_connect': self.handle_connect,
            'on_disconnect': self.handle_disconnect,
            'on_test_message': self.handle_test_message,
            'on_clear_series': self.handle_clear_series,
            'on_closing': self.handle_closing,
        })
        self.view.start_polling(self.process_events, poll_interval_ms)

        logger.info("MainPresenter initialized with view")

    # =================================================================
    # User Interaction Handlers
    # =================================================================

    def handle_connect(self, broker_url: str, topic: str) -> bool:
        """
        Connect / Reconnect request from the view.

        Returns:
            True if a connection attempt was started
        """
        try:
            self.connection_manager.connect(broker_url, topic)
        except BrokerUrlError as e:
            logger.warning(f"Connection rejected: {e}")
            self.store.update(connection_state=ConnectionState.ERROR, status=str(e))
            return False
        except Exception as e:
            logger.error(f"Connect error: {e}", exc_info=True)
            self.store.update(
                connection_state=ConnectionState.ERROR,
                status=f"Error: {e}",
                is_connected=False,
            )
            return False

        self.store.update(
            connection_state=ConnectionState.CONNECTING,
            status=f"Connecting to {broker_url} ...",
            is_connected=False,
            broker_url=broker_url,
            topic=topic.strip(),
        )
        return True

    def handle_disconnect(self):
        """Disconnect request from the view."""
        try:
            self.connection_manager.disconnect()
        except Exception as e:
            logger.error(f"Disconnect error: {e}")

        self.store.update(
            connection_state=ConnectionState.CLOSED,
            status="Disconnected",
            is_connected=False,
        )

    def handle_test_message(self):
        """Feeds a generated payload through the interpreter."""
        payload = generate_test_payload(self._rng)
        logger.debug(f"Test payload: {payload}")
        self._interpret_payload(payload)

    def handle_clear_series(self):
        """Drops the collected samples."""
        self.store.update(series=EMPTY_SERIES)
        logger.info("Series cleared")

    def handle_closing(self):
        """Window close request from the view."""
        try:
            self.shutdown()
        finally:
            if self.view:
                self.view.destroy()

    # =================================================================
    # Connection Events
    # =================================================================

    def process_events(self):
        """Drains pending connection events (called from the UI loop)."""
        try:
            events = self.connection_manager.poll_events()
        except Exception as e:
            logger.error(f"Event polling error: {e}")
            return

        for event in events:
            try:
                self._handle_event(event)
            except Exception as e:
                logger.error(f"Event handling error ({event.kind.value}): {e}", exc_info=True)

    def _handle_event(self, event: ConnectionEvent):
        kind = event.kind

        if kind is EventKind.MESSAGE:
            self._handle_message(event.topic, event.payload)
        elif kind is EventKind.CONNECTED:
            self.store.update(
                connection_state=ConnectionState.SUBSCRIBING,
                status="Connected. Subscribing...",
                is_connected=True,
            )
        elif kind is EventKind.SUBSCRIBED:
            self.store.update(
                connection_state=ConnectionState.SUBSCRIBED,
                status=f"Subscribed to: {event.topic or self.store.state.topic}",
            )
        elif kind is EventKind.RECONNECTING:
            self.store.update(connection_state=ConnectionState.RECONNECTING, status="Reconnecting...")
        elif kind is EventKind.CLOSED:
            self.store.update(
                connection_state=ConnectionState.CLOSED,
                status="Connection closed",
                is_connected=False,
            )
        elif kind is EventKind.OFFLINE:
            self.store.update(connection_state=ConnectionState.OFFLINE, status="Offline", is_connected=False)
        elif kind is EventKind.ERROR:
            self.store.update(connection_state=ConnectionState.ERROR, status=f"Error: {event.message}")

    def _handle_message(self, topic: str, payload: str):
        self.stats["messages_received"] += 1
        self.store.update(latest_topic=topic, latest_time=self._clock(), latest_raw=payload)
        self._interpret_payload(payload)

    def _interpret_payload(self, payload: str):
        result = interpret(payload, self._clock)

        if not isinstance(result, Accepted):
            self.stats["payloads_rejected"] += 1
            logger.debug(f"Payload dropped ({result.reason.value}): {result.detail}")
            return

        series = self.store.state.series
        sample = result.sample
        if series and sample.time < series[-1].time:
            # Clock stepped back; keep the series monotonic
            logger.warning(
                f"Clock went backwards ({sample.time.isoformat()} < "
                f"{series[-1].time.isoformat()}), sample time clamped"
            )
            sample = dataclasses.replace(sample, time=series[-1].time)

        series = append(series, sample, self.max_samples)

        self.stats["samples_accepted"] += 1
        self.store.update(series=series)

    # =================================================================
    # Application Lifecycle
    # =================================================================

    def shutdown(self):
        """Stops the event pump and closes the connection."""
        try:
            if self.view:
                self.view.stop_polling()
            self.connection_manager.disconnect()
            logger.info("MainPresenter shutdown complete")
        except Exception as e:
            logger.error(f"Shutdown error: {e}")

    def get_status(self) -> Dict[str, Any]:
        state = self.store.state
        return {
            "connection_state": state.connection_state.value,
            "connected": state.is_connected,
            "samples": len(state.series),
            **self.stats,
            "connection": self.connection_manager.get_status(),
        }
