"""
MQTT Connection Manager for the test client.

Responsibility: Own the single broker connection (MQTT over WebSockets),
translate paho-mqtt callbacks into ConnectionEvents and hand them to the
UI thread through a per-connection queue.

paho-mqtt runs its network loop in a background thread. Callbacks from
that thread never touch application state, they only enqueue events that
the presenter drains with poll_events() from the Tk main loop.
"""

import logging
import queue
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import paho.mqtt.client as mqtt

from .broker_url import BrokerEndpoint, DEFAULT_WS_PATH, parse_broker_url, validate_topic

logger = logging.getLogger(__name__)


class EventKind(Enum):
    CONNECTED = "connected"
    SUBSCRIBED = "subscribed"
    RECONNECTING = "reconnecting"
    OFFLINE = "offline"
    CLOSED = "closed"
    ERROR = "error"
    MESSAGE = "message"


@dataclass(frozen=True)
class ConnectionEvent:
    kind: EventKind
    topic: str = ""
    payload: str = ""
    message: str = ""


@dataclass(frozen=True)
class ConnectionOptions:
    """Fixed connection parameters applied when a connection is opened."""
    clean_session: bool = True
    connect_timeout: float = 10.0
    reconnect_interval: float = 2.0
    keepalive: int = 60
    client_id_prefix: str = "mqtt-test-client"
    secure_context: bool = True
    default_ws_path: str = DEFAULT_WS_PATH
    qos: int = 0


def generate_client_id(prefix: str) -> str:
    """Random client id per connection attempt."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class BrokerConnection:
    """
    Handle for one live broker connection.

    Created by ConnectionManager.connect(); paho callbacks are bound to
    this object and only ever write into its own event queue.
    """

    def __init__(self, endpoint: BrokerEndpoint, topic: str, options: ConnectionOptions,
                 client_factory: Callable[..., Any] = mqtt.Client):
        self.endpoint = endpoint
        self.topic = topic
        self.options = options
        self.client_id = generate_client_id(options.client_id_prefix)

        self._events: "queue.Queue[ConnectionEvent]" = queue.Queue()
        self._closing = False

        self.stats = {
            "messages_received": 0,
            "connect_failures": 0,
            "disconnects": 0,
        }

        self.client = client_factory(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.client_id,
            clean_session=options.clean_session,
            protocol=mqtt.MQTTv311,
            transport="websockets",
        )
        self._configure_client()

    def _configure_client(self):
        """Applies transport, timing and callback settings."""
        self.client.ws_set_options(path=self.endpoint.path)
        if self.endpoint.secure:
            self.client.tls_set()

        self.client.connect_timeout = self.options.connect_timeout
        # Fixed interval: min and max delay are the same
        self.client.reconnect_delay_set(
            min_delay=self.options.reconnect_interval,
            max_delay=self.options.reconnect_interval,
        )

        self.client.on_connect = self._on_connect
        self.client.on_connect_fail = self._on_connect_fail
        self.client.on_disconnect = self._on_disconnect
        self.client.on_subscribe = self._on_subscribe
        self.client.on_message = self._on_message

    # =================================================================
    # Lifecycle
    # =================================================================

    def open(self):
        """Starts the asynchronous connect; returns immediately."""
        logger.info(
            f"Connecting to {self.endpoint.host}:{self.endpoint.port}{self.endpoint.path} "
            f"as {self.client_id}"
        )
        self.client.connect_async(
            self.endpoint.host,
            port=self.endpoint.port,
            keepalive=self.options.keepalive,
        )
        self.client.loop_start()

    def close(self):
        """Stops the network loop; events raised afterwards are dropped."""
        self._closing = True
        try:
            self.client.disconnect()
        finally:
            self.client.loop_stop()
        logger.info(f"Connection {self.client_id} closed")

    @property
    def closing(self) -> bool:
        return self._closing

    def poll(self) -> List[ConnectionEvent]:
        """Drains all pending events without blocking."""
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events

    def _emit(self, kind: EventKind, **fields):
        if self._closing:
            return
        self._events.put(ConnectionEvent(kind, **fields))

    # =================================================================
    # paho-mqtt callbacks (network thread)
    # =================================================================

    def _on_connect(self, client, userdata, flags, reason_code, properties):
        if reason_code.is_failure:
            logger.error(f"Broker refused connection: {reason_code}")
            self._emit(EventKind.ERROR, message=f"Connection refused: {reason_code}")
            return

        logger.info(f"Connected to {self.endpoint.url}")
        self._emit(EventKind.CONNECTED)

        result, mid = client.subscribe(self.topic, qos=self.options.qos)
        if result != mqtt.MQTT_ERR_SUCCESS:
            logger.error(f"Subscribe request for {self.topic} failed: {result}")
            self._emit(EventKind.ERROR, message=f"Subscribe error: {mqtt.error_string(result)}")

    def _on_connect_fail(self, client, userdata):
        self.stats["connect_failures"] += 1
        logger.warning(f"Connection attempt to {self.endpoint.url} failed")
        self._emit(EventKind.ERROR, message="Connection failed")
        self._emit(EventKind.RECONNECTING)

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties):
        self.stats["disconnects"] += 1
        if self._closing:
            logger.debug("Disconnected on request")
            return

        logger.warning(f"Connection lost (reason: {reason_code})")
        self._emit(EventKind.CLOSED)
        self._emit(EventKind.OFFLINE)
        self._emit(EventKind.RECONNECTING)

    def _on_subscribe(self, client, userdata, mid, reason_code_list, properties):
        failures = [rc for rc in reason_code_list if rc.is_failure]
        if failures:
            logger.error(f"Subscription to {self.topic} rejected: {failures[0]}")
            self._emit(EventKind.ERROR, message=f"Subscribe error: {failures[0]}")
            return

        logger.info(f"Subscribed to {self.topic}")
        self._emit(EventKind.SUBSCRIBED, topic=self.topic)

    def _on_message(self, client, userdata, msg):
        try:
            payload = msg.payload.decode("utf-8", errors="replace")
        except (AttributeError, TypeError) as e:
            logger.error(f"Undecodable payload on {msg.topic}: {e}")
            return

        self.stats["messages_received"] += 1
        logger.debug(f"MQTT message received: {msg.topic}")
        self._emit(EventKind.MESSAGE, topic=msg.topic, payload=payload)


class ConnectionManager:
    """
    Owns at most one BrokerConnection.

    Features:
    - URL and topic validation before any network attempt
    - Replace-on-connect with teardown errors swallowed
    - Idempotent disconnect
    - Event polling restricted to the active connection
    """

    def __init__(self, options: Optional[ConnectionOptions] = None,
                 client_factory: Callable[..., Any] = mqtt.Client):
        self.options = options or ConnectionOptions()
        self._client_factory = client_factory
        self._active: Optional[BrokerConnection] = None

        logger.info("ConnectionManager initialized")

    @property
    def active(self) -> Optional[BrokerConnection]:
        return self._active

    def connect(self, url: str, topic: str,
                options: Optional[ConnectionOptions] = None) -> BrokerConnection:
        """
        Opens a new connection, replacing any existing one.

        Args:
            url: ws:// or wss:// broker URL
            topic: Topic to subscribe to once connected
            options: Overrides the manager's default options

        Returns:
            The new connection handle

        Raises:
            BrokerUrlError: Invalid URL or topic (no network attempt made)
        """
        options = options or self.options
        endpoint = parse_broker_url(url, options.secure_context, options.default_ws_path)
        topic = validate_topic(topic)

        self.disconnect()

        connection = BrokerConnection(endpoint, topic, options, self._client_factory)
        self._active = connection
        connection.open()
        return connection

    def disconnect(self, handle: Optional[BrokerConnection] = None):
        """
        Tears down the given or active connection. Safe to call repeatedly.

        A handle other than the active one is closed without touching
        the active connection.
        """
        target = handle or self._active
        if target is None:
            return

        if target is self._active:
            self._active = None

        if target.closing:
            return

        try:
            target.close()
        except Exception as e:
            logger.warning(f"Ignoring teardown error for {target.client_id}: {e}")

    def poll_events(self) -> List[ConnectionEvent]:
        """Pending events of the active connection, oldest first."""
        if self._active is None:
            return []
        return self._active.poll()

    def get_status(self) -> Dict[str, Any]:
        connection = self._active
        if connection is None:
            return {"active": False}
        return {
            "active": True,
            "url": connection.endpoint.url,
            "topic": connection.topic,
            "client_id": connection.client_id,
            **connection.stats,
        }
