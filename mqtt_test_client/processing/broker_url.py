"""
Broker URL validation.

Responsibility: Check a WebSocket broker URL before any network
activity and split it into the parts paho-mqtt needs.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

SECURE_SCHEME = "wss"
PLAIN_SCHEME = "ws"
DEFAULT_PORTS = {SECURE_SCHEME: 443, PLAIN_SCHEME: 80}
DEFAULT_WS_PATH = "/mqtt"


class BrokerUrlError(ValueError):
    """Broker URL or topic cannot be used for a connection."""
    pass


class InsecureBrokerUrlError(BrokerUrlError):
    """Plain ws:// URL while secure mode is enabled."""

    def __init__(self, url: str):
        super().__init__(f"Broker must use {SECURE_SCHEME}:// when secure mode is enabled")
        self.url = url


@dataclass(frozen=True)
class BrokerEndpoint:
    url: str
    scheme: str
    host: str
    port: int
    path: str

    @property
    def secure(self) -> bool:
        return self.scheme == SECURE_SCHEME


def parse_broker_url(url: str, secure_context: bool = True,
                     default_path: str = DEFAULT_WS_PATH) -> BrokerEndpoint:
    """
    Validates a broker URL.

    Args:
        url: ws:// or wss:// URL
        secure_context: Only wss:// is accepted when True
        default_path: WebSocket path used when the URL has none

    Returns:
        BrokerEndpoint with host, port and path

    Raises:
        InsecureBrokerUrlError: ws:// URL in secure mode
        BrokerUrlError: Any other unusable URL
    """
    url = (url or "").strip()
    if not url:
        raise BrokerUrlError("Broker URL is required")

    # Scheme check first, so the secure mode message wins over parse problems
    scheme = url.split("://", 1)[0].lower() if "://" in url else ""
    if secure_context and scheme != SECURE_SCHEME:
        raise InsecureBrokerUrlError(url)
    if scheme not in DEFAULT_PORTS:
        raise BrokerUrlError(f"Broker URL must start with {PLAIN_SCHEME}:// or {SECURE_SCHEME}://")

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise BrokerUrlError(f"Invalid broker URL: {e}") from e

    if not parts.hostname:
        raise BrokerUrlError("Broker URL has no host")

    path = parts.path or default_path
    if parts.query:
        path = f"{path}?{parts.query}"

    return BrokerEndpoint(
        url=url,
        scheme=scheme,
        host=parts.hostname,
        port=port or DEFAULT_PORTS[scheme],
        path=path,
    )


def validate_topic(topic: str) -> str:
    """Returns the stripped topic or raises BrokerUrlError if it is empty."""
    topic = (topic or "").strip()
    if not topic:
        raise BrokerUrlError("Topic is required")
    return topic
