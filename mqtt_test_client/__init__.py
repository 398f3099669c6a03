"""
MQTT Test Client

Desktop dashboard that subscribes to one topic on a WebSocket MQTT broker,
parses "Average, a; Min, m; Max, M;" payloads and charts them live.

Components:
- processing: message interpreter, broker URL checks, connection manager
- models: samples, series, dashboard state store
- presenters: application logic between views and models
- views: Tk user interface
"""

__version__ = "0.1.0"

from .models.sample import Accepted, RejectReason, Rejected, Sample
from .models.series import append
from .models.state_store import ConnectionState, DashboardState, StateStore
from .processing.message_parser import interpret, parse

__all__ = [
    "Sample",
    "Accepted",
    "Rejected",
    "RejectReason",
    "ConnectionState",
    "DashboardState",
    "StateStore",
    "append",
    "interpret",
    "parse",
]
