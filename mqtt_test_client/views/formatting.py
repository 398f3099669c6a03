"""Text formatting for the message panels."""

import json
from datetime import datetime
from typing import Optional

from ..models.series import Series

NO_MESSAGE = "(no message yet)"
NO_MESSAGES = "(no messages yet)"


def format_latest_header(topic: str, received: Optional[datetime]) -> str:
    header = f"Topic: {topic or '-'}"
    if received:
        header += f" · Time: {received.astimezone().strftime('%Y-%m-%d %H:%M:%S')}"
    return header


def format_latest_raw(raw: str) -> str:
    return raw or NO_MESSAGE


def format_history(series: Series) -> str:
    """JSON dump of all samples."""
    if not series:
        return NO_MESSAGES
    return json.dumps([s.to_dict() for s in series])
