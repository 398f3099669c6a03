"""
Message Interpreter for broker payloads.

Responsibility: Turn a raw text payload of the form
"Average, <a>; Min, <m>; Max, <M>;" into a Sample.

The three fields are read by position (average, min, max); the label
text is only checked for the presence of the keywords in the whole
message. Rejected payloads never produce a partial sample.
"""

import logging
import math
import random
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..models.sample import Accepted, ParseResult, RejectReason, Rejected, Sample, sample_of

logger = logging.getLogger(__name__)

REQUIRED_KEYWORDS = ("average", "min", "max")
RECORD_SEPARATOR = ";"
VALUE_SEPARATOR = ","

# Plain ASCII decimal literal, input is already lower-cased
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?", re.ASCII)

FIELD_NAMES = ("average", "min", "max")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def interpret(raw: str, clock: Optional[Callable[[], datetime]] = None) -> ParseResult:
    """
    Interprets a raw payload.

    Args:
        raw: Payload text as received from the broker
        clock: Time source for the sample timestamp (defaults to utc_now)

    Returns:
        Accepted(sample) or Rejected(reason)
    """
    text = raw.lower()

    missing = [kw for kw in REQUIRED_KEYWORDS if kw not in text]
    if missing:
        return Rejected(RejectReason.MISSING_KEYWORD, f"missing keyword(s): {', '.join(missing)}")

    segments = text.split(RECORD_SEPARATOR)
    if len(segments) < len(FIELD_NAMES):
        return Rejected(
            RejectReason.MALFORMED_FIELD,
            f"expected {len(FIELD_NAMES)} segments, got {len(segments)}"
        )

    values: List[float] = []
    for name, segment in zip(FIELD_NAMES, segments):
        if VALUE_SEPARATOR not in segment:
            return Rejected(RejectReason.MALFORMED_FIELD, f"{name} segment has no '{VALUE_SEPARATOR}'")

        value_text = segment.split(VALUE_SEPARATOR, 1)[1].strip()
        if not _NUMBER_RE.fullmatch(value_text):
            return Rejected(RejectReason.NON_NUMERIC, f"{name} value {value_text!r} is not a number")

        value = float(value_text)
        if not math.isfinite(value):
            return Rejected(RejectReason.NON_NUMERIC, f"{name} value {value_text!r} is out of range")

        values.append(value)

    average, minimum, maximum = values
    now = clock() if clock else utc_now()
    return Accepted(Sample(time=now, min=minimum, max=maximum, average=average))


def parse(raw: str, clock: Optional[Callable[[], datetime]] = None) -> Optional[Sample]:
    """Returns the parsed sample or None if the payload was rejected."""
    return sample_of(interpret(raw, clock))


def generate_test_payload(rng: Optional[random.Random] = None) -> str:
    """
    Builds a random well-formed payload for the Test button.

    Ranges: average 90-109, min 30-79, max 120-199 (integers).
    """
    rng = rng or random
    average = rng.randrange(90, 110)
    minimum = rng.randrange(30, 80)
    maximum = rng.randrange(120, 200)
    return f"Average, {average}; Min, {minimum}; Max, {maximum};"
