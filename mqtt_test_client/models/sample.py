"""
Data models for parsed broker payloads.

Responsibility: Immutable sample type and the tagged parse result
returned by the message interpreter.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Sample:
    """One structured data point derived from an accepted payload."""
    time: datetime
    min: float
    max: float
    average: float

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used by the history panel."""
        return {
            "time": self.time.isoformat(),
            "min": self.min,
            "max": self.max,
            "average": self.average,
        }


class RejectReason(Enum):
    """Why a payload did not produce a sample."""
    MISSING_KEYWORD = "missing_keyword"
    MALFORMED_FIELD = "malformed_field"
    NON_NUMERIC = "non_numeric"


@dataclass(frozen=True)
class Accepted:
    sample: Sample

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    detail: str = field(default="")

    @property
    def accepted(self) -> bool:
        return False


ParseResult = Union[Accepted, Rejected]


def sample_of(result: ParseResult) -> Optional[Sample]:
    """Returns the sample of an accepted result, None otherwise."""
    if isinstance(result, Accepted):
        return result.sample
    return None
