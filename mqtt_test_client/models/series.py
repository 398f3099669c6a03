"""
Series accumulator.

Responsibility: Purely additive, ordered in-memory history of samples.
A series is a plain tuple, so every append produces a new value and
earlier snapshots held by views stay untouched.
"""

import logging
from typing import Optional, Tuple

from .sample import Sample

logger = logging.getLogger(__name__)

Series = Tuple[Sample, ...]

EMPTY_SERIES: Series = ()


class SeriesOrderError(ValueError):
    """Raised when a sample is older than the last sample of the series."""
    pass


def append(series: Series, sample: Sample, max_samples: Optional[int] = None) -> Series:
    """
    Appends a sample to a series.

    Args:
        series: Existing series (not modified)
        sample: Sample to append, must not be older than the last one
        max_samples: Optional retention cap, oldest samples are dropped
            once it is exceeded. None keeps the full history.

    Returns:
        New series with the sample at the end

    Raises:
        SeriesOrderError: If the sample time goes backwards
    """
    if series and sample.time < series[-1].time:
        raise SeriesOrderError(
            f"Sample at {sample.time.isoformat()} is older than "
            f"last sample at {series[-1].time.isoformat()}"
        )

    if max_samples is not None and max_samples < 1:
        raise ValueError(f"max_samples must be positive, got {max_samples}")

    result = series + (sample,)

    if max_samples is not None and len(result) > max_samples:
        dropped = len(result) - max_samples
        result = result[dropped:]
        logger.debug(f"Series retention cap reached, dropped {dropped} sample(s)")

    return result

