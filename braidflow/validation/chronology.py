"""
Chronology Checks
=================

Validation of crossing-time sequences attached to braid words.

A time-stamped braid is valid when:

    1. there is exactly one crossing time per generator
    2. crossing times are nondecreasing (and never NaN)
    3. simultaneous crossings only involve commuting generators
       (generator indices differing by more than one)

Usage:
    from braidflow.validation import check_tcross, check_interval

    check_tcross(word, tcross)      # raises BadTimesError
    lo, hi = check_interval(5.0)    # (-inf, 5.0)
"""

from typing import Sequence, Tuple, Union

import numpy as np

from .errors import BadArgumentError, BadTimesError


def check_tcross(word: Sequence[int], tcross: Sequence[float]) -> None:
    """
    Validate crossing times against a braid word.

    Args:
        word: Signed generator indices
        tcross: Crossing time of each generator

    Raises:
        BadTimesError: If any of these conditions fails
    """
    word = np.asarray(word, dtype=np.int64).ravel()
    tcross = np.asarray(tcross, dtype=np.float64).ravel()

    if len(word) != len(tcross):
        raise BadTimesError(
            f"Must have as many crossing times as generators "
            f"({len(tcross)} times for {len(word)} generators)."
        )

    if np.isnan(tcross).any():
        raise BadTimesError("Crossing times must not be NaN.")

    if len(tcross) < 2:
        return

    dt = np.diff(tcross)
    if np.any(dt < 0):
        raise BadTimesError("Crossing times must be nondecreasing.")

    isim = np.flatnonzero(dt == 0)
    if isim.size:
        gap = np.abs(np.abs(word[isim + 1]) - np.abs(word[isim]))
        if np.any(gap <= 1):
            raise BadTimesError(
                "Cannot have simultaneous crossing times for noncommuting generators."
            )


def check_interval(
    interval: Union[float, Sequence[float]],
) -> Tuple[float, float]:
    """
    Normalize a truncation interval to a (lo, hi) pair.

    A single number means "up to and including that time".

    Raises:
        BadArgumentError: If the interval is empty, has more than two
            elements, or is not numeric
    """
    if interval is None or isinstance(interval, (str, bytes)):
        raise BadArgumentError("Interval must be numeric.", code="databraid:trunc:badarg")

    values = np.atleast_1d(np.asarray(interval))
    if values.dtype.kind not in "iuf":
        raise BadArgumentError("Interval must be numeric.", code="databraid:trunc:badarg")
    if values.ndim != 1 or values.size < 1 or values.size > 2:
        raise BadArgumentError(
            "Interval has to be a non-empty 1 or 2 element vector.",
            code="databraid:trunc:badarg",
        )

    if values.size == 1:
        return -np.inf, float(values[0])
    return float(values[0]), float(values[1])
