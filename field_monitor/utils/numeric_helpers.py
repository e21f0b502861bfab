"""
Numeric helper functions shared by the indicator and forecast pipelines.
"""
from typing import Optional, Sequence
import numpy as np


def mean(values: Sequence[float]) -> Optional[float]:
    """
    Arithmetic mean of a sequence.

    Args:
        values: Numbers to average

    Returns:
        Mean as a float, or None for an empty sequence
    """
    if len(values) == 0:
        return None
    return float(np.mean(np.asarray(values, dtype=float)))


def percent_change(previous: Optional[float], current: Optional[float]) -> Optional[float]:
    """
    Relative change from previous to current, in percent.

    Args:
        previous: Reference value
        current: New value

    Returns:
        (current - previous) / previous * 100, or None when either value is
        missing or the reference is zero
    """
    if previous is None or current is None or previous == 0:
        return None
    return (current - previous) / previous * 100.0


def round_to(value: float, decimals: int = 2) -> float:
    """Round half away from zero, the way a display formats a number."""
    quantum = 10 ** decimals
    rounded = np.floor(abs(value) * quantum + 0.5) / quantum
    return float(np.copysign(rounded, value))


def floor_at_zero(value: float) -> float:
    return max(0.0, value)
