# core/numeric.py
"""
Zero-divisor policy shared by every normalization step.

A denominator whose magnitude is <= ZERO_EPSILON is replaced with the
fallback divisor (1.0 unless stated otherwise). ZERO_EPSILON is 0.0, so only
exact zeros are substituted; tiny but non-zero divisors are used as-is.
"""
from typing import Union

import numpy as np

ZERO_EPSILON = 0.0

ArrayLike = Union[float, np.ndarray]


def is_zero(value: ArrayLike) -> Union[bool, np.ndarray]:
    if isinstance(value, np.ndarray):
        return np.abs(value) <= ZERO_EPSILON
    return abs(value) <= ZERO_EPSILON


def safe_divisor(denominator: ArrayLike, fallback: float = 1.0) -> ArrayLike:
    if isinstance(denominator, np.ndarray):
        return np.where(is_zero(denominator), fallback, denominator)
    return fallback if is_zero(denominator) else denominator


def safe_divide(numerator: ArrayLike, denominator: ArrayLike, fallback: float = 1.0) -> ArrayLike:
    """numerator / denominator, with zero denominators swapped for `fallback`."""
    return numerator / safe_divisor(denominator, fallback)
