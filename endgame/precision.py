"""
Precision helpers shared by the interpolation engine and the endgame state.

Fixed precision is numpy complex128 (or any torch complex tensor); extended
precision is numpy clongdouble. On platforms where long double is plain
double the two regimes share a dtype and must be told apart by explicit tag.
"""
from enum import Enum

import numpy as np
import torch


class PrecisionTag(Enum):
    """Numeric regime of a point: fixed double or extended precision."""
    FIXED = "fixed"
    EXTENDED = "extended"


DTYPES = {
    PrecisionTag.FIXED: np.complex128,
    PrecisionTag.EXTENDED: np.clongdouble,
}


def precision_of(value) -> PrecisionTag:
    """Infer the precision regime a point or scalar belongs to."""
    if isinstance(value, torch.Tensor):
        return PrecisionTag.FIXED
    dtype = np.asarray(value).dtype
    if dtype.kind in "biu":
        return PrecisionTag.FIXED
    if dtype.kind not in "fc":
        raise TypeError(f"not a numeric point: dtype {dtype}")
    return PrecisionTag.EXTENDED if np.finfo(dtype).bits > 64 else PrecisionTag.FIXED


def as_point(values, precision: PrecisionTag = PrecisionTag.FIXED) -> np.ndarray:
    """Copy ``values`` into a 1-d complex array of the given precision."""
    return np.array(values, dtype=DTYPES[precision]).reshape(-1)


def as_time(value, precision: PrecisionTag = PrecisionTag.FIXED):
    """Complex scalar of the given precision."""
    return DTYPES[precision](value)


def machine_epsilon(value) -> float:
    """Unit roundoff of the real type underlying ``value``."""
    if isinstance(value, torch.Tensor):
        dtype = value.real.dtype if value.is_complex() else value.dtype
        if not dtype.is_floating_point:
            dtype = torch.float64
        return float(torch.finfo(dtype).eps)
    dtype = np.asarray(value).dtype
    if dtype.kind in "fc":
        return float(np.finfo(dtype).eps)
    return float(np.finfo(np.float64).eps)


def modulus(value) -> float:
    return float(abs(value))


def is_finite(value) -> bool:
    """True when every entry of a point or scalar is finite."""
    if isinstance(value, torch.Tensor):
        return bool(torch.isfinite(value).all())
    return bool(np.isfinite(np.asarray(value)).all())
