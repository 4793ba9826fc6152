# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Dtype registry and process-wide settings shared by every tensor."""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Dict, Iterator, Optional

import numpy as np

MAX_RANK = 8

# Closed set of element types. Each tag maps to exactly one homogeneous
# numpy buffer type, picked once when a tensor is created.
_DTYPES: Dict[str, np.dtype] = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
    "int64": np.dtype(np.int64),
}

# Names used by the persisted JSON format.
_PERSISTED_NAMES: Dict[str, str] = {
    "float32": "FloatTensor",
    "float64": "DoubleTensor",
    "int64": "LongTensor",
}
_PERSISTED_TO_DTYPE: Dict[str, str] = {v: k for k, v in _PERSISTED_NAMES.items()}

# Promotion rank: int64 < float32 < float64.
_PROMOTION_ORDER = ("int64", "float32", "float64")

_SETTINGS_LOCK = RLock()
_DEFAULT_DTYPE = "float32"
_GENERATOR: np.random.Generator = np.random.default_rng()


def validate_dtype(dtype: Optional[str]) -> str:
    """Return ``dtype`` or the default when ``None``; reject unknown names."""

    if dtype is None:
        return get_default_dtype()
    if dtype not in _DTYPES:
        raise ValueError(
            f"Unsupported dtype '{dtype}'; expected one of {sorted(_DTYPES)}"
        )
    return dtype


def numpy_dtype(dtype: str) -> np.dtype:
    return _DTYPES[dtype]


def dtype_from_numpy(np_dtype: np.dtype) -> str:
    """Map a numpy dtype onto the closest supported tag."""

    np_dtype = np.dtype(np_dtype)
    for name, candidate in _DTYPES.items():
        if candidate == np_dtype:
            return name
    if np.issubdtype(np_dtype, np.integer) or np.issubdtype(np_dtype, np.bool_):
        return "int64"
    if np.issubdtype(np_dtype, np.floating):
        return get_default_dtype()
    raise TypeError(f"Cannot build a tensor from numpy dtype {np_dtype}")


def is_floating(dtype: str) -> bool:
    return dtype != "int64"


def promote(left: str, right: str) -> str:
    """Common dtype of two operands."""

    return max(left, right, key=_PROMOTION_ORDER.index)


def persisted_name(dtype: str) -> str:
    return _PERSISTED_NAMES[dtype]


def dtype_from_persisted(name: str) -> str:
    try:
        return _PERSISTED_TO_DTYPE[name]
    except KeyError:
        raise ValueError(f"Unknown persisted tensor type '{name}'") from None


def cast_array(values: np.ndarray, dtype: str) -> np.ndarray:
    """Convert ``values`` to ``dtype``, truncating toward zero for integers."""

    target = _DTYPES[dtype]
    if values.dtype == target:
        return values
    if dtype == "int64" and np.issubdtype(values.dtype, np.floating):
        with np.errstate(invalid="ignore"):
            return np.trunc(values).astype(target)
    return values.astype(target)


# Global default dtype management


def set_default_dtype(dtype: str) -> None:
    """Set the global default data type for new floating tensors."""

    global _DEFAULT_DTYPE

    if dtype not in _DTYPES:
        raise ValueError(f"Unsupported dtype '{dtype}'")
    with _SETTINGS_LOCK:
        _DEFAULT_DTYPE = dtype


def get_default_dtype() -> str:
    """Get the current global default data type."""

    with _SETTINGS_LOCK:
        return _DEFAULT_DTYPE


@contextmanager
def default_dtype(dtype: str) -> Iterator[str]:
    """Temporarily switch the default dtype, restoring it on exit."""

    with _SETTINGS_LOCK:
        previous = get_default_dtype()
        set_default_dtype(dtype)
    try:
        yield dtype
    finally:
        set_default_dtype(previous)


# Random number generation


def manual_seed(seed: int) -> None:
    """Reseed the generator backing ``rand`` and ``randn``."""

    global _GENERATOR

    with _SETTINGS_LOCK:
        _GENERATOR = np.random.default_rng(int(seed))


def generator() -> np.random.Generator:
    with _SETTINGS_LOCK:
        return _GENERATOR


__all__ = [
    "MAX_RANK",
    "validate_dtype",
    "numpy_dtype",
    "dtype_from_numpy",
    "is_floating",
    "promote",
    "persisted_name",
    "dtype_from_persisted",
    "cast_array",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "manual_seed",
    "generator",
]
