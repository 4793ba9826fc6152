# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Shape and stride arithmetic shared by the indexing and view machinery."""

from __future__ import annotations

from numbers import Integral, Real
from typing import Any, List, Sequence, Tuple

import numpy as np

from ._backend import MAX_RANK
from .errors import (
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidReshapeError,
    ShapeMismatchError,
    UnsupportedRankError,
)

Shape = Tuple[int, ...]


def compute_stride(shape: Sequence[int]) -> Shape:
    """Row-major strides: ``stride[d]`` is the product of ``shape[d+1:]``."""

    stride = [1] * len(shape)
    running = 1
    for d in range(len(shape) - 1, -1, -1):
        stride[d] = running
        running *= shape[d]
    return tuple(stride)


def numel(shape: Sequence[int]) -> int:
    total = 1
    for size in shape:
        total *= size
    return total


def check_rank(rank: int) -> None:
    if rank < 1 or rank > MAX_RANK:
        raise UnsupportedRankError(
            f"tensors must have between 1 and {MAX_RANK} dimensions, got {rank}"
        )


def as_index(value: Any, what: str = "index") -> int:
    """Coerce ``value`` to ``int`` accepting anything with ``__index__``."""

    if isinstance(value, bool):
        raise TypeError(f"{what} must be an integer, got bool")
    if isinstance(value, Integral):
        return int(value)
    if hasattr(value, "__index__"):
        return int(value.__index__())
    raise TypeError(f"{what} must be an integer, got {type(value).__name__}")


def normalize_shape(shape: Sequence[Any], what: str = "size") -> Shape:
    """Flatten ``f(2, 3)`` / ``f((2, 3))`` argument styles into a tuple."""

    if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
        shape = shape[0]
    return tuple(as_index(s, what) for s in shape)


def normalize_dim(dim: Any, rank: int) -> int:
    """Map ``dim`` from ``[-rank, rank)`` onto ``[0, rank)``."""

    dim = as_index(dim, "dim")
    if dim < -rank or dim >= rank:
        raise IndexOutOfRangeError(
            f"Dimension out of range (expected to be in range of "
            f"[{-rank}, {rank - 1}], but got {dim})"
        )
    return dim + rank if dim < 0 else dim


def normalize_index(index: Any, size: int, dim: int) -> int:
    index = as_index(index)
    if index < -size or index >= size:
        raise IndexOutOfRangeError(
            f"index {index} is out of bounds for dimension {dim} with size {size}"
        )
    return index + size if index < 0 else index


def inverse_permutation(order: Sequence[int]) -> List[int]:
    inverse = [0] * len(order)
    for position, axis in enumerate(order):
        inverse[axis] = position
    return inverse


def rotation_order(dim: int, rank: int) -> List[int]:
    """``[dim] + [0..dim-1] + [dim+1..rank-1]``: bring ``dim`` to the front."""

    return [dim] + [d for d in range(rank) if d != dim]


def is_row_major(shape: Sequence[int], stride: Sequence[int]) -> bool:
    """True when ``stride`` addresses ``shape`` in row-major order.

    Size-1 axes are never stepped over so their stride is irrelevant.
    """

    expected = compute_stride(shape)
    return all(
        size == 1 or s == e for size, s, e in zip(shape, stride, expected)
    )


def infer_view_shape(shape: Sequence[Any], total: int) -> Shape:
    """Resolve a single ``-1`` entry and check the element count."""

    dims = [as_index(s, "size") for s in shape]
    inferred = [i for i, s in enumerate(dims) if s == -1]
    if len(inferred) > 1:
        raise InvalidReshapeError("only one dimension can be inferred")
    if any(s < -1 for s in dims):
        raise InvalidReshapeError(f"invalid shape dimension in {tuple(dims)}")
    known = numel(s for s in dims if s != -1)
    if inferred:
        if known == 0 or total % known != 0:
            raise InvalidReshapeError(
                f"shape {tuple(dims)} is invalid for input of size {total}"
            )
        dims[inferred[0]] = total // known
    elif known != total:
        raise InvalidReshapeError(
            f"shape {tuple(dims)} is invalid for input of size {total}"
        )
    return tuple(dims)


def offsets(index_ranges: Sequence[Sequence[int]], stride: Sequence[int]) -> np.ndarray:
    """Flat storage offsets of the cartesian product of ``index_ranges``.

    The result enumerates positions in row-major order: the last axis varies
    fastest. Works for any rank by accumulating one axis at a time.
    """

    flat = np.zeros(1, dtype=np.int64)
    for indices, step in zip(index_ranges, stride):
        axis = np.asarray(indices, dtype=np.int64) * step
        flat = (flat[:, None] + axis[None, :]).reshape(-1)
    return flat


def row_major_offsets(shape: Sequence[int], stride: Sequence[int]) -> np.ndarray:
    """Offsets of every element of ``shape`` laid out under ``stride``."""

    return offsets([range(size) for size in shape], stride)


def infer_nested_shape(data: Any) -> Shape:
    """Shape of a nested list/tuple of numbers; ragged input is rejected."""

    shape: List[int] = []
    level = data
    while isinstance(level, (list, tuple)):
        shape.append(len(level))
        if len(shape) > MAX_RANK:
            raise UnsupportedRankError(
                f"nested data is deeper than the supported maximum of {MAX_RANK}"
            )
        if not level:
            break
        level = level[0]
    _check_nested(data, tuple(shape), 0)
    return tuple(shape)


def _check_nested(data: Any, shape: Shape, depth: int) -> None:
    if depth == len(shape):
        if isinstance(data, (list, tuple)):
            raise ShapeMismatchError("nested data is ragged: too many levels")
        if not isinstance(data, Real):
            raise TypeError(
                f"tensor elements must be numbers, got {type(data).__name__}"
            )
        return
    if not isinstance(data, (list, tuple)) or len(data) != shape[depth]:
        raise ShapeMismatchError(
            f"nested data is ragged: expected a sequence of length "
            f"{shape[depth]} at depth {depth}"
        )
    for item in data:
        _check_nested(item, shape, depth + 1)


def flatten_nested(data: Any) -> List[Any]:
    if not isinstance(data, (list, tuple)):
        return [data]
    flat: List[Any] = []
    for item in data:
        flat.extend(flatten_nested(item))
    return flat


def check_sizes(shape: Sequence[int]) -> None:
    for size in shape:
        if size < 0:
            raise InvalidArgumentError(
                f"negative dimension {size} in shape {tuple(shape)}"
            )
