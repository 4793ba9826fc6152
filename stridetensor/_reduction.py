# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Reductions built on a single axis-rotation primitive.

Every per-axis reduction moves the reduced axis to the front with
``permute`` + ``contiguous``, so the storage becomes ``N`` consecutive
slabs, one per position along that axis. The slabs are folded
left-to-right, then the surviving axes are rotated back into place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

import numpy as np

from ._backend import cast_array, is_floating
from ._shape import inverse_permutation, normalize_dim, rotation_order
from .errors import EmptyReductionError

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor

Combine = Callable[[np.ndarray, np.ndarray], np.ndarray]


def rotate_to_front(tensor: "Tensor", dim: int) -> Tuple["Tensor", List[int]]:
    """Return ``tensor`` with ``dim`` moved to axis 0 (materialized) and the
    permutation that undoes the move."""

    d = normalize_dim(dim, tensor.ndim)
    order = rotation_order(d, tensor.ndim)
    return tensor.permute(order).contiguous(), inverse_permutation(order)


def slabs(front: "Tensor") -> np.ndarray:
    """View a front-rotated contiguous tensor as ``(N, rest)`` rows."""

    return front._storage.data.reshape(front.shape[0], -1)


def _require_floating(tensor: "Tensor", name: str) -> None:
    if not is_floating(tensor.dtype):
        raise RuntimeError(
            f"{name}(): expected a floating point tensor but got dtype {tensor.dtype}"
        )


def _finish(
    tensor: "Tensor",
    front: "Tensor",
    folded: np.ndarray,
    inverse: List[int],
    keepdim: bool,
    dtype: str,
) -> "Tensor":
    rest = front.shape[1:]
    if not rest:
        return tensor._from_array(folded, (1,), dtype)
    result = tensor._from_array(folded, rest, dtype)
    if keepdim:
        result = result.unsqueeze(0).permute(inverse)
    return result.contiguous()


def fold_axis(
    tensor: "Tensor",
    dim: int,
    keepdim: bool,
    name: str,
    combine: Combine,
    finalize: Optional[Callable[[np.ndarray, np.ndarray, int], np.ndarray]] = None,
    dtype: Optional[str] = None,
) -> "Tensor":
    """Fold ``combine`` over the slices of ``tensor`` along ``dim``."""

    front, inverse = rotate_to_front(tensor, dim)
    count = front.shape[0]
    if count == 0 or front.numel() == 0:
        raise EmptyReductionError(name)
    rows = slabs(front)
    accumulator = rows[0].copy()
    for i in range(1, count):
        accumulator = combine(accumulator, rows[i])
    if finalize is not None:
        accumulator = finalize(accumulator, rows, count)
    target = dtype or tensor.dtype
    return _finish(tensor, front, cast_array(accumulator, target), inverse, keepdim, target)


def _global_values(tensor: "Tensor", name: str) -> np.ndarray:
    # Storage holds exactly ``numel`` elements in some order, which is all an
    # order-independent reduction needs.
    values = tensor._storage.data
    if values.size == 0:
        raise EmptyReductionError(name)
    return values


def _singleton(tensor: "Tensor", value, dtype: Optional[str] = None) -> "Tensor":
    target = dtype or tensor.dtype
    return tensor._from_array(cast_array(np.asarray([value]), target), (1,), target)


def _mean_finalize(accumulator, rows, count):
    return accumulator / count


def _variance_finalize(accumulator, rows, count):
    mean = accumulator / count
    squares = np.zeros_like(mean)
    for i in range(count):
        squares = squares + (rows[i] - mean) ** 2
    with np.errstate(divide="ignore", invalid="ignore"):
        return squares / (count - 1)


def _std_finalize(accumulator, rows, count):
    return np.sqrt(_variance_finalize(accumulator, rows, count))


def sum(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    if dim is None:
        return _singleton(tensor, np.sum(_global_values(tensor, "sum")))
    return fold_axis(tensor, dim, keepdim, "sum", np.add)


def prod(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    if dim is None:
        return _singleton(tensor, np.prod(_global_values(tensor, "prod")))
    return fold_axis(tensor, dim, keepdim, "prod", np.multiply)


def mean(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    _require_floating(tensor, "mean")
    if dim is None:
        values = _global_values(tensor, "mean")
        return _singleton(tensor, np.sum(values) / values.size)
    return fold_axis(tensor, dim, keepdim, "mean", np.add, _mean_finalize)


def _global_variance(values: np.ndarray) -> float:
    count = values.size
    mean_value = np.sum(values) / count
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.sum((values - mean_value) ** 2) / (count - 1)


def var(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    """Unbiased variance (divides by ``N - 1``)."""

    _require_floating(tensor, "var")
    if dim is None:
        return _singleton(tensor, _global_variance(_global_values(tensor, "var")))
    return fold_axis(tensor, dim, keepdim, "var", np.add, _variance_finalize)


def std(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    """Unbiased standard deviation (square root of :func:`var`)."""

    _require_floating(tensor, "std")
    if dim is None:
        variance = _global_variance(_global_values(tensor, "std"))
        return _singleton(tensor, np.sqrt(variance))
    return fold_axis(tensor, dim, keepdim, "std", np.add, _std_finalize)


def max(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    if dim is None:
        return _singleton(tensor, np.max(_global_values(tensor, "max")))
    return fold_axis(tensor, dim, keepdim, "max", np.maximum)


def min(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    if dim is None:
        return _singleton(tensor, np.min(_global_values(tensor, "min")))
    return fold_axis(tensor, dim, keepdim, "min", np.minimum)


def median(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    """Lower median: for an even count ``N`` the element at ``N/2 - 1`` of the
    sorted values, never the average of the two middle elements."""

    if dim is None:
        ordered = np.sort(_global_values(tensor, "median"))
        return _singleton(tensor, ordered[(ordered.size - 1) // 2])
    front, inverse = rotate_to_front(tensor, dim)
    count = front.shape[0]
    if count == 0 or front.numel() == 0:
        raise EmptyReductionError("median")
    ordered = np.sort(slabs(front), axis=0)
    return _finish(
        tensor, front, ordered[(count - 1) // 2].copy(), inverse, keepdim, tensor.dtype
    )


def _arg_extreme(tensor: "Tensor", dim, keepdim: bool, name: str, better) -> "Tensor":
    if dim is None:
        values = tensor._flat()
        if values.size == 0:
            raise EmptyReductionError(name)
        best = 0
        for i in range(1, values.size):
            if better(values[i], values[best]):
                best = i
        return _singleton(tensor, best, "int64")
    front, inverse = rotate_to_front(tensor, dim)
    count = front.shape[0]
    if count == 0 or front.numel() == 0:
        raise EmptyReductionError(name)
    rows = slabs(front)
    best_values = rows[0].copy()
    best_index = np.zeros(best_values.shape, dtype=np.int64)
    for i in range(1, count):
        improved = better(rows[i], best_values)
        best_values = np.where(improved, rows[i], best_values)
        best_index = np.where(improved, i, best_index)
    return _finish(tensor, front, best_index, inverse, keepdim, "int64")


def argmax(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    return _arg_extreme(tensor, dim, keepdim, "argmax", np.greater)


def argmin(tensor: "Tensor", dim=None, keepdim: bool = False) -> "Tensor":
    return _arg_extreme(tensor, dim, keepdim, "argmin", np.less)


def softmax(tensor: "Tensor", dim=None) -> "Tensor":
    """``exp(x) / sum(exp(x))`` over the whole tensor or along ``dim``.

    No max-shift is applied, so very large inputs overflow to ``nan``.
    """

    _require_floating(tensor, "softmax")
    if dim is None:
        _global_values(tensor, "softmax")
        exps = np.exp(tensor._flat().astype(np.float64))
        return tensor._from_array(exps / np.sum(exps), tensor.shape, tensor.dtype)
    front, inverse = rotate_to_front(tensor, dim)
    exps = front.exp()
    totals = exps.sum(0, keepdim=True)
    totals = totals.repeat([front.shape[0]] + [1] * (front.ndim - 1))
    return (exps / totals).permute(inverse).contiguous()


def log_softmax(tensor: "Tensor", dim=None) -> "Tensor":
    return softmax(tensor, dim).log()
