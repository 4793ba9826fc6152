# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Concatenation, stacking, splitting and flipping along one axis."""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, List, Sequence, Union

import numpy as np

from ._backend import MAX_RANK, cast_array, promote
from ._reduction import rotate_to_front, slabs
from ._shape import as_index, normalize_dim
from .errors import (
    InvalidArgumentError,
    ShapeMismatchError,
    UnsupportedRankError,
)

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor


def _as_list(tensors: Sequence["Tensor"], name: str) -> List["Tensor"]:
    tensors = list(tensors)
    if not tensors:
        raise InvalidArgumentError(f"{name}() expects a non-empty sequence of tensors")
    return tensors


def _without(shape, dim: int):
    return shape[:dim] + shape[dim + 1 :]


def cat(tensors: Sequence["Tensor"], dim: int = 0) -> "Tensor":
    """Concatenate ``tensors`` along an existing axis ``dim``."""

    tensors = _as_list(tensors, "cat")
    first = tensors[0]
    rank = first.ndim
    for t in tensors[1:]:
        if t.ndim != rank:
            raise ShapeMismatchError(
                f"cat(): tensors must have the same number of dimensions, "
                f"got {first.shape} and {t.shape}"
            )
    d = normalize_dim(dim, rank)
    expected = _without(first.shape, d)
    for t in tensors[1:]:
        if _without(t.shape, d) != expected:
            raise ShapeMismatchError(
                f"cat(): sizes of tensors must match except in dimension {d}, "
                f"got {first.shape} and {t.shape}"
            )

    dtype = reduce(promote, (t.dtype for t in tensors))
    pieces = []
    length = 0
    inverse = None
    for t in tensors:
        front, inverse = rotate_to_front(t, d)
        pieces.append(cast_array(front._storage.data, dtype))
        length += front.shape[0]
    rest = front.shape[1:]
    joined = first._from_array(np.concatenate(pieces), (length,) + rest, dtype)
    return joined.permute(inverse).contiguous()


def stack(tensors: Sequence["Tensor"], dim: int = 0) -> "Tensor":
    """Join equally shaped ``tensors`` along a new axis ``dim``."""

    tensors = _as_list(tensors, "stack")
    first = tensors[0]
    for t in tensors[1:]:
        if t.shape != first.shape:
            raise ShapeMismatchError(
                f"stack(): expects each tensor to be equal size, "
                f"but got {first.shape} and {t.shape}"
            )
    if first.ndim + 1 > MAX_RANK:
        raise UnsupportedRankError(
            f"stack(): result would exceed the maximum rank of {MAX_RANK}"
        )
    d = normalize_dim(dim, first.ndim + 1)
    return cat([t.unsqueeze(d) for t in tensors], d)


def split(
    tensor: "Tensor",
    split_size_or_sections: Union[int, Sequence[int]],
    dim: int = 0,
) -> List["Tensor"]:
    """Split ``tensor`` into consecutive ``narrow`` slices along ``dim``.

    An integer gives the length of every slice (the last may be shorter); a
    sequence lists explicit slice lengths that must cover the axis exactly.
    """

    d = normalize_dim(dim, tensor.ndim)
    length = tensor.shape[d]
    if isinstance(split_size_or_sections, (list, tuple)):
        sizes = [as_index(s, "split size") for s in split_size_or_sections]
        if any(s < 0 for s in sizes) or sum(sizes) != length:
            raise InvalidArgumentError(
                f"split(): sections {sizes} do not sum to dimension {d} "
                f"of size {length}"
            )
    else:
        size = as_index(split_size_or_sections, "split size")
        if size <= 0:
            raise InvalidArgumentError(
                f"split(): split size must be positive, got {size}"
            )
        sizes = [size] * (length // size)
        if length % size or not sizes:
            sizes.append(length % size)

    parts = []
    start = 0
    for size in sizes:
        parts.append(tensor.narrow(d, start, size))
        start += size
    return parts


def chunk(tensor: "Tensor", chunks: int, dim: int = 0) -> List["Tensor"]:
    """Split into at most ``chunks`` slices of ``ceil(len / chunks)`` elements."""

    chunks = as_index(chunks, "chunks")
    if chunks <= 0:
        raise InvalidArgumentError(f"chunk(): chunks must be positive, got {chunks}")
    d = normalize_dim(dim, tensor.ndim)
    length = tensor.shape[d]
    if length == 0:
        return [tensor.narrow(d, 0, 0)]
    return split(tensor, -(-length // chunks), d)


def _flip_axis(tensor: "Tensor", dim: int) -> "Tensor":
    front, inverse = rotate_to_front(tensor, dim)
    if front.numel() == 0:
        reversed_rows = front._storage.data.copy()
    else:
        reversed_rows = np.ascontiguousarray(slabs(front)[::-1]).reshape(-1)
    flipped = tensor._from_array(reversed_rows, front.shape, tensor.dtype)
    return flipped.permute(inverse).contiguous()


def flip(tensor: "Tensor", dims: Union[int, Sequence[int]]) -> "Tensor":
    """Reverse the order of elements along each axis in ``dims``."""

    if isinstance(dims, (list, tuple)):
        axes = [normalize_dim(d, tensor.ndim) for d in dims]
    else:
        axes = [normalize_dim(dims, tensor.ndim)]
    if len(set(axes)) != len(axes):
        raise InvalidArgumentError(f"flip(): dims {tuple(axes)} contain duplicates")
    result = tensor.clone() if not axes else tensor
    for d in axes:
        result = _flip_axis(result, d)
    return result
