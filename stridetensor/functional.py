# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Free-function forms of tensor operations."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from ._assembly import cat, chunk, flip, split, stack
from .tensor import Tensor


def narrow(tensor: Tensor, dim: int, start: int, length: int) -> Tensor:
    return tensor.narrow(dim, start, length)


def reshape(tensor: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.reshape(*shape)


def view(tensor: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.view(*shape)


def flatten(tensor: Tensor) -> Tensor:
    return tensor.flatten()


def permute(tensor: Tensor, *dims: Union[int, Sequence[int]]) -> Tensor:
    return tensor.permute(*dims)


def transpose(tensor: Tensor, dim0: int = 0, dim1: int = 1) -> Tensor:
    return tensor.transpose(dim0, dim1)


def contiguous(tensor: Tensor) -> Tensor:
    return tensor.contiguous()


def squeeze(tensor: Tensor, dim: Optional[int] = None) -> Tensor:
    return tensor.squeeze(dim)


def unsqueeze(tensor: Tensor, dim: int) -> Tensor:
    return tensor.unsqueeze(dim)


def repeat(tensor: Tensor, *repeats: Union[int, Sequence[int]]) -> Tensor:
    return tensor.repeat(*repeats)


def tile(tensor: Tensor, *reps: Union[int, Sequence[int]]) -> Tensor:
    return tensor.tile(*reps)


def expand(tensor: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return tensor.expand(*shape)


def expand_as(tensor: Tensor, other: Tensor) -> Tensor:
    return tensor.expand_as(other)


def softmax(tensor: Tensor, dim: Optional[int] = None) -> Tensor:
    """Softmax over the whole tensor, or along ``dim`` when given."""
    return tensor.softmax(dim)


def log_softmax(tensor: Tensor, dim: Optional[int] = None) -> Tensor:
    return tensor.log_softmax(dim)


def median(tensor: Tensor, dim: Optional[int] = None, keepdim: bool = False) -> Tensor:
    return tensor.median(dim, keepdim)


def sigmoid(tensor: Tensor) -> Tensor:
    return tensor.sigmoid()


def relu(tensor: Tensor) -> Tensor:
    return tensor.relu()


__all__: List[str] = [
    "cat",
    "stack",
    "split",
    "chunk",
    "flip",
    "narrow",
    "reshape",
    "view",
    "flatten",
    "permute",
    "transpose",
    "contiguous",
    "squeeze",
    "unsqueeze",
    "repeat",
    "tile",
    "expand",
    "expand_as",
    "softmax",
    "log_softmax",
    "median",
    "sigmoid",
    "relu",
]
