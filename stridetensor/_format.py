# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Deterministic text rendering of tensors."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .tensor import Tensor

_PREFIX = "tensor("
_FLOAT_PRECISION = 4


def _cell(value, integral: bool) -> str:
    if integral:
        return str(int(value))
    return f"{float(value):.{_FLOAT_PRECISION}f}"


def _render(cells: List[str], shape: Sequence[int], depth: int, width: int) -> str:
    if len(shape) == 1:
        return "[" + ", ".join(c.rjust(width) for c in cells) + "]"
    step = len(cells) // shape[0] if shape[0] else 0
    rows = [
        _render(cells[i * step : (i + 1) * step], shape[1:], depth + 1, width)
        for i in range(shape[0])
    ]
    separator = "," + "\n" * (len(shape) - 1) + " " * (len(_PREFIX) + depth + 1)
    return "[" + separator.join(rows) + "]"


def format_tensor(tensor: "Tensor") -> str:
    """Render ``tensor`` with a fixed precision and right-aligned columns."""

    integral = tensor.dtype == "int64"
    cells = [_cell(v, integral) for v in tensor._flat().tolist()]
    width = max((len(c) for c in cells), default=0)
    body = _render(cells, tensor.shape, 0, width)
    return f"{_PREFIX}{body}, dtype={tensor.dtype})"
