# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exception hierarchy raised by tensor operations.

Every error is a ``RuntimeError`` through :class:`TensorError`. Errors that
describe a bad argument additionally derive from the matching builtin
(``ValueError`` or ``IndexError``) so callers can catch them idiomatically.
"""

from __future__ import annotations

__all__ = [
    "TensorError",
    "ShapeMismatchError",
    "IndexOutOfRangeError",
    "UnsupportedRankError",
    "InvalidReshapeError",
    "EmptyReductionError",
    "InvalidArgumentError",
    "DivisionByZeroError",
    "SerializationError",
]


class TensorError(RuntimeError):
    """Base class for all tensor engine errors."""


class ShapeMismatchError(TensorError, ValueError):
    """Operands or assigned values have incompatible shapes."""


class IndexOutOfRangeError(TensorError, IndexError):
    """An axis or element index falls outside its valid range."""


class UnsupportedRankError(TensorError):
    """Rank exceeds the supported maximum or the operation does not handle it."""


class InvalidReshapeError(TensorError, ValueError):
    """A reshape target does not preserve the element count."""


class EmptyReductionError(TensorError):
    """A reduction without an identity element received zero elements."""

    def __init__(self, operation: str):
        super().__init__(
            f"{operation}(): operation does not have an identity "
            "and the input has no elements"
        )
        self.operation = operation


class InvalidArgumentError(TensorError, ValueError):
    """An argument is malformed (duplicate axes, negative sizes, ...)."""


class DivisionByZeroError(TensorError, ZeroDivisionError):
    """An int64 operation divided by zero; int64 has no inf or nan to hold it."""


class SerializationError(TensorError, ValueError):
    """A persisted tensor payload could not be decoded."""
