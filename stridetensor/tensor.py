# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Strided tensor class: shape/stride addressing over a flat typed storage.
"""

from __future__ import annotations

import itertools
import logging
from numbers import Integral, Real
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import _assembly, _reduction
from ._backend import (
    cast_array,
    dtype_from_numpy,
    generator,
    get_default_dtype,
    numpy_dtype,
    promote,
    validate_dtype,
)
from ._shape import (
    as_index,
    check_rank,
    check_sizes,
    compute_stride,
    flatten_nested,
    infer_nested_shape,
    infer_view_shape,
    is_row_major,
    normalize_dim,
    normalize_index,
    normalize_shape,
    numel,
    offsets,
    row_major_offsets,
)
from ._storage import Storage
from .errors import (
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidReshapeError,
    ShapeMismatchError,
    TensorError,
    UnsupportedRankError,
)

logger = logging.getLogger(__name__)

Scalar = Union[int, float]

# Binary kernels. Integer tensors run division and power in float64 and are
# truncated back, the remaining kernels stay exact in int64.
_BINARY_KERNELS: Dict[str, Tuple[Callable[[Any, Any], Any], bool]] = {
    "add": (np.add, False),
    "sub": (np.subtract, False),
    "mul": (np.multiply, False),
    "div": (np.true_divide, True),
    "pow": (np.power, True),
}


def _sigmoid(values: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-values))


def _relu(values: np.ndarray) -> np.ndarray:
    return np.maximum(values, 0)


def _reciprocal(values: np.ndarray) -> np.ndarray:
    return 1.0 / values


# Unary kernels; the flag marks kernels that are exact on int64 input.
_UNARY_KERNELS: Dict[str, Tuple[Callable[[np.ndarray], np.ndarray], bool]] = {
    "abs": (np.abs, True),
    "neg": (np.negative, True),
    "relu": (_relu, True),
    "sin": (np.sin, False),
    "cos": (np.cos, False),
    "tan": (np.tan, False),
    "exp": (np.exp, False),
    "log": (np.log, False),
    "sqrt": (np.sqrt, False),
    "tanh": (np.tanh, False),
    "sigmoid": (_sigmoid, False),
    "reciprocal": (_reciprocal, False),
}


def _check_integer_division(kernel: str, left: np.ndarray, right: np.ndarray) -> None:
    if kernel in ("div", "reciprocal") and np.any(right == 0):
        raise DivisionByZeroError(f"{kernel}(): integer division by zero")
    if kernel == "pow" and np.any((left == 0) & (right < 0)):
        raise DivisionByZeroError(
            f"{kernel}(): zero cannot be raised to a negative power on int64 tensors"
        )


def _check_representable(kernel: str, result: np.ndarray) -> None:
    # Truncating inf or nan to int64 yields an arbitrary value.
    if not np.all(np.isfinite(result)):
        raise InvalidArgumentError(
            f"{kernel}(): result has values that cannot be represented as int64"
        )


def _infer_dtype(flat: Sequence[Any]) -> str:
    if flat and all(isinstance(v, Integral) for v in flat):
        return "int64"
    return get_default_dtype()


class Tensor:
    """
    A strided view over a flat, typed storage buffer.

    A tensor is the bundle ``(dtype, shape, stride, storage)``. The element at
    multi-index ``(i0, ..., ik)`` lives at storage offset ``sum(i * stride)``.
    ``permute``/``transpose``/``squeeze``/``unsqueeze``/``view`` produce views
    sharing the storage; writers detach shared storage first (copy-on-write),
    so no view ever observes a partially updated buffer.
    """

    # Make numpy defer to Tensor operators instead of broadcasting over it.
    __array_ufunc__ = None

    @classmethod
    def _make(
        cls,
        storage: Storage,
        shape: Sequence[int],
        stride: Sequence[int],
        dtype: str,
    ) -> "Tensor":
        instance = cls.__new__(cls)
        instance._bind(storage, shape, stride, dtype)
        return instance

    @classmethod
    def _from_array(cls, values: Any, shape: Sequence[int], dtype: str) -> "Tensor":
        """Build a contiguous tensor owning a private copy of ``values``."""

        data = cast_array(np.asarray(values), dtype)
        if data is values or not data.flags.writeable:
            data = data.copy()
        return cls._make(Storage(data.reshape(-1)), shape, compute_stride(shape), dtype)

    def _bind(
        self,
        storage: Storage,
        shape: Sequence[int],
        stride: Sequence[int],
        dtype: str,
    ) -> None:
        shape = tuple(shape)
        check_rank(len(shape))
        self._storage = storage.adopt(self)
        self._shape = shape
        self._stride = tuple(stride)
        self._dtype = dtype
        self._numel = numel(shape)

    def __init__(self, data: Any, dtype: Optional[str] = None):
        """
        Initialize a tensor.

        Args:
            data: Nested lists/tuples of numbers (up to 8 levels), a numpy
                array, a Python scalar, or another tensor (copied).
            dtype: ``'float32'``, ``'float64'`` or ``'int64'``. Integer data
                defaults to ``'int64'``, anything else to the default dtype.

        Examples:
            >>> t1 = Tensor([1, 2, 3])
            >>> t2 = Tensor([[1, 2], [3, 4]], dtype='float64')
        """
        if isinstance(data, Tensor):
            target = data._dtype if dtype is None else validate_dtype(dtype)
            values = cast_array(data._flat(), target).copy()
            shape = data._shape
        elif isinstance(data, np.ndarray):
            target = dtype_from_numpy(data.dtype) if dtype is None else validate_dtype(dtype)
            shape = data.shape if data.ndim else (1,)
            values = cast_array(np.array(data).reshape(-1), target)
        elif isinstance(data, (list, tuple)):
            shape = infer_nested_shape(data)
            flat = flatten_nested(data)
            target = _infer_dtype(flat) if dtype is None else validate_dtype(dtype)
            exact = bool(flat) and all(isinstance(v, Integral) for v in flat)
            raw = np.asarray(flat, dtype=np.int64 if exact else np.float64)
            values = cast_array(raw, target)
        elif isinstance(data, Real):
            shape = (1,)
            target = _infer_dtype([data]) if dtype is None else validate_dtype(dtype)
            values = cast_array(np.asarray([data]), target)
        else:
            raise TypeError(f"Cannot build a tensor from {type(data).__name__}")
        self._bind(Storage(values.reshape(-1)), shape, compute_stride(shape), target)

    # Core properties
    @property
    def shape(self) -> Tuple[int, ...]:
        """Get tensor shape as tuple."""
        return self._shape

    @property
    def dtype(self) -> str:
        """Get tensor data type."""
        return self._dtype

    @property
    def strides(self) -> Tuple[int, ...]:
        """Strides of the tensor, counted in elements."""
        return self._stride

    def stride(self, dim: Optional[int] = None) -> Union[int, Tuple[int, ...]]:
        if dim is None:
            return self._stride
        return self._stride[normalize_dim(dim, self.ndim)]

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._numel

    @property
    def itemsize(self) -> int:
        return numpy_dtype(self._dtype).itemsize

    @property
    def nbytes(self) -> int:
        return self._numel * self.itemsize

    @property
    def T(self) -> "Tensor":
        """Transpose."""
        return self.t()

    def numel(self) -> int:
        """Get total number of elements."""
        return self._numel

    def dim(self) -> int:
        return self.ndim

    def is_contiguous(self) -> bool:
        """Check if storage is laid out in row-major order for this shape."""
        return is_row_major(self._shape, self._stride)

    def shares_storage(self, other: "Tensor") -> bool:
        return self._storage is other._storage

    # Addressing helpers
    def _offsets(self) -> np.ndarray:
        return row_major_offsets(self._shape, self._stride)

    def _flat(self) -> np.ndarray:
        """Elements in row-major order. Read-only: may alias storage."""
        if self.is_contiguous():
            return self._storage.data
        return self._storage.data[self._offsets()]

    def _view_of(self, shape: Sequence[int], stride: Sequence[int]) -> "Tensor":
        return self._make(self._storage, shape, stride, self._dtype)

    def _write(self, positions: np.ndarray, values: Any) -> None:
        # Validation is finished by the time this runs; the write cannot fail
        # halfway for well-typed input.
        self._storage = self._storage.detach(self)
        self._storage.write(positions, values)

    # Data conversion methods
    def numpy(self) -> np.ndarray:
        """Return a row-major copy of the data as a numpy array."""
        return self._flat().copy().reshape(self._shape)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        array = self.numpy()
        if dtype is not None:
            return array.astype(dtype, copy=False)
        return array

    def tolist(self) -> Any:
        """Convert to nested Python lists."""
        return self.numpy().tolist()

    def item(self) -> Scalar:
        """Return the Python scalar value for a single-element tensor."""
        if self._numel != 1:
            raise TensorError(
                f"a Tensor with {self._numel} elements cannot be converted to Scalar"
            )
        return self._storage.data[self._offsets()[0]].item()

    # Indexing engine
    def _locate(self, indices: Sequence[Any]) -> Tuple[int, Tuple[int, ...], Tuple[int, ...]]:
        """Combine leading ``indices`` into a base offset.

        Returns the base offset plus the shape and stride of the axes the
        indices left unaddressed.
        """

        if not indices:
            raise InvalidArgumentError("at least one index is required")
        if len(indices) > self.ndim:
            raise IndexOutOfRangeError(
                f"too many indices for tensor of dimension {self.ndim}: "
                f"got {len(indices)}"
            )
        base = 0
        for d, index in enumerate(indices):
            base += normalize_index(index, self._shape[d], d) * self._stride[d]
        m = len(indices)
        return base, self._shape[m:], self._stride[m:]

    def get(self, *indices: Any) -> "Tensor":
        """Address ``len(indices)`` leading axes.

        A full index returns a singleton tensor of shape ``(1,)``; a partial
        one returns a freshly copied tensor over the remaining axes.
        """

        if len(indices) == 1 and isinstance(indices[0], (list, tuple)):
            indices = tuple(indices[0])
        base, rest_shape, rest_stride = self._locate(indices)
        if not rest_shape:
            return self._from_array(self._storage.data[base : base + 1], (1,), self._dtype)
        block = self._storage.data[base + row_major_offsets(rest_shape, rest_stride)]
        return self._from_array(block, rest_shape, self._dtype)

    def set(self, *args: Any) -> "Tensor":
        """``set(i0, ..., im, value)``: write a scalar or a tensor.

        A scalar is broadcast over the addressed sub-block; a tensor must have
        exactly the shape of the sub-block.
        """

        if len(args) < 2:
            raise InvalidArgumentError("set() expects at least one index and a value")
        *indices, value = args
        base, rest_shape, rest_stride = self._locate(indices)
        positions = base + row_major_offsets(rest_shape, rest_stride)
        if isinstance(value, Tensor):
            expected = rest_shape or (1,)
            if value.shape != expected:
                raise ShapeMismatchError(
                    f"cannot assign a tensor of shape {value.shape} to a "
                    f"block of shape {expected}"
                )
            values = cast_array(value._flat(), self._dtype).copy()
        else:
            values = self._scalar_array(value)
        self._write(positions, values)
        return self

    def put(self, index: Sequence[Any], value: Scalar) -> "Tensor":
        """Write one scalar at a full multi-index."""
        index = tuple(index)
        if len(index) != self.ndim:
            raise InvalidArgumentError(
                f"put() expects {self.ndim} indices, got {len(index)}"
            )
        return self.set(*index, value)

    def iter_indexed(self) -> Iterator[Tuple[Tuple[int, ...], Scalar]]:
        """Yield ``(multi_index, value)`` for every element in row-major order."""
        values = self._flat()
        positions = itertools.product(*(range(s) for s in self._shape))
        for flat_position, index in enumerate(positions):
            yield index, values[flat_position].item()

    def _scalar_array(self, value: Any) -> np.ndarray:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(
                f"expected a number or Tensor, got {type(value).__name__}"
            )
        return cast_array(np.asarray([value]), self._dtype)

    @staticmethod
    def _subscript(key: Any) -> Tuple[Any, ...]:
        key = key if isinstance(key, tuple) else (key,)
        for k in key:
            if isinstance(k, (slice, list, type(Ellipsis))) or k is None:
                raise TypeError(
                    "only integer subscripts are supported; use narrow() for slices "
                    "and get(*index) for a multi-index held in a list"
                )
        return key

    def __getitem__(self, key: Any) -> "Tensor":
        """``t[i, j]`` is ``t.get(i, j)``."""
        return self.get(*self._subscript(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(*self._subscript(key), value)

    def __len__(self) -> int:
        return self._shape[0]

    def __iter__(self) -> Iterator["Tensor"]:
        for i in range(self._shape[0]):
            yield self.get(i)

    # Tensor manipulation methods
    def permute(self, *dims: Any) -> "Tensor":
        """Reorder axes; the result shares storage with this tensor."""
        order = normalize_shape(dims, "dim")
        if len(order) != self.ndim:
            raise InvalidArgumentError(
                f"permute(): number of dims {len(order)} does not match "
                f"tensor rank {self.ndim}"
            )
        order = [normalize_dim(d, self.ndim) for d in order]
        if len(set(order)) != len(order):
            raise InvalidArgumentError(f"permute(): repeated dim in {tuple(order)}")
        return self._view_of(
            [self._shape[d] for d in order], [self._stride[d] for d in order]
        )

    def transpose(self, dim0: int = 0, dim1: int = 1) -> "Tensor":
        """Swap two axes."""
        d0 = normalize_dim(dim0, self.ndim)
        d1 = normalize_dim(dim1, self.ndim)
        order = list(range(self.ndim))
        order[d0], order[d1] = order[d1], order[d0]
        return self.permute(order)

    swapaxes = transpose

    def t(self) -> "Tensor":
        """Transpose a matrix; vectors are returned as an unchanged view."""
        if self.ndim > 2:
            raise UnsupportedRankError(
                f"t() expects a tensor with <= 2 dimensions, but self is {self.ndim}D"
            )
        if self.ndim == 1:
            return self._view_of(self._shape, self._stride)
        return self.transpose(0, 1)

    def view(self, *shape: Any) -> "Tensor":
        """Reinterpret contiguous storage under a new shape (one ``-1`` allowed)."""
        if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
            shape = tuple(shape[0])
        new_shape = infer_view_shape(shape, self._numel)
        check_rank(len(new_shape))
        if not self.is_contiguous():
            raise TensorError(
                "view size is not compatible with input tensor's size and stride; "
                "call .contiguous() first or use .reshape(...)"
            )
        return self._view_of(new_shape, compute_stride(new_shape))

    def reshape(self, *shape: Any) -> "Tensor":
        """Like :meth:`view` but materializes non-contiguous input first."""
        return self.contiguous().view(*shape)

    def flatten(self) -> "Tensor":
        return self.reshape(-1)

    ravel = flatten

    def contiguous(self) -> "Tensor":
        """Return a row-major tensor; ``self`` when already contiguous."""
        if self.is_contiguous():
            return self
        logger.debug("materializing %s tensor of shape %s", self._dtype, self._shape)
        return self._from_array(self._storage.data[self._offsets()], self._shape, self._dtype)

    def narrow(self, dim: int, start: int, length: int) -> "Tensor":
        """Copy of ``[start, start + length)`` along ``dim``."""
        d = normalize_dim(dim, self.ndim)
        start = as_index(start, "start")
        length = as_index(length, "length")
        if length < 0:
            raise InvalidArgumentError(f"narrow(): length must be non-negative, got {length}")
        if start < 0 or start + length > self._shape[d]:
            raise IndexOutOfRangeError(
                f"narrow(): start ({start}) + length ({length}) exceeds "
                f"dimension size ({self._shape[d]})"
            )
        ranges = [range(size) for size in self._shape]
        ranges[d] = range(start, start + length)
        new_shape = self._shape[:d] + (length,) + self._shape[d + 1 :]
        return self._from_array(
            self._storage.data[offsets(ranges, self._stride)], new_shape, self._dtype
        )

    def squeeze(self, dim: Optional[int] = None) -> "Tensor":
        """Remove size-1 axes (all of them, or only ``dim``); rank stays >= 1."""
        if dim is None:
            keep = [d for d, size in enumerate(self._shape) if size != 1]
            if not keep:
                keep = [self.ndim - 1]
        else:
            d = normalize_dim(dim, self.ndim)
            if self._shape[d] != 1 or self.ndim == 1:
                keep = list(range(self.ndim))
            else:
                keep = [k for k in range(self.ndim) if k != d]
        return self._view_of(
            [self._shape[d] for d in keep], [self._stride[d] for d in keep]
        )

    def unsqueeze(self, dim: int) -> "Tensor":
        """Insert a size-1 axis at ``dim``."""
        rank = self.ndim
        d = normalize_dim(dim, rank + 1)
        check_rank(rank + 1)
        inserted = 1 if d == rank else self._stride[d]
        return self._view_of(
            self._shape[:d] + (1,) + self._shape[d:],
            self._stride[:d] + (inserted,) + self._stride[d:],
        )

    def repeat(self, *repeats: Any) -> "Tensor":
        """Tile the tensor ``repeats[d]`` times along each axis.

        ``len(repeats)`` may exceed the rank; the tensor is then unsqueezed
        at axis 0 until the ranks match.
        """
        reps = normalize_shape(repeats, "repeats")
        if len(reps) < self.ndim:
            raise InvalidArgumentError(
                "Number of dimensions of repeat dims can not be smaller than "
                "number of dimensions of tensor"
            )
        if any(r < 0 for r in reps):
            raise InvalidArgumentError(f"repeat(): negative repeat count in {reps}")
        check_rank(len(reps))
        source = self
        while source.ndim < len(reps):
            source = source.unsqueeze(0)
        new_shape = tuple(size * r for size, r in zip(source.shape, reps))
        ranges = [
            np.arange(n) % size if n else np.arange(0)
            for n, size in zip(new_shape, source.shape)
        ]
        return self._from_array(
            source._storage.data[offsets(ranges, source._stride)], new_shape, self._dtype
        )

    def tile(self, *reps: Any) -> "Tensor":
        """``repeat`` with ``reps`` left-padded by ones up to the rank."""
        reps = normalize_shape(reps, "repeats")
        if len(reps) < self.ndim:
            reps = (1,) * (self.ndim - len(reps)) + reps
        return self.repeat(reps)

    def expand(self, *shape: Any) -> "Tensor":
        """Tile size-1 axes up to ``shape``; ``-1`` keeps an axis as is."""
        target = normalize_shape(shape)
        if len(target) < self.ndim:
            raise InvalidArgumentError(
                f"expand(): target {target} has fewer dimensions than {self._shape}"
            )
        check_rank(len(target))
        source = self
        while source.ndim < len(target):
            source = source.unsqueeze(0)
        reps = []
        for size, wanted in zip(source.shape, target):
            if wanted == -1:
                wanted = size
            if size == wanted:
                reps.append(1)
            elif size == 1 and wanted >= 0:
                reps.append(wanted)
            else:
                raise ShapeMismatchError(
                    f"cannot expand tensor of shape {self._shape} to {target}"
                )
        return source.repeat(reps)

    def expand_as(self, other: "Tensor") -> "Tensor":
        return self.expand(other.shape)

    def split(self, split_size_or_sections, dim: int = 0) -> List["Tensor"]:
        return _assembly.split(self, split_size_or_sections, dim)

    def chunk(self, chunks: int, dim: int = 0) -> List["Tensor"]:
        return _assembly.chunk(self, chunks, dim)

    def flip(self, dims: Union[int, Sequence[int]]) -> "Tensor":
        return _assembly.flip(self, dims)

    # Tensor operations
    def clone(self) -> "Tensor":
        """Independent copy preserving shape, stride and dtype."""
        return self._make(self._storage.copy(), self._shape, self._stride, self._dtype)

    def astype(self, dtype: str) -> "Tensor":
        """Convert element values to ``dtype`` (float to int truncates)."""
        target = validate_dtype(dtype)
        return self._from_array(cast_array(self._flat(), target), self._shape, target)

    def to(self, dtype: str) -> "Tensor":
        if dtype == self._dtype:
            return self
        return self.astype(dtype)

    # Elementwise arithmetic
    def _binary(self, other: Any, kernel: str, reflected: bool = False) -> "Tensor":
        op, via_float = _BINARY_KERNELS[kernel]
        if isinstance(other, Tensor):
            if other.shape != self._shape:
                raise ShapeMismatchError(
                    f"{kernel}(): shape {self._shape} does not match shape {other.shape}"
                )
            dtype = promote(self._dtype, other.dtype)
            right: Any = other._flat()
        elif isinstance(other, Real) and not isinstance(other, bool):
            dtype = self._dtype
            right = other
        else:
            return NotImplemented
        left: Any = self._flat()
        if reflected:
            left, right = right, left
        integral_via_float = dtype == "int64" and via_float
        if integral_via_float:
            left = np.asarray(left, dtype=np.float64)
            right = np.asarray(right, dtype=np.float64)
            _check_integer_division(kernel, left, right)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            result = np.asarray(op(left, right))
        if integral_via_float:
            _check_representable(kernel, result)
        return self._from_array(cast_array(result, dtype), self._shape, dtype)

    def __add__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, "add")

    def __radd__(self, other: Scalar) -> "Tensor":
        return self._binary(other, "add", reflected=True)

    def __sub__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, "sub")

    def __rsub__(self, other: Scalar) -> "Tensor":
        return self._binary(other, "sub", reflected=True)

    def __mul__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, "mul")

    def __rmul__(self, other: Scalar) -> "Tensor":
        return self._binary(other, "mul", reflected=True)

    def __truediv__(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(other, "div")

    def __rtruediv__(self, other: Scalar) -> "Tensor":
        return self._binary(other, "div", reflected=True)

    def __pow__(self, exponent: Union["Tensor", Scalar]) -> "Tensor":
        return self._binary(exponent, "pow")

    def __rpow__(self, base: Scalar) -> "Tensor":
        return self._binary(base, "pow", reflected=True)

    def __neg__(self) -> "Tensor":
        return self._unary("neg")

    def add(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self + other

    def sub(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self - other

    def mul(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self * other

    def div(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self / other

    def pow(self, exponent: Union["Tensor", Scalar]) -> "Tensor":
        """Alias for the ``**`` operator."""
        return self ** exponent

    # In-place arithmetic: results are cast back to this tensor's dtype.
    def _inplace(self, other: Any, kernel: str) -> "Tensor":
        result = self._binary(other, kernel)
        if result is NotImplemented:
            raise TypeError(
                f"unsupported operand type for {kernel}_(): {type(other).__name__}"
            )
        self._write(self._offsets(), cast_array(result._flat(), self._dtype))
        return self

    def add_(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, "add")

    def sub_(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, "sub")

    def mul_(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, "mul")

    def div_(self, other: Union["Tensor", Scalar]) -> "Tensor":
        return self._inplace(other, "div")

    def fill_(self, value: Scalar) -> "Tensor":
        self._write(self._offsets(), self._scalar_array(value))
        return self

    def zero_(self) -> "Tensor":
        return self.fill_(0)

    # Unary math
    def _unary(self, kernel: str) -> "Tensor":
        fn, exact_on_int = _UNARY_KERNELS[kernel]
        values = self._flat()
        integral_via_float = self._dtype == "int64" and not exact_on_int
        if integral_via_float:
            values = values.astype(np.float64)
            if kernel == "reciprocal":
                _check_integer_division(kernel, np.ones_like(values), values)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            result = np.asarray(fn(values))
        if integral_via_float:
            _check_representable(kernel, result)
        return self._from_array(cast_array(result, self._dtype), self._shape, self._dtype)

    def abs(self) -> "Tensor":
        return self._unary("abs")

    def neg(self) -> "Tensor":
        return self._unary("neg")

    def sin(self) -> "Tensor":
        return self._unary("sin")

    def cos(self) -> "Tensor":
        return self._unary("cos")

    def tan(self) -> "Tensor":
        return self._unary("tan")

    def exp(self) -> "Tensor":
        return self._unary("exp")

    def log(self) -> "Tensor":
        return self._unary("log")

    def sqrt(self) -> "Tensor":
        return self._unary("sqrt")

    def tanh(self) -> "Tensor":
        return self._unary("tanh")

    def sigmoid(self) -> "Tensor":
        return self._unary("sigmoid")

    def relu(self) -> "Tensor":
        return self._unary("relu")

    def reciprocal(self) -> "Tensor":
        return self._unary("reciprocal")

    def clamp(self, min: Optional[Scalar] = None, max: Optional[Scalar] = None) -> "Tensor":
        """Limit values to ``[min, max]``; either bound may be omitted."""
        if min is None and max is None:
            raise InvalidArgumentError("clamp(): at least one of min or max is required")
        result = np.clip(self._flat(), min, max)
        return self._from_array(cast_array(result, self._dtype), self._shape, self._dtype)

    clip = clamp

    # Reductions
    def sum(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.sum(self, dim, keepdim)

    def prod(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.prod(self, dim, keepdim)

    def mean(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.mean(self, dim, keepdim)

    def var(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.var(self, dim, keepdim)

    def std(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Unbiased standard deviation."""
        return _reduction.std(self, dim, keepdim)

    def max(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.max(self, dim, keepdim)

    def min(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.min(self, dim, keepdim)

    def median(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        """Lower median (``[1, 2, 3, 4]`` gives ``2``)."""
        return _reduction.median(self, dim, keepdim)

    def argmax(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.argmax(self, dim, keepdim)

    def argmin(self, dim: Optional[int] = None, keepdim: bool = False) -> "Tensor":
        return _reduction.argmin(self, dim, keepdim)

    def softmax(self, dim: Optional[int] = None) -> "Tensor":
        return _reduction.softmax(self, dim)

    def log_softmax(self, dim: Optional[int] = None) -> "Tensor":
        return _reduction.log_softmax(self, dim)

    # Comparison helpers
    def equal(self, other: "Tensor") -> bool:
        """True when shapes and every element match."""
        return self._shape == other.shape and bool(
            np.array_equal(self._flat(), other._flat())
        )

    def allclose(self, other: "Tensor", rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        return self._shape == other.shape and bool(
            np.allclose(self._flat(), other._flat(), rtol=rtol, atol=atol)
        )

    # String representation
    def __repr__(self) -> str:
        from ._format import format_tensor

        return format_tensor(self)

    __str__ = __repr__

    def __bool__(self) -> bool:
        if self._numel != 1:
            raise TensorError(
                "Boolean value of Tensor with more than one value is ambiguous"
            )
        return bool(self.item())

    # Static tensor creation methods
    @staticmethod
    def _filled(shape: Sequence[Any], value: Scalar, dtype: Optional[str]) -> "Tensor":
        shape = normalize_shape(shape)
        check_sizes(shape)
        check_rank(len(shape))
        target = validate_dtype(dtype)
        data = np.full(numel(shape), value, dtype=numpy_dtype(target))
        return Tensor._from_array(data, shape, target)

    @staticmethod
    def zeros(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with zeros."""
        return Tensor._filled(shape, 0, dtype)

    @staticmethod
    def ones(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor._filled(shape, 1, dtype)

    @staticmethod
    def full(shape: Sequence[int], fill_value: Scalar, dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor filled with a specific value."""
        return Tensor._filled((shape,), fill_value, dtype)

    @staticmethod
    def rand(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor with random values from uniform distribution [0, 1)."""
        shape = normalize_shape(shape)
        check_sizes(shape)
        check_rank(len(shape))
        return Tensor._from_array(generator().random(numel(shape)), shape, validate_dtype(dtype))

    @staticmethod
    def randn(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> "Tensor":
        """Create a tensor with random values from standard normal distribution."""
        shape = normalize_shape(shape)
        check_sizes(shape)
        check_rank(len(shape))
        return Tensor._from_array(
            generator().standard_normal(numel(shape)), shape, validate_dtype(dtype)
        )

    @staticmethod
    def arange(
        start: float,
        end: Optional[float] = None,
        step: float = 1.0,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Values from ``start`` up to (excluding) ``end`` spaced by ``step``."""
        if end is None:
            start, end = 0, start
        if step == 0:
            raise InvalidArgumentError("arange(): step must be non-zero")
        values = np.arange(start, end, step, dtype=np.float64)
        return Tensor._from_array(values, (values.size,), validate_dtype(dtype))

    @staticmethod
    def linspace(start: float, end: float, steps: int, dtype: Optional[str] = None) -> "Tensor":
        steps = as_index(steps, "steps")
        if steps <= 0:
            raise InvalidArgumentError("Number of steps must be positive")
        values = np.linspace(start, end, steps, dtype=np.float64)
        return Tensor._from_array(values, (steps,), validate_dtype(dtype))

    @staticmethod
    def eye(n: int, m: Optional[int] = None, dtype: Optional[str] = None) -> "Tensor":
        """Create an identity matrix."""
        n = as_index(n, "n")
        m = n if m is None else as_index(m, "m")
        check_sizes((n, m))
        identity = Tensor.zeros(n, m, dtype=dtype)
        for i in range(min(n, m)):
            identity.put((i, i), 1)
        return identity

    @staticmethod
    def from_numpy(array: np.ndarray) -> "Tensor":
        """Copy a numpy array into a new tensor."""
        return Tensor(np.asarray(array))

    @staticmethod
    def from_flat(data: Any, shape: Sequence[int], dtype: Optional[str] = None) -> "Tensor":
        """Build a tensor from a flat buffer laid out row-major for ``shape``."""
        shape = normalize_shape((shape,))
        check_sizes(shape)
        check_rank(len(shape))
        values = np.asarray(data)
        if values.ndim != 1:
            values = values.reshape(-1)
        if values.size != numel(shape):
            raise InvalidReshapeError(
                f"buffer of {values.size} elements cannot fill shape {shape}"
            )
        if dtype is None:
            if isinstance(data, np.ndarray) and values.size:
                target = dtype_from_numpy(values.dtype)
            else:
                target = _infer_dtype(values.tolist())
        else:
            target = validate_dtype(dtype)
        return Tensor._from_array(values, shape, target)

    # Dtype conversions. Defined last: inside the class body these names
    # shadow the builtins.
    def double(self) -> "Tensor":
        return self.astype("float64")

    def long(self) -> "Tensor":
        return self.astype("int64")

    def float(self) -> "Tensor":
        return self.astype("float32")


def tensor(data: Any, dtype: Optional[str] = None) -> Tensor:
    return Tensor(data, dtype=dtype)


def zeros(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    return Tensor.zeros(*shape, dtype=dtype)


def ones(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    return Tensor.ones(*shape, dtype=dtype)


def full(shape: Sequence[int], fill_value: Scalar, dtype: Optional[str] = None) -> Tensor:
    return Tensor.full(shape, fill_value, dtype=dtype)


def rand(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    return Tensor.rand(*shape, dtype=dtype)


def randn(*shape: Union[int, Sequence[int]], dtype: Optional[str] = None) -> Tensor:
    return Tensor.randn(*shape, dtype=dtype)


def arange(
    start: float,
    end: Optional[float] = None,
    step: float = 1.0,
    dtype: Optional[str] = None,
) -> Tensor:
    return Tensor.arange(start, end, step, dtype=dtype)


def linspace(start: float, end: float, steps: int, dtype: Optional[str] = None) -> Tensor:
    return Tensor.linspace(start, end, steps, dtype=dtype)


def eye(n: int, m: Optional[int] = None, dtype: Optional[str] = None) -> Tensor:
    return Tensor.eye(n, m, dtype=dtype)


def from_numpy(array: np.ndarray) -> Tensor:
    return Tensor.from_numpy(array)


def from_flat(data: Any, shape: Sequence[int], dtype: Optional[str] = None) -> Tensor:
    return Tensor.from_flat(data, shape, dtype=dtype)


def zeros_like(other: Tensor, dtype: Optional[str] = None) -> Tensor:
    return Tensor.zeros(other.shape, dtype=dtype or other.dtype)


def ones_like(other: Tensor, dtype: Optional[str] = None) -> Tensor:
    return Tensor.ones(other.shape, dtype=dtype or other.dtype)
