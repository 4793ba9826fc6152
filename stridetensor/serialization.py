# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""JSON persistence of tensors.

The persisted document is ``{"size": [...], "dtype": "<name>", "storage":
[...]}`` where ``dtype`` is ``FloatTensor``, ``DoubleTensor`` or
``LongTensor`` and ``storage`` lists the elements in row-major order.
"""

from __future__ import annotations

import json
import logging
from numbers import Integral, Real
from pathlib import Path
from typing import Any, Union

from ._backend import dtype_from_persisted, persisted_name
from .errors import SerializationError, TensorError
from .tensor import Tensor

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def encode(tensor: Tensor) -> bytes:
    """Serialize ``tensor`` to UTF-8 JSON bytes."""

    payload = {
        "size": list(tensor.shape),
        "dtype": persisted_name(tensor.dtype),
        "storage": tensor._flat().tolist(),
    }
    return json.dumps(payload).encode("utf-8")


def _field(document: Any, key: str) -> Any:
    if not isinstance(document, dict) or key not in document:
        raise SerializationError(f"persisted tensor is missing the '{key}' field")
    return document[key]


def decode(payload: Union[bytes, str]) -> Tensor:
    """Rebuild a tensor from :func:`encode` output."""

    try:
        document = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SerializationError(f"persisted tensor is not valid JSON: {exc}") from exc

    size = _field(document, "size")
    name = _field(document, "dtype")
    storage = _field(document, "storage")
    if not isinstance(size, list) or not all(
        isinstance(s, Integral) and not isinstance(s, bool) for s in size
    ):
        raise SerializationError(f"'size' must be a list of integers, got {size!r}")
    if not isinstance(storage, list) or not all(
        isinstance(v, Real) and not isinstance(v, bool) for v in storage
    ):
        raise SerializationError("'storage' must be a flat list of numbers")
    try:
        dtype = dtype_from_persisted(name)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc
    try:
        return Tensor.from_flat(storage, size, dtype=dtype)
    except TensorError as exc:
        raise SerializationError(f"persisted tensor is inconsistent: {exc}") from exc


def save(tensor: Tensor, path: PathLike) -> None:
    """Write ``tensor`` to ``path`` as JSON."""

    path = Path(path)
    path.write_bytes(encode(tensor))
    logger.debug("saved %s tensor of shape %s to %s", tensor.dtype, tensor.shape, path)


def load(path: PathLike) -> Tensor:
    """Read a tensor previously written by :func:`save`."""

    path = Path(path)
    tensor = decode(path.read_bytes())
    logger.debug("loaded %s tensor of shape %s from %s", tensor.dtype, tensor.shape, path)
    return tensor


__all__ = ["encode", "decode", "save", "load"]
