# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
from typing import Iterable

from . import functional, serialization
from ._backend import (
    MAX_RANK,
    default_dtype,
    get_default_dtype,
    manual_seed,
    set_default_dtype,
)
from ._storage import Storage
from ._version import __version__
from .errors import (
    DivisionByZeroError,
    EmptyReductionError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    InvalidReshapeError,
    SerializationError,
    ShapeMismatchError,
    TensorError,
    UnsupportedRankError,
)
from .tensor import (
    Tensor,
    arange,
    eye,
    from_flat,
    from_numpy,
    full,
    linspace,
    ones,
    ones_like,
    rand,
    randn,
    tensor,
    zeros,
    zeros_like,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

save = serialization.save
load = serialization.load

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
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
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "Storage",
    "tensor",
    "functional",
    "serialization",
    "zeros",
    "ones",
    "full",
    "rand",
    "randn",
    "arange",
    "linspace",
    "eye",
    "zeros_like",
    "ones_like",
    "from_numpy",
    "from_flat",
    "save",
    "load",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "manual_seed",
    "MAX_RANK",
    "TensorError",
    "ShapeMismatchError",
    "IndexOutOfRangeError",
    "UnsupportedRankError",
    "InvalidReshapeError",
    "EmptyReductionError",
    "InvalidArgumentError",
    "DivisionByZeroError",
    "SerializationError",
    "__version__",
    *_FUNCTIONAL_FORWARDERS,
]
