# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Flat typed element buffers shared between a tensor and its views."""

from __future__ import annotations

import logging
from typing import Any
from weakref import WeakSet

import numpy as np

logger = logging.getLogger(__name__)


class Storage:
    """A flat, homogeneous, mutable buffer.

    Tensors register themselves as owners when they adopt a storage. Views
    created by ``permute``/``transpose``/``squeeze``/``unsqueeze``/``view``
    adopt the same storage object, so the owner set tells whether a write
    would be observed by another tensor. Writers call :meth:`Storage.detach`
    first, which hands back a private copy when the buffer is shared
    (copy-on-write), and then :meth:`Storage.write`.
    """

    __slots__ = ("_data", "_owners", "__weakref__")

    def __init__(self, data: np.ndarray):
        if data.ndim != 1:
            data = data.reshape(-1)
        self._data = data
        self._owners: "WeakSet[Any]" = WeakSet()

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the elements; mutate through the owning tensor."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return int(self._data.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def adopt(self, owner: Any) -> "Storage":
        self._owners.add(owner)
        return self

    def release(self, owner: Any) -> None:
        self._owners.discard(owner)

    def is_shared(self) -> bool:
        return len(self._owners) > 1

    def copy(self) -> "Storage":
        return Storage(self._data.copy())

    def write(self, positions: np.ndarray, values: Any) -> None:
        self._data[positions] = values

    def detach(self, owner: Any) -> "Storage":
        """Return a storage ``owner`` may write to without affecting others."""

        if not self.is_shared():
            return self
        logger.debug(
            "copy-on-write: detaching %d elements from %d owners",
            len(self),
            len(self._owners),
        )
        self.release(owner)
        return self.copy().adopt(owner)

    def __repr__(self) -> str:
        return f"Storage(size={len(self)}, dtype={self._data.dtype})"
