# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st
from stridetensor import functional as F


def test_flip_single_axis():
    a = np.arange(6).reshape(2, 3)
    x = st.Tensor(a)
    np.testing.assert_array_equal(x.flip(0).numpy(), np.flip(a, 0))
    np.testing.assert_array_equal(x.flip(1).numpy(), np.flip(a, 1))
    np.testing.assert_array_equal(x.flip(-1).numpy(), np.flip(a, -1))


def test_flip_multiple_axes():
    a = np.arange(24).reshape(2, 3, 4)
    x = st.Tensor(a)
    np.testing.assert_array_equal(F.flip(x, [0, 2]).numpy(), np.flip(a, (0, 2)))
    np.testing.assert_array_equal(st.flip(x, (0, 1, 2)).numpy(), np.flip(a))


def test_flip_twice_restores():
    x = st.randn(3, 4)
    assert x.flip(1).flip(1).equal(x)


def test_flip_permuted_view():
    a = np.arange(6, dtype=np.float32).reshape(2, 3)
    x = st.Tensor(a).t()
    np.testing.assert_array_equal(x.flip(0).numpy(), np.flip(a.T, 0))


def test_flip_empty_dims_copies():
    x = st.Tensor([1, 2, 3])
    out = x.flip([])
    assert out.equal(x)
    assert not out.shares_storage(x)


def test_flip_errors():
    x = st.zeros(2, 3)
    with pytest.raises(ValueError):
        x.flip([0, 0])
    with pytest.raises(ValueError):
        x.flip([1, -1])
    with pytest.raises(IndexError):
        x.flip(2)
