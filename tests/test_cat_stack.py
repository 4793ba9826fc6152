# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st
from stridetensor import functional as F


def test_cat_along_each_axis():
    a = np.arange(6, dtype=np.float32).reshape(2, 3)
    b = np.arange(6, 12, dtype=np.float32).reshape(2, 3)
    x, y = st.Tensor(a), st.Tensor(b)
    np.testing.assert_array_equal(st.cat([x, y], 0).numpy(), np.concatenate([a, b], 0))
    np.testing.assert_array_equal(st.cat([x, y], 1).numpy(), np.concatenate([a, b], 1))
    np.testing.assert_array_equal(F.cat([x, y], -1).numpy(), np.concatenate([a, b], -1))


def test_cat_different_lengths_along_dim():
    a = np.arange(6).reshape(2, 3)
    b = np.arange(3).reshape(1, 3)
    out = st.cat([st.Tensor(a), st.Tensor(b)])
    assert out.shape == (3, 3)
    np.testing.assert_array_equal(out.numpy(), np.concatenate([a, b]))


def test_cat_3d_middle_axis_with_views():
    a = np.arange(24, dtype=np.float64).reshape(2, 3, 4)
    x = st.Tensor(a)
    y = st.Tensor(a.transpose(0, 2, 1).copy()).permute(0, 2, 1)
    out = st.cat([x, y], 1)
    np.testing.assert_array_equal(out.numpy(), np.concatenate([a, a], 1))
    assert out.is_contiguous()


def test_cat_promotes_dtype():
    out = st.cat([st.Tensor([1, 2]), st.Tensor([0.5])])
    assert out.dtype == "float32"
    np.testing.assert_allclose(out.numpy(), [1.0, 2.0, 0.5])
    out64 = st.cat([st.Tensor([1.0], dtype="float32"), st.Tensor([2.0], dtype="float64")])
    assert out64.dtype == "float64"


def test_cat_errors():
    with pytest.raises(st.ShapeMismatchError):
        st.cat([st.zeros(2, 3), st.zeros(2, 4)], 0)
    with pytest.raises(st.ShapeMismatchError):
        st.cat([st.zeros(2, 3), st.zeros(6)], 0)
    with pytest.raises(ValueError):
        st.cat([])
    with pytest.raises(IndexError):
        st.cat([st.zeros(2), st.zeros(2)], 1)


def test_cat_single_tensor_copies():
    x = st.Tensor([1, 2, 3])
    out = st.cat([x])
    assert out.equal(x)
    assert not out.shares_storage(x)


def test_stack_new_axis():
    a = np.arange(6).reshape(2, 3)
    b = a * 10
    x, y = st.Tensor(a), st.Tensor(b)
    for d in (0, 1, 2, -1):
        np.testing.assert_array_equal(
            st.stack([x, y], d).numpy(), np.stack([a, b], axis=d)
        )


def test_stack_errors():
    with pytest.raises(st.ShapeMismatchError):
        st.stack([st.zeros(2, 3), st.zeros(3, 2)])
    with pytest.raises(st.UnsupportedRankError):
        st.stack([st.zeros([1] * 8), st.zeros([1] * 8)])
    with pytest.raises(IndexError):
        st.stack([st.zeros(2), st.zeros(2)], 2)
