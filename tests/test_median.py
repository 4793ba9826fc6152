# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st
from stridetensor import functional as F


def test_median_even_count_takes_lower_middle():
    assert st.Tensor([1, 2, 3, 4]).median().item() == 2
    assert st.Tensor([4.0, 1.0, 3.0, 2.0]).median().item() == 2.0


def test_median_odd_count():
    assert st.Tensor([3, 1, 2]).median().item() == 2
    assert st.Tensor([5.0]).median().item() == 5.0


def test_median_global_ignores_layout():
    x = st.Tensor([[9, 1, 5], [3, 7, 2]]).t()
    assert x.median().item() == 3


def test_median_along_axis():
    x = st.Tensor([[1, 5, 3], [4, 2, 6]])
    assert x.median(1).tolist() == [3, 4]
    # two rows: lower middle is the column minimum
    assert x.median(0).tolist() == [1, 2, 3]
    assert x.median(1, keepdim=True).shape == (2, 1)


def test_median_along_axis_3d():
    a = np.arange(24, dtype=np.float64).reshape(2, 3, 4)[:, ::-1, :]
    x = st.Tensor(np.ascontiguousarray(a))
    expected = np.sort(a, axis=1)[:, 1, :]
    np.testing.assert_array_equal(x.median(1).numpy(), expected)


def test_functional_median():
    x = st.Tensor([[1.0, 5.0, 3.0], [4.0, 2.0, 6.0]])
    assert F.median(x, 1).equal(x.median(1))
    assert st.median(x).item() == 3.0


def test_median_empty_raises():
    with pytest.raises(st.EmptyReductionError):
        st.zeros(0).median()
    with pytest.raises(st.EmptyReductionError):
        st.zeros(0, 2).median(0)
