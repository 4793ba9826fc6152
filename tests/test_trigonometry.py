# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st
from stridetensor import functional as F


def test_trig_functions():
    a = np.array([0.0, 0.5, 1.0], dtype=np.float32)
    x = st.Tensor(a)
    np.testing.assert_allclose(x.sin().numpy(), np.sin(a), rtol=1e-6)
    np.testing.assert_allclose(x.cos().numpy(), np.cos(a), rtol=1e-6)
    np.testing.assert_allclose(x.tan().numpy(), np.tan(a), rtol=1e-6)
    np.testing.assert_allclose(x.tanh().numpy(), np.tanh(a), rtol=1e-6)


def test_exp_log_sqrt():
    a = np.array([0.25, 1.0, 4.0], dtype=np.float64)
    x = st.Tensor(a)
    np.testing.assert_allclose(x.exp().numpy(), np.exp(a))
    np.testing.assert_allclose(x.log().numpy(), np.log(a))
    np.testing.assert_allclose(x.sqrt().numpy(), np.sqrt(a))
    np.testing.assert_allclose(x.reciprocal().numpy(), 1.0 / a)


def test_log_of_zero_is_negative_infinity():
    assert np.isneginf(st.Tensor([0.0]).log().item())
    assert np.isnan(st.Tensor([-1.0]).sqrt().item())


def test_integer_input_truncates_results():
    x = st.Tensor([1, 2, 4])
    assert x.sin().dtype == "int64"
    assert x.sin().tolist() == [0, 0, 0]
    assert x.sqrt().tolist() == [1, 1, 2]
    assert x.exp().tolist() == [2, 7, 54]


def test_activations():
    a = np.array([-2.0, 0.0, 3.0])
    x = st.Tensor(a, dtype="float64")
    np.testing.assert_allclose(F.sigmoid(x).numpy(), 1.0 / (1.0 + np.exp(-a)))
    np.testing.assert_array_equal(F.relu(x).numpy(), [0.0, 0.0, 3.0])
    assert st.Tensor([-3, 5]).relu().tolist() == [0, 5]


def test_abs_and_neg_exact_on_integers():
    x = st.Tensor([-3, 0, 2])
    assert x.abs().tolist() == [3, 0, 2]
    assert x.neg().tolist() == [3, 0, -2]


def test_clamp():
    x = st.Tensor([-2.0, 0.5, 4.0])
    assert x.clamp(0.0, 1.0).tolist() == [0.0, 0.5, 1.0]
    assert x.clamp(min=0.0).tolist() == [0.0, 0.5, 4.0]
    assert x.clip(max=0.0).tolist() == [-2.0, 0.0, 0.0]
    with pytest.raises(ValueError):
        x.clamp()


def test_unary_on_view_preserves_shape():
    a = np.arange(6, dtype=np.float64).reshape(2, 3)
    x = st.Tensor(a).t()
    out = x.exp()
    assert out.shape == (3, 2)
    np.testing.assert_allclose(out.numpy(), np.exp(a.T))


def test_integer_reciprocal_of_zero_raises():
    assert st.Tensor([1, 2, -1]).reciprocal().tolist() == [1, 0, -1]
    with pytest.raises(st.DivisionByZeroError):
        st.Tensor([1, 2, 0]).reciprocal()


def test_integer_result_out_of_domain_raises():
    with pytest.raises(ValueError):
        st.Tensor([0, 1]).log()
    with pytest.raises(ValueError):
        st.Tensor([-4]).sqrt()
