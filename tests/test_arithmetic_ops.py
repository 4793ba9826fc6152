# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st


def test_elementwise_tensor_ops():
    a = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
    b = np.array([[0.5, -1.0], [2.0, 8.0]], dtype=np.float32)
    x, y = st.Tensor(a), st.Tensor(b)
    np.testing.assert_allclose((x + y).numpy(), a + b)
    np.testing.assert_allclose((x - y).numpy(), a - b)
    np.testing.assert_allclose((x * y).numpy(), a * b)
    np.testing.assert_allclose((x / y).numpy(), a / b)
    np.testing.assert_allclose((x ** y).numpy(), a ** b, rtol=1e-6)


def test_scalar_and_reflected_ops():
    x = st.Tensor([1, 2, 3])
    assert (x + 1).tolist() == [2, 3, 4]
    assert (1 - x).tolist() == [0, -1, -2]
    assert (2 * x).tolist() == [2, 4, 6]
    assert (2 ** x).tolist() == [2, 4, 8]
    assert (-x).tolist() == [-1, -2, -3]
    np.testing.assert_allclose((6.0 / st.Tensor([1.0, 2.0, 4.0])).numpy(), [6.0, 3.0, 1.5])


def test_named_aliases():
    x = st.Tensor([2.0, 4.0])
    y = st.Tensor([1.0, 2.0])
    assert x.add(y).equal(x + y)
    assert x.sub(y).equal(x - y)
    assert x.mul(y).equal(x * y)
    assert x.div(y).equal(x / y)
    assert x.pow(2).equal(x ** 2)


def test_integer_division_truncates_toward_zero():
    x = st.Tensor([7, -7, 5])
    out = x / 2
    assert out.dtype == "int64"
    assert out.tolist() == [3, -3, 2]
    assert (x / st.Tensor([2, 2, 5])).tolist() == [3, -3, 1]


def test_dtype_promotion():
    ints = st.Tensor([1, 2])
    floats = st.Tensor([0.5, 0.5])
    assert (ints + floats).dtype == "float32"
    np.testing.assert_allclose((ints + floats).numpy(), [1.5, 2.5])
    doubles = st.Tensor([0.5, 0.5], dtype="float64")
    assert (floats * doubles).dtype == "float64"
    # scalars never change the tensor dtype
    assert (ints * 0.5).dtype == "int64"
    assert (ints * 0.5).tolist() == [0, 1]


def test_ops_on_views_use_logical_order():
    a = np.arange(6, dtype=np.float64).reshape(2, 3)
    x = st.Tensor(a).t()
    y = st.Tensor(a.T.copy())
    np.testing.assert_array_equal((x + y).numpy(), a.T * 2)


def test_shape_mismatch_raises():
    with pytest.raises(st.ShapeMismatchError) as info:
        st.zeros(2, 3) + st.zeros(3, 2)
    assert "(2, 3)" in str(info.value) and "(3, 2)" in str(info.value)
    with pytest.raises(ValueError):
        st.zeros(3) * st.zeros(1)


def test_unsupported_operand():
    with pytest.raises(TypeError):
        st.zeros(2) + "a"
    with pytest.raises(TypeError):
        st.zeros(2).add_("a")


def test_inplace_ops_return_self():
    x = st.Tensor([1.0, 2.0])
    assert x.add_(1) is x
    assert x.tolist() == [2.0, 3.0]
    x.mul_(st.Tensor([2.0, 0.5]))
    assert x.tolist() == [4.0, 1.5]
    x.sub_(0.5).div_(2)
    assert x.tolist() == [1.75, 0.5]
    assert x.zero_().tolist() == [0.0, 0.0]
    assert x.fill_(3).tolist() == [3.0, 3.0]


def test_inplace_keeps_integer_dtype():
    x = st.Tensor([5, 7])
    x.div_(2)
    assert x.dtype == "int64"
    assert x.tolist() == [2, 3]
    x.add_(st.Tensor([0.9, 0.9]))
    assert x.tolist() == [2, 3]


def test_inplace_on_permuted_view():
    x = st.Tensor([[1, 2], [3, 4]]).t()
    x.add_(st.Tensor([[10, 20], [30, 40]]))
    assert x.tolist() == [[11, 23], [32, 44]]


def test_integer_division_by_zero_raises():
    x = st.Tensor([1, 2, 0])
    with pytest.raises(st.DivisionByZeroError):
        x / 0
    with pytest.raises(ZeroDivisionError):
        x / st.Tensor([1, 0, 1])
    with pytest.raises(ZeroDivisionError):
        6 / x
    with pytest.raises(ZeroDivisionError):
        x.div(0.0)


def test_integer_inplace_division_by_zero_leaves_receiver_unchanged():
    x = st.Tensor([4, 8])
    with pytest.raises(st.DivisionByZeroError):
        x.div_(0)
    assert x.tolist() == [4, 8]


def test_integer_zero_to_negative_power_raises():
    with pytest.raises(st.DivisionByZeroError):
        st.Tensor([0, 2]) ** -1
    with pytest.raises(ZeroDivisionError):
        0 ** st.Tensor([1, -2])
    assert (st.Tensor([1, 2]) ** -1).tolist() == [1, 0]


def test_float_division_by_zero_gives_infinity():
    out = st.Tensor([1.0, -1.0]) / 0
    assert np.isposinf(out.numpy()[0])
    assert np.isneginf(out.numpy()[1])
