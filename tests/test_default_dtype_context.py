# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

import stridetensor as st


def test_default_dtype_is_float32():
    assert st.get_default_dtype() == "float32"
    assert st.Tensor([1.5]).dtype == "float32"


def test_set_default_dtype():
    st.set_default_dtype("float64")
    assert st.get_default_dtype() == "float64"
    assert st.zeros(2).dtype == "float64"
    assert st.Tensor([0.5]).dtype == "float64"


def test_default_dtype_context_restores():
    with st.default_dtype("float64") as dtype:
        assert dtype == "float64"
        assert st.ones(2).dtype == "float64"
        assert st.arange(3).dtype == "float64"
    assert st.get_default_dtype() == "float32"
    assert st.ones(2).dtype == "float32"


def test_default_dtype_context_restores_on_error():
    with pytest.raises(RuntimeError):
        with st.default_dtype("int64"):
            raise RuntimeError("boom")
    assert st.get_default_dtype() == "float32"


def test_nested_contexts():
    with st.default_dtype("float64"):
        with st.default_dtype("int64"):
            assert st.zeros(1).dtype == "int64"
        assert st.get_default_dtype() == "float64"
    assert st.get_default_dtype() == "float32"


def test_integer_data_ignores_default():
    with st.default_dtype("float64"):
        assert st.Tensor([1, 2]).dtype == "int64"


def test_invalid_default_dtype():
    with pytest.raises(ValueError):
        st.set_default_dtype("bool")
    with pytest.raises(ValueError):
        with st.default_dtype("complex64"):
            pass
    assert st.get_default_dtype() == "float32"
