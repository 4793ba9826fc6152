# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import numpy as np
import pytest

import stridetensor as st


def test_views_share_storage():
    x = st.Tensor([[1, 2, 3], [4, 5, 6]])
    for view in (
        x.t(),
        x.permute(1, 0),
        x.transpose(0, 1),
        x.unsqueeze(0),
        x.unsqueeze(0).squeeze(0),
        x.view(3, 2),
    ):
        assert view.shares_storage(x)
        assert len(view.storage) == x.numel()


def test_copying_operations_allocate():
    x = st.Tensor([[1, 2, 3], [4, 5, 6]])
    for copy in (
        x.narrow(1, 0, 2),
        x.get(0),
        x.repeat(1, 1),
        x.clone(),
        x.t().contiguous(),
        x.sum(0),
    ):
        assert not copy.shares_storage(x)


def test_write_through_view_leaves_source_unchanged():
    x = st.Tensor([[1, 2], [3, 4]])
    view = x.t()
    view.set(0, 1, 100)
    assert view.tolist() == [[1, 100], [2, 4]]
    assert x.tolist() == [[1, 2], [3, 4]]
    assert not view.shares_storage(x)


def test_write_to_source_leaves_view_unchanged():
    x = st.Tensor([1.0, 2.0, 3.0])
    view = x.unsqueeze(0)
    x.add_(1)
    assert x.tolist() == [2.0, 3.0, 4.0]
    assert view.tolist() == [[1.0, 2.0, 3.0]]


def test_unshared_storage_is_written_in_place():
    x = st.zeros(3)
    storage = x.storage
    x[0] = 5.0
    assert x.storage is storage
    assert storage.data[0] == 5.0


def test_clone_keeps_strides_and_is_independent():
    x = st.Tensor([[1, 2], [3, 4]]).t()
    y = x.clone()
    assert y.strides == x.strides
    y.fill_(0)
    assert x.tolist() == [[1, 3], [2, 4]]


def test_numpy_returns_a_copy():
    x = st.Tensor([1, 2, 3])
    array = x.numpy()
    array[0] = 99
    assert x.tolist() == [1, 2, 3]
    np.testing.assert_array_equal(np.asarray(x), [1, 2, 3])


def test_storage_data_is_read_only():
    x = st.Tensor([[1, 2, 3]])
    view = x.t()
    with pytest.raises(ValueError):
        x.storage.data[0] = 100
    assert view.tolist() == [[1], [2], [3]]
    x.set(0, 0, 100)
    assert view.tolist() == [[1], [2], [3]]
    assert x.storage.data[0] == 100
