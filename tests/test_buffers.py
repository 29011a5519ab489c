import numpy as np
import pytest

from conebridge.buffers import (
    TypeConfig, as_contiguous, as_float_array, as_index_array,
    is_copy, is_float_array, is_integer_array,
)


def test_no_copy_when_already_contiguous_and_typed():
    arr = np.arange(5, dtype=np.float64)
    out = as_contiguous(arr, np.float64)
    assert out is arr
    assert not is_copy(out, arr)


def test_copy_on_dtype_change_leaves_original_untouched():
    arr = np.array([1.5, 2.5], dtype=np.float32)
    out = as_contiguous(arr, np.float64)
    assert out.dtype == np.float64
    assert is_copy(out, arr)
    out[0] = 99.0
    assert arr[0] == np.float32(1.5)


def test_copy_for_non_contiguous_view():
    arr = np.arange(10, dtype=np.int32)[::2]
    out = as_contiguous(arr, np.int32)
    assert out.flags['C_CONTIGUOUS']
    assert is_copy(out, arr)
    np.testing.assert_array_equal(out, [0, 2, 4, 6, 8])


def test_incompatible_kind_raises_type_error():
    with pytest.raises(TypeError):
        as_contiguous(np.array(['a', 'b']), np.float64)
    with pytest.raises(TypeError):
        as_contiguous([1.0, 2.0], np.float64)


def test_kind_predicates():
    assert is_float_array(np.zeros(2))
    assert not is_float_array(np.zeros(2, dtype=np.int64))
    assert is_integer_array(np.zeros(2, dtype=np.uint16))
    assert not is_integer_array([1, 2])


def test_plain_sequences_are_converted():
    assert as_float_array([1, 2], np.float64).dtype == np.float64
    assert as_index_array([0, 3], np.int32).dtype.kind == 'i'
    assert as_index_array([], np.int32).dtype == np.int32
    assert as_float_array(['x'], np.float64).dtype == object


@pytest.mark.parametrize("width, expected", [
    (1, np.int8), (2, np.int16), (4, np.int32), (8, np.int64), (3, np.int32),
])
def test_type_config_follows_backend_index_width(width, expected):
    class Backend:
        index_bytes = width

    types = TypeConfig.for_backend(Backend())
    assert types.index_dtype == np.dtype(expected)
    assert types.float_dtype == np.dtype(np.float64)
