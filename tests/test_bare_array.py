# ==================================================
# ===============  TESTS: BareArray  ===============
# ==================================================
from __future__ import annotations

import numpy as np
import pytest

from conftest import make_np
from imagemeta.core.bare_array import BareArray, default_limits
from imagemeta.core.errors import DimensionalAmbiguityError, UnsupportedOperationError
from imagemeta.core.property_store import get_property, get_property_lazy, has_property
from imagemeta.operators import semantics as sem


# ===================
# Colorspace / colordim inference
# ===================

@pytest.mark.parametrize(
    "shape, dtype, expected",
    [
        ((4, 5), "float32", "Gray"),
        ((4, 5), "uint8", "Gray"),
        ((4, 5), "int32", "24bit"),
        ((4, 5), "uint32", "24bit"),
        ((4, 5, 3), "uint8", "RGB"),
        ((4, 5, 7), "bool", "Binary"),
    ],
)
def test_colorspace_inference(shape, dtype, expected):
    assert sem.colorspace(make_np(shape, dtype)) == expected


def test_colordim_inference(gray, rgb):
    assert sem.colordim(gray) is None
    assert sem.colordim(rgb) == 2
    assert sem.timedim(rgb) is None


@pytest.mark.parametrize("shape", [(4, 5, 4), (2, 4, 5, 3), (7,)])
def test_ambiguous_shapes_raise(shape):
    arr = make_np(shape, "uint8")
    with pytest.raises(DimensionalAmbiguityError):
        sem.colorspace(arr)
    with pytest.raises(DimensionalAmbiguityError):
        sem.colordim(arr)
    with pytest.raises(DimensionalAmbiguityError):
        sem.pixelspacing(arr)


def test_ambiguity_error_is_a_value_error():
    with pytest.raises(ValueError):
        sem.colordim(np.zeros((2, 3, 4, 5)))


# ===================
# Limits / pixelspacing / spatialorder
# ===================

@pytest.mark.parametrize(
    "dtype, expected",
    [("bool", (0, 1)), ("uint8", (0, 255)), ("int16", (-32768, 32767)), ("float64", (0.0, 1.0))],
)
def test_default_limits(dtype, expected):
    assert sem.limits(make_np((2, 2), dtype)) == expected


def test_default_limits_unsupported_dtype():
    with pytest.raises(UnsupportedOperationError):
        default_limits(np.dtype("complex64"))


def test_float_limits_follow_config(gray, restore_config):
    restore_config.update_config(float_limits=(-1.0, 1.0))
    assert sem.limits(gray) == (-1.0, 1.0)


def test_pixelspacing_and_spatialorder(gray, rgb):
    np.testing.assert_array_equal(sem.pixelspacing(gray), [1.0, 1.0])
    np.testing.assert_array_equal(sem.pixelspacing(rgb), [1.0, 1.0])
    assert sem.spatialorder(gray) == ["y", "x"]
    assert sem.spatialorder(rgb) == ["y", "x"]


def test_spatialorder_requires_two_spatial_dims():
    # a (H, W, 3) array is RGB, so only the 3-D non-RGB case reaches spatialorder
    with pytest.raises(DimensionalAmbiguityError):
        sem.spatialorder(np.zeros((4, 5, 4)))


def test_bare_array_has_no_properties(gray):
    bare = BareArray(gray)
    assert has_property(bare, "colorspace") is False
    assert get_property(bare, "colorspace", "x") == "x"
    assert get_property_lazy(bare, "limits", lambda: (1, 2)) == (1, 2)
    assert "4x5" in repr(bare)


def test_bare_array_rejects_non_arrays():
    with pytest.raises(TypeError):
        BareArray([[1, 2], [3, 4]])
    with pytest.raises(TypeError):
        sem.colorspace("not an array")


def test_custom_color_channels(restore_config):
    restore_config.update_config(color_channels=4)
    arr = make_np((4, 5, 4), "uint8")
    assert sem.colorspace(arr) == "RGB"
    assert sem.colordim(arr) == 2
