# ==================================================
# ==============  TESTS: Transforms  ===============
# ==================================================
from __future__ import annotations

import numpy as np
import pytest

from conftest import make_np
from imagemeta.core.errors import DimensionalityMismatchError, PermutationError, PropertyShapeError
from imagemeta.core.image import Image, ImageCmap
from imagemeta.core.permutations import invperm
from imagemeta.operators.transforms import convert, permutedims, to_array, to_direct


# ===================
# to_direct
# ===================

def test_to_direct_single_column_colormap():
    idx = np.array([[0, 2], [1, 1]], dtype=np.uint8)
    cmap = np.array([[10.0], [20.0], [30.0]])
    img = ImageCmap(idx, cmap, {"pixelspacing": [1.0, 2.0]})

    out = to_direct(img)
    assert isinstance(out, Image)
    np.testing.assert_array_equal(out.data, [[10.0, 30.0], [20.0, 20.0]])
    assert out.colordim() is None
    out.properties["pixelspacing"][0] = 5.0
    assert img.properties["pixelspacing"] == [1.0, 2.0]


def test_to_direct_vector_colormap():
    img = ImageCmap(np.array([2, 0, 1]), np.array([5, 6, 7]))
    np.testing.assert_array_equal(to_direct(img).data, [7, 5, 6])


def test_to_direct_multi_column_colormap():
    idx = np.array([[0, 1], [2, 1]], dtype=np.uint8)
    cmap = np.array([[0, 0, 0], [128, 64, 32], [255, 255, 255]], dtype=np.uint8)
    img = ImageCmap(idx, cmap, {"colorspace": "RGB"})

    out = to_direct(img)
    assert out.shape == (2, 2, 3)
    assert out.colordim() == 2
    assert out.colorspace() == "RGB"
    np.testing.assert_array_equal(out.data[0, 1], [128, 64, 32])
    np.testing.assert_array_equal(out.data[1, 0], [255, 255, 255])
    assert "colordim" not in img.properties


def test_to_direct_identity_for_direct_images(gray):
    img = Image(gray)
    assert to_direct(img) is img
    with pytest.raises(TypeError):
        to_direct(gray)


# ===================
# to_array
# ===================

def test_to_array_canonical_order_is_a_copy(gray):
    img = Image(gray, {"spatialorder": ["y", "x"]})
    out = to_array(img)
    np.testing.assert_array_equal(out, gray)
    out[0, 0] = 99.0
    assert gray[0, 0] != 99.0


def test_to_array_transposes_xy_storage():
    arr = make_np((5, 4))
    out = to_array(Image(arr, {"spatialorder": ["x", "y"]}))
    assert out.shape == (4, 5)
    np.testing.assert_array_equal(out, arr.T)


def test_to_array_moves_color_last():
    arr = make_np((3, 4, 5), "uint8")
    img = Image(arr, {"colordim": 0, "spatialorder": ["y", "x"]})
    out = to_array(img, ndim=3)
    assert out.shape == (4, 5, 3)
    np.testing.assert_array_equal(out[..., 1], arr[1])


def test_to_array_color_first_xy_storage():
    arr = make_np((3, 5, 4), "uint8")
    img = Image(arr, {"colordim": 0, "spatialorder": ["x", "y"]})
    out = to_array(img)
    assert out.shape == (4, 5, 3)
    np.testing.assert_array_equal(out, np.transpose(arr, (2, 1, 0)))


def test_to_array_bare_arrays_and_dtype(gray, rgb):
    np.testing.assert_array_equal(to_array(rgb), rgb)
    assert to_array(rgb) is not rgb
    out = to_array(gray, dtype=np.float64)
    assert out.dtype == np.float64


def test_to_array_errors(gray):
    with pytest.raises(DimensionalityMismatchError):
        to_array(Image(gray), ndim=3)
    with pytest.raises(DimensionalityMismatchError):
        to_array(Image(np.zeros((2, 3, 4)), {"spatialorder": ["z", "y", "x"]}))
    with pytest.raises(DimensionalityMismatchError):
        to_array(Image(np.zeros((2, 3, 4)), {"timedim": 0}))


# ===================
# convert
# ===================

def test_convert(gray):
    wrapped = convert(gray, Image)
    assert isinstance(wrapped, Image) and wrapped.data is gray

    cm = ImageCmap(np.array([[0, 1]]), np.array([[1, 2], [3, 4]]))
    direct = convert(cm, Image)
    assert direct.shape == (1, 2, 2)
    assert convert(cm, ImageCmap) is cm
    with pytest.raises(TypeError):
        convert(Image(gray), ImageCmap)

    out = convert(Image(gray, {"spatialorder": ["x", "y"]}), np.ndarray)
    np.testing.assert_array_equal(out, gray.T)
    with pytest.raises(TypeError):
        convert(gray, dict)


# ===================
# permutedims
# ===================

def test_permutedims_moves_color_and_time():
    arr = make_np((6, 4, 3, 5))
    img = Image(arr, {"timedim": 0, "colordim": 2, "pixelspacing": [0.5, 2.0], "spatialorder": ["y", "x"]})
    perm = [2, 3, 1, 0]

    out = permutedims(img, perm)
    assert out.shape == (3, 5, 4, 6)
    assert out.colordim() == 0
    assert out.timedim() == 3
    assert out.spatialorder() == ["x", "y"]
    assert out.properties["pixelspacing"] == [2.0, 0.5]
    np.testing.assert_array_equal(out.data, np.transpose(arr, perm))
    # source untouched
    assert img.colordim() == 2 and img.spatialorder() == ["y", "x"]


def test_permutedims_roundtrip_with_inverse():
    img = Image(make_np((2, 3, 4)), {"spatialorder": ["z", "y", "x"], "pixelspacing": np.array([3.0, 2.0, 1.0])})
    perm = [1, 2, 0]
    out = permutedims(img, perm)
    assert out.spatialorder() == ["y", "x", "z"]
    np.testing.assert_array_equal(out.properties["pixelspacing"], [2.0, 1.0, 3.0])

    back = permutedims(out, invperm(perm))
    np.testing.assert_array_equal(back.data, img.data)
    assert back.spatialorder() == ["z", "y", "x"]
    np.testing.assert_array_equal(back.properties["pixelspacing"], [3.0, 2.0, 1.0])


def test_permutedims_roundtrip_restores_color_and_time():
    # (T, H, C, W)
    arr = make_np((6, 4, 3, 5))
    img = Image(arr, {"timedim": 0, "colordim": 2, "spatialorder": ["y", "x"]})
    perm = [2, 3, 1, 0]

    out = permutedims(img, perm)
    assert (out.colordim(), out.timedim()) == (0, 3)

    back = permutedims(out, invperm(perm))
    assert back.shape == img.shape
    assert back.colordim() == 2
    assert back.timedim() == 0
    assert back.spatialorder() == ["y", "x"]
    np.testing.assert_array_equal(back.data, arr)


def test_negative_colordim_follows_permutation_and_slicing():
    img = Image(make_np((4, 5, 3)), {"colordim": -1, "pixelspacing": [0.5, 2.0]})

    out = permutedims(img, [2, 0, 1])
    assert out.shape == (3, 4, 5)
    assert out.colordim() == 0
    assert out.properties["pixelspacing"] == [0.5, 2.0]

    assert img.sliceim(slice(None), slice(None), 0).colordim() is None
    row = img.sliceim(1, slice(None), slice(None))
    assert row.colordim() == 1
    assert row.properties["pixelspacing"] == [2.0]


def test_permutedims_matrix_property():
    # covariance-like matrix indexed by spatial axis on both dimensions
    cov = np.array([[1.0, 2.0], [3.0, 4.0]])
    img = Image(make_np((4, 5)), {"cov": cov})
    out = permutedims(img, [1, 0], spatialprops=["cov"])
    np.testing.assert_array_equal(out.properties["cov"], [[4.0, 3.0], [2.0, 1.0]])
    np.testing.assert_array_equal(img.properties["cov"], cov)


def test_permutedims_bad_property_shape():
    img = Image(make_np((4, 5)), {"pixelspacing": [1.0, 2.0, 3.0]})
    with pytest.raises(PropertyShapeError):
        permutedims(img, [1, 0])


def test_permutedims_bad_permutation(gray):
    img = Image(gray)
    with pytest.raises(PermutationError):
        permutedims(img, [0])
    with pytest.raises(PermutationError):
        permutedims(img, [0, 0])
    with pytest.raises(TypeError):
        permutedims(gray, [1, 0])


def test_permutedims_indexed_image_keeps_colormap():
    cm = ImageCmap(np.array([[0, 1, 2]]), np.arange(3))
    out = permutedims(cm, [1, 0])
    assert isinstance(out, ImageCmap)
    assert out.shape == (3, 1)
    np.testing.assert_array_equal(out.cmap, cm.cmap)
