# ==================================================
# ===============  MODULE: image  ==================
# ==================================================
from __future__ import annotations

import copy
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from imagemeta.core import backend
from imagemeta.core.bare_array import default_limits
from imagemeta.core.config import DEFAULT_CONFIG
from imagemeta.core.dimensions import DimensionSemantics
from imagemeta.core.errors import DimensionalityMismatchError, UnsupportedOperationError
from imagemeta.core.property_store import PropertyStore
from imagemeta.core.spatial_props import spatialproperties, take_spatial_entries
from imagemeta.utils.logger import get_logger

# Public API
__all__ = ["AbstractImage", "Image", "ImageCmap"]

ArrayLike = backend.ArrayLike
RangeIndex = Union[int, slice]

logger = get_logger(__name__, level=DEFAULT_CONFIG.log_level)


# ==================================================
# ================ AbstractImage ===================
# ==================================================
class AbstractImage(DimensionSemantics):
    """
    Array plus metadata. Base of exactly two variants: :class:`Image` (each
    element is a pixel value) and :class:`ImageCmap` (elements are colormap
    indices).

    Shape queries and element access delegate to the wrapped array. Every
    derived image (copy, similar, views, conversions) receives a deep copy of
    the properties, so mutating one image's metadata never affects another.
    """

    data: ArrayLike
    properties: PropertyStore

    # ====[ Initialization ]====
    def __init__(self, data: Any, properties: Optional[Mapping[str, Any]] = None) -> None:
        """
        Parameters
        ----------
        data : ndarray | Tensor | array-like
            Pixel data. Lists and tuples are converted with ``numpy.asarray``.
        properties : Mapping[str, Any], optional
            Initial metadata. The mapping is copied into a new
            :class:`PropertyStore` owned by this image.

        Raises
        ------
        TypeError
            If `data` is None.
        """
        self.data = backend.as_array(data)
        self.properties = PropertyStore(properties)

    def _rebuild(self, data: ArrayLike, properties: PropertyStore) -> "AbstractImage":
        """New image of the same variant around `data`, taking ownership of `properties`."""
        raise NotImplementedError

    # ====[ Array surface ]====
    @property
    def shape(self) -> Tuple[int, ...]:
        return backend.shape_of(self.data)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def dtype(self) -> Any:
        return self.data.dtype

    def size(self, axis: Optional[int] = None) -> Union[int, Tuple[int, ...]]:
        """Shape of the data, or its length along `axis`."""
        return self.shape if axis is None else self.shape[axis]

    def __array__(self, dtype: Any = None, copy: Optional[bool] = None) -> np.ndarray:
        # storage order, no permutation (see transforms.to_array for that)
        arr = backend.to_framework(self.data, "numpy")
        return np.asarray(arr, dtype=dtype)

    # ====[ Copy / similar ]====
    def copy(self, data: Optional[Any] = None) -> "AbstractImage":
        """
        Independent copy of the image.

        Parameters
        ----------
        data : array-like, optional
            If given, becomes the payload of the new image (used as is, not
            copied); the properties (and colormap) are still deep-copied.
            Without it, data, properties and colormap are all duplicated.

        Returns
        -------
        AbstractImage
            Image of the same variant sharing nothing mutable with this one.
        """
        if data is None:
            return copy.deepcopy(self)
        return self._rebuild(backend.as_array(data), self.properties.copy())

    def similar(self, dtype: Any = None, shape: Optional[Sequence[int]] = None) -> "AbstractImage":
        """
        Same variant and metadata around freshly allocated, uninitialized data.

        Parameters
        ----------
        dtype : optional
            Element type of the new data (default: unchanged).
        shape : sequence of int, optional
            Shape of the new data (default: unchanged).
        """
        return self._rebuild(backend.similar_array(self.data, dtype, shape), self.properties.copy())

    def with_properties(self, **updates: Any) -> "AbstractImage":
        """Copy sharing the data, with deep-copied properties updated by `updates`."""
        ret = self.copy(self.data)
        ret.properties.update(copy.deepcopy(updates))
        return ret

    def apply(self, func: Callable[..., Any], **kwargs: Any) -> "AbstractImage":
        """
        Apply `func` to the data and wrap the result with this image's metadata.

        Raises
        ------
        TypeError
            If `func` does not return a NumPy array or a Torch tensor.
        """
        output = func(self.data, **kwargs)
        if not backend.is_array(output):
            raise TypeError(f"[apply] The function must return an ndarray or torch.Tensor, got {type(output)}")
        return self.copy(output)

    # ====[ Raw element access ]====
    def __getitem__(self, idx: Any) -> Any:
        return self.data[idx]

    def __setitem__(self, idx: Any, value: Any) -> None:
        self.data[idx] = value

    def ref(self, *idx: Any) -> Any:
        """Value or array at `idx` (no metadata)."""
        return self.data[idx if len(idx) != 1 else idx[0]]

    def sub(self, *idx: RangeIndex) -> ArrayLike:
        """View of the data keeping every axis; integer indices select length-1 ranges."""
        return self.data[_keep_dims(idx)]

    def slice(self, *idx: RangeIndex) -> ArrayLike:
        """View of the data; integer-indexed axes are dropped."""
        return self.data[_check_range_index(idx)]

    # ====[ Metadata-preserving element access ]====
    def refim(self, *idx: Any) -> "AbstractImage":
        """
        Image wrapping a copy of ``ref(*idx)``.

        Raises
        ------
        TypeError
            If the selection is a single element rather than an array.
        """
        selected = self.ref(*idx)
        if not backend.is_array(selected):
            raise TypeError("refim selected a single element; use ref() for scalar access.")
        return self.copy(backend.copy_array(selected))

    def subim(self, *idx: RangeIndex) -> "AbstractImage":
        """Image wrapping the view ``sub(*idx)``; axis indices are unchanged."""
        return self.copy(self.sub(*idx))

    def sliceim(self, *idx: RangeIndex) -> "AbstractImage":
        """
        Image wrapping the view ``slice(*idx)``.

        Axes removed by integer indexing are removed from the metadata too:
        ``colordim`` / ``timedim`` are shifted (or deleted when their axis is
        dropped) and per-axis spatial properties lose the dropped entries.
        """
        idx = _check_range_index(idx)
        dropped = [axis for axis, i in enumerate(idx) if isinstance(i, int)]
        ret = self.copy(self.data[idx])
        if not dropped:
            return ret

        props = ret.properties
        for key in ("colordim", "timedim"):
            axis = self._axis_property(key)
            if axis is None:
                continue
            if axis in dropped:
                del props[key]
            else:
                props[key] = axis - sum(1 for d in dropped if d < axis)

        cs = self.coords_spatial()
        keep = [pos for pos, axis in enumerate(cs) if axis not in dropped]
        if len(keep) != len(cs):
            for name in spatialproperties(self):
                props[name] = take_spatial_entries(name, props[name], keep, len(cs))
        return ret

    # ====[ Properties ]====
    def _axis_property(self, key: str) -> Optional[int]:
        """
        Axis stored under `key`, with negative values counted from the end.

        Raises
        ------
        DimensionalityMismatchError
            If the axis does not exist in an array of this rank.
        """
        axis = self.properties.get(key)
        if axis is None:
            return None
        ndim = self.ndim
        axis = int(axis)
        if not -ndim <= axis < ndim:
            raise DimensionalityMismatchError(
                f"[{key}] axis {axis} is out of range for an image with {ndim} dimensions"
            )
        return axis if axis >= 0 else axis + ndim

    def colorspace(self) -> str:
        return self.properties.get("colorspace", DEFAULT_CONFIG.unknown_colorspace)

    def colordim(self) -> Optional[int]:
        return self._axis_property("colordim")

    def timedim(self) -> Optional[int]:
        return self._axis_property("timedim")

    def limits(self) -> Tuple[Any, Any]:
        return self.properties.get_lazy("limits", lambda: default_limits(self.dtype))

    def pixelspacing(self) -> Any:
        return self.properties.get_lazy("pixelspacing", lambda: np.ones(self.sdims()))

    def spatialorder(self) -> Optional[List[str]]:
        """Declared spatial order, or None when the image does not declare one."""
        so = self.properties.get("spatialorder")
        return list(so) if so is not None else None

    # ====[ Display ]====
    def _summary_lines(self) -> List[str]:
        return [f"  data: {backend.summarize_array(self.data)}"]

    def summary(self) -> str:
        """Multi-line description: colorspace, variant, data summary and properties."""
        lines = [f"{self.colorspace()} {type(self).__name__} with:"]
        lines += self._summary_lines()
        lines.append(f"  properties: {self.properties.to_dict()}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.summary()


# ==================================================
# ==================== Image =======================
# ==================================================
class Image(AbstractImage):
    """Direct image: every element stores its own value (grayscale, RGB, ...)."""

    def _rebuild(self, data: ArrayLike, properties: PropertyStore) -> "Image":
        return Image(data, properties)

    def colorspace(self) -> str:
        if self.properties.has("colorspace"):
            return self.properties["colorspace"]
        if backend.is_bool_dtype(self.dtype):
            return "Binary"
        return DEFAULT_CONFIG.unknown_colorspace

    def min(self) -> Any:
        return backend.array_min(self.data)

    def max(self) -> Any:
        return backend.array_max(self.data)


# ==================================================
# ================== ImageCmap =====================
# ==================================================
class ImageCmap(AbstractImage):
    """
    Indexed image: elements are 0-based row indices into ``cmap``.

    A 1-D colormap, or one with a single column, is a single-channel lookup;
    a colormap with ``k > 1`` columns expands to a trailing color axis of
    length ``k`` on conversion. Index validity is not checked eagerly.
    """

    def __init__(self, data: Any, cmap: Any, properties: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(data, properties)
        self.cmap = backend.as_array(cmap)

    def _rebuild(self, data: ArrayLike, properties: PropertyStore) -> "ImageCmap":
        return ImageCmap(data, backend.copy_array(self.cmap), properties)

    def colordim(self) -> Optional[int]:
        # color only exists after lookup
        return None

    def limits(self) -> Tuple[Any, Any]:
        return self.properties.get_lazy(
            "limits", lambda: (backend.array_min(self.cmap), backend.array_max(self.cmap))
        )

    @property
    def ncolumns(self) -> int:
        """Number of channels per colormap entry."""
        return 1 if self.cmap.ndim == 1 else backend.shape_of(self.cmap)[1]

    def min(self) -> Any:
        raise UnsupportedOperationError(
            "min() is not defined for indexed images: index values are not pixel intensities."
        )

    def max(self) -> Any:
        raise UnsupportedOperationError(
            "max() is not defined for indexed images: index values are not pixel intensities."
        )

    def to_direct(self) -> Image:
        """
        Look every index up in the colormap.

        Returns
        -------
        Image
            Same shape as the index array for a single-column colormap;
            otherwise an extra trailing axis of length ``ncolumns``, recorded
            as ``colordim``.
        """
        idx_shape = self.shape
        props = self.properties.copy()
        k = self.ncolumns
        if k == 1:
            table = self.cmap if self.cmap.ndim == 1 else self.cmap[:, 0]
            data = backend.reshape_array(backend.take_rows(table, self.data), idx_shape)
        else:
            new_shape = idx_shape + (k,)
            data = backend.reshape_array(backend.take_rows(self.cmap, self.data), new_shape)
            props["colordim"] = len(idx_shape)
        logger.debug(f"[to_direct] {idx_shape} via {k}-column colormap -> {backend.shape_of(data)}")
        return Image(data, props)

    def _summary_lines(self) -> List[str]:
        return super()._summary_lines() + [f"  cmap: {backend.summarize_array(self.cmap)}"]


# ====[ Small helpers ]====
def _check_range_index(idx: Sequence[Any]) -> Tuple[RangeIndex, ...]:
    """Only integers and slices are valid range indices."""
    for i in idx:
        if isinstance(i, bool) or not isinstance(i, (int, np.integer, slice)):
            raise TypeError(f"Range index must be an int or a slice, got {type(i).__name__}")
    return tuple(int(i) if isinstance(i, np.integer) else i for i in idx)


def _keep_dims(idx: Sequence[Any]) -> Tuple[slice, ...]:
    """Turn integer indices into length-1 slices so no axis is dropped."""
    out = []
    for i in _check_range_index(idx):
        if isinstance(i, int):
            out.append(slice(i, i + 1) if i != -1 else slice(-1, None))
        else:
            out.append(i)
    return tuple(out)
