# ==================================================
# =============  MODULE: semantics  ================
# ==================================================
"""Dimension-semantics accessors for images and bare arrays.

Generic code calls these functions instead of reading properties directly:
each one consults the image's properties and falls back to a default, or,
for a plain NumPy array / Torch tensor, to the shape-based inference rules of
:class:`~imagemeta.core.bare_array.BareArray`.

Recognised properties
---------------------
colorspace : str
    "RGB", "RGBA", "Gray", "Binary", "24bit", "Lab", "HSV", ...
colordim : int or None
    Axis storing color channels.
timedim : int or None
    Axis storing frames of a sequence.
limits : (min, max)
    Nominal value range (e.g. (0, 255) for uint8, even if pixels do not reach it).
pixelspacing : sequence of float
    Spacing between adjacent pixels along each spatial axis.
spatialorder : sequence of str
    One label per spatial axis, in storage order. "x" and "y" mean
    horizontal and vertical irrespective of storage order.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from imagemeta.core import backend
from imagemeta.core.bare_array import BareArray
from imagemeta.core.config import ImageConfig
from imagemeta.core.image import AbstractImage
from imagemeta.core.property_store import get_property, get_property_lazy, has_property
from imagemeta.core.spatial_props import spatialproperties

__all__ = [
    "ImageLike",
    "as_image_like",
    "data",
    "has",
    "get",
    "get_lazy",
    "colorspace",
    "colordim",
    "timedim",
    "limits",
    "pixelspacing",
    "spatialorder",
    "sdims",
    "nimages",
    "coords_spatial",
    "size_spatial",
    "spatialpermutation",
    "widthheight",
    "spatialproperties",
]

ImageLike = Union[AbstractImage, BareArray]
T = TypeVar("T")


def as_image_like(img: Any, config: Optional[ImageConfig] = None) -> ImageLike:
    """
    Return `img` itself for images and adapters, else wrap the array in a :class:`BareArray`.

    Raises
    ------
    TypeError
        If `img` is neither an image nor a supported array.
    """
    if isinstance(img, (AbstractImage, BareArray)):
        return img
    if backend.is_array(img):
        return BareArray(img, config)
    raise TypeError(f"Expected an image or an array, got {type(img).__name__}")


def data(img: Any) -> backend.ArrayLike:
    """Underlying array of an image; bare arrays are returned unchanged."""
    return as_image_like(img).data


# ====[ Property lookups ]====
# Validating wrappers over the store helpers; a bare array has no store.
def has(img: Any, key: str) -> bool:
    return has_property(as_image_like(img), key)


def get(img: Any, key: str, default: Any = None) -> Any:
    return get_property(as_image_like(img), key, default)


def get_lazy(img: Any, key: str, factory: Callable[[], T]) -> Any | T:
    """Property lookup that calls ``factory()`` only when `key` is missing."""
    return get_property_lazy(as_image_like(img), key, factory)


# ====[ Per-variant resolvers ]====
def colorspace(img: Any) -> str:
    return as_image_like(img).colorspace()


def colordim(img: Any) -> Optional[int]:
    return as_image_like(img).colordim()


def timedim(img: Any) -> Optional[int]:
    return as_image_like(img).timedim()


def limits(img: Any) -> Tuple[Any, Any]:
    return as_image_like(img).limits()


def pixelspacing(img: Any) -> Any:
    return as_image_like(img).pixelspacing()


def spatialorder(img: Any) -> Optional[List[str]]:
    """Spatial labels in storage order; None for an image that declares none."""
    return as_image_like(img).spatialorder()


# ====[ Derived quantities ]====
def sdims(img: Any) -> int:
    return as_image_like(img).sdims()


def nimages(img: Any) -> int:
    return as_image_like(img).nimages()


def coords_spatial(img: Any) -> List[int]:
    return as_image_like(img).coords_spatial()


def size_spatial(img: Any) -> Tuple[int, ...]:
    return as_image_like(img).size_spatial()


def spatialpermutation(to: Union[str, Sequence[str]], img: Any) -> List[int]:
    """Permutation of the spatial axes of `img` that yields the label order `to`."""
    return as_image_like(img).spatialpermutation(to)


def widthheight(img: Any, p: Optional[Sequence[int]] = None) -> Tuple[int, int]:
    return as_image_like(img).widthheight(p)
