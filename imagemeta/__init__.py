"""Metadata-aware images over NumPy arrays and Torch tensors."""

from imagemeta.core.bare_array import BareArray, default_limits
from imagemeta.core.config import DEFAULT_CONFIG, ImageConfig
from imagemeta.core.errors import (
    DimensionalAmbiguityError,
    DimensionalityMismatchError,
    ImageMetaError,
    PermutationError,
    PropertyShapeError,
    UnsupportedOperationError,
)
from imagemeta.core.image import AbstractImage, Image, ImageCmap
from imagemeta.core.layout_axes import XY, YX
from imagemeta.core.permutations import default_permutation, invperm, permutation
from imagemeta.core.property_store import (
    PropertyStore,
    get_property,
    get_property_lazy,
    has_property,
)
from imagemeta.operators.semantics import (
    as_image_like,
    colordim,
    colorspace,
    coords_spatial,
    data,
    limits,
    nimages,
    pixelspacing,
    sdims,
    size_spatial,
    spatialorder,
    spatialpermutation,
    spatialproperties,
    timedim,
    widthheight,
)
from imagemeta.operators.transforms import convert, permutedims, to_array, to_direct

__all__ = [
    "__version__",
    "AbstractImage",
    "Image",
    "ImageCmap",
    "BareArray",
    "PropertyStore",
    "ImageConfig",
    "DEFAULT_CONFIG",
    "YX",
    "XY",
    "ImageMetaError",
    "DimensionalAmbiguityError",
    "DimensionalityMismatchError",
    "PermutationError",
    "PropertyShapeError",
    "UnsupportedOperationError",
    "as_image_like",
    "data",
    "has_property",
    "get_property",
    "get_property_lazy",
    "colorspace",
    "colordim",
    "timedim",
    "limits",
    "default_limits",
    "pixelspacing",
    "spatialorder",
    "sdims",
    "nimages",
    "coords_spatial",
    "size_spatial",
    "spatialpermutation",
    "widthheight",
    "spatialproperties",
    "permutation",
    "default_permutation",
    "invperm",
    "to_direct",
    "to_array",
    "convert",
    "permutedims",
]

__version__ = "0.1.0"
