# ==================================================
# =============  MODULE: transforms  ===============
# ==================================================
from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
import torch

from imagemeta.core import backend
from imagemeta.core.config import DEFAULT_CONFIG
from imagemeta.core.errors import DimensionalityMismatchError, PermutationError
from imagemeta.core.image import AbstractImage, Image, ImageCmap
from imagemeta.core.permutations import invperm, is_sorted
from imagemeta.core.spatial_props import spatialproperties, take_spatial_entries
from imagemeta.operators.semantics import as_image_like
from imagemeta.utils.decorators import log_exceptions
from imagemeta.utils.logger import get_logger

# Public API
__all__ = ["to_direct", "to_array", "convert", "permutedims"]

logger = get_logger(__name__, level=DEFAULT_CONFIG.log_level)


# ====[ Indexed -> direct ]====
@log_exceptions()
def to_direct(img: AbstractImage) -> Image:
    """
    Direct version of an image: colormap lookup for :class:`ImageCmap`, identity for :class:`Image`.

    Parameters
    ----------
    img : Image | ImageCmap

    Returns
    -------
    Image
        For a colormap with ``k > 1`` columns the result gains a trailing axis
        of length ``k`` and its ``colordim`` points at it.
    """
    if isinstance(img, ImageCmap):
        return img.to_direct()
    if isinstance(img, Image):
        return img
    raise TypeError(f"to_direct expects an Image or ImageCmap, got {type(img).__name__}")


# ====[ Image -> plain array ]====
@log_exceptions()
def to_array(img: Any, ndim: Optional[int] = None, dtype: Any = None) -> backend.ArrayLike:
    """
    Copy of the data in canonical ``("y", "x")`` storage order, color axis last.

    Restricted to single 2-D frames because storage-order conventions are
    ambiguous otherwise. To keep the storage order untouched, use the
    ``data`` attribute directly.

    Parameters
    ----------
    img : Image | ImageCmap | ndarray | Tensor
        Source image; bare arrays follow the inference rules of ``BareArray``.
    ndim : int, optional
        Expected number of dimensions of the output.
    dtype : optional
        Element type of the output (default: unchanged).

    Returns
    -------
    ndarray | Tensor
        New array on the backend of the source. It is a straight copy when
        the image is already in canonical order, a permuted copy otherwise.

    Raises
    ------
    DimensionalityMismatchError
        If `ndim` disagrees with the image, if the image does not have exactly
        2 spatial dimensions, or if it has a time axis.
    """
    im = as_image_like(img)
    if ndim is not None and ndim != im.ndim:
        raise DimensionalityMismatchError(
            f"Number of dimensions of the output ({ndim}) does not agree with the image ({im.ndim})"
        )
    if im.sdims() != 2:
        raise DimensionalityMismatchError(
            f"to_array() is defined for two-dimensional images only, got {im.sdims()} spatial dimensions"
        )
    if im.timedim() is not None:
        raise DimensionalityMismatchError("to_array() is not defined for image sequences")

    cs = im.coords_spatial()
    p = [cs[i] for i in im.spatialpermutation(DEFAULT_CONFIG.canonical_spatialorder)]
    cd = im.colordim()
    if cd is not None:
        p.append(cd)

    if is_sorted(p):
        out = backend.copy_array(im.data)
    else:
        logger.debug(f"[to_array] permuting axes {p} to reach canonical order")
        out = backend.copy_array(backend.permute_array(im.data, p))
    return backend.astype(out, dtype) if dtype is not None else out


# ====[ Generic conversion ]====
def convert(img: Any, target: type) -> Any:
    """
    Convert `img` to the `target` type.

    Parameters
    ----------
    img : Image | ImageCmap | ndarray | Tensor
    target : type
        ``Image`` (indexed images are looked up, bare arrays are wrapped),
        ``ImageCmap`` (identity only), ``numpy.ndarray`` or ``torch.Tensor``
        (see :func:`to_array`).

    Raises
    ------
    TypeError
        For unsupported targets or impossible conversions.
    """
    if target is Image:
        if isinstance(img, AbstractImage):
            return to_direct(img)
        return Image(backend.as_array(img))
    if target is ImageCmap:
        if isinstance(img, ImageCmap):
            return img
        raise TypeError("Cannot convert to an indexed image without a colormap.")
    if target is np.ndarray:
        return backend.to_framework(to_array(img), "numpy")
    if target is torch.Tensor:
        return backend.to_framework(to_array(img), "torch")
    raise TypeError(f"Unsupported conversion target: {target!r}")


# ====[ Axis permutation ]====
@log_exceptions()
def permutedims(
    img: AbstractImage,
    perm: Sequence[int],
    spatialprops: Optional[Sequence[str]] = None,
) -> AbstractImage:
    """
    Permute the axes of an image and keep its metadata consistent.

    Parameters
    ----------
    img : Image | ImageCmap
        Source image (left untouched).
    perm : sequence of int
        Axis ``k`` of the result is axis ``perm[k]`` of `img`.
    spatialprops : sequence of str, optional
        Names of per-spatial-axis properties to reorder. Defaults to the
        known ones present on the image (``spatialorder``, ``pixelspacing``).
        Include your own vector or matrix properties here.

    Returns
    -------
    Image | ImageCmap
        New image with permuted data, ``colordim`` / ``timedim`` moved to
        their new positions and spatial properties reordered.

    Raises
    ------
    PermutationError
        If `perm` does not have one entry per dimension or is not a permutation.
    PropertyShapeError
        If a spatial property is neither a per-axis vector nor a square matrix.
    """
    if not isinstance(img, AbstractImage):
        raise TypeError(f"permutedims expects an Image or ImageCmap, got {type(img).__name__}")
    perm = [int(p) for p in perm]
    if len(perm) != img.ndim:
        raise PermutationError(
            f"The permutation must have length equal to the number of dimensions ({img.ndim}), got {perm}"
        )
    ip = invperm(perm)
    cd = img.colordim()
    td = img.timedim()

    ret = img.copy(backend.permute_array(img.data, perm))
    if cd is not None:
        ret.properties["colordim"] = ip[cd]
    if td is not None:
        ret.properties["timedim"] = ip[td]

    names = spatialproperties(img) if spatialprops is None else list(spatialprops)
    if names:
        cs = img.coords_spatial()
        # positions (within the old spatial axes) of the new spatial axes, in output order
        p_rel = [cs.index(a) for a in perm if a in cs]
        for name in names:
            ret.properties[name] = take_spatial_entries(name, ret.properties[name], p_rel, len(cs))

    logger.debug(f"[permutedims] perm={perm} colordim {cd}->{ret.colordim()} timedim {td}->{ret.timedim()}")
    return ret
