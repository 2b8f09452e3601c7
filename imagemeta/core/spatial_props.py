# ==================================================
# ============  MODULE: spatial_props  =============
# ==================================================
from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np

from imagemeta.core.errors import PropertyShapeError
from imagemeta.core.property_store import has_property

__all__ = ["SPATIAL_PROPERTY_NAMES", "spatialproperties", "take_spatial_entries"]

# Per-spatial-axis properties known to the package, in the order they are checked.
SPATIAL_PROPERTY_NAMES: tuple[str, ...] = ("spatialorder", "pixelspacing")


def spatialproperties(img: Any) -> List[str]:
    """Names of the known per-spatial-axis properties actually present on `img`."""
    return [name for name in SPATIAL_PROPERTY_NAMES if has_property(img, name)]


def take_spatial_entries(name: str, value: Any, positions: Sequence[int], nspatial: int) -> Any:
    """
    Select / reorder the per-spatial-axis entries of a property value.

    Parameters
    ----------
    name : str
        Property name (used in error messages).
    value : Any
        Property value. Supported shapes: a vector (list, tuple or 1-D ndarray)
        with one entry per spatial axis, or a square 2-D ndarray indexed by
        spatial axis on both dimensions.
    positions : sequence of int
        Spatial-axis positions to keep, in their new order.
    nspatial : int
        Number of spatial axes the value is expected to describe.

    Returns
    -------
    Any
        Value of the same container type with entries ``positions`` (rows and
        columns for matrices).

    Raises
    ------
    PropertyShapeError
        If the value is neither a per-axis vector nor a square per-axis matrix.
    """
    positions = [int(p) for p in positions]
    if isinstance(value, np.ndarray):
        if value.ndim == 1 and value.shape[0] == nspatial:
            return value[positions]
        if value.ndim == 2 and value.shape == (nspatial, nspatial):
            return value[np.ix_(positions, positions)]
        raise PropertyShapeError(name, value)
    if isinstance(value, (list, tuple)) and len(value) == nspatial:
        selected = [value[p] for p in positions]
        return tuple(selected) if isinstance(value, tuple) else selected
    raise PropertyShapeError(name, value)
