# ==================================================
# =============  MODULE: bare_array  ===============
# ==================================================
"""Plain arrays viewed as images without metadata.

Using plain arrays we have to guess colorspace and storage order from the
shape alone. This is fine for 2-D grayscale and ``(H, W, 3)`` RGB data but
fails closed for everything else (volumes, sequences, cameras with unusual
channel counts): use an :class:`~imagemeta.core.image.Image` with explicit
properties in those cases.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

import numpy as np

from imagemeta.core import backend
from imagemeta.core.config import DEFAULT_CONFIG, ImageConfig
from imagemeta.core.dimensions import DimensionSemantics
from imagemeta.core.errors import DimensionalAmbiguityError, UnsupportedOperationError

__all__ = ["BareArray", "default_limits"]


def default_limits(dtype: Any, config: Optional[ImageConfig] = None) -> Tuple[Any, Any]:
    """
    Nominal (min, max) of an element type.

    bool -> (0, 1); integers -> (type min, type max); floats -> ``config.float_limits``.

    Raises
    ------
    UnsupportedOperationError
        For element types with no nominal range (complex, object, ...).
    """
    config = config or DEFAULT_CONFIG
    if backend.is_bool_dtype(dtype):
        return 0, 1
    if backend.is_integer_dtype(dtype):
        return backend.integer_limits(dtype)
    if backend.is_floating_dtype(dtype):
        return tuple(config.float_limits)  # type: ignore[return-value]
    raise UnsupportedOperationError(f"No default limits for element type {dtype}")


class BareArray(DimensionSemantics):
    """
    Adapter giving a NumPy array or Torch tensor the image accessor surface.

    Parameters
    ----------
    data : ndarray | Tensor
        Array to interpret. It is referenced, not copied.
    config : ImageConfig, optional
        Inference defaults; ``DEFAULT_CONFIG`` when omitted.
    """

    def __init__(self, data: backend.ArrayLike, config: Optional[ImageConfig] = None) -> None:
        if not backend.is_array(data):
            raise TypeError(f"BareArray expects a numpy array or torch tensor, got {type(data).__name__}")
        self.data = data
        self.config = config or DEFAULT_CONFIG

    def __repr__(self) -> str:
        return f"BareArray({backend.summarize_array(self.data)})"

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

    def _is_rgb_shaped(self) -> bool:
        shape = self.shape
        return len(shape) == 3 and shape[2] == self.config.color_channels

    # ====[ Inference rules ]====
    def colorspace(self) -> str:
        if backend.is_bool_dtype(self.dtype):
            return "Binary"
        if self.ndim == 2:
            return "24bit" if backend.is_int32_dtype(self.dtype) else "Gray"
        if self._is_rgb_shaped():
            return "RGB"
        raise DimensionalAmbiguityError.for_bare_array("colorspace", self.shape)

    def colordim(self) -> Optional[int]:
        if self.ndim == 2:
            return None
        if self._is_rgb_shaped():
            return 2
        raise DimensionalAmbiguityError.for_bare_array("colordim", self.shape)

    def timedim(self) -> Optional[int]:
        return None

    def limits(self) -> Tuple[Any, Any]:
        return default_limits(self.dtype, self.config)

    def pixelspacing(self) -> np.ndarray:
        if self.ndim == 2 or self._is_rgb_shaped():
            return np.ones(2)
        raise DimensionalAmbiguityError.for_bare_array("pixelspacing", self.shape)

    def spatialorder(self) -> List[str]:
        if self.sdims() != 2:
            raise DimensionalAmbiguityError(
                f"Wrong number of spatial dimensions for an unannotated array with shape "
                f"{self.shape}; use an Image with a 'spatialorder' property."
            )
        return list(self.config.default_spatialorder)
