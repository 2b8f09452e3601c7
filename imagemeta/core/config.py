# ==================================================
# ================  MODULE: config  ================
# ==================================================
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Tuple

__all__ = ["ImageConfig", "DEFAULT_CONFIG"]


# ==================================================
# ===============  CLASS: ImageConfig  =============
# ==================================================
@dataclass
class ImageConfig:
    """
    Defaults used when an image (or a bare array) does not declare its own metadata.

    Attributes
    ----------
    default_spatialorder : Tuple[str, ...], default ("y", "x")
        Spatial order assumed for bare arrays and for 2-D images without a
        ``spatialorder`` property ("vertical-major").
    canonical_spatialorder : Tuple[str, ...], default ("y", "x")
        Storage order produced by plain-array conversion.
    widthheight_order : Tuple[str, ...], default ("x", "y")
        Labels resolved by ``widthheight`` (horizontal first).
    color_channels : int, default 3
        Length of the trailing axis that identifies a bare 3-D array as RGB.
    unknown_colorspace : str, default "Unknown"
        Colorspace reported by images without a ``colorspace`` property.
    float_limits : Tuple[float, float], default (0.0, 1.0)
        Default ``limits`` for floating point data.
    log_level : int, default logging.INFO
        Level used by the package loggers.
    """
    default_spatialorder: Tuple[str, ...] = ("y", "x")
    canonical_spatialorder: Tuple[str, ...] = ("y", "x")
    widthheight_order: Tuple[str, ...] = ("x", "y")
    color_channels: int = 3
    unknown_colorspace: str = "Unknown"
    float_limits: Tuple[float, float] = (0.0, 1.0)
    log_level: int = logging.INFO

    def update_config(self, **kwargs) -> "ImageConfig":
        """Dynamically update configuration (in-place)."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise AttributeError(f"[ImageConfig] Unknown config key: '{key}'")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dict."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Process-wide defaults, read at call time.
DEFAULT_CONFIG = ImageConfig()
