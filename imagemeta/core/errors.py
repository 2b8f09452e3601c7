# ==================================================
# ================  MODULE: errors  ================
# ==================================================
"""Exception hierarchy for dimension-semantics failures.

Every error also derives from the builtin exception raised for the same
situation elsewhere in the codebase, so ``except ValueError`` keeps working.
"""
from __future__ import annotations

__all__ = [
    "ImageMetaError",
    "DimensionalAmbiguityError",
    "DimensionalityMismatchError",
    "PermutationError",
    "PropertyShapeError",
    "UnsupportedOperationError",
]


class ImageMetaError(Exception):
    """Base class for all errors raised by imagemeta."""


class DimensionalAmbiguityError(ImageMetaError, ValueError):
    """Shape-based inference cannot decide the meaning of an axis."""

    @classmethod
    def for_bare_array(cls, what: str, shape: tuple) -> "DimensionalAmbiguityError":
        return cls(
            f"Cannot infer {what} of a bare array with shape {tuple(shape)}; "
            "dimension semantics are ambiguous, use an Image with explicit properties."
        )


class DimensionalityMismatchError(ImageMetaError, ValueError):
    """Requested rank disagrees with the image, or the image is not a single 2-D frame."""


class PermutationError(ImageMetaError, ValueError):
    """Malformed permutation request."""


class PropertyShapeError(ImageMetaError, ValueError):
    """A spatial property is neither a per-axis vector nor a square per-axis matrix."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        super().__init__(f"Do not know how to permute property '{name}' (value: {value!r})")


class UnsupportedOperationError(ImageMetaError, TypeError):
    """Operation deliberately not defined for this image variant or element type."""
