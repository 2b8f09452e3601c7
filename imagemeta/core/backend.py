# ==================================================
# ===============  MODULE: backend  ================
# ==================================================
"""Array primitives dispatched on the NumPy / PyTorch backend of their input.

All dimension-semantics computations are expressed in terms of the helpers
below, so an image can wrap either an ``ndarray`` or a ``Tensor``. Every
helper is backend-preserving: NumPy in, NumPy out; Torch in, Torch out.
"""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Sequence, Tuple

import numpy as np
import torch

from imagemeta.core.errors import UnsupportedOperationError

__all__ = [
    "BACKENDS",
    "ArrayLike",
    "Framework",
    "get_backend",
    "is_array",
    "as_array",
    "shape_of",
    "copy_array",
    "similar_array",
    "permute_array",
    "reshape_array",
    "take_rows",
    "astype",
    "to_framework",
    "is_bool_dtype",
    "is_integer_dtype",
    "is_floating_dtype",
    "is_int32_dtype",
    "integer_limits",
    "array_min",
    "array_max",
    "summarize_array",
]

# Alias for readability
ArrayLike = np.ndarray | torch.Tensor
Framework = Literal["numpy", "torch"]

# ====[ Backend Detection ]====
BACKENDS: Dict[str, Dict[str, Any]] = {
    "numpy": {"check": lambda x: isinstance(x, np.ndarray)},
    "torch": {"check": lambda x: isinstance(x, torch.Tensor)},
}

_TORCH_INT32_TYPES = tuple(
    t for t in (torch.int32, getattr(torch, "uint32", None)) if t is not None
)


def get_backend(obj: Any) -> Optional[Framework]:
    """
    Return the backend name ('numpy' or 'torch') for a given object, or None.

    Notes
    -----
    - Detection is based on isinstance checks against NumPy ndarray and Torch Tensor.
    """
    for name, backend in BACKENDS.items():
        if backend["check"](obj):
            return name  # type: ignore[return-value]
    return None


def is_array(obj: Any) -> bool:
    """Return True if `obj` is an array of a supported backend."""
    return get_backend(obj) is not None


def as_array(obj: Any) -> ArrayLike:
    """
    Return `obj` unchanged when it is a supported array, else coerce with ``numpy.asarray``.

    Raises
    ------
    TypeError
        If `obj` is None.
    """
    if obj is None:
        raise TypeError("Image data must be an array, got None.")
    if is_array(obj):
        return obj
    return np.asarray(obj)


def _require(arr: Any) -> Framework:
    backend = get_backend(arr)
    if backend is None:
        raise TypeError(f"Unsupported array type: {type(arr).__name__}")
    return backend


def shape_of(arr: ArrayLike) -> Tuple[int, ...]:
    """Shape as a plain tuple of ints (torch.Size included)."""
    return tuple(int(s) for s in arr.shape)


# ====[ Structural primitives ]====
def copy_array(arr: ArrayLike) -> ArrayLike:
    """Independent copy of `arr` (same backend, dtype and device)."""
    if _require(arr) == "numpy":
        return arr.copy()
    return arr.clone()


def similar_array(
    arr: ArrayLike,
    dtype: Optional[Any] = None,
    shape: Optional[Sequence[int]] = None,
) -> ArrayLike:
    """
    Allocate an uninitialized array shaped and typed like `arr`.

    Parameters
    ----------
    arr : ndarray | Tensor
        Template array.
    dtype : optional
        Element type of the new array; defaults to ``arr.dtype``.
    shape : sequence of int, optional
        Shape of the new array; defaults to ``arr.shape``.
    """
    shape = tuple(shape) if shape is not None else shape_of(arr)
    if _require(arr) == "numpy":
        return np.empty(shape, dtype=dtype if dtype is not None else arr.dtype)
    return torch.empty(shape, dtype=dtype if dtype is not None else arr.dtype, device=arr.device)


def permute_array(arr: ArrayLike, perm: Sequence[int]) -> ArrayLike:
    """Reorder the axes of `arr`; axis ``k`` of the result is axis ``perm[k]`` of the input."""
    perm = [int(p) for p in perm]
    if _require(arr) == "numpy":
        return np.transpose(arr, perm)
    return arr.permute(*perm)


def reshape_array(arr: ArrayLike, shape: Sequence[int]) -> ArrayLike:
    if _require(arr) == "numpy":
        return np.reshape(arr, tuple(shape))
    return arr.reshape(tuple(shape))


def take_rows(table: ArrayLike, indices: Any) -> ArrayLike:
    """
    Look up rows of `table` for every (flattened) entry of `indices`.

    Parameters
    ----------
    table : ndarray | Tensor
        Lookup table, rows are entries.
    indices : array-like of int
        0-based row indices. Converted to the backend of `table` if needed.

    Returns
    -------
    ndarray | Tensor
        Array of shape ``(indices.size,) + table.shape[1:]`` on the backend of `table`.
    """
    if _require(table) == "numpy":
        if isinstance(indices, torch.Tensor):
            indices = indices.detach().cpu().numpy()
        flat = np.asarray(indices).reshape(-1).astype(np.intp, copy=False)
        return np.take(table, flat, axis=0)

    if not isinstance(indices, torch.Tensor):
        indices = torch.as_tensor(np.asarray(indices), device=table.device)
    # uint8/bool tensors would be read as masks, force integer indices
    flat = indices.reshape(-1).to(device=table.device, dtype=torch.long)
    return torch.index_select(table, 0, flat)


def astype(arr: ArrayLike, dtype: Any) -> ArrayLike:
    if _require(arr) == "numpy":
        return arr.astype(dtype)
    return arr.to(dtype)


def to_framework(arr: ArrayLike, framework: Framework) -> ArrayLike:
    """Convert `arr` to the requested backend (no-op when it already matches)."""
    backend = _require(arr)
    if backend == framework:
        return arr
    if framework == "numpy":
        return arr.detach().cpu().numpy()
    if framework == "torch":
        return torch.from_numpy(np.ascontiguousarray(arr))
    raise ValueError(f"Unsupported framework '{framework}'. Expected 'numpy' or 'torch'.")


# ====[ Element type queries ]====
def is_bool_dtype(dtype: Any) -> bool:
    if isinstance(dtype, torch.dtype):
        return dtype == torch.bool
    return np.dtype(dtype).kind == "b"


def is_integer_dtype(dtype: Any) -> bool:
    """Fixed-width integer types (bool excluded)."""
    if isinstance(dtype, torch.dtype):
        return not (dtype == torch.bool or dtype.is_floating_point or dtype.is_complex)
    return np.dtype(dtype).kind in ("i", "u")


def is_floating_dtype(dtype: Any) -> bool:
    if isinstance(dtype, torch.dtype):
        return dtype.is_floating_point
    return np.dtype(dtype).kind == "f"


def is_int32_dtype(dtype: Any) -> bool:
    """True for 32-bit signed or unsigned integers ("24bit" packed color)."""
    if isinstance(dtype, torch.dtype):
        return dtype in _TORCH_INT32_TYPES
    return np.dtype(dtype) in (np.dtype(np.int32), np.dtype(np.uint32))


def integer_limits(dtype: Any) -> Tuple[int, int]:
    """(type minimum, type maximum) of an integer dtype."""
    if not is_integer_dtype(dtype):
        raise UnsupportedOperationError(f"No integer limits for dtype {dtype}")
    info = torch.iinfo(dtype) if isinstance(dtype, torch.dtype) else np.iinfo(dtype)
    return int(info.min), int(info.max)


# ====[ Reductions ]====
def array_min(arr: ArrayLike) -> Any:
    """Smallest element as a Python scalar."""
    _require(arr)
    return arr.min().item()


def array_max(arr: ArrayLike) -> Any:
    """Largest element as a Python scalar."""
    _require(arr)
    return arr.max().item()


# ====[ Display ]====
def summarize_array(arr: ArrayLike) -> str:
    """
    One-line description of an array, e.g. ``'4x5 numpy.ndarray[uint8]'``.

    Zero-dimensional arrays are described as ``'scalar'``.
    """
    backend = _require(arr)
    shape = shape_of(arr)
    dims = "x".join(str(s) for s in shape) if shape else "scalar"
    if backend == "numpy":
        return f"{dims} numpy.ndarray[{arr.dtype}]"
    return f"{dims} torch.Tensor[{str(arr.dtype).replace('torch.', '')}, {arr.device}]"
