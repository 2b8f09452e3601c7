# ==================================================
# ================ TESTS: conftest =================
# ==================================================
from __future__ import annotations

from typing import Tuple

import numpy as np
import pytest

from imagemeta.core.config import DEFAULT_CONFIG


# ===================
# Helpers
# ===================

def make_np(shape: Tuple[int, ...], dtype: str = "float32", seed: int = 123) -> np.ndarray:
    """
    Create a deterministic NumPy array.
    A fixed seed ensures test reproducibility across runs.
    """
    rng = np.random.default_rng(seed)
    if np.dtype(dtype).kind in ("i", "u"):
        return rng.integers(0, 100, size=shape).astype(dtype)
    if np.dtype(dtype).kind == "b":
        return rng.integers(0, 2, size=shape).astype(bool)
    return rng.standard_normal(size=shape).astype(dtype)


# ===================
# Fixtures
# ===================

@pytest.fixture
def gray() -> np.ndarray:
    """2-D float image, 4 rows x 5 columns."""
    return make_np((4, 5))


@pytest.fixture
def rgb() -> np.ndarray:
    """(H, W, 3) uint8 image."""
    return make_np((4, 5, 3), dtype="uint8")


@pytest.fixture
def restore_config():
    """Snapshot DEFAULT_CONFIG and restore it after the test."""
    saved = DEFAULT_CONFIG.to_dict()
    yield DEFAULT_CONFIG
    DEFAULT_CONFIG.update_config(**saved)
