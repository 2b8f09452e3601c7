# ==================================================
# =============  MODULE: layout_axes  ==============
# ==================================================
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

__all__ = [
    "YX",
    "XY",
    "SPATIAL_ORDERS",
    "get_spatial_order",
    "list_available_orders",
    "parse_spatial_order",
]

# ====[ Named spatial orders ]====
# Storage order of plain arrays ("vertical-major").
YX: Tuple[str, ...] = ("y", "x")
# Order used by Cairo and most image file formats.
XY: Tuple[str, ...] = ("x", "y")

SPATIAL_ORDERS: Dict[str, Tuple[str, ...]] = {
    "yx": YX,
    "xy": XY,
    "zyx": ("z", "y", "x"),
    "xyz": ("x", "y", "z"),
}


def get_spatial_order(name: str) -> List[str]:
    """
    Return the label list registered under `name` (e.g. ``'yx'``).

    Raises
    ------
    ValueError
        If `name` is not a registered order.
    """
    key = name.lower()
    if key not in SPATIAL_ORDERS:
        raise ValueError(
            f"Unknown spatial order '{name}'. Available: {list_available_orders()}"
        )
    return list(SPATIAL_ORDERS[key])


def list_available_orders() -> List[str]:
    return sorted(SPATIAL_ORDERS)


def parse_spatial_order(order: str | Sequence[str]) -> List[str]:
    """
    Normalize a spatial order given as a registered name, a compact string or a label sequence.

    ``'yx'`` and ``['y', 'x']`` both give ``['y', 'x']``; a compact string with
    unregistered letters is split per character (``'tyx'`` -> ``['t', 'y', 'x']``).

    Raises
    ------
    ValueError
        If a label is repeated.
    """
    if isinstance(order, str):
        labels = list(SPATIAL_ORDERS.get(order.lower(), tuple(order.lower())))
    else:
        labels = [str(label) for label in order]
    if len(set(labels)) != len(labels):
        raise ValueError(f"Duplicate label in spatial order {labels}")
    return labels

