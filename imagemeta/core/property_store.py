# ==================================================
# ===========  MODULE: property_store  =============
# ==================================================
from __future__ import annotations

import copy
from collections.abc import MutableMapping
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, TypeVar

__all__ = [
    "PropertyStore",
    "get_store",
    "has_property",
    "get_property",
    "get_property_lazy",
    "set_property",
    "update_properties",
    "copy_properties",
]

T = TypeVar("T")


# ==================================================
# ================ PropertyStore ===================
# ==================================================
class PropertyStore(MutableMapping):
    """
    String-keyed bag of image metadata.

    No validation of key names or value types is performed; the accessor
    functions of :mod:`imagemeta.operators.semantics` interpret the recognised
    keys (``colorspace``, ``colordim``, ``timedim``, ``limits``,
    ``pixelspacing``, ``spatialorder``).

    A store is owned by exactly one image. Use :meth:`copy` (deep) whenever
    metadata is handed to another image.
    """

    __slots__ = ("_data",)

    def __init__(self, initial: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        # nested values (lists, arrays) must not be shared with the caller
        self._data: Dict[str, Any] = copy.deepcopy(dict(initial)) if initial is not None else {}
        self._data.update(copy.deepcopy(kwargs))

    # ====[ Mapping protocol ]====
    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"PropertyStore({self._data!r})"

    def __deepcopy__(self, memo: Dict[int, Any]) -> "PropertyStore":
        new = PropertyStore.__new__(PropertyStore)
        new._data = copy.deepcopy(self._data, memo)
        return new

    # ====[ Lookups ]====
    def has(self, key: str) -> bool:
        """Return True if `key` is present."""
        return key in self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or `default` (evaluated by the caller) if absent."""
        return self._data.get(key, default)

    def get_lazy(self, key: str, factory: Callable[[], T]) -> Any | T:
        """
        Return the stored value, calling ``factory()`` only if `key` is absent.

        Use this form when the default is expensive to build (e.g. a reduction
        over a large colormap).
        """
        if key in self._data:
            return self._data[key]
        return factory()

    def copy(self) -> "PropertyStore":
        """Independent deep copy; mutating it never affects this store."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Shallow dict view of the contents."""
        return dict(self._data)


# ==================================================
# ========= Operand-polymorphic helpers ============
# ==================================================
def get_store(obj: Any) -> Optional[PropertyStore]:
    """Return the property store of an image-like object, or None for bare arrays."""
    store = getattr(obj, "properties", None)
    return store if isinstance(store, PropertyStore) else None


def has_property(obj: Any, key: str) -> bool:
    """True iff `obj` carries a property store containing `key` (always False for bare arrays)."""
    store = get_store(obj)
    return store.has(key) if store is not None else False


def get_property(obj: Any, key: str, default: Any = None) -> Any:
    """Stored value of `key`, or `default` if absent or if `obj` is a bare array."""
    store = get_store(obj)
    return store.get(key, default) if store is not None else default


def get_property_lazy(obj: Any, key: str, factory: Callable[[], T]) -> Any | T:
    """Like :func:`get_property`, but the default is produced by ``factory()`` only when needed."""
    store = get_store(obj)
    if store is not None:
        return store.get_lazy(key, factory)
    return factory()


def set_property(obj: Any, key: str, value: Any) -> None:
    """
    Insert or overwrite `key` on an image.

    Raises
    ------
    TypeError
        If `obj` has no property store (bare arrays cannot hold metadata).
    """
    store = get_store(obj)
    if store is None:
        raise TypeError(
            f"Cannot set property '{key}' on {type(obj).__name__}; wrap it in an Image first."
        )
    store[key] = value


def update_properties(obj: Any, updates: Mapping[str, Any]) -> None:
    """Set several properties at once (see :func:`set_property`)."""
    for k, v in updates.items():
        set_property(obj, k, v)


def copy_properties(source: Any, target: Any, keys: Optional[list[str]] = None) -> None:
    """
    Deep-copy properties from `source` onto `target`.

    Parameters
    ----------
    source, target : image-like
        Both must carry a property store; a bare-array `source` copies nothing.
    keys : list of str, optional
        Restrict the copy to these keys (missing ones are skipped).
    """
    src = get_store(source)
    if src is None:
        return
    selected = src.to_dict() if keys is None else {k: src[k] for k in keys if src.has(k)}
    update_properties(target, copy.deepcopy(selected))
