# ==================================================
# ============  MODULE: permutations  ==============
# ==================================================
"""Label-based axis permutations.

A permutation ``p`` maps output slots to source axes: slot ``i`` of the result
takes source axis ``p[i]`` (the convention of ``numpy.transpose``).
"""
from __future__ import annotations

from typing import Hashable, List, Optional, Sequence

from imagemeta.core.errors import PermutationError

__all__ = ["permutation", "default_permutation", "invperm", "is_sorted"]


def permutation(to: Sequence[Hashable], source: Sequence[Hashable]) -> List[Optional[int]]:
    """
    Position in `source` of every label of `to`.

    Parameters
    ----------
    to : sequence
        Desired label order.
    source : sequence
        Actual label order.

    Returns
    -------
    list of int or None
        ``result[i]`` is the 0-based index of ``to[i]`` in `source`, or None
        when the label does not occur there.
    """
    index = {label: i for i, label in enumerate(source)}
    return [index.get(label) for label in to]


def default_permutation(to: Sequence[Hashable], source: Sequence[Hashable]) -> List[int]:
    """
    Like :func:`permutation`, but unresolved slots receive the unused axes.

    The axes of ``range(len(to))`` not claimed by a resolved label are assigned,
    in ascending order, to the unresolved slots, in order.

    Examples
    --------
    >>> default_permutation(["x", "y"], ["y", "x"])
    [1, 0]
    >>> default_permutation(["x", "y"], ["a", "x"])
    [1, 0]
    """
    p = permutation(to, source)
    missing = [i for i, v in enumerate(p) if v is None]
    if not missing:
        return p  # type: ignore[return-value]

    # resolved slots claim at most one index each, so leftover always covers missing
    used = {v for v in p if v is not None}
    leftover = [a for a in range(len(to)) if a not in used]
    for slot, axis in zip(missing, leftover):
        p[slot] = axis
    return p  # type: ignore[return-value]


def invperm(p: Sequence[int]) -> List[int]:
    """
    Inverse of the permutation `p`.

    Raises
    ------
    PermutationError
        If `p` is not a permutation of ``range(len(p))``.
    """
    n = len(p)
    if sorted(int(v) for v in p) != list(range(n)):
        raise PermutationError(f"{list(p)} is not a permutation of 0..{n - 1}")
    inverse = [0] * n
    for i, v in enumerate(p):
        inverse[int(v)] = i
    return inverse


def is_sorted(p: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(p, p[1:]))
