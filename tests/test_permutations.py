# ==================================================
# ============== TESTS: Permutations ===============
# ==================================================
from __future__ import annotations

import pytest

from imagemeta.core.errors import PermutationError
from imagemeta.core.layout_axes import XY, YX, get_spatial_order, list_available_orders, parse_spatial_order
from imagemeta.core.permutations import default_permutation, invperm, is_sorted, permutation


# ===================
# permutation / default_permutation
# ===================

def test_permutation_records_unresolved_as_none():
    assert permutation(["x", "y"], ["y", "x"]) == [1, 0]
    assert permutation(["x", "y", "z"], ["a", "x"]) == [1, None, None]


def test_default_permutation_swaps_xy():
    assert default_permutation(["x", "y"], ["y", "x"]) == [1, 0]
    assert default_permutation(list(XY), list(YX)) == [1, 0]


def test_default_permutation_assigns_leftover_axes():
    # "x" resolves to 1, the unresolved "y" slot takes the leftover 0
    assert default_permutation(["x", "y"], ["a", "x"]) == [1, 0]
    assert default_permutation(["x", "y", "z"], ["a", "b", "c"]) == [0, 1, 2]
    assert default_permutation(["z", "y", "x"], ["x", "q", "z"]) == [2, 1, 0]


def test_default_permutation_is_total_for_equal_lengths():
    to = ["t", "y", "x", "c"]
    src = ["x", "c", "foo", "bar"]
    p = default_permutation(to, src)
    assert sorted(p) == list(range(len(to)))


def test_default_permutation_keeps_out_of_range_matches():
    # "x" sits at source axis 2; the leftover axes of range(2) fill the rest
    assert default_permutation(["x", "y"], ["q", "r", "x"]) == [2, 0]


def test_invperm_and_is_sorted():
    p = [2, 0, 1]
    ip = invperm(p)
    assert ip == [1, 2, 0]
    assert [p[i] for i in ip] == [0, 1, 2]
    assert is_sorted([0, 1, 1, 3])
    assert not is_sorted([1, 0])
    with pytest.raises(PermutationError):
        invperm([0, 0, 1])


# ===================
# Named spatial orders
# ===================

def test_named_spatial_orders():
    assert get_spatial_order("YX") == ["y", "x"]
    assert "xy" in list_available_orders()
    with pytest.raises(ValueError):
        get_spatial_order("abc")


@pytest.mark.parametrize(
    "order, expected",
    [("xy", ["x", "y"]), ("tyx", ["t", "y", "x"]), (("x", "y"), ["x", "y"]), (["z", "y", "x"], ["z", "y", "x"])],
)
def test_parse_spatial_order(order, expected):
    assert parse_spatial_order(order) == expected


def test_parse_spatial_order_rejects_duplicates():
    with pytest.raises(ValueError):
        parse_spatial_order(["x", "x"])
