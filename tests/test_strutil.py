from layerscan.strutil import compare_string_lists, compare_string_lists_in_both


def test_compare_string_lists():
    cmp = compare_string_lists(["a", "b", "b", "a"], ["a", "c"])
    assert len(cmp) == 1
    assert "a" not in cmp
    assert "b" in cmp


def test_compare_string_lists_in_both():
    cmp = compare_string_lists_in_both(["a", "a", "b", "c"], ["a", "c", "c"])
    assert len(cmp) == 2
    assert "b" not in cmp
    assert "a" in cmp
    assert "c" in cmp


def test_compare_string_lists_keeps_order_of_first_list():
    assert compare_string_lists(["d", "b", "a", "d", "e"], ["a"]) == ["d", "b", "e"]


def test_compare_string_lists_empty_inputs():
    assert compare_string_lists([], ["a"]) == []
    assert compare_string_lists(["a", "a"], []) == ["a"]


def test_compare_string_lists_in_both_order_and_uniqueness():
    assert compare_string_lists_in_both(["c", "a", "c", "a"], ["a", "c"]) == ["c", "a"]


def test_compare_string_lists_in_both_disjoint():
    assert compare_string_lists_in_both(["a", "b"], ["c"]) == []