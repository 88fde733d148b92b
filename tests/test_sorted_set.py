"""Tests for first/last element checks on sorted sets."""

import pytest

from sortcheck.assertions import FailureCategory
from sortcheck.assertions.sorted_set import has_first_element, has_last_element
from sortcheck.errors import OrderingError
from sortcheck.views import SortedSetView, nulls_first


def test_first_last_element_pass():
    assert has_first_element({1, 2}, 1).passed is True
    assert has_last_element({1, 2}, 2).passed is True


def test_first_last_element_null():
    null_set = SortedSetView({None}, key=nulls_first())
    assert has_first_element(null_set, None).passed is True
    assert has_last_element(null_set, None).passed is True


def test_null_ranked_first_among_values():
    view = SortedSetView({3, None, 1}, key=nulls_first())
    assert has_first_element(view, None).passed is True
    assert has_last_element(view, 3).passed is True
    assert view.render() == "[None, 1, 3]"


def test_first_element_empty():
    result = has_first_element(set(), 1)
    assert result.passed is False
    assert result.category is FailureCategory.EMPTY_COLLECTION
    assert [f.key for f in result.facts] == ["expected to have first element", "but was"]
    assert result.fact("expected to have first element") == "1"
    assert result.fact("but was") == "[]"


def test_last_element_empty_null():
    result = has_last_element(frozenset(), None)
    assert result.fact("expected to have last element") == "None"
    assert result.fact("but was") == "[]"


def test_first_element_wrong_position():
    result = has_first_element({0, 1, 2}, 1)
    assert result.category is FailureCategory.WRONG_POSITION
    assert result.diagnosis.boundary == 0
    assert result.message == (
        "Not true that <[0, 1, 2]> has first element <1>. "
        "It does contain this element, but the first element is <0>"
    )


def test_last_element_wrong_position():
    result = has_last_element({0, 1, 2}, 1)
    assert result.message == (
        "Not true that <[0, 1, 2]> has last element <1>. "
        "It does contain this element, but the last element is <2>"
    )
    assert result.fact("last element") == "2"


def test_first_element_absent():
    result = has_first_element({0}, 1)
    assert result.category is FailureCategory.ABSENT
    assert result.message == (
        "Not true that <[0]> has first element <1>. "
        "It does not contain this element, and the first element is <0>"
    )


def test_last_element_absent():
    result = has_last_element({0}, 1)
    assert result.message == (
        "Not true that <[0]> has last element <1>. "
        "It does not contain this element, and the last element is <0>"
    )


def test_list_of_unique_elements_is_accepted():
    result = has_first_element([2, 0, 1], 0)
    assert result.passed is True


def test_reversed_set():
    view = SortedSetView({0, 1, 2}, reverse=True)
    assert has_first_element(view, 2).passed is True
    assert has_last_element(view, 1).category is FailureCategory.WRONG_POSITION


def test_incomparable_element_raises():
    with pytest.raises(OrderingError):
        has_first_element({1, 2}, "x")


def test_mapping_is_rejected():
    with pytest.raises(TypeError):
        has_first_element({1: 0}, 1)


def test_set_is_not_mutated():
    elements = {3, 1, 2}
    has_first_element(elements, 2)
    assert elements == {1, 2, 3}


def test_incomparable_element_raises_under_nulls_first():
    view = SortedSetView({None, 1}, key=nulls_first())
    with pytest.raises(OrderingError):
        has_last_element(view, "a")
    with pytest.raises(OrderingError):
        has_first_element(view, "a")
