"""Each diagnostic rule checked on its own, plus the fixed rule order."""

import pytest

from sortcheck.assertions.base import Boundary, Claim, FailureCategory
from sortcheck.assertions.rules import first_match
from sortcheck.assertions.sorted_map import ENTRY_RULES, KEY_RULES, EntryContext, KeyContext
from sortcheck.assertions.sorted_set import ELEMENT_RULES, ElementContext
from sortcheck.views import SortedMapView, SortedSetView


def _entry_context(mapping, key, value, boundary=Boundary.FIRST):
    view = SortedMapView(mapping)
    actual_key = view.first_key() if boundary is Boundary.FIRST else view.last_key()
    return EntryContext(
        view=view,
        claim=Claim("entry", boundary, key, value),
        actual_key=actual_key,
        actual_value=view.get(actual_key),
    )


def _rule(category):
    return next(r for r in ENTRY_RULES if r.category is category)


def test_entry_rule_order():
    assert [r.category for r in ENTRY_RULES] == [
        FailureCategory.ENTRY_WRONG_POSITION,
        FailureCategory.VALUE_MISMATCH_AT_BOUNDARY,
        FailureCategory.KEY_MISMATCH_AT_BOUNDARY,
        FailureCategory.KEY_WRONG_POSITION,
        FailureCategory.VALUE_WRONG_POSITION,
        FailureCategory.ENTRY_ABSENT,
    ]


def test_key_and_element_rule_order():
    expected = [FailureCategory.WRONG_POSITION, FailureCategory.ABSENT]
    assert [r.category for r in KEY_RULES] == expected
    assert [r.category for r in ELEMENT_RULES] == expected


@pytest.mark.parametrize(
    "mapping,key,value,expected",
    [
        ({0: 0, 1: 0}, 1, 0, True),
        ({0: 0, 1: 5}, 1, 0, False),
        ({0: 0}, 9, 0, False),
    ],
)
def test_entry_wrong_position_predicate(mapping, key, value, expected):
    context = _entry_context(mapping, key, value)
    assert _rule(FailureCategory.ENTRY_WRONG_POSITION).applies(context) is expected


def test_boundary_predicates_are_independent():
    # Both the key and the value coincide with the boundary entry's parts
    context = _entry_context({0: 0, 1: 0}, 1, 0, boundary=Boundary.LAST)
    context_both = _entry_context({0: 0}, 0, 0)
    assert _rule(FailureCategory.KEY_MISMATCH_AT_BOUNDARY).applies(context) is True
    assert _rule(FailureCategory.VALUE_MISMATCH_AT_BOUNDARY).applies(context) is True
    assert _rule(FailureCategory.VALUE_MISMATCH_AT_BOUNDARY).applies(context_both) is True


def test_value_wrong_position_predicate_collects_every_key():
    context = _entry_context({0: 0, 4: 2, 1: 2, 3: 3}, 10, 2)
    assert _rule(FailureCategory.VALUE_WRONG_POSITION).applies(context) is True
    assert context.ambiguous_keys == (1, 4)


def test_entry_absent_is_catch_all():
    context = _entry_context({0: 0}, 5, 5)
    assert _rule(FailureCategory.ENTRY_ABSENT).applies(context) is True
    assert first_match(ENTRY_RULES, context).category is FailureCategory.ENTRY_ABSENT


def test_first_match_prefers_earlier_rule():
    context = _entry_context({0: 0, 1: 0, 2: 0}, 1, 0)
    matching = [r.category for r in ENTRY_RULES if r.applies(context)]
    assert matching[0] is FailureCategory.ENTRY_WRONG_POSITION
    assert FailureCategory.KEY_MISMATCH_AT_BOUNDARY in matching
    assert first_match(ENTRY_RULES, context).category is FailureCategory.ENTRY_WRONG_POSITION


def test_short_rules_are_the_boundary_rules():
    short = {r.category for r in ENTRY_RULES if r.short}
    assert short == {
        FailureCategory.VALUE_MISMATCH_AT_BOUNDARY,
        FailureCategory.KEY_MISMATCH_AT_BOUNDARY,
    }


def test_key_rule_explanations():
    view = SortedMapView({0: 0, 5: 0})
    context = KeyContext(view=view, claim=Claim("key", Boundary.LAST, 0), actual_key=5)
    rule = first_match(KEY_RULES, context)
    assert rule.explain(context) == "It does contain this key, but the last key is <5>"


def test_element_rule_explanations():
    view = SortedSetView({0, 5})
    context = ElementContext(
        view=view, claim=Claim("element", Boundary.FIRST, 3), actual_element=0
    )
    rule = first_match(ELEMENT_RULES, context)
    assert rule.category is FailureCategory.ABSENT
    assert rule.explain(context) == "It does not contain this element, and the first element is <0>"


def test_first_match_raises_when_nothing_applies():
    with pytest.raises(LookupError):
        first_match(ENTRY_RULES[:1], _entry_context({0: 0}, 5, 5))
