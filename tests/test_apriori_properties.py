"""Invariants of the mining engine checked against the bundled sample data."""

import pytest

from bakso_utils.analytics.apriori import (
    calculate_support,
    frequent_1_itemsets,
    generate_frequent_itemsets,
    generate_rules,
)


@pytest.fixture
def sample_transactions(sample_session):
    return sample_session.history.transactions()


def test_sample_transactions(sample_transactions):
    assert len(sample_transactions) == 12
    assert all(len(set(t)) == len(t) for t in sample_transactions)


@pytest.mark.parametrize(
    "ingredient_id, expected",
    [
        ("daging-sapi", 1.0),
        ("kaldu-sapi", 1.0),
        ("bawang-goreng", 10 / 12),
        ("mie-kuning", 8 / 12),
        ("bihun", 0.5),
        ("sambal", 5 / 12),
        ("tahu", 4 / 12),
    ],
)
def test_sample_single_supports(sample_transactions, ingredient_id, expected):
    assert calculate_support((ingredient_id,), sample_transactions) == pytest.approx(expected)


def test_supports_within_unit_interval(sample_transactions):
    for itemset in generate_frequent_itemsets(sample_transactions, 0.0):
        assert 0.0 <= itemset.support <= 1.0


def test_support_is_anti_monotone(sample_transactions):
    for itemset in generate_frequent_itemsets(sample_transactions, 0.0):
        for item in itemset.items:
            assert itemset.support <= calculate_support((item,), sample_transactions)


def test_reported_support_matches_brute_force(sample_transactions):
    for itemset in generate_frequent_itemsets(sample_transactions, 0.3):
        count = sum(1 for t in sample_transactions if all(i in t for i in itemset.items))
        assert itemset.support == count / len(sample_transactions)


def test_itemsets_only_reference_seen_ingredients(sample_session, sample_transactions):
    seen = {item for t in sample_transactions for item in t}
    for itemset in generate_frequent_itemsets(sample_transactions, 0.0):
        assert set(itemset.items) <= seen
        assert all(item in sample_session.catalog for item in itemset.items)
        assert 1 <= itemset.size <= 3
        assert len(set(itemset.items)) == itemset.size


def test_each_level_sorted_by_support(sample_transactions):
    itemsets = generate_frequent_itemsets(sample_transactions, 0.3)
    for size in (1, 2, 3):
        supports = [s.support for s in itemsets if s.size == size]
        assert supports == sorted(supports, reverse=True)


def test_rules_partition_their_itemset(sample_transactions):
    itemsets = generate_frequent_itemsets(sample_transactions, 0.4)
    keys = {frozenset(s.items) for s in itemsets}
    for rule in generate_rules(itemsets, sample_transactions, 0.0):
        antecedent, consequent = set(rule.antecedent), set(rule.consequent)
        assert antecedent and consequent
        assert not antecedent & consequent
        assert frozenset(antecedent | consequent) in keys


def test_rule_metrics_bounds(sample_transactions):
    itemsets = generate_frequent_itemsets(sample_transactions, 0.3)
    rules = generate_rules(itemsets, sample_transactions, 0.0)
    assert rules
    for rule in rules:
        assert 0.0 <= rule.confidence <= 1.0
        assert rule.lift >= 0.0
    confidences = [r.confidence for r in rules]
    assert confidences == sorted(confidences, reverse=True)


def test_always_present_consequent_has_lift_one(sample_transactions):
    itemsets = generate_frequent_itemsets(sample_transactions, 0.3)
    rules = generate_rules(itemsets, sample_transactions, 0.0)
    beef_rules = [r for r in rules if r.consequent == ("daging-sapi",)]
    assert beef_rules
    for rule in beef_rules:
        assert rule.confidence == pytest.approx(1.0)
        assert rule.lift == pytest.approx(1.0)


def test_raising_min_support_never_adds_itemsets(sample_transactions):
    low = generate_frequent_itemsets(sample_transactions, 0.3)
    high = generate_frequent_itemsets(sample_transactions, 0.9)
    for size in (1, 2, 3):
        assert len([s for s in high if s.size == size]) <= len(
            [s for s in low if s.size == size]
        )
    assert len(frequent_1_itemsets(sample_transactions, 0.9)) == 4


@pytest.mark.parametrize("low, high", [(0.0, 0.6), (0.6, 0.8), (0.8, 1.0)])
def test_raising_min_confidence_never_adds_rules(sample_transactions, low, high):
    itemsets = generate_frequent_itemsets(sample_transactions, 0.4)
    assert len(generate_rules(itemsets, sample_transactions, high)) <= len(
        generate_rules(itemsets, sample_transactions, low)
    )
