"""Frequent itemset and association rule mining over usage history.

Every usage record is one transaction: the ingredients it consumed. Frequent
itemsets are mined level by level up to three items, and association rules
are built from every antecedent/consequent split of each frequent itemset.
All results are recomputed from scratch on each call.
"""

import dataclasses
import logging
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from bakso_utils.ingredients.models import UsageRecord

logger = logging.getLogger(__name__)

DEFAULT_MIN_SUPPORT = 0.3
DEFAULT_MIN_CONFIDENCE = 0.6

Transaction = Tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class FrequentItemset:
    items: Tuple[str, ...]
    support: float

    @property
    def size(self) -> int:
        return len(self.items)


@dataclasses.dataclass(frozen=True)
class AssociationRule:
    antecedent: Tuple[str, ...]
    consequent: Tuple[str, ...]
    support: float
    confidence: float
    lift: float
    antecedent_support: float
    consequent_support: float


@dataclasses.dataclass(frozen=True)
class AprioriResult:
    """Output of one analysis run, with the counts shown in summaries."""

    transaction_count: int
    itemsets: Tuple[FrequentItemset, ...]
    rules: Tuple[AssociationRule, ...]
    min_support: float
    min_confidence: float

    @property
    def itemset_count(self) -> int:
        return len(self.itemsets)

    @property
    def rule_count(self) -> int:
        return len(self.rules)

    def itemsets_of_size(self, size: int) -> List[FrequentItemset]:
        return [itemset for itemset in self.itemsets if itemset.size == size]


def extract_transactions(records: Iterable[UsageRecord]) -> List[Transaction]:
    """Convert usage records into transactions.

    Keeps the ingredient ids with a nonzero amount, in the record's own order.
    """
    return [
        tuple(ingredient_id for ingredient_id, amount in record.ingredients.items() if amount)
        for record in records
    ]


def _as_sets(transactions: Sequence[Iterable[str]]) -> List[FrozenSet[str]]:
    return [frozenset(t) for t in transactions]


def calculate_support(itemset: Iterable[str], transactions: Sequence[Iterable[str]]) -> float:
    """Fraction of transactions that contain every item of the itemset.

    Returns 0.0 when there are no transactions.
    """
    if not transactions:
        return 0.0
    items = frozenset(itemset)
    count = sum(1 for t in _as_sets(transactions) if items <= t)
    return count / len(transactions)


def _by_support(itemsets: List[FrequentItemset]) -> List[FrequentItemset]:
    return sorted(itemsets, key=lambda s: s.support, reverse=True)


def frequent_1_itemsets(
    transactions: Sequence[Transaction], min_support: float
) -> List[FrequentItemset]:
    """Single ingredients meeting min_support, in first-seen order before sorting."""
    seen: Dict[str, None] = {}
    for t in transactions:
        for item in t:
            seen.setdefault(item, None)

    frequent = []
    for item in seen:
        support = calculate_support((item,), transactions)
        if support >= min_support:
            frequent.append(FrequentItemset((item,), support))
    return _by_support(frequent)


def frequent_2_itemsets(
    frequent_1: Sequence[FrequentItemset],
    transactions: Sequence[Transaction],
    min_support: float,
) -> List[FrequentItemset]:
    """Pairs of frequent single ingredients, support measured per pair."""
    items = [itemset.items[0] for itemset in frequent_1]
    frequent = []
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            pair = (items[i], items[j])
            support = calculate_support(pair, transactions)
            if support >= min_support:
                frequent.append(FrequentItemset(pair, support))
    return _by_support(frequent)


def frequent_3_itemsets(
    frequent_2: Sequence[FrequentItemset],
    transactions: Sequence[Transaction],
    min_support: float,
    deduplicate: bool = False,
) -> List[FrequentItemset]:
    """Triples joined from pairs of frequent 2-itemsets sharing exactly one item.

    Each eligible pair of 2-itemsets is joined on its own, so the same triple
    can appear once per join that reaches it. Pass deduplicate=True to keep
    only the first occurrence of each triple.
    """
    frequent = []
    emitted = set()
    for i in range(len(frequent_2)):
        for j in range(i + 1, len(frequent_2)):
            first, second = frequent_2[i].items, frequent_2[j].items
            if len(set(first) & set(second)) != 1:
                continue
            union = first + tuple(item for item in second if item not in first)
            if len(union) != 3:
                continue
            key = frozenset(union)
            if deduplicate and key in emitted:
                continue
            support = calculate_support(union, transactions)
            if support >= min_support:
                frequent.append(FrequentItemset(union, support))
                emitted.add(key)
    return _by_support(frequent)


def generate_frequent_itemsets(
    transactions: Sequence[Transaction],
    min_support: float = DEFAULT_MIN_SUPPORT,
    deduplicate: bool = False,
) -> List[FrequentItemset]:
    """Mine frequent itemsets of one, two and three ingredients.

    Args:
        transactions: Ingredient ids used together, one entry per usage record
        min_support: Minimum fraction of transactions an itemset must appear in.
            Values at or below 0 admit every candidate, values above 1 admit none.
        deduplicate: Drop repeated 3-itemsets produced by different joins

    Returns:
        Level 1, 2 and 3 itemsets concatenated, each level sorted by
        descending support. Empty if there are no transactions.
    """
    level_1 = frequent_1_itemsets(transactions, min_support)
    level_2 = frequent_2_itemsets(level_1, transactions, min_support)
    level_3 = frequent_3_itemsets(level_2, transactions, min_support, deduplicate)
    logger.debug(
        f"Frequent itemsets at min_support={min_support}: "
        f"{len(level_1)} singles, {len(level_2)} pairs, {len(level_3)} triples"
    )
    return level_1 + level_2 + level_3


def generate_rules(
    itemsets: Sequence[FrequentItemset],
    transactions: Sequence[Transaction],
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
) -> List[AssociationRule]:
    """Build association rules from frequent itemsets.

    For an itemset of k items every bitmask from 1 to 2**k - 2 is a split:
    the item at index i goes to the antecedent when bit i is set, otherwise
    to the consequent. Antecedent and consequent supports are measured on the
    transactions. Confidence is 0 when the antecedent never occurs and lift
    is 0 when the consequent never occurs.

    Args:
        itemsets: Output of generate_frequent_itemsets
        transactions: The transactions the itemsets were mined from
        min_confidence: Minimum confidence a rule needs to be kept

    Returns:
        Rules sorted by descending confidence
    """
    rules = []
    for itemset in itemsets:
        items = itemset.items
        if len(items) < 2:
            continue
        for mask in range(1, 2 ** len(items) - 1):
            antecedent = tuple(item for i, item in enumerate(items) if mask & (1 << i))
            consequent = tuple(item for i, item in enumerate(items) if not mask & (1 << i))

            antecedent_support = calculate_support(antecedent, transactions)
            confidence = itemset.support / antecedent_support if antecedent_support > 0 else 0.0
            consequent_support = calculate_support(consequent, transactions)
            lift = confidence / consequent_support if consequent_support > 0 else 0.0

            if confidence >= min_confidence:
                rules.append(
                    AssociationRule(
                        antecedent=antecedent,
                        consequent=consequent,
                        support=itemset.support,
                        confidence=confidence,
                        lift=lift,
                        antecedent_support=antecedent_support,
                        consequent_support=consequent_support,
                    )
                )
    return sorted(rules, key=lambda r: r.confidence, reverse=True)


def run_apriori(
    records: Iterable[UsageRecord],
    min_support: float = DEFAULT_MIN_SUPPORT,
    min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    deduplicate: bool = False,
) -> AprioriResult:
    """Extract transactions from usage records and mine itemsets and rules."""
    transactions = extract_transactions(records)
    itemsets = generate_frequent_itemsets(transactions, min_support, deduplicate)
    rules = generate_rules(itemsets, transactions, min_confidence)
    logger.info(
        f"Apriori over {len(transactions)} transactions: "
        f"{len(itemsets)} itemsets, {len(rules)} rules"
    )
    return AprioriResult(
        transaction_count=len(transactions),
        itemsets=tuple(itemsets),
        rules=tuple(rules),
        min_support=min_support,
        min_confidence=min_confidence,
    )


class AprioriAnalyzer:
    """Runs the analysis and remembers the result of the last call.

    Only the most recent (transactions, min_support, min_confidence,
    deduplicate) key is kept, so changing either threshold or appending a
    record replaces the cached result. Results hold tuples and frozen
    dataclasses and cannot be changed by callers.

    Attributes:
        cache (dict): The last computed AprioriResult, keyed by its inputs.
    """

    def __init__(self, deduplicate: bool = False):
        self.deduplicate = deduplicate
        self.cache: Dict[tuple, AprioriResult] = {}

    def analyze(
        self,
        records: Iterable[UsageRecord],
        min_support: float = DEFAULT_MIN_SUPPORT,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ) -> AprioriResult:
        records = list(records)
        key = (
            tuple(extract_transactions(records)),
            min_support,
            min_confidence,
            self.deduplicate,
        )
        if key in self.cache:
            logger.debug("Using cached apriori result")
            return self.cache[key]

        result = run_apriori(records, min_support, min_confidence, self.deduplicate)
        self.cache = {key: result}
        return result

    def clear(self) -> None:
        self.cache.clear()
