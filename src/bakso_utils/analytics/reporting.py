"""Display helpers for mining results and costs."""

from typing import Iterable, Sequence

import pandas as pd

from bakso_utils.analytics.apriori import AssociationRule, FrequentItemset
from bakso_utils.ingredients.catalog import UNKNOWN_INGREDIENT
from bakso_utils.ingredients.models import Ingredient

# Display thresholds
HIGH_SUPPORT = 0.7
MEDIUM_SUPPORT = 0.5
STRONG_CONFIDENCE = 0.8


def support_level(support: float) -> str:
    if support >= HIGH_SUPPORT:
        return "high"
    if support >= MEDIUM_SUPPORT:
        return "medium"
    return "low"


def confidence_level(confidence: float) -> str:
    return "strong" if confidence >= STRONG_CONFIDENCE else "moderate"


def association_type(lift: float) -> str:
    """Describe what a rule's lift says about the two sides.

    >>> association_type(1.33)
    'positive'
    >>> association_type(1.0)
    'independent'
    """
    if lift > 1:
        return "positive"
    if lift == 1:
        return "independent"
    return "negative"


def format_percent(value: float) -> str:
    """Format a fraction as a percentage with one decimal, e.g. 0.5 -> '50.0%'."""
    return f"{value * 100:.1f}%"


def format_rupiah(value: float) -> str:
    """Format an amount in Indonesian rupiah.

    Uses a dot as thousands separator and a comma for decimals, which are
    only shown when the amount is not whole.

    Examples:
        >>> format_rupiah(12500)
        'Rp 12.500'
        >>> format_rupiah(1234.5)
        'Rp 1.234,5'
    """
    sign = "-" if value < 0 else ""
    rounded = round(abs(value), 2)
    whole = int(rounded)
    text = f"{whole:,}".replace(",", ".")
    fraction = round(rounded - whole, 2)
    if fraction:
        text += "," + f"{fraction:.2f}"[2:].rstrip("0")
    return f"Rp {sign}{text}"


def _names(ingredients: Iterable[Ingredient]) -> dict:
    return {ingredient.id: ingredient.name for ingredient in ingredients}


def _join(items: Sequence[str], names: dict) -> str:
    return ", ".join(names.get(item, UNKNOWN_INGREDIENT) for item in items)


def itemsets_to_dataframe(
    itemsets: Sequence[FrequentItemset], ingredients: Iterable[Ingredient]
) -> pd.DataFrame:
    """Tabulate frequent itemsets with ingredient names.

    Returns:
        DataFrame with columns: itemset, size, support, support_pct,
        support_level, in the order the itemsets were given
    """
    names = _names(ingredients)
    return pd.DataFrame(
        [
            {
                "itemset": _join(itemset.items, names),
                "size": itemset.size,
                "support": itemset.support,
                "support_pct": format_percent(itemset.support),
                "support_level": support_level(itemset.support),
            }
            for itemset in itemsets
        ],
        columns=["itemset", "size", "support", "support_pct", "support_level"],
    )


def rules_to_dataframe(
    rules: Sequence[AssociationRule], ingredients: Iterable[Ingredient]
) -> pd.DataFrame:
    """Tabulate association rules with ingredient names and strength labels."""
    names = _names(ingredients)
    return pd.DataFrame(
        [
            {
                "antecedent": _join(rule.antecedent, names),
                "consequent": _join(rule.consequent, names),
                "support": rule.support,
                "confidence": rule.confidence,
                "lift": rule.lift,
                "confidence_level": confidence_level(rule.confidence),
                "association": association_type(rule.lift),
            }
            for rule in rules
        ],
        columns=[
            "antecedent",
            "consequent",
            "support",
            "confidence",
            "lift",
            "confidence_level",
            "association",
        ],
    )
