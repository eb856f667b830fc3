"""Usage analytics and association rule mining."""

from .apriori import (
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_MIN_SUPPORT,
    AprioriAnalyzer,
    AprioriResult,
    AssociationRule,
    FrequentItemset,
    calculate_support,
    extract_transactions,
    generate_frequent_itemsets,
    generate_rules,
    run_apriori,
)
from .reporting import (
    association_type,
    format_percent,
    format_rupiah,
    itemsets_to_dataframe,
    rules_to_dataframe,
)
from .summary import (
    Overview,
    cost_analysis,
    monthly_trend,
    overview,
    total_usage_by_ingredient,
    usage_frequency,
)

__all__ = [
    "DEFAULT_MIN_SUPPORT",
    "DEFAULT_MIN_CONFIDENCE",
    "AprioriAnalyzer",
    "AprioriResult",
    "AssociationRule",
    "FrequentItemset",
    "calculate_support",
    "extract_transactions",
    "generate_frequent_itemsets",
    "generate_rules",
    "run_apriori",
    "association_type",
    "format_percent",
    "format_rupiah",
    "itemsets_to_dataframe",
    "rules_to_dataframe",
    "Overview",
    "cost_analysis",
    "monthly_trend",
    "overview",
    "total_usage_by_ingredient",
    "usage_frequency",
]
