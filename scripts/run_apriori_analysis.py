#!/usr/bin/env python3
"""
Run the Apriori market basket analysis over a session's usage history.
Prints the frequent itemsets and association rules, optionally writing both to CSV.
"""

import argparse
import datetime
import logging
import pathlib
import sys

import pandas as pd
from bakso_utils.analytics import (
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_MIN_SUPPORT,
    itemsets_to_dataframe,
    rules_to_dataframe,
)
from bakso_utils.session import load_sample_session, load_session

logger = logging.getLogger(__name__)


def threshold(value: str) -> float:
    """argparse type for a number between 0 and 1."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number")
    if not 0 <= number <= 1:
        raise argparse.ArgumentTypeError(f"{value} is not between 0 and 1")
    return number


def main():
    """Main function to mine ingredient usage patterns."""
    parser = argparse.ArgumentParser(
        description="Find ingredients that are frequently used together"
    )
    parser.add_argument(
        "--session",
        type=str,
        default=None,
        help="Path to a session JSON file (defaults to the bundled sample data)",
    )
    parser.add_argument(
        "--min-support",
        type=threshold,
        default=DEFAULT_MIN_SUPPORT,
        help="Minimum fraction of usage records an itemset must appear in",
    )
    parser.add_argument(
        "--min-confidence",
        type=threshold,
        default=DEFAULT_MIN_CONFIDENCE,
        help="Minimum confidence for an association rule",
    )
    parser.add_argument(
        "--deduplicate",
        action="store_true",
        help="Report each 3-ingredient itemset once even when several joins produce it",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Write itemsets and rules as CSV files to this directory",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        if args.session:
            session = load_session(args.session, deduplicate=args.deduplicate)
        else:
            session = load_sample_session(deduplicate=args.deduplicate)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load session: {e}")
        sys.exit(1)

    result = session.run_apriori(args.min_support, args.min_confidence)

    if result.transaction_count == 0:
        print("No usage records to analyze yet.")
        return

    ingredients = session.catalog.snapshot()
    itemsets_df = itemsets_to_dataframe(result.itemsets, ingredients)
    rules_df = rules_to_dataframe(result.rules, ingredients)

    print(f"Transactions: {result.transaction_count}")
    print(f"Frequent itemsets: {result.itemset_count}")
    print(f"Association rules: {result.rule_count}")

    with pd.option_context("display.max_rows", None, "display.width", 160):
        print("\nFrequent itemsets")
        print(itemsets_df.to_string(index=False) if not itemsets_df.empty else "  (none)")
        print("\nAssociation rules")
        print(
            rules_df.to_string(index=False, float_format=lambda x: f"{x:.2f}")
            if not rules_df.empty
            else "  (none)"
        )

    if args.output_dir:
        output_dir = pathlib.Path(args.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        itemsets_file = output_dir / f"frequent_itemsets_{timestamp}.csv"
        rules_file = output_dir / f"association_rules_{timestamp}.csv"
        itemsets_df.to_csv(itemsets_file, index=False)
        rules_df.to_csv(rules_file, index=False)
        print("\nSaved:")
        print(f"  - {itemsets_file}")
        print(f"  - {rules_file}")


if __name__ == "__main__":
    main()
