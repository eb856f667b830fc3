#!/usr/bin/env python3
"""
Print cost and usage analytics for a session: overview totals, per-portion cost
by ingredient, how often each ingredient is used, total usage and monthly trend.
"""

import argparse
import logging
import sys

from bakso_utils.analytics import (
    cost_analysis,
    format_rupiah,
    monthly_trend,
    overview,
    total_usage_by_ingredient,
    usage_frequency,
)
from bakso_utils.production import format_record_lines
from bakso_utils.session import load_sample_session, load_session

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def print_history(session, limit: int) -> None:
    for record in session.history.newest_first()[:limit]:
        print(
            f"\n{record.date.strftime('%A, %d %B %Y')} - {record.portions} portions, "
            f"{format_rupiah(record.total_cost)} "
            f"({format_rupiah(record.cost_per_portion)}/portion)"
        )
        for name, amount, unit in format_record_lines(record, session.catalog):
            print(f"  {name:<20} {amount:>10.2f} {unit}")


def main():
    parser = argparse.ArgumentParser(description="Ingredient cost and usage report")
    parser.add_argument(
        "--session",
        type=str,
        default=None,
        help="Path to a session JSON file (defaults to the bundled sample data)",
    )
    parser.add_argument(
        "--history",
        type=int,
        default=5,
        help="Number of most recent usage records to list",
    )
    args = parser.parse_args()

    try:
        session = load_session(args.session) if args.session else load_sample_session()
    except (OSError, ValueError) as e:
        logger.error(f"Could not load session: {e}")
        sys.exit(1)

    ingredients = session.catalog.snapshot()
    history = session.history.snapshot()

    totals = overview(ingredients, history)
    print(f"Ingredients:        {totals.ingredient_count}")
    print(f"Total portions:     {totals.total_portions}")
    print(f"Total cost:         {format_rupiah(totals.total_cost)}")
    print(f"Avg cost / portion: {format_rupiah(totals.avg_cost_per_portion)}")

    if not history:
        print("\nNo usage data to analyze yet.")
        return

    print("\nCost per portion by ingredient")
    print(cost_analysis(ingredients).head(10).to_string(index=False))
    print("\nUsage frequency")
    print(usage_frequency(ingredients, history).to_string(index=False))
    print("\nTotal usage")
    print(total_usage_by_ingredient(ingredients, history).to_string(index=False))
    print("\nMonthly trend")
    print(monthly_trend(history).to_string(index=False))

    if args.history > 0:
        print("\nRecent usage")
        print_history(session, args.history)


if __name__ == "__main__":
    main()
