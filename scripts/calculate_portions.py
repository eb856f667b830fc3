#!/usr/bin/env python3
"""
Calculate ingredient requirements and cost for a batch of bakso portions.
With --save the batch is added to the usage history and the session file is rewritten.
"""

import argparse
import datetime
import logging
import sys

import pandas as pd
from bakso_utils.analytics import format_rupiah
from bakso_utils.production import calculate_requirements
from bakso_utils.session import load_sample_session, load_session, save_session

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    """Main function to calculate a production batch."""
    parser = argparse.ArgumentParser(
        description="Calculate ingredient requirements for a number of portions"
    )
    parser.add_argument(
        "--portions", type=int, required=True, help="Number of portions to produce"
    )
    parser.add_argument(
        "--session",
        type=str,
        default=None,
        help="Path to a session JSON file (defaults to the bundled sample data)",
    )
    parser.add_argument(
        "--date",
        type=datetime.date.fromisoformat,
        default=None,
        help="Production date as YYYY-MM-DD (defaults to today)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Record the batch in the usage history and write the session file",
    )
    args = parser.parse_args()

    if args.save and not args.session:
        parser.error("--save requires --session")

    try:
        session = load_session(args.session) if args.session else load_sample_session()
        calculation = calculate_requirements(session.catalog.snapshot(), args.portions)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    df = pd.DataFrame(
        [
            {
                "ingredient": line.name,
                "amount": round(line.amount, 2),
                "unit": line.unit,
                "cost": format_rupiah(line.cost),
            }
            for line in calculation.lines
        ]
    )
    print(f"Requirements for {calculation.portions} portions")
    print(df.to_string(index=False))
    print(f"\nTotal cost:       {format_rupiah(calculation.total_cost)}")
    print(f"Cost per portion: {format_rupiah(calculation.cost_per_portion)}")

    if args.save:
        record = session.history.record(calculation, date=args.date)
        try:
            save_session(session, args.session)
        except OSError as e:
            logger.error(f"Could not write session file: {e}")
            sys.exit(1)
        print(f"\nSaved usage record {record.id} to {args.session}")


if __name__ == "__main__":
    main()
