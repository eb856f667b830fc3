"""Append-only history of ingredient usage."""

import datetime
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from bakso_utils.analytics.apriori import extract_transactions
from bakso_utils.ingredients.catalog import new_id
from bakso_utils.ingredients.models import UsageRecord
from bakso_utils.production.calculator import PortionCalculation

logger = logging.getLogger(__name__)


class UsageHistory:
    """Usage records in the order they were produced.

    Records can only be appended; there is no edit or delete.
    """

    def __init__(
        self,
        records: Optional[Iterable[UsageRecord]] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        self.id_factory = id_factory
        self._records: List[UsageRecord] = []
        for record in records or []:
            self.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[UsageRecord]:
        return iter(list(self._records))

    def append(self, record: UsageRecord) -> UsageRecord:
        """Add an existing record.

        Raises:
            ValueError: If the record is malformed or its id is already present
        """
        if any(existing.id == record.id for existing in self._records):
            raise ValueError(f"Duplicate usage record id: {record.id}")
        if record.portions <= 0:
            raise ValueError(f"Usage record {record.id} has non-positive portions")
        self._records.append(record)
        return record

    def record(
        self, calculation: PortionCalculation, date: Optional[datetime.date] = None
    ) -> UsageRecord:
        """Save a portion calculation as a new usage record.

        Args:
            calculation: Result of calculate_requirements
            date: Production date, defaults to today

        Returns:
            The stored UsageRecord
        """
        usage = calculation.to_usage_record(
            record_id=self.id_factory(), date=date or datetime.date.today()
        )
        self.append(usage)
        logger.info(
            f"Recorded usage for {usage.portions} portions on {usage.date.isoformat()}"
        )
        return usage

    def snapshot(self) -> Tuple[UsageRecord, ...]:
        return tuple(self._records)

    def newest_first(self) -> List[UsageRecord]:
        return sorted(self._records, key=lambda r: r.date, reverse=True)

    def transactions(self) -> List[Tuple[str, ...]]:
        return extract_transactions(self._records)


def format_record_lines(record: UsageRecord, catalog) -> List[Tuple[str, float, str]]:
    """Rows of (ingredient name, amount, unit) for displaying one record.

    Ingredients no longer in the catalog are shown as "Unknown" with no unit.
    """
    return [
        (catalog.name_for(ingredient_id), amount, catalog.unit_for(ingredient_id))
        for ingredient_id, amount in record.ingredients.items()
    ]
