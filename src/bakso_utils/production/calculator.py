"""Scale ingredient amounts and costs to a number of portions."""

import dataclasses
import datetime
import logging
import numbers
from typing import List, Sequence

from bakso_utils.ingredients.models import Ingredient, UsageRecord

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class IngredientRequirement:
    ingredient_id: str
    name: str
    unit: str
    amount: float
    cost: float


@dataclasses.dataclass(frozen=True)
class PortionCalculation:
    """Ingredient requirements for one production batch."""

    portions: int
    lines: List[IngredientRequirement]

    @property
    def total_cost(self) -> float:
        return sum(line.cost for line in self.lines)

    @property
    def cost_per_portion(self) -> float:
        return self.total_cost / self.portions if self.portions > 0 else 0.0

    def to_usage_record(self, record_id: str, date: datetime.date) -> UsageRecord:
        """Turn the calculation into a usage record for the history.

        Ingredients with a zero amount are left out of the record's mapping.
        """
        amounts = {line.ingredient_id: line.amount for line in self.lines if line.amount > 0}
        return UsageRecord(
            id=record_id,
            date=date,
            portions=self.portions,
            ingredients=amounts,
            total_cost=self.total_cost,
        )


def validate_portions(portions) -> int:
    """Check that portions is a positive whole number.

    Raises:
        ValueError: If portions is not an integer greater than zero
    """
    if isinstance(portions, bool) or not isinstance(portions, numbers.Real):
        raise ValueError(f"Portions must be a number, got {portions!r}")
    if not float(portions).is_integer():
        raise ValueError(f"Portions must be a whole number, got {portions}")
    if portions <= 0:
        raise ValueError("Portions must be greater than 0")
    return int(portions)


def calculate_requirements(
    ingredients: Sequence[Ingredient], portions: int
) -> PortionCalculation:
    """Calculate how much of every ingredient a batch needs and what it costs.

    Args:
        ingredients: Catalog snapshot to scale
        portions: Number of bakso portions to produce

    Returns:
        A PortionCalculation with one line per ingredient, in catalog order

    Raises:
        ValueError: If portions is not a positive integer or there are no ingredients
    """
    portions = validate_portions(portions)
    if not ingredients:
        raise ValueError("Add ingredients before calculating portions")

    lines = []
    for ingredient in ingredients:
        amount = ingredient.amount_per_portion * portions
        lines.append(
            IngredientRequirement(
                ingredient_id=ingredient.id,
                name=ingredient.name,
                unit=ingredient.unit,
                amount=amount,
                cost=amount * ingredient.cost_per_unit,
            )
        )

    calculation = PortionCalculation(portions=portions, lines=lines)
    logger.debug(
        f"Calculated {len(lines)} ingredient lines for {portions} portions, "
        f"total cost {calculation.total_cost:.2f}"
    )
    return calculation
