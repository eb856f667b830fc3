"""Caller-owned session state and JSON snapshot import/export."""

import datetime
import json
import logging
import os
import pathlib
from typing import Any, Dict, Optional, Union

from bakso_utils.analytics.apriori import (
    DEFAULT_MIN_CONFIDENCE,
    DEFAULT_MIN_SUPPORT,
    AprioriAnalyzer,
    AprioriResult,
)
from bakso_utils.ingredients.catalog import (
    IngredientCatalog,
    is_positive_number,
    validate_ingredient_fields,
)
from bakso_utils.ingredients.models import Ingredient, UsageRecord
from bakso_utils.production.history import UsageHistory

logger = logging.getLogger(__name__)

SAMPLE_SESSION_FILE = os.path.join(os.path.dirname(__file__), "data", "sample_session.json")


class BaksoSession:
    """Everything a user works with during one session.

    Attributes:
        catalog (IngredientCatalog): Ingredients and their costs.
        history (UsageHistory): Recorded production batches.
        analyzer (AprioriAnalyzer): Apriori runner with a result cache.
    """

    def __init__(
        self,
        catalog: Optional[IngredientCatalog] = None,
        history: Optional[UsageHistory] = None,
        deduplicate: bool = False,
    ):
        self.catalog = catalog if catalog is not None else IngredientCatalog()
        self.history = history if history is not None else UsageHistory()
        self.analyzer = AprioriAnalyzer(deduplicate=deduplicate)

    def run_apriori(
        self,
        min_support: float = DEFAULT_MIN_SUPPORT,
        min_confidence: float = DEFAULT_MIN_CONFIDENCE,
    ) -> AprioriResult:
        """Mine the current usage history."""
        return self.analyzer.analyze(self.history.snapshot(), min_support, min_confidence)


def _field(data: Dict[str, Any], name: str, alias: Optional[str] = None) -> Any:
    if name in data:
        return data[name]
    if alias and alias in data:
        return data[alias]
    raise ValueError(f"Missing field '{name}' in {data!r}")


def _parse_ingredient(data: Dict[str, Any]) -> Ingredient:
    fields = validate_ingredient_fields(
        _field(data, "name"),
        _field(data, "unit"),
        _field(data, "cost_per_unit", "costPerUnit"),
        _field(data, "amount_per_portion", "amountPerPortion"),
    )
    return Ingredient(str(_field(data, "id")), *fields)


def _parse_record(data: Dict[str, Any]) -> UsageRecord:
    raw_date = _field(data, "date")
    try:
        # Accept full ISO timestamps as well as plain dates
        date = datetime.date.fromisoformat(str(raw_date)[:10])
    except ValueError as e:
        raise ValueError(f"Invalid date {raw_date!r} in usage record") from e

    portions = _field(data, "portions")
    if isinstance(portions, bool) or not isinstance(portions, int) or portions <= 0:
        raise ValueError(f"Portions must be a positive integer, got {portions!r}")

    ingredients = _field(data, "ingredients")
    if not isinstance(ingredients, dict):
        raise ValueError("Usage record ingredients must be a mapping of id to amount")
    for ingredient_id, amount in ingredients.items():
        if not is_positive_number(amount):
            raise ValueError(
                f"Amount of ingredient {ingredient_id!r} must be a positive number, got {amount!r}"
            )

    raw_total = _field(data, "total_cost", "totalCost")
    try:
        total_cost = float(raw_total)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid total cost {raw_total!r} in usage record") from e

    return UsageRecord(
        id=str(_field(data, "id")),
        date=date,
        portions=portions,
        ingredients={str(k): float(v) for k, v in ingredients.items()},
        total_cost=total_cost,
    )


def session_from_dict(data: Dict[str, Any], deduplicate: bool = False) -> BaksoSession:
    """Build a session from a snapshot dictionary.

    The snapshot has two lists, "ingredients" and "usage_history" (or
    "usageHistory"). Both camelCase and snake_case field names are accepted.

    Raises:
        ValueError: If the snapshot is malformed
    """
    ingredients = [_parse_ingredient(item) for item in data.get("ingredients", [])]
    records_data = data.get("usage_history", data.get("usageHistory", []))
    records = [_parse_record(item) for item in records_data]
    session = BaksoSession(
        catalog=IngredientCatalog(ingredients),
        history=UsageHistory(records),
        deduplicate=deduplicate,
    )
    logger.debug(
        f"Loaded session with {len(session.catalog)} ingredients "
        f"and {len(session.history)} usage records"
    )
    return session


def session_to_dict(session: BaksoSession) -> Dict[str, Any]:
    return {
        "ingredients": [
            {
                "id": ingredient.id,
                "name": ingredient.name,
                "unit": ingredient.unit,
                "cost_per_unit": ingredient.cost_per_unit,
                "amount_per_portion": ingredient.amount_per_portion,
            }
            for ingredient in session.catalog
        ],
        "usage_history": [
            {
                "id": record.id,
                "date": record.date.isoformat(),
                "portions": record.portions,
                "ingredients": dict(record.ingredients),
                "total_cost": record.total_cost,
            }
            for record in session.history
        ],
    }


def load_session(path: Union[str, pathlib.Path], deduplicate: bool = False) -> BaksoSession:
    """Read a session snapshot from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Session file {path} is not valid JSON: {e}") from e
    logger.info(f"Loading session from {path}")
    return session_from_dict(data, deduplicate=deduplicate)


def save_session(session: BaksoSession, path: Union[str, pathlib.Path]) -> None:
    """Write a session snapshot to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(session_to_dict(session), f, indent=2, ensure_ascii=False)
    logger.info(f"Saved session to {path}")


def load_sample_session(deduplicate: bool = False) -> BaksoSession:
    """Demo data: a bakso stall's ingredients and a few months of production."""
    return load_session(SAMPLE_SESSION_FILE, deduplicate=deduplicate)
