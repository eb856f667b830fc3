"""In-memory ingredient catalog."""

import logging
import uuid
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple

import numpy as np

from bakso_utils.ingredients.models import Ingredient
from bakso_utils.ingredients.units import UNITS, normalize_unit

logger = logging.getLogger(__name__)

UNKNOWN_INGREDIENT = "Unknown"


def new_id() -> str:
    """Generate a unique identifier for ingredients and usage records."""
    return uuid.uuid4().hex


def is_positive_number(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return bool(np.isfinite(number)) and number > 0


def validate_ingredient_fields(
    name: str, unit: str, cost_per_unit: float, amount_per_portion: float
) -> Tuple[str, str, float, float]:
    """Validate and clean the user-editable fields of an ingredient.

    Args:
        name: Display name, must not be blank
        unit: Unit of measure, one of UNITS or a recognized alias
        cost_per_unit: Price of one unit, must be positive
        amount_per_portion: Units consumed by one portion, must be positive

    Returns:
        Tuple of (name, unit, cost_per_unit, amount_per_portion) with the name
        stripped, the unit normalized and the numbers converted to float.

    Raises:
        ValueError: If any field is missing or invalid
    """
    if name is not None and not isinstance(name, str):
        raise ValueError(f"Ingredient name must be text, got {name!r}")
    if unit is not None and not isinstance(unit, str):
        raise ValueError(f"Ingredient unit must be text, got {unit!r}")

    clean_name = (name or "").strip()
    if not clean_name:
        raise ValueError("Ingredient name must not be empty")

    if not (unit or "").strip():
        raise ValueError("Ingredient unit must not be empty")
    clean_unit = normalize_unit(unit)
    if clean_unit is None:
        raise ValueError(f"Unknown unit '{unit}', expected one of: {', '.join(UNITS)}")

    if not is_positive_number(cost_per_unit):
        raise ValueError(f"Cost per unit must be a positive number, got {cost_per_unit!r}")
    if not is_positive_number(amount_per_portion):
        raise ValueError(
            f"Amount per portion must be a positive number, got {amount_per_portion!r}"
        )

    return clean_name, clean_unit, float(cost_per_unit), float(amount_per_portion)


def resolve_name(ingredients: Iterable[Ingredient], ingredient_id: str) -> str:
    """Look up an ingredient's display name, falling back to "Unknown"."""
    for ingredient in ingredients:
        if ingredient.id == ingredient_id:
            return ingredient.name
    return UNKNOWN_INGREDIENT


class IngredientCatalog:
    """Ordered collection of ingredients keyed by id.

    The catalog is owned by the caller's session. Analysis code only ever sees
    the tuple returned by snapshot().

    Attributes:
        id_factory: Callable producing new unique ingredient ids.
    """

    def __init__(
        self,
        ingredients: Optional[Iterable[Ingredient]] = None,
        id_factory: Callable[[], str] = new_id,
    ):
        self.id_factory = id_factory
        self._ingredients: Dict[str, Ingredient] = {}
        for ingredient in ingredients or []:
            if ingredient.id in self._ingredients:
                raise ValueError(f"Duplicate ingredient id: {ingredient.id}")
            self._ingredients[ingredient.id] = ingredient

    def __len__(self) -> int:
        return len(self._ingredients)

    def __iter__(self) -> Iterator[Ingredient]:
        return iter(list(self._ingredients.values()))

    def __contains__(self, ingredient_id: object) -> bool:
        return ingredient_id in self._ingredients

    def add(
        self, name: str, unit: str, cost_per_unit: float, amount_per_portion: float
    ) -> Ingredient:
        """Register a new ingredient.

        Returns:
            The created Ingredient with a freshly generated id

        Raises:
            ValueError: If the fields do not validate
        """
        fields = validate_ingredient_fields(name, unit, cost_per_unit, amount_per_portion)
        ingredient = Ingredient(self.id_factory(), *fields)
        self._ingredients[ingredient.id] = ingredient
        logger.info(f"Added ingredient {ingredient.name} ({ingredient.id})")
        return ingredient

    def update(
        self,
        ingredient_id: str,
        name: str,
        unit: str,
        cost_per_unit: float,
        amount_per_portion: float,
    ) -> Ingredient:
        """Replace the fields of an existing ingredient, keeping its id.

        Raises:
            KeyError: If no ingredient has the given id
            ValueError: If the fields do not validate
        """
        if ingredient_id not in self._ingredients:
            raise KeyError(f"Unknown ingredient id: {ingredient_id}")
        fields = validate_ingredient_fields(name, unit, cost_per_unit, amount_per_portion)
        ingredient = Ingredient(ingredient_id, *fields)
        self._ingredients[ingredient_id] = ingredient
        logger.info(f"Updated ingredient {ingredient.name} ({ingredient_id})")
        return ingredient

    def delete(self, ingredient_id: str) -> None:
        """Remove an ingredient. Usage records that reference it are kept.

        Raises:
            KeyError: If no ingredient has the given id
        """
        if ingredient_id not in self._ingredients:
            raise KeyError(f"Unknown ingredient id: {ingredient_id}")
        removed = self._ingredients.pop(ingredient_id)
        logger.info(f"Deleted ingredient {removed.name} ({ingredient_id})")

    def get(self, ingredient_id: str) -> Optional[Ingredient]:
        return self._ingredients.get(ingredient_id)

    def name_for(self, ingredient_id: str) -> str:
        ingredient = self._ingredients.get(ingredient_id)
        return ingredient.name if ingredient else UNKNOWN_INGREDIENT

    def unit_for(self, ingredient_id: str) -> str:
        ingredient = self._ingredients.get(ingredient_id)
        return ingredient.unit if ingredient else ""

    def snapshot(self) -> Tuple[Ingredient, ...]:
        return tuple(self._ingredients.values())
