"""Ingredient catalog, models and units."""

from .catalog import (
    UNKNOWN_INGREDIENT,
    IngredientCatalog,
    new_id,
    resolve_name,
    validate_ingredient_fields,
)
from .models import Ingredient, UsageRecord
from .units import UNITS, normalize_unit

__all__ = [
    "Ingredient",
    "UsageRecord",
    "IngredientCatalog",
    "UNKNOWN_INGREDIENT",
    "UNITS",
    "new_id",
    "normalize_unit",
    "resolve_name",
    "validate_ingredient_fields",
]
