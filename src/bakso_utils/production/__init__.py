"""Portion calculation and usage history."""

from .calculator import (
    IngredientRequirement,
    PortionCalculation,
    calculate_requirements,
    validate_portions,
)
from .history import UsageHistory, format_record_lines

__all__ = [
    "IngredientRequirement",
    "PortionCalculation",
    "calculate_requirements",
    "validate_portions",
    "UsageHistory",
    "format_record_lines",
]
