"""Bakso Utils - Ingredient costing, usage history and market basket analysis for a bakso stall."""

__version__ = "0.1.0"

from . import analytics, ingredients, production, session

__all__ = ["analytics", "ingredients", "production", "session"]
