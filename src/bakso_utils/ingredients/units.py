"""Units of measure for bakso ingredients."""

from typing import Optional

# Units offered when registering an ingredient
UNITS = ["kg", "gram", "liter", "ml", "buah", "porsi", "sdm", "sdt"]

UNIT_MAP = {
    # Weight
    "kg": ["kg", "kgs", "kilo", "kilogram", "kilograms"],
    "gram": ["gram", "grams", "gr", "g", "gm"],
    # Volume
    "liter": ["liter", "liters", "litre", "litres", "l", "ltr"],
    "ml": ["ml", "milliliter", "milliliters", "millilitre", "mililiter"],
    # Count
    "buah": ["buah", "pcs", "piece", "pieces", "biji", "butir"],
    "porsi": ["porsi", "portion", "portions", "serving"],
    # Spoons
    "sdm": ["sdm", "tablespoon", "tablespoons", "tbsp", "sendok makan"],
    "sdt": ["sdt", "teaspoon", "teaspoons", "tsp", "sendok teh"],
}

# Create reverse mapping for lookup
UNIT_LOOKUP = {v: k for k, vs in UNIT_MAP.items() for v in vs}


def normalize_unit(unit: Optional[str]) -> Optional[str]:
    """Normalize a unit name to one of the supported units.

    Args:
        unit: Raw unit string

    Returns:
        The canonical unit name, or None if the unit is not recognized

    Examples:
        >>> normalize_unit("Kilogram")
        'kg'
        >>> normalize_unit("tbsp.")
        'sdm'
        >>> normalize_unit("ounce") is None
        True
    """
    if unit is None:
        return None
    key = " ".join(unit.lower().strip().rstrip(".").split())
    return UNIT_LOOKUP.get(key)
