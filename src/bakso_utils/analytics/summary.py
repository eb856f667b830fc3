"""Descriptive analytics over the ingredient catalog and usage history."""

import dataclasses
from typing import Sequence

import pandas as pd

from bakso_utils.ingredients.models import Ingredient, UsageRecord


@dataclasses.dataclass(frozen=True)
class Overview:
    ingredient_count: int
    record_count: int
    total_portions: int
    total_cost: float
    avg_cost_per_portion: float


def overview(ingredients: Sequence[Ingredient], history: Sequence[UsageRecord]) -> Overview:
    """Headline totals across all recorded production."""
    total_portions = sum(record.portions for record in history)
    total_cost = sum(record.total_cost for record in history)
    return Overview(
        ingredient_count=len(ingredients),
        record_count=len(history),
        total_portions=total_portions,
        total_cost=total_cost,
        avg_cost_per_portion=total_cost / total_portions if total_portions > 0 else 0.0,
    )


def cost_analysis(ingredients: Sequence[Ingredient]) -> pd.DataFrame:
    """Cost each ingredient contributes to a single portion.

    Returns:
        DataFrame with columns: name, cost_per_portion, cost_per_unit, sorted
        by cost_per_portion descending
    """
    df = pd.DataFrame(
        [
            {
                "name": ingredient.name,
                "cost_per_portion": ingredient.cost_per_portion,
                "cost_per_unit": ingredient.cost_per_unit,
            }
            for ingredient in ingredients
        ],
        columns=["name", "cost_per_portion", "cost_per_unit"],
    )
    return df.sort_values("cost_per_portion", ascending=False, kind="stable").reset_index(
        drop=True
    )


def usage_frequency(
    ingredients: Sequence[Ingredient], history: Sequence[UsageRecord]
) -> pd.DataFrame:
    """Number of usage records each catalog ingredient appears in.

    Ingredients that were never used are included with a frequency of 0.
    """
    counts = {}
    for record in history:
        for ingredient_id in record.ingredients:
            counts[ingredient_id] = counts.get(ingredient_id, 0) + 1

    df = pd.DataFrame(
        [
            {"name": ingredient.name, "frequency": counts.get(ingredient.id, 0)}
            for ingredient in ingredients
        ],
        columns=["name", "frequency"],
    )
    df["frequency"] = df["frequency"].astype(int)
    return df.sort_values("frequency", ascending=False, kind="stable").reset_index(drop=True)


def total_usage_by_ingredient(
    ingredients: Sequence[Ingredient], history: Sequence[UsageRecord]
) -> pd.DataFrame:
    """Total amount of each ingredient consumed across the history.

    Returns:
        DataFrame with columns: name, total_used, unit. Only ingredients with
        some usage are listed, largest first.
    """
    totals = {}
    for record in history:
        for ingredient_id, amount in record.ingredients.items():
            totals[ingredient_id] = totals.get(ingredient_id, 0.0) + amount

    df = pd.DataFrame(
        [
            {
                "name": ingredient.name,
                "total_used": float(totals.get(ingredient.id, 0.0)),
                "unit": ingredient.unit,
            }
            for ingredient in ingredients
        ],
        columns=["name", "total_used", "unit"],
    )
    df = df[df["total_used"] > 0]
    return df.sort_values("total_used", ascending=False, kind="stable").reset_index(drop=True)


def monthly_trend(history: Sequence[UsageRecord]) -> pd.DataFrame:
    """Portions and cost per calendar month.

    Returns:
        DataFrame with columns: month (YYYY-MM), portions, cost,
        avg_cost_per_portion, in ascending month order
    """
    columns = ["month", "portions", "cost", "avg_cost_per_portion"]
    if not history:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame(
        {
            "month": [record.month for record in history],
            "portions": [record.portions for record in history],
            "cost": [float(record.total_cost) for record in history],
        }
    )
    monthly = df.groupby("month", sort=True)[["portions", "cost"]].sum().reset_index()
    monthly["avg_cost_per_portion"] = (
        monthly["cost"].div(monthly["portions"].where(monthly["portions"] > 0)).fillna(0.0)
    )
    return monthly[columns]
