import datetime
import itertools

import pytest

from bakso_utils.ingredients import Ingredient, IngredientCatalog, UsageRecord
from bakso_utils.session import load_sample_session


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def ingredients():
    return [
        Ingredient("beef", "Daging Sapi", "kg", 130000.0, 0.05),
        Ingredient("flour", "Tepung Tapioka", "kg", 12000.0, 0.02),
        Ingredient("broth", "Kaldu Sapi", "liter", 8000.0, 0.25),
    ]


@pytest.fixture
def catalog(ingredients, id_factory):
    return IngredientCatalog(ingredients, id_factory=id_factory)


@pytest.fixture
def records():
    return [
        UsageRecord(
            "r1",
            datetime.date(2024, 1, 5),
            10,
            {"beef": 0.5, "flour": 0.2},
            67400.0,
        ),
        UsageRecord(
            "r2",
            datetime.date(2024, 1, 20),
            20,
            {"beef": 1.0, "broth": 5.0},
            170000.0,
        ),
        UsageRecord(
            "r3",
            datetime.date(2024, 2, 2),
            30,
            {"beef": 1.5, "flour": 0.6, "broth": 7.5},
            262200.0,
        ),
    ]


@pytest.fixture
def sample_session():
    return load_sample_session()
