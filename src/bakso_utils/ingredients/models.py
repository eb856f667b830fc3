import dataclasses
import datetime
from typing import Dict


@dataclasses.dataclass(frozen=True)
class Ingredient:
    id: str
    name: str
    unit: str
    cost_per_unit: float
    amount_per_portion: float

    @property
    def cost_per_portion(self) -> float:
        return self.cost_per_unit * self.amount_per_portion


@dataclasses.dataclass(frozen=True)
class UsageRecord:
    id: str
    date: datetime.date
    portions: int
    ingredients: Dict[str, float]  # ingredient id -> amount used
    total_cost: float

    @property
    def cost_per_portion(self) -> float:
        return self.total_cost / self.portions if self.portions > 0 else 0.0

    @property
    def month(self) -> str:
        """Month key in YYYY-MM form."""
        return self.date.strftime("%Y-%m")
