"""
Service de calcul des coûts / Cost calculation service.
Calcule le coût total d'un trajet : gasoil + dépenses par catégorie.
Computes a trip's total cost: diesel plus categorized expenses.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fleetledger.models.trip_cost_event import CostCategory

CENT = Decimal("0.01")

# Echelle des colonnes Numeric des lignes / Scale of the line-item Numeric columns
QUANTITY_PLACES = 2
PRICE_PLACES = 3
AMOUNT_PLACES = 2


def round_to(value: float | Decimal | None, places: int) -> float:
    """Arrondi demi vers le haut a ``places`` decimales / Half-up rounding to ``places`` decimals."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def round2(value: float | Decimal | None) -> float:
    """Arrondi a 2 decimales, demi vers le haut / Round to 2 decimals, half up."""
    return round_to(value, 2)


def _field(item: Any, name: str) -> Any:
    """Lire un champ sur un dict ou un objet / Read a field from a mapping or an object."""
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def _dec(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal(0)


def diesel_total(purchases: Iterable[Any]) -> float:
    """Somme quantite x prix au litre / Sum of quantity x price per liter (unrounded)."""
    total = sum(
        (_dec(_field(p, "diesel_quantity")) * _dec(_field(p, "diesel_price_per_liter")) for p in purchases),
        Decimal(0),
    )
    return float(total)


def category_totals(events: Iterable[Any]) -> dict[CostCategory, float]:
    """Sommes brutes par categorie, toutes presentes / Raw per-category sums, every category present."""
    totals = {category: Decimal(0) for category in CostCategory}
    for event in events:
        totals[CostCategory(_field(event, "category"))] += _dec(_field(event, "amount"))
    return {category: float(amount) for category, amount in totals.items()}


@dataclass
class TripCostBreakdown:
    """Decomposition des couts d'un trajet / Trip cost breakdown."""
    diesel_cost: float = 0.0
    category_costs: dict[CostCategory, float] = field(
        default_factory=lambda: {category: 0.0 for category in CostCategory}
    )
    total_cost: float = 0.0

    def as_trip_columns(self) -> dict[str, float]:
        """Valeurs pour les colonnes de Trip / Values for the Trip columns."""
        columns = {category.trip_column: amount for category, amount in self.category_costs.items()}
        columns["total_cost"] = self.total_cost
        return columns


class CostCalculatorService:
    """Calcul des coûts de trajet / Trip cost calculation."""

    @staticmethod
    def calculate_trip_costs(purchases: Iterable[Any], events: Iterable[Any]) -> TripCostBreakdown:
        """
        Calculer le coût d'un trajet / Calculate trip cost.
        Chaque catégorie est arrondie séparément ; le total arrondit la somme brute.
        Each category is rounded on its own; the total rounds the raw sum.
        """
        diesel = diesel_total(purchases)
        raw = category_totals(events)
        total = _dec(diesel) + sum((_dec(amount) for amount in raw.values()), Decimal(0))
        return TripCostBreakdown(
            diesel_cost=round2(diesel),
            category_costs={category: round2(amount) for category, amount in raw.items()},
            total_cost=round2(total),
        )

    @staticmethod
    def apply_to_trip(trip: Any, breakdown: TripCostBreakdown) -> None:
        """Recopier les totaux sur un Trip / Copy totals onto a Trip."""
        for column, value in breakdown.as_trip_columns().items():
            setattr(trip, column, value)
