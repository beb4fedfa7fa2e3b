"""Schémas tableau de bord / Dashboard schemas."""

from pydantic import BaseModel


class TripStats(BaseModel):
    total_trips: int = 0
    total_cost: float = 0.0
    total_diesel: float = 0.0  # litres
    avg_cost: float = 0.0


class TruckStatsItem(TripStats):
    truck_id: int
    truck_number: str
    truck_name: str
