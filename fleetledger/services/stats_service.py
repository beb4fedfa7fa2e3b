"""
Service de statistiques de trajets / Trip statistics service.
"""

from fleetledger.services.cost_calculator import round2


class StatsService:
    """Indicateurs de trajets / Trip indicators."""

    @staticmethod
    def avg_cost(total_cost: float, total_trips: int) -> float:
        """Coût moyen par trajet / Average cost per trip."""
        if total_trips <= 0:
            return 0.0
        return round2(float(total_cost) / total_trips)

    @staticmethod
    def trip_stats(total_trips: int, total_cost: float | None, total_diesel: float | None) -> dict:
        """Statistiques agrégées / Aggregated stats (total_trips, total_cost, total_diesel, avg_cost)."""
        total_cost = float(total_cost or 0)
        return {
            "total_trips": total_trips,
            "total_cost": round2(total_cost),
            "total_diesel": round2(total_diesel or 0),
            "avg_cost": StatsService.avg_cost(total_cost, total_trips),
        }
