"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que les relations soient résolues.
Import all models here so relationships resolve.
"""

from fleetledger.models.user import User
from fleetledger.models.audit import AuditLog
from fleetledger.models.truck import Truck
from fleetledger.models.driver import Driver
from fleetledger.models.trip import Trip
from fleetledger.models.diesel_purchase import DieselPurchase
from fleetledger.models.trip_cost_event import CATEGORY_LABELS, CostCategory, TripCostEvent

__all__ = [
    "User",
    "AuditLog",
    "Truck",
    "Driver",
    "Trip",
    "DieselPurchase",
    "TripCostEvent",
    "CostCategory",
    "CATEGORY_LABELS",
]
