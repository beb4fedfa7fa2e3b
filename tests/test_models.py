"""Tests des modèles / Model tests."""

from fleetledger.models.trip import Trip
from fleetledger.models.trip_cost_event import CATEGORY_LABELS, CostCategory, TripCostEvent
from fleetledger.models.truck import Truck
from fleetledger.models.user import User


def test_truck_repr():
    t = Truck(id=1, name="Tata Ace", truck_number="DL-01-CD-5678")
    assert "DL-01-CD-5678" in repr(t)


def test_enums():
    assert CostCategory.FAST_TAG.value == "FAST_TAG"
    assert CostCategory.GREEN_TAX.value == "GREEN_TAX"
    assert CostCategory.REPAIR.value == "REPAIR"
    assert len(CostCategory) == 8


def test_trip_columns_exist():
    assert CostCategory.FAST_TAG.trip_column == "fast_tag_cost"
    assert CostCategory.MUNICIPALITIES.trip_column == "municipalities_cost"
    for category in CostCategory:
        assert category.trip_column in Trip.__table__.columns


def test_labels():
    assert set(CATEGORY_LABELS) == set(CostCategory)
    assert CostCategory.GREEN_TAX.label == "Green Tax"


def test_cost_event_repr():
    event = TripCostEvent(category=CostCategory.BORDER, amount=100, trip_id=3)
    assert "BORDER" in repr(event)


def test_display_name_falls_back_to_email():
    assert User(email="ravi@example.com", name="").display_name == "ravi"
    assert User(email="ravi@example.com", name="Ravi").display_name == "Ravi"
