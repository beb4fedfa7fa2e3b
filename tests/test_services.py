"""Tests des services / Service tests."""

import io
from decimal import Decimal
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook
from pydantic import ValidationError
from sqlalchemy import select

from fleetledger.models.trip import Trip
from fleetledger.models.trip_cost_event import CostCategory
from fleetledger.models.user import User
from fleetledger.schemas.trip import TripCreate
from fleetledger.services.cost_calculator import CostCalculatorService, category_totals, diesel_total, round2, round_to
from fleetledger.services.export_service import ExportService
from fleetledger.services.report_service import ReportService, duration_days, format_currency, format_date
from fleetledger.services.stats_service import StatsService
from fleetledger.services.trip_form import (
    coerce_cost_items,
    is_blank_cost_item,
    present_categories,
    to_cost_events,
    to_diesel_purchases,
)
from fleetledger.utils.auth import (
    ACCESS,
    REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from fleetledger.utils.images import to_data_uri
from fleetledger.utils.seed import DEMO_EMAIL, seed_demo_data

PURCHASES = [
    {"diesel_quantity": 50, "diesel_price_per_liter": 95.50},
    {"diesel_quantity": 30, "diesel_price_per_liter": 94.20},
]

EVENTS = [
    {"category": CostCategory.FAST_TAG, "amount": 1200},
    {"category": CostCategory.MCD, "amount": 800},
    {"category": CostCategory.GREEN_TAX, "amount": 500},
    {"category": CostCategory.RTO, "amount": 300},
    {"category": CostCategory.DTO, "amount": 200},
    {"category": CostCategory.MUNICIPALITIES, "amount": 150},
    {"category": CostCategory.BORDER, "amount": 100},
]


def _form(**lists):
    return TripCreate(
        truck_id=1, source="Mumbai", destination="Delhi",
        start_date="2024-01-15", end_date="2024-01-17", **lists,
    )


# --- Calcul des couts / Cost calculation ---

def test_round2_half_up():
    assert round2(2.675) == 2.68
    assert round2(1.005) == 1.01
    assert round2(None) == 0.0


def test_round_to_places():
    assert round_to(95.1234, 3) == 95.123
    assert round_to(0.0005, 3) == 0.001
    assert round_to(10.004, 2) == 10.0
    assert round_to(None, 3) == 0.0


def test_diesel_total():
    assert diesel_total(PURCHASES) == 7601.0
    assert diesel_total([]) == 0.0


def test_category_totals_every_category():
    totals = category_totals(EVENTS + [{"category": "FAST_TAG", "amount": 300}])
    assert totals[CostCategory.FAST_TAG] == 1500.0
    assert totals[CostCategory.REPAIR] == 0.0
    assert set(totals) == set(CostCategory)


def test_trip_cost():
    breakdown = CostCalculatorService.calculate_trip_costs(PURCHASES, EVENTS)
    assert breakdown.diesel_cost == 7601.0
    assert breakdown.category_costs[CostCategory.MUNICIPALITIES] == 150.0
    assert breakdown.total_cost == 10851.0


def test_total_rounds_raw_sum():
    # 10.005 + 10.005 : chaque categorie arrondie a 10.01, total brut 20.01
    events = [
        {"category": CostCategory.FAST_TAG, "amount": 10.005},
        {"category": CostCategory.MCD, "amount": 10.005},
    ]
    breakdown = CostCalculatorService.calculate_trip_costs([], events)
    assert breakdown.category_costs[CostCategory.FAST_TAG] == 10.01
    assert breakdown.category_costs[CostCategory.MCD] == 10.01
    assert breakdown.total_cost == 20.01


def test_apply_to_trip():
    trip = SimpleNamespace()
    CostCalculatorService.apply_to_trip(trip, CostCalculatorService.calculate_trip_costs(PURCHASES, EVENTS))
    assert trip.fast_tag_cost == 1200.0
    assert trip.repair_cost == 0.0
    assert trip.total_cost == 10851.0


# --- Formulaire / Form shaping ---

def test_coerce_bare_amounts():
    assert coerce_cost_items([120, {"amount": 50, "state": "MH"}]) == [{"amount": 120}, {"amount": 50, "state": "MH"}]
    assert coerce_cost_items(None) is None


def test_blank_rows_dropped():
    form = _form(fast_tag_costs=[1200, 0, {"amount": 0, "state": "  "}])
    rows = to_cost_events(form)
    assert len(rows) == 1
    assert rows[0]["category"] == CostCategory.FAST_TAG
    assert rows[0]["amount"] == 1200.0
    assert rows[0]["event_time"]


def test_zero_amount_with_notes_is_kept():
    form = _form(border_costs=[{"amount": 0, "notes": "waived"}])
    assert not is_blank_cost_item(form.border_costs[0])
    assert len(to_cost_events(form)) == 1


def test_repair_requires_part():
    with pytest.raises(ValidationError):
        _form(repair_items=[{"amount": 500}])
    form = _form(repair_items=[{"amount": 500, "part_or_defect": "Front tyre"}])
    assert to_cost_events(form)[0]["part_or_defect"] == "Front tyre"


def test_rows_stored_at_column_scale():
    form = _form(
        diesel_purchases=[{"state": "Maharashtra", "diesel_quantity": 10.004,
                           "diesel_price_per_liter": 95.1234, "purchase_date": "2024-01-15"}],
        fast_tag_costs=[0.004, 10.005],
    )
    purchase = to_diesel_purchases(form)[0]
    assert purchase["diesel_quantity"] == 10.0
    assert purchase["diesel_price_per_liter"] == 95.123
    # 0.004 arrondi a zero : ligne vide / 0.004 rounds to zero: blank row
    rows = to_cost_events(form)
    assert [row["amount"] for row in rows] == [10.01]
    breakdown = CostCalculatorService.calculate_trip_costs([purchase], rows)
    assert breakdown.total_cost == 961.24


def test_present_categories():
    form = _form(rto_costs=[], dto_costs=[200])
    assert present_categories(form) == {CostCategory.RTO, CostCategory.DTO}


def test_trip_dates_and_places():
    with pytest.raises(ValidationError):
        TripCreate(truck_id=1, source="A", destination="B", start_date="2024-01-17", end_date="2024-01-15")
    with pytest.raises(ValidationError):
        TripCreate(truck_id=1, source="  ", destination="B", start_date="2024-01-15", end_date="2024-01-15")
    with pytest.raises(ValidationError):
        TripCreate(truck_id=1, source="A", destination="B", start_date="15/01/2024", end_date="2024-01-15")
    with pytest.raises(ValidationError):
        TripCreate(truck_id=1, source="A", destination="B", start_date="2024-02-30", end_date="2024-03-01")
    with pytest.raises(ValidationError):
        _form(diesel_purchases=[{"state": "MH", "diesel_quantity": 1, "diesel_price_per_liter": 90,
                                 "purchase_date": "2024-13-45"}])


# --- Rapport / Report ---

def test_format_currency():
    assert format_currency(1234567.5) == "₹12,34,567.50"
    assert format_currency(999) == "₹999.00"
    assert format_currency(-1500, "Rs ") == "-Rs 1,500.00"
    assert format_currency(None) == "₹0.00"


def test_format_date():
    assert format_date("2024-01-05") == "05 Jan 2024"
    assert format_date(None) == "N/A"
    assert format_date("not a date") == "Invalid Date"


def test_duration_days():
    assert duration_days("2024-01-15", "2024-01-17") == 2
    assert duration_days("2024-01-15T00:00:00", "2024-01-15T12:00:00") == 1
    assert duration_days("2024-01-15", "2024-01-15") == 0
    assert duration_days(None, "2024-01-15") == 0


def _report_trip(**overrides):
    values = dict(
        source="Mumbai", destination="Delhi",
        start_date="2024-01-15", end_date="2024-01-17",
        truck=SimpleNamespace(truck_number="MH-12-AB-1234", model="Bolero Pickup"),
        driver=SimpleNamespace(name="Rajesh Kumar"),
        diesel_purchases=[
            SimpleNamespace(state="Maharashtra", city="Mumbai", diesel_quantity=50, diesel_price_per_liter=95.5),
            SimpleNamespace(state="Gujarat", city=None, diesel_quantity=30, diesel_price_per_liter=94.2),
        ],
        fast_tag_cost=1200, mcd_cost=800, green_tax_cost=500, rto_cost=300,
        dto_cost=200, municipalities_cost=150, border_cost=100, repair_cost=0,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_trip_report():
    report = ReportService.generate_trip_report(_report_trip())
    assert report.startswith("TRIP COST REPORT")
    assert "Trip: Mumbai → Delhi" in report
    assert "Truck: MH-12-AB-1234 (Bolero Pickup)" in report
    assert "Start Date: 15 Jan 2024" in report
    assert "Duration: 2 days" in report
    assert "Driver: Rajesh Kumar" in report
    assert "• Maharashtra, Mumbai: 50 liters × ₹95.50 = ₹4,775.00" in report
    assert "• Gujarat: 30 liters × ₹94.20 = ₹2,826.00" in report
    assert "Total Diesel Cost: ₹7,601.00" in report
    assert "Fast Tag Cost: ₹1,200.00" in report
    assert "Municipalities Cost: ₹150.00" in report
    # Categorie a zero : absente du detail, presente dans la synthese
    assert "Repair Cost:" not in report
    assert "Repairs: ₹0.00" in report
    assert "TOTAL TRIP COST: ₹10,851.00" in report


def test_trip_report_without_diesel_or_driver():
    report = ReportService.generate_trip_report(_report_trip(diesel_purchases=[], driver=None), "Rs ")
    assert "No diesel purchases recorded" in report
    assert "Driver:" not in report
    assert "TOTAL TRIP COST: Rs 3,250.00" in report


# --- Stats ---

def test_avg_cost():
    assert StatsService.avg_cost(100, 0) == 0.0
    assert StatsService.avg_cost(1000, 3) == 333.33


def test_trip_stats():
    stats = StatsService.trip_stats(2, Decimal("1500.50"), None)
    assert stats == {"total_trips": 2, "total_cost": 1500.5, "total_diesel": 0.0, "avg_cost": 750.25}


# --- Images ---

def test_to_data_uri():
    assert to_data_uri("") is None
    assert to_data_uri(None) is None
    assert to_data_uri("data:image/png;base64,AAAA") == "data:image/png;base64,AAAA"
    assert to_data_uri("aGVsbG8=") == "data:image/jpeg;base64,aGVsbG8="
    with pytest.raises(ValueError):
        to_data_uri("not base64 !!")


# --- Export ---

def test_export_csv():
    rows = [{"id": 1, "source": "Mumbai", "total_cost": 10851.0}]
    content = ExportService.to_csv(rows, ["id", "source", "total_cost"])
    assert content.startswith(b"\xef\xbb\xbf")
    lines = content.decode("utf-8-sig").splitlines()
    assert lines[0] == "id;source;total_cost"
    assert lines[1] == "1;Mumbai;10851.00"


def test_export_xlsx():
    content = ExportService.to_xlsx([{"id": 1, "source": "Mumbai"}], ["id", "source"], sheet_name="Trips")
    ws = load_workbook(io.BytesIO(content))["Trips"]
    assert ws.cell(row=1, column=2).value == "source"
    assert ws.cell(row=1, column=2).font.bold
    assert ws.cell(row=2, column=2).value == "Mumbai"


def test_trip_to_row():
    trip = _report_trip(id=7, trip_date="2024-01-15", total_cost=Decimal("10851.00"))
    row = ExportService.trip_to_row(trip)
    assert row["truck_number"] == "MH-12-AB-1234"
    assert row["driver_name"] == "Rajesh Kumar"
    assert row["diesel_liters"] == 80
    assert row["diesel_cost"] == 7601.0
    assert row["total_cost"] == 10851.0


# --- Donnees de demo / Demo data ---

@pytest.mark.asyncio
async def test_seed_demo_data(session_factory):
    async with session_factory() as session:
        assert await seed_demo_data(session, "2024-01-01T00:00:00+00:00") is True
    async with session_factory() as session:
        assert await seed_demo_data(session, "2024-01-01T00:00:00+00:00") is False
        emails = (await session.execute(select(User.email))).scalars().all()
        assert emails == [DEMO_EMAIL]
        trips = (await session.execute(select(Trip).order_by(Trip.id))).scalars().all()
        assert len(trips) == 3
        assert float(trips[0].total_cost) == 10851.0
        assert len(trips[0].cost_events) == 7


# --- Authentification / Authentication ---

def test_password_hash():
    hashed = hash_password("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_long_password_is_accepted():
    long_password = "x" * 100
    assert verify_password(long_password, hash_password(long_password))


def test_token_types():
    access = create_access_token(7)
    refresh = create_refresh_token(7)
    assert decode_token(access, ACCESS) == 7
    assert decode_token(refresh, REFRESH) == 7
    assert decode_token(access, REFRESH) is None
    assert decode_token(refresh, ACCESS) is None
    assert decode_token("garbage") is None
