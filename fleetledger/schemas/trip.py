"""Schémas Trajet / Trip schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fleetledger.models.trip_cost_event import CostCategory
from fleetledger.schemas.driver import DriverSummary
from fleetledger.schemas.truck import TruckSummary
from fleetledger.services.trip_form import COST_LIST_FIELDS, coerce_cost_items, to_cost_events

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"  # YYYY-MM-DD


def _calendar_date(value: str | None) -> str | None:
    """Refuser les dates impossibles (2024-02-30) / Reject impossible dates (2024-02-30)."""
    if value is not None:
        try:
            date.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"{value} is not a valid calendar date") from exc
    return value


# --- Lignes de detail / Line items ---

class DieselPurchaseIn(BaseModel):
    state: str = Field(min_length=1, max_length=50)
    city: str | None = Field(default=None, max_length=100)
    diesel_quantity: float = Field(gt=0)
    diesel_price_per_liter: float = Field(gt=0)
    purchase_date: str = Field(pattern=DATE_PATTERN)

    _purchase_date_valid = field_validator("purchase_date")(_calendar_date)

    @field_validator("state")
    @classmethod
    def _state_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("State is required")
        return value


class CostItemIn(BaseModel):
    state: str | None = Field(default=None, max_length=50)
    checkpoint: str | None = Field(default=None, max_length=100)
    part_or_defect: str | None = Field(default=None, max_length=150)
    amount: float = Field(default=0, ge=0)
    event_time: str | None = None
    notes: str | None = None


class DieselPurchaseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    state: str
    city: str | None = None
    diesel_quantity: float
    diesel_price_per_liter: float
    purchase_date: str


class CostEventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    category: CostCategory
    state: str | None = None
    checkpoint: str | None = None
    part_or_defect: str | None = None
    amount: float
    event_time: str
    notes: str | None = None


# --- Formulaire / Form ---

class TripCostLists(BaseModel):
    """Listes par categorie ; montants nus acceptes / Per-category lists; bare amounts accepted."""
    fast_tag_costs: list[CostItemIn] | None = None
    mcd_costs: list[CostItemIn] | None = None
    green_tax_costs: list[CostItemIn] | None = None
    rto_costs: list[CostItemIn] | None = None
    dto_costs: list[CostItemIn] | None = None
    municipalities_costs: list[CostItemIn] | None = None
    border_costs: list[CostItemIn] | None = None
    repair_items: list[CostItemIn] | None = None

    @field_validator(*COST_LIST_FIELDS, mode="before")
    @classmethod
    def _coerce_amounts(cls, value):
        return coerce_cost_items(value)

    @model_validator(mode="after")
    def _validate_rows(self):
        # Leve ValueError pour une reparation sans piece / Raises ValueError for a repair without part
        to_cost_events(self, only_present=True)
        return self


def _not_blank(value: str | None, message: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(message)
    return value.strip() if value is not None else None


class TripCreate(TripCostLists):
    truck_id: int
    driver_id: int | None = None
    source: str = Field(max_length=150)
    destination: str = Field(max_length=150)
    start_date: str = Field(pattern=DATE_PATTERN)
    end_date: str = Field(pattern=DATE_PATTERN)
    diesel_purchases: list[DieselPurchaseIn] = []

    _dates_valid = field_validator("start_date", "end_date")(_calendar_date)

    @field_validator("source")
    @classmethod
    def _source_required(cls, value: str) -> str:
        return _not_blank(value, "Source is required")

    @field_validator("destination")
    @classmethod
    def _destination_required(cls, value: str) -> str:
        return _not_blank(value, "Destination is required")

    @model_validator(mode="after")
    def _check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TripUpdate(TripCostLists):
    """Mise a jour partielle ; une liste envoyee remplace la categorie /
    Partial update; a list that is sent replaces that category."""
    truck_id: int | None = None
    driver_id: int | None = None
    source: str | None = Field(default=None, max_length=150)
    destination: str | None = Field(default=None, max_length=150)
    start_date: str | None = Field(default=None, pattern=DATE_PATTERN)
    end_date: str | None = Field(default=None, pattern=DATE_PATTERN)
    diesel_purchases: list[DieselPurchaseIn] | None = None

    _dates_valid = field_validator("start_date", "end_date")(_calendar_date)

    @field_validator("source")
    @classmethod
    def _source_required(cls, value: str | None) -> str | None:
        return _not_blank(value, "Source is required")

    @field_validator("destination")
    @classmethod
    def _destination_required(cls, value: str | None) -> str | None:
        return _not_blank(value, "Destination is required")


# --- Lecture / Read ---

class TripRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    truck_id: int
    driver_id: int | None = None
    source: str
    destination: str
    trip_date: str
    start_date: str
    end_date: str
    fast_tag_cost: float
    mcd_cost: float
    green_tax_cost: float
    rto_cost: float
    dto_cost: float
    municipalities_cost: float
    border_cost: float
    repair_cost: float
    total_cost: float
    created_at: str
    updated_at: str
    truck: TruckSummary | None = None
    driver: DriverSummary | None = None


class TripDetail(TripRead):
    diesel_purchases: list[DieselPurchaseRead] = []
    cost_events: list[CostEventRead] = []
