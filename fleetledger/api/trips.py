"""Routes Trajets / Trip API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.deps import get_current_user, get_owned_or_404
from fleetledger.config import settings
from fleetledger.database import get_db
from fleetledger.models.diesel_purchase import DieselPurchase
from fleetledger.models.driver import Driver
from fleetledger.models.trip import Trip
from fleetledger.models.trip_cost_event import TripCostEvent
from fleetledger.models.truck import Truck
from fleetledger.models.user import User
from fleetledger.schemas.trip import TripCreate, TripDetail, TripRead, TripUpdate
from fleetledger.services.audit_service import log_action
from fleetledger.services.cost_calculator import CostCalculatorService
from fleetledger.services.report_service import ReportService
from fleetledger.services.trip_form import present_categories, to_cost_events, to_diesel_purchases
from fleetledger.utils.dates import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

# Champs d'en-tete modifiables / Editable header fields
HEADER_FIELDS = ("truck_id", "driver_id", "source", "destination", "start_date", "end_date")


async def _load_trip(db: AsyncSession, trip_id: int, user: User) -> Trip:
    """Charger un trajet et ses lignes, a jour / Load a trip and its line items, refreshed."""
    result = await db.execute(
        select(Trip)
        .where(Trip.id == trip_id, Trip.user_id == user.id)
        .execution_options(populate_existing=True)
    )
    trip = result.scalar_one_or_none()
    if trip is None:
        raise HTTPException(status_code=404, detail="Trip not found")
    return trip


async def _check_references(db: AsyncSession, user: User, truck_id: int | None, driver_id: int | None):
    """Le camion et le chauffeur doivent appartenir a l'utilisateur / Truck and driver must belong to the user."""
    if truck_id is not None:
        await get_owned_or_404(db, Truck, truck_id, user)
    if driver_id is not None:
        await get_owned_or_404(db, Driver, driver_id, user)


def _recompute(trip: Trip) -> None:
    """Recalculer les totaux depuis les lignes / Recompute totals from line items."""
    breakdown = CostCalculatorService.calculate_trip_costs(trip.diesel_purchases, trip.cost_events)
    CostCalculatorService.apply_to_trip(trip, breakdown)


@router.get("/", response_model=list[TripRead])
async def list_trips(
    truck_id: int | None = None,
    driver_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les trajets, plus recents d'abord / List trips, newest first."""
    query = select(Trip).where(Trip.user_id == user.id).order_by(Trip.id.desc())
    if truck_id is not None:
        query = query.where(Trip.truck_id == truck_id)
    if driver_id is not None:
        query = query.where(Trip.driver_id == driver_id)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{trip_id}", response_model=TripDetail)
async def get_trip(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Voir un trajet avec ses lignes / Get trip with its line items."""
    return await _load_trip(db, trip_id, user)


@router.get("/{trip_id}/report", response_class=PlainTextResponse)
async def get_trip_report(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Rapport texte du trajet / Plain-text trip report."""
    trip = await _load_trip(db, trip_id, user)
    return PlainTextResponse(ReportService.generate_trip_report(trip, settings.CURRENCY_SYMBOL))


@router.post("/", response_model=TripDetail, status_code=201)
async def create_trip(
    data: TripCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Creer un trajet et ses lignes en une transaction / Create a trip and its line items in one transaction."""
    await _check_references(db, user, data.truck_id, data.driver_id)

    now = utc_now()
    trip = Trip(
        truck_id=data.truck_id,
        driver_id=data.driver_id,
        source=data.source,
        destination=data.destination,
        trip_date=data.start_date,
        start_date=data.start_date,
        end_date=data.end_date,
        user_id=user.id,
        created_at=now,
        updated_at=now,
    )
    trip.diesel_purchases = [DieselPurchase(**row) for row in to_diesel_purchases(data)]
    trip.cost_events = [TripCostEvent(**row) for row in to_cost_events(data)]
    _recompute(trip)

    db.add(trip)
    await db.flush()
    log_action(db, "trip", trip.id, "CREATE", user.email, {"total_cost": trip.total_cost})
    logger.info("Trip %s created for user %s (total %.2f)", trip.id, user.id, trip.total_cost)
    return await _load_trip(db, trip.id, user)


@router.put("/{trip_id}", response_model=TripDetail)
async def update_trip(
    trip_id: int,
    data: TripUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Modifier un trajet / Update a trip.

    Les listes envoyees remplacent les lignes existantes ; les totaux sont toujours recalcules.
    Lists that are sent replace existing line items; totals are always recomputed.
    """
    trip = await _load_trip(db, trip_id, user)
    updates = data.model_dump(include=set(HEADER_FIELDS), exclude_unset=True)
    # truck_id et textes ne peuvent pas etre remis a None / truck_id and texts cannot be reset to None
    updates = {k: v for k, v in updates.items() if v is not None or k == "driver_id"}

    await _check_references(db, user, updates.get("truck_id"), updates.get("driver_id"))
    start = updates.get("start_date", trip.start_date)
    end = updates.get("end_date", trip.end_date)
    if end < start:
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")

    for key, value in updates.items():
        setattr(trip, key, value)
    trip.trip_date = trip.start_date

    if data.diesel_purchases is not None:
        trip.diesel_purchases = [DieselPurchase(**row) for row in to_diesel_purchases(data)]
    replaced = present_categories(data)
    if replaced:
        kept = [event for event in trip.cost_events if event.category not in replaced]
        trip.cost_events = kept + [TripCostEvent(**row) for row in to_cost_events(data, only_present=True)]

    previous_total = float(trip.total_cost or 0)
    _recompute(trip)
    trip.updated_at = utc_now()
    await db.flush()

    log_action(db, "trip", trip.id, "UPDATE", user.email, {
        "fields": sorted(updates),
        "total_cost": [previous_total, trip.total_cost],
    })
    return await _load_trip(db, trip.id, user)


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Supprimer un trajet et ses lignes / Delete a trip and its line items."""
    trip = await _load_trip(db, trip_id, user)
    log_action(db, "trip", trip.id, "DELETE", user.email, {
        "source": trip.source, "destination": trip.destination, "total_cost": float(trip.total_cost or 0),
    })
    await db.delete(trip)
