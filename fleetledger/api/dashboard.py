"""Routes tableau de bord / Dashboard routes."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.deps import get_current_user
from fleetledger.database import get_db
from fleetledger.models.diesel_purchase import DieselPurchase
from fleetledger.models.trip import Trip
from fleetledger.models.truck import Truck
from fleetledger.models.user import User
from fleetledger.schemas.dashboard import TripStats, TruckStatsItem
from fleetledger.services.stats_service import StatsService

router = APIRouter()


async def trip_stats_for(db: AsyncSession, user: User, *criteria) -> dict:
    """Stats des trajets de l'utilisateur, filtrees / User trip stats, filtered by criteria on Trip."""
    trips_q = select(func.count(Trip.id), func.coalesce(func.sum(Trip.total_cost), 0)).where(
        Trip.user_id == user.id, *criteria
    )
    total_trips, total_cost = (await db.execute(trips_q)).one()

    diesel_q = (
        select(func.coalesce(func.sum(DieselPurchase.diesel_quantity), 0))
        .join(Trip, DieselPurchase.trip_id == Trip.id)
        .where(Trip.user_id == user.id, *criteria)
    )
    total_diesel = (await db.execute(diesel_q)).scalar()
    return StatsService.trip_stats(total_trips, total_cost, total_diesel)


@router.get("/stats", response_model=TripStats)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Totaux de l'utilisateur / User totals."""
    return await trip_stats_for(db, user)


@router.get("/trucks", response_model=list[TruckStatsItem])
async def dashboard_trucks(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Stats par camion / Per-truck stats."""
    trip_rows = await db.execute(
        select(Trip.truck_id, func.count(Trip.id), func.coalesce(func.sum(Trip.total_cost), 0))
        .where(Trip.user_id == user.id)
        .group_by(Trip.truck_id)
    )
    per_truck = {truck_id: (count, cost) for truck_id, count, cost in trip_rows.all()}

    diesel_rows = await db.execute(
        select(Trip.truck_id, func.coalesce(func.sum(DieselPurchase.diesel_quantity), 0))
        .join(Trip, DieselPurchase.trip_id == Trip.id)
        .where(Trip.user_id == user.id)
        .group_by(Trip.truck_id)
    )
    diesel = dict(diesel_rows.all())

    trucks = (await db.execute(select(Truck).where(Truck.user_id == user.id).order_by(Truck.id.desc()))).scalars()
    items = []
    for truck in trucks:
        count, cost = per_truck.get(truck.id, (0, 0))
        items.append(TruckStatsItem(
            truck_id=truck.id,
            truck_number=truck.truck_number,
            truck_name=truck.name,
            **StatsService.trip_stats(count, cost, diesel.get(truck.id, 0)),
        ))
    return items
