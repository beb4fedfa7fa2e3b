"""Routes Camions / Truck API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.dashboard import trip_stats_for
from fleetledger.api.deps import get_current_user, get_owned_or_404
from fleetledger.database import get_db
from fleetledger.models.trip import Trip
from fleetledger.models.truck import Truck
from fleetledger.models.user import User
from fleetledger.schemas.dashboard import TripStats
from fleetledger.schemas.truck import TruckCreate, TruckRead, TruckUpdate
from fleetledger.utils.dates import utc_now

router = APIRouter()


async def _check_unique_number(db: AsyncSession, user: User, truck_number: str, exclude_id: int | None = None):
    """Immatriculation unique par utilisateur / Registration number unique per user."""
    query = select(Truck.id).where(Truck.user_id == user.id, Truck.truck_number == truck_number)
    if exclude_id is not None:
        query = query.where(Truck.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise HTTPException(status_code=409, detail=f"Truck number {truck_number} already exists")


@router.get("/", response_model=list[TruckRead])
async def list_trucks(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les camions, plus recents d'abord / List trucks, newest first."""
    result = await db.execute(select(Truck).where(Truck.user_id == user.id).order_by(Truck.id.desc()))
    return result.scalars().all()


@router.get("/{truck_id}", response_model=TruckRead)
async def get_truck(
    truck_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Voir un camion / Get truck detail."""
    return await get_owned_or_404(db, Truck, truck_id, user)


@router.get("/{truck_id}/stats", response_model=TripStats)
async def get_truck_stats(
    truck_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Stats des trajets du camion / Truck trip stats."""
    await get_owned_or_404(db, Truck, truck_id, user)
    return await trip_stats_for(db, user, Trip.truck_id == truck_id)


@router.post("/", response_model=TruckRead, status_code=201)
async def create_truck(
    data: TruckCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Creer un camion / Create truck."""
    await _check_unique_number(db, user, data.truck_number)
    now = utc_now()
    truck = Truck(**data.model_dump(), user_id=user.id, created_at=now, updated_at=now)
    db.add(truck)
    await db.flush()
    await db.refresh(truck)
    return truck


@router.put("/{truck_id}", response_model=TruckRead)
async def update_truck(
    truck_id: int,
    data: TruckUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Modifier un camion / Update truck."""
    truck = await get_owned_or_404(db, Truck, truck_id, user)
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if "truck_number" in updates:
        await _check_unique_number(db, user, updates["truck_number"], exclude_id=truck.id)

    for key, value in updates.items():
        setattr(truck, key, value)
    truck.updated_at = utc_now()

    await db.flush()
    await db.refresh(truck)
    return truck


@router.delete("/{truck_id}", status_code=204)
async def delete_truck(
    truck_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Supprimer un camion sans trajet / Delete a truck that has no trips."""
    truck = await get_owned_or_404(db, Truck, truck_id, user)
    trip_count = (await db.execute(select(func.count(Trip.id)).where(Trip.truck_id == truck.id))).scalar()
    if trip_count:
        raise HTTPException(status_code=409, detail=f"Truck has {trip_count} trip(s); delete them first")
    await db.delete(truck)
