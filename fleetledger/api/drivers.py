"""Routes Chauffeurs / Driver API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.deps import get_current_user, get_owned_or_404
from fleetledger.api.dashboard import trip_stats_for
from fleetledger.database import get_db
from fleetledger.models.driver import Driver
from fleetledger.models.trip import Trip
from fleetledger.models.user import User
from fleetledger.schemas.dashboard import TripStats
from fleetledger.schemas.driver import DriverCreate, DriverRead, DriverUpdate
from fleetledger.utils.dates import utc_now

router = APIRouter()


@router.get("/", response_model=list[DriverRead])
async def list_drivers(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Lister les chauffeurs, plus recents d'abord / List drivers, newest first."""
    result = await db.execute(select(Driver).where(Driver.user_id == user.id).order_by(Driver.id.desc()))
    return result.scalars().all()


@router.get("/{driver_id}", response_model=DriverRead)
async def get_driver(
    driver_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return await get_owned_or_404(db, Driver, driver_id, user)


@router.get("/{driver_id}/stats", response_model=TripStats)
async def get_driver_stats(
    driver_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Stats des trajets du chauffeur / Driver trip stats."""
    await get_owned_or_404(db, Driver, driver_id, user)
    return await trip_stats_for(db, user, Trip.driver_id == driver_id)


@router.post("/", response_model=DriverRead, status_code=201)
async def create_driver(
    data: DriverCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    now = utc_now()
    driver = Driver(**data.model_dump(), user_id=user.id, created_at=now, updated_at=now)
    db.add(driver)
    await db.flush()
    await db.refresh(driver)
    return driver


@router.put("/{driver_id}", response_model=DriverRead)
async def update_driver(
    driver_id: int,
    data: DriverUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    driver = await get_owned_or_404(db, Driver, driver_id, user)
    updates = data.model_dump(exclude_unset=True)
    if updates.get("name") is None:
        updates.pop("name", None)
    for key, value in updates.items():
        setattr(driver, key, value)
    driver.updated_at = utc_now()
    await db.flush()
    await db.refresh(driver)
    return driver


@router.delete("/{driver_id}", status_code=204)
async def delete_driver(
    driver_id: int,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Supprimer un chauffeur ; ses trajets sont conserves sans chauffeur /
    Delete a driver; their trips are kept without a driver."""
    driver = await get_owned_or_404(db, Driver, driver_id, user)
    await db.execute(
        update(Trip)
        .where(Trip.driver_id == driver.id)
        .values(driver_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.delete(driver)
