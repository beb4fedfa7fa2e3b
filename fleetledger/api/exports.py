"""Routes Export CSV/Excel / Export API routes."""

import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.api.deps import get_current_user
from fleetledger.database import get_db
from fleetledger.models.trip import Trip
from fleetledger.models.user import User
from fleetledger.services.export_service import TRIP_EXPORT_FIELDS, ExportService

router = APIRouter()


@router.get("/trips")
async def export_trips(
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    truck_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Exporter les trajets en CSV ou XLSX / Export trips to CSV or XLSX."""
    query = select(Trip).where(Trip.user_id == user.id).order_by(Trip.start_date, Trip.id)
    if truck_id is not None:
        query = query.where(Trip.truck_id == truck_id)
    trips = (await db.execute(query)).scalars().all()
    rows = [ExportService.trip_to_row(trip) for trip in trips]

    if format == "csv":
        content = ExportService.to_csv(rows, TRIP_EXPORT_FIELDS)
        media_type = "text/csv; charset=utf-8"
        filename = "trips.csv"
    else:
        content = ExportService.to_xlsx(rows, TRIP_EXPORT_FIELDS, sheet_name="Trips")
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename = "trips.xlsx"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
