"""Routes API / API routes."""

from fastapi import APIRouter

from fleetledger.api import (
    auth,
    trucks,
    drivers,
    trips,
    dashboard,
    exports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(trucks.router, prefix="/trucks", tags=["trucks"])
api_router.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
api_router.include_router(trips.router, prefix="/trips", tags=["trips"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
