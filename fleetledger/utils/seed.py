"""
Seed des données de démo / Demo data seeding.
Crée un compte de démo avec camions, chauffeurs et trajets pour l'usage hors-ligne.
Creates a demo account with trucks, drivers and trips for offline use.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetledger.models.diesel_purchase import DieselPurchase
from fleetledger.models.driver import Driver
from fleetledger.models.trip import Trip
from fleetledger.models.trip_cost_event import CostCategory, TripCostEvent
from fleetledger.models.truck import Truck
from fleetledger.models.user import User
from fleetledger.services.cost_calculator import CostCalculatorService
from fleetledger.utils.auth import hash_password

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@fleetledger.app"
DEMO_PASSWORD = "demo"

DEMO_TRUCKS = [
    {"name": "Mahindra Bolero", "truck_number": "MH-12-AB-1234", "model": "Bolero Pickup"},
    {"name": "Tata Ace", "truck_number": "DL-01-CD-5678", "model": "Ace Gold"},
    {"name": "Ashok Leyland Dost", "truck_number": "KA-05-EF-9012", "model": "Dost Plus"},
]

DEMO_DRIVERS = [
    {"name": "Rajesh Kumar", "age": 35, "phone": "+91-9876543210", "license_number": "DL-1234567890"},
    {"name": "Suresh Singh", "age": 42, "phone": "+91-9876543211", "license_number": "DL-1234567891"},
    {"name": "Amit Sharma", "age": 28, "phone": "+91-9876543212", "license_number": "DL-1234567892"},
]

# (truck idx, driver idx, source, destination, start, end, diesel, events)
DEMO_TRIPS = [
    (
        0, 0, "Mumbai", "Delhi", "2024-01-15", "2024-01-17",
        [("Maharashtra", "Mumbai", 50, 95.50, "2024-01-15"), ("Gujarat", "Ahmedabad", 30, 94.20, "2024-01-15")],
        [
            (CostCategory.FAST_TAG, None, None, 1200, "Highway toll"),
            (CostCategory.MCD, None, None, 800, "Municipal charges"),
            (CostCategory.GREEN_TAX, None, None, 500, "Environmental tax"),
            (CostCategory.RTO, "Maharashtra", "Mumbai RTO", 300, "Vehicle registration check"),
            (CostCategory.DTO, "Gujarat", "Ahmedabad DTO", 200, "Transport permit"),
            (CostCategory.MUNICIPALITIES, "Rajasthan", "Jaipur Municipal", 150, "City entry fee"),
            (CostCategory.BORDER, "Rajasthan", "Shahjahanpur Border", 100, "State border crossing"),
        ],
    ),
    (
        1, 1, "Delhi", "Jaipur", "2024-01-20", "2024-01-21",
        [("Delhi", "New Delhi", 40, 96.80, "2024-01-20")],
        [
            (CostCategory.FAST_TAG, None, None, 600, "Expressway toll"),
            (CostCategory.GREEN_TAX, None, None, 250, "Delhi green tax"),
        ],
    ),
    (
        2, 2, "Bangalore", "Chennai", "2024-02-01", "2024-02-02",
        [],
        [
            (CostCategory.RTO, "Karnataka", "Bangalore RTO", 200, "Vehicle check"),
            (CostCategory.DTO, "Tamil Nadu", "Chennai DTO", 150, "Transport permit"),
            (CostCategory.MUNICIPALITIES, "Tamil Nadu", "Chennai Municipal", 100, "City entry fee"),
            (CostCategory.BORDER, "Tamil Nadu", "Krishnagiri Border", 60, "State border crossing"),
        ],
    ),
]


async def seed_demo_data(session: AsyncSession, now: str) -> bool:
    """Créer le compte de démo si aucun utilisateur n'existe / Create the demo account if no users exist.

    Retourne True si des données ont été créées / Returns True when data was created.
    """
    count = (await session.execute(select(func.count(User.id)))).scalar()
    if count:
        logger.info("%s existing user(s), demo seed skipped", count)
        return False

    user = User(email=DEMO_EMAIL, name="Demo User", hashed_password=hash_password(DEMO_PASSWORD), is_active=True)
    session.add(user)
    await session.flush()

    trucks = [Truck(**data, user_id=user.id, created_at=now, updated_at=now) for data in DEMO_TRUCKS]
    drivers = [Driver(**data, user_id=user.id, created_at=now, updated_at=now) for data in DEMO_DRIVERS]
    session.add_all(trucks + drivers)
    await session.flush()

    for truck_idx, driver_idx, source, destination, start, end, diesel, events in DEMO_TRIPS:
        trip = Trip(
            truck_id=trucks[truck_idx].id,
            driver_id=drivers[driver_idx].id,
            source=source,
            destination=destination,
            trip_date=start,
            start_date=start,
            end_date=end,
            user_id=user.id,
            created_at=now,
            updated_at=now,
        )
        trip.diesel_purchases = [
            DieselPurchase(state=state, city=city, diesel_quantity=qty, diesel_price_per_liter=price, purchase_date=day)
            for state, city, qty, price, day in diesel
        ]
        trip.cost_events = [
            TripCostEvent(category=category, state=state, checkpoint=checkpoint, amount=amount,
                          event_time=f"{start}T10:00:00+00:00", notes=notes)
            for category, state, checkpoint, amount, notes in events
        ]
        CostCalculatorService.apply_to_trip(
            trip, CostCalculatorService.calculate_trip_costs(trip.diesel_purchases, trip.cost_events)
        )
        session.add(trip)

    await session.commit()
    logger.info("Demo data created: %s / %s", DEMO_EMAIL, DEMO_PASSWORD)
    return True
