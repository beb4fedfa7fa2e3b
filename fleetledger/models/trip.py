"""Modele Trajet / Trip model.

Un trajet porte les totaux par categorie et le cout total calcule.
Les lignes de detail sont dans diesel_purchases et trip_cost_events.
A trip carries per-category totals and the computed total cost.
Line items live in diesel_purchases and trip_cost_events.
"""

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class Trip(Base):
    """Trajet d'un camion / Truck trip."""
    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    truck_id: Mapped[int] = mapped_column(ForeignKey("trucks.id"), nullable=False, index=True)
    driver_id: Mapped[int | None] = mapped_column(ForeignKey("drivers.id", ondelete="SET NULL"), index=True)
    source: Mapped[str] = mapped_column(String(150), nullable=False)
    destination: Mapped[str] = mapped_column(String(150), nullable=False)
    trip_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD (= start_date)
    start_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    end_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD

    # --- Totaux par categorie / Per-category totals ---
    fast_tag_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    mcd_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    green_tax_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    rto_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    dto_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    municipalities_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    border_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    repair_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    total_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    # Relations
    owner: Mapped["User"] = relationship(back_populates="trips")
    truck: Mapped["Truck"] = relationship(back_populates="trips", lazy="selectin")
    driver: Mapped["Driver | None"] = relationship(back_populates="trips", lazy="selectin")
    diesel_purchases: Mapped[list["DieselPurchase"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", lazy="selectin",
        order_by="DieselPurchase.id",
    )
    cost_events: Mapped[list["TripCostEvent"]] = relationship(
        back_populates="trip", cascade="all, delete-orphan", lazy="selectin",
        order_by="TripCostEvent.id",
    )

    def __repr__(self) -> str:
        return f"<Trip {self.id} {self.source} -> {self.destination} total={self.total_cost}>"
