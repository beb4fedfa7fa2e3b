"""Modele achat gasoil / Diesel purchase model."""

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class DieselPurchase(Base):
    """Plein de gasoil pendant un trajet / Diesel fill-up during a trip."""
    __tablename__ = "diesel_purchases"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    state: Mapped[str] = mapped_column(String(50), nullable=False)
    city: Mapped[str | None] = mapped_column(String(100))
    diesel_quantity: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)  # litres
    diesel_price_per_liter: Mapped[float] = mapped_column(Numeric(8, 3), nullable=False)
    purchase_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD

    # Relations
    trip: Mapped["Trip"] = relationship(back_populates="diesel_purchases")

    def __repr__(self) -> str:
        return f"<DieselPurchase {self.purchase_date} - {self.diesel_quantity}L - trip {self.trip_id}>"
