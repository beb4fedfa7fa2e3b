"""Modele Camion / Truck model."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class Truck(Base):
    """Camion du parc / Fleet truck."""
    __tablename__ = "trucks"
    __table_args__ = (UniqueConstraint("user_id", "truck_number", name="uq_trucks_user_number"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    truck_number: Mapped[str] = mapped_column(String(30), nullable=False)  # immatriculation / registration
    model: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    # Relations
    owner: Mapped["User"] = relationship(back_populates="trucks")
    trips: Mapped[list["Trip"]] = relationship(back_populates="truck")

    def __repr__(self) -> str:
        return f"<Truck {self.truck_number} - {self.name}>"
