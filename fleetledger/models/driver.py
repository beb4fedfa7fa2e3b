"""Modele Chauffeur / Driver model."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class Driver(Base):
    """Chauffeur / Driver."""
    __tablename__ = "drivers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer)
    phone: Mapped[str | None] = mapped_column(String(30))
    license_number: Mapped[str | None] = mapped_column(String(50))
    license_image: Mapped[str | None] = mapped_column(Text)  # data URI base64
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    updated_at: Mapped[str] = mapped_column(String(32), nullable=False)

    # Relations
    owner: Mapped["User"] = relationship(back_populates="drivers")
    trips: Mapped[list["Trip"]] = relationship(back_populates="driver")

    def __repr__(self) -> str:
        return f"<Driver {self.name}>"
