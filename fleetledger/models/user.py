"""
Modèle Utilisateur / User model.
Chaque camion, chauffeur et trajet appartient a un utilisateur.
Every truck, driver and trip belongs to a user.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class User(Base):
    """Utilisateur de l'application / Application user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relations
    trucks: Mapped[list["Truck"]] = relationship(back_populates="owner", cascade="all, delete-orphan")
    drivers: Mapped[list["Driver"]] = relationship(back_populates="owner", cascade="all, delete-orphan")
    trips: Mapped[list["Trip"]] = relationship(back_populates="owner", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        """Nom affiche, sinon partie locale de l'email / Display name, else email local part."""
        return self.name or self.email.split("@")[0] or "User"

    def __repr__(self) -> str:
        return f"<User {self.email}>"
