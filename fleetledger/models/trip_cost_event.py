"""Modele depenses par categorie / Categorized trip expense model.

Une ligne par depense ; une categorie peut etre detaillee en plusieurs lignes.
One row per expense; a category may be broken down into several rows.
"""

import enum

from sqlalchemy import Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetledger.database import Base


class CostCategory(str, enum.Enum):
    """Categorie de depense / Expense category."""
    FAST_TAG = "FAST_TAG"
    MCD = "MCD"
    GREEN_TAX = "GREEN_TAX"
    RTO = "RTO"
    DTO = "DTO"
    MUNICIPALITIES = "MUNICIPALITIES"
    BORDER = "BORDER"
    REPAIR = "REPAIR"

    @property
    def trip_column(self) -> str:
        """Colonne de total sur Trip / Total column on Trip."""
        return f"{self.value.lower()}_cost"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: dict[CostCategory, str] = {
    CostCategory.FAST_TAG: "Fast Tag",
    CostCategory.MCD: "MCD",
    CostCategory.GREEN_TAX: "Green Tax",
    CostCategory.RTO: "RTO",
    CostCategory.DTO: "DTO",
    CostCategory.MUNICIPALITIES: "Municipalities",
    CostCategory.BORDER: "Border",
    CostCategory.REPAIR: "Repair",
}


class TripCostEvent(Base):
    """Depense d'un trajet / Trip expense line item."""
    __tablename__ = "trip_cost_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    category: Mapped[CostCategory] = mapped_column(Enum(CostCategory), nullable=False)
    state: Mapped[str | None] = mapped_column(String(50))
    checkpoint: Mapped[str | None] = mapped_column(String(100))
    part_or_defect: Mapped[str | None] = mapped_column(String(150))  # REPAIR uniquement / REPAIR only
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    event_time: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601
    notes: Mapped[str | None] = mapped_column(Text)

    # Relations
    trip: Mapped["Trip"] = relationship(back_populates="cost_events")

    def __repr__(self) -> str:
        return f"<TripCostEvent {self.category.value} {self.amount} - trip {self.trip_id}>"
