"""Modèle Historique / Audit log model.

Trace les connexions et les modifications de trajets.
Records sign-ins and trip changes.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fleetledger.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # auth, trip
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)  # 0 si inconnu / 0 when unknown
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # LOGIN, LOGOUT, CREATE, UPDATE...
    user_email: Mapped[str | None] = mapped_column(String(150), index=True)
    ip_address: Mapped[str | None] = mapped_column(String(45))
    details: Mapped[str | None] = mapped_column(Text)  # JSON
    created_at: Mapped[str] = mapped_column(String(32), nullable=False)  # ISO 8601

    def __repr__(self) -> str:
        return f"<AuditLog {self.action} {self.entity_type}:{self.entity_id} by {self.user_email}>"
