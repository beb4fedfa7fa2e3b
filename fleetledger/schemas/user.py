"""Schémas Utilisateur / User schemas."""

from datetime import datetime

from pydantic import BaseModel


class UserMe(BaseModel):
    id: int
    email: str
    name: str
    display_name: str
    is_active: bool
    created_at: datetime | None = None
    model_config = {"from_attributes": True}
