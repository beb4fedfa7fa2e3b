"""Schémas Camion / Truck schemas."""

from pydantic import BaseModel, ConfigDict, Field


class TruckBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    truck_number: str = Field(min_length=1, max_length=30)
    model: str = Field(default="", max_length=100)


class TruckCreate(TruckBase):
    pass


class TruckUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    truck_number: str | None = Field(default=None, min_length=1, max_length=30)
    model: str | None = Field(default=None, max_length=100)


class TruckRead(TruckBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: str
    updated_at: str


class TruckSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    truck_number: str
    model: str
