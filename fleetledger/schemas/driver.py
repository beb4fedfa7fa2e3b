"""Schémas Chauffeur / Driver schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fleetledger.utils.images import to_data_uri


class DriverBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    age: int | None = Field(default=None, ge=16, le=100)
    phone: str | None = Field(default=None, max_length=30)
    license_number: str | None = Field(default=None, max_length=50)
    license_image: str | None = None

    @field_validator("license_image")
    @classmethod
    def _license_image_data_uri(cls, value: str | None) -> str | None:
        return to_data_uri(value)


class DriverCreate(DriverBase):
    pass


class DriverUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    age: int | None = Field(default=None, ge=16, le=100)
    phone: str | None = Field(default=None, max_length=30)
    license_number: str | None = Field(default=None, max_length=50)
    license_image: str | None = None

    @field_validator("license_image")
    @classmethod
    def _license_image_data_uri(cls, value: str | None) -> str | None:
        return to_data_uri(value)


class DriverRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    age: int | None = None
    phone: str | None = None
    license_number: str | None = None
    license_image: str | None = None
    created_at: str
    updated_at: str


class DriverSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
