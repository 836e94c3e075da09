"""Request payload models.

Each collection gets a `*Create` model (required fields enforced, defaults applied)
and a `*Update` model (every field optional; only the fields a client sends are
written). Strings are whitespace-trimmed, matching how the admin UI submits forms.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


CAR_STATUSES = ("available", "sold", "reserved")

FuelType = Literal["Petrol", "Diesel", "Electric", "Hybrid", "CNG"]
Transmission = Literal["Manual", "Automatic", "CVT"]
Category = Literal["Sedan", "SUV", "Hatchback", "Coupe", "Convertible", "Wagon", "Pickup"]
CarStatus = Literal["available", "sold", "reserved"]

# Any local@domain address, special-use domains (.local, .test) included.
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


class _Payload(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    def fields_set_values(self) -> dict:
        """Values the client actually sent (nulls dropped), ready for `$set`."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def clean_email(value: str) -> str:
    """Trim and lowercase an account email; raises ValueError unless it looks like local@domain."""
    e = (value or "").strip().lower()
    if not _EMAIL_RE.match(e):
        raise ValueError("Please enter a valid email")
    return e


# -----------------------------
# Auth
# -----------------------------


class LoginRequest(_Payload):
    # Not format-checked: an unknown address is just a failed login.
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdateRequest(_Payload):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _valid_email(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else clean_email(v)


class ChangePasswordRequest(BaseModel):
    currentPassword: str = Field(..., min_length=1)
    newPassword: str = Field(..., min_length=6)


# -----------------------------
# Banners
# -----------------------------


class BannerCreate(_Payload):
    title: str = Field(..., min_length=1, max_length=100)
    subtitle: str = Field("", max_length=200)
    description: str = Field("", max_length=500)
    image: str = Field(..., min_length=1)
    buttonText: str = Field("Learn More", max_length=50)
    buttonLink: str = "/cars"
    isActive: bool = True
    order: int = 0
    backgroundColor: str = "#f8f9fa"
    textColor: str = "#333333"


class BannerUpdate(_Payload):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    subtitle: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = Field(None, min_length=1)
    buttonText: Optional[str] = Field(None, max_length=50)
    buttonLink: Optional[str] = None
    isActive: Optional[bool] = None
    order: Optional[int] = None
    backgroundColor: Optional[str] = None
    textColor: Optional[str] = None


class StatusRequest(BaseModel):
    isActive: bool


class ReorderRequest(BaseModel):
    orderedIds: List[str]


# -----------------------------
# Brands
# -----------------------------


class _BrandFields(_Payload):
    @field_validator("foundedYear", check_fields=False)
    @classmethod
    def _founded_year_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        if v < 1800:
            raise ValueError("Founded year must be after 1800")
        if v > _current_year():
            raise ValueError("Founded year cannot be in the future")
        return v


class BrandCreate(_BrandFields):
    name: str = Field(..., min_length=1, max_length=50)
    logo: str = Field(..., min_length=1)
    description: str = Field("", max_length=500)
    website: str = ""
    country: str = ""
    foundedYear: Optional[int] = None
    isActive: bool = True
    order: int = 0


class BrandUpdate(_BrandFields):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    logo: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = None
    country: Optional[str] = None
    foundedYear: Optional[int] = None
    isActive: Optional[bool] = None
    order: Optional[int] = None


# -----------------------------
# Cars
# -----------------------------


class Specifications(_Payload):
    engine: str = Field(..., min_length=1)
    fuelType: FuelType
    transmission: Transmission
    seating: int = Field(..., ge=1, le=15)
    fuelEconomy: str = Field(..., min_length=1)
    topSpeed: str = ""
    acceleration: str = ""
    color: str = Field(..., min_length=1)
    mileage: float = Field(0, ge=0)


class _CarFields(_Payload):
    @field_validator("year", check_fields=False)
    @classmethod
    def _year_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        if v < 1900:
            raise ValueError("Year must be after 1900")
        if v > _current_year() + 1:
            raise ValueError("Year cannot be in the future")
        return v

    @field_validator("features", "images", check_fields=False)
    @classmethod
    def _drop_blank_entries(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [s.strip() for s in v if s and s.strip()]


class CarCreate(_CarFields):
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: int
    price: float = Field(..., ge=0)
    description: str = Field(..., min_length=1, max_length=1000)
    images: List[str] = Field(default_factory=list)
    specifications: Specifications
    features: List[str] = Field(default_factory=list)
    category: Category
    status: CarStatus = "available"
    isRental: bool = False
    rentalPrice: float = Field(0, ge=0)
    isFeatured: bool = False


class CarUpdate(_CarFields):
    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[int] = None
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    images: Optional[List[str]] = None
    specifications: Optional[Specifications] = None
    features: Optional[List[str]] = None
    category: Optional[Category] = None
    status: Optional[CarStatus] = None
    isRental: Optional[bool] = None
    rentalPrice: Optional[float] = Field(None, ge=0)
    isFeatured: Optional[bool] = None


class CarStatusRequest(BaseModel):
    status: str


# -----------------------------
# Rentals
# -----------------------------


def _naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)


class _RentalFields(_Payload):
    @field_validator("availableDate", mode="before", check_fields=False)
    @classmethod
    def _date_only_is_midnight(cls, v):
        # Admin forms send plain dates (YYYY-MM-DD).
        if isinstance(v, str) and len(v.strip()) == 10:
            return v.strip() + "T00:00:00"
        return v

    @field_validator("availableDate", check_fields=False)
    @classmethod
    def _store_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(v)


class RentalCreate(_RentalFields):
    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    engine: str = Field(..., min_length=1)
    fuel: str = Field(..., min_length=1)
    topSpeed: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    description: str = ""
    image: str = ""
    availableDate: datetime
    pricePerDay: float = Field(..., ge=0)


class RentalUpdate(_RentalFields):
    name: Optional[str] = Field(None, min_length=1)
    brand: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    engine: Optional[str] = Field(None, min_length=1)
    fuel: Optional[str] = Field(None, min_length=1)
    topSpeed: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    availableDate: Optional[datetime] = None
    pricePerDay: Optional[float] = Field(None, ge=0)
