"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation. They check shape and types;
business rules (positive quantities, non-empty reasons, order state) are
enforced by the use cases so every caller gets the same errors.
"""

import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Largest value an SQLite INTEGER column holds; bounds ids and counts
SQLITE_MAX_INTEGER = 2**63 - 1


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


# --- Catalog ---


class CategoryRequest(BaseModel):
    """Create or update a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    description: str | None = Field(default=None, description="Category description")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("description")
    @classmethod
    def description_blank_to_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class SupplierCreateRequest(BaseModel):
    """Register a supplier. Empty optional fields are stored as null."""

    name: str = Field(..., min_length=1, max_length=200, description="Supplier name")
    email: str | None = Field(default=None, description="Contact email")
    phone: str | None = Field(default=None, description="Contact phone")
    address: str | None = Field(default=None, description="Postal address")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("phone", "address")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str | None) -> str | None:
        v = _blank_to_none(v)
        if v is not None and not EMAIL_PATTERN.match(v):
            raise ValueError("invalid email address")
        return v


class ProductCreateRequest(BaseModel):
    """Create a product, optionally with opening stock."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    sku: str = Field(..., min_length=1, max_length=100, description="Unique stock keeping unit")
    description: str | None = Field(default=None, description="Product description")
    category_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER, description="Category ID")
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Unit price")
    current_stock: int = Field(default=0, ge=0, le=SQLITE_MAX_INTEGER, description="Opening stock")
    min_stock_level: int = Field(
        default=0, ge=0, le=SQLITE_MAX_INTEGER, description="Alert threshold"
    )

    @field_validator("name", "sku")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("description")
    @classmethod
    def description_blank_to_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


class ProductUpdateRequest(BaseModel):
    """Update descriptive product fields. Stock changes go through the ledger."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=200)
    sku: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    category_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER)
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    min_stock_level: int = Field(default=0, ge=0, le=SQLITE_MAX_INTEGER)

    @field_validator("name", "sku")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("description")
    @classmethod
    def description_blank_to_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)


# --- Stock ledger ---


class StockMovementRequest(BaseModel):
    """Record a stock movement."""

    product_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER, description="Product ID")
    direction: str = Field(..., description="IN or OUT", examples=["IN", "OUT"])
    quantity: int = Field(..., le=SQLITE_MAX_INTEGER, description="Positive number of units")
    reason: str = Field(..., description="Why the stock changed", examples=["sale", "stocktake"])


# --- Purchasing ---


class PurchaseOrderItemRequest(BaseModel):
    """One line of a new purchase order."""

    product_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER)
    quantity: int = Field(..., le=SQLITE_MAX_INTEGER, description="Units ordered, at least 1")
    unit_price: float = Field(
        ..., allow_inf_nan=False, description="Price per unit, not negative"
    )


class PurchaseOrderCreateRequest(BaseModel):
    """Place a purchase order with a supplier."""

    supplier_id: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER)
    expected_date: date = Field(..., description="Expected delivery date")
    order_date: datetime | None = Field(default=None, description="Defaults to now")
    items: list[PurchaseOrderItemRequest] = Field(default_factory=list)


class PurchaseOrderStatusRequest(BaseModel):
    """Generic status transition for a purchase order."""

    status: str = Field(..., examples=["RECEIVED", "CANCELLED"])


# --- Users ---


def _normalize_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("invalid email address")
    return value


class UserProfileRequest(BaseModel):
    """Change a user's display name and email."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=320)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _normalize_email(v)


class UserCreateRequest(UserProfileRequest):
    """Register a user under the actor id the identity provider issues."""

    id: str = Field(..., min_length=1, max_length=200, description="Actor id")
    role: Literal["USER", "ADMIN"] = "USER"

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id must not be blank")
        return v
