"""
Pydantic schemas for property inserts and search options.
Field names double as the column whitelist for property inserts.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Tuple


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class PropertyCreate(BaseModel):
    """
    Schema for creating a new property.

    Every field is optional; only the fields that are explicitly set
    become columns of the INSERT.
    """

    model_config = ConfigDict(extra="forbid")

    owner_id: Optional[int] = Field(None, description="Owning user's id")
    title: Optional[str] = Field(None, examples=["Speed lamp"])
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    cost_per_night: Optional[int] = Field(None, description="Nightly price")
    parking_spaces: Optional[int] = None
    number_of_bathrooms: Optional[int] = None
    number_of_bedrooms: Optional[int] = None
    country: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = Field(None, examples=["Cancun"])
    province: Optional[str] = None
    post_code: Optional[str] = None
    active: Optional[bool] = None

    @field_validator(
        "owner_id", "cost_per_night", "parking_spaces",
        "number_of_bathrooms", "number_of_bedrooms", "active",
        mode="before",
    )
    @classmethod
    def normalize_blank(cls, v):
        """Form posts send empty strings for untouched numeric inputs."""
        return _blank_to_none(v)


PROPERTY_COLUMNS: Tuple[str, ...] = tuple(PropertyCreate.model_fields)


class PropertySearchOptions(BaseModel):
    """Optional filters for a property search; unset filters are skipped."""

    model_config = ConfigDict(extra="ignore")

    city: Optional[str] = Field(None, description="Substring of the city name")
    owner_id: Optional[int] = Field(None, description="Only this owner's listings")
    minimum_price_per_night: Optional[int] = Field(None, description="Exclusive lower bound")
    maximum_price_per_night: Optional[int] = Field(None, description="Exclusive upper bound")
    minimum_rating: Optional[float] = Field(None, description="Exclusive lower bound on the average rating")

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blank(cls, v):
        return _blank_to_none(v)
