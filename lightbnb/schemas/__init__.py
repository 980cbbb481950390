"""
Pydantic schemas for data-access inputs.
"""

# User schemas
from .user import UserCreate

# Property schemas
from .property import (
    PropertyCreate,
    PropertySearchOptions,
    PROPERTY_COLUMNS
)

__all__ = [
    "UserCreate",
    "PropertyCreate",
    "PropertySearchOptions",
    "PROPERTY_COLUMNS"
]
