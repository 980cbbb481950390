"""
Pydantic schema for new users.
"""

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Schema for creating a new user. The password arrives already hashed."""

    name: str = Field(..., description="User's display name", examples=["Devin Sanders"])
    email: str = Field(..., description="User's email address", examples=["devin@example.com"])
    password: str = Field(..., description="Password hash to store")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()
