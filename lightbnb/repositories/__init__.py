"""
Repository layer for data access operations.
Each repository takes a DatabaseClient and issues one statement per call.
"""

from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository"
]
