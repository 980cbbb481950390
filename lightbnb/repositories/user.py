"""
User repository for account lookups and sign-up inserts.
"""

from typing import Any, Dict, Mapping, Optional, Union
import logging

from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.user import UserCreate
from lightbnb.utils.query_builder import Query, build_insert_query

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository):
    """Repository for users, keyed by id or lower-cased email."""

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Get user by email address.

        Args:
            email: Email address to search for, in any case

        Returns:
            User row if found, None otherwise
        """
        normalized_email = email.lower().strip()
        query = Query(
            "SELECT *\nFROM users\nWHERE email = $1;",
            [normalized_email],
        )
        user = await self.fetch_one(query, f"get user by email {normalized_email}")

        if user is None:
            logger.debug(f"User with email {normalized_email} not found")
        return user

    async def get_user_by_id(self, user_id: Any) -> Optional[Dict[str, Any]]:
        """
        Get user by id.

        Returns:
            User row if found, None otherwise
        """
        query = Query("SELECT *\nFROM users\nWHERE id = $1;", [user_id])
        user = await self.fetch_one(query, f"get user by id {user_id}")

        if user is None:
            logger.debug(f"User with id {user_id} not found")
        return user

    async def add_user(self, user: Union[UserCreate, Mapping[str, Any]]) -> None:
        """
        Insert a new user. The email is stored lower-cased.

        Args:
            user: UserCreate or a mapping with name, email and password

        Raises:
            ConstraintViolationError: If the email is already registered
            QueryFailedError: If the insert fails
        """
        if not isinstance(user, UserCreate):
            user = UserCreate.model_validate(dict(user))

        query = build_insert_query(
            "users",
            {"name": user.name, "email": user.email, "password": user.password},
        )
        await self.fetch_all(query, f"add user {user.email}")
        logger.info(f"User added: {user.email}")
