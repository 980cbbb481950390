"""
Base repository with the shared statement execution path.
Runs built queries through the injected DatabaseClient and logs failures before re-raising.
"""

from typing import Any, Dict, List, Optional
import logging

from lightbnb.database import DatabaseClient
from lightbnb.utils.exceptions import RepositoryError
from lightbnb.utils.query_builder import Query

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Base repository class providing statement execution helpers.
    Holds no state besides the database client it was given.
    """

    def __init__(self, db: DatabaseClient):
        """
        Initialize repository with a database client.

        Args:
            db: Client executing ``$N``-parameterized statements
        """
        self.db = db

    async def fetch_all(self, query: Query, action: str) -> List[Dict[str, Any]]:
        """
        Execute a query and return every row.

        Args:
            query: Statement and its parameters
            action: Short description used in log messages

        Returns:
            List of rows, empty when nothing matched

        Raises:
            RepositoryError: If the statement fails
        """
        try:
            result = await self.db.execute(query.text, query.params)
        except RepositoryError as e:
            logger.error(f"Failed to {action}: {e.message}")
            raise

        logger.debug(f"{action}: {len(result.rows)} rows")
        return result.rows

    async def fetch_one(self, query: Query, action: str) -> Optional[Dict[str, Any]]:
        """
        Execute a query and return its first row.

        Returns:
            First row if any, None otherwise
        """
        rows = await self.fetch_all(query, action)
        return rows[0] if rows else None
