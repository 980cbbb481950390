"""
Reservation repository listing a guest's booked properties with their ratings.
"""

from typing import Any, Dict, List
import logging

from lightbnb.repositories.base import BaseRepository
from lightbnb.utils.query_builder import ParameterList, Query

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository):
    """Read-only access to reservations."""

    async def list_reservations_for_guest(self, guest_id: Any, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get the properties a guest has reserved, earliest stay first.

        Args:
            guest_id: Id of the guest user
            limit: Maximum number of reservations to return

        Returns:
            Property rows with reservation_id, start_date, end_date
            and average_rating added
        """
        params = ParameterList()
        guest = params.bind(guest_id)
        row_limit = params.bind(limit)

        query = Query(
            "SELECT properties.*,\n"
            "  reservations.id AS reservation_id,\n"
            "  reservations.start_date,\n"
            "  reservations.end_date,\n"
            "  avg(property_reviews.rating) AS average_rating\n"
            "FROM reservations\n"
            "JOIN properties ON reservations.property_id = properties.id\n"
            "JOIN property_reviews ON properties.id = property_reviews.property_id\n"
            f"WHERE reservations.guest_id = {guest}\n"
            "GROUP BY properties.id, reservations.id\n"
            "ORDER BY reservations.start_date\n"
            f"LIMIT {row_limit};",
            params.values,
        )
        return await self.fetch_all(query, f"list reservations for guest {guest_id}")
