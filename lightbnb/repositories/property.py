"""
Property repository for filtered listing search and new listings.
"""

from typing import Any, Dict, List, Mapping, Optional, Union
import logging

from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.property import PROPERTY_COLUMNS, PropertyCreate, PropertySearchOptions
from lightbnb.utils.exceptions import UnknownColumnError
from lightbnb.utils.query_builder import build_insert_query, build_property_search_query, describe

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository):
    """
    Repository for property listings.
    Search filters are composed by the query builder; inserts are limited to known columns.
    """

    async def search_properties(
        self,
        options: Union[PropertySearchOptions, Mapping[str, Any], None] = None,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """
        Search properties with optional filters, cheapest first.

        Args:
            options: city, owner_id, minimum_price_per_night,
                maximum_price_per_night and/or minimum_rating
            limit: Maximum number of properties to return

        Returns:
            Property rows with an average_rating column

        Raises:
            ValidationError: If a filter value has the wrong type
        """
        if options is not None and not isinstance(options, PropertySearchOptions):
            options = PropertySearchOptions.model_validate(dict(options))

        query = build_property_search_query(options, limit)
        logger.debug(f"Property search query: {describe(query)}")

        return await self.fetch_all(query, "search properties")

    async def add_property(
        self, property_data: Union[PropertyCreate, Mapping[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        """
        Insert a new property and return the stored row.

        Args:
            property_data: PropertyCreate (set fields only) or a mapping of
                column name to value, inserted in iteration order

        Returns:
            The inserted property row

        Raises:
            UnknownColumnError: If a key is not a property column
            ValidationError: If a value cannot be coerced to its column type
            ConstraintViolationError: If e.g. the owner does not exist
            QueryFailedError: If the insert fails
        """
        if isinstance(property_data, PropertyCreate):
            property_data = property_data.model_dump(exclude_unset=True)
        else:
            unknown = [column for column in property_data if column not in PROPERTY_COLUMNS]
            if unknown or not property_data:
                raise UnknownColumnError("properties", unknown)

            # Coerce form values to column types, keeping the caller's column order
            validated = PropertyCreate.model_validate(dict(property_data)).model_dump(exclude_unset=True)
            property_data = {column: validated[column] for column in property_data}

        query = build_insert_query(
            "properties", property_data, allowed_columns=PROPERTY_COLUMNS, returning=True
        )
        created = await self.fetch_one(query, "add property")

        if created is not None:
            logger.info(f"Created property (ID: {created.get('id')})")
        return created
