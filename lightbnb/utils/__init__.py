"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    RepositoryError,
    QueryFailedError,
    ConstraintViolationError,
    UnknownColumnError,
)
from .query_builder import (
    Query,
    ParameterList,
    FilterClause,
    PROPERTY_FILTERS,
    PROPERTY_AGGREGATE_FILTERS,
    build_property_search_query,
    build_insert_query,
)

__all__ = [
    "RepositoryError",
    "QueryFailedError",
    "ConstraintViolationError",
    "UnknownColumnError",
    "Query",
    "ParameterList",
    "FilterClause",
    "PROPERTY_FILTERS",
    "PROPERTY_AGGREGATE_FILTERS",
    "build_property_search_query",
    "build_insert_query",
]
