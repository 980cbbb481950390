"""
Parameterized SQL builders for property search and column-mapped inserts.
Placeholders are PostgreSQL-style ``$N``; the Nth bound value always matches ``$N``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from lightbnb.utils.exceptions import UnknownColumnError


@dataclass(frozen=True)
class Query:
    """SQL text together with its ordered positional parameters."""
    text: str
    params: List[Any] = field(default_factory=list)


class ParameterList:
    """Collects bound values and hands out the matching ``$N`` placeholder."""

    def __init__(self):
        self.values: List[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"

    def __len__(self) -> int:
        return len(self.values)


def _identity(value: Any) -> Any:
    return value


def _contains(value: Any) -> str:
    return f"%{value}%"


@dataclass(frozen=True)
class FilterClause:
    """
    An optional search constraint.

    ``template`` holds one ``{}`` slot that receives the placeholder of the
    bound (and transformed) option value.
    """
    option: str
    template: str
    transform: Callable[[Any], Any] = _identity

    def render(self, options: Mapping[str, Any], params: ParameterList) -> Optional[str]:
        value = options.get(self.option)
        if not is_present(value):
            return None
        return self.template.format(params.bind(self.transform(value)))


# Evaluated in this order so the WHERE/AND choice is reproducible.
PROPERTY_FILTERS: Tuple[FilterClause, ...] = (
    FilterClause("city", "city LIKE {}", _contains),
    FilterClause("owner_id", "owner_id = {}"),
    FilterClause("minimum_price_per_night", "cost_per_night > {}"),
    FilterClause("maximum_price_per_night", "cost_per_night < {}"),
)

# Applied after GROUP BY because they depend on the aggregate.
PROPERTY_AGGREGATE_FILTERS: Tuple[FilterClause, ...] = (
    FilterClause("minimum_rating", "avg(property_reviews.rating) > {}"),
)


def is_present(value: Any) -> bool:
    """An option counts as given unless it is None or an empty string."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def apply_filters(
    keyword: str,
    filters: Iterable[FilterClause],
    options: Mapping[str, Any],
    params: ParameterList,
) -> Optional[str]:
    """
    Render every present filter and join them into one clause.

    The first rendered predicate gets ``keyword`` (WHERE/HAVING), every later
    one gets AND. Returns None when no filter is present.
    """
    clause = None
    for search_filter in filters:
        predicate = search_filter.render(options, params)
        if predicate is None:
            continue
        if clause is None:
            clause = f"{keyword} {predicate}"
        else:
            clause += f"\n  AND {predicate}"
    return clause


def _options_to_mapping(options: Any) -> Mapping[str, Any]:
    if options is None:
        return {}
    if hasattr(options, "model_dump"):
        return options.model_dump()
    return options


def build_property_search_query(options: Any = None, limit: int = 10) -> Query:
    """
    Build the filtered property search with an average rating per property.

    Args:
        options: PropertySearchOptions or any mapping of option names
        limit: Maximum number of rows, always bound as the last parameter

    Returns:
        Query ready for DatabaseClient.execute
    """
    options = _options_to_mapping(options)
    params = ParameterList()

    lines = [
        "SELECT properties.*, avg(property_reviews.rating) AS average_rating",
        "FROM properties",
        "JOIN property_reviews ON properties.id = property_reviews.property_id",
    ]

    where = apply_filters("WHERE", PROPERTY_FILTERS, options, params)
    if where:
        lines.append(where)

    lines.append("GROUP BY properties.id")

    having = apply_filters("HAVING", PROPERTY_AGGREGATE_FILTERS, options, params)
    if having:
        lines.append(having)

    lines.append("ORDER BY cost_per_night")
    lines.append(f"LIMIT {params.bind(limit)}")

    return Query("\n".join(lines) + ";", params.values)


def build_insert_query(
    table: str,
    values: Mapping[str, Any],
    allowed_columns: Optional[Sequence[str]] = None,
    returning: bool = False,
) -> Query:
    """
    Build an INSERT listing exactly the given columns in iteration order.

    Args:
        table: Target table name (developer controlled)
        values: Column name to value mapping
        allowed_columns: Whitelist of column names; None allows any
        returning: Append ``RETURNING *`` to get the inserted row back

    Raises:
        UnknownColumnError: If ``values`` is empty or names a column
            outside ``allowed_columns``
    """
    if not values:
        raise UnknownColumnError(table, [])

    if allowed_columns is not None:
        unknown = [column for column in values if column not in allowed_columns]
        if unknown:
            raise UnknownColumnError(table, unknown)

    params = ParameterList()
    columns = ", ".join(values)
    placeholders = ", ".join(params.bind(value) for value in values.values())

    text = f"INSERT INTO {table} ({columns})\nVALUES ({placeholders})"
    if returning:
        text += "\nRETURNING *"
    return Query(text + ";", params.values)


def describe(query: Query) -> Dict[str, Any]:
    """Loggable form of a query."""
    return {"sql": query.text, "params": list(query.params)}
