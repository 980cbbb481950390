"""
Database client abstraction and its async SQLAlchemy implementation.
Repositories depend on DatabaseClient only; the engine and its pool are injected.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import text
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple
import asyncio
import logging
import re

from lightbnb.config import Settings, get_settings
from lightbnb.utils.exceptions import ConstraintViolationError, QueryFailedError

logger = logging.getLogger(__name__)

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


@dataclass
class QueryResult:
    """Rows returned by a statement, as column-name keyed dictionaries."""
    rows: List[Dict[str, Any]] = field(default_factory=list)


class DatabaseClient(Protocol):
    """Anything that can run one ``$N``-parameterized statement."""

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        ...


def to_named_binds(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite ``$N`` placeholders to ``:pN`` binds for ``sqlalchemy.text``.

    Raises:
        QueryFailedError: If a placeholder has no matching parameter
    """
    binds = {f"p{index}": value for index, value in enumerate(params, start=1)}

    def _replace(match):
        name = f"p{match.group(1)}"
        if name not in binds:
            raise QueryFailedError(
                f"Placeholder ${match.group(1)} has no parameter ({len(binds)} bound)"
            )
        return f":{name}"

    return _POSITIONAL_PARAM.sub(_replace, sql), binds


def create_database_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine with connection pooling from settings.

    SQLite URLs get the dialect's default pool, since pool sizing
    arguments are rejected there.
    """
    settings = settings or get_settings()

    engine_kwargs: Dict[str, Any] = {"echo": settings.debug}
    if not settings.is_sqlite:
        engine_kwargs.update(
            pool_size=settings.pool_size,  # Connections kept in the pool
            max_overflow=settings.max_overflow,  # Extra connections on demand
            pool_pre_ping=True,  # Validate connections before use
            pool_recycle=settings.pool_recycle,
            pool_timeout=settings.pool_timeout,
            connect_args={
                "server_settings": {
                    "application_name": settings.app_name,
                }
            },
        )

    return create_async_engine(settings.database_url, **engine_kwargs)


class SQLAlchemyDatabase:
    """
    DatabaseClient backed by an async SQLAlchemy engine.
    Each call borrows a pooled connection and commits on success.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SQLAlchemyDatabase":
        return cls(create_database_engine(settings))

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> QueryResult:
        """
        Execute one statement and collect its rows.

        Args:
            sql: Statement text with ``$N`` placeholders
            params: Values for the placeholders, in order

        Returns:
            QueryResult with the returned rows (empty for plain writes)

        Raises:
            ConstraintViolationError: On integrity errors
            QueryFailedError: On any other database failure, including an
                unreachable server
        """
        statement, binds = to_named_binds(sql, params)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(statement), binds)
                rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        except SQLAlchemyError as e:
            raise QueryFailedError(str(getattr(e, "orig", None) or e)) from e
        except (OSError, asyncio.TimeoutError) as e:
            # Driver connect failures are not wrapped by SQLAlchemy
            raise QueryFailedError(str(e) or e.__class__.__name__) from e

        logger.debug(f"Statement returned {len(rows)} rows")
        return QueryResult(rows=rows)

    async def check_connection(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                result.scalar()
            logger.info("Database connection successful")
            return True
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self.engine.dispose()
        logger.info("Database connections closed")
