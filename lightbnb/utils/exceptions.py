"""
Custom exception classes for the LightBnB data-access layer.
Distinguishes failed queries from constraint violations and rejected input.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base data-access exception class."""

    error_code = "REPOSITORY_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code


class QueryFailedError(RepositoryError):
    """The database rejected or failed to execute a statement."""

    error_code = "QUERY_FAILED"


class ConstraintViolationError(RepositoryError):
    """A unique, foreign key or not-null constraint was violated."""

    error_code = "CONSTRAINT_VIOLATION"


class UnknownColumnError(RepositoryError, ValueError):
    """Insert data named a column outside the allowed schema."""

    error_code = "UNKNOWN_COLUMN"

    def __init__(self, table: str, columns):
        self.table = table
        self.columns = list(columns)
        if self.columns:
            message = f"Unknown column(s) for {table}: {', '.join(self.columns)}"
        else:
            message = f"No columns given for insert into {table}"
        super().__init__(message)
