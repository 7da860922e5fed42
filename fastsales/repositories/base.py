# =========================================================
# QUERY COMPOSITION + IDENTIFIER PARSING
#
# Filters are collected as SQLAlchemy predicates and
# rendered with bound parameters, never string-built SQL
# =========================================================

import uuid

from sqlalchemy import func, or_

from fastsales.core.errors import MalformedReferenceError, RowMappingError


class QueryFilter:
    """Ordered list of optional predicates applied to a query in one go."""

    def __init__(self):
        self.predicates = []

    def add(self, predicate):
        self.predicates.append(predicate)
        return self

    def on_or_after(self, column, value):
        # Day-level comparison so a bare YYYY-MM-DD bound covers the whole day
        if value:
            self.add(func.date(column) >= func.date(value))
        return self

    def on_or_before(self, column, value):
        if value:
            self.add(func.date(column) <= func.date(value))
        return self

    def on_day(self, column, value):
        self.add(func.date(column) == func.date(value))
        return self

    def between_days(self, column, start, end):
        return self.on_or_after(column, start).on_or_before(column, end)

    def contains_text(self, text, *columns):
        # % and _ in the search text match literally
        if text:
            escaped = (
                text.replace("\\", "\\\\")
                .replace("%", "\\%")
                .replace("_", "\\_")
            )
            pattern = f"%{escaped}%"
            self.add(or_(*[column.ilike(pattern, escape="\\") for column in columns]))
        return self

    def apply(self, query):
        if not self.predicates:
            return query
        return query.filter(*self.predicates)


def paginate(query, page: int = 1, limit: int = 20):
    offset = (page - 1) * limit
    return query.limit(limit).offset(offset)


def to_uuid(value, field: str = "id") -> uuid.UUID:
    """Parse caller input into a UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise MalformedReferenceError(field, value)


def stored_uuid(value, field: str):
    if value is None:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise RowMappingError(f"Stored {field} is not a UUID: {value!r}")
