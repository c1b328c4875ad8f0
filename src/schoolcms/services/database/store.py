"""
SqlStore - record persistence for a single table.

One store class that works with any ORM table. Records go in and come out
as plain dicts keyed by column name, so the lifecycle layer never touches
ORM objects and can be tested against an in-memory fake with the same
methods.

Usage:
    store = SqlStore(db, BlogRow)
    blog_id = await store.insert({"title": "Sports day", ...})
    blog = await store.find_by_id(blog_id, projection=("id", "images"))
    await store.delete_by_id(blog_id)

Every SQLAlchemy failure is logged and re-raised as PersistenceError.
"""

from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from loguru import logger
from sqlalchemy import delete, func, insert, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...errors import PersistenceError
from .service import DatabaseService
from .tables import Base


class SqlStore:
    """Store for one ORM table, returning records as dicts."""

    def __init__(self, db: DatabaseService, table: type[Base]):
        self.db = db
        self.table = table
        self.name = table.__tablename__
        self.columns = table.__table__.c

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self.db.session() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error during {operation} on {self.name}: {e}")
            raise PersistenceError(f"Database error during {operation} on {self.name}") from e

    def _select(self, projection: Sequence[str] | None):
        if not projection:
            return select(*self.columns)
        return select(*[self.columns[name] for name in projection])

    def _where(
        self,
        filters: dict[str, Any] | None,
        search: str | None,
        search_fields: Sequence[str],
    ) -> list:
        clauses = [self.columns[name] == value for name, value in (filters or {}).items()]
        if search and search_fields:
            # % and _ in the search text match literally
            clauses.append(or_(*[self.columns[name].icontains(search, autoescape=True) for name in search_fields]))
        return clauses

    def _order(self, order_by: str | None, descending: bool) -> list:
        if not order_by:
            return []
        column = self.columns[order_by]
        # id breaks ties between rows created within the same timestamp
        if descending:
            return [column.desc(), self.columns.id.desc()]
        return [column.asc(), self.columns.id.asc()]

    async def insert(self, fields: dict[str, Any]) -> int:
        """Insert one record and return its new id."""
        async with self._session("insert") as session:
            row = self.table(**fields)
            session.add(row)
            await session.commit()
            logger.debug(f"Inserted {self.name} id={row.id}")
            return row.id

    async def insert_many(self, rows: list[dict[str, Any]]) -> int:
        """Insert several records in one transaction; returns the count."""
        if not rows:
            return 0
        async with self._session("insert_many") as session:
            await session.execute(insert(self.table), rows)
            await session.commit()
        logger.debug(f"Inserted {len(rows)} {self.name} rows")
        return len(rows)

    async def find_by_id(
        self, record_id: int, projection: Sequence[str] | None = None
    ) -> dict[str, Any] | None:
        """Record by id, restricted to ``projection`` columns, or None."""
        async with self._session("find_by_id") as session:
            result = await session.execute(
                self._select(projection).where(self.columns.id == record_id)
            )
            row = result.mappings().first()
        return dict(row) if row else None

    async def find_many(
        self,
        projection: Sequence[str] | None = None,
        *,
        filters: dict[str, Any] | None = None,
        search: str | None = None,
        search_fields: Sequence[str] = (),
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Records matching filters.

        Args:
            projection: Columns to return (all when None)
            filters: Column -> value equality filters (AND-ed together)
            search: Case-insensitive substring matched against search_fields (OR-ed)
            order_by: Column to sort on; store default order when None
            descending: Sort direction
            limit: Optional page size
            offset: Rows to skip
        """
        statement = self._select(projection)
        for clause in self._where(filters, search, search_fields):
            statement = statement.where(clause)
        statement = statement.order_by(*self._order(order_by, descending))
        if limit is not None:
            statement = statement.limit(limit).offset(offset)

        async with self._session("find_many") as session:
            result = await session.execute(statement)
            return [dict(row) for row in result.mappings().all()]

    async def count(
        self,
        *,
        filters: dict[str, Any] | None = None,
        search: str | None = None,
        search_fields: Sequence[str] = (),
    ) -> int:
        statement = select(func.count()).select_from(self.table)
        for clause in self._where(filters, search, search_fields):
            statement = statement.where(clause)
        async with self._session("count") as session:
            result = await session.execute(statement)
            return int(result.scalar_one())

    async def count_by(self, column: str, values: Sequence[Any]) -> dict[Any, int]:
        """Row counts grouped by ``column`` for the given values."""
        if not values:
            return {}
        group_column = self.columns[column]
        statement = (
            select(group_column, func.count())
            .where(group_column.in_(list(values)))
            .group_by(group_column)
        )
        async with self._session("count_by") as session:
            result = await session.execute(statement)
            return {key: int(total) for key, total in result.all()}

    async def delete_by_id(self, record_id: int) -> dict[str, Any] | None:
        """Delete one record; returns what was deleted, or None if absent."""
        async with self._session("delete_by_id") as session:
            result = await session.execute(self._select(None).where(self.columns.id == record_id))
            row = result.mappings().first()
            if row is None:
                return None
            await session.execute(delete(self.table).where(self.columns.id == record_id))
            await session.commit()
        logger.debug(f"Deleted {self.name} id={record_id}")
        return dict(row)

    async def delete_where_in(self, column: str, values: Sequence[Any]) -> int:
        """Delete every record whose ``column`` is in ``values``; returns the count."""
        if not values:
            return 0
        async with self._session("delete_where_in") as session:
            result = await session.execute(
                delete(self.table).where(self.columns[column].in_(list(values)))
            )
            await session.commit()
            return result.rowcount or 0
