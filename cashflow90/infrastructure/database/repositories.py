"""SQLAlchemy-backed implementation of the tabular query capability"""

import asyncio
from typing import Any, Dict, List, Optional
from sqlalchemy import Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from cashflow90.domain.exceptions import DataSourceError
from cashflow90.infrastructure.database.models import Base
from cashflow90.infrastructure.source import Query


class SqlDataSource:
    """Runs Query objects against the ORM tables in a worker thread"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError as e:
            raise DataSourceError(f"Unknown table: {name}") from e

    def _statement(self, query: Query):
        table = self._table(query.table)
        stmt = select(table)

        try:
            for f in query.filters:
                column = table.c[f.field]
                stmt = stmt.where(column == f.value if f.op == "eq" else column != f.value)

            if query.order_by:
                column = table.c[query.order_by]
                stmt = stmt.order_by(column.asc() if query.ascending else column.desc())
        except KeyError as e:
            raise DataSourceError(f"Unknown column on {query.table}: {e}") from e

        if query.limit is not None:
            stmt = stmt.limit(query.limit)

        return stmt

    def _run(self, query: Query) -> List[Dict[str, Any]]:
        stmt = self._statement(query)
        try:
            with self.session_factory() as session:
                return [dict(row) for row in session.execute(stmt).mappings().all()]
        except SQLAlchemyError as e:
            raise DataSourceError(f"Query on {query.table} failed: {e}") from e

    async def fetch(self, query: Query) -> List[Dict[str, Any]]:
        """Fetch all rows matching the query"""
        return await asyncio.to_thread(self._run, query)

    async def fetch_one(self, query: Query) -> Optional[Dict[str, Any]]:
        """Fetch at most one row, None when nothing matches"""
        rows = await self.fetch(Query(query.table, query.filters, query.order_by, query.ascending, limit=1))
        return rows[0] if rows else None
