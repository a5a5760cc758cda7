"""PostgREST (Supabase) HTTP client implementing the tabular query capability"""

import httpx
from typing import Any, Dict, List, Optional, Tuple
from cashflow90.domain.exceptions import DataSourceError
from cashflow90.infrastructure.source import Query
from cashflow90.config import settings


class PostgrestDataSource:
    """Client for a Supabase REST endpoint (/rest/v1/<table>)"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.supabase_url or "").rstrip("/")
        self.api_key = api_key or settings.supabase_key or ""
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    @staticmethod
    def _params(query: Query) -> List[Tuple[str, str]]:
        """Translate a Query into PostgREST horizontal filtering params"""
        params = [("select", "*")]
        for f in query.filters:
            params.append((f.field, f"{f.op}.{f.value}"))
        if query.order_by:
            params.append(("order", f"{query.order_by}.{'asc' if query.ascending else 'desc'}"))
        if query.limit is not None:
            params.append(("limit", str(query.limit)))
        return params

    async def fetch(self, query: Query) -> List[Dict[str, Any]]:
        """
        Fetch rows for a query.

        Raises:
            DataSourceError: On timeout, HTTP errors, or a non-list payload
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/rest/v1/{query.table}",
                    params=self._params(query),
                    headers=self._headers(),
                )
                response.raise_for_status()
                data = response.json()

            except httpx.TimeoutException as e:
                raise DataSourceError(f"PostgREST timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise DataSourceError(f"PostgREST error on {query.table}: {e.response.status_code}") from e
            except (httpx.RequestError, httpx.InvalidURL, ValueError) as e:
                raise DataSourceError(f"PostgREST request on {query.table} failed: {e}") from e

        if not isinstance(data, list):
            raise DataSourceError(f"Unexpected payload from {query.table}: {type(data).__name__}")
        return data

    async def fetch_one(self, query: Query) -> Optional[Dict[str, Any]]:
        rows = await self.fetch(Query(query.table, query.filters, query.order_by, query.ascending, limit=1))
        return rows[0] if rows else None
