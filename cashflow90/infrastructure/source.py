"""Narrow tabular query capability consumed by the resolution service"""

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Protocol, Tuple


@dataclass(frozen=True)
class Filter:
    """Equality (eq) or inequality (neq) predicate on a named field"""

    field: str
    value: Any
    op: Literal["eq", "neq"] = "eq"


@dataclass(frozen=True)
class Query:
    """select * from table where filters order by order_by limit limit"""

    table: str
    filters: Tuple[Filter, ...] = ()
    order_by: Optional[str] = None
    ascending: bool = True
    limit: Optional[int] = None


class DataSource(Protocol):
    """
    Read-only access to upstream tables.

    Implementations return [] / None when nothing matches and raise
    DataSourceError on transport, auth or schema failures.
    """

    async def fetch(self, query: Query) -> List[Dict[str, Any]]:
        ...

    async def fetch_one(self, query: Query) -> Optional[Dict[str, Any]]:
        ...
