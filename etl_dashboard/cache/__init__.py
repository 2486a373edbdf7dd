"""Query cache — keyed, de-duplicated, polling backend reads."""

from etl_dashboard.cache.query_cache import (
    QueryCache,
    QueryState,
    QueryStatus,
    Subscription,
)

__all__ = [
    "QueryCache",
    "QueryState",
    "QueryStatus",
    "Subscription",
]
