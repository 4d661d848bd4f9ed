"""Indexer client protocol — GraphQL data source abstraction."""
from typing import Any, Protocol


class IndexerClient(Protocol):
    """Abstract interface for querying the protocol's indexer."""

    async def execute(self, query: str) -> dict[str, Any]: ...
