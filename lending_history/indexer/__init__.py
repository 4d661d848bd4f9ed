"""Indexer access — GraphQL client and queries."""
from .client import GraphQLIndexerClient
from .errors import IndexerError

__all__ = ["GraphQLIndexerClient", "IndexerError"]
