"""Protocol interfaces for the lending history client."""
from .indexer import IndexerClient

__all__ = ["IndexerClient"]
