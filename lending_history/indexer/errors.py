"""Indexer errors."""


class IndexerError(RuntimeError):
    """The indexer request failed; no partial result is available."""
