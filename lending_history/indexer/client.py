"""GraphQL indexer client."""
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import IndexerConfig
from .errors import IndexerError

logger = logging.getLogger(__name__)


class GraphQLIndexerClient:
    """Posts GraphQL queries to the protocol's indexing service."""

    def __init__(self, config: IndexerConfig) -> None:
        self.url = config.graphql_url
        self.timeout = config.timeout

    async def execute(self, query: str) -> dict[str, Any]:
        """Run ``query`` and return the decoded JSON body.

        Raises:
            IndexerError: on transport failure, a non-200 status, an
                undecodable body, or a GraphQL ``errors`` payload.
        """
        payload = {"query": query}
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise IndexerError(
                            f"Indexer request failed: HTTP {response.status}"
                        )
                    result = await response.json(content_type=None)
        except IndexerError:
            raise
        except Exception as e:
            raise IndexerError(f"Indexer request failed: {e}") from e

        if not isinstance(result, dict):
            raise IndexerError("Indexer returned a non-object JSON body")
        if result.get("errors"):
            raise IndexerError(f"GraphQL Error: {result['errors']}")

        logger.debug("Indexer query to %s succeeded", self.url)
        return result
