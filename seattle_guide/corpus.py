"""Fixie corpus client — remote vector/keyword search over the Seattle corpus."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .config import DEFAULT_FIXIE_API_URL
from .errors import ConfigurationError, CorpusSearchError

logger = logging.getLogger(__name__)


@dataclass
class ScoredChunk:
    content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    document_name: str = ""
    score: float = 0.0

    @property
    def source(self) -> Optional[str]:
        return (self.metadata or {}).get("source")


class FixieCorpus:
    """Query a Fixie corpus. Relevance ordering belongs to the service."""

    def __init__(
        self,
        corpus_id: str,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "You must provide a Fixie API key to access Fixie corpora. "
                "Find yours at https://app.fixie.ai/profile and set FIXIE_API_KEY."
            )
        self.corpus_id = corpus_id
        self._api_key = api_key
        self.api_url = (api_url or DEFAULT_FIXIE_API_URL).rstrip("/")
        self.client = client

    @property
    def query_url(self) -> str:
        return f"{self.api_url}/corpora/{self.corpus_id}:query"

    async def search(
        self,
        query: str,
        limit: Optional[int] = None,
        metadata_filter: Optional[Dict[str, Any]] = None,
    ) -> List[ScoredChunk]:
        """POST one query and map the returned chunks in service order.

        Raises CorpusSearchError on any status other than 200.
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        body = {
            "query_string": query,
            "chunk_limit": limit,
            "metadata_filter": metadata_filter,
        }

        if self.client is not None:
            resp = await self.client.post(self.query_url, headers=headers, json=body)
        else:
            async with httpx.AsyncClient(timeout=15) as client:
                resp = await client.post(self.query_url, headers=headers, json=body)

        if resp.status_code != 200:
            raise CorpusSearchError(resp.status_code, resp.text)

        data = resp.json()
        return [
            ScoredChunk(
                content=c.get("content", ""),
                metadata=c.get("metadata") or {},
                document_name=c.get("document_name", ""),
                score=c.get("score", 0.0),
            )
            for c in data.get("chunks", [])
        ]
