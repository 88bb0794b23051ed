"""Elasticsearch adapter — Pages through a geoportal-style metadata index.

Talks to Elasticsearch (v7+) or OpenSearch over the plain REST ``_search``
API using ``httpx`` (async), so no engine-specific client library is needed.

Indexed documents are expected to follow the geoportal metadata layout::

    {
      "title": "...",
      "description": "...",
      "sys_modified_dt": "2021-06-01T00:00:00Z",
      "apiso_PublicationDate_dt": "2019-01-01",
      "keywords_s": ["parks", "gis"],
      "fileid": "https://.../metadata.xml",
      "resources_nst": [{"url_type_s": "WMS", "url_s": "https://..."}]
    }

Catalog pages use ``from``/``size``; the full harvest (``scan``) uses the
scroll API, which is not bounded by ``index.max_result_window``.

Usage::

    adapter = ElasticsearchAdapter(hosts=["http://localhost:9200"], index="metadata")
    await adapter.initialize()
    page = await adapter.search("parks", start=1, num=10)
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any

import httpx

from opendcat.adapters.base.adapter import AdapterHealth, SearchAdapter
from opendcat.adapters.base.exceptions import ConfigurationError, ConnectionError, QueryError
from opendcat.models.item import GenericItemProjection
from opendcat.models.search import SearchResultPage

logger = logging.getLogger(__name__)

# _source fields feeding the generic projection
UPDATED_FIELD = "sys_modified_dt"
PUBLISHED_FIELD = "apiso_PublicationDate_dt"
RESOURCES_FIELD = "resources_nst"


class ElasticsearchAdapter(SearchAdapter):
    """Search adapter for an Elasticsearch/OpenSearch metadata index.

    Args:
        hosts: Node URLs, tried in order at startup; the first reachable one is used.
        index: Index (or alias) holding the metadata records.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        api_key: Optional Elasticsearch API key (sent as ``ApiKey`` header).
        timeout: HTTP request timeout in seconds.
        scroll_keep_alive: Scroll context lifetime between harvest pages.
        **kwargs: Extra keyword arguments stored for future use.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        index: str = "metadata",
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        timeout: float = 30.0,
        scroll_keep_alive: str = "2m",
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._index = index
        self._username = username
        self._password = password
        self._api_key = api_key
        self._timeout = timeout
        self._scroll_keep_alive = scroll_keep_alive
        self._extra_kwargs = kwargs
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    async def initialize(self) -> None:
        """Connect to the first host that serves the index."""
        if not self._index:
            raise ConfigurationError("Elasticsearch adapter requires an index name.")

        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)
        headers = {"Authorization": f"ApiKey {self._api_key}"} if self._api_key else None

        failures: list[str] = []
        for host in self._hosts:
            client = httpx.AsyncClient(
                base_url=host.rstrip("/"),
                timeout=httpx.Timeout(self._timeout),
                auth=auth,
                headers=headers,
            )
            try:
                resp = await client.head(f"/{self._index}")
                resp.raise_for_status()
            except httpx.HTTPError as e:
                await client.aclose()
                logger.warning("Host %s unusable for index '%s': %s", host, self._index, e)
                failures.append(f"{host}: {e}")
                continue
            self._client = client
            logger.info("Connected to index '%s' at %s", self._index, host)
            return

        raise ConnectionError(f"Failed to connect to Elasticsearch: {'; '.join(failures)}")

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, query: str | None, start: int, num: int) -> SearchResultPage:
        """Run one ``_search`` page. ``start`` is 1-based; ``num=0`` returns counts only."""
        body: dict[str, Any] = {
            "query": self._build_query(query),
            "from": max(start - 1, 0),
            "size": max(num, 0),
            "track_total_hits": True,
        }
        if "match_all" in body["query"]:
            body["sort"] = ["_doc"]

        t0 = time.monotonic()
        data = await self._post(f"/{self._index}/_search", body)
        hits_section = data.get("hits", {})
        hits = hits_section.get("hits", [])
        logger.debug(
            "Search start=%d num=%d returned %d hits in %dms",
            start,
            num,
            len(hits),
            int((time.monotonic() - t0) * 1000),
        )

        return SearchResultPage(
            items=hits,
            start_index=start,
            total_hits=self._total_hits(hits_section.get("total")),
            items_per_page=num,
        )

    async def scan(self, page_size: int) -> AsyncIterator[SearchResultPage]:
        """Walk the whole index with a scroll context, one page per ``page_size`` hits."""
        body = {"query": {"match_all": {}}, "size": page_size, "sort": ["_doc"], "track_total_hits": True}
        data = await self._post(f"/{self._index}/_search", body, params={"scroll": self._scroll_keep_alive})
        scroll_id = data.get("_scroll_id")
        total = self._total_hits(data.get("hits", {}).get("total"))
        start = 1
        try:
            while True:
                hits = data.get("hits", {}).get("hits", [])
                yield SearchResultPage(items=hits, start_index=start, total_hits=total, items_per_page=page_size)
                start += len(hits)
                if not scroll_id or len(hits) < page_size:
                    break
                data = await self._post(
                    "/_search/scroll",
                    {"scroll": self._scroll_keep_alive, "scroll_id": scroll_id},
                )
                scroll_id = data.get("_scroll_id", scroll_id)
        finally:
            if scroll_id and self._client:
                with contextlib.suppress(httpx.HTTPError):
                    await self._client.request("DELETE", "/_search/scroll", json={"scroll_id": [scroll_id]})

    async def _post(self, path: str, body: dict[str, Any], params: dict[str, str] | None = None) -> dict[str, Any]:
        if not self._client:
            raise ConnectionError("Elasticsearch client not initialized.")
        try:
            resp = await self._client.post(path, json=body, params=params)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise QueryError(f"Elasticsearch query failed: {e}") from e
        return resp.json()

    # ── Projection ───────────────────────────────────────────────────────

    def item_to_json(self, hit: Any) -> GenericItemProjection | None:
        """Project an Elasticsearch hit to the generic item shape."""
        if not isinstance(hit, dict):
            return None
        src = hit.get("_source")
        if not isinstance(src, dict):
            src = {}

        links = [
            {"type": self._text(res.get("url_type_s")), "href": str(res["url_s"])}
            for res in self._as_list(src.get(RESOURCES_FIELD))
            if isinstance(res, dict) and res.get("url_s")
        ]

        return GenericItemProjection.lenient(
            {
                "id": hit.get("_id"),
                "title": src.get("title"),
                "description": src.get("description"),
                "updated": src.get(UPDATED_FIELD),
                "published": src.get(PUBLISHED_FIELD),
                "_source": src,
                "links": links,
            }
        )

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Report cluster health as seen from this adapter."""
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            t0 = time.monotonic()
            resp = await self._client.get("/_cluster/health")
            latency_ms = int((time.monotonic() - t0) * 1000)
            if resp.status_code != 200:
                return AdapterHealth(
                    status="degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Elasticsearch returned HTTP {resp.status_code}",
                )
            color = resp.json().get("status", "unknown")
            return AdapterHealth(
                status={"green": "healthy", "yellow": "degraded"}.get(color, "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Index: {self._index}, cluster status: {color}",
            )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _build_query(query: str | None) -> dict[str, Any]:
        if query and query.strip():
            return {"query_string": {"query": query, "default_operator": "AND"}}
        return {"match_all": {}}

    @staticmethod
    def _total_hits(total: Any) -> int:
        """ES 7+ reports ``{"value": n, "relation": "eq"}``; older versions a bare int."""
        if isinstance(total, dict):
            return int(total.get("value", 0))
        if isinstance(total, int):
            return total
        return 0

    @staticmethod
    def _text(val: Any) -> str | None:
        return None if val is None else str(val)

    @staticmethod
    def _as_list(val: Any) -> list[Any]:
        if val is None:
            return []
        return val if isinstance(val, list) else [val]
