"""Cover image lookup against the Open Library search API."""

import logging

import httpx

from app.domain.catalog import FALLBACK_COVER_URL

logger = logging.getLogger(__name__)

COVERS_URL = "https://covers.openlibrary.org/b/id/{cover_id}-L.jpg"


class OpenLibraryCoverAdapter:
    """Find a cover for a title; any miss or failure yields the fallback cover."""

    def __init__(
        self,
        base_url: str,
        enabled: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._enabled = enabled
        self._transport = transport

    async def find_cover_url(self, title: str) -> str:
        if not self._enabled:
            return FALLBACK_COVER_URL
        try:
            async with httpx.AsyncClient(timeout=10.0, transport=self._transport) as client:
                resp = await client.get(
                    f"{self._base_url}/search.json",
                    params={"title": title, "limit": 1},
                )
                resp.raise_for_status()
                docs = resp.json().get("docs") or []
        except (httpx.HTTPError, ValueError):
            logger.warning("Cover lookup failed for %r", title, exc_info=True)
            return FALLBACK_COVER_URL

        if docs and docs[0].get("cover_i"):
            return COVERS_URL.format(cover_id=docs[0]["cover_i"])
        logger.info("No cover found for %r", title)
        return FALLBACK_COVER_URL
