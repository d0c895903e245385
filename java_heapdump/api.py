import json
import logging
from typing import Any, Optional

import httpx

from java_heapdump.config import Settings
from java_heapdump.errors import ApiResponseError

log = logging.getLogger(__name__)


def _json(r: httpx.Response) -> Any:
    try:
        return r.json()
    except ValueError as e:
        raise ApiResponseError(f"Unexpected response from {r.request.url}: {e}") from e


class PlatformClient:
    """Thin async wrapper over the Akkeris platform API.

    Only the two calls the plugin needs are exposed. HTTP and transport
    failures are raised as ``httpx`` exceptions.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self._client = client
        self._settings = settings

    def _url(self, path: str) -> str:
        return self._settings.api_url.rstrip("/") + "/" + path.lstrip("/")

    def _headers(self, has_body: bool = False) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.token:
            headers["Authorization"] = f"Bearer {self._settings.token}"
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def get(self, path: str) -> Any:
        log.debug("GET %s", path)
        r = await self._client.get(self._url(path), headers=self._headers(), timeout=self._settings.timeout)
        r.raise_for_status()
        return _json(r)

    async def post(self, body: Optional[dict], path: str) -> Any:
        log.debug("POST %s", path)
        content = json.dumps(body or {}, separators=(",", ":")).encode("utf-8")
        r = await self._client.post(self._url(path), content=content, headers=self._headers(True), timeout=self._settings.timeout)
        r.raise_for_status()
        return _json(r)
