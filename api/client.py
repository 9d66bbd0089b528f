"""Thin JSON client for the profile REST API."""

from typing import Any

import aiohttp
import structlog
from api.errors import NetworkError, RequestFailed
from config.constants import API_PREFIX
from config.settings import settings

log = structlog.get_logger(__name__)


def is_success(status: int) -> bool:
    return 200 <= status < 300


class ApiClient:
    """Issues GET/POST/PATCH/DELETE requests against ``{api_url}/api``.

    No retry and no timeout: any failure surfaces to the caller on the
    first attempt.
    """

    def __init__(self, base_url: str | None = None) -> None:
        root = (base_url or settings.api_url).rstrip("/")
        self.base_url = f"{root}{API_PREFIX}"
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=None),
                headers={"User-Agent": "ProfileDesk/0.1"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, body=body)

    async def patch(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("PATCH", path, body=body)

    async def delete(self, path: str) -> None:
        await self._request("DELETE", path, parse=False)

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        parse: bool = True,
    ) -> Any:
        """Send one request; raise RequestFailed on non-2xx, NetworkError on transport errors."""
        session = await self.get_session()
        try:
            async with session.request(method, self.url(path), json=body) as resp:
                if not is_success(resp.status):
                    log.warning("api_request_failed", method=method, path=path, status=resp.status)
                    raise RequestFailed(resp.status)
                if not parse:
                    return None
                return await resp.json(content_type=None)
        except aiohttp.ClientError as e:
            log.error("api_network_error", method=method, path=path, error=str(e))
            raise NetworkError(str(e)) from e
        except ValueError as e:
            # Body was not valid JSON
            log.error("api_invalid_json", method=method, path=path, error=str(e))
            raise NetworkError(f"Invalid JSON from {method} {path}") from e
