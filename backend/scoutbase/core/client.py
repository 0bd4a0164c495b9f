import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from scoutbase.config import settings
from scoutbase.core.auth.session import SessionStore
from scoutbase.response import ApiError

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Gateway to the portal API.

    Attaches the session token to every request and turns transport and
    HTTP failures into ``ApiError``. Routes under the public prefixes
    (``/auth``, ``/announcements``) are sent with the token when one
    exists but never need it.
    """

    def __init__(
        self,
        session: SessionStore,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.session = session
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @staticmethod
    def is_public_route(path: str) -> bool:
        return any(path.startswith(prefix) for prefix in settings.PUBLIC_ROUTE_PREFIXES)

    def _headers(self, path: str) -> dict[str, str]:
        token = self.session.token
        if token:
            return {settings.AUTH_HEADER: token}
        if not self.is_public_route(path):
            logger.debug(f"No session token for protected route {path}")
        return {}

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
        data: dict | None = None,
        files: dict | None = None,
    ) -> dict:
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            response = await self._http.request(
                method,
                path,
                params=params or None,
                json=json,
                data=data,
                files=files,
                headers=self._headers(path),
            )
        except httpx.HTTPError as exc:
            logger.error(f"API Error: No response received for {method} {path}: {exc}")
            raise ApiError("Unable to reach the server") from exc

        payload = self._decode(response)
        if response.is_error:
            logger.error(f"API Error: {response.status_code} {payload}")
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )
        return payload

    @staticmethod
    def _decode(response: httpx.Response) -> dict:
        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError:
            return {"message": response.text}
        if isinstance(payload, dict):
            return payload
        return {"data": payload}

    async def get(self, path: str, params: dict | None = None) -> dict:
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, json: Any = None, data: dict | None = None, files: dict | None = None
    ) -> dict:
        return await self.request("POST", path, json=json, data=data, files=files)

    async def put(
        self, path: str, json: Any = None, data: dict | None = None, files: dict | None = None
    ) -> dict:
        return await self.request("PUT", path, json=json, data=data, files=files)

    async def delete(self, path: str) -> dict:
        return await self.request("DELETE", path)


def resolve_asset_url(path: str | None) -> str | None:
    """Resolve a relative image path against the portal's asset origin."""
    if not path:
        return None
    if path.startswith(("http://", "https://", "data:")):
        return path
    return urljoin(settings.ASSET_ORIGIN.rstrip("/") + "/", path.lstrip("/"))
