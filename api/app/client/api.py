"""Async HTTP client for the media item endpoints."""

from __future__ import annotations

from typing import Any

import httpx


class MediaApiError(Exception):
    """Non-2xx response from the media API."""

    def __init__(self, status_code: int, message: str, kind: str | None = None, errors: dict | None = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.kind = kind
        self.errors = errors or {}


class MediaApiClient:
    """Bearer-authenticated wrapper around `/api/media`; no retries are attempted."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        api_prefix: str = "/api",
        timeout: float = 15,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )
        self._prefix = f"{api_prefix.rstrip('/')}/media"

    async def __aenter__(self) -> "MediaApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            message = body.get("message") or body.get("error") or body.get("detail") or response.reason_phrase
            raise MediaApiError(response.status_code, str(message), body.get("error"), body.get("errors"))
        return response.json()

    async def list_items(self, **filters: str) -> list[dict[str, Any]]:
        params = {key: value for key, value in filters.items() if value is not None}
        return await self._request("GET", "/me", params=params)

    async def stats(self, media_type: str | None = None) -> dict[str, Any]:
        params = {"mediaType": media_type} if media_type else None
        return await self._request("GET", "/me/stats", params=params)

    async def get_item(self, item_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/{item_id}")

    async def create_item(self, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "", json=fields)

    async def update_item(self, item_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/{item_id}", json=fields)

    async def set_favorite(self, item_id: str, favorite: bool) -> dict[str, Any]:
        return await self._request("PUT", f"/{item_id}/favorite", json={"favorite": favorite})

    async def delete_item(self, item_id: str) -> None:
        await self._request("DELETE", f"/{item_id}")
