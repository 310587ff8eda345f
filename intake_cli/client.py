# intake_cli/client.py
"""
HTTP client for the lead intake API.

Every transport failure or non-2xx response surfaces as
``IntakeClientError``; retrying is left to the caller.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class IntakeClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class IntakeClient:
    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        timeout: float = 10.0,
        api_prefix: str = "/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/") + api_prefix,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "IntakeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise IntakeClientError(f"API not reachable: {type(e).__name__}") from e

        if response.is_error:
            code = None
            message = f"API returned {response.status_code}"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                code = body.get("code")
                message = body.get("message") or message
            raise IntakeClientError(message, status_code=response.status_code, code=code)

        try:
            return response.json()
        except ValueError as e:
            raise IntakeClientError("API returned invalid JSON", status_code=response.status_code) from e

    async def create_lead(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/leads", json=payload)

    async def list_leads(
        self,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if status:
            params["status"] = status
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        return await self._request("GET", "/leads", params=params)

    async def update_status(self, lead_id: int, status: str, **follow_up: Any) -> Dict[str, Any]:
        return await self._request("PUT", f"/leads/{lead_id}/status", json={"status": status, **follow_up})

    async def lead_stats(self) -> Dict[str, Any]:
        return await self._request("GET", "/leads/stats")
