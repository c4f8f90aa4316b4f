from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import ValidationError

from ..config import HTTP_TIMEOUT
from ..data.schemas import ResourceInfo
from ..errors import (
    BackendError,
    ResourceNotFoundError,
    UnauthorizedError,
    UnsupportedActionError,
)
from .base import BaseResourceBackend

logger = structlog.get_logger(__name__)


class DiscordWebhookBackend(BaseResourceBackend):
    """
    Talks to a Discord webhook URL over HTTP.

    A single `httpx.AsyncClient` is kept for the lifetime of the backend so
    consecutive commands reuse pooled connections.
    """

    backend_key = "discord-webhook"

    # action name -> (HTTP method, JSON field carrying the payload, expected status)
    ACTIONS: Dict[str, tuple] = {
        "send": ("POST", "content", 204),
        "rename": ("PATCH", "name", 200),
    }

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.debug("backend.initialized", backend=self.backend_key, timeout=timeout)

    async def _request(
        self, method: str, url: str, json: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        logger.debug("backend.request.begin", method=method)
        try:
            response = await self.client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.warning(
                "backend.request.failed", method=method, error=f"{type(e).__name__}: {e}"
            )
            raise BackendError(None, f"{type(e).__name__}: {e}") from e
        logger.debug(
            "backend.request.complete", method=method, status=response.status_code
        )
        return response

    async def connect(self, handle: str) -> ResourceInfo:
        response = await self._request("GET", handle)
        status = response.status_code
        if status == 404:
            raise ResourceNotFoundError(status, response.text)
        if status == 401:
            raise UnauthorizedError(status, response.text)
        if status != 200:
            raise BackendError(status, response.text)
        try:
            return ResourceInfo.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # A 200 with an unreadable body is still a failed lookup.
            logger.warning("backend.connect.invalid_body", error=str(e))
            raise BackendError(status, response.text) from e

    async def invoke(self, handle: str, action: str, payload: str) -> None:
        if action not in self.ACTIONS:
            raise UnsupportedActionError(action)
        method, field, expected_status = self.ACTIONS[action]
        response = await self._request(method, handle, json={field: payload})
        if response.status_code != expected_status:
            raise BackendError(response.status_code, response.text)

    async def disconnect(self, handle: str) -> None:
        response = await self._request("DELETE", handle)
        if response.status_code != 204:
            raise BackendError(response.status_code, response.text)

    async def aclose(self) -> None:
        await self.client.aclose()
