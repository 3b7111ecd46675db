from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from estimate_wizard.application.exceptions import (
    ContentFetchError,
    DeliveryError,
    MalformedContentError,
    NetworkError,
    NotFoundError,
)
from estimate_wizard.core.config import ApiConfig


class WordPressHttpClient:
    """
    Async client for the estimate-calculator REST namespace.

    GETs are retried on transport errors, timeouts and 5xx responses with a
    linear backoff. POSTs reach the email/CRM relays and are sent once.
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config or ApiConfig.from_settings()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=self._config.timeout_seconds,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )
        self._sleep = sleep
        self._logger = logging.getLogger(__name__)

    @property
    def config(self) -> ApiConfig:
        return self._config

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_content(self, slug: str) -> dict[str, Any]:
        attempts = self._config.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._get_once(slug)
            except NetworkError as e:
                if attempt >= attempts:
                    self._logger.error(
                        "Content fetch failed",
                        extra={"slug": slug, "attempt": attempt, "error": str(e)},
                    )
                    raise
                delay = self._config.retry_backoff_seconds * attempt
                self._logger.warning(
                    "Content fetch failed, retrying",
                    extra={"slug": slug, "attempt": attempt, "error": str(e)},
                )
                await self._sleep(delay)
        raise NetworkError(f"Content fetch for {slug} exhausted retries")

    async def _get_once(self, slug: str) -> dict[str, Any]:
        try:
            resp = await self._client.get("/get-calculator-data", params={"slug": slug})
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request timeout for {slug}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Network error for {slug}: {e}") from e

        if resp.status_code == 404:
            raise NotFoundError(f'Calculator with slug "{slug}" not found')
        if resp.status_code >= 500:
            raise NetworkError(f"API error {resp.status_code} for {slug}")
        if resp.status_code >= 400:
            raise ContentFetchError(f"API error {resp.status_code} for {slug}")

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedContentError(f"Response for {slug} is not JSON") from e
        if not isinstance(data, dict) or not data.get("success"):
            raise MalformedContentError(f"Failed to fetch {slug} from WordPress API")
        return data

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            self._logger.error("Relay request failed", extra={"path": path, "error": str(e)})
            raise DeliveryError(f"Network error calling {path}: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code >= 400 or not data.get("success"):
            message = data.get("message") or resp.text or f"HTTP {resp.status_code}"
            self._logger.error(
                "Relay rejected request",
                extra={"path": path, "status": resp.status_code, "error": message},
            )
            raise DeliveryError(f"{path} failed: {message}")
        return data
