# tasks/task_source.py

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class LoadError(RuntimeError):
    """The base task document could not be fetched or parsed."""


class HttpTaskSource:
    """
    Fetches the base task document (a JSON array of task-like records) over HTTP.

    The response is returned as parsed JSON without any shape checks; normalization
    decides what to do with it.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))
        self._transport = transport

    async def fetch_raw(self) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self.url)
        except httpx.HTTPError as e:
            raise LoadError(f"Failed to load tasks.json ({e.__class__.__name__}: {e})") from e

        if resp.status_code != 200:
            raise LoadError(f"Failed to load tasks.json ({resp.status_code})")

        try:
            data = resp.json()
        except ValueError as e:
            raise LoadError(f"Failed to parse tasks.json: {e}") from e

        logger.debug("Fetched %s (%d bytes)", self.url, len(resp.content))
        return data
