"""
aiohttp client for the allorigins-style CORS relay.
"""

from __future__ import annotations

import json
import time
from typing import Any, Optional

import aiohttp
import structlog

from favgrab.config.config import RelayConfig
from favgrab.exceptions import FetchFailed
from favgrab.observability import observe

logger = structlog.get_logger(__name__)


class RelayClient:
    """Fetches a page through the relay with exactly one HTTP request.

    The relay answers ``{"status": {"http_code": 200}, "contents": "<html>..."}``.
    Anything else is a :class:`FetchFailed`. No retries and no caching.
    """

    def __init__(self, config: Optional[RelayConfig] = None, session: Optional[aiohttp.ClientSession] = None):
        self.config = config or RelayConfig()
        self.session = session
        self._owns_session = session is None

    async def initialize(self) -> None:
        """Create the HTTP session if one was not supplied."""
        if self.session is None:
            kwargs: dict[str, Any] = {"headers": {"User-Agent": self.config.user_agent}}
            if self.config.timeout is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self.config.timeout)
            self.session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
            logger.debug("Relay session initialized", endpoint=self.config.endpoint)

    async def close(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "RelayClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_payload(self, url: str) -> Any:
        if self.session is None:
            raise RuntimeError("Relay client not initialized. Call initialize() first.")
        async with self.session.get(self.config.endpoint, params={"url": url}) as response:
            body = await response.text()
            logger.debug("Relay responded", url=url, relay_status=response.status, bytes=len(body))
        return json.loads(body)

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` through the relay and return the relayed HTML verbatim.

        Raises:
            RuntimeError: if the client has not been initialized.
            FetchFailed: on transport errors, malformed JSON, a non-200
                ``status.http_code`` or missing ``contents``.
        """
        if self.session is None:
            raise RuntimeError("Relay client not initialized. Call initialize() first.")

        start_time = time.perf_counter()
        try:
            payload = await self._get_payload(url)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise FetchFailed(url, f"relay request failed: {e!r}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchFailed(url, f"relay returned malformed JSON: {e}") from e
        finally:
            observe("relay_fetch_seconds", time.perf_counter() - start_time)

        if not isinstance(payload, dict):
            raise FetchFailed(url, "relay returned a non-object body")

        status = payload.get("status")
        http_code = status.get("http_code") if isinstance(status, dict) else None
        if http_code != 200:
            raise FetchFailed(url, f"target answered with http_code={http_code!r}", status=http_code)

        contents = payload.get("contents")
        if not isinstance(contents, str):
            raise FetchFailed(url, "relay response has no contents", status=http_code)
        return contents
