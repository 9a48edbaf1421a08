from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0
RETRYABLE = (429, 502, 503, 504)


class UpstreamError(RuntimeError):
    """Transient upstream failure: transport, non-2xx, bad JSON or unusable payload."""

    def __init__(self, message: str, *, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class HttpRetryingClient:
    """httpx async client with basic retries/backoff and JSON decoding."""
    def __init__(
        self,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        retries: int = 2,
        backoff: float = 0.75,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(timeout=timeout, headers=headers or {}, transport=transport)
        self.retries = retries
        self.backoff = backoff

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, url: str, *, params: Optional[Mapping[str, Any]] = None,
                  headers: Optional[Mapping[str, str]] = None) -> httpx.Response:
        last_exc: Optional[Exception] = None
        for i in range(self.retries + 1):
            try:
                r = await self._http.get(url, params=params or {}, headers=headers)
                if r.status_code in RETRYABLE:
                    # retryable server / rate limit
                    raise httpx.HTTPStatusError("retryable", request=r.request, response=r)
                r.raise_for_status()
                return r
            except httpx.HTTPStatusError as e:
                last_exc = e
                if e.response.status_code not in RETRYABLE:
                    break
            except httpx.TransportError as e:
                last_exc = e
            except httpx.HTTPError as e:
                # undecodable body or redirect loop: not retryable
                last_exc = e
                break
            if i < self.retries:
                wait = self.backoff * (2 ** i)
                logger.warning(f"GET {url} failed ({last_exc}), retrying in {wait:.2f}s")
                await asyncio.sleep(wait)

        assert last_exc is not None
        if isinstance(last_exc, httpx.HTTPStatusError):
            resp = last_exc.response
            raise UpstreamError(
                f"GET {url} -> {resp.status_code}: {resp.text[:200]}",
                url=url,
                status_code=resp.status_code,
            ) from last_exc
        raise UpstreamError(f"GET {url} failed: {last_exc}", url=url) from last_exc

    async def get_json(self, url: str, *, params: Optional[Mapping[str, Any]] = None,
                       headers: Optional[Mapping[str, str]] = None) -> Any:
        r = await self.get(url, params=params, headers=headers)
        try:
            return r.json()
        except ValueError as e:
            raise UpstreamError(f"GET {url} returned malformed JSON", url=url,
                                status_code=r.status_code) from e
