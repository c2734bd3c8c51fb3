import asyncio
import logging
import time
from typing import Any, Optional
from urllib.parse import urlparse

import httpx

from oddsboard.config import settings
from oddsboard.providers.base import ProviderError

logger = logging.getLogger("oddsboard.http_client")

# Retryable HTTP status codes
_RETRYABLE_STATUSES = {429, 500, 502, 503, 504}
_MAX_DELAY_SECONDS = 30.0


class CircuitBreaker:
    """Stops hammering a source after repeated failures; half-opens after a pause."""

    def __init__(self, name: str, failure_threshold: int = 3, recovery_timeout: int = 300):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.last_failure_time: Optional[float] = None
        self.is_open = False

    def record_success(self) -> None:
        self.failure_count = 0
        self.is_open = False

    def record_failure(self) -> None:
        self.failure_count += 1
        self.last_failure_time = time.monotonic()
        if self.failure_count >= self.failure_threshold and not self.is_open:
            self.is_open = True
            logger.warning(
                "[%s] Circuit breaker OPEN after %d failures", self.name, self.failure_count
            )

    def can_attempt(self) -> bool:
        if not self.is_open:
            return True
        if self.last_failure_time is not None and (
            time.monotonic() - self.last_failure_time > self.recovery_timeout
        ):
            logger.info("[%s] Circuit breaker half-open, allowing retry", self.name)
            return True
        return False


def _parse_retry_after(response: httpx.Response) -> Optional[float]:
    """Extract wait time from Retry-After or X-RateLimit-Retry-After headers."""
    for header in ("retry-after", "x-ratelimit-retry-after"):
        value = response.headers.get(header)
        if value is None:
            continue
        try:
            return float(value)
        except (ValueError, TypeError):
            continue
    return None


def safe_url(url: str) -> str:
    """Strip query params (may contain API keys) for safe logging."""
    parsed = urlparse(str(url))
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"


class ResilientClient:
    """httpx.AsyncClient wrapper with retry, exponential backoff, and circuit breaker."""

    def __init__(
        self,
        name: str,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout,
            headers={"accept": "application/json", **(headers or {})},
            transport=transport,
        )
        self._name = name
        self._max_retries = settings.HTTP_MAX_RETRIES if max_retries is None else max_retries
        self._base_delay = settings.HTTP_BASE_DELAY_SECONDS if base_delay is None else base_delay
        self.circuit = CircuitBreaker(name)

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with retry/backoff on transient failures."""
        last_exc: Optional[Exception] = None
        last_resp: Optional[httpx.Response] = None
        attempts = self._max_retries + 1

        for attempt in range(attempts):
            try:
                resp = await self._client.request(method, url, **kwargs)
                if resp.status_code not in _RETRYABLE_STATUSES:
                    return resp

                last_resp = resp
                logger.warning(
                    "[%s] %s on %s %s (attempt %d/%d)",
                    self._name,
                    "Rate limited (429)" if resp.status_code == 429 else f"Server error {resp.status_code}",
                    method, safe_url(url), attempt + 1, attempts,
                )
                if attempt < self._max_retries:
                    delay = _parse_retry_after(resp)
                    if delay is None:
                        delay = self._base_delay * (2 ** attempt)
                    await asyncio.sleep(min(delay, _MAX_DELAY_SECONDS))

            except (httpx.TimeoutException, httpx.ConnectError, httpx.RemoteProtocolError) as exc:
                last_exc = exc
                logger.warning(
                    "[%s] Network error on %s %s (attempt %d/%d): %s",
                    self._name, method, safe_url(url), attempt + 1, attempts, exc,
                )
                if attempt < self._max_retries:
                    await asyncio.sleep(min(self._base_delay * (2 ** attempt), _MAX_DELAY_SECONDS))

        if last_resp is not None:
            logger.error(
                "[%s] All %d attempts failed for %s %s (last status: %d)",
                self._name, attempts, method, safe_url(url), last_resp.status_code,
            )
            return last_resp

        logger.error(
            "[%s] All %d attempts failed for %s %s: %s",
            self._name, attempts, method, safe_url(url), last_exc,
        )
        raise last_exc  # type: ignore[misc]

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def get_json(self, url: str, **kwargs) -> Any:
        """GET and decode JSON; non-2xx or undecodable bodies raise ProviderError."""
        if not self.circuit.can_attempt():
            raise ProviderError(self._name, "circuit open")
        try:
            resp = await self.get(url, **kwargs)
        except httpx.HTTPError as exc:
            self.circuit.record_failure()
            raise ProviderError(self._name, f"request failed: {exc}") from exc

        if resp.status_code >= 400:
            self.circuit.record_failure()
            raise ProviderError(
                self._name, f"HTTP {resp.status_code} for {safe_url(url)}", status_code=resp.status_code
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            self.circuit.record_failure()
            raise ProviderError(self._name, f"invalid JSON from {safe_url(url)}") from exc
        self.circuit.record_success()
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()
