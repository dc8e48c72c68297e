"""HTTP client for the route optimization backend."""

from __future__ import annotations

import logging
import time

import httpx
from pydantic import ValidationError

from ...config import settings
from ...schemas.routing import RouteRequest, RouteResponse

OPTIMIZE_PATH = "/route/optimize"

logger = logging.getLogger(__name__)


class OptimizerAPIError(Exception):
    """The backend answered with an error status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(f"API Error: {message}")
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()


class OptimizerClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.optimizer_base_url
        if not self.base_url:
            raise ValueError("Optimizer base URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.optimizer_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.optimizer_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.optimizer_backoff_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"Content-Type": "application/json"},
            transport=self.transport,
        )

    def optimize(self, request: RouteRequest) -> RouteResponse:
        """Send the stops to the backend and return its optimized order."""
        payload = request.model_dump()
        logger.info(f"Requesting optimization for {len(request.customers)} customers from {self.base_url}")

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    started = time.time()
                    response = client.post(OPTIMIZE_PATH, json=payload)
                    response.raise_for_status()
                    data = response.json()
                    logger.info(f"Optimizer answered in {time.time() - started:.2f}s")
                    return RouteResponse.model_validate(data)
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    message = _error_message(e.response)
                    attempt += 1
                    # Client errors will not improve on retry.
                    if status_code < 500 or attempt > self.max_retries:
                        raise OptimizerAPIError(message, status_code=status_code) from e
                    logger.warning(f"Optimizer returned {status_code}, retrying (attempt {attempt}/{self.max_retries})")
                    time.sleep(self.backoff_seconds * attempt)
                except httpx.TimeoutException as e:
                    attempt += 1
                    # The backend may already be solving; a second POST would start over.
                    if isinstance(e, (httpx.ReadTimeout, httpx.WriteTimeout)):
                        logger.warning(f"Optimizer did not answer within {self.timeout:.0f}s: {e}")
                        raise
                    if attempt > self.max_retries:
                        logger.warning(f"Optimizer request timed out after {self.max_retries} retries: {e}")
                        raise
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Optimizer timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except httpx.TransportError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(
                            f"Failed to connect to optimizer at {self.base_url}: {e}"
                        ) from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"Optimizer network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except ValidationError as e:
                    raise OptimizerAPIError(f"unexpected response format ({e.error_count()} errors)") from e
                except ValueError as e:
                    raise OptimizerAPIError(f"response is not valid JSON ({e})") from e
        finally:
            client.close()


def check_health(base_url: str | None = None) -> bool:
    """Return True if the optimizer host answers at all without a server error."""
    base = base_url or settings.optimizer_base_url
    if not base:
        return False
    try:
        response = httpx.get(base, timeout=5.0)
        return response.status_code < 500
    except httpx.HTTPError:
        return False
