"""
HTTP transport for assembled connector requests.

Executes a `Request` built by a connector integration and returns the raw
`Response` whatever the HTTP status: interpreting 4xx/5xx bodies is the
connector's job (get_error_response), not the transport's.

Only connect-level failures, where the request never reached the gateway,
are retried. Anything after that may have had side effects upstream and is
surfaced as TransportError for the orchestration layer to decide on.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from application.dtos.http import Request, Response
from core.logging_config import get_logger
from core.settings import connector_settings
from domain.common.exceptions import BusinessException
from shared.codes.connector_codes import ConnectorCode


logger = get_logger(__name__)
_std_logger = logging.getLogger(__name__)


class TransportError(BusinessException):
    def __init__(self, message: str, *, url: str, details: Optional[dict] = None):
        full_details = {"url": url}
        if details:
            full_details.update(details)
        super().__init__(
            code=ConnectorCode.TRANSPORT_ERROR,
            message=message,
            error_type="TransportError",
            details=full_details,
        )


class ConnectorHttpClient:
    """Async httpx client executing connector `Request` values."""

    def __init__(
        self,
        *,
        timeouts: Optional[dict[str, float]] = None,
        retry: Optional[dict[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verify_ssl: bool = True,
    ) -> None:
        self._timeouts_cfg = timeouts or connector_settings.timeouts.model_dump()
        self._retry_cfg = retry or {
            "max": connector_settings.retry.max,
            "base": connector_settings.retry.base_backoff,
        }
        self._transport = transport
        self._verify_ssl = verify_ssl
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def timeouts(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self._timeouts_cfg["connect"],
            read=self._timeouts_cfg["read"],
            write=self._timeouts_cfg["write"],
            timeout=self._timeouts_cfg["total"],
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeouts,
                verify=self._verify_ssl,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close underlying HTTP client if created."""
        if self._client is not None:
            try:
                await self._client.aclose()
            finally:
                self._client = None

    async def __aenter__(self) -> "ConnectorHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def send(self, request: Request) -> Response:
        logger.debug(
            "connector_http_request",
            method=request.method.value,
            url=request.url,
            headers=request.masked_headers(),
            has_body=request.body is not None,
        )

        async def _send_once() -> httpx.Response:
            client = self._get_client()
            return await client.request(
                method=request.method.value,
                url=request.url,
                headers=list(request.headers),
                content=request.body.encode("utf-8") if request.body is not None else None,
            )

        retrying = AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(int(self._retry_cfg["max"]) + 1),
            wait=wait_exponential(multiplier=self._retry_cfg["base"], min=0.1, max=2.0),
            retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
            before_sleep=before_sleep_log(_std_logger, logging.WARNING),
        )

        start = time.perf_counter()
        try:
            async for attempt in retrying:
                with attempt:
                    raw = await _send_once()
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request timeout: {exc}", url=request.url) from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Network error: {exc}", url=request.url) from exc

        response = Response(
            status_code=raw.status_code,
            response=raw.content,
            headers=dict(raw.headers),
        )
        logger.debug(
            "connector_http_response",
            url=request.url,
            status_code=response.status_code,
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
        return response
