"""SauceNAO search API client.

Rate limiting is not implemented here. A 429 answer surfaces as
:class:`~saucenao.exceptions.QuotaError`; wrap the client with a limiter
(a token bucket, for example) if you need to stay under the quota.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from saucenao.config import DEFAULT_SERVICE, SauceNAOSettings, get_settings
from saucenao.domain.models import SearchResponse
from saucenao.exceptions import (
    DecodeError,
    QuotaError,
    TransportError,
    UnexpectedStatusError,
)
from saucenao.logging import logger
from saucenao.services.search_request import SearchRequest, build_http_request


class SearchClient:
    """Calls the SauceNAO search endpoint through an injected httpx client.

    The instance holds configuration only, so one client can serve many
    concurrent searches. The caller owns ``http_client`` and closes it.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        service: str = DEFAULT_SERVICE,
        timeout: float | None = None,
    ) -> None:
        self._client = http_client
        self._api_key = api_key
        self._service = service.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls,
        http_client: httpx.AsyncClient,
        settings: SauceNAOSettings | None = None,
    ) -> SearchClient:
        settings = settings or get_settings()
        api_key = settings.api_key.get_secret_value() if settings.api_key else ""
        return cls(
            http_client,
            api_key,
            service=settings.service_base(),
            timeout=settings.request_timeout_seconds,
        )

    @property
    def service(self) -> str:
        return self._service

    @property
    def api_key(self) -> str:
        return self._api_key

    def build_request(
        self, request: SearchRequest, *, timeout: float | None = None
    ) -> httpx.Request:
        """Render ``request`` without sending it."""

        return build_http_request(
            self._client,
            self._service,
            self._api_key,
            request,
            timeout=self._resolve_timeout(timeout),
        )

    async def search(
        self, request: SearchRequest, *, timeout: float | None = None
    ) -> SearchResponse:
        """Run one search and decode the response.

        Cancelling the awaiting task aborts the request and any pending body
        read. Nothing is retried.
        """

        http_request = self.build_request(request, timeout=timeout)
        logger.info(
            "saucenao_search",
            method=http_request.method,
            numres=request.num_results,
            test_mode=request.test_mode,
            db_mask=request.db_mask,
            db_mask_exclude=request.db_mask_exclude,
        )

        try:
            response = await self._client.send(http_request)
        except httpx.RequestError as exc:
            raise TransportError(f"saucenao search: {exc}") from exc

        if response.status_code == 429:
            logger.warning("saucenao_search_rate_limited")
            raise QuotaError()
        if response.status_code != 200:
            status = f"{response.status_code} {response.reason_phrase}".strip()
            logger.warning("saucenao_search_unexpected_status", status=status)
            raise UnexpectedStatusError(response.status_code, status)

        try:
            parsed = SearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"saucenao search: {exc}") from exc

        header = parsed.header
        if header.status != 0:
            logger.warning("saucenao_search_partial", status=header.status)
        logger.info(
            "saucenao_search_completed",
            results=len(parsed.results),
            short_remaining=header.short_remaining,
            long_remaining=header.long_remaining,
        )
        return parsed

    def _resolve_timeout(self, timeout: float | None) -> Any:
        if timeout is not None:
            return timeout
        if self._timeout is not None:
            return self._timeout
        return httpx.USE_CLIENT_DEFAULT


__all__ = ["SearchClient"]
