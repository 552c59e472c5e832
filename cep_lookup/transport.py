"""HTTP transport used by the race to reach providers."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from cep_lookup.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from cep_lookup.exceptions import TransportError
from cep_lookup.models import RequestSpec, TransportResponse
from cep_lookup.scope import CancellationScope

logger = logging.getLogger(__name__)

USER_AGENT = "cep-lookup/0.1 (+https://pypi.org/project/cep-lookup/)"


class Transport(Protocol):
    async def send(
        self, request: RequestSpec, scope: Optional[CancellationScope] = None
    ) -> TransportResponse:
        """
        Perform the request. Any HTTP status is returned, not raised.

        Raises:
            TransportError: connection failures and timeouts
            RequestCancelledError: the scope was cancelled before sending
        """
        ...


class HttpxTransport:
    """
    Transport backed by ``httpx.AsyncClient``.

    Pass a long-lived ``client`` to reuse connections across lookups; without
    one, a client is opened per request. Task cancellation aborts the
    in-flight request.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        *,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ):
        self._client = client
        self.timeout_seconds = timeout_seconds

    async def send(
        self, request: RequestSpec, scope: Optional[CancellationScope] = None
    ) -> TransportResponse:
        if scope is not None:
            scope.raise_if_cancelled(request.provider_id)

        headers = {"User-Agent": USER_AGENT, **request.headers}
        try:
            if self._client is not None:
                response = await self._client.request(
                    request.method,
                    request.url,
                    params=request.params or None,
                    headers=headers,
                    timeout=self.timeout_seconds,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(
                        request.method,
                        request.url,
                        params=request.params or None,
                        headers=headers,
                    )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timed out after {self.timeout_seconds}s",
                detail={"url": request.url},
                provider=request.provider_id,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(
                f"Request failed: {type(e).__name__}: {e}",
                detail={"url": request.url},
                provider=request.provider_id,
            ) from e

        logger.debug(f"[{request.provider_id}] {request.method} {request.url} -> {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
