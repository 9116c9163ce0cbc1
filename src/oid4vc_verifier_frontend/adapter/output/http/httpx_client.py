"""HTTP client implementation using httpx"""

import logging
from typing import Any, Mapping, Optional, Type

import httpx
from pydantic import ValidationError
from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.port.output import (
    HttpClient,
    HttpError,
    HttpErrorType,
    HttpResponse,
    HttpResponseMetadata,
)
from oid4vc_verifier_frontend.port.output.http_client import ModelT

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_HEADERS = {"Accept": "application/json", "Content-Type": "application/json"}
MAX_LOGGED_BODY = 500


def join_url(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class HttpxClient(HttpClient):
    """
    HttpClient backed by httpx.AsyncClient.

    A client is opened per request. The transport argument lets tests plug in
    httpx.MockTransport.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._transport = transport

    async def post(
        self, base_url: str, path: str, json_body: Mapping[str, Any], response_model: Type[ModelT]
    ) -> Result[HttpResponse[ModelT], HttpError]:
        return await self._request("POST", join_url(base_url, path), response_model, json=dict(json_body))

    async def get(
        self, base_url: str, path: str, query: Mapping[str, str], response_model: Type[ModelT]
    ) -> Result[HttpResponse[ModelT], HttpError]:
        return await self._request("GET", join_url(base_url, path), response_model, params=dict(query))

    async def _request(
        self, method: str, url: str, response_model: Type[ModelT], **kwargs: Any
    ) -> Result[HttpResponse[ModelT], HttpError]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, headers=self._headers, transport=self._transport
            ) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            log.warning("%s %s timed out after %.1fs", method, url, self._timeout)
            return Failure(HttpError(HttpErrorType.TIMEOUT_ERROR, f"Request timed out: {e}", url, cause=e))
        except httpx.HTTPError as e:
            log.warning("%s %s failed: %s", method, url, e)
            return Failure(HttpError(HttpErrorType.NETWORK_ERROR, f"Network error: {e}", url, cause=e))

        metadata = HttpResponseMetadata(
            status=response.status_code, url=str(response.url), headers=dict(response.headers)
        )
        if not metadata.ok:
            body = response.text
            log.warning("%s %s returned HTTP %d: %s", method, url, response.status_code, body[:MAX_LOGGED_BODY])
            return Failure(
                HttpError(
                    HttpErrorType.HTTP_ERROR,
                    f"HTTP {response.status_code}: {response.reason_phrase}",
                    url,
                    status=response.status_code,
                    response_body=body,
                )
            )

        try:
            data = response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            return Failure(
                HttpError(
                    HttpErrorType.VALIDATION_ERROR,
                    f"Response does not match {response_model.__name__}: {e}",
                    url,
                    status=response.status_code,
                    response_body=response.text,
                    cause=e,
                )
            )

        return Success(HttpResponse(data=data, metadata=metadata))
