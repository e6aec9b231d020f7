"""HTTP transport executing request descriptors against backends."""

import json
import logging
import time
from typing import Any

import httpx

from core.config import Config
from core.exceptions import (
    GraphQLResponseError,
    MalformedResponseError,
    TransportConnectionError,
    TransportError,
    TransportStatusError,
    TransportTimeoutError,
)
from core.log_utils import NullRequestLogger
from core.protocols import RequestLogger
from core.request_types import BackendTarget, MultipartForm, RequestDescriptor

logger = logging.getLogger(__name__)


def create_client(config: Config, **kwargs: Any) -> httpx.AsyncClient:
    """Build the shared client; relative paths resolve against the platform URL."""
    settings = config.transport
    limits = httpx.Limits(
        max_connections=settings.max_connections,
        max_keepalive_connections=settings.max_keepalive_connections,
    )
    return httpx.AsyncClient(
        base_url=config.endpoints.bc_base_url,
        timeout=settings.timeout,
        limits=limits,
        **kwargs,
    )


class HttpxTransport:
    """Execute descriptors, classify failures and parse responses."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: Config,
        request_logger: RequestLogger | None = None,
    ) -> None:
        self._client = client
        self._timeout = config.transport.timeout
        self._logger = request_logger or NullRequestLogger()

    async def execute(
        self,
        descriptor: RequestDescriptor,
        target: BackendTarget,
        suppress_errors: bool = False,
    ) -> Any:
        """Send ``descriptor`` and return the parsed payload.

        Failures always raise. Unless ``suppress_errors`` is set they are
        also reported through the request logger.
        """
        self._logger.log_request(descriptor, target)
        try:
            return await self._send(descriptor, target)
        except TransportError as e:
            if not suppress_errors:
                self._logger.log_error(target, e.status_code or 0, str(e))
            raise

    async def _send(self, descriptor: RequestDescriptor, target: BackendTarget) -> Any:
        request = self._build_request(descriptor)
        started = time.monotonic()
        try:
            response = await self._client.send(request)
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(f"Backend timeout: {e}", target=target) from e
        except httpx.RequestError as e:
            raise TransportConnectionError(f"Backend connection error: {e}", target=target) from e

        elapsed = time.monotonic() - started
        self._logger.log_response(target, response.status_code, elapsed)
        logger.debug("%s %s -> %s in %.3fs", request.method, request.url, response.status_code, elapsed)

        payload = self._parse(response, target)
        if not response.is_success:
            raise TransportStatusError(
                _status_message(response, payload),
                status_code=response.status_code,
                target=target,
                body=payload,
            )
        if target.is_graphql and isinstance(payload, dict):
            errors = payload.get("errors")
            if errors:
                raise GraphQLResponseError(errors, status_code=response.status_code, target=target)
            return payload.get("data")
        return payload

    def _build_request(self, descriptor: RequestDescriptor) -> httpx.Request:
        timeout = descriptor.timeout if descriptor.timeout is not None else self._timeout
        kwargs: dict[str, Any] = {}
        if isinstance(descriptor.body, MultipartForm):
            kwargs["data"] = dict(descriptor.body.fields)
            kwargs["files"] = dict(descriptor.body.files)
        elif descriptor.body is not None:
            kwargs["content"] = descriptor.body.encode("utf-8")
        # h11 rejects surrounding whitespace, e.g. "Bearer  " with no token
        headers = {key: value.strip() for key, value in descriptor.headers.items()}
        return self._client.build_request(
            str(descriptor.method),
            descriptor.url,
            headers=headers,
            timeout=timeout,
            **kwargs,
        )

    def _parse(self, response: httpx.Response, target: BackendTarget) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if not response.is_success:
                return response.text
            raise MalformedResponseError(
                f"Invalid JSON from backend: {e}",
                status_code=response.status_code,
                target=target,
            ) from e


def _status_message(response: httpx.Response, payload: Any) -> str:
    if isinstance(payload, dict):
        for key in ("message", "detail", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Backend returned HTTP {response.status_code}"
