"""Request descriptor assembly for REST and GraphQL targets."""

import logging
from collections.abc import Mapping
from typing import Any

from core.config import Config
from core.credentials import CredentialResolver
from core.encoding import encode_body, encode_multipart, encode_query
from core.exceptions import EncodingError
from core.headers import HeaderBuilder
from core.request_types import (
    BackendTarget,
    CallerConfig,
    HttpMethod,
    MultipartForm,
    RequestDescriptor,
)

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/graphql"


class RequestBuilder:
    """Compose URL, headers, method and body for one REST call."""

    def __init__(
        self,
        config: Config,
        resolver: CredentialResolver,
        header_builder: HeaderBuilder,
    ) -> None:
        self._endpoints = config.endpoints
        self._resolver = resolver
        self._headers = header_builder

    def build(
        self,
        path: str,
        target: BackendTarget,
        method: HttpMethod,
        body: str | MultipartForm | None = None,
        caller: CallerConfig | None = None,
    ) -> RequestDescriptor:
        """Assemble a descriptor from an already-encoded body."""
        caller = caller or CallerConfig()
        url = self.url_for(path, target)
        headers = self._headers.build(
            self._resolver.resolve(target),
            caller.headers,
            multipart=isinstance(body, MultipartForm),
        )
        descriptor = RequestDescriptor(
            url=url,
            method=caller.method or method,
            headers=headers,
            body=body,
            timeout=caller.timeout,
        )
        logger.debug("Built %s %s for %s", descriptor.method, url, target)
        return descriptor

    def build_query(
        self,
        path: str,
        target: BackendTarget,
        data: Mapping[str, Any] | None = None,
        caller: CallerConfig | None = None,
    ) -> RequestDescriptor:
        """GET with ``data`` flattened into the query string."""
        if data:
            path = f"{path}?{encode_query(data)}"
        return self.build(path, target, HttpMethod.GET, caller=caller)

    def build_json(
        self,
        path: str,
        target: BackendTarget,
        method: HttpMethod,
        data: Any,
        caller: CallerConfig | None = None,
    ) -> RequestDescriptor:
        return self.build(path, target, method, encode_body(data), caller)

    def build_upload(
        self,
        path: str,
        data: Any,
        caller: CallerConfig | None = None,
    ) -> RequestDescriptor:
        """Multipart POST, always against the B2B base URL."""
        return self.build(
            path,
            BackendTarget.B2B_REST,
            HttpMethod.POST,
            encode_multipart(data),
            caller,
        )

    def url_for(self, path: str, target: BackendTarget) -> str:
        if target is BackendTarget.B2B_REST:
            return f"{self._endpoints.b2b_base_url}{path}"
        return path


class GraphQLBuilder:
    """Wrap a query/variables payload in a GraphQL POST envelope."""

    def __init__(
        self,
        config: Config,
        resolver: CredentialResolver,
        header_builder: HeaderBuilder,
    ) -> None:
        self._endpoints = config.endpoints
        self._resolver = resolver
        self._headers = header_builder

    def build(
        self,
        target: BackendTarget,
        data: Mapping[str, Any] | str,
        extra_headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> RequestDescriptor:
        if not target.is_graphql:
            raise ValueError(f"{target} is not a GraphQL target")
        headers = self._headers.build(
            self._resolver.resolve(target, bearer=True),
            extra_headers,
        )
        return RequestDescriptor(
            url=self.endpoint_for(target),
            method=HttpMethod.POST,
            headers=headers,
            body=encode_body(envelope(data)),
            timeout=timeout,
        )

    def endpoint_for(self, target: BackendTarget) -> str:
        # BC and proxy-BC share the platform endpoint; only the token differs
        if target is BackendTarget.B2B_GRAPHQL:
            return f"{self._endpoints.b2b_base_url}{GRAPHQL_PATH}"
        return f"{self._endpoints.bc_base_url}{GRAPHQL_PATH}"


def envelope(data: Mapping[str, Any] | str) -> dict[str, Any]:
    """Normalize a payload to ``{query, variables?}`` plus any extra members."""
    if isinstance(data, str):
        return {"query": data}
    if not isinstance(data, Mapping) or "query" not in data:
        raise EncodingError("GraphQL payload must contain a 'query'")
    body = dict(data)
    if body.get("variables") is None:
        body.pop("variables", None)
    return body
