"""Public dispatch facade for all backend calls."""

from collections.abc import Mapping
from typing import Any

from core.builder import GraphQLBuilder, RequestBuilder
from core.protocols import Transport
from core.request_types import BackendTarget, CallerConfig, HttpMethod


class Dispatcher:
    """Route verb-shaped calls to the right backend with the right credential.

    Every operation is a coroutine resolving to the transport's parsed
    payload. Failures propagate unchanged.
    """

    def __init__(
        self,
        request_builder: RequestBuilder,
        graphql_builder: GraphQLBuilder,
        transport: Transport,
    ) -> None:
        self._rest = request_builder
        self._graphql = graphql_builder
        self._transport = transport

    async def get(
        self,
        path: str,
        target: BackendTarget,
        data: Mapping[str, Any] | None = None,
        config: CallerConfig | None = None,
    ) -> Any:
        descriptor = self._rest.build_query(path, target, data, config)
        return await self._transport.execute(descriptor, target)

    async def post(
        self,
        path: str,
        target: BackendTarget,
        data: Any,
        config: CallerConfig | None = None,
    ) -> Any:
        descriptor = self._rest.build_json(path, target, HttpMethod.POST, data, config)
        return await self._transport.execute(descriptor, target)

    async def put(
        self,
        path: str,
        target: BackendTarget,
        data: Any,
        config: CallerConfig | None = None,
    ) -> Any:
        descriptor = self._rest.build_json(path, target, HttpMethod.PUT, data, config)
        return await self._transport.execute(descriptor, target)

    async def delete(
        self,
        path: str,
        target: BackendTarget,
        config: CallerConfig | None = None,
    ) -> Any:
        descriptor = self._rest.build(path, target, HttpMethod.DELETE, caller=config)
        return await self._transport.execute(descriptor, target)

    async def file_upload(
        self,
        path: str,
        data: Any,
        config: CallerConfig | None = None,
    ) -> Any:
        """Multipart upload to the B2B service."""
        descriptor = self._rest.build_upload(path, data, config)
        return await self._transport.execute(descriptor, BackendTarget.B2B_REST)

    async def graphql_b2b(
        self,
        data: Mapping[str, Any] | str,
        suppress_errors: bool = False,
    ) -> Any:
        return await self._graphql_call(BackendTarget.B2B_GRAPHQL, data, suppress_errors)

    async def graphql_proxy_bc(self, data: Mapping[str, Any] | str) -> Any:
        """Query the platform GraphQL API with the proxy JWT."""
        return await self._graphql_call(BackendTarget.BC_PROXY_GRAPHQL, data)

    async def graphql_bc(self, data: Mapping[str, Any] | str) -> Any:
        return await self._graphql_call(BackendTarget.BC_GRAPHQL, data)

    async def _graphql_call(
        self,
        target: BackendTarget,
        data: Mapping[str, Any] | str,
        suppress_errors: bool = False,
    ) -> Any:
        descriptor = self._graphql.build(target, data)
        return await self._transport.execute(descriptor, target, suppress_errors)
