"""Shared fixtures for dispatch tests."""

from __future__ import annotations

from typing import Any

import pytest

from core.builder import GraphQLBuilder, RequestBuilder
from core.config import Config, EndpointSettings
from core.credentials import CredentialResolver
from core.headers import HeaderBuilder
from core.request_types import BackendTarget, RequestDescriptor
from services.dispatcher import Dispatcher
from services.storage import MemoryCookieJar, MemoryCredentialStore

B2B_BASE = "https://b2b.test"
BC_BASE = "https://shop.test"


class RecordingTransport:
    """Transport double that records every call and returns a canned payload."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.calls: list[tuple[RequestDescriptor, BackendTarget, bool]] = []
        self.result = result
        self.error = error

    async def execute(
        self,
        descriptor: RequestDescriptor,
        target: BackendTarget,
        suppress_errors: bool = False,
    ) -> Any:
        self.calls.append((descriptor, target, suppress_errors))
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def last(self) -> tuple[RequestDescriptor, BackendTarget, bool]:
        return self.calls[-1]


@pytest.fixture
def config() -> Config:
    return Config(endpoints=EndpointSettings(b2b_base_url=B2B_BASE, bc_base_url=BC_BASE))


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore(
        {
            "B3B2BToken": "b2b-token",
            "BcToken": "bc-token",
            "bc_jwt_token": "bc-jwt",
        }
    )


@pytest.fixture
def cookies() -> MemoryCookieJar:
    return MemoryCookieJar({"XSRF-TOKEN": "xsrf-value"})


@pytest.fixture
def resolver(config, store, cookies) -> CredentialResolver:
    return CredentialResolver(config, store, cookies)


@pytest.fixture
def request_builder(config, resolver) -> RequestBuilder:
    return RequestBuilder(config, resolver, HeaderBuilder())


@pytest.fixture
def graphql_builder(config, resolver) -> GraphQLBuilder:
    return GraphQLBuilder(config, resolver, HeaderBuilder())


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(result={"ok": True})


@pytest.fixture
def dispatcher(request_builder, graphql_builder, transport) -> Dispatcher:
    return Dispatcher(request_builder, graphql_builder, transport)
