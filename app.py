"""Dispatcher factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from core.builder import GraphQLBuilder, RequestBuilder
from core.config import Config
from core.credentials import CredentialResolver
from core.headers import HeaderBuilder
from core.protocols import CookieJar, CredentialStore, RequestLogger
from services.dispatcher import Dispatcher
from services.storage import HttpxCookieJar
from services.transport import HttpxTransport, create_client


def build_dispatcher(
    config: Config,
    store: CredentialStore,
    cookies: CookieJar | None,
    client: httpx.AsyncClient,
    logger: RequestLogger | None = None,
) -> Dispatcher:
    """Wire a dispatcher around an existing client.

    Without an explicit cookie jar the client's own cookies are used, so an
    ``XSRF-TOKEN`` set by an earlier platform response is sent on BCRest calls.
    """
    if cookies is None:
        cookies = HttpxCookieJar(client.cookies)
    resolver = CredentialResolver(config, store, cookies)
    header_builder = HeaderBuilder()
    return Dispatcher(
        request_builder=RequestBuilder(config, resolver, header_builder),
        graphql_builder=GraphQLBuilder(config, resolver, header_builder),
        transport=HttpxTransport(client, config, logger),
    )


@asynccontextmanager
async def create_dispatcher(
    config: Config,
    store: CredentialStore,
    cookies: CookieJar | None = None,
    logger: RequestLogger | None = None,
) -> AsyncIterator[Dispatcher]:
    """Create a dispatcher and close its HTTP client on exit."""
    client = create_client(config)
    try:
        yield build_dispatcher(config, store, cookies, client, logger)
    finally:
        await client.aclose()
