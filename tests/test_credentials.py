"""Tests for per-target credential resolution."""

from __future__ import annotations

import logging

import pytest

from core.config import Config, CredentialSettings
from core.credentials import CredentialResolver
from core.exceptions import MissingCredentialError
from core.request_types import BackendTarget, Credential
from services.storage import MemoryCookieJar, MemoryCredentialStore


class TestTargetMapping:
    """Each target resolves to exactly one header from its own key."""

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (BackendTarget.B2B_REST, Credential("authToken", "b2b-token")),
            (BackendTarget.B2B_GRAPHQL, Credential("authToken", "b2b-token")),
            (BackendTarget.BC_REST, Credential("x-xsrf-token", "xsrf-value")),
            (BackendTarget.BC_GRAPHQL, Credential("Authorization", "Bearer  bc-token")),
            (BackendTarget.BC_PROXY_GRAPHQL, Credential("Authorization", "Bearer  bc-jwt")),
        ],
    )
    def test_resolve(self, resolver, target, expected):
        credential = resolver.resolve(target)

        assert credential == expected
        assert len(credential.as_headers()) == 1

    def test_bc_tokens_are_not_interchangeable(self, resolver):
        bc = resolver.resolve(BackendTarget.BC_GRAPHQL)
        proxy = resolver.resolve(BackendTarget.BC_PROXY_GRAPHQL)

        assert bc.header == proxy.header
        assert bc.value != proxy.value

    def test_bearer_mode_uses_target_token(self, resolver):
        credential = resolver.resolve(BackendTarget.B2B_GRAPHQL, bearer=True)

        assert credential == Credential("Authorization", "Bearer  b2b-token")

    def test_store_keys(self, resolver):
        assert resolver.store_key(BackendTarget.B2B_REST) == "B3B2BToken"
        assert resolver.store_key(BackendTarget.BC_GRAPHQL) == "BcToken"
        assert resolver.store_key(BackendTarget.BC_PROXY_GRAPHQL) == "bc_jwt_token"
        assert resolver.store_key(BackendTarget.BC_REST) == "XSRF-TOKEN"


class TestMissingCredential:
    """Absent tokens are forwarded as empty values unless required."""

    def test_missing_token_resolves_empty(self, config, caplog):
        resolver = CredentialResolver(config, MemoryCredentialStore(), MemoryCookieJar())

        with caplog.at_level(logging.WARNING, logger="core.credentials"):
            credential = resolver.resolve(BackendTarget.B2B_REST)

        assert credential == Credential("authToken", "")
        assert "B3B2BToken" in caplog.text

    def test_missing_bearer_keeps_prefix(self, config):
        resolver = CredentialResolver(config, MemoryCredentialStore(), MemoryCookieJar())

        assert resolver.resolve(BackendTarget.BC_GRAPHQL).value == "Bearer  "

    def test_missing_cookie_resolves_empty(self, config, store):
        resolver = CredentialResolver(config, store, MemoryCookieJar())

        assert resolver.resolve(BackendTarget.BC_REST) == Credential("x-xsrf-token", "")

    def test_strict_mode_raises(self):
        config = Config(credentials=CredentialSettings(require_credentials=True))
        resolver = CredentialResolver(config, MemoryCredentialStore(), MemoryCookieJar())

        with pytest.raises(MissingCredentialError) as exc_info:
            resolver.resolve(BackendTarget.BC_PROXY_GRAPHQL)

        assert exc_info.value.key == "bc_jwt_token"
        assert exc_info.value.target == "BCProxyGraphql"


class TestFreshReads:
    def test_token_changes_are_picked_up(self, resolver, store):
        assert resolver.resolve(BackendTarget.B2B_REST).value == "b2b-token"

        store.set("B3B2BToken", "rotated")

        assert resolver.resolve(BackendTarget.B2B_REST).value == "rotated"

    def test_resolver_never_writes(self, resolver, store):
        resolver.resolve(BackendTarget.B2B_REST)
        resolver.resolve(BackendTarget.BC_GRAPHQL)

        assert store.get("B3B2BToken") == "b2b-token"
        assert store.get("BcToken") == "bc-token"
