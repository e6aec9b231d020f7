"""Credential resolution per backend target."""

import logging

from core.config import Config
from core.exceptions import MissingCredentialError
from core.protocols import CookieJar, CredentialStore
from core.request_types import BackendTarget, Credential

logger = logging.getLogger(__name__)

AUTH_TOKEN_HEADER = "authToken"
AUTHORIZATION_HEADER = "Authorization"
XSRF_HEADER = "x-xsrf-token"

# Two spaces after "Bearer" match what the backends currently receive.
BEARER_PREFIX = "Bearer  "


class CredentialResolver:
    """Resolve the auth header for a backend target.

    Tokens are read fresh from the store on every call and never kept here.
    """

    def __init__(
        self,
        config: Config,
        store: CredentialStore,
        cookies: CookieJar,
    ) -> None:
        self._keys = config.storage
        self._strict = config.credentials.require_credentials
        self._store = store
        self._cookies = cookies

    def resolve(self, target: BackendTarget, *, bearer: bool = False) -> Credential:
        """Return the credential for ``target``.

        With ``bearer=True`` the target's token is always sent as an
        ``Authorization: Bearer`` header, which is how GraphQL endpoints
        expect it.
        """
        if target is BackendTarget.BC_REST and not bearer:
            value = self._read_cookie(target, self._keys.xsrf_cookie)
            return Credential(XSRF_HEADER, value)

        key = self.store_key(target)
        value = self._read_store(target, key)
        if bearer or target in (BackendTarget.BC_GRAPHQL, BackendTarget.BC_PROXY_GRAPHQL):
            return Credential(AUTHORIZATION_HEADER, f"{BEARER_PREFIX}{value}")
        return Credential(AUTH_TOKEN_HEADER, value)

    def store_key(self, target: BackendTarget) -> str:
        """Return the store (or cookie) key holding the token for ``target``."""
        match target:
            case BackendTarget.B2B_REST | BackendTarget.B2B_GRAPHQL:
                return self._keys.b2b_token
            case BackendTarget.BC_GRAPHQL:
                return self._keys.bc_token
            case BackendTarget.BC_PROXY_GRAPHQL:
                return self._keys.bc_jwt_token
            case BackendTarget.BC_REST:
                return self._keys.xsrf_cookie
        raise ValueError(f"Unsupported backend target: {target!r}")

    def _read_store(self, target: BackendTarget, key: str) -> str:
        return self._checked(target, key, self._store.get(key))

    def _read_cookie(self, target: BackendTarget, name: str) -> str:
        return self._checked(target, name, self._cookies.get(name))

    def _checked(self, target: BackendTarget, key: str, value: str | None) -> str:
        if value:
            return value
        if self._strict:
            raise MissingCredentialError(str(target), key)
        logger.warning("No credential under %r for %s; sending unauthenticated", key, target)
        return ""
