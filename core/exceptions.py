"""Custom exception hierarchy for the request dispatcher."""

from typing import Any


class DispatchError(Exception):
    """Base exception for all dispatch errors."""


class ConfigurationError(DispatchError):
    """Raised when configuration is missing or invalid."""


class EncodingError(DispatchError):
    """Raised when a payload cannot be serialized for the wire."""


class MissingCredentialError(DispatchError):
    """Raised when a credential is absent and credentials are required.

    Attributes:
        target: Backend target the credential was resolved for
        key: Store or cookie key that was empty
    """

    def __init__(self, target: str, key: str) -> None:
        super().__init__(f"No credential stored under {key!r} for {target}")
        self.target = target
        self.key = key


class TransportError(DispatchError):
    """Raised when the transport fails to complete a request.

    Attributes:
        message: Error message
        status_code: HTTP status code from the backend (optional)
        target: Backend target name (e.g., 'B2BRest', 'BCGraphql')
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.target = target


class TransportTimeoutError(TransportError):
    """Raised when a backend request times out."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
    ) -> None:
        super().__init__(message, status_code=None, target=target)


class TransportConnectionError(TransportError):
    """Raised when unable to connect to a backend."""

    def __init__(
        self,
        message: str,
        target: str | None = None,
    ) -> None:
        super().__init__(message, status_code=None, target=target)


class TransportStatusError(TransportError):
    """Raised when a backend answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        target: str | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, status_code=status_code, target=target)
        self.body = body


class MalformedResponseError(TransportError):
    """Response body is not valid JSON."""


class GraphQLResponseError(TransportError):
    """GraphQL response carried a non-empty ``errors`` array."""

    def __init__(
        self,
        errors: list[Any],
        status_code: int | None = None,
        target: str | None = None,
    ) -> None:
        first = errors[0] if errors else {}
        message = first.get("message", "GraphQL error") if isinstance(first, dict) else str(first)
        super().__init__(message, status_code=status_code, target=target)
        self.errors = errors
