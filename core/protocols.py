"""Shared protocol definitions."""

from typing import Any, Protocol

from core.request_types import BackendTarget, RequestDescriptor


class CredentialStore(Protocol):
    """Read access to persisted session tokens."""

    def get(self, key: str) -> str | None: ...


class CookieJar(Protocol):
    """Read access to browser-style cookies."""

    def get(self, name: str) -> str | None: ...


class Transport(Protocol):
    """Executes a descriptor and returns the parsed payload or raises."""

    async def execute(
        self,
        descriptor: RequestDescriptor,
        target: BackendTarget,
        suppress_errors: bool = False,
    ) -> Any: ...


class RequestLogger(Protocol):
    """Protocol for request logging."""

    def log_request(self, descriptor: RequestDescriptor, target: BackendTarget) -> None: ...
    def log_response(self, target: BackendTarget, status: int, elapsed: float) -> None: ...
    def log_error(self, target: BackendTarget, status: int, message: str) -> None: ...
