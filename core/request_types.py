"""Shared request data types."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class BackendTarget(StrEnum):
    """Backend system and protocol a request addresses."""

    B2B_REST = "B2BRest"
    BC_REST = "BCRest"
    B2B_GRAPHQL = "B2BGraphql"
    BC_GRAPHQL = "BCGraphql"
    BC_PROXY_GRAPHQL = "BCProxyGraphql"

    @property
    def is_graphql(self) -> bool:
        return self in (
            BackendTarget.B2B_GRAPHQL,
            BackendTarget.BC_GRAPHQL,
            BackendTarget.BC_PROXY_GRAPHQL,
        )


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Credential:
    """Header name and value proving identity to one backend."""

    header: str
    value: str

    def as_headers(self) -> dict[str, str]:
        return {self.header: self.value}


@dataclass(frozen=True)
class MultipartForm:
    """Opaque multipart payload for file uploads.

    ``files`` takes anything httpx accepts for ``files=``, e.g.
    ``{"file": ("report.csv", b"...", "text/csv")}``.
    """

    fields: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CallerConfig:
    """Optional per-call overrides supplied by the caller."""

    headers: Mapping[str, str] | None = None
    method: HttpMethod | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully assembled, transport-ready request."""

    url: str
    method: HttpMethod
    headers: dict[str, str]
    body: str | MultipartForm | None = None
    timeout: float | None = None
