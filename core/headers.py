"""Header construction for outbound requests."""

from collections.abc import Mapping

from core.request_types import Credential

JSON_HEADERS = {"content-type": "application/json"}


class HeaderBuilder:
    """Build outbound headers as an ordered merge pipeline.

    Layers apply in order: defaults, caller overrides, credential. A later
    layer replaces an earlier key case-insensitively, so the credential
    header can never be overridden by the caller.
    """

    def build(
        self,
        credential: Credential,
        overrides: Mapping[str, str] | None = None,
        *,
        multipart: bool = False,
    ) -> dict[str, str]:
        defaults = {} if multipart else dict(JSON_HEADERS)
        return merge_headers(defaults, overrides or {}, credential.as_headers())


def merge_headers(*layers: Mapping[str, str]) -> dict[str, str]:
    """Merge header layers, last write wins per (case-insensitive) key."""
    merged: dict[str, str] = {}
    for layer in layers:
        for key, value in layer.items():
            for existing in [k for k in merged if k.lower() == key.lower()]:
                del merged[existing]
            merged[key] = str(value)
    return merged
