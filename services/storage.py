"""Credential stores and cookie jars backing the resolver."""

import json
import logging
from pathlib import Path

import httpx

from core.config import CONFIG_DIR

logger = logging.getLogger(__name__)

TOKENS_FILE = CONFIG_DIR / "tokens.json"


class MemoryCredentialStore:
    """Session-scoped token storage held in memory."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self._tokens = dict(tokens or {})

    def get(self, key: str) -> str | None:
        return self._tokens.get(key)

    def set(self, key: str, value: str) -> None:
        self._tokens[key] = value

    def clear(self) -> None:
        """Drop every token, as on logout."""
        self._tokens.clear()


class FileCredentialStore:
    """Tokens persisted in a JSON file, re-read on every lookup."""

    def __init__(self, path: Path = TOKENS_FILE) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        tokens = self._load()
        tokens[key] = value
        self._save(tokens)

    def clear(self) -> None:
        if self.path.exists():
            self._save({})

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, tokens: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(tokens, indent=2))
        self.path.chmod(0o600)


class MemoryCookieJar:
    """Plain name/value cookies."""

    def __init__(self, cookies: dict[str, str] | None = None) -> None:
        self._cookies = dict(cookies or {})

    def get(self, name: str) -> str | None:
        return self._cookies.get(name)


class HttpxCookieJar:
    """Expose an ``httpx.Cookies`` jar as a read-only cookie source."""

    def __init__(self, cookies: httpx.Cookies) -> None:
        self._cookies = cookies

    def get(self, name: str) -> str | None:
        # Raises httpx.CookieConflict when the name is set for several domains
        return self._cookies.get(name)
