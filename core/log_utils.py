"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from core.request_types import BackendTarget, MultipartForm, RequestDescriptor

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "dispatch.log"

_SENSITIVE = ("authtoken", "authorization", "x-xsrf-token")


class NullRequestLogger:
    """Discard all request events."""

    def log_request(self, descriptor: RequestDescriptor, target: BackendTarget) -> None:
        pass

    def log_response(self, target: BackendTarget, status: int, elapsed: float) -> None:
        pass

    def log_error(self, target: BackendTarget, status: int, message: str) -> None:
        pass


class FileRequestLogger:
    """Write request logs as JSON files and errors to the rolling log."""

    def __init__(self, log_root: Path = LOG_ROOT) -> None:
        self.log_root = log_root

    def log_request(self, descriptor: RequestDescriptor, target: BackendTarget) -> None:
        write_request_log(descriptor, target, log_root=self.log_root)

    def log_response(self, target: BackendTarget, status: int, elapsed: float) -> None:
        write_cli_log(
            "INFO",
            "Response",
            target=target,
            status=status,
            elapsed=f"{elapsed:.3f}s",
            log_file=self.log_root / CLI_LOG_FILE.name,
        )

    def log_error(self, target: BackendTarget, status: int, message: str) -> None:
        write_cli_log(
            "ERROR",
            message,
            target=target,
            status=status,
            log_file=self.log_root / CLI_LOG_FILE.name,
        )


def write_request_log(
    descriptor: RequestDescriptor,
    target: BackendTarget,
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single outbound request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "target": str(target),
        "method": str(descriptor.method),
        "url": descriptor.url,
        "headers": redact_headers(descriptor.headers),
        "body": _loggable_body(descriptor.body),
    }
    return _write_json(log_root / "requests" / str(target), payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path = CLI_LOG_FILE,
    **extra: Any,
) -> None:
    """Append a line to the rolling dispatch log file."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact credential headers."""
    redacted = {}
    for key, value in headers.items():
        key_lower = key.lower()
        if key_lower in _SENSITIVE or "key" in key_lower or "token" in key_lower:
            redacted[key] = mask(value)
        else:
            redacted[key] = value
    return redacted


def mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


def _loggable_body(body: str | MultipartForm | None) -> Any:
    if isinstance(body, MultipartForm):
        return {"fields": dict(body.fields), "files": sorted(body.files)}
    if body is None:
        return None
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return body


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
