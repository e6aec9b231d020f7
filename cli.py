"""CLI entry point for b3-request."""

import asyncio
import json
import sys
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.pretty import Pretty
from rich.table import Table

from app import create_dispatcher
from core.config import CONFIG_FILE, Config, load_config
from core.credentials import CredentialResolver
from core.exceptions import DispatchError
from core.log_utils import FileRequestLogger, mask
from core.request_types import BackendTarget
from services.storage import TOKENS_FILE, FileCredentialStore, MemoryCookieJar

console = Console()

REST_VERBS = ("get", "post", "put", "delete")
GRAPHQL_OPERATIONS = {
    "b2b": "graphql_b2b",
    "bc": "graphql_bc",
    "proxy-bc": "graphql_proxy_bc",
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    config = load_config()
    store = FileCredentialStore()

    if not args or args[0] in ("--help", "-h"):
        _print_help()
        return 0

    command, rest = args[0], args[1:]

    if command == "--config":
        console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
        console.print(f"[bold]Tokens:[/bold] {TOKENS_FILE}")
        return 0

    if command in ("--check", "--auth"):
        print_credential_status(config, store)
        return 0

    if command == "--set-token":
        if len(rest) != 2:
            return _usage_error("--set-token needs KEY VALUE")
        store.set(rest[0], rest[1])
        console.print(f"[green]Stored[/green] {rest[0]}")
        return 0

    if command == "--logout":
        store.clear()
        console.print("[yellow]Tokens cleared[/yellow]")
        return 0

    try:
        if command in REST_VERBS:
            result = asyncio.run(_run_rest(config, store, command, rest))
        elif command == "graphql":
            result = asyncio.run(_run_graphql(config, store, rest))
        else:
            return _usage_error(f"Unknown command: {command}")
    except (DispatchError, ValueError) as e:
        console.print(f"[red][ERROR][/red] {escape(str(e))}")
        return 1

    console.print(Pretty(result))
    return 0


def print_credential_status(config: Config, store: FileCredentialStore) -> None:
    """Show which credential each target would send."""
    resolver = CredentialResolver(config, store, MemoryCookieJar())
    table = Table(title="Credentials")
    table.add_column("Target")
    table.add_column("Key")
    table.add_column("Status")
    for target in BackendTarget:
        key = resolver.store_key(target)
        if target is BackendTarget.BC_REST:
            table.add_row(str(target), key, "[dim]cookie, set by platform responses[/dim]")
            continue
        value = store.get(key)
        status = f"[green]{mask(value)}[/green]" if value else "[yellow]missing[/yellow]"
        table.add_row(str(target), key, status)
    console.print(table)


async def _run_rest(
    config: Config,
    store: FileCredentialStore,
    verb: str,
    args: list[str],
) -> Any:
    if len(args) < 2:
        raise ValueError(f"{verb} needs PATH TARGET [JSON]")
    path, target = args[0], BackendTarget(args[1])
    data = json.loads(args[2]) if len(args) > 2 else None

    async with create_dispatcher(config, store, logger=FileRequestLogger()) as dispatcher:
        if verb == "get":
            return await dispatcher.get(path, target, data)
        if verb == "delete":
            return await dispatcher.delete(path, target)
        return await getattr(dispatcher, verb)(path, target, data)


async def _run_graphql(config: Config, store: FileCredentialStore, args: list[str]) -> Any:
    if len(args) < 2 or args[0] not in GRAPHQL_OPERATIONS:
        raise ValueError(f"graphql needs one of {', '.join(GRAPHQL_OPERATIONS)} and a QUERY")
    payload: dict[str, Any] = {"query": args[1]}
    if len(args) > 2:
        payload["variables"] = json.loads(args[2])

    async with create_dispatcher(config, store, logger=FileRequestLogger()) as dispatcher:
        operation = getattr(dispatcher, GRAPHQL_OPERATIONS[args[0]])
        return await operation(payload)


def _usage_error(message: str) -> int:
    console.print(f"[red][ERROR][/red] {escape(message)}")
    console.print("[dim]Run b3-request --help for usage[/dim]")
    return 1


def _print_help():
    """Print help message."""
    targets = ", ".join(t.value for t in BackendTarget)
    help_text = f"""
[bold cyan]b3-request[/bold cyan]

Dispatches requests to the B2B service and the storefront platform.

[bold]Usage:[/bold]
    b3-request get|post|put|delete PATH TARGET [JSON]
    b3-request graphql b2b|bc|proxy-bc QUERY [VARIABLES_JSON]
    b3-request --check                Show stored credentials per target
    b3-request --set-token KEY VALUE  Store a session token
    b3-request --logout               Clear stored tokens
    b3-request --config               Show config locations
    b3-request --help                 Show this help

[bold]Targets:[/bold]
    {targets}

    BCRest sends the XSRF-TOKEN cookie from the platform's responses. A single
    CLI call starts with no cookies, so its x-xsrf-token header is empty.
"""
    console.print(help_text)


if __name__ == "__main__":
    sys.exit(main())
