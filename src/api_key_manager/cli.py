import asyncio
import dataclasses
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Coroutine, TypeVar

import typer

from .backends import JsonFileConfigStore
from .config import load_settings
from .exceptions import APIKeyError, UnknownKeyError
from .manager import KeyManager
from .models import HeaderRequest, KeyRecord, KeyStatus

T = TypeVar("T")

app = typer.Typer(help="Issue and manage API keys")


@app.callback()
def main(
    ctx: typer.Context,
    store: Annotated[
        Path | None, typer.Option(help="Path to the JSON key store")
    ] = None,
    header: Annotated[
        str | None, typer.Option(help="Request header carrying the key")
    ] = None,
    config: Annotated[Path | None, typer.Option(help="Path to config file")] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
):
    """Issue and manage API keys stored in a JSON key store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    settings = load_settings(config)
    ctx.obj = KeyManager(
        JsonFileConfigStore(store or settings.store_path),
        header or settings.header_name,
    )


def _request(manager: KeyManager, key: str) -> HeaderRequest:
    return HeaderRequest({manager.header_name: key})


def _clean_key(key: str) -> str:
    """Trim the key the same way request headers are trimmed."""
    key = key.strip()
    if not key:
        typer.echo("⚠ Error: API key must not be blank", err=True)
        raise typer.Exit(1)
    return key


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except APIKeyError as exc:
        typer.echo(f"⚠ Error: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    ctx: typer.Context,
    issuee: Annotated[
        str | None, typer.Option(help="Register the new key for this identity")
    ] = None,
    expires: Annotated[
        datetime | None, typer.Option(help="Expiry date (UTC)")
    ] = None,
    inactive: Annotated[
        bool, typer.Option("--inactive", help="Register the key deactivated")
    ] = False,
):
    """Generate a new API key, optionally registering it."""
    manager: KeyManager = ctx.obj
    key = manager.generate_key()

    if issuee:
        record = KeyRecord(issuee=issuee, is_active=not inactive, expiry_date=expires)
        _run(manager.upsert(key, record))

    typer.echo(key)


@app.command()
def put(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
    issuee: Annotated[str, typer.Option(help="Identity the key is issued to")],
    expires: Annotated[
        datetime | None, typer.Option(help="Expiry date (UTC)")
    ] = None,
    active: Annotated[
        bool, typer.Option("--active/--inactive", help="Whether the key is usable")
    ] = True,
):
    """Insert or update an API key record."""
    manager: KeyManager = ctx.obj
    key = _clean_key(key)
    record = KeyRecord(issuee=issuee, is_active=active, expiry_date=expires)
    _run(manager.upsert(key, record))
    typer.echo(f"✓ Stored: {key}")


@app.command()
def delete(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
):
    """Delete an API key."""
    manager: KeyManager = ctx.obj
    key = _clean_key(key)
    _run(manager.delete(key))
    typer.echo(f"✗ Deleted: {key}")


@app.command()
def status(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
):
    """Print the current status of an API key."""
    manager: KeyManager = ctx.obj
    key = _clean_key(key)

    async def run() -> KeyStatus:
        try:
            record = await manager.require_existing_key(_request(manager, key))
        except UnknownKeyError:
            return KeyStatus.DOES_NOT_EXIST
        return manager.status(record)

    typer.echo(_run(run()).name)


@app.command()
def check(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
):
    """Validate an API key the way an incoming request would be."""
    manager: KeyManager = ctx.obj
    record = _run(manager.require_valid_key(_request(manager, _clean_key(key))))
    typer.echo(f"valid: {record.issuee}")


def _set_active(manager: KeyManager, key: str, active: bool) -> str:
    key = _clean_key(key)

    async def run() -> None:
        record = await manager.require_existing_key(_request(manager, key))
        await manager.upsert(key, dataclasses.replace(record, is_active=active))

    _run(run())
    return key


@app.command()
def activate(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
):
    """Re-enable a deactivated API key."""
    key = _set_active(ctx.obj, key, True)
    typer.echo(f"✓ Activated: {key}")


@app.command()
def deactivate(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="API key")],
):
    """Switch an API key off without deleting it."""
    key = _set_active(ctx.obj, key, False)
    typer.echo(f"✓ Deactivated: {key}")


if __name__ == "__main__":
    app()
