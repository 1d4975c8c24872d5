"""User settings CLI.

Operator helpers around the settings store: provisioning the encryption key
at startup, inspecting paths, and reading or changing single settings.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Final

import typer
from dotenv import load_dotenv

from usersettings.constants import ENCRYPTION_KEY_FIELD
from usersettings.errors import SettingsError
from usersettings.paths import PathResolver
from usersettings.settings import KeyProvisioner, SettingsStore

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="User settings store CLI", add_completion=False)

logger: Final = logging.getLogger(__name__)  # Will be "usersettings.cli"

MASK = "********"

DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
FILE_OPTION = typer.Option(None, "--file", "-f", dir_okay=False, help="Settings file to use")
REVEAL_OPTION = typer.Option(False, "--reveal", help="Print the encryption key unmasked")
KEY_ARGUMENT = typer.Argument(..., help="Top-level settings key")
VALUE_ARGUMENT = typer.Argument(..., help="JSON value, or a plain string")


def _provisioner() -> KeyProvisioner:
    return KeyProvisioner(SettingsStore(PathResolver()))


def _fail(exc: Exception) -> typer.Exit:
    logger.debug("Command failed", exc_info=exc)
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.callback()
def main(debug: bool = DEBUG_OPTION) -> None:
    """Load .env and configure logging before any command runs."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@app.command()
def init(file: Path | None = FILE_OPTION) -> None:
    """Create the settings file with an encryption key if needed."""
    provisioner = _provisioner()
    try:
        asyncio.run(provisioner.ensure_key(file))
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.echo(f"Settings ready at {provisioner.store.resolver.resolve(file)}")


@app.command()
def paths() -> None:
    """Show where settings and custom extensions are looked up."""
    resolver = PathResolver()
    typer.echo(f"Home:              {resolver.user_home()}")
    typer.echo(
        f"Data folder:       {resolver.data_folder_path()} ({resolver.data_folder_source()})"
    )
    typer.echo(f"Settings file:     {resolver.settings_file_path()}")
    typer.echo(f"Custom extensions: {resolver.custom_extensions_path()}")


@app.command()
def show(file: Path | None = FILE_OPTION, reveal: bool = REVEAL_OPTION) -> None:
    """Print the stored settings document."""
    store = SettingsStore(PathResolver())
    try:
        settings = asyncio.run(store.load(file))
    except SettingsError as exc:
        raise _fail(exc) from exc
    if settings is None:
        typer.secho("No settings file found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    if not reveal and settings.get(ENCRYPTION_KEY_FIELD) is not None:
        settings[ENCRYPTION_KEY_FIELD] = MASK
    typer.echo(json.dumps(settings, indent=2, ensure_ascii=False))


@app.command("set")
def set_value(
    key: str = KEY_ARGUMENT,
    value: str = VALUE_ARGUMENT,
    file: Path | None = FILE_OPTION,
) -> None:
    """Set one top-level setting, keeping all others."""
    store = SettingsStore(PathResolver())
    try:
        asyncio.run(store.merge({key: _parse_value(value)}, file))
    except SettingsError as exc:
        raise _fail(exc) from exc
    typer.secho(f"{key} saved to {store.resolver.resolve(file)}", fg=typer.colors.GREEN)


@app.command()
def key(reveal: bool = REVEAL_OPTION) -> None:
    """Print the encryption key currently in effect."""
    provisioner = _provisioner()
    try:
        value = asyncio.run(provisioner.effective_key())
    except SettingsError as exc:
        raise _fail(exc) from exc
    if value is None:
        typer.secho("No encryption key found, run 'init' first", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    source = "environment" if provisioner.key_from_environment() else "settings file"
    typer.echo(f"{value if reveal else MASK} ({source})")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
