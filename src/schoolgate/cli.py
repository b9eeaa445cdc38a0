"""
Schoolgate CLI

Command-line interface for the Schoolgate tool layer.

Commands:
    schoolgate status                 — Show safety settings and catalog size
    schoolgate tools [--json] [--tier] — List the tools advertised under the current policy
    schoolgate serve --client mod:obj — Start the API server against a remote client

Usage:
    ALLOW_DESTRUCTIVE=true schoolgate tools
"""

from __future__ import annotations

import importlib
import json
import sys
from typing import Any

import click

from schoolgate import __version__
from schoolgate.config import ServerSettings
from schoolgate.exceptions import ConfigurationError
from schoolgate.logging import configure_logging
from schoolgate.tools.catalog import smartschool_catalog


def _load_settings() -> ServerSettings:
    try:
        return ServerSettings.from_env()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from None


def _load_object(path: str) -> Any:
    """Import 'package.module:attribute'."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(f"expected 'module:attribute', got {path!r}", param_hint="--client")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import {module_name}: {e}", param_hint="--client") from None
    try:
        return getattr(module, attr)
    except AttributeError:
        raise click.BadParameter(f"{module_name} has no attribute {attr!r}", param_hint="--client") from None


@click.group()
@click.version_option(version=__version__, prog_name="schoolgate")
def cli() -> None:
    """Schoolgate — Safety-gated Smartschool tools for AI agents"""


@cli.command()
def status() -> None:
    """Show safety settings and catalog status."""
    settings = _load_settings()
    catalog = smartschool_catalog(tool_prefix=settings.tool_prefix)
    advertised = catalog.advertised(settings.policy)

    _print_header("Schoolgate Status")
    click.echo(f"  Version: {__version__}")
    click.echo(f"  Python: {sys.version.split()[0]}")
    click.echo("\n  Safety Settings:")
    for line in settings.policy.describe():
        click.echo(f"    {line}")
    click.echo(f"\n  Tools: {len(advertised)} of {len(catalog)} operations advertised")
    if settings.remote_timeout is not None:
        click.echo(f"  Remote timeout: {settings.remote_timeout:g}s")


@cli.command()
@click.option("--json-output", "--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--tier", type=click.Choice(["safe", "moderate", "destructive", "critical"]),
              help="Only list tools of this risk tier")
def tools(json_output: bool, tier: str | None) -> None:
    """List the tools advertised under the current policy."""
    settings = _load_settings()
    catalog = smartschool_catalog(tool_prefix=settings.tool_prefix)
    descriptors = catalog.descriptors(settings.policy)
    if tier:
        descriptors = [d for d in descriptors if d.tier.value == tier]

    if json_output:
        click.echo(json.dumps([d.model_dump(mode="json") for d in descriptors], indent=2))
        return

    _print_header(f"Advertised Tools ({len(descriptors)})")
    for d in descriptors:
        marker = " [confirm]" if d.requires_confirmation else ""
        click.echo(f"  {d.name:50s} {d.tier.value:12s}{marker}")


@cli.command()
@click.option("--client", "client_path", required=True,
              help="Remote client object as 'module:attribute'")
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Port number")
def serve(client_path: str, host: str, port: int) -> None:
    """Start the Schoolgate API server."""
    import uvicorn

    from schoolgate.api.server import app, host as tool_host

    settings = _load_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)
    tool_host.attach_client(_load_object(client_path))
    uvicorn.run(app, host=host, port=port)


def _print_header(title: str) -> None:
    click.echo(f"\n  {'=' * 60}")
    click.echo(f"  {title}")
    click.echo(f"  {'=' * 60}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
