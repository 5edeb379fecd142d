"""Diagnostic CLI for fetching feeds and update messages."""

import asyncio
import sys
from collections.abc import Callable, Coroutine
from typing import Any

import click

from feedcore import __version__
from feedcore.convert.converter import function_converter
from feedcore.fetch.client import ConditionalFetchClient
from feedcore.fetch.models import FetchError
from feedcore.fetch.typed import fetch_converted, get_feed, get_update_message
from feedcore.observability.logging import configure_logging
from feedcore.rss.discovery import discover_feed_uris
from feedcore.settings import get_settings


def _parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key:
            msg = f"Expected KEY=VALUE, got '{value}'"
            raise click.BadParameter(msg, param_hint="--param")
        params[key] = item
    return params


def _make_client() -> ConditionalFetchClient:
    settings = get_settings()
    configure_logging(level=settings.logging_level(), json_format=settings.log_json)
    return ConditionalFetchClient(config=settings.fetch_config())


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Fetch and inspect RSS feeds and update messages."""


@cli.command()
@click.argument("url")
def feed(url: str) -> None:
    """Fetch URL and print the normalized feed as JSON."""

    async def run() -> int:
        async with _make_client() as client:
            result = await get_feed(client, url)
        if result is None:
            click.echo("No feed available", err=True)
            return 1
        click.echo(result.model_dump_json(indent=2))
        return 0

    sys.exit(_run(run))


@cli.command()
@click.argument("url")
@click.option("--version", "version", required=True, help="Version to look up.")
@click.option("--param", "params", multiple=True, help="Extra KEY=VALUE query parameter.")
def update(url: str, version: str, params: tuple[str, ...]) -> None:
    """Fetch update messages from URL and print the one for VERSION."""
    query = _parse_params(params)

    async def run() -> int:
        async with _make_client() as client:
            message = await get_update_message(client, url, version, query)
        if message is None:
            click.echo(f"No update message for version {version}", err=True)
            return 1
        click.echo(message.model_dump_json(indent=2))
        return 0

    sys.exit(_run(run))


@cli.command()
@click.argument("url")
def discover(url: str) -> None:
    """List feed links advertised by the HTML page at URL."""

    async def run() -> int:
        async with _make_client() as client:
            result = await fetch_converted(
                client, url, function_converter(lambda body: body, default=bytes)
            )
        if result.value is None:
            click.echo(f"No content (HTTP {result.status_code})", err=True)
            return 1
        for uri in discover_feed_uris(result.value, base_url=url):
            click.echo(uri)
        return 0

    sys.exit(_run(run))


def _run(factory: Callable[[], Coroutine[Any, Any, int]]) -> int:
    try:
        return asyncio.run(factory())
    except FetchError as e:
        click.echo(f"Error: {e.message}", err=True)
        return 2


if __name__ == "__main__":
    cli()
