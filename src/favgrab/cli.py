"""Command-line interface for favgrab."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog
import uvicorn
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from favgrab import __version__
from favgrab.config import Config, load_config
from favgrab.extractor.models import LookupOutcome
from favgrab.i18n import Localizer
from favgrab.observability import configure_logging
from favgrab.pipeline import LookupPipeline
from favgrab.relay import RelayClient
from favgrab.sites import EXAMPLE_SITES, find_example

console = Console()
logger = structlog.get_logger(__name__)

LOCALE_CHOICE = click.Choice(Localizer.available())


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """favgrab - find a website's icons, title, keywords and description."""
    try:
        settings = load_config(Path(config) if config else None)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)

    ctx.ensure_object(dict)
    ctx.obj["config"] = settings


async def run_lookup(config: Config, query: str, locale: Optional[str]) -> LookupOutcome:
    """Run one lookup through a freshly opened relay client."""
    localizer = Localizer(config.locale.default, config.locale.fallback)
    async with RelayClient(config.relay) as relay:
        pipeline = LookupPipeline(relay, localizer)
        return await pipeline.run(query, locale=locale)


def render_outcome(outcome: LookupOutcome, localizer: Localizer) -> None:
    if not outcome.ok:
        console.print(f"[red]{outcome.message}[/red]")
        return

    result = outcome.result
    console.print(Panel(result.page_title, title=localizer.t("pageTitle"), border_style="magenta"))

    table = Table(title=localizer.t("favicon"))
    table.add_column("Size", style="bold")
    table.add_column("Type")
    table.add_column("URL", overflow="fold")
    for icon in result.icons:
        table.add_row(icon.size, icon.type, icon.url)
    console.print(table)

    console.print(Panel(result.keywords, title=localizer.t("keywords"), border_style="magenta"))
    console.print(Panel(result.description, title=localizer.t("description"), border_style="magenta"))


def _lookup_and_report(config: Config, query: str, locale: Optional[str], as_json: bool) -> None:
    outcome = asyncio.run(run_lookup(config, query, locale))

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
    else:
        localizer = Localizer(locale or config.locale.default, config.locale.fallback)
        render_outcome(outcome, localizer)

    if not outcome.ok:
        sys.exit(1)


@cli.command()
@click.argument("url")
@click.option("--locale", "-l", type=LOCALE_CHOICE, default=None, help="Language for messages")
@click.option("--json", "as_json", is_flag=True, help="Print the outcome as JSON")
@click.pass_context
def lookup(ctx: click.Context, url: str, locale: Optional[str], as_json: bool) -> None:
    """Look up icons and metadata for URL."""
    _lookup_and_report(ctx.obj["config"], url, locale, as_json)


@cli.command("try")
@click.argument("name")
@click.option("--locale", "-l", type=LOCALE_CHOICE, default=None, help="Language for messages")
@click.option("--json", "as_json", is_flag=True, help="Print the outcome as JSON")
@click.pass_context
def try_example(ctx: click.Context, name: str, locale: Optional[str], as_json: bool) -> None:
    """Look up one of the example sites by NAME."""
    site = find_example(name)
    if site is None:
        choices = ", ".join(s.name for s in EXAMPLE_SITES)
        raise click.BadParameter(f"unknown example {name!r}; choose from: {choices}", param_hint="NAME")
    _lookup_and_report(ctx.obj["config"], site.url, locale, as_json)


@cli.command()
def examples() -> None:
    """List the example sites."""
    table = Table(title="Examples")
    table.add_column("Name", style="bold")
    table.add_column("Address")
    for site in EXAMPLE_SITES:
        table.add_row(site.name, site.url)
    console.print(table)


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to the configured host)")
@click.option("--port", default=None, type=int, help="Port (defaults to the configured port)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Serve the lookup API over HTTP."""
    from favgrab.web import create_app

    config: Config = ctx.obj["config"]
    host = host or config.web.host
    port = port or config.web.port
    logger.info("Starting web service", host=host, port=port)
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
