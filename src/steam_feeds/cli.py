"""
Command-line interface for Steam Feeds.

Resolves App IDs, store URLs and user profiles into Steam news
feed URLs and prints them as a list or as OPML.
"""

import asyncio
from typing import Annotated

import typer

from steam_feeds import __version__
from steam_feeds.config import get_settings
from steam_feeds.feeds import (
    AppIdInput,
    FeedPipeline,
    InputSpec,
    PipelineResult,
    StoreUrlInput,
    UserProfileInput,
)
from steam_feeds.logger import get_logger, setup_logging
from steam_feeds.output import render_opml, render_plain, select_records

setup_logging()
logger = get_logger(__name__, component="cli")

app = typer.Typer(
    help="Get RSS feeds for Steam games.",
    add_completion=False,
)


def build_specs(
    appids: list[str] | None,
    urls: list[str] | None,
    users: list[str] | None,
) -> list[InputSpec]:
    """Turn option values into pipeline inputs, App IDs first, then URLs, then users."""
    specs: list[InputSpec] = []
    specs.extend(AppIdInput(value=a) for a in appids or [])
    specs.extend(StoreUrlInput(value=u) for u in urls or [])
    specs.extend(UserProfileInput(value=u) for u in users or [])
    return specs


async def run_pipeline(specs: list[InputSpec], *, verify: bool, delay_ms: int) -> PipelineResult:
    pipeline = FeedPipeline(delay_ms=delay_ms)
    return await pipeline.run(specs, verify=verify)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"steam-feeds {__version__}")
        raise typer.Exit()


@app.command()
def resolve(
    appid: Annotated[
        list[str] | None,
        typer.Option("--appid", "-a", help="A game's AppID, can be used multiple times."),
    ] = None,
    url: Annotated[
        list[str] | None,
        typer.Option("--url", help="A game's store URL, can be used multiple times."),
    ] = None,
    user: Annotated[
        list[str] | None,
        typer.Option(
            "--user",
            help="A person's steamcommunity.com ID or full URL, can be used multiple times.",
        ),
    ] = None,
    verify: Annotated[
        bool,
        typer.Option(
            "--verify",
            "-v",
            help="Verify potential feeds by downloading them and checking if they return XML.",
        ),
    ] = False,
    timeout: Annotated[
        int | None,
        typer.Option(
            "--timeout",
            "-t",
            min=0,
            help="The time in milliseconds to sleep between HTTP requests. [default: 250]",
        ),
    ] = None,
    opml: Annotated[bool, typer.Option("--opml", help="Output the feeds as OPML.")] = False,
    include_failed: Annotated[
        bool,
        typer.Option(
            "--include-failed",
            help="With --verify, also output feeds that failed verification.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version."),
    ] = False,
) -> None:
    """Get RSS feeds for Steam games."""
    specs = build_specs(appid, url, user)
    if not specs:
        typer.echo("Error: at least one --appid, --url or --user is required", err=True)
        raise typer.Exit(1)

    delay_ms = get_settings().steam.request_delay_ms if timeout is None else timeout
    logger.info("Resolving feeds", inputs=len(specs), verify=verify, delay_ms=delay_ms)

    try:
        result = asyncio.run(run_pipeline(specs, verify=verify, delay_ms=delay_ms))
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user", err=True)
        raise typer.Exit(130) from None

    for diagnostic in result.diagnostics:
        typer.echo(f"Skipped {diagnostic}", err=True)

    records = select_records(result.records, include_failed=include_failed or not verify)
    if not records:
        typer.echo("No feeds found.", err=True)
        raise typer.Exit(result.exit_code)

    if opml:
        typer.echo(render_opml(records))
    else:
        typer.echo(render_plain(records, annotate=verify and include_failed))

    raise typer.Exit(result.exit_code)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
