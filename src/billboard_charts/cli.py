"""Click-based CLI for billboard-charts.

Thin wrapper around library modules: every command delegates to the chart
facade, the enrichment client, or the API app.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run an async coroutine from synchronous Click code."""
    return asyncio.run(coro)


def _configure_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from billboard_charts.core import ConfigError, load_config

        try:
            ctx.obj["config"] = load_config(config_path=ctx.obj.get("config_path"))
        except ConfigError as exc:
            console.print(f"[red]Configuration error: {exc}[/red]")
            raise SystemExit(1) from exc
    return ctx.obj["config"]


def _fail(exc) -> None:
    """Report a chart error and exit non-zero."""
    console.print(f"[red]{exc.code}: {exc}[/red]")
    raise SystemExit(1)


def _format_stat(value: int | None) -> str:
    return "-" if value is None else str(value)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="BILLBOARD_CHARTS_CONFIG",
    default=None,
    help="Path to billboard-charts.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.version_option(package_name="billboard-charts")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Billboard Charts: chart listings from billboard.com."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# chart
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("chart_name", required=False, default="hot-100")
@click.option("--date", "-d", type=str, default="", help="Chart week (YYYY-MM-DD).")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Show only the top N songs.",
)
@click.option(
    "--videos",
    is_flag=True,
    default=False,
    help="Look up YouTube videos (needs youtube.api_key).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def chart(
    ctx: click.Context,
    chart_name: str,
    date: str,
    limit: int | None,
    videos: bool,
    as_json: bool,
) -> None:
    """Show one chart, e.g. `chart billboard-200 --date 2024-01-13`."""
    from billboard_charts.charts import get_chart
    from billboard_charts.core import ChartError, EnrichedChart
    from billboard_charts.enrichment import YouTubeClient, enrich_songs_with_videos

    config = _load_config(ctx)

    async def _run():
        result = await get_chart(chart_name, date, config=config.fetcher)
        songs = result.songs[:limit] if limit else result.songs
        if videos:
            async with YouTubeClient(config.youtube) as youtube:
                songs = await enrich_songs_with_videos(songs, youtube, len(songs))
            return EnrichedChart(
                week=result.week,
                songs=songs,
                previous_week=result.previous_week,
                next_week=result.next_week,
            )
        return result.model_copy(update={"songs": songs})

    try:
        result = _run_async(_run())
    except ChartError as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
        return

    table = Table(title=f"{chart_name}: week of {result.week or 'current'}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Title")
    table.add_column("Artist")
    table.add_column("LW", justify="right")
    table.add_column("Peak", justify="right")
    table.add_column("Wks", justify="right")
    if videos:
        table.add_column("Video")

    for song in result.songs:
        row = [
            str(song.rank),
            song.title,
            song.artist,
            _format_stat(song.position.position_last_week),
            _format_stat(song.position.peak_position),
            _format_stat(song.position.weeks_on_chart),
        ]
        if videos:
            row.append(song.video.watch_url if song.video else "")
        table.add_row(*row)

    Console().print(table)


# ---------------------------------------------------------------------------
# charts
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Output as JSON.")
@click.pass_context
def charts(ctx: click.Context, as_json: bool) -> None:
    """List the charts available on billboard.com."""
    from billboard_charts.charts import list_charts
    from billboard_charts.core import ChartError

    config = _load_config(ctx)

    try:
        catalog = _run_async(list_charts(config=config.fetcher))
    except ChartError as exc:
        _fail(exc)

    if as_json:
        click.echo(json.dumps([c.model_dump(mode="json") for c in catalog], indent=2))
        return

    table = Table(title="Available Charts")
    table.add_column("Name", style="bold")
    table.add_column("URL")
    for info in catalog:
        table.add_row(info.name, info.url)

    Console().print(table)
    console.print(f"{len(catalog)} charts")


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (default: api.host).")
@click.option("--port", "-p", type=int, default=None, help="Port number (default: api.port).")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]uvicorn not installed. Install with: "
            "pip install billboard-charts[api][/red]"
        )
        raise SystemExit(1)

    config = _load_config(ctx)
    host = host or config.api.host
    # The app factory reloads config in the server process
    if ctx.obj.get("config_path"):
        os.environ["BILLBOARD_CHARTS_CONFIG"] = ctx.obj["config_path"]
    port = port or config.api.port

    console.print(f"Starting billboard-charts API on [bold]{host}:{port}[/bold]")
    console.print(f"API docs: http://{host}:{port}/docs")

    uvicorn.run(
        "billboard_charts.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
