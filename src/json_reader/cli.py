"""Command line interface for mcp-json-reader."""

import json
import logging
import sys
from typing import Any

import click
from rich.console import Console

from json_reader.core.config.settings import ReaderSettings, load_settings
from json_reader.core.documents.loader import read_json_file
from json_reader.core.errors import JsonReaderError
from json_reader.core.query.orchestrator import run_filter, run_query
from json_reader.mcp.server import JsonReaderServer, render_result


def _configure_logging(level: str) -> None:
    # stdout carries the stdio MCP transport, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _settings(ctx: click.Context) -> ReaderSettings:
    settings: ReaderSettings = ctx.obj["settings"]
    return settings


def _echo_result(result: Any, pretty: bool) -> None:
    if pretty:
        Console().print_json(json.dumps(result, ensure_ascii=False))
    else:
        click.echo(render_result(result))


@click.group()
@click.version_option(package_name="mcp-json-reader")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Settings file (YAML)",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Log level (overrides settings)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """MCP JSON Reader - query local JSON files with extended JSONPath."""
    try:
        settings = load_settings(config_path)
    except JsonReaderError as e:
        raise click.ClickException(str(e)) from e

    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    _configure_logging(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    help="Transport to serve the MCP tools over",
)
@click.option("--host", default="127.0.0.1", help="Host for HTTP transport")
@click.option("--port", default=8080, type=int, help="Port for HTTP transport")
@click.pass_context
def serve(ctx: click.Context, transport: str, host: str, port: int) -> None:
    """Serve the query and filter tools as an MCP server."""
    server = JsonReaderServer(settings=_settings(ctx))
    server.run(transport=transport, host=host, port=port)


@cli.command()
@click.argument("path")
@click.argument("expression")
@click.option("--pretty", is_flag=True, help="Pretty-print with colors")
@click.pass_context
def query(ctx: click.Context, path: str, expression: str, pretty: bool) -> None:
    """Query a JSON file with an extended JSONPath EXPRESSION.

    Example: mcp-json-reader query store.json '$.store.book.sort(-price)'
    """
    try:
        document = read_json_file(path, _settings(ctx))
        result = run_query(document, expression)
    except JsonReaderError as e:
        raise click.ClickException(str(e)) from e
    _echo_result(result, pretty)


@cli.command(name="filter")
@click.argument("path")
@click.argument("array_path")
@click.argument("condition")
@click.option("--pretty", is_flag=True, help="Pretty-print with colors")
@click.pass_context
def filter_command(
    ctx: click.Context, path: str, array_path: str, condition: str, pretty: bool
) -> None:
    """Filter the array at ARRAY_PATH in a JSON file by CONDITION.

    Example: mcp-json-reader filter store.json '$.store.book' '@.price > 10'
    """
    try:
        document = read_json_file(path, _settings(ctx))
        result = run_filter(document, array_path, condition)
    except JsonReaderError as e:
        raise click.ClickException(str(e)) from e
    _echo_result(result, pretty)


def main() -> None:
    """Entry point for the console script."""
    cli()


if __name__ == "__main__":
    main()
