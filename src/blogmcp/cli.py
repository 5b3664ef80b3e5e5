"""
CLI: ``blog-mcp-server`` - run the blog MCP bridge.

Command-line options override ``BLOG_MCP_*`` environment settings.  The
process exits 0 on SIGINT/SIGTERM or when the client closes the channel,
and 1 when startup fails.
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from blogmcp import __version__

app = typer.Typer(
    name="blog-mcp-server",
    help="MCP bridge exposing the MongoDB blog catalog.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"blog-mcp-server {__version__}", highlight=False)
        raise typer.Exit()


@app.command()
def main(
    transport: str | None = typer.Option(
        None, "--transport", "-t", help="Transport: stdio (default) or http"
    ),
    host: str | None = typer.Option(None, "--host", help="Bind address for http transport"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port for http transport"),
    mongodb_uri: str | None = typer.Option(None, "--mongodb-uri", help="MongoDB connection string"),
    database: str | None = typer.Option(None, "--database", help="Database name"),
    collection: str | None = typer.Option(None, "--collection", help="Collection name"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
    log_format: str | None = typer.Option(None, "--log-format", help="console or json"),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Start the bridge and serve until interrupted."""
    from blogmcp.core.errors import ConfigError
    from blogmcp.core.settings import load_settings
    from blogmcp.framework.logging import configure_logging, get_logger
    from blogmcp.lifecycle import BlogBridge

    try:
        settings = load_settings(
            transport=transport,
            host=host,
            port=port,
            mongodb_uri=mongodb_uri,
            database_name=database,
            collection_name=collection,
            log_level=log_level,
            log_format=log_format,
        )
    except ConfigError as e:
        err_console.print(e.message, markup=False, highlight=False, style="red")
        raise typer.Exit(code=2) from e

    configure_logging(level=settings.log_level, format=settings.log_format, force=True)
    log = get_logger("blogmcp.cli")

    bridge = BlogBridge(settings)
    try:
        exit_code = asyncio.run(bridge.run(handle_signals=True))
    except KeyboardInterrupt:
        log.info("bridge.interrupted")
        exit_code = 0

    raise typer.Exit(code=exit_code)


def run() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    run()
