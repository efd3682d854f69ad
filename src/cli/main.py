"""Main CLI entry point for the wiki-rest command.

This module provides the Typer application that serves as the entry point
for the wiki-rest command-line tool: ``serve`` runs the API server, the
other subcommands query a running server.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from src.cli.models import CliOptions, ExitCode
from src.cli.output import OutputHandler
from src.cli.query_command import QueryCommand
from src.rest_server.app import API_VERSION, create_app
from src.rest_server.config import ServerConfigLoader
from src.rest_server.errors import ConfigError
from src.wiki_client.errors import WikiRestError

app = typer.Typer(
    name="wiki-rest",
    help="""Serve and query a hypermedia wiki REST API.

QUICK START:
  wiki-rest serve --port 8080                            # Run the API server
  wiki-rest --url http://localhost:8080 wikis            # List wikis
  wiki-rest pages xwiki --name WebHome                   # Filter pages
  wiki-rest search xwiki WebHome --scope name            # Search page names
  wiki-rest check                                        # Verify every link resolves""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

START_HELP = "Number of items to skip"
NUMBER_HELP = "Maximum number of items, -1 for all"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"wiki-rest_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _options(ctx: typer.Context) -> CliOptions:
    return ctx.obj if isinstance(ctx.obj, CliOptions) else CliOptions()


def _query_command(ctx: typer.Context) -> QueryCommand:
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    return QueryCommand(output_handler=output, url=options.url)


@app.callback()
def main_callback(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        help="API base URL (defaults to WIKI_REST_URL)",
        metavar="URL",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """Serve and query a hypermedia wiki REST API."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CliOptions(url=url, verbosity=verbosity, logdir=logdir, no_color=no_color)


@app.command()
def version() -> None:
    """Show version and exit."""
    typer.echo(f"wiki-rest version {API_VERSION}")


@app.command()
def serve(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML server configuration file",
        metavar="FILE",
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="TCP port to listen on"),
    content: Optional[str] = typer.Option(
        None,
        "--content",
        help="YAML wiki content to serve (defaults to the bundled wiki)",
        metavar="FILE",
    ),
) -> None:
    """Run the wiki REST API server."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    try:
        server_config = ServerConfigLoader.load(config)
        if host:
            server_config.host = host
        if port is not None:
            if not 0 < port < 65536:
                raise ConfigError(f"Port must be between 1 and 65535, got {port}", 'port')
            server_config.port = port
        if content:
            server_config.content_path = content

        api = create_app(server_config)

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except WikiRestError as e:
        logger.error(f"Cannot start server: {e}")
        output.error(f"Cannot start server: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.info(f"Serving on http://{server_config.host}:{server_config.port}")
    uvicorn.run(
        api,
        host=server_config.host,
        port=server_config.port,
        log_level=server_config.log_level,
    )


@app.command()
def wikis(ctx: typer.Context) -> None:
    """List the wikis of the server."""
    raise typer.Exit(_query_command(ctx).wikis())


@app.command()
def pages(
    ctx: typer.Context,
    wiki: str = typer.Argument(..., help="Wiki id"),
    name: Optional[str] = typer.Option(None, "--name", help="Substring of the page name"),
    space: Optional[str] = typer.Option(None, "--space", help="Substring of the space name"),
    author: Optional[str] = typer.Option(None, "--author", help="Substring of the last author"),
    start: Optional[int] = typer.Option(None, "--start", help=START_HELP),
    number: Optional[int] = typer.Option(None, "--number", "-n", help=NUMBER_HELP),
) -> None:
    """List the pages of a wiki."""
    raise typer.Exit(_query_command(ctx).pages(
        wiki, name=name, space=space, author=author, start=start, number=number
    ))


@app.command()
def attachments(
    ctx: typer.Context,
    wiki: str = typer.Argument(..., help="Wiki id"),
    name: Optional[str] = typer.Option(None, "--name", help="Substring of the file name"),
    space: Optional[str] = typer.Option(None, "--space", help="Substring of the space name"),
    page: Optional[str] = typer.Option(None, "--page", help="Substring of the page name"),
    author: Optional[str] = typer.Option(None, "--author", help="Substring of the author"),
    types: Optional[str] = typer.Option(
        None, "--types", help="Comma-separated mime type substrings"
    ),
    start: Optional[int] = typer.Option(None, "--start", help=START_HELP),
    number: Optional[int] = typer.Option(None, "--number", "-n", help=NUMBER_HELP),
) -> None:
    """List the attachments of a wiki."""
    raise typer.Exit(_query_command(ctx).attachments(
        wiki,
        name=name,
        space=space,
        page=page,
        author=author,
        types=types,
        start=start,
        number=number,
    ))


@app.command()
def search(
    ctx: typer.Context,
    wiki: str = typer.Argument(..., help="Wiki id"),
    query: str = typer.Argument(..., help="Search term"),
    scope: Optional[List[str]] = typer.Option(
        None,
        "--scope",
        "-s",
        help="content, name, title or spaces (can be used multiple times)",
    ),
    start: Optional[int] = typer.Option(None, "--start", help=START_HELP),
    number: Optional[int] = typer.Option(None, "--number", "-n", help=NUMBER_HELP),
) -> None:
    """Search a wiki."""
    raise typer.Exit(_query_command(ctx).search(
        wiki, query, scopes=scope or None, start=start, number=number
    ))


@app.command()
def check(ctx: typer.Context) -> None:
    """Verify that every wiki exposes its capabilities and all links resolve."""
    raise typer.Exit(_query_command(ctx).check())


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
