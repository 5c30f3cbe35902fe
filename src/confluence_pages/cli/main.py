"""Main CLI entry point for the confluence-pages command.

Commands:
    list    List pages as Markdown (inline, first only, or streamed to storage)
    create  Create a page from Markdown
    update  Update a page from Markdown

Credentials are taken from options, then the --config file, then the
CONFLUENCE_URL / CONFLUENCE_USER / CONFLUENCE_API_TOKEN environment
variables (a .env file is honoured).
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional

import typer

from .. import __version__
from ..confluence_client.auth import Authenticator, Credentials
from ..confluence_client.errors import (
    ApiError,
    ConfigurationError,
    ConfluencePagesError,
    TransportError,
)
from ..models.list_request import DEFAULT_LIMIT, DEFAULT_STATUS, ListRequest
from ..models.list_result import StoredPages
from ..models.write_request import CreatePageRequest, UpdatePageRequest
from ..pages.list_pages import PageListingClient
from ..pages.write_pages import PageCreator, PageUpdater
from ..storage.storage import LocalFileStorage
from .config import ConfigLoader, TaskConfig
from .models import ExitCode
from .output import OutputHandler

app = typer.Typer(
    name="confluence-pages",
    help="List, create and update Confluence pages as Markdown.",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "confluence_pages"


@dataclass
class CLIState:
    """Options shared by every command."""
    config: TaskConfig
    output: OutputHandler


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure the package logger (never the root logger).

    Args:
        verbosity: 0=WARNING, 1=INFO, 2=DEBUG
        logdir: Optional directory for a timestamped log file
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    date_format = "%Y-%m-%d %H:%M:%S"
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)
    )
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"confluence-pages_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        ))
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"confluence-pages version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML configuration file", metavar="FILE",
    ),
    verbosity: int = typer.Option(
        0, "--verbosity", "-v", help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None, "--logdir", help="Directory for log files (creates timestamped log file)",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit",
        callback=_version_callback, is_eager=True,
    ),
) -> None:
    """List, create and update Confluence pages as Markdown."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        task_config = ConfigLoader.load(config) if config else TaskConfig()
    except ConfigurationError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    ctx.obj = CLIState(config=task_config, output=output)


def _credentials(
    state: CLIState,
    server_url: Optional[str],
    username: Optional[str],
    api_token: Optional[str],
) -> Credentials:
    return Authenticator().get_credentials(
        url=server_url or state.config.server_url,
        user=username or state.config.username,
        api_token=api_token or state.config.api_token,
    )


def _run(state: CLIState, operation: Callable[[], Any]) -> Any:
    """Run an operation and map failures to exit codes."""
    output = state.output
    try:
        return operation()
    except ConfigurationError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    except ApiError as e:
        output.error(f"{e}: {e.body}")
        raise typer.Exit(ExitCode.API_ERROR)
    except TransportError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.NETWORK_ERROR)
    except ConfluencePagesError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _read_markdown(markdown: Optional[str], markdown_file: Optional[Path]) -> Optional[str]:
    if markdown_file is None:
        return markdown
    try:
        return markdown_file.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigurationError(f"cannot read {markdown_file}: {e}", 'markdown')


def _pick(value, default):
    """Prefer an explicitly given option over a configured default."""
    if value is None or (isinstance(value, (list, tuple)) and not value):
        return default
    return value


@app.command("list")
def list_command(
    ctx: typer.Context,
    server_url: Optional[str] = typer.Option(None, "--server-url", help="Confluence site URL"),
    username: Optional[str] = typer.Option(None, "--username", help="Account email"),
    api_token: Optional[str] = typer.Option(None, "--api-token", help="Atlassian API token"),
    page_ids: Optional[List[int]] = typer.Option(
        None, "--page-id", help="Page ID filter (repeatable, max 250)",
    ),
    space_ids: Optional[List[int]] = typer.Option(
        None, "--space-id", help="Space ID filter (repeatable, max 100)",
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Exact title filter"),
    subtype: Optional[str] = typer.Option(None, "--subtype", help="live or page"),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort key, e.g. -modified-date"),
    cursor: Optional[str] = typer.Option(None, "--cursor", help="Pagination cursor"),
    status: Optional[List[str]] = typer.Option(
        None, "--status", help="Status filter (repeatable, default: current, archived)",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", help="Results per request (1-250)"),
    fetch_mode: Optional[str] = typer.Option(
        None, "--fetch-mode", help="LIST, FIRST_ONLY or STREAM_TO_STORAGE",
    ),
    storage_dir: Optional[str] = typer.Option(
        None, "--storage-dir", help="Directory receiving STREAM_TO_STORAGE results",
    ),
) -> None:
    """List pages and print them as JSON."""
    state: CLIState = ctx.obj
    defaults = state.config.list_defaults

    def operation():
        creds = _credentials(state, server_url, username, api_token)
        request = ListRequest(
            server_url=creds.url,
            username=creds.user,
            api_token=creds.api_token,
            page_ids=_pick(page_ids, defaults.get('page_ids')) or (),
            space_ids=_pick(space_ids, defaults.get('space_ids')) or (),
            title=_pick(title, defaults.get('title')),
            subtype=_pick(subtype, defaults.get('subtype')),
            sort=_pick(sort, defaults.get('sort')),
            cursor=_pick(cursor, defaults.get('cursor')),
            status=_pick(status, defaults.get('status', list(DEFAULT_STATUS))),
            limit=_pick(limit, defaults.get('limit', DEFAULT_LIMIT)),
            fetch_mode=_pick(fetch_mode, defaults.get('fetch_mode')),
        )
        storage = LocalFileStorage(storage_dir or state.config.storage_dir)
        return PageListingClient(storage=storage).list(request)

    result = _run(state, operation)
    if isinstance(result, StoredPages):
        state.output.info(f"Stored {result.count} page(s) at {result.uri}")
    else:
        state.output.info(f"Listed {len(result.pages)} page(s)")
    state.output.result(result.to_dict())


@app.command("create")
def create_command(
    ctx: typer.Context,
    space_id: str = typer.Option(..., "--space-id", help="Target space ID"),
    title: str = typer.Option(..., "--title", help="Page title"),
    markdown: Optional[str] = typer.Option(None, "--markdown", help="Markdown content"),
    markdown_file: Optional[Path] = typer.Option(
        None, "--markdown-file", help="File holding the Markdown content",
    ),
    parent_id: Optional[str] = typer.Option(None, "--parent-id", help="Parent page ID"),
    status: Optional[str] = typer.Option(None, "--status", help="current or draft"),
    subtype: Optional[str] = typer.Option(None, "--subtype", help="live for a live doc"),
    embedded: bool = typer.Option(False, "--embedded", help="Store as embedded content"),
    make_private: bool = typer.Option(False, "--private", help="Only the creator can view"),
    root_level: bool = typer.Option(False, "--root-level", help="Create at the space root"),
    server_url: Optional[str] = typer.Option(None, "--server-url", help="Confluence site URL"),
    username: Optional[str] = typer.Option(None, "--username", help="Account email"),
    api_token: Optional[str] = typer.Option(None, "--api-token", help="Atlassian API token"),
) -> None:
    """Create a page from Markdown and print the API response."""
    state: CLIState = ctx.obj
    state.output.info(f"Creating page '{title}' in space {space_id}")

    def operation():
        creds = _credentials(state, server_url, username, api_token)
        request = CreatePageRequest(
            server_url=creds.url,
            username=creds.user,
            api_token=creds.api_token,
            space_id=space_id,
            title=title,
            markdown=_read_markdown(markdown, markdown_file),
            status=status,
            parent_id=parent_id,
            subtype=subtype,
            embedded=embedded,
            make_private=make_private,
            root_level=root_level,
        )
        return PageCreator().create(request)

    result = _run(state, operation)
    state.output.success(f"Created page '{title}'")
    state.output.result({'value': result.value})


@app.command("update")
def update_command(
    ctx: typer.Context,
    page_id: str = typer.Option(..., "--page-id", help="ID of the page to update"),
    status: str = typer.Option(..., "--status", help="current or draft"),
    title: str = typer.Option(..., "--title", help="Page title"),
    version_number: int = typer.Option(..., "--version-number", help="New version number"),
    version_message: str = typer.Option(..., "--version-message", help="Version comment"),
    markdown: Optional[str] = typer.Option(None, "--markdown", help="Markdown content"),
    markdown_file: Optional[Path] = typer.Option(
        None, "--markdown-file", help="File holding the Markdown content",
    ),
    space_id: Optional[str] = typer.Option(None, "--space-id", help="Containing space ID"),
    parent_id: Optional[str] = typer.Option(None, "--parent-id", help="New parent page ID"),
    owner_id: Optional[str] = typer.Option(None, "--owner-id", help="New owner account ID"),
    server_url: Optional[str] = typer.Option(None, "--server-url", help="Confluence site URL"),
    username: Optional[str] = typer.Option(None, "--username", help="Account email"),
    api_token: Optional[str] = typer.Option(None, "--api-token", help="Atlassian API token"),
) -> None:
    """Update a page from Markdown and print the API response."""
    state: CLIState = ctx.obj
    state.output.info(f"Updating page {page_id} to version {version_number}")

    def operation():
        creds = _credentials(state, server_url, username, api_token)
        request = UpdatePageRequest(
            server_url=creds.url,
            username=creds.user,
            api_token=creds.api_token,
            page_id=page_id,
            status=status,
            title=title,
            markdown=_read_markdown(markdown, markdown_file),
            version_info={'number': version_number, 'message': version_message},
            space_id=space_id,
            parent_id=parent_id,
            owner_id=owner_id,
        )
        return PageUpdater().update(request)

    result = _run(state, operation)
    state.output.success(f"Updated page {page_id}")
    state.output.result({'value': result.value})


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
