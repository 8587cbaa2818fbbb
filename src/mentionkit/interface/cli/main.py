"""mentionkit command line.

    mentionkit files "ctx types" --root ~/src/app
    mentionkit resolve src/app.py src/util.py:10-20 --show-content
"""

import asyncio
import json
import re
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from mentionkit.context.normalize import new_file_item
from mentionkit.context.types import ContextItemFile, ContextItemSource, Range
from mentionkit.context.uri import file_uri
from mentionkit.foundation.config import MentionkitConfig, get_config, load_config
from mentionkit.foundation.errors import MentionError
from mentionkit.foundation.logging import configure_logging
from mentionkit.interface.cli.async_runner import async_command
from mentionkit.interface.cli.error_handler import handle_error
from mentionkit.notify import ConsoleNotifier
from mentionkit.resolve import ContextResolver
from mentionkit.search.service import ContextSearch
from mentionkit.tokens import TiktokenCounter
from mentionkit.workspace import GlobIgnorePolicy, LocalWorkspace

console = Console()

# path:START-END, 1-based and inclusive
_LINE_RANGE = re.compile(r"^(?P<path>.+):(?P<start>\d+)-(?P<end>\d+)$")

_ROOT_OPTION = click.option(
    "--root", "-r",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Workspace root",
)
_JSON_OPTION = click.option(
    "--json", "json_output",
    is_flag=True,
    help="Output as JSON",
)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-session", is_flag=True, help="Also write a debug log under .mentionkit/logs/")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .mentionkit/config.yaml)",
)
@click.pass_context
def main(
    ctx: click.Context, debug: bool, log_session: bool, config_path: Path | None
) -> None:
    """Rank and resolve @-mention context from a workspace."""
    configure_logging(debug=debug, persist=log_session)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _load_config(ctx: click.Context) -> MentionkitConfig:
    config_path = (ctx.obj or {}).get("config_path")
    if config_path is not None:
        return load_config(config_path)
    return get_config()


def _build_workspace(
    root: Path,
    config: MentionkitConfig,
) -> tuple[LocalWorkspace, GlobIgnorePolicy]:
    workspace = LocalWorkspace.from_config([root], config.workspace)
    policy = GlobIgnorePolicy.from_config(config.workspace, workspace.display_path)
    return workspace, policy


def parse_path_argument(argument: str) -> tuple[str, Range | None]:
    """Split ``path:START-END`` into a path and a line range.

    Example:
        >>> parse_path_argument("src/a.py:3-4")
        ('src/a.py', Range(start=Position(line=2, character=0), end=Position(line=4, character=0)))
    """
    match = _LINE_RANGE.match(argument)
    if match is None:
        return argument, None
    start, end = int(match["start"]), int(match["end"])
    if start < 1 or end < start:
        raise click.BadParameter(f"invalid line range in {argument!r}")
    return match["path"], Range.lines(start - 1, end)


@main.command("files")
@click.argument("query")
@_ROOT_OPTION
@click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of results (default from config)",
)
@_JSON_OPTION
@click.pass_context
@async_command
async def files(
    ctx: click.Context,
    query: str,
    root: Path,
    limit: int | None,
    json_output: bool,
) -> None:
    """Rank workspace files against QUERY."""
    try:
        config = _load_config(ctx)
        workspace, policy = _build_workspace(root, config)
        search = ContextSearch(
            finder=workspace,
            stat=workspace,
            ignore=policy,
            editor=workspace,
            search_config=config.search,
            eligibility_config=config.eligibility,
        )
        items = await search.get_file_context_items(query, max_results=limit)
    except MentionError as e:
        handle_error(e, json_output)

    if json_output:
        click.echo(json.dumps([item.to_json() for item in items], indent=2))
        return

    if not items:
        console.print(f"[dim]No files match {query!r}[/]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path")
    table.add_column("~Tokens", justify="right")
    table.add_column("Ignored", justify="center")
    for rank, item in enumerate(items, 1):
        table.add_row(
            str(rank),
            workspace.display_path(item.uri),
            str(item.size),
            "yes" if item.is_ignored else "",
        )
    console.print(table)


@main.command("resolve")
@click.argument("paths", nargs=-1, required=True)
@_ROOT_OPTION
@click.option("--show-content", is_flag=True, help="Print resolved content")
@_JSON_OPTION
@click.pass_context
@async_command
async def resolve(
    ctx: click.Context,
    paths: tuple[str, ...],
    root: Path,
    show_content: bool,
    json_output: bool,
) -> None:
    """Resolve PATHS (optionally path:START-END) to content with token sizes."""
    try:
        config = _load_config(ctx)
        workspace, policy = _build_workspace(root, config)

        requested = [parse_path_argument(argument) for argument in paths]
        groups = await asyncio.gather(*(
            new_file_item(
                file_uri(workspace.roots[0] / path),
                ContextItemSource.USER,
                policy,
                selection_range,
            )
            for path, selection_range in requested
        ))
        items: list[ContextItemFile] = [item for group in groups for item in group]

        resolver = ContextResolver(
            editor=workspace,
            token_counter=TiktokenCounter(config.tokens.encoding),
            notifier=ConsoleNotifier(),
        )
        resolved = await resolver.resolve_context_items(items, input_text="")
    except MentionError as e:
        handle_error(e, json_output)

    if json_output:
        click.echo(json.dumps([r.to_json() for r in resolved], indent=2))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Range")
    table.add_column("Tokens", justify="right")
    for r in resolved:
        span = f"{r.range.start.line + 1}-{r.range.end.line}" if r.range else ""
        table.add_row(workspace.display_path(r.uri), span, str(r.size))
    table.add_section()
    table.add_row("[bold]Total[/]", "", f"[bold]{sum(r.size for r in resolved)}[/]")
    console.print(table)

    if show_content:
        for r in resolved:
            console.rule(workspace.display_path(r.uri))
            console.print(r.content, markup=False, highlight=False)


def cli_entrypoint() -> None:
    """Console script entry point."""
    main(obj={})
