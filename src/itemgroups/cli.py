"""itemgroups CLI - grouped item lists from the hiring endpoint."""

import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .adapters.hiring_api import HiringApiSource
from .adapters.json_file import JsonFileSource
from .config import Config, load_config
from .core.grouping import group_keys
from .core.state import Failed
from .ports.renderer import Renderer
from .presenter import ItemListPresenter
from .render import TerminalRenderer, format_rows, row_to_dict

BROWSE_PROMPT = "[number] toggle list, [a]ll, [c]ollapse, [r]efresh, [q]uit"

source_options = [
    click.option(
        "--file",
        "file_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Read items from a local JSON file instead of the API",
    ),
    click.option("--url", help="Override the API base URL"),
]


def with_source_options(func):
    for option in reversed(source_options):
        func = option(func)
    return func


def make_presenter(config: Config, file_path: Path | None, url: str | None) -> ItemListPresenter:
    """Wire a presenter to the configured record source."""
    if file_path is not None:
        source = JsonFileSource(file_path)
    else:
        if url:
            config = replace(config, api_base_url=url.rstrip("/"))
        source = HiringApiSource(config)
    return ItemListPresenter(source, retain_on_failure=config.retain_on_failure)


async def _refresh(presenter: ItemListPresenter) -> None:
    await presenter.pull_to_refresh()


@click.group()
@click.version_option(package_name="itemgroups")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, verbose: bool):
    """itemgroups - browse items grouped by list ID."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = config


@main.command("list")
@click.option("--expand", "expand", type=int, multiple=True, help="List ID to expand (repeatable)")
@click.option("--all", "expand_all", is_flag=True, help="Expand every list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@with_source_options
@click.pass_obj
def list_items(
    config: Config,
    expand: tuple[int, ...],
    expand_all: bool,
    as_json: bool,
    file_path: Path | None,
    url: str | None,
):
    """Fetch once and print the grouped items."""
    presenter = make_presenter(config, file_path, url)
    try:
        asyncio.run(presenter.load())
    finally:
        presenter.source.close()

    if isinstance(presenter.state, Failed):
        click.echo(f"Error: {presenter.error}", err=True)
        sys.exit(1)

    if expand_all:
        presenter.expand_all()
    else:
        for key in set(expand):
            presenter.toggle_group(key)

    rows = presenter.rows
    if as_json:
        click.echo(json.dumps([row_to_dict(r) for r in rows], indent=2))
    elif not rows:
        click.echo("No items to show.")
    else:
        click.echo(format_rows(rows))


def _parse_list_id(choice: str) -> int | None:
    try:
        return int(choice)
    except ValueError:
        return None


@main.command()
@with_source_options
@click.pass_obj
def browse(config: Config, file_path: Path | None, url: str | None):
    """Interactively expand and collapse lists."""
    presenter = make_presenter(config, file_path, url)
    renderer: Renderer = TerminalRenderer()
    presenter.subscribe(renderer.render)

    try:
        asyncio.run(presenter.load())
        _browse_loop(presenter, renderer)
    finally:
        presenter.source.close()


def _browse_loop(presenter: ItemListPresenter, renderer: Renderer) -> None:
    while True:
        choice = click.prompt(BROWSE_PROMPT, default="", show_default=False).strip().lower()

        if choice == "q":
            break
        elif choice == "r":
            asyncio.run(_refresh(presenter))
        elif choice == "a":
            presenter.expand_all()
        elif choice == "c":
            presenter.reset_expansion()
        elif not choice:
            renderer.render(presenter.rows, presenter.state, presenter.expanded)
        else:
            key = _parse_list_id(choice)
            if key is None:
                click.echo(f"Unknown command: {choice}")
            elif key in group_keys(presenter.rows):
                presenter.toggle_group(key)
            else:
                click.echo(f"No list with ID {key}.")
