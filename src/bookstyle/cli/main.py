"""Command line interface for bookstyle.

Inspects the theme catalog, converts slider values, resolves the effective
style of an element in a book file and previews the patches a theme change
would produce.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import rich_click as click
from rich.console import Console
from rich.table import Table

from bookstyle import __version__
from bookstyle.config import BookstyleConfig
from bookstyle.core.accessors import ATTRIBUTES, get_active_template_ids, resolve
from bookstyle.core.logging import configure_logging
from bookstyle.core.models import Book
from bookstyle.core.scales import (
    actual_to_common_font_size,
    actual_to_common_radius,
    actual_to_common_stroke_width,
    common_to_actual_font_size,
    common_to_actual_radius,
    common_to_actual_stroke_width,
    get_stroke_range,
)
from bookstyle.exceptions import BookstyleError, ElementNotFoundError, ThemeDataError
from bookstyle.services.cascade import ThemeCascade
from bookstyle.stores.memory import InMemoryDocument

if TYPE_CHECKING:
    from bookstyle.core.themes import ThemeCatalog

console = Console()

click.rich_click.USE_RICH_MARKUP = True


def _catalog(ctx: click.Context) -> ThemeCatalog:
    config: BookstyleConfig = ctx.obj
    try:
        return config.load_catalog()
    except ThemeDataError as exc:
        raise click.ClickException(str(exc)) from exc


def _load_book(path: Path) -> Book:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Could not read book file {path}: {exc}"
        raise click.ClickException(msg) from exc
    return Book.from_dict(data)


@click.group(name="bookstyle", help="Inspect themes and preview style resolution for books.")
@click.version_option(__version__, prog_name="bookstyle")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Render logs as JSON")
@click.pass_context
def cli(ctx: click.Context, debug: bool, json_logs: bool) -> None:
    """Inspect themes and preview style resolution for books."""
    config = BookstyleConfig()
    config.debug = config.debug or debug
    config.json_logs = config.json_logs or json_logs
    configure_logging(debug=config.debug, json_logs=config.json_logs)
    ctx.obj = config


@cli.command(name="themes", help="List the themes in the catalog.")
@click.pass_context
def list_themes(ctx: click.Context) -> None:
    """List the themes in the catalog."""
    catalog = _catalog(ctx)
    table = Table(title="Themes")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Palette", style="green")
    table.add_column("Background", style="yellow")
    table.add_column("Stroke range", style="magenta")

    for theme in catalog.list_themes():
        settings = theme.page_settings
        if settings.background_image is not None and settings.background_image.enabled:
            background = f"image ({settings.background_image.template_id})"
        elif settings.background_pattern is not None and settings.background_pattern.enabled:
            background = f"pattern ({settings.background_pattern.style})"
        else:
            background = "color"
        stroke_range = get_stroke_range(theme.id)
        table.add_row(
            theme.id,
            theme.name,
            theme.palette_id or "-",
            background,
            f"{stroke_range.min:g}-{stroke_range.max:g}",
        )
    console.print(table)


@cli.command(name="palettes", help="List the palettes in the catalog.")
@click.pass_context
def list_palettes(ctx: click.Context) -> None:
    """List the palettes in the catalog."""
    catalog = _catalog(ctx)
    table = Table(title="Palettes")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    for role in ("background", "primary", "accent", "text"):
        table.add_column(role.capitalize(), style="dim")

    for palette in catalog.list_palettes():
        table.add_row(
            palette.id,
            palette.name,
            *(palette.role(role) or "-" for role in ("background", "primary", "accent", "text")),
        )
    console.print(table)


@cli.command(name="convert", help="Convert a slider value between the common and actual scales.")
@click.argument("scale", type=click.Choice(["stroke", "font", "radius"]))
@click.argument("value", type=float)
@click.option("--theme", "-t", default="default", help="Border/stroke theme for stroke widths")
@click.option("--to-common", is_flag=True, help="Convert an actual value back to the common scale")
def convert(scale: str, value: float, theme: str, to_common: bool) -> None:
    """Convert a slider value between the common and actual scales."""
    if scale == "stroke":
        if to_common:
            result = actual_to_common_stroke_width(value, theme)
        else:
            result = common_to_actual_stroke_width(value, theme)
    elif scale == "font":
        result = actual_to_common_font_size(value) if to_common else common_to_actual_font_size(value)
    else:
        result = actual_to_common_radius(value) if to_common else common_to_actual_radius(value)
    click.echo(f"{result:g}")


@cli.command(name="resolve", help="Show the effective style of an element in a book file.")
@click.argument("book_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("element_id")
@click.option(
    "--section", "-s", type=click.Choice(["question", "answer"]), default=None, help="Question/answer section"
)
@click.pass_context
def resolve_element(ctx: click.Context, book_file: Path, element_id: str, section: str | None) -> None:
    """Show the effective style of an element in a book file."""
    catalog = _catalog(ctx)
    book = _load_book(book_file)
    found = book.find_element(element_id)
    if found is None:
        raise click.ClickException(str(ElementNotFoundError(element_id)))
    page_index, element = found
    page = book.pages[page_index]
    active = get_active_template_ids(page, book)

    table = Table(title=f"{element.kind} {element.id} (page {page.page_number}, theme {active.theme_id})")
    table.add_column("Attribute", style="cyan")
    table.add_column("Key", style="dim")
    table.add_column("Value", style="green")
    for name, spec in ATTRIBUTES.items():
        table.add_row(name, spec.key, repr(resolve(name, element, page, book, catalog, section)))
    console.print(table)


@cli.command(name="cascade", help="Print the patches a theme change would produce, as JSON.")
@click.argument("book_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("theme_id", required=False)
@click.option(
    "--page", "-p", "page_index", type=int, default=None, help="Change one page (0-based) instead of the book"
)
@click.option("--clear-page-backgrounds", is_flag=True, help="Also replace backgrounds of pages with their own theme")
@click.option("--apply", "apply_patches", is_flag=True, help="Print the resulting book instead of the patches")
@click.pass_context
def cascade(
    ctx: click.Context,
    book_file: Path,
    theme_id: str | None,
    page_index: int | None,
    clear_page_backgrounds: bool,
    apply_patches: bool,
) -> None:
    """Print the patches a theme change would produce, as JSON."""
    config: BookstyleConfig = ctx.obj
    catalog = _catalog(ctx)
    book = _load_book(book_file)
    theme_id = theme_id or config.default_theme
    theme_cascade = ThemeCascade(catalog)
    if page_index is None:
        transaction = theme_cascade.set_book_theme(book, theme_id, clear_page_backgrounds=clear_page_backgrounds)
    else:
        transaction = theme_cascade.set_page_theme(book, page_index, theme_id)

    if not apply_patches:
        click.echo(json.dumps(transaction.to_dict(), indent=2))
        return
    document = InMemoryDocument(book, catalog)
    try:
        result = document.commit(transaction)
    except BookstyleError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(result.to_dict(), indent=2))
