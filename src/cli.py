"""Admin CLI for the insights content store."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from insights.config import InsightsConfig, load_config, merge_cli_overrides
from insights.content.forms import clean_submission
from insights.content.hero import HeroSelector
from insights.content.models import HERO_COLLECTIONS, Collection, ContentItem
from insights.content.store import ContentStore
from insights.editing import sections as section_edits
from insights.editing.ordered import Direction
from insights.errors import InsightsError
from insights.homepage import lists as homepage_edits
from insights.homepage.schema import HomepageConfig
from insights.homepage.services import (
    load_homepage_config,
    reset_homepage_config,
    save_homepage_config,
)
from insights.listing.paginate import ListQuery
from insights.site.settings import load_site_settings, save_site_settings

app = typer.Typer(
    name="insights",
    help="Manage articles, reels, listings and the homepage configuration.",
    no_args_is_help=True,
)
hero_app = typer.Typer(help="Show and change the hero item of a collection.", no_args_is_help=True)
homepage_app = typer.Typer(help="Show and edit the homepage configuration.", no_args_is_help=True)
sections_app = typer.Typer(help="Edit the ordered sections of an article.", no_args_is_help=True)
settings_app = typer.Typer(help="Show and edit site settings.", no_args_is_help=True)
strip_app = typer.Typer(
    help="Edit the methodology and nuggets strips of the homepage.", no_args_is_help=True
)
app.add_typer(hero_app, name="hero")
app.add_typer(homepage_app, name="homepage")
app.add_typer(sections_app, name="sections")
app.add_typer(settings_app, name="settings")
homepage_app.add_typer(strip_app, name="strip")

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from insights import __version__

        console.print(f"insights {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to an .insights.toml file."),
    ] = None,
    store_dir: Annotated[
        Optional[Path],
        typer.Option("--store", "-s", help="Directory holding the content store file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Insights - content and homepage administration."""
    config = merge_cli_overrides(
        load_config(config_path),
        store_directory=str(store_dir) if store_dir is not None else None,
        log_level="DEBUG" if verbose else None,
    )
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


def _config(ctx: typer.Context) -> InsightsConfig:
    return ctx.obj if isinstance(ctx.obj, InsightsConfig) else load_config()


def _store(ctx: typer.Context) -> ContentStore:
    return ContentStore(_config(ctx).store_path)


@contextmanager
def _errors() -> Iterator[None]:
    """Report domain errors as a red line and exit with status 1."""
    try:
        yield
    except InsightsError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


def _parse_fields(pairs: list[str] | None, *, text_only: bool = False) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep:
            console.print(f"[red]Error:[/red] expected key=value, got {pair!r}")
            raise typer.Exit(1)
        if not text_only and value.lower() in ("true", "false"):
            fields[key.strip()] = value.lower() == "true"
        else:
            fields[key.strip()] = value
    return fields


def _dump(data: Any) -> None:
    console.print_json(json.dumps(data, ensure_ascii=False))


def _print_item(item: ContentItem) -> None:
    _dump(item.model_dump(mode="json", by_alias=True))


# ── Content items ────────────────────────────────────────────────


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="Collection to list.")],
    category: Annotated[
        Optional[str], typer.Option("--category", help="Only items of this category.")
    ] = None,
    search: Annotated[
        str, typer.Option("--search", "-q", help="Match title, slug or excerpt.")
    ] = "",
    page: Annotated[int, typer.Option("--page", "-p", help="Page number.")] = 1,
) -> None:
    """List a collection page by page, hero first."""
    config = _config(ctx)
    with _errors():
        items = _store(ctx).list(collection)
    query = ListQuery(category=category, search=search).with_page(page)
    result = query.run(
        items,
        config.pagination.admin_page_size,
        full_window=config.pagination.admin_window,
    )

    table = Table(title=f"{collection.value} ({result.filtered_count})")
    table.add_column("ID", justify="right")
    table.add_column("Slug")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Flags")
    for item in result.items:
        flags = []
        if getattr(item, "is_hero", False):
            flags.append("hero")
        if getattr(item, "featured", False):
            flags.append("featured")
        table.add_row(str(item.id), item.slug, item.title, str(item.category), " ".join(flags))
    console.print(table)

    pager = " ".join(
        f"[bold]{n}[/bold]" if n == result.page else str(n) for n in result.page_numbers
    )
    console.print(
        f"Showing {result.first_index}-{result.last_index} of {result.filtered_count}"
        f"  Page {result.page}/{result.total_pages}  {pager}"
    )


@app.command()
def show(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="Collection.")],
    item_id: Annotated[int, typer.Argument(help="Item id.")],
) -> None:
    """Print one item as JSON."""
    with _errors():
        _print_item(_store(ctx).get(collection, item_id))


@app.command()
def create(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="Collection.")],
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="Field as key=value; repeatable."),
    ] = None,
) -> None:
    """Create an item from key=value fields (slug and title required)."""
    with _errors():
        fields = clean_submission(collection, _parse_fields(field))
        item = _store(ctx).create(collection, fields)
    console.print(f"[green]Created[/green] {collection.value} #{item.id} ({item.slug})")


@app.command()
def update(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="Collection.")],
    item_id: Annotated[int, typer.Argument(help="Item id.")],
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="Field as key=value; repeatable."),
    ] = None,
) -> None:
    """Edit an item; fields not given keep their current value."""
    store = _store(ctx)
    with _errors():
        current = store.get(collection, item_id).model_dump(exclude={"id", "is_hero"})
        fields = clean_submission(collection, {**current, **_parse_fields(field)})
        item = store.update(collection, item_id, fields)
    console.print(f"[green]Updated[/green] {collection.value} #{item.id} ({item.slug})")


@app.command()
def delete(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="Collection.")],
    item_id: Annotated[int, typer.Argument(help="Item id.")],
) -> None:
    """Delete an item."""
    with _errors():
        _store(ctx).delete(collection, item_id)
    console.print(f"[green]Deleted[/green] {collection.value} #{item_id}")


@app.command()
def feature(
    ctx: typer.Context,
    item_id: Annotated[int, typer.Argument(help="Article id.")],
    off: Annotated[bool, typer.Option("--off", help="Remove the featured flag.")] = False,
) -> None:
    """Mark an article as featured (or not)."""
    with _errors():
        article = _store(ctx).set_featured(item_id, not off)
    state = "featured" if article.featured else "not featured"
    console.print(f"Article #{article.id} is now {state}")


# ── Hero ─────────────────────────────────────────────────────────


@hero_app.command("set")
def hero_set(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="articles, new-launches or home-tours.")],
    item_id: Annotated[int, typer.Argument(help="Item id.")],
) -> None:
    """Designate the hero item of a collection."""
    with _errors():
        hero = HeroSelector(_store(ctx)).designate(collection, item_id)
    console.print(f"[green]Hero of {collection.value}:[/green] #{hero.id} {hero.title}")


@hero_app.command("show")
def hero_show(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="articles, new-launches or home-tours.")],
) -> None:
    """Print the current hero item."""
    with _errors():
        hero = HeroSelector(_store(ctx)).current_hero(collection)
    if hero is None:
        console.print(f"[yellow]{collection.value} has no hero.[/yellow]")
        return
    _print_item(hero)


@hero_app.command("clear")
def hero_clear(
    ctx: typer.Context,
    collection: Annotated[Collection, typer.Argument(help="articles, new-launches or home-tours.")],
) -> None:
    """Remove the hero designation."""
    with _errors():
        HeroSelector(_store(ctx)).clear(collection)
    console.print(f"{collection.value} has no hero now")


@hero_app.command("check")
def hero_check(ctx: typer.Context) -> None:
    """Report collections holding more than one hero item."""
    selector = HeroSelector(_store(ctx))
    broken = False
    for collection in sorted(HERO_COLLECTIONS):
        ids = selector.hero_conflicts(collection)
        if len(ids) > 1:
            broken = True
            console.print(
                f"[red]{collection.value}:[/red] {len(ids)} heroes "
                f"({', '.join(map(str, ids))})"
            )
        else:
            console.print(f"[green]{collection.value}:[/green] ok")
    if broken:
        raise typer.Exit(1)


# ── Homepage ─────────────────────────────────────────────────────


@homepage_app.command("show")
def homepage_show(ctx: typer.Context) -> None:
    """Print the effective homepage configuration."""
    _dump(load_homepage_config(_store(ctx)).to_document())


@homepage_app.command("section")
def homepage_section(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Section key, e.g. latestPosts.")],
    visible: Annotated[bool, typer.Option("--on/--off", help="Show or hide the section.")] = True,
) -> None:
    """Show or hide a homepage section."""
    _edit_homepage(ctx, lambda c: homepage_edits.set_section_visible(c, key, visible))
    console.print(f"Section {key} {'shown' if visible else 'hidden'}")


@homepage_app.command("title")
def homepage_title(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Section key.")],
    title: Annotated[str, typer.Argument(help="Heading text.")],
) -> None:
    """Change the heading of a homepage section."""
    _edit_homepage(ctx, lambda c: homepage_edits.set_title(c, key, title))
    console.print(f"Title of {key} set")


@homepage_app.command("limit")
def homepage_limit(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Limit key, e.g. reels.")],
    value: Annotated[int, typer.Argument(help="Number of items (0-50).")],
) -> None:
    """Change how many items a homepage section shows."""
    config = _edit_homepage(ctx, lambda c: homepage_edits.set_limit(c, key, value))
    console.print(f"Limit {key} = {config.limits[key]}")


@homepage_app.command("reset")
def homepage_reset(ctx: typer.Context) -> None:
    """Restore the default homepage configuration."""
    reset_homepage_config(_store(ctx))
    console.print("Homepage configuration reset to defaults")


def _edit_homepage(ctx: typer.Context, edit) -> HomepageConfig:
    store = _store(ctx)
    with _errors():
        config = edit(load_homepage_config(store))
        return save_homepage_config(store, config)


@homepage_app.command("podcast")
def homepage_podcast(
    ctx: typer.Context,
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="Podcast field as key=value, e.g. title=Ep 12."),
    ] = None,
) -> None:
    """Edit the featured podcast block."""
    fields = _parse_fields(field, text_only=True)
    config = _edit_homepage(ctx, lambda c: homepage_edits.update_podcast(c, **fields))
    _dump(config.podcast.model_dump())


@strip_app.command("add")
def strip_add(
    ctx: typer.Context,
    strip: Annotated[str, typer.Argument(help="methodology or nuggets.")],
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="Card field as key=value; repeatable."),
    ] = None,
) -> None:
    """Append a card to a homepage strip."""
    fields = _parse_fields(field, text_only=True)
    config = _edit_homepage(ctx, lambda c: homepage_edits.add_entry(c, strip, **fields))
    added = getattr(config, strip)[-1]
    console.print(f"Added {strip} card (id {added.id})")


@strip_app.command("remove")
def strip_remove(
    ctx: typer.Context,
    strip: Annotated[str, typer.Argument(help="methodology or nuggets.")],
    position: Annotated[int, typer.Argument(help="1-based card position.")],
) -> None:
    """Remove a card; removing the last card restores the default strip."""
    config = _edit_homepage(ctx, lambda c: homepage_edits.remove_entry(c, strip, position - 1))
    console.print(f"{strip} now has {len(getattr(config, strip))} card(s)")


@strip_app.command("move")
def strip_move(
    ctx: typer.Context,
    strip: Annotated[str, typer.Argument(help="methodology or nuggets.")],
    position: Annotated[int, typer.Argument(help="1-based card position.")],
    direction: Annotated[Direction, typer.Argument(help="up or down.")],
) -> None:
    """Move a card one place up or down."""
    _edit_homepage(
        ctx, lambda c: homepage_edits.move_entry(c, strip, position - 1, direction)
    )
    console.print(f"Moved {strip} card {position} {direction.value}")


@strip_app.command("update")
def strip_update(
    ctx: typer.Context,
    strip: Annotated[str, typer.Argument(help="methodology or nuggets.")],
    position: Annotated[int, typer.Argument(help="1-based card position.")],
    field: Annotated[
        Optional[list[str]],
        typer.Option("--field", "-f", help="Card field as key=value; repeatable."),
    ] = None,
) -> None:
    """Change fields of one card; its id never changes."""
    fields = _parse_fields(field, text_only=True)
    _edit_homepage(
        ctx, lambda c: homepage_edits.update_entry(c, strip, position - 1, **fields)
    )
    console.print(f"Updated {strip} card {position}")


# ── Article sections ─────────────────────────────────────────────


def _edit_sections(ctx: typer.Context, article_id: int, edit, *, seed: bool = True) -> None:
    store = _store(ctx)
    with _errors():
        article = store.get(Collection.ARTICLES, article_id)
        current = section_edits.ensure_sections(article.sections) if seed else article.sections
        updated = edit(current)
        store.update_sections(article_id, updated)
    console.print(f"Article #{article_id} now has {len(updated)} section(s)")


@sections_app.command("show")
def sections_show(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
) -> None:
    """Print the sections of an article."""
    with _errors():
        article = _store(ctx).get(Collection.ARTICLES, article_id)
    for position, section in enumerate(article.sections, start=1):
        console.print(f"[bold]{position}. {section.heading or '(no heading)'}[/bold] (id {section.id})")
        for number, paragraph in enumerate(section.paragraphs, start=1):
            console.print(f"   {number}) {paragraph}")


@sections_app.command("add")
def sections_add(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
    heading: Annotated[str, typer.Option("--heading", help="Section heading.")] = "",
) -> None:
    """Append an empty section."""

    def edit(sections):
        result = section_edits.add_section(sections)
        if heading:
            result = section_edits.update_section(result, len(result) - 1, heading=heading)
        return result

    _edit_sections(ctx, article_id, edit, seed=False)


@sections_app.command("remove")
def sections_remove(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
    position: Annotated[int, typer.Argument(help="1-based section position.")],
) -> None:
    """Remove a section."""
    _edit_sections(ctx, article_id, lambda s: section_edits.remove_section(s, position - 1))


@sections_app.command("move")
def sections_move(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
    position: Annotated[int, typer.Argument(help="1-based section position.")],
    direction: Annotated[Direction, typer.Argument(help="up or down.")],
) -> None:
    """Move a section one place up or down."""
    _edit_sections(
        ctx, article_id, lambda s: section_edits.move_section(s, position - 1, direction)
    )


@sections_app.command("add-paragraph")
def sections_add_paragraph(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
    position: Annotated[int, typer.Argument(help="1-based section position.")],
    text: Annotated[str, typer.Argument(help="Paragraph text.")] = "",
) -> None:
    """Append a paragraph to a section."""
    _edit_sections(
        ctx, article_id, lambda s: section_edits.add_paragraph(s, position - 1, text)
    )


@sections_app.command("remove-paragraph")
def sections_remove_paragraph(
    ctx: typer.Context,
    article_id: Annotated[int, typer.Argument(help="Article id.")],
    position: Annotated[int, typer.Argument(help="1-based section position.")],
    paragraph: Annotated[int, typer.Argument(help="1-based paragraph number.")],
) -> None:
    """Remove a paragraph; the last paragraph of a section cannot be removed."""
    _edit_sections(
        ctx,
        article_id,
        lambda s: section_edits.remove_paragraph(s, position - 1, paragraph - 1),
    )


# ── Site settings ────────────────────────────────────────────────


@settings_app.command("show")
def settings_show(ctx: typer.Context) -> None:
    """Print all site settings."""
    _dump(load_site_settings(_store(ctx)))


@settings_app.command("set")
def settings_set(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Setting key, e.g. siteTitle.")],
    value: Annotated[str, typer.Argument(help="New value.")],
) -> None:
    """Change one site setting."""
    with _errors():
        settings = save_site_settings(_store(ctx), {key: value})
    if settings.get(key) != value:
        console.print(f"[red]Error:[/red] unknown setting {key!r}")
        raise typer.Exit(1)
    console.print(f"{key} updated")


if __name__ == "__main__":
    app()
