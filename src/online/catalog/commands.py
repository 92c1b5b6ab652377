"""CLI commands for working with the catalog."""

from __future__ import annotations

import json as json_module
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from online.catalog.catalog import Catalog

console = Console()

VIEW_CHOICES = ["raw", "public", "partner", "private"]
SORT_CHOICES = ["name", "oldest", "newest"]


def _load(ctx: click.Context) -> Catalog:
    """Load the catalog named on the command line or in the config."""
    from online.catalog.codec import load_catalog
    from online.catalog.catalog import CatalogError
    from online.core.config import find_catalog_path

    input_path = getattr(ctx.find_root().obj, "input_path", None)

    try:
        path = find_catalog_path(input_path)
        return load_catalog(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        console.print("[dim]Use --input or set 'catalog' in the config file[/dim]")
        sys.exit(1)
    except CatalogError as e:
        console.print(f"[red]Error loading catalog: {e}[/red]")
        sys.exit(1)


@click.group(name="catalog")
def catalog() -> None:
    """Validate, inspect and publish the online catalog."""
    pass


@catalog.command()
@click.option("--loud", is_flag=True, help="Print problems to stderr as they are found")
@click.pass_context
def check(ctx: click.Context, loud: bool) -> None:
    """Validate the catalog. Exits non-zero if problems are found."""
    from online.catalog.validate import validate
    from online.core.report import ReportLevel

    cat = _load(ctx)
    level = ReportLevel.ERR if loud else ReportLevel.SILENT
    ok, report = validate(cat, level)

    if ok:
        console.print(
            f"[green]Catalog is valid[/green] "
            f"({len(cat.series)} series, {len(cat.messages)} messages)"
        )
        return

    console.print(f"[red]Catalog has problems ({report.size} found)[/red]")
    if not loud:
        console.print("[dim]Use --loud to print them[/dim]")
    sys.exit(1)


@catalog.command()
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Output file, '-' for stdout (default: config 'output')",
)
@click.option("--no-backup", is_flag=True, help="Don't back up the file being replaced")
@click.pass_context
def dump(ctx: click.Context, output: str | None, no_backup: bool) -> None:
    """Re-serialize the catalog as JSON."""
    from pathlib import Path

    from online.catalog.codec import dumps_catalog, save_catalog
    from online.core.config import get_paths

    cat = _load(ctx)

    if output == "-":
        click.echo(dumps_catalog(cat))
        return

    paths = get_paths()
    target = Path(output) if output else paths.output

    try:
        backup_path = save_catalog(target, cat, backup=not no_backup, backup_dir=paths.backups)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot write catalog to {target}: {e}[/red]")
        sys.exit(1)
    console.print(f"[green]Wrote catalog to {target}[/green]")
    if backup_path:
        console.print(f"[dim]Backup: {backup_path}[/dim]")


@catalog.command(name="series")
@click.option("--view", type=click.Choice(VIEW_CHOICES), default="public", help="View to list")
@click.option("-m", "--ministry", help="Only series of this ministry")
@click.option("--sort", "sort_by", type=click.Choice(SORT_CHOICES), default="name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_series(
    ctx: click.Context,
    view: str,
    ministry: str | None,
    sort_by: str,
    as_json: bool,
) -> None:
    """List the series visible in a view."""
    from online.catalog.ministry import Ministry
    from online.catalog.series import (
        filter_series_by_ministry,
        sort_series_by_name,
        sort_series_newest_first,
        sort_series_oldest_first,
    )
    from online.catalog.view import View

    cat = _load(ctx)
    selected = View.parse(view)
    results = cat.view_of(selected)

    if ministry:
        wanted = Ministry.parse(ministry)
        if wanted is Ministry.UNKNOWN:
            raise click.BadParameter(f"ministry '{ministry}' is unknown", param_hint="--ministry")
        results = filter_series_by_ministry(results, wanted)

    sorters = {
        "name": sort_series_by_name,
        "oldest": sort_series_oldest_first,
        "newest": sort_series_newest_first,
    }
    results = sorters[sort_by](results)

    if as_json:
        output = [
            {
                "id": seri.view_id(selected),
                "name": seri.name,
                "dates": seri.date_string(),
                "speakers": list(seri.speakers),
                "messages": len(seri.messages_in_view()),
            }
            for seri in results
        ]
        click.echo(json_module.dumps(output, indent=2, ensure_ascii=False))
        return

    if not results:
        console.print(f"[yellow]No series visible in the {view} view[/yellow]")
        return

    table = Table(title=f"Series in {view} view ({len(results)} found)")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Dates", style="blue")
    table.add_column("Msgs", style="green", justify="right")
    table.add_column("Speakers", style="dim")

    for seri in results:
        name = seri.name[:40] + "..." if len(seri.name) > 40 else seri.name
        table.add_row(
            seri.view_id(selected),
            name,
            seri.date_string(),
            str(len(seri.messages_in_view())),
            seri.speaker_string(),
        )

    console.print(table)


@catalog.command()
@click.argument("name")
@click.option("--view", type=click.Choice(VIEW_CHOICES), default="public", help="View to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, name: str, view: str, as_json: bool) -> None:
    """Show one series as seen in a view."""
    from online.catalog.codec import message_to_dict, resource_to_dict, series_to_dict
    from online.catalog.view import View

    cat = _load(ctx)
    seri = cat.find_series_by_name(name)

    if seri is None:
        console.print(f"[red]Series not found: {name}[/red]")
        console.print("[dim]Use 'online catalog series --view raw' to see all series[/dim]")
        sys.exit(1)

    selected = View.parse(view)
    seri = seri.view_of(selected)
    messages = seri.messages_in_view()

    if as_json:
        data = series_to_dict(seri)
        data["view"] = selected.value
        data["view-id"] = seri.view_id(selected)
        data["speakers"] = list(seri.speakers)
        data["resources"] = [resource_to_dict(r) for r in seri.all_resources]
        data["messages"] = [message_to_dict(m) for m in messages]
        click.echo(json_module.dumps(data, indent=2, ensure_ascii=False))
        return

    lines = [
        f"[bold]ID:[/bold] {seri.view_id(selected)}",
        f"[bold]Dates:[/bold] {seri.date_string()}",
        f"[bold]Ministry:[/bold] {seri.ministry().description}",
    ]
    if seri.speakers:
        lines.append(f"[bold]Speakers:[/bold] {seri.speaker_string()}")
    if seri.description:
        lines.append("")
        lines.append(seri.description)
    console.print(Panel("\n".join(lines), title=seri.name))

    if messages:
        table = Table(title=f"Messages ({len(messages)})")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Date", style="blue")
        table.add_column("Name")
        table.add_column("Speakers", style="dim")
        table.add_column("Audio", justify="center")
        for msg in messages:
            ref = msg.find_series_reference(seri.name)
            table.add_row(
                str(ref.index) if ref and ref.index else "",
                str(msg.date),
                msg.name,
                msg.speaker_string(),
                "[green]yes[/green]" if msg.has_audio() else "",
            )
        console.print(table)

    for resource in seri.all_resources:
        console.print(
            f"  [dim]{resource.classifier}:[/dim] "
            f"[link={resource.url}]{resource.display_name}[/link]"
        )


@catalog.command()
@click.option("-m", "--ministry", default="wol", help="Ministry the podcast is for")
@click.option("-d", "--days", type=int, default=180, help="Days of history to include")
@click.option("--sizes/--no-sizes", default=True, help="Look up audio file sizes")
@click.pass_context
def podcast(ctx: click.Context, ministry: str, days: int, sizes: bool) -> None:
    """Print the podcast feed data as JSON."""
    from online.catalog.message import CachingSizeResolver
    from online.catalog.ministry import Ministry
    from online.catalog.podcast import podcast_context, podcast_item

    wanted = Ministry.parse(ministry)
    if wanted is Ministry.UNKNOWN:
        raise click.BadParameter(f"ministry '{ministry}' is unknown", param_hint="--ministry")

    cat = _load(ctx)
    data = podcast_context(cat, ministry=wanted, days=days)

    resolver = CachingSizeResolver() if sizes else (lambda url: -1)
    data["messages"] = [podcast_item(msg, resolver) for msg in data["messages"]]
    click.echo(json_module.dumps(data, indent=2, ensure_ascii=False))
