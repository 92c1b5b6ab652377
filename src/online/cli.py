"""
Main CLI dispatcher for online.

Usage:
    online catalog check [--loud]        # Validate the catalog
    online catalog dump [-o FILE]        # Re-serialize the catalog
    online catalog series [--view V]     # List series visible in a view
    online catalog show NAME             # Show one series
    online catalog podcast               # Podcast feed data as JSON
"""

import logging

import click
from rich.console import Console

from online import __version__

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, input_path: str | None = None):
        self.verbose = verbose
        self.input_path = input_path
        self.console = console


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="online")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(dir_okay=False),
    help="Catalog JSON file (default: $ONLINE_CATALOG or config 'catalog')",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, input_path: str | None) -> None:
    """Word of Life online content tools.

    Validate, normalize and publish the catalog of series and messages.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Context(verbose=verbose, input_path=input_path)


# Import and register command groups (imports after main definition intentional)
from online.catalog.commands import catalog  # noqa: E402

main.add_command(catalog)


if __name__ == "__main__":
    main()
