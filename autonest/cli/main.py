"""Main CLI entry point for AutoNest."""

import click
from rich.console import Console

from autonest import __version__
from autonest.utils import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="AutoNest")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """AutoNest - pack rectangles into a growable region.

    Reads items as JSON, computes non-overlapping placements and reports
    them as a table, JSON or a text layout.
    """
    from autonest.config import get_settings

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging("DEBUG" if verbose else get_settings().log_level)


# Import and register commands
from autonest.cli.nest_cmd import nest, check

cli.add_command(nest)
cli.add_command(check)


@cli.command()
def status() -> None:
    """Show the effective nesting settings."""
    from autonest.config import get_settings
    from autonest.utils import format_dimension, format_size

    settings = get_settings()

    console.print("[bold]AutoNest Status[/bold]")
    console.print(f"Version: {__version__}")
    console.print()
    console.print("[bold]Packing:[/bold]")
    console.print(f"  Target Region: {format_size(settings.target_width, settings.target_height)}")
    console.print(f"  Spacing: {format_dimension(settings.spacing)}")
    console.print(f"  Rotation: {'[green]Enabled[/green]' if settings.allow_rotation else '[yellow]Disabled[/yellow]'}")
    console.print()
    console.print("[bold]Expansion:[/bold]")
    console.print(f"  Margin: {format_dimension(settings.expansion_margin)}")
    console.print(f"  Max Attempts: {settings.max_attempts}")
    console.print(f"  Max Dimension: {format_dimension(settings.max_dimension)}")
    console.print(f"  Expand When Empty: {settings.expand_when_empty}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
