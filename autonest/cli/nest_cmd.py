"""CLI commands for nesting items from a JSON file."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

console = Console()


def load_items(path: Path) -> list:
    """Read items from a JSON list or a ``{"items": [...]}`` document."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise click.BadParameter("expected a list of items or an object with an 'items' list")
    return data


@click.command("nest")
@click.argument("items_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--spacing", "-s", type=float, help="Gap between items")
@click.option("--rotate/--no-rotate", default=None, help="Allow 90 degree rotation")
@click.option("--width", "-w", type=float, help="Initial region width")
@click.option("--height", "-h", type=float, help="Initial region height")
@click.option("--expand-when-empty/--no-expand-when-empty", default=None, help="Grow the region even if nothing fits")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--layout", "as_layout", is_flag=True, help="Output as a text layout report")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write the JSON result to a file")
@click.pass_context
def nest(ctx, items_path, spacing, rotate, width, height, expand_when_empty, as_json, as_layout, output):
    """Nest the items in ITEMS_PATH.

    Example: autonest nest items.json --spacing 5 --rotate

    Items are objects with "id", "width" and "height".
    """
    from autonest.nesting import ConfigurationError, NestingConfig, NestingEngine, export_layout
    from autonest.utils import format_dimension, format_size

    try:
        items = load_items(items_path)
    except (json.JSONDecodeError, UnicodeDecodeError, click.BadParameter) as e:
        console.print(f"[red]Could not read items: {e}[/red]")
        ctx.exit(1)

    overrides = {
        "spacing": spacing,
        "allow_rotation": rotate,
        "target_width": width,
        "target_height": height,
        "expand_when_empty": expand_when_empty,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}

    try:
        engine = NestingEngine(NestingConfig.from_settings(), **overrides)
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        ctx.exit(1)

    result = engine.run(items)

    if output:
        output.write_text(json.dumps(result.to_dict(), indent=2, default=str), encoding="utf-8")
        if not as_json:
            console.print(f"[green]Wrote {len(result.placements)} placements to {output}[/green]")

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
        return

    if as_layout:
        click.echo(export_layout(result))
        return

    table = Table(title=f"Placements - {items_path.name}")
    table.add_column("ID", style="cyan")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Rotated", justify="center")

    for p in result.placements:
        table.add_row(
            str(p.id),
            format_dimension(p.x),
            format_dimension(p.y),
            format_size(p.width, p.height),
            "yes" if p.rotated else "",
        )

    console.print(table)

    summary = [
        f"Placed: {len(result.placements)}",
        f"Region: {format_size(result.region_width, result.region_height)}",
        f"Utilization: {result.utilization:.1f}%",
        f"Attempts: {result.attempts}",
    ]
    if result.unplaced:
        summary.append(f"[yellow]Unplaced: {', '.join(str(i) for i in result.unplaced)}[/yellow]")
    if result.rejected:
        summary.append(f"[red]Rejected: {', '.join(f'{r.id} ({r.reason})' for r in result.rejected)}[/red]")

    border = "green" if result.complete else "yellow"
    console.print(Panel("\n".join(summary), title="Summary", border_style=border))


@click.command("check")
@click.argument("items_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def check(ctx, items_path):
    """Report which items in ITEMS_PATH can be nested."""
    from autonest.nesting import validate_items

    try:
        items = load_items(items_path)
    except (json.JSONDecodeError, UnicodeDecodeError, click.BadParameter) as e:
        console.print(f"[red]Could not read items: {e}[/red]")
        ctx.exit(1)

    valid, invalid = validate_items(items)

    console.print(f"[green]{len(valid)} valid item(s)[/green]")
    if invalid:
        table = Table(title="Invalid items")
        table.add_column("ID", style="cyan")
        table.add_column("Reason", style="red")
        for entry in invalid:
            table.add_row(str(entry.id), entry.reason)
        console.print(table)
        ctx.exit(1)
