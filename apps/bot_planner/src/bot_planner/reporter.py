"""Console and JSON output for bot draft previews.

Uses rich library for color-coded terminal tables.
Saves structured JSON to output/ directory.
"""

import json
import logging
from datetime import datetime, UTC
from decimal import Decimal
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gridcalc.formatting import format_percent, format_price, format_range

from bot_planner.config import PlannerConfig
from bot_planner.preview import GridPreview

logger = logging.getLogger(__name__)

console = Console()


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _status_text(preview: GridPreview) -> Text:
    """Create a colored status indicator."""
    if preview.valid:
        return Text("VALID", style="bold green")
    return Text("INVALID", style="bold red")


def print_console(previews: list[GridPreview]) -> None:
    """Print draft previews to console with color coding."""
    console.print()
    console.rule("[bold]Grid Bot Planner[/bold]")
    console.print()

    for preview in previews:
        _print_preview(preview)

    _print_verdict(previews)


def _print_preview(preview: GridPreview) -> None:
    """Print errors, grid levels and estimated performance for one draft."""
    console.print(Text.assemble(Text(preview.label, style="bold"), "  ", _status_text(preview)))

    if preview.validation.errors:
        _print_errors_table(preview)

    if preview.can_estimate:
        _print_levels_table(preview)
        _print_performance(preview)
    else:
        console.print(f"  [yellow]{preview.reason or 'Cannot estimate'}[/yellow]")
    console.print()


def _print_errors_table(preview: GridPreview) -> None:
    table = Table(title="Field Errors", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="white", min_width=18)
    table.add_column("Error", style="red", min_width=40)

    for error in preview.validation.errors:
        table.add_row(error.field, error.message)

    console.print(table)


def _print_levels_table(preview: GridPreview) -> None:
    levels = preview.levels
    title = f"Grid Levels {format_range(levels[0], levels[-1])}"
    if preview.seeded_range:
        title += f" (seeded from last price {format_price(preview.last_price)})"

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Line", style="white", min_width=8)
    table.add_column("Price", justify="right", min_width=14)

    # Top of the range first, as on the chart's price axis
    for line in reversed(preview.price_lines):
        table.add_row(line.title, format_price(line.price))

    console.print(table)

    summary = preview.step_summary
    if summary is not None:
        console.print(
            f"  Step: {format_price(summary.min_step)} - {format_price(summary.max_step)}  |  "
            f"{format_percent(summary.min_step_pct)}% - {format_percent(summary.max_step_pct)}%"
        )


def _print_performance(preview: GridPreview) -> None:
    shown = preview.projection.display()
    console.print(
        f"  Daily Profit (Est.):   [green]${shown['daily_profit']} ({shown['daily_profit_percentage']}%)[/green]"
    )
    console.print(
        f"  Monthly Profit (Est.): [green]${shown['monthly_profit']} ({shown['monthly_profit_percentage']}%)[/green]"
    )


def _print_verdict(previews: list[GridPreview]) -> None:
    """Print final valid/invalid verdict."""
    invalid = sum(1 for p in previews if not p.valid)
    console.print()
    if invalid == 0:
        console.print(f"[bold green]ALL DRAFTS VALID[/bold green] ({len(previews)}/{len(previews)})")
    else:
        console.print(
            f"[bold red]INVALID DRAFTS[/bold red] ({invalid} of {len(previews)})"
        )
    console.print()


def _preview_to_dict(preview: GridPreview) -> dict:
    """Convert a GridPreview to a JSON-serializable dict."""
    projection = preview.projection
    return {
        "label": preview.label,
        "valid": preview.valid,
        "errors": [{"field": e.field, "message": e.message} for e in preview.validation.errors],
        "can_estimate": preview.can_estimate,
        "reason": preview.reason,
        "seeded_range": preview.seeded_range,
        "levels": preview.levels,
        "projection": {
            "daily_profit": projection.daily_profit,
            "monthly_profit": projection.monthly_profit,
            "daily_profit_percentage": projection.daily_profit_percentage,
            "monthly_profit_percentage": projection.monthly_profit_percentage,
            "display": projection.display(),
        },
        "create_request": preview.create_request,
    }


def save_json(previews: list[GridPreview], config: PlannerConfig, output_dir: str = "output") -> str:
    """Save previews to a JSON file.

    Args:
        previews: Draft previews to save
        config: Planner configuration (estimator assumptions are recorded)
        output_dir: Directory for output files

    Returns:
        Path to the saved JSON file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(UTC).strftime("%Y%m%d_%H%M%S")
    filepath = output_path / f"bot_plan_{timestamp}.json"

    data = {
        "timestamp": datetime.now(UTC).isoformat(),
        "estimator": config.estimator.model_dump(mode="json"),
        "summary": {
            "total": len(previews),
            "valid": sum(1 for p in previews if p.valid),
            "estimable": sum(1 for p in previews if p.can_estimate),
        },
        "drafts": [_preview_to_dict(p) for p in previews],
    }

    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, cls=_DecimalEncoder)

    console.print(f"Results saved to [bold]{filepath}[/bold]")
    logger.debug("Wrote %d draft previews to %s", len(previews), filepath)
    return str(filepath)
