"""
main.py
-------
Command-line entry point for the cash-flow recurrence planner.

Usage: cashflow-planner [--log-level LEVEL] COMMAND ...

Commands:
    describe FILE            List the recurring expenses in FILE.
    schedule FILE [--month]  Show the payments they produce for a month.

FILE holds recurring expense records as JSON (a list, or an object with an
"expenses" list), the same shape the extraction service returns.
"""

import sys
from pathlib import Path

import click

from services.intake_service import IntakeService, IntakeResult
from services.scheduling_service import SchedulingService
from utils.formatting import describe_recurrence, format_currency
from utils.logger import LOG_LEVELS, set_level


def _load(path: Path) -> IntakeResult:
    result = IntakeService().parse_candidates(path.read_text(encoding="utf-8"))
    for record, warning in result.rejected:
        click.echo(f"⚠️  {warning}", err=True)
    return result


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL for this run (logs go to stderr).",
)
def cli(log_level: str | None) -> None:
    """Plan recurring expenses onto a weekly cash-flow board."""
    if log_level:
        set_level(log_level)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def describe(file: Path) -> None:
    """List recurring expenses with their schedules."""
    result = _load(file)
    if not result.accepted:
        click.echo("📭 No recurring expenses found.")
        return
    for expense in result.accepted:
        status = "active" if expense.is_active else "paused"
        click.echo(
            f"• {expense.description}: {format_currency(expense.amount)} "
            f"[{expense.priority}, {status}] - {describe_recurrence(expense)}"
        )


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--month", "target_month", default=None, help="Target month as YYYY-MM (default: current month)")
def schedule(file: Path, target_month: str | None) -> None:
    """Show the payment items FILE's recurring expenses produce for a month."""
    result = _load(file)
    try:
        scheduled = SchedulingService().schedule_month(result.accepted, target_month)
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    current_week = None
    for item in scheduled.payments:
        if item.category != current_week:
            current_week = item.category
            click.echo(f"\n{current_week}")
        sign = "-" if item.is_expense() else "+"
        click.echo(
            f"  {item.due_date}  {sign}{format_currency(item.amount):>12}  "
            f"{item.description} ({item.priority})"
        )
    click.echo(f"\n{scheduled.summary}")


if __name__ == "__main__":
    cli()
