"""Command-line interface for the loan amortizer.

This module uses the ``click`` library to implement a multi-command
interface. Users can print the full amortization schedule or only the payment
summary. Results can be printed to the terminal or exported to JSON/CSV
files.
"""

from __future__ import annotations

import csv
import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click

from .data_models import ScheduleResult
from .engine import compute_schedule
from .formatter import print_schedule, print_summary, result_to_dict

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Enter a positive loan amount, a non-negative rate and a positive term"


def parse_amount(value: str) -> str:
    """Normalise an amount string with optional suffixes.

    Accepts plain numbers ("250000"), thousands separators ("250,000") and
    shorthand with ``k``/``m`` suffixes (e.g., "250k" meaning 250_000).
    Returns the amount as a plain numeric string for the engine.
    """
    value = value.strip().lower()
    value = value.replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return str(Decimal(value) * factor)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount: {value}")


def _run(principal: str, rate: str, term: str) -> ScheduleResult:
    result = compute_schedule(parse_amount(principal), rate, term)
    if result.is_empty:
        raise click.ClickException(INVALID_INPUT_MESSAGE)
    return result


def export_to_json(path: Path, result: ScheduleResult, include_schedule: bool = True) -> None:
    """Export the result to a JSON file."""
    data = result_to_dict(result)
    if not include_schedule:
        data.pop("schedule")
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: ScheduleResult) -> None:
    """Export the schedule to a CSV file."""
    header = ["Month", "Payment", "Principal", "Interest", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for item in result.schedule:
            writer.writerow(
                [
                    item.month,
                    float(item.monthly_payment),
                    float(item.principal_payment),
                    float(item.interest_payment),
                    float(item.remaining_balance),
                ]
            )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line loan amortization calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, help="Loan term in months")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--max-rows", "max_rows", type=int, default=120, show_default=True, help="Rows to print (0 for all)")
def schedule(principal: str, rate: str, term: str, output: Optional[str], max_rows: int) -> None:
    """Compute and print the full amortization schedule."""
    result = _run(principal, rate, term)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        logger.debug("Wrote %d rows to %s", len(result.schedule), path)
        click.echo(f"Schedule exported to {path}")
        return
    print_summary(result)
    # Limit schedule length printed to avoid flooding the terminal
    if max_rows and len(result.schedule) > max_rows:
        click.echo(f"Schedule has {len(result.schedule)} rows; showing first {max_rows} rows.")
        print_schedule(result.schedule[:max_rows])
    else:
        print_schedule(result.schedule)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Loan amount")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--term", "-t", "term", required=True, help="Loan term in months")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: str, term: str, output: Optional[str]) -> None:
    """Compute and print only the payment summary."""
    result = _run(principal, rate, term)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        export_to_json(path, result, include_schedule=False)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result)


if __name__ == "__main__":
    cli()
