"""CLI commands for read-only stock reports."""

from __future__ import annotations

import click

from stockledger.application.valuation_report import ValuationHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import settings, stock_catalog


@click.command("valuation")
def report_valuation() -> None:
    """Show the value of stock on hand."""
    handler = ValuationHandler(stock_catalog(settings()))

    try:
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Products':<14} {str(dto.products):>14}")
    click.echo(f"{'Ingredients':<14} {str(dto.ingredients):>14}")
    click.echo("-" * 29)
    click.echo(f"{'Total':<14} {str(dto.total):>14}  ({dto.item_count} active items)")
