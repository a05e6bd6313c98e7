"""Shared table formatting for CLI output."""

from __future__ import annotations

from decimal import Decimal

import click

from stockledger.application.dto import StockItemDTO


def qty(value: Decimal | None) -> str:
    """Render 20.000 as '20' and 2.50 as '2.5'; None as '-'."""
    if value is None:
        return "-"
    return f"{value.normalize():f}"


def echo_item_table(items: list[StockItemDTO]) -> None:
    click.echo(
        f"{'ID':<36}  {'Kind':<10} {'Name':<20} {'Stock':>10} {'Min':>8} "
        f"{'Unit':<5} {'Status':<6} {'Value':>12}"
    )
    click.echo("-" * 116)
    for item in items:
        click.echo(
            f"{item.id:<36}  {item.kind:<10} {item.name:<20} {qty(item.current_stock):>10} "
            f"{qty(item.min_stock):>8} {item.unit:<5} {item.status:<6} {str(item.total_value):>12}"
        )


def echo_item_detail(item: StockItemDTO) -> None:
    restocked = item.last_restocked_at.isoformat() if item.last_restocked_at else "never"
    click.echo(f"{item.name}  ({item.kind}, id={item.id})")
    if not item.is_active:
        click.echo("  ** inactive **")
    click.echo(f"  Stock:      {qty(item.current_stock)} {item.unit}  [{item.status}]")
    click.echo(f"  Min / Max:  {qty(item.min_stock)} / {qty(item.max_stock)}")
    click.echo(f"  Unit cost:  {item.unit_cost}")
    click.echo(f"  Value:      {item.total_value}")
    click.echo(f"  Restocked:  {restocked}")
    if item.supplier:
        click.echo(f"  Supplier:   {item.supplier}")
    if item.description:
        click.echo(f"  Notes:      {item.description}")
