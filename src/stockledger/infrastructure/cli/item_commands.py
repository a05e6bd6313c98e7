"""CLI commands for the StockItem aggregate."""

from __future__ import annotations

import click

from stockledger.application.create_item import CreateItemHandler
from stockledger.application.list_items import ListItemsHandler
from stockledger.application.show_item import ShowItemHandler
from stockledger.application.update_item import UpdateItemHandler
from stockledger.domain.exceptions import DomainException
from stockledger.infrastructure.bootstrap import (
    adjustment_processor,
    item_locks,
    settings,
    stock_catalog,
)
from stockledger.infrastructure.cli.formatting import (
    echo_item_detail,
    echo_item_table,
    qty,
)

KINDS = click.Choice(["product", "ingredient"])
STATUSES = click.Choice(["ok", "low", "out"])


@click.command("create")
@click.option("--kind", required=True, type=KINDS, help="Product or ingredient.")
@click.option("--name", required=True, help="Item name (unique within its kind).")
@click.option("--unit", default="pcs", show_default=True, help="Unit of measure.")
@click.option("--min-stock", default=None, help="Low-stock threshold.")
@click.option("--max-stock", default=None, help="Target maximum stock.")
@click.option("--unit-cost", default="0", show_default=True, help="Cost per unit (e.g. 2.50).")
@click.option("--initial-stock", default="0", show_default=True, help="Opening quantity.")
@click.option("--supplier", default="", help="Supplier name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--actor", required=True, envvar="STOCKLEDGER_ACTOR", help="Staff member ID.")
def item_create(
    kind: str,
    name: str,
    unit: str,
    min_stock: str | None,
    max_stock: str | None,
    unit_cost: str,
    initial_stock: str,
    supplier: str,
    description: str,
    actor: str,
) -> None:
    """Onboard a new product or ingredient."""
    config = settings()
    handler = CreateItemHandler(
        catalog=stock_catalog(config),
        processor=adjustment_processor(config),
        default_min_stock=config.default_min_stock,
    )

    try:
        dto = handler.handle(
            kind=kind,
            name=name,
            actor_id=actor,
            unit=unit,
            min_stock=min_stock,
            max_stock=max_stock,
            unit_cost=unit_cost,
            initial_stock=initial_stock,
            description=description,
            supplier=supplier,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Created {dto.kind} '{dto.name}' (id={dto.id}) with {qty(dto.current_stock)} {dto.unit}")


@click.command("show")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--include-inactive", is_flag=True, default=False, help="Show deactivated items too.")
def item_show(item_id: str, include_inactive: bool) -> None:
    """Show one item with its status and value."""
    config = settings()
    handler = ShowItemHandler(stock_catalog(config), config.default_min_stock)

    try:
        dto = handler.handle(item_id, include_inactive=include_inactive)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_item_detail(dto)


@click.command("list")
@click.option("--kind", type=KINDS, default=None, help="Only this kind.")
@click.option("--status", type=STATUSES, default=None, help="Only this status.")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include inactive items.")
def item_list(kind: str | None, status: str | None, show_all: bool) -> None:
    """List stock items."""
    config = settings()
    handler = ListItemsHandler(stock_catalog(config), config.default_min_stock)

    try:
        items = handler.handle(kind=kind, status=status, active=None if show_all else True)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("No stock items found.")
        return
    echo_item_table(items)


@click.command("low-stock")
@click.option("--kind", type=KINDS, default=None, help="Only this kind.")
def item_low_stock(kind: str | None) -> None:
    """List items that are low or out of stock."""
    config = settings()
    handler = ListItemsHandler(stock_catalog(config), config.default_min_stock)

    try:
        items = handler.low_stock(kind=kind)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("All items are sufficiently stocked.")
        return
    echo_item_table(items)


@click.command("update")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--unit", default=None, help="New unit of measure.")
@click.option("--min-stock", default=None, help="New low-stock threshold ('' clears it).")
@click.option("--max-stock", default=None, help="New maximum stock ('' clears it).")
@click.option("--unit-cost", default=None, help="New cost per unit.")
@click.option("--supplier", default=None, help="New supplier.")
@click.option("--description", default=None, help="New description.")
def item_update(
    item_id: str,
    name: str | None,
    unit: str | None,
    min_stock: str | None,
    max_stock: str | None,
    unit_cost: str | None,
    supplier: str | None,
    description: str | None,
) -> None:
    """Edit item details (not quantity; use 'stock adjust' for that)."""
    config = settings()
    handler = UpdateItemHandler(
        stock_catalog(config),
        config.default_min_stock,
        locks=item_locks(),
        lock_timeout=config.lock_timeout,
    )

    try:
        dto = handler.handle(
            item_id,
            name=name,
            unit=unit,
            min_stock=min_stock,
            max_stock=max_stock,
            unit_cost=unit_cost,
            description=description,
            supplier=supplier,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_item_detail(dto)


@click.command("deactivate")
@click.option("--id", "item_id", required=True, help="Item ID.")
def item_deactivate(item_id: str) -> None:
    """Deactivate an item. Its history is kept."""
    config = settings()
    handler = UpdateItemHandler(
        stock_catalog(config),
        config.default_min_stock,
        locks=item_locks(),
        lock_timeout=config.lock_timeout,
    )

    try:
        dto = handler.deactivate(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item '{dto.name}' deactivated.")
