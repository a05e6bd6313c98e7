"""CLI commands for stock adjustments and their ledger."""

from __future__ import annotations

import click

from stockledger.application.adjust_stock import AdjustStockHandler
from stockledger.application.audit_stock import AuditStockHandler
from stockledger.application.show_history import ShowHistoryHandler
from stockledger.domain.exceptions import DomainException
from stockledger.domain.model.adjustment import AdjustmentReason
from stockledger.infrastructure.bootstrap import (
    adjustment_ledger,
    adjustment_processor,
    settings,
    stock_catalog,
)
from stockledger.infrastructure.cli.formatting import echo_item_detail, qty

REASONS = click.Choice([r.value for r in AdjustmentReason])


@click.command("adjust")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--operation", required=True, type=click.Choice(["add", "remove"]))
@click.option("--quantity", required=True, help="Positive quantity (decimals allowed).")
@click.option("--reason", required=True, type=REASONS, help="Reason code.")
@click.option("--notes", default="", help="Optional free-text notes.")
@click.option("--actor", required=True, envvar="STOCKLEDGER_ACTOR", help="Staff member ID.")
def stock_adjust(
    item_id: str,
    operation: str,
    quantity: str,
    reason: str,
    notes: str,
    actor: str,
) -> None:
    """Add or remove stock with an audit record."""
    handler = AdjustStockHandler(adjustment_processor(settings()))

    try:
        dto = handler.handle(
            item_id=item_id,
            operation=operation,
            quantity=quantity,
            reason=reason,
            notes=notes,
            actor_id=actor,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock adjusted: {operation} {quantity} ({reason})")
    echo_item_detail(dto)


@click.command("history")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--page", default=1, show_default=True, type=int, help="Page number.")
@click.option("--size", default=None, type=int, help="Records per page.")
def stock_history(item_id: str, page: int, size: int | None) -> None:
    """Show an item's adjustments, newest first."""
    config = settings()
    handler = ShowHistoryHandler(
        stock_catalog(config),
        adjustment_ledger(config),
        page_size=config.history_page_size,
    )

    try:
        dto = handler.handle(item_id, page=page, size=size)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"History for '{dto.item_name}'  (page {dto.page}, {dto.total} records)")
    if not dto.records:
        click.echo("No adjustments recorded.")
        return

    click.echo(
        f"  {'When':<25} {'Op':<6} {'Qty':>8} {'Before':>8} {'After':>8} "
        f"{'Reason':<18} {'By':<12} Notes"
    )
    click.echo(f"  {'-'*100}")
    for r in dto.records:
        click.echo(
            f"  {r.created_at.isoformat(timespec='seconds'):<25} {r.operation:<6} "
            f"{qty(r.quantity):>8} {qty(r.previous_stock):>8} {qty(r.new_stock):>8} "
            f"{r.reason:<18} {r.actor_id:<12} {r.notes}"
        )
    if dto.has_more:
        click.echo(f"  ... more on page {dto.page + 1}")


@click.command("audit")
@click.option("--id", "item_id", default=None, help="Item ID (default: every item).")
def stock_audit(item_id: str | None) -> None:
    """Replay the ledger and check it against current stock."""
    config = settings()
    handler = AuditStockHandler(stock_catalog(config), adjustment_ledger(config))

    try:
        reports = [handler.handle(item_id)] if item_id else handler.handle_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    failures = 0
    for report in reports:
        if report.is_consistent:
            click.echo(
                f"OK    {report.item_id}  stock={qty(report.current_stock)}  "
                f"records={report.record_count}"
            )
            continue
        failures += 1
        click.echo(f"FAIL  {report.item_id}")
        for problem in report.problems:
            click.echo(f"      {problem}")

    if failures:
        raise click.ClickException(f"{failures} item(s) failed the ledger audit")
