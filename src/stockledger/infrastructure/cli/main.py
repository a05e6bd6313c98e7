import click

from stockledger.infrastructure.bootstrap import settings
from stockledger.infrastructure.cli.item_commands import (
    item_create,
    item_deactivate,
    item_list,
    item_low_stock,
    item_show,
    item_update,
)
from stockledger.infrastructure.cli.report_commands import report_valuation
from stockledger.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_audit,
    stock_history,
)
from stockledger.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Stock Ledger: inventory and ingredient stock tracking"""
    try:
        config = settings()
        configure_logging(config.log_level, config.log_json)
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")


@cli.group()
def item() -> None:
    """Manage stock items."""


@cli.group()
def stock() -> None:
    """Adjust stock and inspect the ledger."""


@cli.group()
def report() -> None:
    """Read-only reports."""


# Register subcommands
item.add_command(item_create)
item.add_command(item_deactivate)
item.add_command(item_list)
item.add_command(item_low_stock)
item.add_command(item_show)
item.add_command(item_update)
stock.add_command(stock_adjust)
stock.add_command(stock_audit)
stock.add_command(stock_history)
report.add_command(report_valuation)
