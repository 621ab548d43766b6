import click

from stockpilot.infrastructure import settings
from stockpilot.infrastructure.cli.auth_commands import auth_login, auth_logout, auth_whoami
from stockpilot.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_add_lot,
    inventory_delete,
    inventory_hold,
    inventory_list,
    inventory_release,
    inventory_update,
    inventory_watch,
)
from stockpilot.infrastructure.cli.product_commands import (
    product_add,
    product_import,
    product_list,
    product_search,
)
from stockpilot.infrastructure.cli.report_commands import (
    recommend,
    report_dashboard,
    report_export,
    report_print,
    report_summary,
)
from stockpilot.infrastructure.logger import setup_logger


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output.")
def cli(verbose: bool) -> None:
    """StockPilot — inventory management"""
    setup_logger("stockpilot", "DEBUG" if verbose else settings.LOG_LEVEL)


@cli.group()
def auth() -> None:
    """Sign in and out."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Manage inventory items and lots."""


@cli.group()
def report() -> None:
    """Dashboards and reports."""


# Register subcommands
auth.add_command(auth_login)
auth.add_command(auth_logout)
auth.add_command(auth_whoami)
product.add_command(product_add)
product.add_command(product_import)
product.add_command(product_list)
product.add_command(product_search)
inventory.add_command(inventory_add)
inventory.add_command(inventory_add_lot)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_hold)
inventory.add_command(inventory_list)
inventory.add_command(inventory_release)
inventory.add_command(inventory_update)
inventory.add_command(inventory_watch)
report.add_command(report_dashboard)
report.add_command(report_export)
report.add_command(report_print)
report.add_command(report_summary)
cli.add_command(recommend)
