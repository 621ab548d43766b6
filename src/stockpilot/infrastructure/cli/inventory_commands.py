"""CLI commands for inventory management."""

from __future__ import annotations

import time

import click

from stockpilot.application.add_inventory import AddInventoryItemHandler
from stockpilot.application.add_lot import AddLotHandler
from stockpilot.application.app_shell import StockPilotApp, View
from stockpilot.application.dto import InventoryLineDTO
from stockpilot.application.hold_inventory import SetHoldHandler
from stockpilot.application.remove_inventory import RemoveInventoryItemHandler
from stockpilot.application.show_inventory import ShowInventoryHandler
from stockpilot.application.update_inventory import UpdateInventoryItemHandler
from stockpilot.domain.exceptions import DomainException
from stockpilot.domain.model.inventory import CustomerType, Lot
from stockpilot.infrastructure import bootstrap
from stockpilot.infrastructure.cli.session import signed_in


def _parse_lot(raw: str) -> Lot:
    """Parse '120:2025-03-31' into a Lot."""
    if ":" not in raw:
        raise click.BadParameter(
            f"Invalid lot format '{raw}'. Expected 'Quantity:YYYY-MM-DD'."
        )
    qty, expires = raw.split(":", 1)
    try:
        return Lot.of(qty.strip(), expires.strip())
    except DomainException as exc:
        raise click.BadParameter(str(exc))


def _parse_lots(ctx, param, values: tuple[str, ...]) -> list[Lot]:
    return [_parse_lot(raw) for raw in values]


_CUSTOMER_TYPES = click.Choice([c.value for c in CustomerType], case_sensitive=False)


def _print_lines(lines: list[InventoryLineDTO]) -> None:
    click.echo(
        f"{'ID':<22} {'Product':<24} {'SKU':<12} {'Qty':>7} {'Pallets':>8} "
        f"{'Lots':>5} {'Next Expiry':<11} {'Hold':<4}"
    )
    click.echo("-" * 100)
    for line in lines:
        click.echo(
            f"{line.id:<22} {line.product_name:<24} {line.sku:<12} {line.quantity:>7} "
            f"{line.pallets:>8} {line.lot_count:>5} {line.next_expiration or '-':<11} "
            f"{'yes' if line.on_hold else '':<4}"
        )


@click.command("add")
@click.option("--product-id", required=True, help="ID of the product.")
@click.option("--sku", required=True, help="SKU of this stock.")
@click.option(
    "--lot", "lots", multiple=True, callback=_parse_lots,
    help="Lot as 'Quantity:YYYY-MM-DD'. Repeatable.",
)
@click.option("--location", "locations", multiple=True, help="Storage location. Repeatable.")
@click.option("--customer-type", default=CustomerType.REGULAR.value, type=_CUSTOMER_TYPES)
@click.option("--on-hold", is_flag=True, help="Create the item on hold.")
def inventory_add(
    product_id: str,
    sku: str,
    lots: list[Lot],
    locations: tuple[str, ...],
    customer_type: str,
    on_hold: bool,
) -> None:
    """Add an inventory item."""
    with signed_in() as svc:
        handler = AddInventoryItemHandler(svc.inventory_repo, svc.org_id)
        try:
            item_id = handler.handle(
                product_id=product_id,
                sku=sku,
                lots=lots,
                locations=list(locations),
                customer_type=customer_type,
                on_hold=on_hold,
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    total = sum(lot.quantity for lot in lots)
    click.echo(f"Inventory item {item_id} added with {total} unit(s)")


@click.command("add-lot")
@click.argument("item_id")
@click.argument("lot")
def inventory_add_lot(item_id: str, lot: str) -> None:
    """Receive a new LOT ('Quantity:YYYY-MM-DD') into an item."""
    parsed = _parse_lot(lot)
    with signed_in() as svc:
        handler = AddLotHandler(svc.inventory_repo, svc.org_id)
        try:
            quantity = handler.handle(item_id, parsed)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Lot added; item {item_id} now holds {quantity} unit(s)")


@click.command("update")
@click.argument("item_id")
@click.option("--sku", help="New SKU.")
@click.option(
    "--lot", "lots", multiple=True, callback=_parse_lots,
    help="Replace all lots. Repeatable 'Quantity:YYYY-MM-DD'.",
)
@click.option("--location", "locations", multiple=True, help="Replace locations. Repeatable.")
@click.option("--customer-type", type=_CUSTOMER_TYPES)
def inventory_update(
    item_id: str,
    sku: str | None,
    lots: list[Lot],
    locations: tuple[str, ...],
    customer_type: str | None,
) -> None:
    """Update fields of an inventory item."""
    changes: dict = {}
    if sku:
        changes["sku"] = sku
    if lots:
        changes["lots"] = lots
    if locations:
        changes["locations"] = list(locations)
    if customer_type:
        changes["customer_type"] = customer_type
    if not changes:
        raise click.UsageError("Nothing to update.")

    with signed_in() as svc:
        handler = UpdateInventoryItemHandler(svc.inventory_repo, svc.org_id)
        try:
            handler.handle(item_id, changes)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Inventory item {item_id} updated")


def _set_hold(item_ids: tuple[str, ...], on_hold: bool) -> int:
    with signed_in() as svc:
        handler = SetHoldHandler(svc.inventory_repo, svc.org_id)
        try:
            return handler.handle(list(item_ids), on_hold)
        except DomainException as exc:
            raise click.ClickException(str(exc))


@click.command("hold")
@click.argument("item_ids", nargs=-1, required=True)
def inventory_hold(item_ids: tuple[str, ...]) -> None:
    """Put items on hold (all or none)."""
    count = _set_hold(item_ids, True)
    click.echo(f"{count} item(s) put on hold")


@click.command("release")
@click.argument("item_ids", nargs=-1, required=True)
def inventory_release(item_ids: tuple[str, ...]) -> None:
    """Release held items (all or none)."""
    count = _set_hold(item_ids, False)
    click.echo(f"{count} item(s) released")


@click.command("delete")
@click.argument("item_id")
@click.confirmation_option(prompt="Delete this inventory item permanently?")
def inventory_delete(item_id: str) -> None:
    """Delete an inventory item."""
    with signed_in() as svc:
        handler = RemoveInventoryItemHandler(svc.inventory_repo, svc.org_id)
        try:
            handler.handle(item_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Inventory item {item_id} deleted")


@click.command("list")
@click.option("--hide-held", is_flag=True, help="Leave out items on hold.")
def inventory_list(hide_held: bool) -> None:
    """Show current inventory levels."""
    with signed_in() as svc:
        lines = ShowInventoryHandler().handle(
            svc.app.products, svc.app.inventory, include_held=not hide_held
        )

    if not lines:
        click.echo("No inventory records found.")
        return
    _print_lines(lines)


@click.command("watch")
@click.option("--interval", default=2.0, show_default=True, help="Seconds between checks.")
@click.option("--count", default=0, help="Stop after this many checks (0 = forever).")
def inventory_watch(interval: float, count: int) -> None:
    """Print the inventory table every time it changes."""

    def render(app: StockPilotApp) -> None:
        if app.screen is not View.INVENTORY:
            return
        click.echo(click.style(f"\n{app.title}: {len(app.inventory)} item(s)", bold=True))
        _print_lines(ShowInventoryHandler().handle(app.products, app.inventory))

    svc = bootstrap.services(on_change=render)
    try:
        try:
            svc.app.navigate(View.INVENTORY)
        except DomainException as exc:
            raise click.ClickException(f"{exc} Run 'stockpilot auth login'.")

        checks = 0
        while count == 0 or checks < count:
            time.sleep(interval)
            svc.store.refresh()
            checks += 1
    except KeyboardInterrupt:
        pass
    finally:
        svc.close()
