"""CLI commands for dashboards, reports and recommendations."""

from __future__ import annotations

from pathlib import Path

import click

from stockpilot.application.inventory_report import SUMMARY_GROUPS, InventoryReportHandler
from stockpilot.application.recommend_restock import RecommendRestockHandler
from stockpilot.application.show_dashboard import ShowDashboardHandler
from stockpilot.domain.exceptions import DomainException
from stockpilot.infrastructure import bootstrap, settings
from stockpilot.infrastructure.cli.session import signed_in


@click.command("dashboard")
def report_dashboard() -> None:
    """Show headline inventory numbers."""
    with signed_in() as svc:
        dto = ShowDashboardHandler(settings.EXPIRY_WARNING_DAYS).handle(
            svc.app.products, svc.app.inventory
        )

    click.echo(f"{'Products':<28} {dto.product_count:>10}")
    click.echo(f"{'Inventory items':<28} {dto.inventory_item_count:>10}")
    click.echo(f"{'Total units':<28} {dto.total_units:>10}")
    click.echo(f"{'Total pallets':<28} {dto.total_pallets:>10.2f}")
    click.echo(f"{'Items on hold':<28} {dto.on_hold_count:>10}")
    click.echo(
        f"{f'Lots expiring in {dto.expiry_window_days}d':<28} {dto.expiring_lot_count:>10}"
    )
    click.echo(f"{'Expired lots':<28} {dto.expired_lot_count:>10}")

    if dto.units_by_product_type:
        click.echo()
        click.echo("Units by product type")
        for type_name, units in sorted(dto.units_by_product_type.items()):
            click.echo(f"  {type_name:<26} {units:>10}")

    if dto.top_sellers:
        click.echo()
        click.echo("Top sellers")
        for seller in dto.top_sellers:
            click.echo(f"  {seller.product_name:<18} {seller.sku:<10} {seller.total_sales:>7}")


@click.command("summary")
@click.option(
    "--by", "group", default="product-type", show_default=True,
    type=click.Choice(list(SUMMARY_GROUPS)),
)
def report_summary(group: str) -> None:
    """Summarize inventory by a category."""
    handler = InventoryReportHandler()
    with signed_in() as svc:
        frame = handler.build_frame(svc.app.combined_inventory())

    if frame.empty:
        click.echo("No inventory records found.")
        return
    click.echo(handler.summarize(frame, group).to_string(index=False))


@click.command("print")
def report_print() -> None:
    """Printable lot listing, soonest expiration first."""
    handler = InventoryReportHandler()
    with signed_in() as svc:
        listing = handler.lot_listing(svc.app.combined_inventory())

    if listing.empty:
        click.echo("No lots found.")
        return
    click.echo(listing.to_string(index=False))


@click.command("export")
@click.option(
    "--output-dir", type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the CSV (defaults to STOCKPILOT_OUTPUT_DIR).",
)
def report_export(output_dir: Path | None) -> None:
    """Export the combined inventory table to CSV."""
    handler = InventoryReportHandler()
    with signed_in() as svc:
        frame = handler.build_frame(svc.app.combined_inventory())

    path = handler.export_csv(
        frame, output_dir or settings.OUTPUT_DIR, settings.REPORT_FILENAME_BASE
    )
    click.echo(f"Report with {len(frame)} row(s) saved to: {path}")


@click.command("recommend")
def recommend() -> None:
    """Ask the AI service for restock recommendations."""
    with signed_in() as svc:
        svc.app.open_recommendations()
        try:
            handler = RecommendRestockHandler(bootstrap.recommendation_client())
            recommendations = handler.handle(svc.app.combined_inventory())
        except DomainException as exc:
            raise click.ClickException(str(exc))
        finally:
            svc.app.close_recommendations()

    if not recommendations:
        click.echo("No recommendations right now.")
        return
    for rec in recommendations:
        qty = f" ({rec.suggested_quantity} units)" if rec.suggested_quantity else ""
        click.echo(f"- {rec.sku} {rec.product_name}: {rec.action}{qty}")
        if rec.reason:
            click.echo(f"    {rec.reason}")
