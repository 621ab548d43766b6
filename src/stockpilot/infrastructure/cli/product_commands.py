"""CLI commands for the product catalog."""

from __future__ import annotations

from pathlib import Path

import click

from stockpilot.application.add_product import AddProductHandler
from stockpilot.application.import_products import ImportProductsHandler
from stockpilot.application.search_products import SearchProductsHandler
from stockpilot.domain.exceptions import DomainException
from stockpilot.domain.model.product import (
    CountryLabel,
    Product,
    ProductType,
    TargetLabel,
)
from stockpilot.infrastructure.cli.session import signed_in


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


def _print_products(products: list[Product]) -> None:
    click.echo(
        f"{'ID':<22} {'Name':<28} {'Item #':<12} {'Type':<13} {'Cases/Pallet':>12}"
    )
    click.echo("-" * 91)
    for p in sorted(products, key=lambda p: p.name.lower()):
        click.echo(
            f"{p.id:<22} {p.name:<28} {p.item_number:<12} "
            f"{p.product_type.value:<13} {p.cases_per_pallet or '-':>12}"
        )


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--item-number", required=True, help="Item number (SKU-like code).")
@click.option("--type", "product_type", required=True, type=_choices(ProductType))
@click.option("--cases-per-pallet", default="", help="Cases per pallet.")
@click.option("--shelf-life", default="", help="Shelf life in days.")
@click.option(
    "--target-label", default=TargetLabel.REGULAR_CUSTOMER.value, type=_choices(TargetLabel)
)
@click.option("--country", default=CountryLabel.US.value, type=_choices(CountryLabel))
def product_add(
    name: str,
    item_number: str,
    product_type: str,
    cases_per_pallet: str,
    shelf_life: str,
    target_label: str,
    country: str,
) -> None:
    """Add a new product to the catalog."""
    with signed_in() as svc:
        handler = AddProductHandler(svc.product_repo, svc.org_id)
        try:
            product_id = handler.handle(
                name=name,
                item_number=item_number,
                product_type=product_type,
                cases_per_pallet=cases_per_pallet,
                shelf_life_in_days=shelf_life,
                target_label=target_label,
                country_label=country,
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} '{name}' added")


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def product_import(csv_file: Path) -> None:
    """Import products from a CSV file (all rows or none)."""
    with signed_in() as svc:
        handler = ImportProductsHandler(svc.product_repo, svc.org_id)
        try:
            ids = handler.handle(csv_file)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Imported {len(ids)} product(s) from {csv_file.name}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with signed_in() as svc:
        products = svc.app.products

    if not products:
        click.echo("No products found.")
        return
    _print_products(products)


@click.command("search")
@click.argument("keyword")
def product_search(keyword: str) -> None:
    """Find products whose name or item number is exactly KEYWORD."""
    with signed_in() as svc:
        handler = SearchProductsHandler(svc.product_repo, svc.org_id)
        try:
            products = handler.handle(keyword)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if not products:
        click.echo(f"No products match '{keyword}'.")
        return
    _print_products(products)
