"""CLI commands for the Product aggregate.

Each command runs as one request: errors reported by the service, and
input that fails validation, go to the request's ErrorCollector and end
up in the request log. Critical errors also fail the command with a
short user-facing message.
"""

from __future__ import annotations

import json

import click

from catalog.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCollector,
    InternalCacheError,
    ServiceError,
    ValidationError,
)
from catalog.domain.model.product import NewProduct, Product
from catalog.infrastructure.cli.context import AppContext


def _fail_on_critical(service_error: ServiceError | None, errors: ErrorCollector) -> None:
    """Record every service error; raise if one of them was critical."""
    if service_error is None:
        return
    errors.add_service_error(service_error)
    if isinstance(service_error.critical, EntityNotFoundError):
        raise click.ClickException("Product not found")
    if service_error.is_critical:
        raise click.ClickException("Internal server error")


def _new_product(
    name: str | None, info: str | None, payload: str | None, errors: ErrorCollector
) -> NewProduct:
    """Build the payload from ``--json`` or from ``--name``/``--info``."""
    try:
        if payload is not None:
            if name is not None or info is not None:
                raise ValidationError("--json cannot be combined with --name/--info")
            try:
                raw = json.loads(payload)
            except json.JSONDecodeError as exc:
                raise ValidationError(f"failed to decode payload: {exc}") from exc
            if not isinstance(raw, dict):
                raise ValidationError("failed to decode payload: expected an object")
            return NewProduct.from_dict(raw)
        return NewProduct(name=name or "", additional_info=info or "")
    except DomainException as exc:
        errors.add(exc)
        raise click.ClickException("Invalid request body")


def _display_products(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Additional info'}")
    click.echo("-" * 50)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<20} {p.additional_info}")


def _display_product(label: str, product: Product) -> None:
    click.echo(f"{label} #{product.id}")
    click.echo(f"  Name: {product.name}")
    click.echo(f"  Info: {product.additional_info}")


_payload_options = [
    click.option("--name", default=None, help="Product name."),
    click.option("--info", default=None, help="Additional product information."),
    click.option(
        "--json", "payload", default=None,
        help='Whole payload as JSON, e.g. \'{"name": "A", "additionalInfo": "B"}\'.',
    ),
]


def payload_options(f):
    for option in reversed(_payload_options):
        f = option(f)
    return f


@click.command("get")
@click.option("--id", "product_id", required=True, type=click.IntRange(min=1), help="Product ID.")
@click.pass_obj
def product_get(app: AppContext, product_id: int) -> None:
    """Show a product as JSON (served from the cache when possible)."""
    with app.request_log.request("product get", {"id": product_id}) as errors:
        data, service_error = app.service().get_product_by_id(product_id)
        _fail_on_critical(service_error, errors)
        try:
            product = Product.from_json(data)
        except (ValueError, KeyError, TypeError) as exc:
            # Cache hits are returned verbatim; a damaged entry fails here.
            errors.add(InternalCacheError(f"malformed product {product_id}: {exc}"))
            raise click.ClickException("Internal server error")
        click.echo(product.to_json().decode("utf-8"))


@click.command("list")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Page size.")
@click.option("--offset", type=click.IntRange(min=0), default=None, help="Rows to skip.")
@click.pass_obj
def product_list(app: AppContext, limit: int | None, offset: int | None) -> None:
    """List products. Pages only when both --limit and --offset are given."""
    with app.request_log.request("product list", {"limit": limit, "offset": offset}) as errors:
        if limit is not None and offset is not None:
            products, service_error = app.service().get_products_paged(limit, offset)
        else:
            products, service_error = app.service().get_all_products()
        _fail_on_critical(service_error, errors)
        _display_products(products)


@click.command("create")
@payload_options
@click.pass_obj
def product_create(app: AppContext, name: str | None, info: str | None, payload: str | None) -> None:
    """Add a new product."""
    with app.request_log.request("product create", {"name": name, "info": info}) as errors:
        new_product = _new_product(name, info, payload, errors)
        product_id, service_error = app.service().create_product(new_product)
        _fail_on_critical(service_error, errors)
        click.echo(f"Product #{product_id} created")


@click.command("update")
@click.option("--id", "product_id", required=True, type=click.IntRange(min=1), help="Product ID.")
@payload_options
@click.pass_obj
def product_update(
    app: AppContext, product_id: int, name: str | None, info: str | None, payload: str | None
) -> None:
    """Replace a product's name and additional info."""
    args = {"id": product_id, "name": name, "info": info}
    with app.request_log.request("product update", args) as errors:
        new_product = _new_product(name, info, payload, errors)
        previous, service_error = app.service().update_product_by_id(product_id, new_product)
        _fail_on_critical(service_error, errors)
        _display_product("Updated product", previous)
        click.echo("  (values shown are from before the update)")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=click.IntRange(min=1), help="Product ID.")
@click.pass_obj
def product_delete(app: AppContext, product_id: int) -> None:
    """Delete a single product."""
    with app.request_log.request("product delete", {"id": product_id}) as errors:
        deleted, service_error = app.service().delete_product_by_id(product_id)
        _fail_on_critical(service_error, errors)
        _display_product("Deleted product", deleted)


@click.command("clear")
@click.confirmation_option(prompt="Delete every product?")
@click.pass_obj
def product_clear(app: AppContext) -> None:
    """Delete every product and clear the cache."""
    with app.request_log.request("product clear") as errors:
        deleted_rows, service_error = app.service().delete_all_products()
        _fail_on_critical(service_error, errors)
        click.echo(f"Deleted {deleted_rows} product(s)")
