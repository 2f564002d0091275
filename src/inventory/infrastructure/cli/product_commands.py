"""CLI commands for products."""

from __future__ import annotations

import click

from inventory.application.editor_session import CloseDecision, EditorSession
from inventory.application.product_list import ProductListBinding
from inventory.application.row_projection import ProductRowActions, project
from inventory.domain.exceptions import DomainException
from inventory.domain.model.product import Product
from inventory.domain.model.resource import PRODUCTS_URI
from inventory.infrastructure.bootstrap import Inventory


def _fill(
    session: EditorSession,
    name: str | None,
    price: str | None,
    quantity: str | None,
    image: str | None,
) -> None:
    """Apply the options the user actually passed, as field edits."""
    if name is not None:
        session.set_name(name)
    if price is not None:
        session.set_price(price)
    if quantity is not None:
        session.set_quantity(quantity)
    if image is not None:
        session.choose_image(image)


def _get_product(app: Inventory, product_id: int) -> Product:
    product = app.resolver.query(PRODUCTS_URI.with_id(product_id))
    if product is None:
        raise click.ClickException(f"Product #{product_id} not found")
    return product


def _display_product(product: Product) -> None:
    view = project(product)
    click.echo(f"Product #{view.id}")
    click.echo(f"Name:     {view.name}")
    click.echo(f"Price:    {view.price_display}")
    click.echo(f"Quantity: {view.quantity_display}")
    click.echo(f"Image:    {view.image_uri}")


@click.command("add")
@click.option("--name", default=None, help="Product name.")
@click.option("--price", default=None, help="Price in the smallest currency unit.")
@click.option("--quantity", default=None, help="Units in stock.")
@click.option("--image", default=None, help="Image reference (default image if omitted).")
@click.pass_obj
def product_add(
    app: Inventory,
    name: str | None,
    price: str | None,
    quantity: str | None,
    image: str | None,
) -> None:
    """Add a new product."""
    session = EditorSession(app.resolver)
    _fill(session, name, price, quantity, image)

    try:
        product_id = session.save()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product_id is None:
        click.echo("Nothing entered — no product created.")
        return
    click.echo(f"Product #{product_id} added")


@click.command("list")
@click.pass_obj
def product_list(app: Inventory) -> None:
    """List all products."""
    with ProductListBinding(app.resolver, app.notifier) as binding:
        rows = binding.rows

    if not rows:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Qty':>6}")
    click.echo("-" * 45)
    for row in rows:
        click.echo(
            f"{row.id:<6} {row.name:<20} {row.price_display:>10} {row.quantity_display:>6}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_show(app: Inventory, product_id: int) -> None:
    """Show one product."""
    _display_product(_get_product(app, product_id))


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price.")
@click.option("--quantity", default=None, help="New quantity.")
@click.option("--image", default=None, help="New image reference.")
@click.pass_obj
def product_update(
    app: Inventory,
    product_id: int,
    name: str | None,
    price: str | None,
    quantity: str | None,
    image: str | None,
) -> None:
    """Edit an existing product."""
    session = EditorSession(app.resolver, target_id=product_id)

    try:
        session.load()
        _fill(session, name, price, quantity, image)
        if session.request_close() is CloseDecision.CLOSE_NOW:
            session.discard()
            click.echo("Nothing to update.")
            return
        session.save()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_delete(app: Inventory, product_id: int) -> None:
    """Delete a product."""
    session = EditorSession(app.resolver, target_id=product_id)

    try:
        session.delete()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted")


def _quantity_command(name: str, help_text: str):
    @click.command(name, help=help_text)
    @click.option("--id", "product_id", required=True, type=int, help="Product ID.")
    @click.pass_obj
    def command(app: Inventory, product_id: int) -> None:
        product = _get_product(app, product_id)
        action = getattr(ProductRowActions(app.resolver), name)

        try:
            action(product)
        except DomainException as exc:
            raise click.ClickException(str(exc))

        updated = _get_product(app, product_id)
        click.echo(f"Product #{product_id} quantity: {updated.quantity}")

    return command


product_sell = _quantity_command("sell", "Record the sale of one unit.")
product_increment = _quantity_command("increment", "Add one unit to stock.")
product_decrement = _quantity_command("decrement", "Remove one unit from stock.")


@click.command("type")
@click.argument("uri")
@click.pass_obj
def product_type(app: Inventory, uri: str) -> None:
    """Print the resource type of URI (e.g. 'products' or 'products/3')."""
    try:
        click.echo(app.resolver.get_type(uri))
    except DomainException as exc:
        raise click.ClickException(str(exc))
