"""Flask CLI commands for admin operations."""
import click


DEMO_CATEGORIES = [
    ("Apparel", "Shirts", [("Material", "select", ["Cotton", "Linen", "Wool"])]),
    ("Footwear", "Shoes", [("Sole", "string", None)]),
]

DEMO_PRODUCTS = [
    (
        "Classic Crew T-Shirt",
        "Apparel",
        19.90,
        [("Color", ["Black", "White", "Navy"]), ("Size", ["S", "M", "L", "XL"])],
    ),
    (
        "Linen Summer Shirt",
        "Apparel",
        49.00,
        [("Color", ["Sand", "Sky"]), ("Size", ["M", "L"])],
    ),
    (
        "Trail Runner",
        "Footwear",
        89.50,
        [("Size", ["40", "41", "42", "43"]), ("Width", ["Regular", "Wide"])],
    ),
]


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        from catalog.extensions import db

        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Seed demo categories, products and variants (idempotent)."""
        from catalog.extensions import db
        from catalog.models.category import Category, CategoryField
        from catalog.models.product import Product
        from catalog.services import product_service, variant_service

        if Product.query.first():
            click.echo("Products already exist — skipping demo seed.")
            return

        categories = {}
        for name, product_type, fields in DEMO_CATEGORIES:
            category = Category(name=name, shopify_product_type=product_type)
            for position, (field_name, field_type, choices) in enumerate(fields):
                category.fields.append(
                    CategoryField(
                        name=field_name,
                        field_type=field_type,
                        options=choices,
                        position=position,
                    )
                )
            db.session.add(category)
            categories[name] = category
        db.session.commit()

        for title, category_name, price, options in DEMO_PRODUCTS:
            product = product_service.create_product(
                {
                    "title": title,
                    "status": "active",
                    "category_id": categories[category_name].id,
                    "options": [{"name": n, "values": v} for n, v in options],
                }
            )
            result = variant_service.generate(product.id, mode="all")
            ids = [v.id for v in result["variants"]]
            variant_service.bulk_update(
                product.id, [{"id": vid, "price": price} for vid in ids]
            )
            click.echo(f"Seeded {title} with {result['created']} variants.")

    @app.cli.command("generate-variants")
    @click.argument("product_id", type=int)
    def generate_variants(product_id):
        """Create every missing option combination for a product."""
        from catalog.errors import CatalogError
        from catalog.services import variant_service

        try:
            result = variant_service.generate(product_id, mode="all")
        except CatalogError as e:
            raise click.ClickException(e.message)
        click.echo(
            f"Created {result['created']} variants, "
            f"skipped {result['skipped']} existing."
        )

    @app.cli.command("stats")
    def stats():
        """Show product statistics."""
        from catalog.services.product_service import get_stats

        s = get_stats()
        total = sum(s.values())
        click.echo(f"Total products: {total}")
        for status, count in sorted(s.items()):
            click.echo(f"  {status}: {count}")
