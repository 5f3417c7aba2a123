import logging

from sqlalchemy.orm import selectinload

from catalog.errors import ConflictError, ValidationError
from catalog.extensions import db
from catalog.models.attribute import Attribute
from catalog.models.category import Category
from catalog.models.product import Product, slugify
from catalog.models.variant import Variant
from catalog.services.common import atomic, get_product_or_404
from catalog.services.option_service import add_option

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = (
    "title",
    "description",
    "vendor",
    "product_type",
    "tags",
    "handle",
    "status",
    "category_id",
)


def _check_category(category_id):
    if category_id is not None and not db.session.get(Category, category_id):
        raise ValidationError("Category not found")


def _unique_handle(handle, exclude_id=None):
    if not handle:
        return None
    query = Product.query.filter(Product.handle == handle)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise ConflictError(f'Handle "{handle}" is already used by another product')
    return handle


def _store_category_fields(product, values):
    """Save category field values as product attributes (replacing old ones)."""
    ns = Attribute.CATEGORY_FIELDS_NAMESPACE
    product.attributes.filter_by(variant_id=None, namespace=ns).delete(
        synchronize_session="fetch"
    )
    for key, value in values.items():
        if value is None or value == "":
            continue
        db.session.add(
            Attribute(
                product_id=product.id,
                variant_id=None,
                key=str(key),
                value=str(value).lower() if isinstance(value, bool) else str(value),
                value_type=_value_type(value),
                namespace=ns,
                category="category_field",
            )
        )


def _value_type(value):
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def list_products(status=None, category_id=None, search=None, page=1, per_page=10):
    """Products newest-updated first, with optional filters."""
    query = Product.query.options(selectinload(Product.category))

    if status:
        query = query.filter(Product.status == status)
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if search:
        like = f"%{search}%"
        query = query.filter(
            db.or_(
                Product.title.ilike(like),
                Product.description.ilike(like),
                Product.vendor.ilike(like),
            )
        )

    query = query.order_by(Product.updated_at.desc(), Product.id.desc())
    return query.paginate(page=page, per_page=per_page, error_out=False)


def variant_counts(product_ids):
    if not product_ids:
        return {}
    rows = (
        db.session.query(Variant.product_id, db.func.count(Variant.id))
        .filter(Variant.product_id.in_(product_ids))
        .group_by(Variant.product_id)
        .all()
    )
    return dict(rows)


def get_product(product_id):
    return get_product_or_404(product_id)


def create_product(data):
    """Create a product with its nested options and category field values."""
    options = data.pop("options", None) or []
    category_fields = data.pop("category_fields", None) or {}
    _check_category(data.get("category_id"))

    with atomic("Product creation"):
        fields = {k: data.get(k) for k in PRODUCT_FIELDS if k in data}
        fields["handle"] = _unique_handle(
            fields.get("handle") or slugify(fields["title"])
        )
        product = Product(**fields)
        db.session.add(product)
        db.session.flush()  # get product.id

        for option in options:
            add_option(
                product.id, option["name"], option["values"], option.get("position")
            )
        if category_fields:
            _store_category_fields(product, category_fields)

    logger.info("Created product %s (%s)", product.id, product.handle)
    return product


def update_product(product_id, changes):
    """Partial update; the handle follows the title unless set explicitly."""
    category_fields = changes.pop("category_fields", None)
    if "category_id" in changes:
        _check_category(changes["category_id"])

    with atomic("Product update"):
        product = get_product_or_404(product_id)
        handle = changes.get("handle")
        title_changed = changes.get("title") and changes["title"] != product.title
        if not handle and ("handle" in changes or title_changed):
            handle = slugify(changes.get("title") or product.title)
        if handle is not None:
            changes["handle"] = _unique_handle(handle, exclude_id=product.id)
        for key in PRODUCT_FIELDS:
            if key in changes:
                if key in ("title", "status") and changes[key] is None:
                    continue
                setattr(product, key, changes[key])
        if category_fields is not None:
            _store_category_fields(product, category_fields)

    logger.info("Updated product %s", product_id)
    return product


def delete_product(product_id):
    """Delete a product; options, variants, images and attributes go with it."""
    with atomic("Product deletion"):
        product = get_product_or_404(product_id)
        db.session.delete(product)
    logger.info("Deleted product %s", product_id)


def get_stats():
    """Product counts by status for the stats command."""
    rows = (
        db.session.query(Product.status, db.func.count(Product.id))
        .group_by(Product.status)
        .all()
    )
    return dict(rows)
