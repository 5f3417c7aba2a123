import logging

from catalog.errors import ConflictError, NotFoundError
from catalog.extensions import db
from catalog.models.category import Category, CategoryField
from catalog.models.product import Product
from catalog.services.common import atomic

logger = logging.getLogger(__name__)


def get_category_or_404(category_id):
    category = db.session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category


def get_field_or_404(category_id, field_id):
    field = CategoryField.query.filter_by(id=field_id, category_id=category_id).first()
    if not field:
        raise NotFoundError("Category field not found")
    return field


def _ensure_name_free(name, exclude_id=None):
    query = Category.query.filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise ConflictError(f'Category "{name}" already exists')


def list_categories(status=None):
    query = Category.query
    if status:
        query = query.filter_by(status=status)
    return query.order_by(Category.name).all()


def product_counts():
    rows = (
        db.session.query(Product.category_id, db.func.count(Product.id))
        .filter(Product.category_id.isnot(None))
        .group_by(Product.category_id)
        .all()
    )
    return dict(rows)


def create_category(data):
    with atomic("Category creation"):
        _ensure_name_free(data["name"])
        category = Category(**data)
        db.session.add(category)
    logger.info("Created category %s", category.name)
    return category


def update_category(category_id, data):
    with atomic("Category update"):
        category = get_category_or_404(category_id)
        _ensure_name_free(data["name"], exclude_id=category.id)
        for key, value in data.items():
            setattr(category, key, value)
    return category


def delete_category(category_id):
    """Delete a category and its fields; its products become uncategorized."""
    with atomic("Category deletion"):
        category = get_category_or_404(category_id)
        Product.query.filter_by(category_id=category.id).update(
            {"category_id": None}, synchronize_session="fetch"
        )
        db.session.delete(category)
    logger.info("Deleted category %s", category_id)


def add_field(category_id, data):
    with atomic("Category field creation"):
        category = get_category_or_404(category_id)
        if any(f.name == data["name"] for f in category.fields):
            raise ConflictError(f'Field "{data["name"]}" already exists in this category')
        field = CategoryField(category_id=category.id, **data)
        db.session.add(field)
    return field


def update_field(category_id, field_id, data):
    with atomic("Category field update"):
        field = get_field_or_404(category_id, field_id)
        clash = CategoryField.query.filter(
            CategoryField.category_id == category_id,
            CategoryField.name == data["name"],
            CategoryField.id != field.id,
        ).first()
        if clash:
            raise ConflictError(f'Field "{data["name"]}" already exists in this category')
        for key, value in data.items():
            setattr(field, key, value)
    return field


def delete_field(category_id, field_id):
    with atomic("Category field deletion"):
        field = get_field_or_404(category_id, field_id)
        db.session.delete(field)
