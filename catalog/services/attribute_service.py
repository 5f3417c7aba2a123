import logging

from catalog.errors import ConflictError, NotFoundError, ValidationError
from catalog.extensions import db
from catalog.models.attribute import Attribute
from catalog.models.product import Product
from catalog.models.variant import Variant
from catalog.services.common import atomic

logger = logging.getLogger(__name__)


def get_attribute_or_404(attribute_id):
    attribute = db.session.get(Attribute, attribute_id)
    if not attribute:
        raise NotFoundError("Attribute not found")
    return attribute


def _check_owner(product_id, variant_id):
    if not db.session.get(Product, product_id):
        raise ValidationError("Product not found")
    if variant_id is not None:
        variant = Variant.query.filter_by(id=variant_id, product_id=product_id).first()
        if not variant:
            raise ValidationError(
                "Variant not found or does not belong to the specified product"
            )


def _ensure_key_free(data, exclude_id=None):
    query = Attribute.query.filter_by(
        product_id=data["product_id"],
        variant_id=data.get("variant_id"),
        namespace=data["namespace"],
        key=data["key"],
    )
    if exclude_id is not None:
        query = query.filter(Attribute.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise ConflictError(
            f'Attribute "{data["namespace"]}.{data["key"]}" already exists'
        )


def list_attributes(product_id=None, variant_id=None, namespace=None):
    query = Attribute.query
    if product_id is not None:
        query = query.filter_by(product_id=product_id)
    if variant_id is not None:
        query = query.filter_by(variant_id=variant_id)
    if namespace:
        query = query.filter_by(namespace=namespace)
    return query.order_by(Attribute.namespace, Attribute.key).all()


def create_attribute(data):
    _check_owner(data["product_id"], data.get("variant_id"))
    with atomic("Attribute creation"):
        _ensure_key_free(data)
        attribute = Attribute(**data)
        db.session.add(attribute)
    logger.info("Created attribute %s.%s", attribute.namespace, attribute.key)
    return attribute


def update_attribute(attribute_id, data):
    attribute = get_attribute_or_404(attribute_id)
    _check_owner(data["product_id"], data.get("variant_id"))
    with atomic("Attribute update"):
        _ensure_key_free(data, exclude_id=attribute.id)
        for key, value in data.items():
            setattr(attribute, key, value)
    return attribute


def delete_attribute(attribute_id):
    with atomic("Attribute deletion"):
        attribute = get_attribute_or_404(attribute_id)
        db.session.delete(attribute)
