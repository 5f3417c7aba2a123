"""Helpers shared by the service modules."""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError

from catalog.errors import ConflictError, NotFoundError
from catalog.extensions import db
from catalog.models.product import Product

logger = logging.getLogger(__name__)


@contextmanager
def atomic(action):
    """Commit on success; roll back everything on any error.

    Storage constraint violations surface as ConflictError.
    """
    try:
        yield
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("%s rejected by storage constraint: %s", action, e.orig)
        raise ConflictError(f"{action} conflicts with existing data") from e
    except Exception:
        db.session.rollback()
        raise


def get_product_or_404(product_id):
    product = db.session.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product
