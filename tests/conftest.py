import itertools

import pytest
from catalog import create_app
from catalog.extensions import db as _db
from catalog.services import product_service

_titles = itertools.count(1)


@pytest.fixture
def app():
    """Create application for testing, with a fresh in-memory schema."""
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_product(db):
    """Factory for products with options, e.g. make_product(Color=["Red"])."""

    def make(title=None, **options):
        if not options:
            options = {"Color": ["Red", "Blue"], "Size": ["S", "M"]}
        return product_service.create_product(
            {
                "title": title or f"Test Product {next(_titles)}",
                "options": [
                    {"name": name, "values": list(values)}
                    for name, values in options.items()
                ],
            }
        )

    return make
