from flask import Blueprint

api_bp = Blueprint("api", __name__)

from catalog.blueprints.api import products, variants, categories, attributes  # noqa: F401, E402
