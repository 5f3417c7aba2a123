"""Error taxonomy for the catalog API and the handlers that render it."""
import logging

from flask import jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base for errors a client can act on."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404


class ConflictError(CatalogError):
    status_code = 400


class InvalidStateError(CatalogError):
    status_code = 400


def from_pydantic(exc):
    """Collapse a pydantic error into our ValidationError (first error wins)."""
    errors = exc.errors()
    if not errors:
        return ValidationError("Invalid request body")
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return ValidationError(f"{loc}: {msg}" if loc else msg)


def _error_response(message, status_code):
    return jsonify({"success": False, "error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(CatalogError)
    def handle_catalog_error(exc):
        return _error_response(exc.message, exc.status_code)

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_error(exc):
        err = from_pydantic(exc)
        return _error_response(err.message, err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return _error_response(exc.description or exc.name, exc.code)

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        from catalog.extensions import db

        logger.exception("Unhandled error")
        db.session.rollback()
        return _error_response("Internal server error", 500)
