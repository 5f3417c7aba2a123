from flask import request

from catalog.blueprints.api import api_bp
from catalog.schemas import CategoryFieldIn, CategoryIn, parse
from catalog.services import category_service


@api_bp.route("/categories", methods=["GET"])
def list_categories():
    categories = category_service.list_categories(status=request.args.get("status"))
    counts = category_service.product_counts()
    data = []
    for category in categories:
        row = category.to_dict(include_fields=True)
        row["product_count"] = counts.get(category.id, 0)
        data.append(row)
    return {"success": True, "data": data}


@api_bp.route("/categories/<int:category_id>", methods=["GET"])
def get_category(category_id):
    category = category_service.get_category_or_404(category_id)
    return {"success": True, "data": category.to_dict(include_fields=True)}


@api_bp.route("/categories", methods=["POST"])
def create_category():
    body = parse(CategoryIn, request.get_json(silent=True))
    category = category_service.create_category(body.model_dump())
    return {"success": True, "data": category.to_dict(include_fields=True)}, 201


@api_bp.route("/categories/<int:category_id>", methods=["PUT"])
def update_category(category_id):
    body = parse(CategoryIn, request.get_json(silent=True))
    category = category_service.update_category(category_id, body.model_dump())
    return {"success": True, "data": category.to_dict(include_fields=True)}


@api_bp.route("/categories/<int:category_id>", methods=["DELETE"])
def delete_category(category_id):
    category_service.delete_category(category_id)
    return {"success": True, "message": "Category deleted successfully"}


@api_bp.route("/categories/<int:category_id>/fields", methods=["POST"])
def add_category_field(category_id):
    body = parse(CategoryFieldIn, request.get_json(silent=True))
    field = category_service.add_field(category_id, body.model_dump())
    return {"success": True, "data": field.to_dict()}, 201


@api_bp.route("/categories/<int:category_id>/fields/<int:field_id>", methods=["PUT"])
def update_category_field(category_id, field_id):
    body = parse(CategoryFieldIn, request.get_json(silent=True))
    field = category_service.update_field(category_id, field_id, body.model_dump())
    return {"success": True, "data": field.to_dict()}


@api_bp.route(
    "/categories/<int:category_id>/fields/<int:field_id>", methods=["DELETE"]
)
def delete_category_field(category_id, field_id):
    category_service.delete_field(category_id, field_id)
    return {"success": True, "message": "Category field deleted successfully"}
