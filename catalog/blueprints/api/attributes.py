from flask import request

from catalog.blueprints.api import api_bp
from catalog.schemas import AttributeIn, parse
from catalog.services import attribute_service


@api_bp.route("/attributes", methods=["GET"])
def list_attributes():
    attributes = attribute_service.list_attributes(
        product_id=request.args.get("product_id", type=int),
        variant_id=request.args.get("variant_id", type=int),
        namespace=request.args.get("namespace"),
    )
    return {"success": True, "data": [a.to_dict() for a in attributes]}


@api_bp.route("/attributes/<int:attribute_id>", methods=["GET"])
def get_attribute(attribute_id):
    attribute = attribute_service.get_attribute_or_404(attribute_id)
    return {"success": True, "data": attribute.to_dict()}


@api_bp.route("/attributes", methods=["POST"])
def create_attribute():
    body = parse(AttributeIn, request.get_json(silent=True))
    attribute = attribute_service.create_attribute(body.model_dump())
    return {"success": True, "data": attribute.to_dict()}, 201


@api_bp.route("/attributes/<int:attribute_id>", methods=["PUT"])
def update_attribute(attribute_id):
    body = parse(AttributeIn, request.get_json(silent=True))
    attribute = attribute_service.update_attribute(attribute_id, body.model_dump())
    return {"success": True, "data": attribute.to_dict()}


@api_bp.route("/attributes/<int:attribute_id>", methods=["DELETE"])
def delete_attribute(attribute_id):
    attribute_service.delete_attribute(attribute_id)
    return {"success": True, "message": "Attribute deleted successfully"}
