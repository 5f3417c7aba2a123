"""Variant endpoints, all scoped under a product."""
from flask import request

from catalog.blueprints.api import api_bp
from catalog.schemas import (
    BulkUpdateIn,
    GenerateVariantsIn,
    VariantCreateIn,
    VariantPatchIn,
    parse,
)
from catalog.services import variant_service


@api_bp.route("/products/<int:product_id>/variants", methods=["GET"])
def list_variants(product_id):
    variants = variant_service.list_variants(product_id)
    return {"success": True, "variants": [v.to_dict() for v in variants]}


@api_bp.route("/products/<int:product_id>/variants/generate", methods=["POST"])
def generate_variants(product_id):
    """Generate every combination (mode=all) or the listed ones (mode=selective)."""
    body = parse(GenerateVariantsIn, request.get_json(silent=True))
    combinations = None
    if body.combinations is not None:
        combinations = [c.model_dump() for c in body.combinations]

    result = variant_service.generate(product_id, body.mode, combinations)
    return {
        "success": True,
        "message": f"Generated {result['created']} variants",
        "created": result["created"],
        "skipped": result["skipped"],
        "variants": [v.to_dict() for v in result["variants"]],
    }


@api_bp.route("/products/<int:product_id>/variants", methods=["POST"])
def create_variant(product_id):
    body = parse(VariantCreateIn, request.get_json(silent=True))
    variant = variant_service.create_single(product_id, body.model_dump())
    return {
        "success": True,
        "message": "Variant created successfully",
        "variant": variant.to_dict(),
    }, 201


@api_bp.route(
    "/products/<int:product_id>/variants/available-combinations", methods=["GET"]
)
def available_combinations(product_id):
    combos = variant_service.list_available_combinations(product_id)
    return {"success": True, "availableCombinations": combos, "total": len(combos)}


@api_bp.route("/products/<int:product_id>/variants/bulk", methods=["PUT"])
def bulk_update_variants(product_id):
    body = parse(BulkUpdateIn, request.get_json(silent=True))
    patches = [dict(p.changes(), id=p.id) for p in body.variants]
    updated = variant_service.bulk_update(product_id, patches)
    return {
        "success": True,
        "message": f"Updated {len(updated)} variants",
        "updated": len(updated),
    }


@api_bp.route("/products/<int:product_id>/variants/<int:variant_id>", methods=["PUT"])
def update_variant(product_id, variant_id):
    body = parse(VariantPatchIn, request.get_json(silent=True))
    variant = variant_service.update_variant(product_id, variant_id, body.changes())
    return {"success": True, "variant": variant.to_dict()}


@api_bp.route(
    "/products/<int:product_id>/variants/<int:variant_id>", methods=["DELETE"]
)
def delete_variant(product_id, variant_id):
    variant_service.delete(product_id, variant_id)
    return {"success": True, "message": "Variant deleted successfully"}
