"""Product and option endpoints."""
from flask import current_app, request

from catalog.blueprints.api import api_bp
from catalog.schemas import OptionIn, OptionPatchIn, ProductIn, ProductPatchIn, parse
from catalog.services import option_service, product_service


def _product_detail(product):
    """Full product payload: category, options, variants, images, attributes."""
    data = product.to_dict()
    data["category"] = product.category.to_dict() if product.category else None
    data["options"] = [o.to_dict() for o in product.options]
    data["variants"] = [v.to_dict() for v in product.variants]
    data["images"] = [i.to_dict() for i in product.images]
    data["attributes"] = [a.to_dict() for a in product.product_attributes]
    return data


@api_bp.route("/products", methods=["GET"])
def list_products():
    """Paginated product list with filters (status, category_id, search)."""
    page = request.args.get("page", 1, type=int)
    per_page = request.args.get(
        "limit", current_app.config["PRODUCTS_PER_PAGE"], type=int
    )
    pagination = product_service.list_products(
        status=request.args.get("status"),
        category_id=request.args.get("category_id", type=int),
        search=request.args.get("search"),
        page=max(page, 1),
        per_page=min(max(per_page, 1), 100),
    )
    counts = product_service.variant_counts([p.id for p in pagination.items])

    data = []
    for product in pagination.items:
        row = product.to_dict()
        row["category"] = (
            {"id": product.category.id, "name": product.category.name}
            if product.category
            else None
        )
        row["variant_count"] = counts.get(product.id, 0)
        data.append(row)

    return {
        "success": True,
        "data": data,
        "pagination": {
            "page": pagination.page,
            "limit": pagination.per_page,
            "total": pagination.total,
            "pages": pagination.pages,
        },
    }


@api_bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id):
    product = product_service.get_product(product_id)
    return {"success": True, "data": _product_detail(product)}


@api_bp.route("/products", methods=["POST"])
def create_product():
    body = parse(ProductIn, request.get_json(silent=True))
    product = product_service.create_product(body.model_dump())
    return {
        "success": True,
        "data": _product_detail(product),
        "message": "Product created successfully",
    }, 201


@api_bp.route("/products/<int:product_id>", methods=["PUT"])
def update_product(product_id):
    body = parse(ProductPatchIn, request.get_json(silent=True))
    product = product_service.update_product(
        product_id, body.model_dump(exclude_unset=True)
    )
    return {
        "success": True,
        "data": _product_detail(product),
        "message": "Product updated successfully",
    }


@api_bp.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    product_service.delete_product(product_id)
    return {"success": True, "message": "Product deleted successfully"}


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@api_bp.route("/products/<int:product_id>/options", methods=["GET"])
def list_options(product_id):
    options = option_service.list_options(product_id)
    return {"success": True, "options": [o.to_dict() for o in options]}


@api_bp.route("/products/<int:product_id>/options", methods=["POST"])
def create_option(product_id):
    body = parse(OptionIn, request.get_json(silent=True))
    option = option_service.create_option(product_id, body.model_dump())
    return {"success": True, "option": option.to_dict()}, 201


@api_bp.route("/products/<int:product_id>/options/<int:option_id>", methods=["PUT"])
def update_option(product_id, option_id):
    body = parse(OptionPatchIn, request.get_json(silent=True))
    option = option_service.update_option(product_id, option_id, body.changes())
    return {"success": True, "option": option.to_dict()}


@api_bp.route(
    "/products/<int:product_id>/options/<int:option_id>", methods=["DELETE"]
)
def delete_option(product_id, option_id):
    option_service.delete_option(product_id, option_id)
    return {"success": True, "message": "Option deleted successfully"}
