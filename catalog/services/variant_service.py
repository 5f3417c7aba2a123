"""Variant provisioning: generation, single create, patching and deletion.

Every mutating call runs in one session transaction: it either commits all
of its rows or rolls every one of them back.
"""
import logging
from contextlib import contextmanager

from flask import current_app
from redis.exceptions import LockError

from catalog import extensions
from catalog.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from catalog.extensions import db
from catalog.models.variant import Variant, VariantOption
from catalog.services.common import atomic, get_product_or_404
from catalog.services.combinations import (
    available_combinations,
    check_assignments,
    combination_exists,
    count_combinations,
    generate_combinations,
    load_variants,
    options_for_product,
    slot_map,
)

logger = logging.getLogger(__name__)

VARIANT_DEFAULTS = {
    "price": 0,
    "compare_at_price": None,
    "inventory_quantity": 0,
    "inventory_management": "manual",
    "sku": None,
    "barcode": None,
    "weight": None,
    "weight_unit": "kg",
}


def get_variant_or_404(product_id, variant_id):
    variant = Variant.query.filter_by(id=variant_id, product_id=product_id).first()
    if not variant:
        raise NotFoundError("Variant not found")
    return variant


@contextmanager
def _generation_lock(product_id):
    """Serialize generation per product when Redis is configured."""
    client = extensions.redis_client
    if client is None:
        yield
        return

    lock = client.lock(
        f"variant_gen:{product_id}",
        timeout=current_app.config["VARIANT_LOCK_TIMEOUT"],
    )
    if not lock.acquire(blocking=True, blocking_timeout=5):
        raise ConflictError(
            f"Variant generation for product {product_id} is already in progress"
        )
    try:
        yield
    finally:
        try:
            lock.release()
        except LockError:
            logger.warning("Generation lock for product %s expired early", product_id)


def _ensure_sku_free(sku, exclude_id=None, pending=()):
    if not sku:
        return
    if sku in pending:
        raise ConflictError(f'SKU "{sku}" is used more than once in this request')
    query = Variant.query.filter(Variant.sku == sku)
    if exclude_id is not None:
        query = query.filter(Variant.id != exclude_id)
    if db.session.query(query.exists()).scalar():
        raise ConflictError(f'SKU "{sku}" is already in use')


def _build_variant(product_id, fields, assignments, slots):
    """Stage a variant; option rows take the option's slot, not the request's."""
    values = dict(VARIANT_DEFAULTS)
    values.update({k: v for k, v in fields.items() if k in VARIANT_DEFAULTS})
    if values["price"] is None:
        values["price"] = 0
    if values["inventory_quantity"] is None:
        values["inventory_quantity"] = 0
    if not values["weight_unit"]:
        values["weight_unit"] = "kg"

    variant = Variant(product_id=product_id, **values)
    variant.variant_options = [
        VariantOption(
            option_id=int(a["option_id"]),
            option_value=a["value"],
            position=slots[int(a["option_id"])],
        )
        for a in assignments
    ]
    variant.refresh_combination_key()
    db.session.add(variant)
    return variant


def list_variants(product_id):
    get_product_or_404(product_id)
    return load_variants(product_id)


def generate(product_id, mode="all", combinations=None):
    """Create a variant for every requested combination not already present.

    mode="all" enumerates the full Cartesian product of the product's
    options with default fields; mode="selective" takes caller-supplied
    combinations, each carrying its own variant fields. Returns
    ``{"created": n, "skipped": n, "variants": [Variant, ...]}``.
    """
    get_product_or_404(product_id)
    options = options_for_product(product_id)
    if not options:
        raise InvalidStateError(
            "Product must have options before generating variants"
        )

    if mode == "all":
        limit = current_app.config["VARIANT_GENERATION_LIMIT"]
        total = count_combinations(options)
        if total > limit:
            raise InvalidStateError(
                f"Product has {total} option combinations; "
                f"generation is limited to {limit}"
            )
        requested = [
            {"options": combo} for combo in generate_combinations(options)
        ]
    elif mode == "selective" and combinations:
        requested = combinations
    else:
        raise ValidationError(
            "Invalid mode or missing combinations for selective mode"
        )

    for combo in requested:
        check = check_assignments(options, combo["options"])
        if not check.ok:
            raise ValidationError(check.message)

    slots = slot_map(options)
    created = []
    skipped = 0
    with _generation_lock(product_id):
        with atomic("Variant generation"):
            existing = load_variants(product_id)
            pending_skus = set()
            for combo in requested:
                if combination_exists(product_id, combo["options"], existing):
                    skipped += 1
                    continue
                _ensure_sku_free(combo.get("sku"), pending=pending_skus)
                if combo.get("sku"):
                    pending_skus.add(combo["sku"])
                variant = _build_variant(
                    product_id, combo, combo["options"], slots
                )
                existing.append(variant)
                created.append(variant)
            db.session.flush()

    logger.info(
        "Generated %d variants for product %s (%d skipped)",
        len(created), product_id, skipped,
    )
    return {"created": len(created), "skipped": skipped, "variants": created}


def create_single(product_id, data):
    """Create one variant with its option assignments.

    Raises ConflictError when a variant with the same combination exists.
    """
    get_product_or_404(product_id)
    options = options_for_product(product_id)
    assignments = data["options"]

    check = check_assignments(options, assignments)
    if not check.ok:
        raise ValidationError(check.message)
    if combination_exists(product_id, assignments):
        raise ConflictError(
            "A variant with this option combination already exists"
        )

    with atomic("Variant creation"):
        _ensure_sku_free(data.get("sku"))
        variant = _build_variant(product_id, data, assignments, slot_map(options))
        db.session.flush()

    logger.info("Created variant %s for product %s", variant.id, product_id)
    return variant


def list_available_combinations(product_id):
    """Combinations still missing, annotated with option names. Read-only."""
    get_product_or_404(product_id)
    options = options_for_product(product_id)
    names = {option.id: option.name for option in options}
    return [
        {
            "options": [
                {
                    "option_id": a["option_id"],
                    "option_name": names.get(a["option_id"]),
                    "value": a["value"],
                    "position": a["position"],
                }
                for a in combo
            ]
        }
        for combo in available_combinations(product_id, options)
    ]


def _apply_patch(variant, changes):
    if "sku" in changes:
        _ensure_sku_free(changes["sku"], exclude_id=variant.id)
    for field_name in Variant.PATCHABLE_FIELDS:
        if field_name in changes:
            setattr(variant, field_name, changes[field_name])


def update_variant(product_id, variant_id, changes):
    """Partial update of one variant; absent fields are left untouched."""
    with atomic("Variant update"):
        variant = get_variant_or_404(product_id, variant_id)
        _apply_patch(variant, changes)
    logger.info("Updated variant %s of product %s", variant_id, product_id)
    return variant


def bulk_update(product_id, patches):
    """Apply partial patches to several variants, all or nothing.

    A variant id that does not belong to the product aborts the whole batch.
    """
    get_product_or_404(product_id)
    updated = []
    with atomic("Bulk variant update"):
        for patch in patches:
            variant_id = patch["id"]
            variant = Variant.query.filter_by(
                id=variant_id, product_id=product_id
            ).first()
            if not variant:
                raise NotFoundError(
                    f"Variant {variant_id} not found or doesn't belong to "
                    f"product {product_id}"
                )
            _apply_patch(variant, {k: v for k, v in patch.items() if k != "id"})
            updated.append(variant)
        db.session.flush()

    logger.info(
        "Bulk updated %d variants for product %s", len(updated), product_id
    )
    return updated


def delete(product_id, variant_id):
    """Delete one variant of the product; its option rows go with it."""
    with atomic("Variant deletion"):
        variant = get_variant_or_404(product_id, variant_id)
        db.session.delete(variant)
    logger.info("Deleted variant %s from product %s", variant_id, product_id)
