"""Per-product option management."""
import logging

from catalog.errors import ConflictError, NotFoundError, ValidationError
from catalog.extensions import db
from catalog.models.option import Option
from catalog.models.variant import Variant, VariantOption
from catalog.services.combinations import options_for_product, slot_map, values_in_use
from catalog.services.common import atomic, get_product_or_404

logger = logging.getLogger(__name__)


def get_option_or_404(product_id, option_id):
    option = Option.query.filter_by(id=option_id, product_id=product_id).first()
    if not option:
        raise NotFoundError("Option not found")
    return option


def _next_free_position(options):
    taken = {o.position for o in options}
    for position in range(1, Option.MAX_PER_PRODUCT + 1):
        if position not in taken:
            return position
    return None


def add_option(product_id, name, values, position=None):
    """Stage a new option on the session; caller owns the transaction."""
    options = options_for_product(product_id)
    if len(options) >= Option.MAX_PER_PRODUCT:
        raise ValidationError("A product can have at most 3 options")
    if any(o.name == name for o in options):
        raise ConflictError(f'Option "{name}" already exists for this product')
    if position is None:
        position = _next_free_position(options)
    elif any(o.position == position for o in options):
        raise ConflictError(f"Option position {position} is already taken")

    option = Option(product_id=product_id, name=name, position=position)
    option.values = values
    db.session.add(option)
    db.session.flush()
    return option


def _reslot_variants(product_id):
    """Move every variant's option rows onto the product's current slots.

    Stale rows are re-inserted, not updated: uq_variant_position is checked
    per row, so swapping two slots in place would collide.
    """
    db.session.flush()
    slots = slot_map(options_for_product(product_id))
    rows = (
        VariantOption.query.join(Variant)
        .filter(Variant.product_id == product_id)
        .all()
    )
    stale = [row for row in rows if row.position != slots[row.option_id]]
    if not stale:
        return

    moved = []
    for row in stale:
        moved.append((row.variant, row.option_id, row.option_value))
        row.variant.variant_options.remove(row)
    db.session.flush()
    for variant, option_id, value in moved:
        variant.variant_options.append(
            VariantOption(
                option_id=option_id,
                option_value=value,
                position=slots[option_id],
            )
        )
    db.session.flush()
    logger.info("Re-slotted %d variant options of product %s", len(moved), product_id)


def list_options(product_id):
    get_product_or_404(product_id)
    return options_for_product(product_id)


def create_option(product_id, data):
    get_product_or_404(product_id)
    with atomic("Option creation"):
        option = add_option(
            product_id, data["name"], data["values"], data.get("position")
        )
        _reslot_variants(product_id)
    logger.info("Created option %s for product %s", option.name, product_id)
    return option


def update_option(product_id, option_id, changes):
    """Rename, move, or change the allowed values of an option.

    Values still referenced by a variant cannot be removed. Moving an
    option re-slots the option rows of every variant of the product.
    """
    with atomic("Option update"):
        option = get_option_or_404(product_id, option_id)
        siblings = [o for o in options_for_product(product_id) if o.id != option.id]

        name = changes.get("name")
        if name and name != option.name:
            if any(o.name == name for o in siblings):
                raise ConflictError(f'Option "{name}" already exists for this product')
            option.name = name

        position = changes.get("position")
        if position and position != option.position:
            if any(o.position == position for o in siblings):
                raise ConflictError(f"Option position {position} is already taken")
            option.position = position
            _reslot_variants(product_id)

        values = changes.get("values")
        if values is not None:
            removed = set(option.values) - set(values)
            blocked = sorted(removed & values_in_use(option.id))
            if blocked:
                raise ConflictError(
                    f'Cannot remove values in use by variants from option '
                    f'"{option.name}": {", ".join(blocked)}'
                )
            option.values = values

    logger.info("Updated option %s of product %s", option_id, product_id)
    return option


def delete_option(product_id, option_id):
    """Delete an option that no variant references."""
    with atomic("Option deletion"):
        option = get_option_or_404(product_id, option_id)
        if values_in_use(option.id):
            raise ConflictError(
                f'Option "{option.name}" is used by existing variants; '
                f"delete those variants first"
            )
        db.session.delete(option)
        _reslot_variants(product_id)
    logger.info("Deleted option %s from product %s", option_id, product_id)
