"""Option combinatorics: Cartesian product, existence checks, assignment rules.

A combination is a list of ``{"option_id", "value", "position"}`` dicts, one
per option of the product. Positions are 1-based and follow the order of the
options the combination was generated from.
"""
import itertools
from dataclasses import dataclass, field

from sqlalchemy.orm import selectinload

from catalog.extensions import db
from catalog.models.option import Option
from catalog.models.variant import Variant, VariantOption


def generate_combinations(options):
    """Cartesian product of the option values.

    The first option varies slowest: for A(a1, a2), B(b1, b2) the result is
    (a1, b1), (a1, b2), (a2, b1), (a2, b2). No options → no combinations.
    Nothing here caps the output size; callers must.
    """
    if not options:
        return []

    axes = [
        [(option.id, value, position) for value in option.values]
        for position, option in enumerate(options, start=1)
    ]
    return [
        [
            {"option_id": option_id, "value": value, "position": position}
            for option_id, value, position in combo
        ]
        for combo in itertools.product(*axes)
    ]


def slot_map(options):
    """option_id -> 1-based slot, following the order of ``options``.

    Generated combinations use these slots, and stored VariantOption rows
    are kept on them.
    """
    return {option.id: slot for slot, option in enumerate(options, start=1)}


def count_combinations(options):
    if not options:
        return 0
    total = 1
    for option in options:
        total *= len(option.values)
    return total


def signature(assignments):
    """Order-independent identity of a combination: its (option_id, value) set.

    Accepts request dicts or VariantOption rows.
    """
    pairs = []
    for a in assignments:
        if isinstance(a, VariantOption):
            pairs.append((a.option_id, a.option_value))
        else:
            pairs.append((int(a["option_id"]), str(a["value"])))
    return tuple(sorted(pairs))


def load_variants(product_id):
    """All variants of a product with their option rows eagerly loaded."""
    return (
        Variant.query.filter_by(product_id=product_id)
        .options(selectinload(Variant.variant_options))
        .order_by(Variant.id)
        .all()
    )


def combination_exists(product_id, combination, variants=None):
    """True when some variant of the product has exactly this combination.

    Both sides are normalized before comparison, so the order and position
    numbering of the candidate do not matter. Pass ``variants`` to reuse a
    list already loaded with load_variants().
    """
    if variants is None:
        variants = load_variants(product_id)
    wanted = signature(combination)
    for variant in variants:
        existing = variant.variant_options
        if len(existing) != len(wanted):
            continue
        if signature(existing) == wanted:
            return True
    return False


def available_combinations(product_id, options, variants=None):
    """Combinations of the product's options not yet materialized as variants."""
    if variants is None:
        variants = load_variants(product_id)
    taken = {signature(v.variant_options) for v in variants}
    return [
        combo for combo in generate_combinations(options)
        if signature(combo) not in taken
    ]


@dataclass
class AssignmentCheck:
    """Outcome of check_assignments(); ``errors`` is empty when ``ok``."""

    errors: list = field(default_factory=list)

    @property
    def ok(self):
        return not self.errors

    @property
    def message(self):
        return "; ".join(self.errors)


def check_assignments(options, assignments):
    """Validate option assignments against the product's options.

    - option must belong to the product
    - value must be one of the option's allowed values
    - an option may be assigned once, a position used once
    - position in 1..3
    """
    result = AssignmentCheck()
    by_id = {option.id: option for option in options}
    seen_options = set()
    seen_positions = set()

    for a in assignments:
        option_id = int(a["option_id"])
        value = a["value"]
        position = int(a["position"])

        option = by_id.get(option_id)
        if option is None:
            result.errors.append(f"Option {option_id} does not belong to this product")
            continue
        if value not in option.values:
            result.errors.append(
                f'Option value "{value}" is not valid for option "{option.name}". '
                f"Valid values: {', '.join(option.values)}"
            )
        if option_id in seen_options:
            result.errors.append(f'Option "{option.name}" is assigned more than once')
        if position in seen_positions:
            result.errors.append(f"Position {position} is used more than once")
        if not 1 <= position <= Option.MAX_PER_PRODUCT:
            result.errors.append(f"Position {position} is out of range (1-3)")
        seen_options.add(option_id)
        seen_positions.add(position)

    return result


def options_for_product(product_id):
    return (
        Option.query.filter_by(product_id=product_id)
        .order_by(Option.position)
        .all()
    )


def values_in_use(option_id):
    """Distinct values of an option currently referenced by variants."""
    rows = (
        db.session.query(VariantOption.option_value)
        .filter(VariantOption.option_id == option_id)
        .distinct()
        .all()
    )
    return {value for (value,) in rows}
