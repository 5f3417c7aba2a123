"""Tests for option rules: slots, names, and values in use."""
import pytest

from catalog.errors import ConflictError, ValidationError
from catalog.models.option import Option
from catalog.models.variant import VariantOption
from catalog.services import option_service, variant_service


def _option(product, name):
    return Option.query.filter_by(product_id=product.id, name=name).one()


def test_positions_are_assigned_in_order(make_product):
    product = make_product(Color=["Red"], Size=["S"], Fit=["Slim"])
    assert [(o.name, o.position) for o in option_service.list_options(product.id)] == [
        ("Color", 1),
        ("Size", 2),
        ("Fit", 3),
    ]


def test_at_most_three_options(make_product):
    product = make_product(Color=["Red"], Size=["S"], Fit=["Slim"])

    with pytest.raises(ValidationError):
        option_service.create_option(product.id, {"name": "Material", "values": ["Wool"]})


def test_option_name_unique_per_product(make_product):
    product = make_product(Color=["Red"])
    other = make_product(Color=["Red"])

    with pytest.raises(ConflictError):
        option_service.create_option(product.id, {"name": "Color", "values": ["Blue"]})
    assert _option(other, "Color").values == ["Red"]


def test_values_can_be_added_and_unused_ones_removed(make_product):
    product = make_product(Color=["Red", "Blue"], Size=["S"])
    color = _option(product, "Color")

    option_service.update_option(product.id, color.id, {"values": ["Red", "Green"]})

    assert _option(product, "Color").values == ["Red", "Green"]


def test_removing_value_in_use_is_rejected(make_product):
    product = make_product()
    variant_service.generate(product.id)
    color = _option(product, "Color")

    with pytest.raises(ConflictError) as exc:
        option_service.update_option(product.id, color.id, {"values": ["Red"]})

    assert "Blue" in exc.value.message
    assert _option(product, "Color").values == ["Red", "Blue"]


def test_delete_option_in_use_is_rejected(make_product):
    product = make_product()
    variant_service.generate(product.id)
    size = _option(product, "Size")

    with pytest.raises(ConflictError):
        option_service.delete_option(product.id, size.id)
    assert VariantOption.query.filter_by(option_id=size.id).count() == 4


def test_delete_unused_option(make_product):
    product = make_product()
    size = _option(product, "Size")

    option_service.delete_option(product.id, size.id)

    assert [o.name for o in option_service.list_options(product.id)] == ["Color"]


def _slots(option_ids):
    return {r.option_id: r.position for r in VariantOption.query if r.option_id in option_ids}


def test_variant_slots_follow_option_order_across_moves(make_product):
    product = make_product(Color=["Red"], Size=["S"])
    color_id = _option(product, "Color").id
    size_id = _option(product, "Size").id
    option_service.update_option(product.id, size_id, {"position": 3})
    variant_service.generate(product.id)

    option_service.update_option(product.id, color_id, {"position": 2})
    assert _slots({color_id, size_id}) == {color_id: 1, size_id: 2}

    option_service.update_option(product.id, size_id, {"position": 1})
    assert _slots({color_id, size_id}) == {size_id: 1, color_id: 2}
    assert [v.title for v in variant_service.list_variants(product.id)] == ["S / Red"]


def test_new_option_in_front_reslots_existing_variants(make_product):
    product = make_product(Size=["S", "M"])
    size_id = _option(product, "Size").id
    option_service.update_option(product.id, size_id, {"position": 3})
    variant_service.generate(product.id)

    color = option_service.create_option(
        product.id, {"name": "Color", "values": ["Red"], "position": 1}
    )

    assert color.position == 1
    assert {r.position for r in VariantOption.query.filter_by(option_id=size_id)} == {2}


def test_position_clash_is_rejected(make_product):
    product = make_product(Color=["Red"], Size=["S"])
    size = _option(product, "Size")

    with pytest.raises(ConflictError):
        option_service.update_option(product.id, size.id, {"position": 1})
