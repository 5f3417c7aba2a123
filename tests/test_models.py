"""Tests for database models."""
import pytest
from sqlalchemy.exc import IntegrityError

from catalog.models.category import Category, CategoryField
from catalog.models.option import Option
from catalog.models.product import Product, slugify
from catalog.models.variant import Variant, VariantOption, make_combination_key


def test_product_creation(db):
    p = Product(title="Linen Shirt", tags="summer, linen ,", status="draft")
    db.session.add(p)
    db.session.flush()

    assert p.id is not None
    assert p.status == "draft"
    assert p.tag_list == ["summer", "linen"]


def test_slugify():
    assert slugify("  Red Banarasi -- Silk Saree! ") == "red-banarasi-silk-saree"
    assert slugify("!!!") == ""


def test_option_values_are_typed_strings(db):
    p = Product(title="Mug")
    db.session.add(p)
    db.session.flush()

    o = Option(product_id=p.id, name="Capacity", position=1, values=[250, "500"])
    db.session.add(o)
    db.session.flush()

    assert o.values == ["250", "500"]
    assert o.to_dict()["values"] == ["250", "500"]


def test_combination_key_is_order_independent():
    assert make_combination_key([(2, "S"), (1, "Red")]) == make_combination_key(
        [(1, "Red"), (2, "S")]
    )
    assert make_combination_key([]) is None


def test_variant_title_and_selected_options(db):
    p = Product(title="Tee")
    db.session.add(p)
    db.session.flush()
    color = Option(product_id=p.id, name="Color", position=1, values=["Red"])
    size = Option(product_id=p.id, name="Size", position=2, values=["S"])
    db.session.add_all([color, size])
    db.session.flush()

    v = Variant(product_id=p.id, price=9.5)
    v.variant_options = [
        VariantOption(option_id=size.id, option_value="S", position=2),
        VariantOption(option_id=color.id, option_value="Red", position=1),
    ]
    v.refresh_combination_key()
    db.session.add(v)
    db.session.flush()

    assert v.title == "Red / S"
    assert v.selected_options == [
        {"name": "Color", "value": "Red", "position": 1},
        {"name": "Size", "value": "S", "position": 2},
    ]
    assert v.to_dict()["price"] == 9.5


def test_variant_cannot_hold_two_values_for_one_option(db):
    p = Product(title="Cap")
    db.session.add(p)
    db.session.flush()
    color = Option(product_id=p.id, name="Color", position=1, values=["Red", "Blue"])
    db.session.add(color)
    db.session.flush()

    v = Variant(product_id=p.id, price=0)
    v.variant_options = [
        VariantOption(option_id=color.id, option_value="Red", position=1),
        VariantOption(option_id=color.id, option_value="Blue", position=2),
    ]
    db.session.add(v)
    with pytest.raises(IntegrityError):
        db.session.flush()
    db.session.rollback()


def test_category_fields_order(db):
    c = Category(name="Apparel")
    c.fields.append(CategoryField(name="Material", field_type="select", options=["Wool"], position=2))
    c.fields.append(CategoryField(name="Care", position=1))
    db.session.add(c)
    db.session.commit()

    assert [f.name for f in db.session.get(Category, c.id).fields] == ["Care", "Material"]
