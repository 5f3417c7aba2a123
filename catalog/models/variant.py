import json
from datetime import datetime, timezone
from catalog.extensions import db


def make_combination_key(pairs):
    """Canonical key for a set of (option_id, value) pairs.

    Order-independent; None for a variant without option assignments.
    """
    pairs = sorted((int(option_id), str(value)) for option_id, value in pairs)
    if not pairs:
        return None
    return json.dumps(pairs, separators=(",", ":"), ensure_ascii=False)


class Variant(db.Model):
    __tablename__ = "variants"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sku = db.Column(db.String(255), unique=True, nullable=True)
    price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    compare_at_price = db.Column(db.Numeric(10, 2, asdecimal=False))
    barcode = db.Column(db.String(255))
    inventory_quantity = db.Column(db.Integer, nullable=False, default=0)
    inventory_management = db.Column(db.String(20), nullable=False, default="manual")
    weight = db.Column(db.Numeric(8, 3, asdecimal=False))
    weight_unit = db.Column(db.String(5), default="kg")
    combination_key = db.Column(db.String(1024))
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    variant_options = db.relationship(
        "VariantOption",
        backref="variant",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="VariantOption.position",
    )
    images = db.relationship(
        "Image", backref="variant", lazy="select", cascade="all", passive_deletes=True
    )

    __table_args__ = (
        db.UniqueConstraint(
            "product_id", "combination_key", name="uq_variant_combination"
        ),
        db.CheckConstraint("price >= 0", name="ck_variant_price"),
        db.CheckConstraint(
            "inventory_quantity >= 0", name="ck_variant_inventory"
        ),
    )

    WEIGHT_UNITS = {"g", "kg", "oz", "lb"}
    INVENTORY_MANAGEMENT = {"shopify", "manual", "none"}
    PATCHABLE_FIELDS = (
        "price",
        "compare_at_price",
        "inventory_quantity",
        "inventory_management",
        "sku",
        "barcode",
        "weight",
        "weight_unit",
    )

    @property
    def selected_options(self):
        return [
            {"name": vo.option.name, "value": vo.option_value, "position": vo.position}
            for vo in sorted(self.variant_options, key=lambda vo: vo.position)
        ]

    @property
    def title(self):
        """Shopify-style title, e.g. "Red / S"."""
        values = [vo["value"] for vo in self.selected_options]
        return " / ".join(values) if values else "Default Title"

    def refresh_combination_key(self):
        self.combination_key = make_combination_key(
            (vo.option_id, vo.option_value) for vo in self.variant_options
        )

    def to_dict(self, with_options=True):
        data = {
            "id": self.id,
            "product_id": self.product_id,
            "title": self.title,
            "sku": self.sku,
            "price": self.price,
            "compare_at_price": self.compare_at_price,
            "barcode": self.barcode,
            "inventory_quantity": self.inventory_quantity,
            "inventory_management": self.inventory_management,
            "weight": self.weight,
            "weight_unit": self.weight_unit,
        }
        if with_options:
            data["selectedOptions"] = self.selected_options
        return data

    def __repr__(self):
        return f"<Variant {self.id} of product {self.product_id}>"


class VariantOption(db.Model):
    """Binds one variant to one option with the value chosen for it."""

    __tablename__ = "variant_options"

    id = db.Column(db.Integer, primary_key=True)
    variant_id = db.Column(
        db.Integer,
        db.ForeignKey("variants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_id = db.Column(
        db.Integer,
        db.ForeignKey("options.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    option_value = db.Column(db.String(255), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        db.UniqueConstraint("variant_id", "option_id", name="uq_variant_option"),
        db.UniqueConstraint("variant_id", "position", name="uq_variant_position"),
        db.CheckConstraint("position BETWEEN 1 AND 3", name="ck_variant_option_position"),
    )

    def __repr__(self):
        return f"<VariantOption {self.option_id}={self.option_value}@{self.position}>"
