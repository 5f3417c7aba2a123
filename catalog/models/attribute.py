from datetime import datetime, timezone
from catalog.extensions import db


class Attribute(db.Model):
    __tablename__ = "attributes"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    variant_id = db.Column(
        db.Integer,
        db.ForeignKey("variants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    category = db.Column(db.String(255), default="custom")
    key = db.Column(db.String(255), nullable=False, index=True)
    value = db.Column(db.Text)
    value_type = db.Column(db.String(20), nullable=False, default="string")
    namespace = db.Column(db.String(255), nullable=False, default="custom", index=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        db.UniqueConstraint(
            "product_id", "variant_id", "namespace", "key",
            name="uq_attribute_per_entity",
        ),
    )

    VALUE_TYPES = {"string", "number", "boolean", "date", "json"}
    CATEGORY_FIELDS_NAMESPACE = "category_fields"

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "category": self.category,
            "key": self.key,
            "value": self.value,
            "value_type": self.value_type,
            "namespace": self.namespace,
        }

    def __repr__(self):
        return f"<Attribute {self.namespace}.{self.key}={self.value}>"
