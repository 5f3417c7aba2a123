from datetime import datetime, timezone
from catalog.extensions import db


class Option(db.Model):
    """A named axis of customization ("Color") with its allowed values."""

    __tablename__ = "options"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    position = db.Column(db.Integer, nullable=False, default=1)
    # Stored as a JSON array; always read and written through `values`
    _values = db.Column("values", db.JSON, nullable=False, default=list)
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
        backref="option",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        db.UniqueConstraint("product_id", "name", name="uq_option_name"),
        db.UniqueConstraint("product_id", "position", name="uq_option_position"),
        db.CheckConstraint("position BETWEEN 1 AND 3", name="ck_option_position"),
    )

    MAX_PER_PRODUCT = 3

    @property
    def values(self):
        return [str(v) for v in (self._values or [])]

    @values.setter
    def values(self, values):
        self._values = [str(v) for v in values]

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "name": self.name,
            "position": self.position,
            "values": self.values,
        }

    def __repr__(self):
        return f"<Option {self.name}: {self.values}>"
