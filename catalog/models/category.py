from datetime import datetime, timezone
from catalog.extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    shopify_product_type = db.Column(db.String(255))
    status = db.Column(db.String(20), nullable=False, default="active", index=True)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    fields = db.relationship(
        "CategoryField",
        backref="category",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="CategoryField.position",
    )
    products = db.relationship(
        "Product", backref="category", lazy="dynamic", passive_deletes=True
    )

    STATUSES = {"active", "inactive"}

    def to_dict(self, include_fields=False):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "shopify_product_type": self.shopify_product_type,
            "status": self.status,
        }
        if include_fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        return data

    def __repr__(self):
        return f"<Category {self.name}>"


class CategoryField(db.Model):
    __tablename__ = "category_fields"

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False)
    field_type = db.Column(db.String(20), nullable=False, default="string")
    required = db.Column(db.Boolean, nullable=False, default=False)
    position = db.Column(db.Integer, nullable=False, default=0)
    options = db.Column(db.JSON)  # choices for "select" fields
    default_value = db.Column(db.String(255))

    __table_args__ = (
        db.UniqueConstraint("category_id", "name", name="uq_category_field_name"),
    )

    FIELD_TYPES = {"string", "number", "boolean", "date", "text", "select"}

    def to_dict(self):
        return {
            "id": self.id,
            "category_id": self.category_id,
            "name": self.name,
            "field_type": self.field_type,
            "required": self.required,
            "position": self.position,
            "options": self.options,
            "default_value": self.default_value,
        }

    def __repr__(self):
        return f"<CategoryField {self.name} ({self.field_type})>"
