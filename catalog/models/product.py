import re
from datetime import datetime, timezone
from catalog.extensions import db


def slugify(text):
    """Lowercase, collapse non-alphanumerics to "-", trim dashes."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text)
    vendor = db.Column(db.String(255))
    product_type = db.Column(db.String(255))
    tags = db.Column(db.String(1024))  # comma-separated
    handle = db.Column(db.String(255), unique=True, index=True)
    status = db.Column(
        db.String(20), nullable=False, default="draft", index=True
    )
    category_id = db.Column(
        db.Integer,
        db.ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    options = db.relationship(
        "Option",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Option.position",
    )
    variants = db.relationship(
        "Variant",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Variant.id",
    )
    images = db.relationship(
        "Image",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Image.position",
    )
    attributes = db.relationship(
        "Attribute",
        backref="product",
        lazy="dynamic",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    VALID_STATUSES = {"active", "archived", "draft"}

    @property
    def tag_list(self):
        return [t.strip() for t in (self.tags or "").split(",") if t.strip()]

    @property
    def product_attributes(self):
        """Attributes attached to the product itself, not to a variant."""
        return self.attributes.filter_by(variant_id=None).all()

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "vendor": self.vendor,
            "product_type": self.product_type,
            "tags": self.tags,
            "handle": self.handle,
            "status": self.status,
            "category_id": self.category_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Product {self.id}: {self.title}>"
