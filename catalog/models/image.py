from datetime import datetime, timezone
from catalog.extensions import db


class Image(db.Model):
    __tablename__ = "images"

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
    src = db.Column(db.String(500), nullable=False)
    alt_text = db.Column(db.String(255))
    position = db.Column(db.Integer, nullable=False, default=1)
    width = db.Column(db.Integer)
    height = db.Column(db.Integer)
    size = db.Column(db.Integer)  # bytes
    filename = db.Column(db.String(255))
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "variant_id": self.variant_id,
            "src": self.src,
            "alt_text": self.alt_text,
            "position": self.position,
            "width": self.width,
            "height": self.height,
        }

    def __repr__(self):
        return f"<Image {self.src} #{self.position}>"
