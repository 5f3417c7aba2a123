"""Request payload schemas."""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from catalog.errors import ValidationError, from_pydantic

WeightUnit = Literal["g", "kg", "oz", "lb"]
InventoryManagement = Literal["shopify", "manual", "none"]
ProductStatus = Literal["active", "archived", "draft"]


def parse(schema, payload):
    """Validate a JSON body against a schema, raising our ValidationError."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise from_pydantic(e) from e


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

class OptionAssignment(_Schema):
    option_id: int
    value: str = Field(min_length=1, max_length=255)
    position: int = Field(ge=1, le=3)


class VariantFields(_Schema):
    price: float = Field(default=0, ge=0)
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    inventory_quantity: int = Field(default=0, ge=0)
    inventory_management: InventoryManagement = "manual"
    sku: Optional[str] = Field(default=None, max_length=255)
    barcode: Optional[str] = Field(default=None, max_length=255)
    weight: Optional[float] = Field(default=None, ge=0)
    weight_unit: WeightUnit = "kg"


class CombinationIn(VariantFields):
    options: List[OptionAssignment] = Field(min_length=1)


class GenerateVariantsIn(_Schema):
    mode: Literal["all", "selective"] = "all"
    combinations: Optional[List[CombinationIn]] = None


class VariantCreateIn(VariantFields):
    price: float = Field(ge=0)
    options: List[OptionAssignment] = Field(min_length=1)


class VariantPatchIn(_Schema):
    price: Optional[float] = Field(default=None, ge=0)
    compare_at_price: Optional[float] = Field(default=None, ge=0)
    inventory_quantity: Optional[int] = Field(default=None, ge=0)
    inventory_management: Optional[InventoryManagement] = None
    sku: Optional[str] = Field(default=None, max_length=255)
    barcode: Optional[str] = Field(default=None, max_length=255)
    weight: Optional[float] = Field(default=None, ge=0)
    weight_unit: Optional[WeightUnit] = None

    @field_validator("price", "inventory_quantity", "inventory_management")
    @classmethod
    def _not_null(cls, value):
        # may be omitted, but an explicit null would clear a NOT NULL column
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self):
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class BulkVariantPatch(VariantPatchIn):
    id: int

    @model_validator(mode="after")
    def _has_changes(self):
        if not self.changes():
            raise ValueError("each variant needs an id and at least one field")
        return self


class BulkUpdateIn(_Schema):
    variants: List[BulkVariantPatch] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _clean_option_values(values):
    cleaned = [v.strip() for v in values]
    if any(not v or len(v) > 255 for v in cleaned):
        raise ValueError("option values must be 1-255 characters")
    if len(set(cleaned)) != len(cleaned):
        raise ValueError("option values must be unique")
    return cleaned


class OptionIn(_Schema):
    name: str = Field(min_length=1, max_length=255)
    position: Optional[int] = Field(default=None, ge=1, le=3)
    values: List[str] = Field(min_length=1)

    @field_validator("values")
    @classmethod
    def _clean_values(cls, values):
        return _clean_option_values(values)


class OptionPatchIn(_Schema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[int] = Field(default=None, ge=1, le=3)
    values: Optional[List[str]] = Field(default=None, min_length=1)

    @field_validator("values")
    @classmethod
    def _clean_values(cls, values):
        if values is None:
            return values
        return _clean_option_values(values)

    def changes(self):
        return self.model_dump(exclude_unset=True)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

FieldValue = Union[bool, int, float, str, None]


class ProductIn(_Schema):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    vendor: Optional[str] = Field(default=None, max_length=255)
    product_type: Optional[str] = Field(default=None, max_length=255)
    tags: Optional[str] = None
    handle: Optional[str] = Field(default=None, max_length=255)
    status: ProductStatus = "draft"
    category_id: Optional[int] = None
    options: Optional[List[OptionIn]] = None
    category_fields: Optional[dict[str, FieldValue]] = None

    @field_validator("options")
    @classmethod
    def _at_most_three(cls, options):
        if options and len(options) > 3:
            raise ValueError("a product can have at most 3 options")
        return options


class ProductPatchIn(_Schema):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    vendor: Optional[str] = Field(default=None, max_length=255)
    product_type: Optional[str] = Field(default=None, max_length=255)
    tags: Optional[str] = None
    handle: Optional[str] = Field(default=None, max_length=255)
    status: Optional[ProductStatus] = None
    category_id: Optional[int] = None
    category_fields: Optional[dict[str, FieldValue]] = None


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class CategoryIn(_Schema):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    shopify_product_type: Optional[str] = Field(default=None, max_length=255)
    status: Literal["active", "inactive"] = "active"


class CategoryFieldIn(_Schema):
    name: str = Field(min_length=1, max_length=255)
    field_type: Literal["string", "number", "boolean", "date", "text", "select"] = "string"
    required: bool = False
    position: int = Field(default=0, ge=0)
    options: Optional[List[str]] = None
    default_value: Optional[str] = None

    @model_validator(mode="after")
    def _select_needs_options(self):
        if self.field_type == "select" and not self.options:
            raise ValueError("select fields require options")
        return self


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------

class AttributeIn(_Schema):
    product_id: int
    variant_id: Optional[int] = None
    category: str = Field(default="custom", max_length=255)
    key: str = Field(min_length=1, max_length=255)
    value: Optional[str] = None
    value_type: Literal["string", "number", "boolean", "date", "json"] = "string"
    namespace: str = Field(default="custom", min_length=1, max_length=255)
