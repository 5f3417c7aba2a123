from catalog.models.category import Category, CategoryField
from catalog.models.product import Product
from catalog.models.option import Option
from catalog.models.variant import Variant, VariantOption
from catalog.models.image import Image
from catalog.models.attribute import Attribute

__all__ = [
    "Category",
    "CategoryField",
    "Product",
    "Option",
    "Variant",
    "VariantOption",
    "Image",
    "Attribute",
]
