# storefront/models/product.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from storefront.models.validation import ValidationError, as_float, as_int, as_list, as_mapping, require


@dataclass(frozen=True)
class Pricing:
    base_price: float = 0.0
    sale_price: float = 0.0
    discount_percentage: float = 0.0

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "Pricing":
        d = as_mapping(d, "pricing")
        return cls(
            base_price=as_float(d.get("basePrice")),
            sale_price=as_float(d.get("salePrice")),
            discount_percentage=as_float(d.get("discountPercentage")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "basePrice": self.base_price,
            "salePrice": self.sale_price,
            "discountPercentage": self.discount_percentage,
        }


@dataclass(frozen=True)
class ProductImages:
    main: str = ""
    gallery: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "ProductImages":
        d = as_mapping(d, "images")
        return cls(
            main=d.get("main") or "",
            gallery=tuple(as_list(d.get("gallery"), "images.gallery")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"main": self.main, "gallery": list(self.gallery)}


@dataclass(frozen=True)
class KeyPoint:
    text: str
    index: int

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "KeyPoint":
        if not isinstance(d, Mapping):
            raise ValidationError(f"key point must be an object, got {type(d).__name__}")
        return cls(text=d.get("text") or "", index=as_int(d.get("index")))

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "index": self.index}


@dataclass(frozen=True)
class Highlights:
    headline: str = ""
    key_points: Tuple[KeyPoint, ...] = ()

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> "Highlights":
        d = as_mapping(d, "highlights")
        return cls(
            headline=d.get("headline") or "",
            key_points=tuple(KeyPoint.from_dict(k) for k in as_list(d.get("keyPoints"), "highlights.keyPoints")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headline": self.headline,
            "keyPoints": [k.to_dict() for k in self.key_points],
        }


@dataclass(frozen=True)
class Upsell:
    id: str
    main_image: str = ""
    pricing: Pricing = field(default_factory=Pricing)
    visibility: Optional[str] = None
    # bundled products stay as raw projections; nothing here reads them
    products: Tuple[Dict[str, Any], ...] = ()

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["Upsell"]:
        if not d:
            return None
        d = as_mapping(d, "upsell")
        return cls(
            id=str(require(d, "id", "upsell")),
            main_image=d.get("mainImage") or "",
            pricing=Pricing.from_dict(d.get("pricing")),
            visibility=d.get("visibility"),
            products=tuple(as_list(d.get("products"), "upsell.products")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "mainImage": self.main_image,
            "pricing": self.pricing.to_dict(),
            "visibility": self.visibility,
            "products": list(self.products),
        }


@dataclass(frozen=True)
class Product:
    # identity
    id: str

    # display
    name: str = ""
    slug: str = ""
    description: str = ""

    pricing: Pricing = field(default_factory=Pricing)
    images: ProductImages = field(default_factory=ProductImages)
    options: Dict[str, Any] = field(default_factory=dict)  # sizes/colors, passed through
    highlights: Highlights = field(default_factory=Highlights)
    upsell: Optional[Upsell] = None
    visibility: Optional[str] = None

    # collection-local position, set during enrichment
    index: int = 0

    def with_index(self, index: int) -> "Product":
        return replace(self, index=index)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        return cls(
            id=str(require(d, "id", "product")),
            name=d.get("name") or "",
            slug=d.get("slug") or "",
            description=d.get("description") or "",
            pricing=Pricing.from_dict(d.get("pricing")),
            images=ProductImages.from_dict(d.get("images")),
            options=dict(as_mapping(d.get("options"), "options")),
            highlights=Highlights.from_dict(d.get("highlights")),
            upsell=Upsell.from_dict(d.get("upsell")),
            visibility=d.get("visibility"),
            index=as_int(d.get("index")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "index": self.index,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "pricing": self.pricing.to_dict(),
            "images": self.images.to_dict(),
            "options": self.options,
            "highlights": self.highlights.to_dict(),
            "upsell": self.upsell.to_dict() if self.upsell else None,
            "visibility": self.visibility,
        }
