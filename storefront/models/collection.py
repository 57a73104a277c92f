# storefront/models/collection.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, Union

from storefront.models.enums import CollectionType, Visibility
from storefront.models.product import Product
from storefront.models.validation import ValidationError, as_int, as_list, as_mapping, require
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)


@dataclass(frozen=True)
class ProductRef:
    """A collection's pointer at a product, carrying the collection-local index."""

    id: str
    index: int = 0

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ProductRef":
        return cls(id=str(require(d, "id", "product reference")), index=as_int(d.get("index")))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "index": self.index}


@dataclass(frozen=True)
class CampaignDuration:
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["CampaignDuration"]:
        if not d:
            return None
        d = as_mapping(d, "campaignDuration")
        return cls(start_date=d.get("startDate"), end_date=d.get("endDate"))

    def to_dict(self) -> Dict[str, Any]:
        return {"startDate": self.start_date, "endDate": self.end_date}


@dataclass(frozen=True)
class BannerImages:
    desktop_image: str = ""
    mobile_image: str = ""

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["BannerImages"]:
        if not d:
            return None
        d = as_mapping(d, "bannerImages")
        return cls(
            desktop_image=d.get("desktopImage") or "",
            mobile_image=d.get("mobileImage") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"desktopImage": self.desktop_image, "mobileImage": self.mobile_image}


CollectionItem = Union[ProductRef, Product]


@dataclass(frozen=True)
class Collection:
    id: str
    collection_type: str
    index: int = 0
    title: str = ""
    slug: str = ""
    visibility: Optional[str] = None
    campaign_duration: Optional[CampaignDuration] = None
    # ProductRef before enrichment, Product after
    products: Tuple[CollectionItem, ...] = ()
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_featured(self) -> bool:
        return self.collection_type == CollectionType.FEATURED.value

    @property
    def is_published(self) -> bool:
        return self.visibility == Visibility.PUBLISHED.value

    @property
    def is_enriched(self) -> bool:
        return all(isinstance(p, Product) for p in self.products)

    def with_products(self, products: Iterable[CollectionItem]) -> "Collection":
        return replace(self, products=tuple(products))

    @classmethod
    def _common_fields(cls, d: Dict[str, Any]) -> Dict[str, Any]:
        refs = []
        for raw in as_list(d.get("products"), "collection products"):
            try:
                refs.append(ProductRef.from_dict(raw))
            except ValidationError as e:
                log.warning("Dropping product reference in collection %r: %s", d.get("id"), e)

        return {
            "id": str(require(d, "id", "collection")),
            "collection_type": str(d.get("collectionType") or ""),
            "index": as_int(d.get("index")),
            "title": d.get("title") or "",
            "slug": d.get("slug") or "",
            "visibility": d.get("visibility"),
            "campaign_duration": CampaignDuration.from_dict(d.get("campaignDuration")),
            "products": tuple(refs),
            "created_at": d.get("createdAt"),
            "updated_at": d.get("updatedAt"),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Collection":
        return cls(**cls._common_fields(d))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "index": self.index,
            "title": self.title,
            "slug": self.slug,
            "collectionType": self.collection_type,
            "visibility": self.visibility,
            "campaignDuration": self.campaign_duration.to_dict() if self.campaign_duration else None,
            "products": [p.to_dict() for p in self.products],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class FeaturedCollection(Collection):
    pass


@dataclass(frozen=True)
class BannerCollection(Collection):
    banner_images: Optional[BannerImages] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "BannerCollection":
        return cls(
            **cls._common_fields(d),
            banner_images=BannerImages.from_dict(d.get("bannerImages")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["bannerImages"] = self.banner_images.to_dict() if self.banner_images else None
        return out


@dataclass(frozen=True)
class OtherCollection(Collection):
    pass


_VARIANTS: Dict[str, Type[Collection]] = {
    CollectionType.FEATURED.value: FeaturedCollection,
    CollectionType.BANNER.value: BannerCollection,
}


def parse_collection(d: Dict[str, Any]) -> Collection:
    """
    Build the collection variant matching ``collectionType``.

    Raises ValidationError when the row has no ``id``.
    """
    if not isinstance(d, Mapping):
        raise ValidationError(f"collection must be an object, got {type(d).__name__}")
    variant = _VARIANTS.get(d.get("collectionType"), OtherCollection)
    return variant.from_dict(d)
