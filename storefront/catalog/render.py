# storefront/catalog/render.py

from dataclasses import dataclass
from typing import Iterable, List, Optional

from storefront.models.collection import Collection
from storefront.models.enums import CollectionType, Visibility
from storefront.models.storefront import CategoriesData, Category, PageHero


@dataclass(frozen=True)
class Section:
    kind: CollectionType
    collection: Collection

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "collection": self.collection.to_dict()}


def render_collection(collection: Collection, *, featured_min_products: int = 3) -> Optional[Section]:
    count = len(collection.products)

    if collection.collection_type == CollectionType.FEATURED.value:
        if count >= featured_min_products:
            return Section(CollectionType.FEATURED, collection)
        return None

    if collection.collection_type == CollectionType.BANNER.value:
        if count > 0:
            return Section(CollectionType.BANNER, collection)
        return None

    return None


def render_sections(collections: Iterable[Collection], *, featured_min_products: int = 3) -> List[Section]:
    sections = (
        render_collection(c, featured_min_products=featured_min_products)
        for c in collections
    )
    return [s for s in sections if s is not None]


def render_hero(hero: Optional[PageHero]) -> Optional[PageHero]:
    if (
        hero is None
        or hero.visibility != Visibility.VISIBLE.value
        or not hero.desktop_image
        or not hero.mobile_image
    ):
        return None
    return hero


def render_categories(data: Optional[CategoriesData]) -> List[Category]:
    if data is None or not data.show_on_public_site:
        return []
    return list(data.categories)
