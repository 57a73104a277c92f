# storefront/pipeline/home.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from storefront.api.gateway import CatalogGateway
from storefront.catalog.enrich import enrich_featured_collections
from storefront.catalog.merge import discovery_exclusion_ids, merge_collections
from storefront.catalog.render import Section, render_categories, render_hero, render_sections
from storefront.config.storefront import StorefrontConfig
from storefront.models.collection import Collection
from storefront.models.enums import Visibility
from storefront.models.storefront import Cart, Category, PageHero
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

HOME_COLLECTION_FIELDS: Tuple[str, ...] = ("title", "slug", "products")


@dataclass
class HomePage:
    hero: Optional[PageHero] = None
    categories: List[Category] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    # merged list before the render predicate, in display order
    collections: List[Collection] = field(default_factory=list)
    discovery_exclude_ids: List[str] = field(default_factory=list)
    cart: Optional[Cart] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hero": self.hero.to_dict() if self.hero else None,
            "categories": [c.to_dict() for c in self.categories],
            "sections": [s.to_dict() for s in self.sections],
            "discoveryExcludeIds": list(self.discovery_exclude_ids),
            "cart": self.cart.to_dict() if self.cart else None,
        }


async def run_home_pipeline(
    gateway: CatalogGateway,
    *,
    device_identifier: str = "",
    config: Optional[StorefrontConfig] = None,
) -> HomePage:
    config = config or StorefrontConfig()

    log.info("Starting home pipeline")

    # 1) fetch independent resources at once
    collections, categories_data, page_hero, cart = await asyncio.gather(
        gateway.get_collections(
            fields=HOME_COLLECTION_FIELDS,
            visibility=Visibility.PUBLISHED.value,
        ),
        gateway.get_categories(visibility=Visibility.VISIBLE.value),
        gateway.get_page_hero(),
        gateway.get_cart(device_identifier),
    )

    log.debug("Fetched %d collections", len(collections or []))

    # 2) join featured collections with their products
    featured = await enrich_featured_collections(collections, gateway.get_products)

    # 3) pure transforms
    merged = merge_collections(featured, collections)
    exclude_ids = discovery_exclusion_ids(merged, limit=config.discovery_exclude_top)
    sections = render_sections(merged, featured_min_products=config.featured_min_products)

    home = HomePage(
        hero=render_hero(page_hero),
        categories=render_categories(categories_data),
        sections=sections,
        collections=merged,
        discovery_exclude_ids=exclude_ids,
        cart=cart,
    )

    log.info(
        "Home page assembled: %d collections, %d rendered sections, %d excluded from discovery, hero=%s",
        len(merged),
        len(sections),
        len(exclude_ids),
        home.hero is not None,
    )

    return home
