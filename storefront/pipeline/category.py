# storefront/pipeline/category.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from storefront.api.gateway import CatalogGateway
from storefront.catalog.display import get_display_name
from storefront.catalog.pagination import paginate
from storefront.config.storefront import StorefrontConfig
from storefront.models.product import Product
from storefront.models.storefront import Cart
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

CATEGORY_PRODUCT_FIELDS: Tuple[str, ...] = (
    "id",
    "name",
    "slug",
    "description",
    "pricing",
    "images",
    "options",
    "upsell",
    "highlights",
)


@dataclass
class CategoryPage:
    name: str
    display_name: str
    current_page: int
    total_pages: int
    products: List[Product]
    cart: Optional[Cart] = None

    @property
    def is_empty(self) -> bool:
        return not self.products

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "isEmpty": self.is_empty,
            "products": [p.to_dict() for p in self.products],
            "cart": self.cart.to_dict() if self.cart else None,
        }


async def run_category_pipeline(
    gateway: CatalogGateway,
    name: str,
    page: int = 1,
    *,
    device_identifier: str = "",
    config: Optional[StorefrontConfig] = None,
) -> CategoryPage:
    config = config or StorefrontConfig()

    log.info("Starting category pipeline: name=%r page=%d", name, page)

    cart, all_products = await asyncio.gather(
        gateway.get_cart(device_identifier),
        gateway.get_products(category=name, fields=CATEGORY_PRODUCT_FIELDS),
    )

    page_slice = paginate(all_products or [], page, per_page=config.items_per_page)

    category_page = CategoryPage(
        name=name,
        display_name=get_display_name(name),
        current_page=page_slice.current_page,
        total_pages=page_slice.total_pages,
        products=page_slice.items,
        cart=cart,
    )

    if category_page.is_empty:
        log.info("Category %r has no products on page %d; rendering empty state", name, page_slice.current_page)
    else:
        log.info(
            "Category %r: page %d/%d, %d products",
            name,
            page_slice.current_page,
            page_slice.total_pages,
            len(page_slice.items),
        )

    return category_page
