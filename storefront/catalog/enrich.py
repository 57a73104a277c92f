# storefront/catalog/enrich.py

from __future__ import annotations

from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from storefront.models.collection import Collection
from storefront.models.enums import Visibility
from storefront.models.product import Product
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

FEATURED_PRODUCT_FIELDS: Tuple[str, ...] = (
    "name",
    "slug",
    "description",
    "highlights",
    "pricing",
    "images",
    "options",
    "upsell",
)

# async (ids=..., fields=..., visibility=...) -> products or None
FetchProducts = Callable[..., Awaitable[Optional[List[Product]]]]


def featured_collections(collections: Optional[Iterable[Collection]]) -> List[Collection]:
    return [c for c in collections or () if c.is_featured and c.is_published]


def product_index_pairs(collections: Iterable[Collection]) -> List[Tuple[str, int]]:
    """Flatten every product reference into (product id, collection-local index), in discovery order."""
    return [(ref.id, ref.index) for c in collections for ref in c.products]


def attach_indexes(
    products: Optional[Iterable[Product]],
    pairs: Sequence[Tuple[str, int]],
) -> List[Product]:
    # first occurrence of an id wins when it is referenced by several collections
    first_index: Dict[str, int] = {}
    for product_id, index in pairs:
        first_index.setdefault(product_id, index)

    return [p.with_index(first_index.get(p.id, 0)) for p in products or ()]


def sort_by_index(products: Iterable[Product]) -> List[Product]:
    return sorted(products, key=lambda p: p.index)


def enrich_collection(collection: Collection, pool: Iterable[Product]) -> Collection:
    by_id: Dict[str, Product] = {}
    for p in pool:
        by_id.setdefault(p.id, p)

    resolved: List[Product] = []
    for ref in collection.products:
        product = by_id.get(ref.id)
        if product is None:
            log.debug("Product %r in collection %r not in catalog; dropping", ref.id, collection.id)
            continue
        resolved.append(product.with_index(ref.index))

    return collection.with_products(sort_by_index(resolved))


async def enrich_featured_collections(
    collections: Optional[Iterable[Collection]],
    fetch_products: FetchProducts,
) -> List[Collection]:
    featured = featured_collections(collections)
    if not featured:
        log.debug("No published featured collections to enrich")
        return []

    pairs = product_index_pairs(featured)
    ids = list(dict.fromkeys(product_id for product_id, _ in pairs))

    products: Optional[List[Product]] = None
    if ids:
        products = await fetch_products(
            ids=ids,
            fields=FEATURED_PRODUCT_FIELDS,
            visibility=Visibility.PUBLISHED.value,
        )

    pool = attach_indexes(products, pairs)

    log.info(
        "Enriching %d featured collections (%d referenced products, %d fetched)",
        len(featured),
        len(ids),
        len(pool),
    )

    return [enrich_collection(c, pool) for c in featured]
