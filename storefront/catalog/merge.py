# storefront/catalog/merge.py

from typing import Iterable, List, Optional

from storefront.models.collection import Collection


def merge_collections(
    enriched_featured: Iterable[Collection],
    collections: Optional[Iterable[Collection]],
) -> List[Collection]:
    """
    Combine enriched featured collections with every non-featured collection,
    ordered by the collection's own ``index`` (stable on ties).
    """
    others = [c for c in collections or () if not c.is_featured]
    combined = [*enriched_featured, *others]
    return sorted(combined, key=lambda c: c.index)


def discovery_exclusion_ids(collections: Iterable[Collection], limit: int = 3) -> List[str]:
    """Ids of the leading products of every featured collection, without duplicates."""
    ids = [
        p.id
        for c in collections
        if c.is_featured
        for p in sorted(c.products, key=lambda p: p.index)[:limit]
    ]
    # dedupe preserve order
    return list(dict.fromkeys(ids))
