from typing import Any, Dict, List, Optional, Sequence

import pytest

from storefront.api.gateway import CatalogGateway
from storefront.models.collection import Collection, parse_collection
from storefront.models.product import Product
from storefront.models.storefront import ActionResult, CategoriesData, Cart, PageHero
from storefront.models.enums import AlertMessageType


def product_row(id: str, name: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    row = {
        "id": id,
        "name": name or f"Product {id}",
        "slug": f"product-{id}",
        "description": "",
        "pricing": {"basePrice": 50, "salePrice": 40, "discountPercentage": 20},
        "images": {"main": f"https://cdn.example.com/{id}.jpg", "gallery": []},
        "visibility": "PUBLISHED",
    }
    row.update(extra)
    return row


def collection_row(
    id: str,
    collection_type: str = "FEATURED",
    *,
    index: int = 0,
    visibility: str = "PUBLISHED",
    refs: Sequence[tuple] = (),
    **extra: Any,
) -> Dict[str, Any]:
    row = {
        "id": id,
        "index": index,
        "title": f"Collection {id}",
        "slug": f"collection-{id}",
        "collectionType": collection_type,
        "visibility": visibility,
        "products": [{"id": pid, "index": i} for pid, i in refs],
    }
    row.update(extra)
    return row


def products(*ids: str) -> List[Product]:
    return [Product.from_dict(product_row(i)) for i in ids]


def collections(*rows: Dict[str, Any]) -> List[Collection]:
    return [parse_collection(r) for r in rows]


class FakeGateway(CatalogGateway):
    def __init__(
        self,
        *,
        products: Optional[List[Product]] = None,
        collections: Optional[List[Collection]] = None,
        categories: Optional[CategoriesData] = None,
        hero: Optional[PageHero] = None,
        cart: Optional[Cart] = None,
        action_result: Optional[ActionResult] = None,
        action_error: Optional[Exception] = None,
    ):
        self.products = products
        self.collections = collections
        self.categories = categories
        self.hero = hero
        self.cart = cart
        self.action_result = action_result or ActionResult(AlertMessageType.SUCCESS, "Saved")
        self.action_error = action_error
        self.product_calls: List[Dict[str, Any]] = []
        self.cart_calls: List[str] = []
        self.updates: List[Dict[str, Any]] = []
        self.index_changes: List[tuple] = []

    async def get_products(self, *, category=None, ids=None, fields=(), visibility=None):
        self.product_calls.append(
            {"category": category, "ids": ids, "fields": tuple(fields), "visibility": visibility}
        )
        if self.products is None:
            return None
        if ids is not None:
            return [p for p in self.products if p.id in ids]
        return list(self.products)

    async def get_collections(self, *, fields=(), visibility=None):
        return self.collections

    async def get_categories(self, *, visibility=None):
        return self.categories

    async def get_page_hero(self):
        return self.hero

    async def get_cart(self, device_identifier):
        self.cart_calls.append(device_identifier)
        return self.cart

    async def update_product(self, patch):
        self.updates.append(patch)
        if self.action_error:
            raise self.action_error
        return self.action_result

    async def change_collection_index(self, id, index):
        self.index_changes.append((id, index))
        if self.action_error:
            raise self.action_error
        return self.action_result


@pytest.fixture
def fake_gateway():
    return FakeGateway()
