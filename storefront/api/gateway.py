# storefront/api/gateway.py

from __future__ import annotations

import abc
import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar
from urllib.parse import quote

import aiohttp

from storefront.config.storefront import StorefrontConfig
from storefront.http.client import fetch_json, post_json
from storefront.models.collection import Collection, parse_collection
from storefront.models.product import Product
from storefront.models.storefront import ActionResult, CategoriesData, Cart, PageHero
from storefront.models.validation import ValidationError
from storefront.utils.json import safe_loads
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

T = TypeVar("T")


class CatalogGateway(abc.ABC):
    """
    Read and mutation actions owned by the storefront backend.

    Reads return ``None`` when the backend has nothing (or could not be
    reached); callers treat ``None`` as empty.
    """

    @abc.abstractmethod
    async def get_products(
        self,
        *,
        category: Optional[str] = None,
        ids: Optional[Sequence[str]] = None,
        fields: Sequence[str] = (),
        visibility: Optional[str] = None,
    ) -> Optional[List[Product]]: ...

    @abc.abstractmethod
    async def get_collections(
        self,
        *,
        fields: Sequence[str] = (),
        visibility: Optional[str] = None,
    ) -> Optional[List[Collection]]: ...

    @abc.abstractmethod
    async def get_categories(self, *, visibility: Optional[str] = None) -> Optional[CategoriesData]: ...

    @abc.abstractmethod
    async def get_page_hero(self) -> Optional[PageHero]: ...

    @abc.abstractmethod
    async def get_cart(self, device_identifier: str) -> Optional[Cart]: ...

    @abc.abstractmethod
    async def update_product(self, patch: Dict[str, Any]) -> ActionResult: ...

    @abc.abstractmethod
    async def change_collection_index(self, id: str, index: int) -> ActionResult: ...


def parse_rows(rows: Any, parse: Callable[[Dict[str, Any]], T], what: str) -> Optional[List[T]]:
    """Validate a list payload row by row; malformed rows are skipped."""
    if rows is None:
        return None
    if not isinstance(rows, list):
        log.warning("Expected a list of %s, got %s", what, type(rows).__name__)
        return None

    out: List[T] = []
    for row in rows:
        try:
            out.append(parse(row))
        except ValidationError as e:
            log.warning("Skipping malformed %s row: %s", what, e)
    return out


def parse_object(data: Any, parse: Callable[[Dict[str, Any]], T], what: str) -> Optional[T]:
    """Validate a single-object payload; a malformed one reads as missing."""
    if not isinstance(data, dict):
        return None
    try:
        return parse(data)
    except ValidationError as e:
        log.warning("Discarding malformed %s payload: %s", what, e)
        return None


class HttpCatalogGateway(CatalogGateway):
    def __init__(self, session: aiohttp.ClientSession, config: Optional[StorefrontConfig] = None):
        self._session = session
        self._config = config or StorefrontConfig()
        self._base_url = self._config.api_base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = self._url(path)
        try:
            text = await fetch_json(
                self._session,
                url,
                params={k: v for k, v in (params or {}).items() if v is not None},
                timeout_s=self._config.timeout_seconds,
                retries=self._config.max_retries,
            )
            return safe_loads(text)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warning("Request to %s failed: %r", url, e)
        except ValueError as e:
            log.warning("Invalid JSON from %s: %s", url, e)
        return None

    async def _post(self, path: str, payload: Dict[str, Any]) -> ActionResult:
        text = await post_json(
            self._session,
            self._url(path),
            payload,
            timeout_s=self._config.timeout_seconds,
        )
        return ActionResult.from_dict(safe_loads(text) or {})

    async def get_products(
        self,
        *,
        category: Optional[str] = None,
        ids: Optional[Sequence[str]] = None,
        fields: Sequence[str] = (),
        visibility: Optional[str] = None,
    ) -> Optional[List[Product]]:
        # the id is always needed to join products back to collections
        wanted = list(dict.fromkeys(["id", *fields]))
        params = {
            "category": category,
            "ids": ",".join(ids) if ids else None,
            "fields": ",".join(wanted),
            "visibility": visibility,
        }
        rows = await self._get("products", params)
        return parse_rows(rows, Product.from_dict, "product")

    async def get_collections(
        self,
        *,
        fields: Sequence[str] = (),
        visibility: Optional[str] = None,
    ) -> Optional[List[Collection]]:
        params = {
            "fields": ",".join(fields) if fields else None,
            "visibility": visibility,
        }
        rows = await self._get("collections", params)
        return parse_rows(rows, parse_collection, "collection")

    async def get_categories(self, *, visibility: Optional[str] = None) -> Optional[CategoriesData]:
        data = await self._get("categories", {"visibility": visibility})
        return parse_object(data, CategoriesData.from_dict, "categories")

    async def get_page_hero(self) -> Optional[PageHero]:
        data = await self._get("page-hero")
        return parse_object(data, PageHero.from_dict, "page hero")

    async def get_cart(self, device_identifier: str) -> Optional[Cart]:
        if not device_identifier:
            return None
        data = await self._get(f"carts/{quote(device_identifier, safe='')}")
        return parse_object(data, lambda d: Cart.from_dict(d, device_identifier=device_identifier), "cart")

    async def update_product(self, patch: Dict[str, Any]) -> ActionResult:
        log.info("Updating product %r", patch.get("id"))
        return await self._post("products/update", patch)

    async def change_collection_index(self, id: str, index: int) -> ActionResult:
        log.info("Changing collection %r index to %d", id, index)
        return await self._post("collections/index", {"id": id, "index": index})
