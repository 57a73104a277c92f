# storefront/admin/highlights.py

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from storefront.admin.alerts import AlertChannel
from storefront.admin.overlay import EDIT_PRODUCT_PAGE, HIGHLIGHTS, OverlayStore
from storefront.admin.result import Err, Ok, Result
from storefront.models.enums import AlertMessageType
from storefront.models.product import Highlights
from storefront.models.storefront import ActionResult
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

NEW_KEY_POINT_TEXT = "New Key Point"
UPDATE_FAILED_MESSAGE = "Failed to update product"

UpdateProduct = Callable[[Dict[str, Any]], Awaitable[ActionResult]]


@dataclass
class KeyPointItem:
    id: int
    name: str
    order: int


class HighlightsEditor:
    """
    Editable copy of a product's highlights: a headline plus ordered key points.

    Edits stay local until ``save``, which renumbers the key points 1..n in
    their current order and submits the whole highlights object at once.
    """

    def __init__(
        self,
        product_id: str,
        highlights: Highlights,
        update_product: UpdateProduct,
        *,
        overlays: OverlayStore,
        alerts: AlertChannel,
    ):
        self.product_id = product_id
        self.headline = highlights.headline
        self._update_product = update_product
        self._overlays = overlays
        self._alerts = alerts
        self.loading = False
        # item ids are local to this editor; reorder/remove address items by them
        self._ids = itertools.count(1)

        ordered = sorted(highlights.key_points, key=lambda k: k.index)
        self.items: List[KeyPointItem] = [
            KeyPointItem(id=next(self._ids), name=k.text, order=k.index) for k in ordered
        ]

    def open(self) -> None:
        self._overlays.show_overlay(EDIT_PRODUCT_PAGE, HIGHLIGHTS)

    def close(self) -> None:
        self.loading = False
        self._overlays.hide_overlay(EDIT_PRODUCT_PAGE, HIGHLIGHTS)

    def set_headline(self, html: str) -> None:
        self.headline = html

    def add(self) -> KeyPointItem:
        item = KeyPointItem(id=next(self._ids), name=NEW_KEY_POINT_TEXT, order=len(self.items) + 1)
        self.items.append(item)
        return item

    def remove(self, item_id: int) -> None:
        kept = [item for item in self.items if item.id != item_id]
        for position, item in enumerate(kept, start=1):
            item.order = position
        self.items = kept

    def edit(self, item_id: int, text: str) -> None:
        for item in self.items:
            if item.id == item_id:
                item.name = text
                return
        raise KeyError(f"No key point with id {item_id}")

    def reorder(self, item_ids: Sequence[int]) -> None:
        by_id = {item.id: item for item in self.items}
        if sorted(item_ids) != sorted(by_id):
            raise ValueError("reorder must list every key point exactly once")

        self.items = [by_id[i] for i in item_ids]
        for position, item in enumerate(self.items, start=1):
            item.order = position

    def build_patch(self) -> Dict[str, Any]:
        ordered = sorted(self.items, key=lambda item: item.order)
        return {
            "id": self.product_id,
            "highlights": {
                "headline": self.headline,
                "keyPoints": [
                    {"text": item.name, "index": position}
                    for position, item in enumerate(ordered, start=1)
                ],
            },
        }

    async def save(self) -> Result[ActionResult, Exception]:
        self.loading = True
        patch = self.build_patch()

        try:
            result = await self._update_product(patch)
        except Exception as e:
            log.exception("Error updating product %r: %s", self.product_id, e)
            self._alerts.show(UPDATE_FAILED_MESSAGE, AlertMessageType.ERROR)
            return Err(e)
        else:
            self._alerts.show(result.message, result.type)
            return Ok(result)
        finally:
            self.close()
