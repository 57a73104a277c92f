# storefront/admin/collection_index.py

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from storefront.admin.alerts import AlertChannel
from storefront.admin.overlay import CHANGE_COLLECTION_INDEX, STOREFRONT_PAGE, OverlayStore
from storefront.admin.result import Err, Ok, Result
from storefront.models.enums import AlertMessageType
from storefront.models.storefront import ActionResult
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

CHANGE_FAILED_MESSAGE = "Failed to change product index"

_DIGITS_RE = re.compile(r"[0-9]*")

ChangeCollectionIndex = Callable[[str, int], Awaitable[ActionResult]]


def is_index_input(raw: str) -> bool:
    return _DIGITS_RE.fullmatch(raw) is not None


@dataclass
class SelectedCollection:
    id: str
    index: str
    title: str = ""


class CollectionIndexEditor:
    def __init__(
        self,
        change_collection_index: ChangeCollectionIndex,
        *,
        overlays: OverlayStore,
        alerts: AlertChannel,
    ):
        self._change_collection_index = change_collection_index
        self._overlays = overlays
        self._alerts = alerts
        self.selected: Optional[SelectedCollection] = None
        self.loading = False

    def select(self, id: str, index: str, title: str = "") -> None:
        self.selected = SelectedCollection(id=id, index=str(index), title=title)
        self._overlays.show_overlay(STOREFRONT_PAGE, CHANGE_COLLECTION_INDEX)

    def close(self) -> None:
        self._overlays.hide_overlay(STOREFRONT_PAGE, CHANGE_COLLECTION_INDEX)
        self.loading = False

    def set_index_input(self, raw: str) -> bool:
        """Keep ``raw`` only when it is digits (or empty); returns whether it was kept."""
        if self.selected is None:
            raise RuntimeError("No collection selected")
        if not is_index_input(raw):
            return False
        self.selected.index = raw
        return True

    async def save(self) -> Result[ActionResult, Exception]:
        if self.selected is None:
            raise RuntimeError("No collection selected")

        self.loading = True
        try:
            # an empty field submits 0
            index = int(self.selected.index or 0)
            result = await self._change_collection_index(self.selected.id, index)
        except Exception as e:
            log.exception("Error updating collection %r index: %s", self.selected.id, e)
            self._alerts.show(CHANGE_FAILED_MESSAGE, AlertMessageType.ERROR)
            return Err(e)
        else:
            self._alerts.show(result.message, result.type)
            return Ok(result)
        finally:
            self.close()
