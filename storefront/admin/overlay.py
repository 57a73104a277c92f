# storefront/admin/overlay.py

from typing import Dict, Iterable, Optional, Tuple

from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

STOREFRONT_PAGE = "storefront"
EDIT_PRODUCT_PAGE = "editProduct"

CHANGE_COLLECTION_INDEX = "changeCollectionIndex"
HIGHLIGHTS = "highlights"

DEFAULT_OVERLAYS: Tuple[Tuple[str, str], ...] = (
    (STOREFRONT_PAGE, CHANGE_COLLECTION_INDEX),
    (EDIT_PRODUCT_PAGE, HIGHLIGHTS),
)


class OverlayStore:
    """
    Visibility table for admin overlays, keyed by (page, overlay).

    One instance per admin session; hand it to whatever needs to open or
    close an overlay.
    """

    def __init__(self, overlays: Optional[Iterable[Tuple[str, str]]] = None):
        keys = DEFAULT_OVERLAYS if overlays is None else overlays
        self._visible: Dict[Tuple[str, str], bool] = {key: False for key in keys}

    def _key(self, page: str, overlay: str) -> Tuple[str, str]:
        key = (page, overlay)
        if key not in self._visible:
            raise KeyError(f"Unknown overlay {overlay!r} on page {page!r}")
        return key

    def show_overlay(self, page: str, overlay: str) -> None:
        self._visible[self._key(page, overlay)] = True
        log.debug("Overlay shown: %s/%s", page, overlay)

    def hide_overlay(self, page: str, overlay: str) -> None:
        self._visible[self._key(page, overlay)] = False
        log.debug("Overlay hidden: %s/%s", page, overlay)

    def is_visible(self, page: str, overlay: str) -> bool:
        return self._visible[self._key(page, overlay)]

    def any_visible(self) -> bool:
        return any(self._visible.values())
