# storefront/models/storefront.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from storefront.models.enums import AlertMessageType
from storefront.models.validation import ValidationError, as_int, as_list, as_mapping
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)


@dataclass(frozen=True)
class PageHero:
    title: str = ""
    destination_url: str = ""
    visibility: Optional[str] = None
    desktop_image: Optional[str] = None
    mobile_image: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["PageHero"]:
        if not d:
            return None
        d = as_mapping(d, "page hero")
        images = as_mapping(d.get("images"), "page hero images")
        return cls(
            title=d.get("title") or "",
            destination_url=d.get("destinationUrl") or "",
            visibility=d.get("visibility"),
            desktop_image=images.get("desktop") or None,
            mobile_image=images.get("mobile") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "destinationUrl": self.destination_url,
            "visibility": self.visibility,
            "images": {"desktop": self.desktop_image, "mobile": self.mobile_image},
        }


@dataclass(frozen=True)
class Category:
    name: str
    index: int = 0
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Category":
        if not isinstance(d, Mapping):
            raise ValidationError(f"category must be an object, got {type(d).__name__}")
        return cls(
            name=d.get("name") or "",
            index=as_int(d.get("index")),
            image=d.get("image"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "index": self.index, "image": self.image}


@dataclass(frozen=True)
class CategoriesData:
    show_on_public_site: bool = False
    categories: Tuple[Category, ...] = ()

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> Optional["CategoriesData"]:
        if not d:
            return None
        d = as_mapping(d, "categories")

        categories = []
        for raw in as_list(d.get("categories"), "categories"):
            try:
                categories.append(Category.from_dict(raw))
            except ValidationError as e:
                log.warning("Dropping malformed category: %s", e)

        return cls(
            show_on_public_site=bool(d.get("showOnPublicSite")),
            categories=tuple(categories),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "showOnPublicSite": self.show_on_public_site,
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True)
class Cart:
    """Opaque cart payload threaded through to rendering; never modified here."""

    device_identifier: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def item_count(self) -> int:
        return len(self.raw.get("items") or ())

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]], device_identifier: str = "") -> Optional["Cart"]:
        if not d:
            return None
        return cls(device_identifier=device_identifier, raw=dict(as_mapping(d, "cart")))

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


@dataclass(frozen=True)
class ActionResult:
    type: AlertMessageType
    message: str

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ActionResult":
        try:
            kind = AlertMessageType(d.get("type"))
        except ValueError:
            kind = AlertMessageType.NEUTRAL
        return cls(type=kind, message=d.get("message") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "message": self.message}
