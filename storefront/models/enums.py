# storefront/models/enums.py

from enum import Enum


class CollectionType(str, Enum):
    FEATURED = "FEATURED"
    BANNER = "BANNER"


class Visibility(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    HIDDEN = "HIDDEN"
    VISIBLE = "VISIBLE"


class AlertMessageType(str, Enum):
    NEUTRAL = "NEUTRAL"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
