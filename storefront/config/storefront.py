# storefront/config/storefront.py

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class StorefrontConfig:
    api_base_url: str = "http://localhost:3000/api"
    items_per_page: int = 2
    featured_min_products: int = 3
    discovery_exclude_top: int = 3
    timeout_seconds: int = 30
    max_retries: int = 2
    device_cookie: str = "device_identifier"

    def __post_init__(self) -> None:
        if self.items_per_page <= 0:
            raise ValueError("items_per_page must be > 0")
        if self.featured_min_products < 1:
            raise ValueError("featured_min_products must be >= 1")
        if self.discovery_exclude_top < 0:
            raise ValueError("discovery_exclude_top must be >= 0")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

    @classmethod
    def from_env(cls) -> "StorefrontConfig":
        defaults = cls()
        return cls(
            api_base_url=os.getenv("STOREFRONT_API_BASE_URL", defaults.api_base_url),
            items_per_page=int(os.getenv("STOREFRONT_ITEMS_PER_PAGE", defaults.items_per_page)),
            featured_min_products=int(
                os.getenv("STOREFRONT_FEATURED_MIN_PRODUCTS", defaults.featured_min_products)
            ),
            discovery_exclude_top=int(
                os.getenv("STOREFRONT_DISCOVERY_EXCLUDE_TOP", defaults.discovery_exclude_top)
            ),
            timeout_seconds=int(os.getenv("STOREFRONT_TIMEOUT_SECONDS", defaults.timeout_seconds)),
            max_retries=int(os.getenv("STOREFRONT_MAX_RETRIES", defaults.max_retries)),
            device_cookie=os.getenv("STOREFRONT_DEVICE_COOKIE", defaults.device_cookie),
        )
