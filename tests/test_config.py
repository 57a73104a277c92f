import pytest

from storefront.config.storefront import StorefrontConfig


def test_defaults():
    config = StorefrontConfig()
    assert config.items_per_page == 2
    assert config.featured_min_products == 3
    assert config.discovery_exclude_top == 3
    assert config.device_cookie == "device_identifier"


def test_from_env(monkeypatch):
    monkeypatch.setenv("STOREFRONT_API_BASE_URL", "https://shop.test/api")
    monkeypatch.setenv("STOREFRONT_ITEMS_PER_PAGE", "12")
    monkeypatch.setenv("STOREFRONT_MAX_RETRIES", "0")

    config = StorefrontConfig.from_env()

    assert config.api_base_url == "https://shop.test/api"
    assert config.items_per_page == 12
    assert config.max_retries == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"items_per_page": 0},
        {"featured_min_products": 0},
        {"discovery_exclude_top": -1},
        {"timeout_seconds": 0},
        {"max_retries": -1},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        StorefrontConfig(**kwargs)
