import asyncio
import json

import aiohttp
import pytest

from storefront.api import gateway as gateway_mod
from storefront.api.gateway import HttpCatalogGateway, parse_object, parse_rows
from storefront.config.storefront import StorefrontConfig
from storefront.models.enums import AlertMessageType
from storefront.models.product import Product
from storefront.models.storefront import PageHero

from conftest import collection_row, product_row


@pytest.fixture
def http_gateway():
    return HttpCatalogGateway(session=None, config=StorefrontConfig(api_base_url="http://backend.test/api/"))


def _serve(monkeypatch, responses, calls):
    async def fake_fetch_json(session, url, params=None, **kwargs):
        calls.append((url, params))
        body = responses[url]
        if isinstance(body, Exception):
            raise body
        return body

    monkeypatch.setattr(gateway_mod, "fetch_json", fake_fetch_json)


def test_parse_rows_skips_malformed():
    rows = [product_row("a"), {"name": "no id"}, product_row("b")]
    parsed = parse_rows(rows, Product.from_dict, "product")
    assert [p.id for p in parsed] == ["a", "b"]


def test_parse_rows_null_and_non_list():
    assert parse_rows(None, Product.from_dict, "product") is None
    assert parse_rows({"id": "a"}, Product.from_dict, "product") is None


async def test_get_products_sends_filters(monkeypatch, http_gateway):
    calls = []
    _serve(monkeypatch, {"http://backend.test/api/products": json.dumps([product_row("a")])}, calls)

    result = await http_gateway.get_products(ids=["a", "b"], fields=("name", "slug"), visibility="PUBLISHED")

    assert [p.id for p in result] == ["a"]
    url, params = calls[0]
    assert params == {"ids": "a,b", "fields": "id,name,slug", "visibility": "PUBLISHED"}


async def test_get_collections_parses_variants(monkeypatch, http_gateway):
    body = json.dumps([collection_row("f1"), collection_row("b1", "BANNER"), {"title": "broken"}])
    _serve(monkeypatch, {"http://backend.test/api/collections": body}, [])

    result = await http_gateway.get_collections(fields=("title",), visibility="PUBLISHED")

    assert [(c.id, c.collection_type) for c in result] == [("f1", "FEATURED"), ("b1", "BANNER")]


@pytest.mark.parametrize(
    "failure",
    [
        aiohttp.ClientConnectionError("refused"),
        asyncio.TimeoutError(),
        "not json",
        "",
    ],
)
async def test_read_failures_map_to_none(monkeypatch, http_gateway, failure):
    _serve(monkeypatch, {"http://backend.test/api/collections": failure}, [])
    assert await http_gateway.get_collections() is None


async def test_hero_and_categories(monkeypatch, http_gateway):
    hero = {"title": "Sale", "visibility": "VISIBLE", "images": {"desktop": "d", "mobile": "m"}}
    cats = {"showOnPublicSite": True, "categories": [{"name": "Tops"}]}
    _serve(
        monkeypatch,
        {
            "http://backend.test/api/page-hero": json.dumps(hero),
            "http://backend.test/api/categories": json.dumps(cats),
        },
        [],
    )

    assert (await http_gateway.get_page_hero()).mobile_image == "m"
    assert (await http_gateway.get_categories(visibility="VISIBLE")).show_on_public_site


async def test_cart_requires_device_identifier(monkeypatch, http_gateway):
    calls = []
    _serve(monkeypatch, {"http://backend.test/api/carts/dev%2F1": json.dumps({"items": []})}, calls)

    assert await http_gateway.get_cart("") is None
    assert calls == []

    cart = await http_gateway.get_cart("dev/1")
    assert cart.device_identifier == "dev/1"


async def test_mutations_post_and_parse_result(monkeypatch, http_gateway):
    posted = []

    async def fake_post_json(session, url, payload, **kwargs):
        posted.append((url, payload))
        return json.dumps({"type": "SUCCESS", "message": "Collection updated"})

    monkeypatch.setattr(gateway_mod, "post_json", fake_post_json)

    result = await http_gateway.change_collection_index("c1", 4)

    assert result.type is AlertMessageType.SUCCESS
    assert posted == [("http://backend.test/api/collections/index", {"id": "c1", "index": 4})]


async def test_mutation_errors_propagate(monkeypatch, http_gateway):
    async def fake_post_json(session, url, payload, **kwargs):
        raise aiohttp.ClientConnectionError("refused")

    monkeypatch.setattr(gateway_mod, "post_json", fake_post_json)

    with pytest.raises(aiohttp.ClientError):
        await http_gateway.update_product({"id": "p1"})


async def test_get_products_skips_rows_with_malformed_nested_fields(monkeypatch, http_gateway):
    rows = [
        product_row("a"),
        product_row("b", options=["S", "M"]),
        product_row("c", highlights={"headline": "", "keyPoints": [None]}),
        product_row("d", images=["d.jpg"]),
        product_row("e", pricing=[50]),
        product_row("f", options={"size": ["S", "M"]}),
    ]
    _serve(monkeypatch, {"http://backend.test/api/products": json.dumps(rows)}, [])

    result = await http_gateway.get_products(ids=list("abcdef"))

    assert [p.id for p in result] == ["a", "f"]


async def test_get_collections_skips_rows_with_malformed_nested_fields(monkeypatch, http_gateway):
    rows = [
        collection_row("ok", refs=[("a", 1)]),
        collection_row("bad-products", products={"id": "a"}),
        collection_row("bad-banner", "BANNER", bannerImages=["d.jpg"]),
        collection_row("bad-campaign", campaignDuration="2025-01-01"),
        collection_row("bad-index", index=1.5),
    ]
    _serve(monkeypatch, {"http://backend.test/api/collections": json.dumps(rows)}, [])

    result = await http_gateway.get_collections()

    assert [c.id for c in result] == ["ok"]


async def test_malformed_hero_reads_as_missing(monkeypatch, http_gateway):
    hero = {"title": "Sale", "visibility": "VISIBLE", "images": ["d.jpg"]}
    _serve(monkeypatch, {"http://backend.test/api/page-hero": json.dumps(hero)}, [])

    assert await http_gateway.get_page_hero() is None


async def test_categories_drop_malformed_entries(monkeypatch, http_gateway):
    cats = {"showOnPublicSite": True, "categories": [{"name": "Tops"}, None, "Men"]}
    _serve(monkeypatch, {"http://backend.test/api/categories": json.dumps(cats)}, [])

    result = await http_gateway.get_categories()

    assert [c.name for c in result.categories] == ["Tops"]


async def test_categories_with_non_list_entries_read_as_missing(monkeypatch, http_gateway):
    cats = {"showOnPublicSite": True, "categories": {"name": "Tops"}}
    _serve(monkeypatch, {"http://backend.test/api/categories": json.dumps(cats)}, [])

    assert await http_gateway.get_categories() is None


def test_parse_object_maps_malformed_payload_to_none():
    assert parse_object({"images": "d.jpg", "title": "x"}, PageHero.from_dict, "page hero") is None
    assert parse_object([{"title": "x"}], PageHero.from_dict, "page hero") is None
    assert parse_object({"title": "x"}, PageHero.from_dict, "page hero").title == "x"
