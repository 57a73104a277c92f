from storefront.catalog.enrich import enrich_collection
from storefront.catalog.render import render_categories, render_collection, render_hero, render_sections
from storefront.models.enums import CollectionType
from storefront.models.storefront import CategoriesData, PageHero

from conftest import collection_row, collections, products


def _featured(n):
    refs = [(f"p{i}", i) for i in range(n)]
    (col,) = collections(collection_row("f1", refs=refs))
    return enrich_collection(col, products(*(pid for pid, _ in refs)))


def test_featured_with_two_products_does_not_render():
    assert render_collection(_featured(2)) is None


def test_featured_with_three_products_renders():
    section = render_collection(_featured(3))
    assert section is not None
    assert section.kind is CollectionType.FEATURED


def test_featured_threshold_is_configurable():
    assert render_collection(_featured(2), featured_min_products=2) is not None


def test_banner_needs_a_product():
    (empty, full) = collections(
        collection_row("b1", "BANNER"),
        collection_row("b2", "BANNER", refs=[("a", 1)]),
    )
    assert render_collection(empty) is None
    assert render_collection(full).kind is CollectionType.BANNER


def test_other_types_never_render():
    (col,) = collections(collection_row("x1", "CAROUSEL", refs=[("a", 1), ("b", 2), ("c", 3)]))
    assert render_collection(col) is None


def test_render_sections_filters_out_nothing_sections():
    (banner,) = collections(collection_row("b1", "BANNER", refs=[("a", 1)]))
    sections = render_sections([_featured(1), banner, _featured(4)])
    assert [s.kind for s in sections] == [CollectionType.BANNER, CollectionType.FEATURED]


def test_hero_requires_visibility_and_both_images():
    base = {"title": "Sale", "destinationUrl": "/sale", "visibility": "VISIBLE"}

    full = PageHero.from_dict({**base, "images": {"desktop": "d.jpg", "mobile": "m.jpg"}})
    assert render_hero(full) is full

    assert render_hero(PageHero.from_dict({**base, "images": {"desktop": "d.jpg"}})) is None
    assert render_hero(PageHero.from_dict({**base, "images": {"mobile": "m.jpg"}})) is None
    hidden = PageHero.from_dict({**base, "visibility": "HIDDEN", "images": {"desktop": "d", "mobile": "m"}})
    assert render_hero(hidden) is None
    assert render_hero(None) is None


def test_categories_only_when_shown_publicly():
    data = {"showOnPublicSite": True, "categories": [{"name": "Tops", "index": 1}]}
    assert [c.name for c in render_categories(CategoriesData.from_dict(data))] == ["Tops"]

    hidden = CategoriesData.from_dict({**data, "showOnPublicSite": False})
    assert render_categories(hidden) == []
    assert render_categories(None) == []
