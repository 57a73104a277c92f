# storefront/cli/render_page.py
from __future__ import annotations

import argparse
import asyncio
from typing import Optional

import aiohttp

from storefront.api.gateway import HttpCatalogGateway
from storefront.catalog.pagination import parse_page_param
from storefront.config.storefront import StorefrontConfig
from storefront.models.product import Product
from storefront.pipeline.category import CategoryPage, run_category_pipeline
from storefront.pipeline.home import HomePage, run_home_pipeline
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)


def _fmt_money(x: Optional[float]) -> str:
    if x is None:
        return "-"
    return f"${x:,.2f}"


def _print_products(products: list[Product]) -> None:
    print(f"  {'#':>3}  {'PRODUCT':40}  {'BASE':>10}  {'SALE':>10}  {'SLUG'}")
    print("  " + "-" * 90)
    for p in products:
        print(
            f"  {p.index:>3}  {p.name[:40]:40}  {_fmt_money(p.pricing.base_price):>10}  "
            f"{_fmt_money(p.pricing.sale_price):>10}  {p.slug}"
        )


def print_category_page(page: CategoryPage) -> None:
    print(f"\n{page.display_name}  (page {page.current_page} of {page.total_pages})")
    print("=" * 94)
    if page.is_empty:
        print("No products found in this category.")
        return
    _print_products(page.products)


def print_home_page(home: HomePage) -> None:
    print("\nHome")
    print("=" * 94)
    if home.hero:
        print(f"Hero: {home.hero.title} -> {home.hero.destination_url}")
    if home.categories:
        print("Categories: " + ", ".join(c.name for c in home.categories))

    if not home.sections:
        print("No collections to show.")

    for section in home.sections:
        c = section.collection
        print(f"\n[{section.kind.value}] {c.title} (index={c.index}, {len(c.products)} products)")
        if c.is_enriched:
            _print_products(list(c.products))

    if home.discovery_exclude_ids:
        print(f"\nExcluded from discovery: {', '.join(home.discovery_exclude_ids)}")


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="storefront-render",
        description="Assemble a storefront page from the backend and print a summary.",
    )
    sub = p.add_subparsers(dest="page", required=True)

    sub.add_parser("home", help="Render the home page")

    cat = sub.add_parser("category", help="Render one page of a category")
    cat.add_argument("name", help="Category name (e.g. tops, men, catch-all)")
    cat.add_argument("--page", default=None, help="Page number (default: 1)")

    p.add_argument("--device", default="", help="Device identifier used to load a cart")
    p.add_argument("--api", default=None, help="Backend API base URL (default: STOREFRONT_API_BASE_URL)")
    return p


async def _amain(args) -> int:
    config = StorefrontConfig.from_env()
    if args.api:
        config.api_base_url = args.api

    log.info("Rendering %s page from %s", args.page, config.api_base_url)

    async with aiohttp.ClientSession() as session:
        gateway = HttpCatalogGateway(session, config)

        if args.page == "home":
            home = await run_home_pipeline(gateway, device_identifier=args.device, config=config)
            print_home_page(home)
        else:
            page = await run_category_pipeline(
                gateway,
                args.name,
                parse_page_param(args.page),
                device_identifier=args.device,
                config=config,
            )
            print_category_page(page)

    return 0


def main() -> int:
    parser = build_argparser()
    args = parser.parse_args()
    return asyncio.run(_amain(args))


if __name__ == "__main__":
    raise SystemExit(main())
