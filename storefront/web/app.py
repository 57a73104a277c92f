# storefront/web/app.py

from typing import List, Optional
from contextlib import asynccontextmanager

import aiohttp
from fastapi import FastAPI, HTTPException, Request, Depends
from pydantic import BaseModel

from storefront.admin.alerts import AlertChannel
from storefront.admin.collection_index import CollectionIndexEditor
from storefront.admin.highlights import HighlightsEditor
from storefront.admin.overlay import OverlayStore
from storefront.api.gateway import CatalogGateway, HttpCatalogGateway
from storefront.catalog.pagination import parse_page_param
from storefront.config.storefront import StorefrontConfig
from storefront.models.product import Highlights, KeyPoint
from storefront.pipeline.category import run_category_pipeline
from storefront.pipeline.home import run_home_pipeline
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

CONFIG = StorefrontConfig.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ---- startup ----
    session = aiohttp.ClientSession()
    app.state.gateway = HttpCatalogGateway(session, CONFIG)
    log.info("Storefront API using backend at %s", CONFIG.api_base_url)

    yield
    # ---- shutdown ----
    await session.close()


app = FastAPI(title="Storefront", lifespan=lifespan)


def get_gateway(request: Request) -> CatalogGateway:
    return request.app.state.gateway


def get_config() -> StorefrontConfig:
    return CONFIG


def device_identifier(request: Request, config: StorefrontConfig = Depends(get_config)) -> str:
    return request.cookies.get(config.device_cookie, "")


class KeyPointBody(BaseModel):
    text: str
    index: int


class HighlightsBody(BaseModel):
    headline: str = ""
    keyPoints: List[KeyPointBody] = []


class CollectionIndexBody(BaseModel):
    index: str
    title: Optional[str] = None


@app.get("/api/home")
async def home_api(
    gateway: CatalogGateway = Depends(get_gateway),
    device_id: str = Depends(device_identifier),
    config: StorefrontConfig = Depends(get_config),
):
    home = await run_home_pipeline(gateway, device_identifier=device_id, config=config)
    return home.to_dict()


@app.get("/api/category/{name}")
async def category_api(
    name: str,
    page: Optional[str] = None,
    gateway: CatalogGateway = Depends(get_gateway),
    device_id: str = Depends(device_identifier),
    config: StorefrontConfig = Depends(get_config),
):
    category_page = await run_category_pipeline(
        gateway,
        name,
        parse_page_param(page),
        device_identifier=device_id,
        config=config,
    )
    return category_page.to_dict()


@app.post("/api/admin/products/{product_id}/highlights")
async def highlights_api(
    product_id: str,
    body: HighlightsBody,
    gateway: CatalogGateway = Depends(get_gateway),
):
    highlights = Highlights(
        headline=body.headline,
        key_points=tuple(KeyPoint(text=k.text, index=k.index) for k in body.keyPoints),
    )
    alerts = AlertChannel()
    editor = HighlightsEditor(
        product_id,
        highlights,
        gateway.update_product,
        overlays=OverlayStore(),
        alerts=alerts,
    )
    editor.open()
    result = await editor.save()
    return {"ok": result.ok, "alert": alerts.current.to_dict()}


@app.post("/api/admin/collections/{collection_id}/index")
async def collection_index_api(
    collection_id: str,
    body: CollectionIndexBody,
    gateway: CatalogGateway = Depends(get_gateway),
):
    alerts = AlertChannel()
    editor = CollectionIndexEditor(
        gateway.change_collection_index,
        overlays=OverlayStore(),
        alerts=alerts,
    )
    editor.select(collection_id, "", title=body.title or "")
    if not editor.set_index_input(body.index):
        raise HTTPException(422, "Index must contain digits only")

    result = await editor.save()
    return {"ok": result.ok, "alert": alerts.current.to_dict()}
