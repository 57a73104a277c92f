# storefront/http/client.py

import asyncio
from typing import Dict, Any, Literal

import aiohttp

from storefront.http.backoff import backoff_seconds
from storefront.logging.logger import setup_logger

log = setup_logger(__name__)

_RETRYABLE_STATUSES = {429, 500, 502, 503, 504}

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip, deflate",
}


def _retry_after(resp: aiohttp.ClientResponse, attempt: int) -> float:
    retry_after = resp.headers.get("Retry-After")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            pass
    return backoff_seconds(attempt)


async def _fetch(
    session: aiohttp.ClientSession,
    method: Literal["GET", "POST"],
    url: str,
    params: Dict[str, Any] | None = None,
    payload: Dict[str, Any] | None = None,
    *,
    timeout_s: int = 30,
    retries: int = 2,
) -> str:
    """Core request logic shared by fetch_json and post_json."""
    timeout = aiohttp.ClientTimeout(total=timeout_s)

    kwargs: Dict[str, Any] = {
        "headers": dict(_DEFAULT_HEADERS),
        "timeout": timeout,
    }
    if params:
        kwargs["params"] = params
    if method == "POST" and payload is not None:
        kwargs["json"] = payload

    for attempt in range(retries + 1):
        try:
            async with session.request(method, url, **kwargs) as resp:
                if resp.status in _RETRYABLE_STATUSES and attempt < retries:
                    wait_s = _retry_after(resp, attempt)
                    log.warning(
                        "HTTP %d for %s; retrying in %.2fs (attempt=%d/%d)",
                        resp.status, url, wait_s, attempt, retries,
                    )
                    await asyncio.sleep(wait_s)
                    continue

                resp.raise_for_status()
                text = await resp.text()
        except asyncio.TimeoutError:
            if attempt < retries:
                wait_s = backoff_seconds(attempt)
                log.warning("Timeout while requesting %s; retrying in %.2fs (attempt=%d/%d)", url, wait_s, attempt, retries)
                await asyncio.sleep(wait_s)
                continue
            log.warning("Timeout while requesting %s (giving up)", url)
            raise
        except aiohttp.ClientResponseError as e:
            log.warning("HTTP error %s for %s %s", e.status, method, url)
            raise

        log.debug("Received %d characters from %s (status=%d, method=%s)", len(text), url, resp.status, method)
        return text

    raise RuntimeError(f"Failed to fetch after {retries} retries: {url}")


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    params: Dict[str, Any] | None = None,
    *,
    timeout_s: int = 30,
    retries: int = 2,
) -> str:
    return await _fetch(
        session, "GET", url, params,
        timeout_s=timeout_s, retries=retries,
    )


async def post_json(
    session: aiohttp.ClientSession,
    url: str,
    payload: Dict[str, Any],
    *,
    timeout_s: int = 30,
    retries: int = 0,
) -> str:
    return await _fetch(
        session, "POST", url, None, payload,
        timeout_s=timeout_s, retries=retries,
    )
