"""Weibo hot-search list fetcher (TianAPI)."""
from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from generation_engine.config import Settings
from generation_engine.errors import FetchError
from generation_engine.models import TopicRecord

logger = logging.getLogger(__name__)


def parse_hot_list(payload: object) -> List[TopicRecord]:
    """Convert a TianAPI response body into ranked topic records.

    Expected shape: ``{"code": 200, "result": {"list": [{"hotword", "hotwordnum"}, ...]}}``.
    Entries without a title are skipped.
    """
    if not isinstance(payload, dict):
        raise FetchError(f"Unexpected response body type: {type(payload).__name__}")

    if payload.get("code") != 200:
        raise FetchError(f"Topic API returned error code {payload.get('code')}: {payload.get('msg', '')}")

    result = payload.get("result")
    items = result.get("list") if isinstance(result, dict) else None
    if not isinstance(items, list):
        raise FetchError("Topic API response has no result.list")

    topics: List[TopicRecord] = []
    for row in items:
        if not isinstance(row, dict):
            continue
        name = str(row.get("hotword") or "").strip()
        if not name:
            logger.warning(f"Skipping hot-list entry without a title: {row}")
            continue
        popularity = row.get("hotwordnum")
        topics.append(TopicRecord(name=name, popularity="" if popularity is None else str(popularity).strip()))
    return topics


def fetch_hot_topics(settings: Settings, client: Optional[httpx.Client] = None) -> List[TopicRecord]:
    """Fetch the current hot-search list in source ranking order.

    Failures are not retried; any transport, status or body problem raises
    :class:`FetchError`.
    """
    logger.info("📡 Fetching Weibo hot-search list...")
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout)
    try:
        response = client.get(settings.topic_source_url, params={"key": settings.tianapi_key})
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        # The request URL carries the API key, so keep it out of the message.
        raise FetchError(f"Topic API responded with HTTP {exc.response.status_code}") from None
    except httpx.HTTPError as exc:
        raise FetchError(f"Topic API request failed: {exc}") from exc
    except ValueError as exc:
        raise FetchError(f"Topic API returned invalid JSON: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    topics = parse_hot_list(payload)
    logger.info(f"Fetched {len(topics)} hot topics")
    return topics
