"""Notion REST client: creates a page from serialized blocks."""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from mdbridge.config.models import NotionConfig
from mdbridge.errors import NotionError
from mdbridge.notion.models import BlockRecord
from mdbridge.notion.payload import rich_text, to_notion_blocks

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.reason_phrase


class NotionClient:
    """Async Notion API client using httpx."""

    def __init__(self, config: NotionConfig, api_key: str | None = None) -> None:
        self.config = config
        self._api_key = api_key if api_key is not None else os.environ.get(config.api_key_env, "")
        self._base_url = config.base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Notion-Version": self.config.api_version,
            "Content-Type": "application/json",
        }

    async def _request(
        self, client: httpx.AsyncClient, method: str, path: str, payload: dict[str, Any], operation: str
    ) -> dict[str, Any]:
        try:
            resp = await client.request(
                method,
                f"{self._base_url}{path}",
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as e:
            raise NotionError(operation, e) from e

        if resp.is_error:
            raise NotionError(operation, _error_message(resp), status_code=resp.status_code)
        return resp.json()

    async def create_page(self, title: str, blocks: list[BlockRecord]) -> str:
        """Create a page in the configured database and return its id.

        The first ``batch_size`` blocks go with the page itself; the rest are
        appended in further batches, in order.
        """
        if not self.config.database_id:
            raise ValueError("notion.database_id is not configured")
        if not self._api_key:
            raise ValueError(f"Notion API key not found in ${self.config.api_key_env}")

        children = to_notion_blocks(blocks)
        size = self.config.batch_size
        first, rest = children[:size], children[size:]

        async with httpx.AsyncClient() as client:
            page = await self._request(
                client,
                "POST",
                "/pages",
                {
                    "parent": {"database_id": self.config.database_id},
                    "properties": {"title": {"title": rich_text(title)}},
                    "children": first,
                },
                "create_page",
            )
            page_id = page.get("id")
            if not page_id:
                raise NotionError("create_page", "no page id in response")

            for start in range(0, len(rest), size):
                await self._request(
                    client,
                    "PATCH",
                    f"/blocks/{page_id}/children",
                    {"children": rest[start:start + size]},
                    "append_blocks",
                )

        logger.info("created notion page %s (%d blocks)", page_id, len(children))
        return page_id
