"""
Share views — the serializable payload for a selection of items and the
self-contained link that embeds it.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Iterable

from skytracker.config import SHARE_BASE_URL
from skytracker.data.store import InventoryStore


def build_share_payload(
    store: InventoryStore,
    title: str,
    description: str,
    show_values: bool,
    selected_ids: Iterable[str],
) -> dict:
    """Selected items with counts; values are None unless show_values is set.

    Unknown ids are skipped.
    """
    skylanders = []
    for item_id in dict.fromkeys(selected_ids):
        item = store.item(item_id)
        if item is None:
            continue
        rec = store.record(item_id)
        skylanders.append({
            "id": item.id,
            "name": item.name,
            "element": item.element,
            "category": item.category,
            "imageUrl": item.image_url,
            "count": rec.count,
            "value": rec.value if show_values else None,
        })
    return {
        "title": title,
        "description": description,
        "showValues": bool(show_values),
        "skylanders": skylanders,
    }


def owned_ids(store: InventoryStore) -> list[str]:
    """Every owned item id, in catalog order."""
    return [it.id for it in store.catalog if store.record(it.id).have]


def encode_share_link(payload: dict, base_url: str = SHARE_BASE_URL) -> str:
    """Base64 (URL-safe alphabet) JSON payload as the last path segment."""
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    token = base64.urlsafe_b64encode(raw).decode("ascii")
    return f"{base_url.rstrip('/')}/{token}"


def _link_token(link: str, base_url: str) -> str:
    prefix = base_url.rstrip("/") + "/"
    link = link.strip()
    if link.startswith(prefix):
        return link[len(prefix):]
    if "://" in link:
        return link.rstrip("/").rsplit("/", 1)[-1]
    return link


def decode_share_link(link: str, base_url: str = SHARE_BASE_URL) -> dict:
    """Recover the payload from a share link (or a bare token).

    The token is everything after ``base_url``; links on another host use
    their last path segment. Standard-alphabet base64 is accepted too.
    Raises ValueError when the token is not base64 JSON.
    """
    token = _link_token(link, base_url).replace("+", "-").replace("/", "_")
    token += "=" * (-len(token) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(token.encode("ascii")).decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise ValueError(f"Not a valid share link: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Not a valid share link: payload is not an object")
    return data
