"""Durable cache of image URLs for products and raw materials.

The backend does not always echo ``imagemUrl`` back, so the client keeps
the URL it submitted under the record's natural identifier (product code,
material name) and fills it back in after a load.
"""

import json
import logging
from typing import Any, Callable, TypeVar

from inventory_client.normalizers import normalize_optional_string
from inventory_client.storage import KeyValueStore

logger = logging.getLogger(__name__)

PRODUCT_IMAGE_CACHE_KEY = "vc_product_images"
MATERIAL_IMAGE_CACHE_KEY = "vc_material_images"

T = TypeVar("T")


class ImageCache:
    """Identifier -> URL mapping stored as one JSON string."""

    def __init__(self, storage: KeyValueStore, key: str) -> None:
        self._storage = storage
        self.key = key

    def load(self) -> dict[str, str]:
        raw = self._storage.get(self.key)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable image cache %s", self.key)
            return {}
        return data if isinstance(data, dict) else {}

    def remember(self, identifier: Any, url: str | None) -> None:
        safe_url = normalize_optional_string(url)
        if identifier in (None, "") or not safe_url:
            return
        cache = self.load()
        cache[str(identifier)] = safe_url
        self._storage.set(self.key, json.dumps(cache, ensure_ascii=False))

    def merge(self, records: list[T], identifier_of: Callable[[T], Any]) -> list[T]:
        """Fill ``image_url`` on records that came back without one."""
        cache = self.load()
        if not cache:
            return records
        for record in records:
            identifier = identifier_of(record)
            cached = cache.get(str(identifier)) if identifier not in (None, "") else None
            if cached and not getattr(record, "image_url", None):
                record.image_url = cached
        return records
