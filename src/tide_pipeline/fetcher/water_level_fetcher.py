"""Passthrough client for the hochwasser.rlp.de water-level measurement API."""

from __future__ import annotations

import json
from typing import Any, Optional

from tide_pipeline.logger.app_logger import get_logger
from tide_pipeline.utils.cache_manager import CacheManager
from tide_pipeline.utils.http_client import ThrottledClient
from .fetcher import DocumentFetchError, fetch_text

WATER_LEVEL_CACHE_KEY = "water_level"

logger = get_logger(__name__)


class WaterLevelFetcher:
    """Fetch the measurement-site JSON and hand it back unmodified.

    With a cache, the upstream is contacted at most once per cache TTL.
    """

    def __init__(
        self,
        url: str,
        client: ThrottledClient,
        cache: Optional[CacheManager] = None,
    ) -> None:
        self.url = url
        self.client = client
        self.cache = cache

    def fetch(self, force_refresh: bool = False) -> Any:
        """Return the decoded upstream JSON.

        :param force_refresh: skip the cache and contact the upstream
        :raises DocumentFetchError: transport failure or non-success status
        """
        if self.cache is not None and not force_refresh:
            entry = self.cache.get_entry(WATER_LEVEL_CACHE_KEY)
            if entry is not None and not entry.expired:
                logger.debug("Water-level cache hit: %s", self.url)
                return entry.data

        text = fetch_text(self.client, self.url)
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.error("Water-level response is not JSON: %s", exc)
            raise DocumentFetchError(self.url) from exc

        if self.cache is not None:
            self.cache.set_data(WATER_LEVEL_CACHE_KEY, data)
        return data
