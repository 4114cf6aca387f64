"""依存性注入コンテナ

`TideReportService` や水位パススルー用フェッチャーを組み立てるためのヘルパー関数を定義します。
API と CLI から共通のサービスを利用できるようにします。
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from tide_pipeline.domain.services.tide_service import TideReportService
from tide_pipeline.fetcher.fetcher import TidePageFetcher
from tide_pipeline.fetcher.water_level_fetcher import WaterLevelFetcher
from tide_pipeline.utils.cache_manager import CacheManager
from tide_pipeline.utils.config_loader import (
    get_cache_settings,
    get_source_settings,
    get_water_level_settings,
    load_config,
)
from tide_pipeline.utils.http_client import ThrottledClient


def build_page_fetcher(config: Optional[Dict[str, Any]] = None) -> TidePageFetcher:
    """設定から潮汐ページのフェッチャーを構築して返す"""

    config = load_config() if config is None else config
    source = get_source_settings(config)
    cache_settings = get_cache_settings(config)

    client = ThrottledClient(
        default_headers={"User-Agent": source["user_agent"]},
        request_timeout=source["timeout"],
    )
    cache = CacheManager(
        cache_dir=cache_settings["dir"],
        ttl_seconds=cache_settings["ttl_seconds"],
        enabled=cache_settings["enabled"],
    )
    return TidePageFetcher(url=source["url"], client=client, cache=cache)


def build_tide_service(config: Optional[Dict[str, Any]] = None) -> TideReportService:
    """`TideReportService` を構築して返す"""

    return TideReportService(fetcher=build_page_fetcher(config))


def build_water_level_fetcher(config: Optional[Dict[str, Any]] = None) -> WaterLevelFetcher:
    """水位APIパススルー用のフェッチャーを構築して返す"""

    config = load_config() if config is None else config
    settings = get_water_level_settings(config)
    cache_settings = get_cache_settings(config)

    client = ThrottledClient(default_headers={"User-Agent": settings["user_agent"]})
    cache = None
    # cache_seconds が 0 以下なら毎回上流へ問い合わせる
    if cache_settings["enabled"] and settings["cache_seconds"] > 0:
        cache = CacheManager(
            cache_dir=cache_settings["dir"],
            ttl_seconds=settings["cache_seconds"],
        )
    return WaterLevelFetcher(url=settings["url"], client=client, cache=cache)
