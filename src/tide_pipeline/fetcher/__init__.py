from .fetcher import DocumentFetchError, TidePageFetcher, fetch_text
from .water_level_fetcher import WaterLevelFetcher

__all__ = ["DocumentFetchError", "TidePageFetcher", "WaterLevelFetcher", "fetch_text"]
