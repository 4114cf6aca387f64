from datetime import datetime, timedelta, timezone

import pytest
import requests

from tide_pipeline.fetcher import DocumentFetchError, TidePageFetcher, WaterLevelFetcher
from tide_pipeline.utils.cache_manager import CacheManager
from tide_pipeline.utils.http_client import RetryPolicy, ThrottledClient

from conftest import DummyResponse

URL = "https://www.horaire-maree.fr/maree/Ver-sur-Mer/"


class StubClient(ThrottledClient):
    def __init__(self, responses):
        self.responses = iter(responses)
        self.calls = []
        policy = RetryPolicy(1, 0, 1, 1, 1)
        super().__init__(default_headers={"User-Agent": "ver-sur-mer-tides-app"},
                         retry_policy=policy, request_func=self._request,
                         sleep_func=lambda x: None)

    def _request(self, url, headers, timeout):
        self.calls.append((url, headers))
        try:
            item = next(self.responses)
        except StopIteration:
            raise AssertionError("No more responses")
        if isinstance(item, Exception):
            raise item
        return item


def test_fetch_without_cache_returns_text():
    client = StubClient([DummyResponse(200, "<html>page</html>")])
    fetcher = TidePageFetcher(URL, client)

    assert fetcher.fetch() == "<html>page</html>"
    assert client.calls[0] == (URL, {"User-Agent": "ver-sur-mer-tides-app"})


def test_fetch_uses_cache_until_refresh(tmp_path):
    client = StubClient([DummyResponse(200, "first"), DummyResponse(200, "second")])
    fetcher = TidePageFetcher(URL, client, cache=CacheManager(tmp_path, ttl_seconds=1800))

    assert fetcher.fetch() == "first"
    assert fetcher.fetch() == "first"
    assert len(client.calls) == 1

    assert fetcher.fetch(force_refresh=True) == "second"
    assert fetcher.fetch() == "second"
    assert len(client.calls) == 2


def test_fetch_non_success_status_raises_fetch_error():
    fetcher = TidePageFetcher(URL, StubClient([DummyResponse(503, "down")]))

    with pytest.raises(DocumentFetchError) as excinfo:
        fetcher.fetch()

    assert excinfo.value.status_code == 503
    assert excinfo.value.url == URL


def test_fetch_connection_error_has_no_status():
    fetcher = TidePageFetcher(URL, StubClient([requests.ConnectionError("offline")]))

    with pytest.raises(DocumentFetchError) as excinfo:
        fetcher.fetch()

    assert excinfo.value.status_code is None


def test_failed_fetch_does_not_poison_cache(tmp_path):
    cache = CacheManager(tmp_path, ttl_seconds=1800)
    fetcher = TidePageFetcher(URL, StubClient([DummyResponse(500, "err")]), cache=cache)

    with pytest.raises(DocumentFetchError):
        fetcher.fetch()
    assert cache.get_data("tide_page") is None


def test_water_level_fetcher_returns_json_unmodified():
    payload = '{"value": 312, "unit": "cm", "trend": null}'
    fetcher = WaterLevelFetcher("https://example.com/pegel", StubClient([DummyResponse(200, payload)]))

    assert fetcher.fetch() == {"value": 312, "unit": "cm", "trend": None}


def test_water_level_fetcher_invalid_json():
    fetcher = WaterLevelFetcher("https://example.com/pegel", StubClient([DummyResponse(200, "<html>")]))

    with pytest.raises(DocumentFetchError):
        fetcher.fetch()


def test_water_level_fetcher_reuses_cached_json(tmp_path):
    client = StubClient([DummyResponse(200, '{"value": 312}'), DummyResponse(200, '{"value": 298}')])
    fetcher = WaterLevelFetcher("https://example.com/pegel", client,
                                cache=CacheManager(tmp_path, ttl_seconds=900))

    assert fetcher.fetch() == {"value": 312}
    assert fetcher.fetch() == {"value": 312}
    assert len(client.calls) == 1

    assert fetcher.fetch(force_refresh=True) == {"value": 298}
    assert len(client.calls) == 2


def test_water_level_fetcher_refetches_after_ttl(tmp_path):
    now = [datetime(2025, 12, 4, 12, 0, tzinfo=timezone.utc)]
    cache = CacheManager(tmp_path, ttl_seconds=900, clock=lambda: now[0])
    client = StubClient([DummyResponse(200, '{"value": 1}'), DummyResponse(200, '{"value": 2}')])
    fetcher = WaterLevelFetcher("https://example.com/pegel", client, cache=cache)

    assert fetcher.fetch() == {"value": 1}
    now[0] += timedelta(seconds=901)
    assert fetcher.fetch() == {"value": 2}


def test_water_level_fetcher_caches_null_payload(tmp_path):
    client = StubClient([DummyResponse(200, "null")])
    fetcher = WaterLevelFetcher("https://example.com/pegel", client,
                                cache=CacheManager(tmp_path, ttl_seconds=900))

    assert fetcher.fetch() is None
    assert fetcher.fetch() is None
    assert len(client.calls) == 1
