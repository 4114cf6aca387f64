# tide_pipeline/fetcher/fetcher.py
from typing import Optional

from requests.exceptions import HTTPError, RequestException

from tide_pipeline.logger.app_logger import get_logger
from tide_pipeline.utils.cache_manager import CacheManager
from tide_pipeline.utils.http_client import ThrottledClient

PAGE_CACHE_KEY = "tide_page"


class DocumentFetchError(RuntimeError):
    """ドキュメント取得（通信）に失敗したことを示す例外。

    :param url: 取得先URL
    :param status_code: HTTPステータス（接続エラー等で応答が無い場合は None）
    """

    def __init__(self, url: str, status_code: Optional[int] = None):
        detail = status_code if status_code is not None else "no response"
        super().__init__(f"Failed to fetch {url}: {detail}")
        self.url = url
        self.status_code = status_code


def fetch_text(client: ThrottledClient, url: str) -> str:
    """GETしてレスポンス本文を返す。失敗時は DocumentFetchError を送出する。"""
    try:
        resp = client.send(url)
    except HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise DocumentFetchError(url, status) from exc
    except RequestException as exc:
        raise DocumentFetchError(url) from exc
    return resp.text


class TidePageFetcher:
    """
    TidePageFetcher クラス: 潮汐ページのHTMLを取得し、一定時間キャッシュする。
    """

    def __init__(
        self,
        url: str,
        client: ThrottledClient,
        cache: Optional[CacheManager] = None,
    ):
        """
        :param url: 潮汐ページのURL
        :param client: HTTPクライアント（User-Agent 等は生成時に設定済み）
        :param cache: ページキャッシュ（None ならキャッシュしない）
        """
        self.url = url
        self.client = client
        self.cache = cache
        self.logger = get_logger(__name__)

    def fetch(self, force_refresh: bool = False) -> str:
        """
        潮汐ページのHTMLを返す。キャッシュが有効期間内ならそれを返す。
        :param force_refresh: True ならキャッシュを無視して再取得する
        :return: HTML文字列
        :raises DocumentFetchError: 取得に失敗した場合
        """
        if self.cache is not None and not force_refresh:
            cached = self.cache.get_data(PAGE_CACHE_KEY)
            if cached is not None:
                self.logger.debug("キャッシュから取得: %s", self.url)
                return cached

        self.logger.info("ページを取得: %s", self.url)
        html = fetch_text(self.client, self.url)

        if self.cache is not None:
            self.cache.set_data(PAGE_CACHE_KEY, html)
        return html
