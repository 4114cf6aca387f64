"""HTTPユーティリティ: 待機・リトライ付きのGETを提供する。"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import requests

from ..logger.app_logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    min_delay: float
    step: float
    max_delay: float
    max_retries: int
    backoff_cap: float
    retryable_status: frozenset[int] = field(default_factory=frozenset)


DEFAULT_RETRY_POLICY = RetryPolicy(
    min_delay=1.0,
    step=0.2,
    max_delay=2.0,
    max_retries=3,
    backoff_cap=10.0,
    retryable_status=frozenset({429, 500, 502, 503, 504}),
)

RequestFunc = Callable[[str, Dict[str, str], int], requests.Response]


class ThrottledClient:
    """リクエスト間隔の制御とリトライを一元管理するHTTPクライアント。"""

    def __init__(
        self,
        default_headers: Optional[Dict[str, str]] = None,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        *,
        request_timeout: int = 30,
        request_func: Optional[RequestFunc] = None,
        sleep_func: Optional[Callable[[float], None]] = None,
        clock_func: Optional[Callable[[], float]] = None,
    ) -> None:
        self._headers = {**(default_headers or {})}
        self._policy = retry_policy
        self._timeout = request_timeout
        self._request = request_func or self._default_request
        self._sleep = sleep_func or time.sleep
        self._clock = clock_func or time.monotonic
        self._lock = threading.Lock()
        self._burst_index = 0
        self._last_request_at: Optional[float] = None

    def _default_request(self, url: str, headers: Dict[str, str], timeout: int) -> requests.Response:
        return requests.get(url, headers=headers, timeout=timeout)

    def _reserve_delay(self) -> float:
        """前回リクエストからの経過時間に応じて待機秒数を計算する。

        連続したリクエストでは間隔を min_delay から step ずつ max_delay まで広げる。
        前回から max_delay 以上空いていれば連続とみなさず、待機しない。
        """
        with self._lock:
            now = self._clock()
            last = self._last_request_at
            if last is None or now - last >= self._policy.max_delay:
                self._burst_index = 0
                delay = 0.0
            else:
                self._burst_index += 1
                interval = self._policy.min_delay + self._policy.step * (self._burst_index - 1)
                interval = min(interval, self._policy.max_delay)
                delay = max(0.0, interval - (now - last))
            self._last_request_at = now + delay
        return delay

    def send(self, url: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """
        GETを実行し、成功したレスポンスを返す。

        :param url: アクセス先URL
        :param headers: 追加または上書きしたいヘッダー
        :raises requests.RequestException: リトライ上限まで失敗した場合
        """
        delay = self._reserve_delay()
        if delay:
            self._sleep(delay)

        merged_headers = {**self._headers, **(headers or {})}
        last_exc: Optional[Exception] = None
        for attempt in range(1, self._policy.max_retries + 1):
            logger.debug("GET %s (attempt %d)", url, attempt)
            try:
                response = self._request(url, merged_headers, self._timeout)
            except requests.RequestException as exc:
                last_exc = exc
                if attempt < self._policy.max_retries:
                    self._handle_retry(url, attempt, "exception", exc)
                continue

            if response.status_code in self._policy.retryable_status and attempt < self._policy.max_retries:
                self._handle_retry(url, attempt, "status", response.status_code)
                continue

            response.raise_for_status()
            return response

        logger.error("GET %s failed: %s", url, last_exc)
        if last_exc:
            raise last_exc
        raise RuntimeError(f"{url} の取得に失敗しました")

    def _handle_retry(self, url: str, attempt: int, reason: str, detail: object) -> None:
        backoff = min(self._policy.min_delay * (2 ** (attempt - 1)), self._policy.backoff_cap)
        logger.warning(
            "Retrying %s after %s (%s), attempt %d, backoff %.1fs",
            url, reason, detail, attempt, backoff,
        )
        self._sleep(backoff)
