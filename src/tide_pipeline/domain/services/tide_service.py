"""
ビジネスロジック層のサービスクラス

ページ取得（ローダー）と抽出（パーサー）をつなぎ、TideReport を返す。
"""

from typing import Callable, Optional

from tide_pipeline.fetcher.fetcher import TidePageFetcher
from tide_pipeline.logger.app_logger import get_logger
from tide_pipeline.parser import extract
from ..models import TideReport, window_days

logger = get_logger(__name__)


class TideReportService:
    """潮汐レポート取得サービス"""

    def __init__(
        self,
        fetcher: TidePageFetcher,
        extractor: Callable[[str], TideReport] = extract,
    ):
        self._fetcher = fetcher
        self._extract = extractor

    def get_report(self, force_refresh: bool = False, days: Optional[int] = None) -> TideReport:
        """
        潮汐ページを取得して解析する

        Args:
            force_refresh: キャッシュを無視して再取得するか
            days: 予報として残す日数（None なら全件）

        Returns:
            TideReport: 抽出結果

        Raises:
            DocumentFetchError: ページ取得に失敗した場合
            MissingTodayDataError: 本日のデータ行が見つからない場合
        """
        html = self._fetcher.fetch(force_refresh=force_refresh)
        report = self._extract(html)
        logger.debug("レポート生成: %s (予報 %d 日)", report.today_date, len(report.upcoming_days))
        return window_days(report, days)
