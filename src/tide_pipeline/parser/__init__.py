# tide_pipeline/parser/__init__.py
from bs4 import BeautifulSoup

from tide_pipeline.domain.models import TideReport
from tide_pipeline.logger.app_logger import get_logger

from .cell_parsers import parse_coefficient, parse_time_and_height
from .errors import MissingTodayDataError
from .forecast_table_parser import ForecastTableParser
from .page_text_parser import extract_sun_times, extract_today_date
from .table_parser import TideTableParser
from .today_table_parser import TodayTableParser

logger = get_logger(__name__)

__all__ = [
    "ForecastTableParser",
    "MissingTodayDataError",
    "TideTableParser",
    "TodayTableParser",
    "extract",
    "extract_sun_times",
    "extract_today_date",
    "parse_coefficient",
    "parse_time_and_height",
]


def extract(html: str) -> TideReport:
    """潮汐ページのHTMLを解析して TideReport を返す

    I/O を伴わない純粋な処理で、同じ入力には常に同じ結果を返す。

    Args:
        html: 取得済みのページHTML

    Returns:
        TideReport: 抽出結果（見つからない値は番兵値/None）

    Raises:
        MissingTodayDataError: 本日のデータ行が見つからない場合
    """
    soup = BeautifulSoup(html, "html.parser")

    today_date = extract_today_date(soup)

    today_parser = TodayTableParser()
    today = today_parser.parse_table(today_parser.find_table(soup), today_date)

    forecast_parser = ForecastTableParser()
    upcoming_days = forecast_parser.parse_table(forecast_parser.find_table(soup))

    sunrise, sunset = extract_sun_times(soup)

    logger.info(
        "Tide page parsed: date=%r, upcoming_days=%d, sunrise=%s, sunset=%s",
        today_date, len(upcoming_days), sunrise, sunset,
    )
    return TideReport(
        today_date=today_date,
        today=today,
        upcoming_days=tuple(upcoming_days),
        sunrise=sunrise,
        sunset=sunset,
    )
