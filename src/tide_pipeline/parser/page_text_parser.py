# src/tide_pipeline/parser/page_text_parser.py
import re
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from tide_pipeline.logger.app_logger import get_logger

logger = get_logger(__name__)

TODAY_HEADING_SELECTOR = '#i_header_tbl_droite h3.orange'
FOOTER_SELECTOR = '#explication_marees'

# アポストロフィは ' ’ ‘ のいずれも許容
_TODAY_PHRASE_RE = re.compile(r"Marée\s+aujourd['’‘]hui", re.IGNORECASE)
_SUNRISE_RE = re.compile(r'Lever du soleil[^:]*:\s*(\d{2}:\d{2})', re.IGNORECASE)
_SUNSET_RE = re.compile(r'Coucher du soleil[^:]*:\s*(\d{2}:\d{2})', re.IGNORECASE)


def extract_today_date(soup: BeautifulSoup) -> str:
    """見出しから本日の日付文字列を抽出する

    見出しが無い場合はエラーにせず空文字を返す（表示側で「不明」扱い）。

    Examples:
        >>> html = '<div id="i_header_tbl_droite"><h3 class="orange">Marée aujourd\\'hui<br />jeudi 4 décembre 2025</h3></div>'
        >>> extract_today_date(BeautifulSoup(html, 'html.parser'))
        'jeudi 4 décembre 2025'
    """
    heading = soup.select_one(TODAY_HEADING_SELECTOR)
    if heading is None:
        logger.debug("本日の見出しが見つかりません: %s", TODAY_HEADING_SELECTOR)
        return ""
    text = heading.get_text(" ", strip=True)
    return _TODAY_PHRASE_RE.sub('', text, count=1).strip()


def extract_sun_times(soup: BeautifulSoup) -> Tuple[Optional[str], Optional[str]]:
    """フッター文中から日の出・日の入り時刻 (HH:MM) を抽出する

    2つのパターンは独立して探索し、見つからない方は None とする。
    """
    footer = soup.select_one(FOOTER_SELECTOR)
    text = footer.get_text(" ") if footer is not None else ""
    return _search_time(_SUNRISE_RE, text), _search_time(_SUNSET_RE, text)


def _search_time(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None
