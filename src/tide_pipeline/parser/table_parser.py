from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from tide_pipeline.domain.models import HalfDayTide
from tide_pipeline.logger.app_logger import get_logger
from .cell_parsers import parse_coefficient, parse_time_and_height

logger = get_logger(__name__)

# 1 半日分 = 係数, 干潮, 満潮
HALF_DAY_CELLS = 3
TIDE_CELLS = HALF_DAY_CELLS * 2


class TideTableParser(ABC):
    """潮汐テーブルを解析するための抽象基底クラス

    行の役割（ヘッダー/データ）はセル数のみで判定する。
    ページ上にヘッダー行とデータ行を区別する構造的な目印が無いため。
    """

    @abstractmethod
    def _get_table_selectors(self) -> List[str]:
        """テーブルを特定するためのセレクタを返す（サブクラスで実装）"""
        pass

    @abstractmethod
    def parse_table(self, table: Optional[Tag], *args: Any) -> Any:
        """テーブルをパースして結果を返す"""
        pass

    def find_table(self, soup: BeautifulSoup) -> Optional[Tag]:
        """HTMLから対象テーブルを探して返す

        Args:
            soup: BeautifulSoupオブジェクト

        Returns:
            Optional[Tag]: 見つかったテーブル要素。見つからない場合はNone
        """
        for selector in self._get_table_selectors():
            table = soup.select_one(selector)
            if table is not None:
                return table
        logger.debug(f"テーブルが見つかりません: {self._get_table_selectors()}")
        return None

    def _rows(self, table: Optional[Tag]) -> List[Tag]:
        if table is None:
            return []
        return table.find_all('tr')

    def _cell_texts(self, row: Tag) -> List[str]:
        """行内の td セルを平文テキストにして返す"""
        return [td.get_text(" ", strip=True) for td in row.find_all('td')]

    def _parse_half_day(self, cells: Sequence[str]) -> HalfDayTide:
        """[係数, 干潮, 満潮] の3セルを半日分の潮汐に変換"""
        coefficient_cell, low_cell, high_cell = cells[:HALF_DAY_CELLS]
        return HalfDayTide.from_cells(
            coefficient=parse_coefficient(coefficient_cell),
            low=parse_time_and_height(low_cell),
            # 満潮セルも同じ時刻+潮位の解析で、結果を満潮として扱う
            high=parse_time_and_height(high_cell),
        )
