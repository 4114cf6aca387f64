from typing import List, Optional

from bs4 import Tag

from tide_pipeline.domain.models import TideDay
from tide_pipeline.logger.app_logger import get_logger
from .errors import MissingTodayDataError
from .table_parser import HALF_DAY_CELLS, TIDE_CELLS, TideTableParser

logger = get_logger(__name__)


class TodayTableParser(TideTableParser):
    """本日の潮汐テーブル用パーサー

    想定構造:
        行0: ヘッダー (Matin | Après midi)
        行1: サブヘッダー (Coeff. | Basse mer | Pleine mer | ...)
        行2: データ行（td 6セル）
    ヘッダー行の数は改版で変わるため、位置ではなくセル数でデータ行を選ぶ。
    """

    def _get_table_selectors(self) -> List[str]:
        return [
            '#i_donnesJour table.tableau',
            '#i_donnesJour table',
        ]

    def parse_table(self, table: Optional[Tag], label: str = "") -> TideDay:
        """本日のテーブルを1日分の TideDay に変換

        Args:
            table: 本日のテーブル（見つからなければ None）
            label: 見出しから抽出済みの本日の日付

        Returns:
            TideDay: 本日の潮汐

        Raises:
            MissingTodayDataError: td を6セル以上持つ行が無い場合
        """
        cells = self._find_data_row(table)
        return TideDay(
            label=label,
            morning=self._parse_half_day(cells[:HALF_DAY_CELLS]),
            afternoon=self._parse_half_day(cells[HALF_DAY_CELLS:TIDE_CELLS]),
        )

    def _find_data_row(self, table: Optional[Tag]) -> List[str]:
        """td を6セル以上持つ最後の行のセルテキストを返す"""
        max_found = 0
        data_row: Optional[List[str]] = None
        for row in self._rows(table):
            cells = self._cell_texts(row)
            max_found = max(max_found, len(cells))
            if len(cells) >= TIDE_CELLS:
                data_row = cells
        if data_row is None:
            logger.warning(
                "本日のデータ行が見つかりません (expected=%d, found=%d)",
                TIDE_CELLS, max_found,
            )
            raise MissingTodayDataError(expected=TIDE_CELLS, found=max_found)
        return data_row
