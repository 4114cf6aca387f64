import re
from typing import List, Optional

from bs4 import Tag

from tide_pipeline.domain.models import TideDay
from tide_pipeline.logger.app_logger import get_logger
from .table_parser import HALF_DAY_CELLS, TIDE_CELLS, TideTableParser

logger = get_logger(__name__)

# 日付ラベル + 潮汐6セル
FORECAST_ROW_CELLS = TIDE_CELLS + 1
_TOMORROW_PREFIX_RE = re.compile(r'^Demain\s*', re.IGNORECASE)


class ForecastTableParser(TideTableParser):
    """複数日（最大10日）予報テーブル用パーサー

    想定構造:
        行0: ヘッダー (Date | Matin | Après-midi)
        行1: サブヘッダー (Coeff. | Basse mer | Pleine mer | ...)
        行2以降: データ行（日付 + 潮汐6セル）
    """

    def _get_table_selectors(self) -> List[str]:
        return [
            '#i_donnesLongue table.tableau',
            '#i_donnesLongue table',
        ]

    def parse_table(self, table: Optional[Tag]) -> List[TideDay]:
        """予報テーブルの全データ行を文書順に TideDay へ変換

        td が7セル未満の行はヘッダーとみなして読み飛ばす。
        件数の上限は設けない（表示件数の制御は表示層で行う）。
        """
        days: List[TideDay] = []
        for index, row in enumerate(self._rows(table)):
            cells = self._cell_texts(row)
            if len(cells) < FORECAST_ROW_CELLS:
                logger.debug(f"行{index}をスキップ（セル数 {len(cells)}）")
                continue
            tide_cells = cells[1:FORECAST_ROW_CELLS]
            days.append(TideDay(
                label=self._clean_label(cells[0]),
                morning=self._parse_half_day(tide_cells[:HALF_DAY_CELLS]),
                afternoon=self._parse_half_day(tide_cells[HALF_DAY_CELLS:]),
            ))
        return days

    def _clean_label(self, text: str) -> str:
        """先頭の「Demain」を取り除いた日付ラベルを返す"""
        return _TOMORROW_PREFIX_RE.sub('', text.strip()).strip()
