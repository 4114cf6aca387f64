# tide_pipeline/exporter/csv_exporter.py
from pathlib import Path
from typing import Dict, List

import pandas as pd

from tide_pipeline.domain.models import HalfDayTide, TideDay, TideReport
from tide_pipeline.logger.app_logger import get_logger

logger = get_logger(__name__)

OUTPUT_COLUMNS = [
    'label', 'period', 'coefficient',
    'low_time', 'low_height', 'high_time', 'high_height',
]


def _half_day_row(label: str, period: str, tide: HalfDayTide) -> Dict[str, object]:
    return {
        'label': label,
        'period': period,
        'coefficient': tide.coefficient,
        'low_time': tide.low_time,
        'low_height': tide.low_height,
        'high_time': tide.high_time,
        'high_height': tide.high_height,
    }


def _day_rows(day: TideDay, label: str) -> List[Dict[str, object]]:
    return [
        _half_day_row(label, 'morning', day.morning),
        _half_day_row(label, 'afternoon', day.afternoon),
    ]


def report_to_frame(report: TideReport) -> pd.DataFrame:
    """レポートを半日1行の DataFrame に変換する（本日 → 予報の順）。

    本日のラベルは見出しの日付（空なら TideDay.label）を使う。
    """
    rows: List[Dict[str, object]] = []
    rows.extend(_day_rows(report.today, report.today_date or report.today.label))
    for day in report.upcoming_days:
        rows.extend(_day_rows(day, day.label))
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def export_report_csv(report: TideReport, path: str | Path) -> Path:
    """レポートをCSVに書き出し、書き出したパスを返す。"""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = report_to_frame(report)
    df.to_csv(output_path, index=False, encoding='utf-8-sig')
    logger.info(f"CSV exported: {output_path} ({len(df)} rows)")
    return output_path
