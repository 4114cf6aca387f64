#!/usr/bin/env python3
"""潮汐パイプライン - CLI エントリポイント"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from tide_pipeline.app_container import build_tide_service
from tide_pipeline.domain.models import TideReport, window_days
from tide_pipeline.exporter.csv_exporter import export_report_csv
from tide_pipeline.fetcher.fetcher import DocumentFetchError
from tide_pipeline.logger.app_logger import get_logger
from tide_pipeline.parser import MissingTodayDataError, extract
from tide_pipeline.version import get_full_title

logger = get_logger(__name__)

DEFAULT_DAYS = 4


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f'整数を指定してください: {value}') from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f'0以上を指定してください: {value}')
    return number


def _build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを構成する。"""
    parser = argparse.ArgumentParser(
        prog="tide-pipeline",
        description=f"{get_full_title()} - 潮汐ページを取得してJSONで出力",
    )
    parser.add_argument('--html-file', type=Path, help='取得済みHTMLファイルを解析する（通信しない）')
    parser.add_argument('--days', type=_non_negative_int, default=DEFAULT_DAYS,
                        help=f'出力する予報日数（既定: {DEFAULT_DAYS}）')
    parser.add_argument('--all-days', action='store_true', help='予報を全日数出力する')
    parser.add_argument('--refresh', action='store_true', help='キャッシュを無視して再取得する')
    parser.add_argument('--csv', type=Path, help='CSVの出力先パス')
    return parser


def _load_report(args: argparse.Namespace) -> TideReport:
    days = None if args.all_days else args.days
    if args.html_file is not None:
        html = args.html_file.read_text(encoding='utf-8')
        return window_days(extract(html), days)
    service = build_tide_service()
    return service.get_report(force_refresh=args.refresh, days=days)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """CLI入口。終了コードを返す。"""
    args = _build_parser().parse_args(argv)
    try:
        report = _load_report(args)
    except (DocumentFetchError, MissingTodayDataError, OSError) as exc:
        logger.error("潮汐レポートの取得に失敗しました: %s", exc)
        print(f'エラー: {exc}', file=sys.stderr)
        return 1

    if args.csv is not None:
        path = export_report_csv(report, args.csv)
        print(f'出力ファイル: {path}', file=sys.stderr)

    print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    """スクリプトのエントリポイント。"""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
