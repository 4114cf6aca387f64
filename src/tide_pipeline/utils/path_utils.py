"""プロジェクトパスの解決ユーティリティ。"""

from pathlib import Path
from typing import Iterable


_DEFAULT_MARKERS = ("pyproject.toml", ".git")


def get_project_root(markers: Iterable[str] = _DEFAULT_MARKERS) -> Path:
    """プロジェクトルートディレクトリを返す。

    pyproject.toml/.git を上位に探し、見つからなければ src/ の親を返す。
    """
    current = Path(__file__).resolve().parent

    for directory in [current, *current.parents]:
        if any((directory / marker).exists() for marker in markers):
            return directory

    # src/tide_pipeline/utils からのフォールバック
    return Path(__file__).resolve().parents[3]


def resolve_path(value: str | Path) -> Path:
    """相対パスはプロジェクトルート基準の絶対パスに変換する。"""
    path = Path(value)
    if not path.is_absolute():
        path = get_project_root() / path
    return path
