from dataclasses import dataclass
from pathlib import Path

import pytest
import requests

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@dataclass
class DummyResponse:
    """requests.Response 代替として minimum API を提供するテスト用レスポンス"""

    status_code: int = 200
    text: str = "payload"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            error = requests.HTTPError(f"HTTP {self.status_code}")
            error.response = self
            raise error


@pytest.fixture()
def tide_page_html() -> str:
    return (FIXTURE_DIR / "ver_sur_mer.html").read_text(encoding="utf-8")


@pytest.fixture()
def make_table_html():
    """行ごとのセル配列から単純なテーブルHTMLを組み立てる"""

    def _factory(rows, container_id="i_donnesJour"):
        body = "".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
            for row in rows
        )
        return (
            f'<div id="{container_id}"><table class="tableau">'
            f"<tr><th>Matin</th><th>Après midi</th></tr>{body}</table></div>"
        )

    return _factory
