"""
APIレスポンス処理モジュール

レスポンスのフォーマット統一（status/message/data/timestamp のエンベロープ）を担当します。
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse


class HTTPStatusCodes:
    """HTTPステータスコード定数"""
    OK = 200
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502


def build_envelope(status_code: int, data: Any, message: Optional[str] = None) -> Dict[str, Any]:
    """ステータスコードに応じたエンベロープ辞書を組み立てる"""
    return {
        "status": "success" if status_code < 400 else "error",
        "message": message,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def envelope_response(
    status_code: int,
    data: Any = None,
    message: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """エンベロープ形式の JSONResponse を返す"""
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, data, message),
        headers=headers or {},
    )
