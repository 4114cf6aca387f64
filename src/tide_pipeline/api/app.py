"""潮汐レポートの API を FastAPI で公開するモジュール。

サービス層（ページ取得 + 抽出）を HTTP エンドポイントへ結線し、
表示側（ブラウザ/JS）から JSON 経由で同じ結果を利用できるようにします。
"""

from __future__ import annotations

from typing import Iterable, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tide_pipeline.api.responses import HTTPStatusCodes, envelope_response
from tide_pipeline.app_container import build_tide_service, build_water_level_fetcher
from tide_pipeline.domain.services.tide_service import TideReportService
from tide_pipeline.fetcher.fetcher import DocumentFetchError
from tide_pipeline.fetcher.water_level_fetcher import WaterLevelFetcher
from tide_pipeline.logger.app_logger import get_logger
from tide_pipeline.parser.errors import MissingTodayDataError
from tide_pipeline.utils.config_loader import DEFAULT_WATER_LEVEL_CACHE_SECONDS
from tide_pipeline.version import get_version

logger = get_logger(__name__)

DEFAULT_ALLOW_ORIGINS: Iterable[str] = ("*",)
DEFAULT_FORECAST_DAYS = 4


def pegel_headers(cache_seconds: int = DEFAULT_WATER_LEVEL_CACHE_SECONDS) -> dict[str, str]:
    """水位パススルー応答に付与するCORS・キャッシュヘッダー。"""

    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET",
        "Cache-Control": (
            f"public, s-maxage={cache_seconds}, "
            f"stale-while-revalidate={cache_seconds * 2}"
        ),
    }


def create_app(
    *,
    tide_service: Optional[TideReportService] = None,
    water_level_fetcher: Optional[WaterLevelFetcher] = None,
    allow_origins: Optional[Iterable[str]] = None,
    water_level_cache_seconds: int = DEFAULT_WATER_LEVEL_CACHE_SECONDS,
) -> FastAPI:
    """FastAPI アプリケーションを生成・設定します。"""

    app = FastAPI(
        title="Tide Report API",
        version=get_version(),
        description="horaire-maree.fr 潮汐ページの抽出結果を返す HTTP サーバー。",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins or DEFAULT_ALLOW_ORIGINS),
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    configured_tide_service = tide_service or build_tide_service()
    configured_water_level = water_level_fetcher or build_water_level_fetcher()

    @app.get("/api/health", tags=["system"])
    def health_check() -> JSONResponse:
        """簡易ヘルスチェック。"""

        return envelope_response(HTTPStatusCodes.OK, {"status": "ok"})

    @app.get("/api/tides", tags=["tides"])
    def get_tides(
        days: Optional[int] = Query(
            DEFAULT_FORECAST_DAYS,
            ge=0,
            description="予報として返す日数（省略時は4日）。",
        ),
        refresh: bool = Query(False, description="キャッシュを無視して再取得するか。"),
    ) -> JSONResponse:
        """本日と予報の潮汐、日の出・日の入りを返す。"""

        try:
            report = configured_tide_service.get_report(force_refresh=refresh, days=days)
        except DocumentFetchError as exc:
            logger.error("潮汐ページの取得に失敗: %s", exc)
            return envelope_response(
                exc.status_code or HTTPStatusCodes.BAD_GATEWAY,
                message=str(exc),
            )
        except MissingTodayDataError as exc:
            logger.error("潮汐ページの解析に失敗: %s", exc)
            return envelope_response(
                HTTPStatusCodes.BAD_GATEWAY,
                data={"expected": exc.expected, "found": exc.found},
                message=str(exc),
            )
        return envelope_response(HTTPStatusCodes.OK, report.to_dict())

    @app.get("/api/pegel", tags=["water-level"])
    def get_pegel() -> JSONResponse:
        """水位計測APIの応答をそのまま返す（CORS・キャッシュヘッダー付き）。"""

        try:
            data = configured_water_level.fetch()
        except DocumentFetchError as exc:
            logger.error("Error fetching Pegel data: %s", exc)
            if exc.status_code is not None:
                return JSONResponse(
                    status_code=exc.status_code,
                    content={"error": f"Failed to fetch Pegel data: {exc.status_code}"},
                )
            return JSONResponse(
                status_code=HTTPStatusCodes.INTERNAL_SERVER_ERROR,
                content={"error": "Failed to fetch Pegel data"},
            )
        return JSONResponse(content=data, headers=pegel_headers(water_level_cache_seconds))

    return app


if __name__ == "__main__":  # pragma: no cover - manual entry point
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
