"""設定ファイル読み込みユーティリティ"""

from pathlib import Path
from typing import Any, Dict

import yaml

from ..logger.app_logger import get_logger
from .path_utils import resolve_path


logger = get_logger(__name__)

DEFAULT_SOURCE_URL = "https://www.horaire-maree.fr/maree/Ver-sur-Mer/"
DEFAULT_SOURCE_USER_AGENT = "ver-sur-mer-tides-app"
DEFAULT_CACHE_TTL_SECONDS = 1800
DEFAULT_WATER_LEVEL_URL = "https://www.hochwasser.rlp.de/api/v1/measurement-site/2710080"
DEFAULT_WATER_LEVEL_USER_AGENT = "pegel-visualization-app"
DEFAULT_WATER_LEVEL_CACHE_SECONDS = 900


def get_default_config_path() -> Path:
    """Return the canonical config file location."""

    current_dir = Path(__file__).parent.parent
    return current_dir / "config.yml"


def load_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    """Load configuration data, tolerating missing files."""

    if config_path is None:
        config_path = get_default_config_path()
    else:
        config_path = Path(config_path)

    try:
        with config_path.open("r", encoding="utf-8") as file:
            config = yaml.safe_load(file) or {}
        logger.info("設定ファイルを読み込みました: %s", config_path)
        return config if isinstance(config, dict) else {}
    except FileNotFoundError:
        logger.warning("設定ファイルが見つかりません。デフォルト設定を使用します: %s", config_path)
        return {}
    except yaml.YAMLError as exc:
        logger.error("設定ファイルの解析エラー: %s", exc)
        raise


def _section(config: Dict[str, Any] | None, name: str) -> Dict[str, Any]:
    if config is None:
        config = load_config()
    section = config.get(name, {}) if isinstance(config, dict) else {}
    return section or {}


def get_source_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Resolve the tide page location and request settings."""

    source = _section(config, "source")
    return {
        "url": source.get("url", DEFAULT_SOURCE_URL),
        "user_agent": source.get("user_agent", DEFAULT_SOURCE_USER_AGENT),
        "timeout": int(source.get("timeout", 30)),
    }


def get_cache_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Resolve the page cache directory and TTL."""

    cache = _section(config, "cache")
    return {
        "enabled": bool(cache.get("enabled", True)),
        "ttl_seconds": int(cache.get("ttl_seconds", DEFAULT_CACHE_TTL_SECONDS) or 0),
        "dir": str(resolve_path(cache.get("dir", "cache"))),
    }


def get_water_level_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Resolve the water-level passthrough settings."""

    water_level = _section(config, "water_level")
    return {
        "url": water_level.get("url", DEFAULT_WATER_LEVEL_URL),
        "user_agent": water_level.get("user_agent", DEFAULT_WATER_LEVEL_USER_AGENT),
        "cache_seconds": int(
            water_level.get("cache_seconds", DEFAULT_WATER_LEVEL_CACHE_SECONDS)
        ),
    }
