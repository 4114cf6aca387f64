"""
潮汐パイプラインのログ設定
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import yaml

from ..utils.path_utils import resolve_path

CONFIG_FILENAME = 'config.yml'
config_path = Path(__file__).resolve().parents[1] / CONFIG_FILENAME

DEFAULT_LOG_FILE = 'outputs/tides/tides_app.log'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_initialized = False  # ログ設定が初期化されたかのフラグ


class ConfigError(Exception):
    """設定エラー"""
    pass


def setup_logging(config_path_override: Optional[str] = None) -> None:
    """
    ログ設定を初期化

    Args:
        config_path_override: 設定ファイルのパス（オーバーライド用）
    """
    global _initialized

    log_config = _load_log_config(config_path_override)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_config['level']))

    # 既存のハンドラーをクリア
    root_logger.handlers.clear()

    log_dir = Path(log_config['file']).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(log_config['format'])

    # コンソールにはWARNING以上のみ
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)
    root_logger.addHandler(console_handler)

    file_handler = logging.handlers.RotatingFileHandler(
        log_config['file'],
        maxBytes=log_config['max_size_mb'] * 1024 * 1024,
        backupCount=log_config['backup_count'],
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(getattr(logging, log_config['level']))
    root_logger.addHandler(file_handler)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    名前付きロガーを取得（初回呼び出し時にログ設定を初期化）

    Args:
        name: ロガー名

    Returns:
        Logger: ロガーインスタンス
    """
    global _initialized
    if not _initialized:
        try:
            setup_logging()
        except Exception as exc:  # pragma: no cover - setup失敗時は標準設定
            logging.basicConfig(level=logging.INFO)
            _initialized = True
            print(f"警告: ログ設定の初期化に失敗しました: {exc}", file=sys.stderr)
    return logging.getLogger(name)


def _load_log_config(config_path_override: Optional[str] = None) -> dict:
    """
    ログ設定を読み込み

    Args:
        config_path_override: 設定ファイルのパス（オーバーライド用）

    Returns:
        dict: ログ設定

    Raises:
        ConfigError: 設定読み込みエラー
    """
    actual_config_path = Path(config_path_override) if config_path_override else config_path

    if not actual_config_path.exists():
        return {
            'level': 'INFO',
            'file': str(resolve_path(DEFAULT_LOG_FILE)),
            'max_size_mb': 10,
            'backup_count': 5,
            'format': DEFAULT_LOG_FORMAT,
        }

    try:
        with open(actual_config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"ログ設定の読み込みに失敗しました: {e}") from e

    log_config = config.get('logging', {}) or {}
    return {
        'level': str(log_config.get('level', 'INFO')).upper(),
        'file': str(resolve_path(log_config.get('file', DEFAULT_LOG_FILE))),
        'max_size_mb': log_config.get('max_size_mb', 10),
        'backup_count': log_config.get('backup_count', 5),
        'format': log_config.get('format', DEFAULT_LOG_FORMAT),
    }
