import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from ..logger.app_logger import get_logger

logger = get_logger(__name__)


@dataclass
class CacheEntry:
    data: Any
    expired: bool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheManager:
    """Handle on-disk caching of fetched documents with a TTL."""

    def __init__(
        self,
        cache_dir: str | Path,
        ttl_seconds: int,
        enabled: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._cache_dir = Path(cache_dir)
        self._ttl_seconds = int(ttl_seconds or 0)
        self._cache_enabled = enabled
        self._clock = clock
        if self._cache_enabled:
            self._cache_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    @property
    def enabled(self) -> bool:
        return self._cache_enabled

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """キーに紐づくキャッシュエントリを取得（期限切れも返す）"""
        return self._load_entry(self._key_to_path(key))

    def get_data(self, key: str) -> Optional[Any]:
        """キーに紐づく有効なキャッシュデータを取得"""
        entry = self.get_entry(key)
        return entry.data if entry and not entry.expired else None

    def set_data(self, key: str, data: Any) -> None:
        """キーに紐づくキャッシュデータを保存"""
        self._save_entry(self._key_to_path(key), data)

    def invalidate(self, key: str) -> None:
        """キーに紐づくキャッシュファイルを削除"""
        self._remove(self._key_to_path(key))

    def clear_all(self) -> None:
        """キャッシュディレクトリをクリア"""
        if not self._cache_dir.exists():
            return
        for file_path in self._cache_dir.glob('*.json'):
            self._remove(file_path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_entry(self, path: Path) -> Optional[CacheEntry]:
        if not self.enabled:
            return None
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as exc:
            logger.warning('Failed to load cache file %s: %s', path, exc)
            return None
        timestamp = payload.get('timestamp')
        if timestamp is None:
            return None
        try:
            cached_at = datetime.fromisoformat(timestamp)
        except ValueError:
            return None
        return CacheEntry(data=payload.get('data'), expired=self._is_expired(cached_at))

    def _save_entry(self, path: Path, data: Any) -> None:
        if not self.enabled:
            return
        payload = {
            'timestamp': self._clock().isoformat(),
            'data': data,
            'ttl_seconds': self._ttl_seconds or None,
        }
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding='utf-8')

    def _is_expired(self, cached_at: datetime) -> bool:
        if self._ttl_seconds <= 0:
            return False
        if cached_at.tzinfo is None:
            cached_at = cached_at.replace(tzinfo=timezone.utc)
        expiry = cached_at + timedelta(seconds=self._ttl_seconds)
        return self._clock() > expiry

    def _remove(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Failed to remove cache file %s: %s", path, exc)

    def _key_to_path(self, key: str) -> Path:
        safe_key = re.sub(r'[^0-9A-Za-z_.-]', '_', key)
        return self._cache_dir / f'{safe_key}.json'
