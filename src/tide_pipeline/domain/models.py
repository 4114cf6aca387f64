"""
潮汐レポートのドメインモデル

horaire-maree.fr のページから抽出した潮汐データを表現する。
すべてのレコードは抽出ごとに新しく生成され、生成後は変更されない。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, NamedTuple, Optional, Tuple

# 値が見つからなかったことを示す番兵値
MISSING_TIME = "--"
MISSING_HEIGHT = "-- m"
MISSING_COEFFICIENT = 0


class TimeHeight(NamedTuple):
    """セル1つ分の時刻と潮位のペア"""
    time: str
    height: str


@dataclass(frozen=True)
class HalfDayTide:
    """午前または午後の干潮・満潮1サイクル"""
    coefficient: int = MISSING_COEFFICIENT
    low_time: str = MISSING_TIME
    low_height: str = MISSING_HEIGHT
    high_time: str = MISSING_TIME
    high_height: str = MISSING_HEIGHT

    @classmethod
    def from_cells(cls, coefficient: int, low: TimeHeight, high: TimeHeight) -> "HalfDayTide":
        """係数と干潮/満潮セルの解析結果から組み立てる"""
        return cls(
            coefficient=coefficient,
            low_time=low.time,
            low_height=low.height,
            high_time=high.time,
            high_height=high.height,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coefficient": self.coefficient,
            "lowTime": self.low_time,
            "lowHeight": self.low_height,
            "highTime": self.high_time,
            "highHeight": self.high_height,
        }


@dataclass(frozen=True)
class TideDay:
    """1日分の潮汐（ラベル + 午前/午後）"""
    label: str
    morning: HalfDayTide = field(default_factory=HalfDayTide)
    afternoon: HalfDayTide = field(default_factory=HalfDayTide)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "morning": self.morning.to_dict(),
            "afternoon": self.afternoon.to_dict(),
        }


@dataclass(frozen=True)
class TideReport:
    """1回の抽出結果全体"""
    today_date: str
    today: TideDay
    upcoming_days: Tuple[TideDay, ...] = ()
    sunrise: Optional[str] = None
    sunset: Optional[str] = None

    def __post_init__(self):
        # list で渡された場合もタプルに揃えて不変にする
        if not isinstance(self.upcoming_days, tuple):
            object.__setattr__(self, "upcoming_days", tuple(self.upcoming_days))

    def to_dict(self) -> Dict[str, Any]:
        """API応答用の辞書に変換"""
        return {
            "todayDate": self.today_date,
            "today": self.today.to_dict(),
            "upcomingDays": [day.to_dict() for day in self.upcoming_days],
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }


def window_days(report: TideReport, days: Optional[int]) -> TideReport:
    """先頭 days 日分の予報だけを残したレポートを返す（表示層向け）

    Args:
        report: 元のレポート（変更されない）
        days: 残す日数。None なら全件

    Returns:
        TideReport: 予報を切り詰めた新しいレポート
    """
    if days is None:
        return report
    if days < 0:
        raise ValueError(f"days must be non-negative: {days}")
    return replace(report, upcoming_days=report.upcoming_days[:days])
