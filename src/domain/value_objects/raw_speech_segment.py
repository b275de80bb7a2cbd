"""発言セグメントと信頼度の値オブジェクト."""

from dataclasses import dataclass
from enum import Enum


class Confidence(Enum):
    """パース・解決結果の信頼度."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def score(self) -> float:
        """下流のフィルタリング用の数値スコア."""
        return _CONFIDENCE_SCORES[self]


_CONFIDENCE_SCORES: dict[Confidence, float] = {
    Confidence.HIGH: 1.0,
    Confidence.MEDIUM: 0.7,
    Confidence.LOW: 0.3,
}


@dataclass(frozen=True)
class ParsedSpeakerName:
    """発言者ラベルを名前と役職に分離した結果."""

    name: str
    role: str
    confidence: Confidence


@dataclass(frozen=True)
class RawSpeechSegment:
    """発言者ラベル付きの発言テキスト（発言者未解決）.

    speaker_name_raw は原文の空白を保持する（監査・デバッグ用）。
    """

    speaker_name_raw: str
    speaker_name: str
    speaker_role: str
    speech_text: str
    page_start: int
    page_end: int
    confidence: Confidence
