"""発言者エイリアスの値オブジェクト."""

from dataclasses import dataclass
from enum import Enum


class AliasType(Enum):
    """エイリアスの由来.

    優先順位は manual > attendee_derived > speech_derived。
    """

    MANUAL = "manual"
    ATTENDEE_DERIVED = "attendee_derived"
    SPEECH_DERIVED = "speech_derived"

    @property
    def priority(self) -> int:
        return _ALIAS_PRIORITIES[self]


_ALIAS_PRIORITIES: dict[AliasType, int] = {
    AliasType.MANUAL: 3,
    AliasType.ATTENDEE_DERIVED: 2,
    AliasType.SPEECH_DERIVED: 1,
}


@dataclass(frozen=True)
class AliasEntry:
    """登録済みエイリアス（alias_norm → speaker_id）."""

    alias_norm: str
    speaker_id: str
    alias_type: AliasType
    confidence: float = 1.0


@dataclass(frozen=True)
class AliasCandidate:
    """永続化層に登録を依頼するエイリアス候補.

    発言由来の候補は話者が未確定のため speaker_id が None になる。
    """

    alias_raw: str
    alias_norm: str
    alias_type: AliasType
    confidence: float
    speaker_id: str | None = None
