"""発言者解決結果の値オブジェクト."""

from dataclasses import dataclass
from enum import Enum

from src.domain.value_objects.raw_speech_segment import Confidence


class MatchStrategy(Enum):
    """発言者解決に使われた戦略."""

    EXACT_FULLNAME = "exact_fullname"
    EXACT_FAMILY = "exact_family"
    ALIAS_NORM = "alias_norm"
    PAREN_HINT = "paren_hint"
    PREFIX = "prefix"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ResolveResult:
    """発言者名→canonical speaker の解決結果.

    未解決の場合は speaker_id=None, confidence=LOW, match_strategy=UNRESOLVED。
    """

    speaker_id: str | None
    full_name: str | None
    confidence: Confidence
    match_strategy: MatchStrategy

    @property
    def is_resolved(self) -> bool:
        return self.speaker_id is not None

    @classmethod
    def unresolved(cls) -> "ResolveResult":
        return cls(
            speaker_id=None,
            full_name=None,
            confidence=Confidence.LOW,
            match_strategy=MatchStrategy.UNRESOLVED,
        )
