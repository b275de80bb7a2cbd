"""会議録パースの入出力DTO."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.services.speaker_role_classifier import SpeakerRole
from src.domain.value_objects.attendee import Attendee
from src.domain.value_objects.page_text import PageText
from src.domain.value_objects.raw_speech_segment import Confidence
from src.domain.value_objects.resolve_result import MatchStrategy
from src.domain.value_objects.speaker_alias import AliasCandidate


@dataclass
class ParseMinutesInputDTO:
    """会議録パースの入力DTO."""

    municipality_id: str
    pages: list[PageText]
    review_confidence_threshold: float = 0.7
    register_aliases: bool = False


@dataclass
class ResolvedSpeechDTO:
    """発言者解決済みの発言1件."""

    sequence: int
    speaker_id: str | None
    speaker_name: str
    speaker_name_raw: str
    speaker_role: str
    role_category: SpeakerRole
    speech_text: str
    page_start: int
    page_end: int
    parse_confidence: Confidence
    confidence: float
    match_strategy: MatchStrategy
    needs_review: bool = False


@dataclass
class ParseMinutesOutputDTO:
    """会議録パースの出力DTO."""

    success: bool
    message: str
    attendees: list[Attendee] = field(default_factory=list)
    speeches: list[ResolvedSpeechDTO] = field(default_factory=list)
    alias_candidates: list[AliasCandidate] = field(default_factory=list)
    matched_count: int = 0
    unmatched_count: int = 0
    review_count: int = 0
    registered_alias_count: int = 0

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    @property
    def speech_count(self) -> int:
        return len(self.speeches)
