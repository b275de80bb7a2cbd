"""Speaker directory repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.domain.entities.speaker import Speaker
from src.domain.value_objects.attendee import Attendee
from src.domain.value_objects.speaker_alias import AliasCandidate, AliasEntry


class SpeakerDirectoryRepository(ABC):
    """Repository interface for the per-municipality speaker directory."""

    @abstractmethod
    async def upsert_attendees(
        self, municipality_id: str, attendees: Sequence[Attendee]
    ) -> list[str]:
        """出席者を登録（既存なら更新）し、入力と同じ順で speaker_id を返す."""
        pass

    @abstractmethod
    async def load_aliases(self, municipality_id: str) -> list[AliasEntry]:
        """自治体の登録済みエイリアスを取得する."""
        pass

    @abstractmethod
    async def register_alias_candidates(
        self, municipality_id: str, candidates: Sequence[AliasCandidate]
    ) -> int:
        """エイリアス候補を登録し、登録（または置換）した件数を返す."""
        pass

    @abstractmethod
    async def list_speakers(self, municipality_id: str) -> list[Speaker]:
        """自治体の発言者一覧を取得する."""
        pass
