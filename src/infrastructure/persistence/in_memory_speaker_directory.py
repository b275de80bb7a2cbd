"""In-memory implementation of SpeakerDirectoryRepository.

CLI 実行や単体テストのための、プロセス内に閉じた発言者ディレクトリ。
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence

from src.common.logging import get_logger
from src.domain.entities.speaker import Speaker
from src.domain.repositories.speaker_directory_repository import (
    SpeakerDirectoryRepository,
)
from src.domain.services.alias_index import should_replace_alias
from src.domain.value_objects.attendee import Attendee
from src.domain.value_objects.speaker_alias import AliasCandidate, AliasEntry


logger = get_logger(__name__)


class InMemorySpeakerDirectory(SpeakerDirectoryRepository):
    """発言者とエイリアスを自治体ごとにメモリ上で保持する.

    同一自治体・同一氏名の出席者は同じ発言者として扱う。
    """

    def __init__(self, aliases: Iterable[tuple[str, AliasEntry]] = ()) -> None:
        self._speakers: dict[str, dict[str, Speaker]] = defaultdict(dict)
        self._aliases: dict[str, dict[str, AliasEntry]] = defaultdict(dict)
        self._pending: dict[str, list[AliasCandidate]] = defaultdict(list)
        self._next_id = 1
        for municipality_id, entry in aliases:
            self._put_alias(municipality_id, entry)

    async def upsert_attendees(
        self, municipality_id: str, attendees: Sequence[Attendee]
    ) -> list[str]:
        speakers = self._speakers[municipality_id]
        speaker_ids: list[str] = []
        for attendee in attendees:
            speaker = speakers.get(attendee.full_name)
            if speaker is None:
                speaker = Speaker(
                    name=attendee.full_name,
                    municipality_id=municipality_id,
                    family_name=attendee.family_name or None,
                    role=attendee.role,
                    id=f"{municipality_id}-{self._next_id}",
                )
                self._next_id += 1
                speakers[attendee.full_name] = speaker
            else:
                speaker.role = attendee.role
            speaker_ids.append(speaker.id)  # type: ignore[arg-type]
        return speaker_ids

    async def load_aliases(self, municipality_id: str) -> list[AliasEntry]:
        return list(self._aliases[municipality_id].values())

    async def register_alias_candidates(
        self, municipality_id: str, candidates: Sequence[AliasCandidate]
    ) -> int:
        written = 0
        for candidate in candidates:
            if candidate.speaker_id is None:
                # 話者未確定の候補は確認待ちとして保持する
                self._pending[municipality_id].append(candidate)
                continue
            entry = AliasEntry(
                alias_norm=candidate.alias_norm,
                speaker_id=candidate.speaker_id,
                alias_type=candidate.alias_type,
                confidence=candidate.confidence,
            )
            if self._put_alias(municipality_id, entry):
                written += 1
        logger.debug(
            "エイリアス登録: municipality=%s, written=%d, pending=%d",
            municipality_id,
            written,
            len(self._pending[municipality_id]),
        )
        return written

    async def list_speakers(self, municipality_id: str) -> list[Speaker]:
        return list(self._speakers[municipality_id].values())

    def pending_candidates(self, municipality_id: str) -> list[AliasCandidate]:
        """話者未確定のエイリアス候補を返す."""
        return list(self._pending[municipality_id])

    def _put_alias(self, municipality_id: str, entry: AliasEntry) -> bool:
        aliases = self._aliases[municipality_id]
        existing = aliases.get(entry.alias_norm)
        if existing is not None:
            if existing.speaker_id == entry.speaker_id:
                # 同じ発言者なら由来の格上げのみ反映する
                if entry.alias_type.priority <= existing.alias_type.priority:
                    return False
            elif not should_replace_alias(existing.alias_type, entry.alias_type):
                return False
        aliases[entry.alias_norm] = entry
        return True
