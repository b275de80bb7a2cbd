"""InMemorySpeakerDirectory のテスト."""

import pytest

from src.application.dtos.parse_minutes_dto import ParseMinutesInputDTO
from src.application.usecases.parse_minutes_usecase import ParseMinutesUseCase
from src.domain.value_objects.attendee import Attendee, AttendeeCategory
from src.domain.value_objects.page_text import PageText
from src.domain.value_objects.speaker_alias import (
    AliasCandidate,
    AliasEntry,
    AliasType,
)
from src.infrastructure.persistence.in_memory_speaker_directory import (
    InMemorySpeakerDirectory,
)


def _attendee(full_name: str, family_name: str, role: str = "議員") -> Attendee:
    return Attendee(
        full_name=full_name,
        family_name=family_name,
        role=role,
        category=AttendeeCategory.COUNCILOR,
    )


def _candidate(alias: str, speaker_id: str | None, alias_type: AliasType):
    return AliasCandidate(
        alias_raw=alias,
        alias_norm=alias,
        alias_type=alias_type,
        confidence=1.0,
        speaker_id=speaker_id,
    )


class TestUpsertAttendees:
    @pytest.mark.asyncio
    async def test_same_name_gets_same_id(self) -> None:
        directory = InMemorySpeakerDirectory()

        first = await directory.upsert_attendees(
            "m1", [_attendee("南澤克彦", "南澤"), _attendee("石丸伸二", "石丸")]
        )
        second = await directory.upsert_attendees(
            "m1", [_attendee("石丸伸二", "石丸", "市長")]
        )

        assert len(set(first)) == 2
        assert second == [first[1]]
        speakers = await directory.list_speakers("m1")
        assert [s.name for s in speakers] == ["南澤克彦", "石丸伸二"]
        assert speakers[1].role == "市長"

    @pytest.mark.asyncio
    async def test_municipalities_are_separate(self) -> None:
        directory = InMemorySpeakerDirectory()
        [id_m1] = await directory.upsert_attendees("m1", [_attendee("南澤克彦", "南澤")])
        [id_m2] = await directory.upsert_attendees("m2", [_attendee("南澤克彦", "南澤")])
        assert id_m1 != id_m2


class TestRegisterAliasCandidates:
    @pytest.mark.asyncio
    async def test_priority_rule(self) -> None:
        directory = InMemorySpeakerDirectory(
            [("m1", AliasEntry("大下", "sp-1", AliasType.ATTENDEE_DERIVED))]
        )

        written = await directory.register_alias_candidates(
            "m1",
            [
                _candidate("大下", "sp-2", AliasType.ATTENDEE_DERIVED),
                _candidate("宍戸", "sp-3", AliasType.ATTENDEE_DERIVED),
            ],
        )
        assert written == 1
        aliases = {e.alias_norm: e.speaker_id for e in await directory.load_aliases("m1")}
        assert aliases == {"大下": "sp-1", "宍戸": "sp-3"}

        written = await directory.register_alias_candidates(
            "m1", [_candidate("大下", "sp-2", AliasType.MANUAL)]
        )
        assert written == 1
        aliases = {e.alias_norm: e.speaker_id for e in await directory.load_aliases("m1")}
        assert aliases["大下"] == "sp-2"

    @pytest.mark.asyncio
    async def test_same_speaker_is_not_downgraded(self) -> None:
        directory = InMemorySpeakerDirectory(
            [("m1", AliasEntry("大下", "sp-1", AliasType.MANUAL))]
        )
        written = await directory.register_alias_candidates(
            "m1", [_candidate("大下", "sp-1", AliasType.ATTENDEE_DERIVED)]
        )
        assert written == 0
        [entry] = await directory.load_aliases("m1")
        assert entry.alias_type is AliasType.MANUAL

    @pytest.mark.asyncio
    async def test_candidates_without_speaker_are_pending(self) -> None:
        directory = InMemorySpeakerDirectory()
        candidate = _candidate("山本", None, AliasType.SPEECH_DERIVED)

        written = await directory.register_alias_candidates("m1", [candidate])

        assert written == 0
        assert await directory.load_aliases("m1") == []
        assert directory.pending_candidates("m1") == [candidate]


class TestWithParseMinutesUseCase:
    @pytest.mark.asyncio
    async def test_registered_aliases_resolve_next_document(self) -> None:
        """前の文書で登録したフルネームのエイリアスで次の文書を解決する."""
        directory = InMemorySpeakerDirectory()
        use_case = ParseMinutesUseCase(directory)
        first = [
            PageText(
                page_number=1,
                text="２．出席議員\n１番　南 澤 克 彦\n○南澤議員\n質問します。",
            )
        ]
        second = [PageText(page_number=1, text="○南 澤 克 彦\n再質問します。")]

        first_result = await use_case.execute(
            ParseMinutesInputDTO(
                municipality_id="m1", pages=first, register_aliases=True
            )
        )
        second_result = await use_case.execute(
            ParseMinutesInputDTO(municipality_id="m1", pages=second)
        )

        assert first_result.registered_alias_count == 2
        speaker_id = first_result.speeches[0].speaker_id
        assert speaker_id is not None
        assert second_result.attendees == []
        assert second_result.speeches[0].speaker_id == speaker_id
