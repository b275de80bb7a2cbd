"""会議録パースユースケース.

1文書分のページテキストから出席者と発言を抽出し、各発言の話者を
自治体の発言者ディレクトリ（出席者・登録済みエイリアス）に照らして解決する。
"""

from __future__ import annotations

from src.application.dtos.parse_minutes_dto import (
    ParseMinutesInputDTO,
    ParseMinutesOutputDTO,
    ResolvedSpeechDTO,
)
from src.common.logging import get_logger
from src.domain.exceptions import RepositoryError
from src.domain.repositories.speaker_directory_repository import (
    SpeakerDirectoryRepository,
)
from src.domain.services.alias_index import (
    AliasIndex,
    attendee_alias_candidates,
    speech_alias_candidate,
)
from src.domain.services.attendee_index import AttendeeIndex
from src.domain.services.attendee_parser import parse_attendees
from src.domain.services.speaker_resolver import SpeakerResolver
from src.domain.services.speaker_role_classifier import (
    SpeakerRole,
    default_role_for_category,
    to_speaker_role,
)
from src.domain.services.speech_parser import parse_speeches
from src.domain.value_objects.attendee import AttendeeCategory
from src.domain.value_objects.speaker_alias import AliasCandidate


class ParseMinutesUseCase:
    """会議録パースユースケース."""

    def __init__(self, speaker_directory_repository: SpeakerDirectoryRepository):
        self._directory_repo = speaker_directory_repository
        self._logger = get_logger(self.__class__.__name__)

    async def execute(self, input_dto: ParseMinutesInputDTO) -> ParseMinutesOutputDTO:
        """会議録1文書をパースし、発言者を解決する.

        処理フロー:
        1. 前文から出席者を抽出
        2. 出席者をディレクトリに登録し speaker_id を得る
        3. 出席者インデックス・エイリアスインデックスを構築
        4. 発言を抽出し、出現順に話者を解決
        5. エイリアス候補を作成（指定時は登録）
        """
        try:
            municipality_id = input_dto.municipality_id

            # 1. 出席者抽出
            attendees = parse_attendees(input_dto.pages)

            # 2. 出席者登録
            speaker_ids = await self._directory_repo.upsert_attendees(
                municipality_id, attendees
            )
            if len(speaker_ids) != len(attendees):
                raise RepositoryError(
                    operation="upsert_attendees",
                    reason=(
                        f"出席者{len(attendees)}件に対し"
                        f"speaker_idが{len(speaker_ids)}件返されました"
                    ),
                )

            # 3. インデックス構築
            attendee_index = AttendeeIndex.build(zip(attendees, speaker_ids))
            alias_entries = await self._directory_repo.load_aliases(municipality_id)
            alias_index = AliasIndex.from_entries(alias_entries)
            resolver = SpeakerResolver(attendee_index, alias_index)
            categories = {
                speaker_id: attendee.category
                for attendee, speaker_id in zip(attendees, speaker_ids)
            }

            # 4. 発言抽出と話者解決
            segments = parse_speeches(input_dto.pages)
            if not segments:
                self._logger.warning(
                    "発言が見つかりません: municipality=%s, pages=%d",
                    municipality_id,
                    len(input_dto.pages),
                )
                candidates = self._attendee_candidates(attendees, speaker_ids)
                registered = await self._register_candidates(input_dto, candidates)
                return ParseMinutesOutputDTO(
                    success=True,
                    message="発言が見つかりません",
                    attendees=attendees,
                    alias_candidates=candidates,
                    registered_alias_count=registered,
                )

            speeches: list[ResolvedSpeechDTO] = []
            unresolved_names: list[str] = []
            for sequence, segment in enumerate(segments):
                result = resolver.resolve(segment.speaker_name, segment.speaker_role)
                confidence = result.confidence.score
                speeches.append(
                    ResolvedSpeechDTO(
                        sequence=sequence,
                        speaker_id=result.speaker_id,
                        speaker_name=segment.speaker_name,
                        speaker_name_raw=segment.speaker_name_raw,
                        speaker_role=segment.speaker_role,
                        role_category=self._role_category(
                            segment.speaker_role, result.speaker_id, categories
                        ),
                        speech_text=segment.speech_text,
                        page_start=segment.page_start,
                        page_end=segment.page_end,
                        parse_confidence=segment.confidence,
                        confidence=confidence,
                        match_strategy=result.match_strategy,
                        needs_review=(
                            confidence < input_dto.review_confidence_threshold
                        ),
                    )
                )
                if not result.is_resolved:
                    self._logger.debug(
                        "発言者未解決: %s (%s)",
                        segment.speaker_name,
                        segment.speaker_role,
                    )
                    unresolved_names.append(segment.speaker_name)

            # 5. エイリアス候補
            candidates = self._attendee_candidates(attendees, speaker_ids)
            candidates.extend(self._speech_candidates(unresolved_names))

            registered = await self._register_candidates(input_dto, candidates)

            matched_count = sum(1 for s in speeches if s.speaker_id is not None)
            unmatched_count = len(speeches) - matched_count
            review_count = sum(1 for s in speeches if s.needs_review)
            self._logger.info(
                "会議録パース完了: 出席者=%d, 発言=%d, 解決=%d, 未解決=%d",
                len(attendees),
                len(speeches),
                matched_count,
                unmatched_count,
            )

            return ParseMinutesOutputDTO(
                success=True,
                message=(
                    f"{len(speeches)}件の発言を抽出し、"
                    f"{matched_count}件の発言者を解決しました"
                ),
                attendees=attendees,
                speeches=speeches,
                alias_candidates=candidates,
                matched_count=matched_count,
                unmatched_count=unmatched_count,
                review_count=review_count,
                registered_alias_count=registered,
            )

        except Exception as e:
            self._logger.error("会議録パースエラー: %s", e, exc_info=True)
            return ParseMinutesOutputDTO(
                success=False,
                message=f"会議録パース中にエラーが発生しました: {e!s}",
            )

    @staticmethod
    def _role_category(
        speaker_role: str | None,
        speaker_id: str | None,
        categories: dict[str, AttendeeCategory],
    ) -> SpeakerRole:
        """役職名から分類できない場合は、解決先の出席者区分で補う."""
        role = to_speaker_role(speaker_role)
        if role is SpeakerRole.UNKNOWN and speaker_id in categories:
            return default_role_for_category(categories[speaker_id])
        return role

    async def _register_candidates(
        self, input_dto: ParseMinutesInputDTO, candidates: list[AliasCandidate]
    ) -> int:
        """登録指定があればエイリアス候補をディレクトリに書き込む."""
        if not input_dto.register_aliases or not candidates:
            return 0
        return await self._directory_repo.register_alias_candidates(
            input_dto.municipality_id, candidates
        )

    @staticmethod
    def _attendee_candidates(attendees, speaker_ids) -> list[AliasCandidate]:
        candidates: list[AliasCandidate] = []
        for attendee, speaker_id in zip(attendees, speaker_ids):
            candidates.extend(attendee_alias_candidates(attendee, speaker_id))
        return candidates

    @staticmethod
    def _speech_candidates(names: list[str]) -> list[AliasCandidate]:
        """未解決の発言者名ごとに1件（正規化後の重複は除く）."""
        seen: set[str] = set()
        candidates: list[AliasCandidate] = []
        for name in names:
            candidate = speech_alias_candidate(name)
            if candidate is None or candidate.alias_norm in seen:
                continue
            seen.add(candidate.alias_norm)
            candidates.append(candidate)
        return candidates
