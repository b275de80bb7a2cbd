"""発言者エイリアス索引と登録優先度のルール.

エイリアスは自治体単位で共有され、由来（manual > attendee_derived >
speech_derived）の優先度で競合を解決する。このモジュールは読み取り専用の
索引と、永続化層に渡す登録候補の生成のみを扱う。
"""

from collections.abc import Iterable, Iterator, Mapping

from src.domain.services.name_normalizer import normalize_alias
from src.domain.value_objects.attendee import Attendee
from src.domain.value_objects.speaker_alias import (
    AliasCandidate,
    AliasEntry,
    AliasType,
)


# 出席者由来エイリアスの重み
FULL_NAME_ALIAS_CONFIDENCE = 1.0
FAMILY_NAME_ALIAS_CONFIDENCE = 0.8
# 未解決発言者名の重み
SPEECH_ALIAS_CONFIDENCE = 0.3


def should_replace_alias(existing: AliasType, incoming: AliasType) -> bool:
    """別の発言者を指す既存エイリアスを上書きすべきか判定する.

    新しいエイリアスの優先度が既存より厳密に高い場合のみ上書きする。
    """
    return incoming.priority > existing.priority


class AliasIndex(Mapping[str, str]):
    """alias_norm → speaker_id の読み取り専用索引."""

    def __init__(self, aliases: Mapping[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = {}
        for alias, speaker_id in (aliases or {}).items():
            key = normalize_alias(alias)
            if key:
                self._aliases[key] = speaker_id

    @classmethod
    def from_entries(cls, entries: Iterable[AliasEntry]) -> "AliasIndex":
        """登録済みエイリアスから索引を構築する.

        同じキーのエントリが複数ある場合は優先度の高い由来を採用し、
        同じ優先度なら先に現れたものを残す。
        """
        chosen: dict[str, AliasEntry] = {}
        for entry in entries:
            key = normalize_alias(entry.alias_norm)
            if not key:
                continue
            current = chosen.get(key)
            if current is None or (
                current.speaker_id != entry.speaker_id
                and should_replace_alias(current.alias_type, entry.alias_type)
            ):
                chosen[key] = entry
        return cls({key: entry.speaker_id for key, entry in chosen.items()})

    def __getitem__(self, key: str) -> str:
        return self._aliases[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)


def attendee_alias_candidates(
    attendee: Attendee, speaker_id: str
) -> list[AliasCandidate]:
    """出席者からフルネーム・姓のエイリアス候補を生成する.

    姓は同姓の出席者がいても候補に含める（登録時の優先度ルールで解決する）。
    """
    candidates: list[AliasCandidate] = []
    for raw, confidence in (
        (attendee.full_name, FULL_NAME_ALIAS_CONFIDENCE),
        (attendee.family_name, FAMILY_NAME_ALIAS_CONFIDENCE),
    ):
        alias_norm = normalize_alias(raw)
        if not alias_norm:
            continue
        candidates.append(
            AliasCandidate(
                alias_raw=raw,
                alias_norm=alias_norm,
                alias_type=AliasType.ATTENDEE_DERIVED,
                confidence=confidence,
                speaker_id=speaker_id,
            )
        )
    return candidates


def speech_alias_candidate(speaker_name: str) -> AliasCandidate | None:
    """未解決の発言者名から発言由来のエイリアス候補を生成する."""
    alias_norm = normalize_alias(speaker_name)
    if not alias_norm:
        return None
    return AliasCandidate(
        alias_raw=speaker_name,
        alias_norm=alias_norm,
        alias_type=AliasType.SPEECH_DERIVED,
        confidence=SPEECH_ALIAS_CONFIDENCE,
    )
