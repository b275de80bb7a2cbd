"""出席者名 → speaker_id の索引."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from src.domain.value_objects.attendee import Attendee


@dataclass(frozen=True)
class AttendeeIndex:
    """1 文書分の出席者索引.

    by_family_name には同姓の出席者が 1 人だけの姓のみを含める。
    同姓が複数いる場合、その姓は索引から除外する（どちらかを選ばない）。
    同姓の人数は出席者の行数ではなく異なる speaker_id の数で数える。
    同一人物が前文に 2 回載っていても（例: 議員欄と委員長欄）その姓は残る。
    """

    by_full_name: Mapping[str, str]
    by_family_name: Mapping[str, str]

    @classmethod
    def build(cls, entries: Iterable[tuple[Attendee, str]]) -> "AttendeeIndex":
        """(出席者, speaker_id) の組から索引を構築する.

        同一人物（同じ speaker_id）が複数回出現しても同姓扱いにはしない。
        """
        by_full_name: dict[str, str] = {}
        family_ids: dict[str, set[str]] = {}

        for attendee, speaker_id in entries:
            by_full_name[attendee.full_name] = speaker_id
            family_ids.setdefault(attendee.family_name, set()).add(speaker_id)

        by_family_name = {
            family: next(iter(ids))
            for family, ids in family_ids.items()
            if family and len(ids) == 1
        }
        return cls(
            by_full_name=MappingProxyType(by_full_name),
            by_family_name=MappingProxyType(by_family_name),
        )

    @classmethod
    def empty(cls) -> "AttendeeIndex":
        return cls.build([])

    def full_name_of(self, speaker_id: str) -> str | None:
        """speaker_id → フルネームの逆引き（最初に登録されたもの）."""
        for full_name, candidate_id in self.by_full_name.items():
            if candidate_id == speaker_id:
                return full_name
        return None

    def __len__(self) -> int:
        return len(self.by_full_name)
