"""重複発言者の統合計画サービス.

会議録の抽出ゆれにより「山田太郎」と「山田太郎総務部長」のように
同一人物が別の発言者として登録されることがある。短い名前が長い名前の
先頭に一致する場合、短い方を正とし長い方を重複として統合する。
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.entities.speaker import Speaker


MIN_CANONICAL_NAME_LENGTH = 3


@dataclass
class MergeGroup:
    """統合単位（正の発言者と、そこに統合される重複発言者）."""

    canonical: Speaker
    duplicates: list[Speaker] = field(default_factory=list)


def build_merge_groups(speakers: Iterable[Speaker]) -> list[MergeGroup]:
    """自治体ごとに重複発言者の統合グループを作る.

    名前の短い順に走査し、3文字以上の名前がほかの発言者名の真の接頭辞で
    あれば正とする。一度統合対象になった発言者は再び使わない。

    Args:
        speakers: 発言者一覧（ID が付与済みであること）

    Returns:
        統合グループ一覧（自治体の初出順、各自治体内は正の名前の短い順）
    """
    by_municipality: dict[str, list[Speaker]] = defaultdict(list)
    for speaker in speakers:
        by_municipality[speaker.municipality_id].append(speaker)

    groups: list[MergeGroup] = []
    for members in by_municipality.values():
        ordered = sorted(members, key=lambda s: (len(s.name), s.name))
        consumed: set[int] = set()
        for i, candidate in enumerate(ordered):
            if i in consumed or len(candidate.name) < MIN_CANONICAL_NAME_LENGTH:
                continue
            group = MergeGroup(canonical=candidate)
            for j in range(i + 1, len(ordered)):
                other = ordered[j]
                if j in consumed or len(other.name) == len(candidate.name):
                    continue
                if other.name.startswith(candidate.name):
                    group.duplicates.append(other)
                    consumed.add(j)
            if group.duplicates:
                consumed.add(i)
                groups.append(group)
    return groups
