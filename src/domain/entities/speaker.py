"""Speaker entity."""

from src.domain.entities.base import BaseEntity


class Speaker(BaseEntity):
    """自治体ごとの発言者ディレクトリに登録された発言者を表すエンティティ.

    ID は永続化層が払い出す。同一人物が役職違いで複数登録されることがあり、
    その統合は speaker_merge_planner が計画する。
    """

    def __init__(
        self,
        name: str,
        municipality_id: str,
        family_name: str | None = None,
        role: str | None = None,
        id: str | None = None,
    ) -> None:
        super().__init__(id)
        self.name = name
        self.municipality_id = municipality_id
        self.family_name = family_name
        self.role = role

    def __str__(self) -> str:
        parts = [self.name]
        if self.role:
            parts.append(f"({self.role})")
        return " ".join(parts)
