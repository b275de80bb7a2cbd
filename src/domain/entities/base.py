"""Base entity."""


class BaseEntity:
    """IDで同一性を判定するエンティティの基底クラス."""

    def __init__(self, id: str | None = None) -> None:
        self.id = id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseEntity) or type(self) is not type(other):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((type(self).__name__, self.id))
