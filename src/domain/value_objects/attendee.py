"""出席者（議員・説明員・事務局職員）を表す値オブジェクト."""

from dataclasses import dataclass
from enum import Enum


class AttendeeCategory(Enum):
    """出席者の区分."""

    COUNCILOR = "councilor"
    EXECUTIVE = "executive"
    STAFF = "staff"


@dataclass(frozen=True)
class Attendee:
    """会議録の前文から抽出した出席者.

    full_name は常に空白を含まない。seat_number は議席番号があるときのみ設定される。
    """

    full_name: str
    family_name: str
    role: str
    category: AttendeeCategory
    seat_number: int | None = None
