"""会議（セッション）情報の値オブジェクト."""

from dataclasses import dataclass
from enum import Enum


class SessionType(Enum):
    """会議種別."""

    REGULAR = "regular"
    EXTRA = "extra"
    COMMITTEE = "committee"
    BUDGET_COMMITTEE = "budget_committee"
    OTHER = "other"


@dataclass(frozen=True)
class SessionInfo:
    """URL スラッグから導出した会議情報.

    例: 令和6年第4回定例会 → fiscal_year=2024, ordinal=4, session_type=REGULAR
    """

    session_name: str
    session_type: SessionType
    fiscal_year: int
    ordinal: int | None = None
