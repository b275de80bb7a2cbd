"""発言者の役職カテゴリ分類サービス.

会議録に現れる役職名（「議員」「市長」「総務部長」など）を
議員・市長・執行部・議長職・職員のいずれかに分類する。
"""

from enum import Enum

from src.domain.value_objects.attendee import AttendeeCategory


class SpeakerRole(Enum):
    """発言者の役職カテゴリ."""

    COUNCILOR = "councilor"
    MAYOR = "mayor"
    EXECUTIVE = "executive"
    CHAIR = "chair"
    STAFF = "staff"
    UNKNOWN = "unknown"


# === 完全一致パターン ===

_COUNCILOR_TITLES: frozenset[str] = frozenset({"議員"})

_MAYOR_TITLES: frozenset[str] = frozenset({"市長"})

# 市長以外の特別職
_EXECUTIVE_TITLES: frozenset[str] = frozenset({"副市長", "教育長"})

# 議事進行役（委員長は部分一致でも判定する）
_CHAIR_TITLES: frozenset[str] = frozenset({"議長", "副議長"})

# === 部分一致パターン ===

_CHAIR_KEYWORDS: frozenset[str] = frozenset({"委員長"})

# 執行部の職員（「総務部長」「財政課長」「農業委員会事務局長」など）
_STAFF_KEYWORDS: frozenset[str] = frozenset(
    {
        "部長",
        "課長",
        "局長",
        "参事",
        "次長",
        "監査委員",
        "危機管理監",
        "消防長",
        "会計管理者",
        "書記",
    }
)

# カテゴリとパターンの対応テーブル（上から順に判定する）
_ROLE_PATTERNS: list[tuple[SpeakerRole, frozenset[str], frozenset[str]]] = [
    (SpeakerRole.COUNCILOR, _COUNCILOR_TITLES, frozenset()),
    (SpeakerRole.MAYOR, _MAYOR_TITLES, frozenset()),
    (SpeakerRole.EXECUTIVE, _EXECUTIVE_TITLES, frozenset()),
    (SpeakerRole.CHAIR, _CHAIR_TITLES, _CHAIR_KEYWORDS),
    (SpeakerRole.STAFF, frozenset(), _STAFF_KEYWORDS),
]

_CATEGORY_DEFAULT_ROLES: dict[AttendeeCategory, SpeakerRole] = {
    AttendeeCategory.COUNCILOR: SpeakerRole.COUNCILOR,
    AttendeeCategory.EXECUTIVE: SpeakerRole.EXECUTIVE,
    AttendeeCategory.STAFF: SpeakerRole.STAFF,
}


def to_speaker_role(role: str | None) -> SpeakerRole:
    """役職名を役職カテゴリに分類する.

    Args:
        role: 役職名（例: "議員", "副委員長", "総務部長"）

    Returns:
        SpeakerRole。役職名がない、またはどのパターンにも該当しない場合は UNKNOWN
    """
    if not role:
        return SpeakerRole.UNKNOWN
    stripped = role.strip()
    for speaker_role, exact_titles, keywords in _ROLE_PATTERNS:
        if stripped in exact_titles:
            return speaker_role
        if keywords and any(keyword in stripped for keyword in keywords):
            return speaker_role
    return SpeakerRole.UNKNOWN


def default_role_for_category(category: AttendeeCategory) -> SpeakerRole:
    """出席者の区分から既定の役職カテゴリを返す."""
    return _CATEGORY_DEFAULT_ROLES[category]
