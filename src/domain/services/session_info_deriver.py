"""会議録 URL のスラッグから会議（セッション）情報を導出する.

対応スラッグ例:
- "rei-wa-6nen-daiyon-kai-teireikai-3r061217" → 令和6年第4回定例会（第3日）
- "rinji-kai-r060515" → 令和6年臨時会
- "yosan-kessan-jounin-iinkai-r070310" → 令和7年予算決算常任委員会
"""

import re

from dataclasses import dataclass, field
from datetime import date

from src.domain.utils.japanese_era import format_era_year, to_western_year
from src.domain.value_objects.session_info import SessionInfo, SessionType


# 令和N年: 明示的な "rei-wa-N-nen" を優先し、なければ日付トークン "rNNdddd"
_REIWA_EXPLICIT_RE = re.compile(r"rei-?wa-?(\d+)-?nen")
_REIWA_FROM_DATE_RE = re.compile(r"[_\-]?r(\d{2})\d{4}")

# 第N回（よく使われる漢数字ローマ字 → 数字の順）
_ORDINAL_PATTERNS: list[tuple[re.Pattern[str], int]] = [
    (re.compile(r"daiikkai"), 1),
    (re.compile(r"dai-?ni-?kai"), 2),
    (re.compile(r"dai-?san-?kai"), 3),
    (re.compile(r"dai-?yon-?kai"), 4),
    (re.compile(r"dai-?go-?kai"), 5),
]
_ORDINAL_NUMERIC_RE = re.compile(r"dai-(\d+)kai")

# 会議種別（上から順に判定する）
_MEETING_TYPES: list[tuple[re.Pattern[str], str, SessionType]] = [
    (re.compile(r"teireikai"), "定例会", SessionType.REGULAR),
    (re.compile(r"rinji-?kai"), "臨時会", SessionType.EXTRA),
    (
        re.compile(r"yosan-?kessan-?jounin-?iinkai"),
        "予算決算常任委員会",
        SessionType.BUDGET_COMMITTEE,
    ),
    (
        re.compile(r"soumu-?bunkyou-?jounin-?iinkai"),
        "総務文教常任委員会",
        SessionType.COMMITTEE,
    ),
    (
        re.compile(r"sangyou-?kousei-?jounin-?iinkai"),
        "産業厚生常任委員会",
        SessionType.COMMITTEE,
    ),
    (re.compile(r"iinkai"), "委員会", SessionType.COMMITTEE),
]

# 複数日開催の定例会の日番号: "teireikai-3r" / "teireikai10r"
_REGULAR_SESSION_DAY_RE = re.compile(r"teireikai-?(\d+)r")

# 公開日: "r060214" → 令和6年2月14日
_PUBLISHED_ON_RE = re.compile(r"r(\d{2})(\d{2})(\d{2})(?:[_\-.]|$)", re.IGNORECASE)


def _slug(url: str) -> str:
    """URL 末尾のファイル名から拡張子を除き小文字化する."""
    name = url.rstrip("/").split("/")[-1]
    return re.sub(r"\.pdf$", "", name, flags=re.IGNORECASE).lower()


def _reiwa_year(slug: str, explicit_only: bool = False) -> int | None:
    match = _REIWA_EXPLICIT_RE.search(slug)
    if match is None and not explicit_only:
        match = _REIWA_FROM_DATE_RE.search(slug)
    if match is None:
        return None
    return int(match.group(1))


def _session_ordinal(slug: str) -> int | None:
    for pattern, ordinal in _ORDINAL_PATTERNS:
        if pattern.search(slug):
            return ordinal
    match = _ORDINAL_NUMERIC_RE.search(slug)
    if match:
        return int(match.group(1))
    return None


def _meeting_type(slug: str) -> tuple[str, SessionType] | None:
    for pattern, label, session_type in _MEETING_TYPES:
        if pattern.search(slug):
            return label, session_type
    return None


def _name_parts(reiwa_year: int, ordinal: int | None) -> list[str]:
    parts = [format_era_year(reiwa_year)]
    if ordinal is not None:
        parts.append(f"第{ordinal}回")
    return parts


def derive_session_info(url: str) -> SessionInfo | None:
    """URL から会議情報（年度・回次・種別）を導出する.

    定例会の日番号はセッション名に含めない（複数日の文書を同じ会議にまとめるため）。
    会議種別が判定できない場合は SessionType.OTHER とする。

    Returns:
        会議情報。令和の年が見つからない場合は None
    """
    slug = _slug(url)
    reiwa_year = _reiwa_year(slug)
    if reiwa_year is None:
        return None
    try:
        fiscal_year = to_western_year(reiwa_year)
    except ValueError:
        return None

    ordinal = _session_ordinal(slug)
    parts = _name_parts(reiwa_year, ordinal)

    session_type = SessionType.OTHER
    meeting_type = _meeting_type(slug)
    if meeting_type is not None:
        label, session_type = meeting_type
        parts.append(label)

    return SessionInfo(
        session_name="".join(parts),
        session_type=session_type,
        fiscal_year=fiscal_year,
        ordinal=ordinal,
    )


def derive_meeting_title(url: str) -> str | None:
    """URL から会議タイトルを導出する.

    例: "rei-wa-6nen-daiyon-kai-teireikai-3r061217" → "令和6年第4回定例会（第3日）"

    Returns:
        タイトル。明示的な令和N年または会議種別がない場合は None
    """
    slug = _slug(url)
    reiwa_year = _reiwa_year(slug, explicit_only=True)
    if reiwa_year is None:
        return None

    meeting_type = _meeting_type(slug)
    if meeting_type is None:
        return None
    label, session_type = meeting_type

    parts = _name_parts(reiwa_year, _session_ordinal(slug))
    parts.append(label)
    if session_type is SessionType.REGULAR:
        day_match = _REGULAR_SESSION_DAY_RE.search(slug)
        if day_match:
            parts.append(f"（第{day_match.group(1)}日）")
    return "".join(parts)


def parse_date_from_url(url: str) -> date | None:
    """URL の "r{YY}{MM}{DD}" トークンから公開日を求める.

    Returns:
        公開日。トークンがない、または存在しない日付の場合は None
    """
    match = _PUBLISHED_ON_RE.search(url)
    if match is None:
        return None
    reiwa_year, month, day = (int(g) for g in match.groups())
    try:
        return date(to_western_year(reiwa_year), month, day)
    except ValueError:
        return None


@dataclass
class SessionGroup:
    """同じ会議に属する文書 URL の集まり."""

    session: SessionInfo
    urls: list[str] = field(default_factory=list)


def group_documents_by_session(
    urls: list[str],
) -> tuple[list[SessionGroup], list[str]]:
    """文書 URL を (年度, セッション名) ごとにまとめる.

    Returns:
        (初出順のグループ一覧, 会議情報を導出できなかった URL 一覧)
    """
    groups: dict[tuple[int, str], SessionGroup] = {}
    unmatched: list[str] = []
    for url in urls:
        info = derive_session_info(url)
        if info is None:
            unmatched.append(url)
            continue
        key = (info.fiscal_year, info.session_name)
        group = groups.setdefault(key, SessionGroup(session=info))
        group.urls.append(url)
    return list(groups.values()), unmatched
