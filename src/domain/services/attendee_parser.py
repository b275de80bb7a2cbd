"""会議録前文から出席者リストを抽出するパーサー.

前文は「出席議員」「説明のため出席した者」「事務局職員」等の見出しで
セクションに分かれている。セクション状態を明示的な状態遷移で管理し、
セクションごとに議員行（議席番号付き）または役職+氏名行としてパースする。
"""

import re

from collections.abc import Callable, Iterable
from enum import Enum

from src.domain.services.family_name_estimator import (
    extract_family_name,
    guess_family_name_from_normalized,
    truncate_to_name,
)
from src.domain.services.name_normalizer import NAME_CHAR_CLASS, NameNormalizer
from src.domain.services.preamble_extractor import extract_preamble
from src.domain.services.role_titles import find_role_occurrences
from src.domain.value_objects.attendee import Attendee, AttendeeCategory
from src.domain.value_objects.page_text import PageText


class SectionState(Enum):
    """前文パース中のセクション状態."""

    NONE = "none"
    COUNCILOR = "councilor"
    EXECUTIVE = "executive"
    STAFF = "staff"


class LineKind(Enum):
    """前文の行種別."""

    BLANK = "blank"
    HEADING = "heading"
    SECTION_END = "section_end"
    ENTRY = "entry"


# セクション見出し（空白除去後の行に含まれるか判定）
_SECTION_HEADINGS: list[tuple[str, SectionState]] = [
    ("出席議員", SectionState.COUNCILOR),
    ("出席委員", SectionState.COUNCILOR),
    ("説明のため出席した者", SectionState.EXECUTIVE),
    ("規定により出席した者", SectionState.EXECUTIVE),
    ("事務局の職氏名", SectionState.STAFF),
    ("事務局職員", SectionState.STAFF),
]

# 次の大項目番号（例: "３．欠席議員"）でセクションが終わる
_SECTION_END_RE = re.compile(r"^[０-９\s]*[３-９]．")

# 議席番号: "１番" / "１ ０ 番"
_SEAT_NUMBER_RE = re.compile(r"([０-９][０-９\s]*)番")

# 人名文字の直後（空白を挟んでもよい）に全角数字が来る位置 = 次の議席番号の開始
_SEAT_BOUNDARY_RE = re.compile(rf"(?<=[{NAME_CHAR_CLASS}])\s*(?=[０-９])")

_COUNCILOR_ROLE = "議員"

_SECTION_CATEGORIES: dict[SectionState, AttendeeCategory] = {
    SectionState.COUNCILOR: AttendeeCategory.COUNCILOR,
    SectionState.EXECUTIVE: AttendeeCategory.EXECUTIVE,
    SectionState.STAFF: AttendeeCategory.STAFF,
}

_Transition = Callable[[SectionState, SectionState | None], SectionState]

# 行種別ごとの状態遷移（現在状態, 見出しが示す状態）→ 次状態
_SECTION_TRANSITIONS: dict[LineKind, _Transition] = {
    LineKind.BLANK: lambda current, _heading: current,
    LineKind.HEADING: lambda _current, heading: heading or SectionState.NONE,
    LineKind.SECTION_END: lambda _current, _heading: SectionState.NONE,
    LineKind.ENTRY: lambda current, _heading: current,
}


def detect_section(line: str) -> SectionState | None:
    """見出し行ならそのセクション状態を返す."""
    normalized = NameNormalizer.strip_whitespace(line)
    for phrase, state in _SECTION_HEADINGS:
        if phrase in normalized:
            return state
    return None


def classify_line(line: str) -> tuple[LineKind, SectionState | None]:
    """前文の 1 行を行種別に分類する.

    見出し判定を大項目番号判定より優先するため、
    「５．…説明のため出席した者…」は HEADING になる。
    """
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK, None
    heading = detect_section(stripped)
    if heading is not None:
        return LineKind.HEADING, heading
    if _SECTION_END_RE.match(stripped):
        return LineKind.SECTION_END, None
    return LineKind.ENTRY, None


def next_section_state(state: SectionState, line: str) -> tuple[SectionState, bool]:
    """1 行分の状態遷移を行う.

    Returns:
        (次状態, この行を出席者データとしてパースすべきか)
    """
    kind, heading = classify_line(line)
    next_state = _SECTION_TRANSITIONS[kind](state, heading)
    has_entry = kind is LineKind.ENTRY and next_state is not SectionState.NONE
    return next_state, has_entry


def has_seat_number(line: str) -> bool:
    """全角数字+「番」の議席番号を含むか判定する."""
    return _SEAT_NUMBER_RE.search(line) is not None


def parse_councilor_line(line: str) -> list[Attendee]:
    """議員行をパースする.

    1 行に複数名が並ぶことがある。
    例: "１番　南 澤 克 彦　　　２番　田 邊 介 三"
    """
    attendees: list[Attendee] = []

    for chunk in _SEAT_BOUNDARY_RE.split(line):
        chunk = chunk.strip()
        if not chunk:
            continue

        seat_match = _SEAT_NUMBER_RE.search(chunk)
        if seat_match is None:
            continue

        seat_digits = NameNormalizer.to_halfwidth_digits(
            NameNormalizer.strip_whitespace(seat_match.group(1))
        )
        name_text = chunk[seat_match.end() :].strip()
        full_name = NameNormalizer.strip_whitespace(name_text)
        if len(full_name) < 2:
            continue

        attendees.append(
            Attendee(
                full_name=full_name,
                family_name=extract_family_name(name_text),
                role=_COUNCILOR_ROLE,
                category=AttendeeCategory.COUNCILOR,
                seat_number=int(seat_digits) if seat_digits.isdigit() else None,
            )
        )

    return attendees


def parse_official_line(line: str, category: AttendeeCategory) -> list[Attendee]:
    """役職+氏名が交互に並ぶ行をパースする.

    例: "市 長 石 丸 伸 二 副 市 長 米 村 公 男"
        → [(市長, 石丸伸二), (副市長, 米村公男)]

    役職と次の役職の間の文字列を氏名候補とし、truncate_to_name で
    未知の役職・組織名を取り除いてから 2 文字以上のものを採用する。
    """
    normalized = NameNormalizer.strip_whitespace(line)
    occurrences = find_role_occurrences(normalized)

    attendees: list[Attendee] = []
    for index, occurrence in enumerate(occurrences):
        name_end = (
            occurrences[index + 1].start
            if index + 1 < len(occurrences)
            else len(normalized)
        )
        name = truncate_to_name(normalized[occurrence.end : name_end])
        if len(name) < 2:
            continue
        attendees.append(
            Attendee(
                full_name=name,
                family_name=guess_family_name_from_normalized(name),
                role=occurrence.role,
                category=category,
            )
        )

    return attendees


def _parse_section_line(line: str, state: SectionState) -> list[Attendee]:
    stripped = line.strip()
    if state is SectionState.COUNCILOR:
        if has_seat_number(stripped):
            return parse_councilor_line(stripped)
        # 委員会形式: "委員長芦田宏治副委員長山本数博" の役職者も議員として扱う
        return parse_official_line(stripped, AttendeeCategory.COUNCILOR)
    return parse_official_line(stripped, _SECTION_CATEGORIES[state])


def parse_attendees_from_preamble(preamble: str | None) -> list[Attendee]:
    """前文テキストから出席者リストを抽出する."""
    if not preamble:
        return []

    attendees: list[Attendee] = []
    state = SectionState.NONE
    for line in preamble.split("\n"):
        state, has_entry = next_section_state(state, line)
        if has_entry:
            attendees.extend(_parse_section_line(line, state))
    return attendees


def parse_attendees(pages: Iterable[PageText]) -> list[Attendee]:
    """会議録ページから出席者リストを抽出する.

    最初の○行より前を前文として扱う。○行がない文書は空リストを返す。
    """
    return parse_attendees_from_preamble(extract_preamble(pages))
