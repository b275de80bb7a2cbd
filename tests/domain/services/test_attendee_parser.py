"""出席者パーサーのテスト."""

import pytest

from src.domain.services.attendee_parser import (
    LineKind,
    SectionState,
    classify_line,
    detect_section,
    next_section_state,
    parse_attendees,
    parse_attendees_from_preamble,
    parse_councilor_line,
    parse_official_line,
)
from src.domain.value_objects.attendee import Attendee, AttendeeCategory
from src.domain.value_objects.page_text import PageText


def _pages(*lines: str) -> list[PageText]:
    return [PageText(page_number=1, text="\n".join(lines))]


class TestDetectSection:
    """detect_section のテスト."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("２．出席議員は次のとおりである。（１５名）", SectionState.COUNCILOR),
            ("２．出 席 委 員 は 次 の と お り", SectionState.COUNCILOR),
            (
                "５．地方自治法第１２１条により説明のため出席した者の職氏名",
                SectionState.EXECUTIVE,
            ),
            ("５．委員会条例第２２条の規定により出席した者", SectionState.EXECUTIVE),
            ("６．職務のため出席した事務局職員", SectionState.STAFF),
            ("６．議会事務局の職氏名", SectionState.STAFF),
            ("３．欠席議員", None),
        ],
    )
    def test_detect(self, line: str, expected: SectionState | None) -> None:
        assert detect_section(line) == expected


class TestSectionTransitions:
    """セクション状態遷移のテスト."""

    def test_heading_takes_priority_over_section_end(self) -> None:
        """大項目番号付きの見出し行は見出しとして扱う."""
        kind, state = classify_line("５．説明のため出席した者の職氏名")
        assert kind is LineKind.HEADING
        assert state is SectionState.EXECUTIVE

    def test_section_end(self) -> None:
        kind, _ = classify_line("３．欠席議員")
        assert kind is LineKind.SECTION_END

    def test_blank_line_keeps_state(self) -> None:
        assert next_section_state(SectionState.COUNCILOR, "   ") == (
            SectionState.COUNCILOR,
            False,
        )

    def test_entry_outside_section_is_ignored(self) -> None:
        assert next_section_state(SectionState.NONE, "１番　南 澤 克 彦") == (
            SectionState.NONE,
            False,
        )

    def test_entry_inside_section(self) -> None:
        assert next_section_state(SectionState.COUNCILOR, "１番　南 澤 克 彦") == (
            SectionState.COUNCILOR,
            True,
        )

    def test_section_end_resets_state(self) -> None:
        assert next_section_state(SectionState.COUNCILOR, "３．欠席議員") == (
            SectionState.NONE,
            False,
        )

    def test_seat_number_line_is_not_section_end(self) -> None:
        """「３番」は大項目番号ではない."""
        kind, _ = classify_line("３番　石 飛 空")
        assert kind is LineKind.ENTRY


class TestParseCouncilorLine:
    """parse_councilor_line のテスト."""

    def test_two_councilors_on_one_line(self) -> None:
        result = parse_councilor_line(
            "１番　南 澤 克 彦　　　　　　　　　２番　田 邊 介 三"
        )
        assert result == [
            Attendee(
                full_name="南澤克彦",
                family_name="南澤",
                role="議員",
                category=AttendeeCategory.COUNCILOR,
                seat_number=1,
            ),
            Attendee(
                full_name="田邊介三",
                family_name="田邊",
                role="議員",
                category=AttendeeCategory.COUNCILOR,
                seat_number=2,
            ),
        ]

    def test_two_digit_seat_number(self) -> None:
        result = parse_councilor_line("１５番　大 下 正 幸")
        assert len(result) == 1
        assert result[0].full_name == "大下正幸"
        assert result[0].seat_number == 15

    def test_spaced_seat_number(self) -> None:
        result = parse_councilor_line("１ ０ 番　山 本 数 博")
        assert result[0].seat_number == 10

    def test_line_without_seat_number(self) -> None:
        assert parse_councilor_line("前文テキスト") == []

    def test_single_char_name_is_skipped(self) -> None:
        assert parse_councilor_line("１番　林") == []


class TestParseOfficialLine:
    """parse_official_line のテスト."""

    def test_mayor_and_deputy(self) -> None:
        result = parse_official_line(
            "市長石丸伸二副市長米村公男", AttendeeCategory.EXECUTIVE
        )
        assert [(a.role, a.full_name, a.family_name) for a in result] == [
            ("市長", "石丸伸二", "石丸"),
            ("副市長", "米村公男", "米村"),
        ]
        assert all(a.category is AttendeeCategory.EXECUTIVE for a in result)
        assert all(a.seat_number is None for a in result)

    def test_spaced_line(self) -> None:
        result = parse_official_line(
            "市 長 石 丸 伸 二 副 市 長 米 村 公 男", AttendeeCategory.EXECUTIVE
        )
        assert [a.full_name for a in result] == ["石丸伸二", "米村公男"]

    def test_department_head(self) -> None:
        result = parse_official_line("総務部長高藤誠", AttendeeCategory.EXECUTIVE)
        assert len(result) == 1
        assert result[0].full_name == "高藤誠"
        assert result[0].role == "総務部長"

    def test_staff(self) -> None:
        result = parse_official_line(
            "事務局長田中太郎書記山田花子", AttendeeCategory.STAFF
        )
        assert [(a.role, a.full_name) for a in result] == [
            ("事務局長", "田中太郎"),
            ("書記", "山田花子"),
        ]
        assert all(a.category is AttendeeCategory.STAFF for a in result)

    @pytest.mark.parametrize(
        ("line", "expected_name"),
        [
            ("財政課長沖田伸二政策企画課長黒田貢一", "沖田伸二"),
            ("事務局長高藤誠事務局次長國岡浩祐", "高藤誠"),
            ("福祉保健部長兼福祉事務所長井上和志", "井上和志"),
            ("課長補佐小野光基", "小野光基"),
        ],
    )
    def test_unknown_role_in_between(self, line: str, expected_name: str) -> None:
        """未知の役職が挟まっても人名部分を取り出す."""
        result = parse_official_line(line, AttendeeCategory.EXECUTIVE)
        names = [a.full_name for a in result]
        assert expected_name in names

    @pytest.mark.parametrize(
        ("line", "role", "expected_name"),
        [
            ("総務部長新谷洋子総務部政策統括監佐々木満朗", "総務部長", "新谷洋子"),
            ("教育次長柳川知昭危機管理監神田正広", "教育次長", "柳川知昭"),
            ("総務課長田中太郎総務係長日野貴恵", "総務課長", "田中太郎"),
        ],
    )
    def test_first_attendee(self, line: str, role: str, expected_name: str) -> None:
        result = parse_official_line(line, AttendeeCategory.EXECUTIVE)
        assert result[0].role == role
        assert result[0].full_name == expected_name


class TestParseAttendees:
    """parse_attendees のテスト."""

    def test_plenary_session(self) -> None:
        """本会議パターンの出席者リスト."""
        pages = _pages(
            "安芸高田市議会定例会会議録",
            "２．出席議員は次のとおりである。（１５名）",
            "１番　南 澤 克 彦　　　　　　　　　２番　田 邊 介 三",
            "３番　石 飛 空",
            "３．欠席議員",
            "なし",
            "５．地方自治法第１２１条により説明のため出席した者の職氏名（１６名）",
            "市長石丸伸二副市長米村公男",
            "総務部長高藤誠",
            "○大 下 議 長",
            "　ただいまの出席議員は15名であります。",
        )

        attendees = parse_attendees(pages)

        councilors = [a for a in attendees if a.category is AttendeeCategory.COUNCILOR]
        executives = [a for a in attendees if a.category is AttendeeCategory.EXECUTIVE]
        assert len(councilors) == 3
        assert len(executives) == 3
        assert councilors[0].full_name == "南澤克彦"
        assert councilors[0].family_name == "南澤"
        assert councilors[2].full_name == "石飛空"
        assert executives[0].full_name == "石丸伸二"
        assert executives[0].role == "市長"

    def test_committee_session(self) -> None:
        """委員会パターン（議席番号なし）の出席者リスト."""
        pages = _pages(
            "総務文教常任委員会会議録",
            "２．出席委員は次のとおりである。（７名）",
            "委員長芦田宏治副委員長山本数博",
            "委員南澤克彦",
            "５．安芸高田市議会委員会条例第２２条の規定により出席した者の職氏名（３４名）",
            "市長石丸伸二",
            "○芦 田 委 員 長",
            "　開会します。",
        )

        attendees = parse_attendees(pages)

        councilors = [a for a in attendees if a.category is AttendeeCategory.COUNCILOR]
        executives = [a for a in attendees if a.category is AttendeeCategory.EXECUTIVE]
        assert [a.role for a in councilors] == ["委員長", "副委員長", "委員"]
        assert [a.full_name for a in councilors] == ["芦田宏治", "山本数博", "南澤克彦"]
        assert [a.full_name for a in executives] == ["石丸伸二"]

    def test_staff_section(self) -> None:
        pages = _pages(
            "６．職務のため出席した事務局職員の職氏名",
            "事務局長田中太郎書記山田花子",
            "○大下議長",
            "開議します。",
        )
        attendees = parse_attendees(pages)
        assert [a.category for a in attendees] == [
            AttendeeCategory.STAFF,
            AttendeeCategory.STAFF,
        ]

    def test_preamble_across_pages(self) -> None:
        pages = [
            PageText(page_number=1, text="２．出席議員\n１番　南 澤 克 彦"),
            PageText(page_number=2, text="２番　田 邊 介 三\n○大 下 議 長\n発言"),
        ]
        assert [a.seat_number for a in parse_attendees(pages)] == [1, 2]

    def test_no_marker(self) -> None:
        """○行がない文書は空リスト."""
        assert parse_attendees(_pages("前文のみのテキスト", "何も発言なし")) == []

    def test_empty_pages(self) -> None:
        assert parse_attendees([]) == []

    def test_empty_preamble(self) -> None:
        assert parse_attendees_from_preamble(None) == []
        assert parse_attendees_from_preamble("") == []
