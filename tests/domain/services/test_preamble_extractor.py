"""前文切り出しのテスト."""

from src.domain.services.preamble_extractor import extract_preamble
from src.domain.value_objects.page_text import PageText


class TestExtractPreamble:
    """extract_preamble のテスト."""

    def test_text_before_first_marker(self) -> None:
        pages = [
            PageText(page_number=1, text="会議録\n出席議員"),
            PageText(page_number=2, text="１番　南 澤 克 彦\n○大 下 議 長\n発言"),
        ]
        assert extract_preamble(pages) == "会議録\n出席議員\n１番　南 澤 克 彦"

    def test_indented_marker(self) -> None:
        """行頭の空白の後の○も発言開始とみなす."""
        pages = [PageText(page_number=1, text="前文\n　○大下議長")]
        assert extract_preamble(pages) == "前文"

    def test_marker_on_first_line(self) -> None:
        pages = [PageText(page_number=1, text="○大下議長\n発言")]
        assert extract_preamble(pages) == ""

    def test_no_marker(self) -> None:
        pages = [PageText(page_number=1, text="前文のみのテキスト\n何も発言なし")]
        assert extract_preamble(pages) is None

    def test_empty_pages(self) -> None:
        assert extract_preamble([]) is None
