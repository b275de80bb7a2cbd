"""姓推定・名前切り出しヒューリスティクスのテスト."""

import pytest

from src.domain.services.family_name_estimator import (
    extract_family_name,
    guess_family_name_from_normalized,
    truncate_to_name,
)


class TestExtractFamilyName:
    """extract_family_name のテスト."""

    def test_four_single_chars(self) -> None:
        """スペース区切り4文字名から2文字姓を抽出."""
        assert extract_family_name("南 澤 克 彦") == "南澤"

    def test_three_single_chars(self) -> None:
        """スペース区切り3文字名から2文字姓を抽出."""
        assert extract_family_name("石 丸 伸") == "石丸"

    def test_two_single_chars(self) -> None:
        """スペース区切り2文字名は1文字姓+1文字名として扱う."""
        assert extract_family_name("林 太") == "林"

    def test_no_space(self) -> None:
        """スペースなしの名前はそのまま返す."""
        assert extract_family_name("南澤克彦") == "南澤克彦"

    def test_family_and_given(self) -> None:
        """姓名の2分割パターン."""
        assert extract_family_name("南澤 克彦") == "南澤"


class TestGuessFamilyNameFromNormalized:
    """guess_family_name_from_normalized のテスト."""

    def test_default_two_chars(self) -> None:
        assert guess_family_name_from_normalized("南澤克彦") == "南澤"

    def test_known_one_char_family(self) -> None:
        assert guess_family_name_from_normalized("林太郎") == "林"

    def test_two_char_name(self) -> None:
        assert guess_family_name_from_normalized("南澤") == "南澤"


class TestTruncateToName:
    """truncate_to_name のテスト."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("石丸伸二", "石丸伸二"),
            ("高藤誠", "高藤誠"),
            ("沖田伸二政策企画", "沖田伸二"),
            ("沖田伸二政策企画課長黒田貢一", "沖田伸二"),
            ("補佐小野光基社会環境課", "小野光基"),
            ("兼福祉事務所長井上和志", "井上和志"),
            ("兼給食センター所長内藤麻妃", "内藤麻妃"),
            ("田中太郎・次郎", "田中太郎"),
            ("田中太郎（代理）", "田中太郎"),
            ("田中太郎(代理)", "田中太郎"),
        ],
    )
    def test_truncate(self, raw: str, expected: str) -> None:
        assert truncate_to_name(raw) == expected

    def test_known_role_after_concurrent_prefix(self) -> None:
        """「兼」+既知役職の接頭辞を除去する."""
        assert truncate_to_name("兼総務課長田中太郎") == "田中太郎"

    def test_bigram_at_start_is_kept(self) -> None:
        """先頭2文字は姓とみなし組織名判定をしない."""
        assert truncate_to_name("市民太郎") == "市民太郎"
