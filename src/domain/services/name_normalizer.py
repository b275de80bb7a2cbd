"""名前正規化ユーティリティ.

会議録テキストの空白除去、全角数字→半角変換、
人名に使われる文字種（漢字・かな）の判定を提供する。
"""

import re


# 全角・半角スペース（PDF抽出で字間に挿入される空白を含む）
_WHITESPACE_RE = re.compile(r"\s+")

# 全角数字→半角数字
_ZEN_TO_HAN_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")

# 人名に出現する文字（漢字 + ひらがな + カタカナ + 踊り字等）
# 々: 佐々木、〆: 〆木、ヶ: 竹ヶ原、ー: カタカナ名の長音
NAME_CHAR_CLASS = (
    r"\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff"
    r"々〆ヶ\u3041-\u3096\u30a1-\u30fa\u30fc"
)

# 発言者名として許容する文字（人名文字 + 括弧 + 空白）
_SPEAKER_NAME_RE = re.compile(rf"[{NAME_CHAR_CLASS}()（）\s]+")


class NameNormalizer:
    """名前正規化ユーティリティ."""

    @staticmethod
    def strip_whitespace(text: str) -> str:
        """全ての空白を除去する.

        例: "南 澤 克 彦" → "南澤克彦"
        """
        return _WHITESPACE_RE.sub("", text)

    @staticmethod
    def split_tokens(text: str) -> list[str]:
        """空白区切りのトークンに分割する."""
        return text.split()

    @staticmethod
    def to_halfwidth_digits(text: str) -> str:
        """全角数字を半角数字に変換する."""
        return text.translate(_ZEN_TO_HAN_DIGITS)

    @staticmethod
    def is_speaker_name_text(text: str) -> bool:
        """発言者名として妥当な文字だけで構成されているか判定する."""
        return bool(text) and _SPEAKER_NAME_RE.fullmatch(text) is not None


def normalize_alias(raw: str) -> str:
    """エイリアス照合用のキーに正規化する（空白除去のみ）."""
    return NameNormalizer.strip_whitespace(raw)
