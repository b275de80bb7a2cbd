"""ページ単位の抽出テキストを表す値オブジェクト."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageText:
    """PDF 等から抽出した 1 ページ分のテキスト.

    ページ番号は 1 始まり。パーサーは受け取った順序のまま処理する。
    """

    page_number: int
    text: str
