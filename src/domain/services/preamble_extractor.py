"""会議録の前文（出席者リスト部分）を切り出す."""

from collections.abc import Iterable

from src.domain.value_objects.page_text import PageText


# 発言者の発言開始を示す記号
SPEECH_MARKER = "○"


def extract_preamble(pages: Iterable[PageText]) -> str | None:
    """最初の発言行（○で始まる行）より前のテキストを返す.

    Args:
        pages: ページ順のテキスト

    Returns:
        前文テキスト（行を改行で連結）。○行が一度も現れない場合は None
    """
    preamble_lines: list[str] = []
    for page in pages:
        for line in page.text.split("\n"):
            if line.lstrip().startswith(SPEECH_MARKER):
                return "\n".join(preamble_lines)
            preamble_lines.append(line)
    return None
