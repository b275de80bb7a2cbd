"""ページテキスト・エイリアスファイルの読み込み.

ページテキストは次のいずれかの形式に対応する:
- JSON: [{"page": 1, "text": "..."}, ...]
- プレーンテキスト: フォームフィード（\\f）区切りで 1 ページずつ
"""

import json

from pathlib import Path
from typing import Any

from src.common.logging import get_logger
from src.domain.exceptions import DocumentLoadError
from src.domain.value_objects.page_text import PageText
from src.domain.value_objects.speaker_alias import AliasEntry, AliasType


logger = get_logger(__name__)

PAGE_SEPARATOR = "\f"


def _read_text(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(str(path), str(e)) from e


def _read_json(path: Path, encoding: str) -> Any:
    try:
        return json.loads(_read_text(path, encoding))
    except json.JSONDecodeError as e:
        raise DocumentLoadError(str(path), f"JSONとして解析できません: {e}") from e


def _page_from_record(path: Path, index: int, record: Any) -> PageText:
    if isinstance(record, str):
        return PageText(page_number=index + 1, text=record)
    if not isinstance(record, dict) or not isinstance(record.get("text"), str):
        raise DocumentLoadError(str(path), f"{index}番目の要素に text がありません")
    page_number = record.get("page", index + 1)
    if not isinstance(page_number, int):
        raise DocumentLoadError(str(path), f"ページ番号が不正です: {page_number!r}")
    return PageText(page_number=page_number, text=record["text"])


def load_pages(path: str | Path, encoding: str = "utf-8") -> list[PageText]:
    """ページテキストを読み込む.

    拡張子が .json の場合は JSON として、それ以外はプレーンテキストとして扱う。

    Raises:
        DocumentLoadError: ファイルが読めない、または形式が不正な場合
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        data = _read_json(path, encoding)
        if not isinstance(data, list):
            raise DocumentLoadError(str(path), "ページの配列である必要があります")
        pages = [_page_from_record(path, i, record) for i, record in enumerate(data)]
    else:
        chunks = _read_text(path, encoding).split(PAGE_SEPARATOR)
        pages = [PageText(page_number=i + 1, text=text) for i, text in enumerate(chunks)]

    logger.debug("ページを読み込みました: %s (%d pages)", path, len(pages))
    return pages


def load_alias_entries(path: str | Path, encoding: str = "utf-8") -> list[AliasEntry]:
    """登録済みエイリアスを読み込む.

    各要素は {"alias_norm" または "alias", "speaker_id", "alias_type", "confidence"}。
    alias_type を省略した場合は manual とする。

    Raises:
        DocumentLoadError: ファイルが読めない、または形式が不正な場合
    """
    path = Path(path)
    data = _read_json(path, encoding)
    if not isinstance(data, list):
        raise DocumentLoadError(str(path), "エイリアスの配列である必要があります")

    entries: list[AliasEntry] = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise DocumentLoadError(str(path), f"{index}番目の要素が不正です")
        alias = record.get("alias_norm", record.get("alias"))
        speaker_id = record.get("speaker_id")
        if not alias or speaker_id is None:
            raise DocumentLoadError(
                str(path), f"{index}番目の要素に alias と speaker_id が必要です"
            )
        try:
            alias_type = AliasType(record.get("alias_type", AliasType.MANUAL.value))
            confidence = float(record.get("confidence", 1.0))
        except (TypeError, ValueError) as e:
            raise DocumentLoadError(str(path), f"{index}番目の要素が不正です: {e}") from e
        entries.append(
            AliasEntry(
                alias_norm=str(alias),
                speaker_id=str(speaker_id),
                alias_type=alias_type,
                confidence=confidence,
            )
        )
    return entries
