"""会議録に出現する役職名テーブルと照合ロジック.

出席者リストのパース、発言者ラベルの分離の双方で同じテーブルを使う。
テーブルは具体的な役職ほど前に並べる（複合役職 → 汎用役職）。
"""

import re

from dataclasses import dataclass

from src.domain.services.name_normalizer import NameNormalizer


# 具体性の高い順。後方一致判定はこの順で最初にマッチしたものを採用する。
ROLE_TITLES: tuple[str, ...] = (
    "予算決算常任委員長",
    "総務文教常任委員長",
    "産業建設常任委員長",
    "産業厚生常任委員長",
    "農業委員会事務局長",
    "常任委員長",
    "特別委員長",
    "副委員長",
    "委員長",
    "副議長",
    "議長",
    "議員",
    "副市長",
    "市長",
    "教育次長",
    "教育長",
    "福祉保健部長",
    "総務部長",
    "企画部長",
    "市民部長",
    "産業部長",
    "建設部長",
    "消防長",
    "危機管理監",
    "財政課長",
    "総務課長",
    "会計管理者",
    "水道局長",
    "事務局長",
    "監査委員",
    "部長",
    "課長",
    "局長",
    "参事",
    "次長",
    "委員",
    "書記",
)

# 同一位置では長い役職を優先させるため、長い順に並べる
_TITLES_LONGEST_FIRST: tuple[str, ...] = tuple(
    sorted(ROLE_TITLES, key=len, reverse=True)
)

_ROLE_TITLE_RE = re.compile("|".join(re.escape(t) for t in _TITLES_LONGEST_FIRST))

# 発言者名として許容する最大文字数（空白除去後）
MAX_SPEAKER_NAME_LENGTH = 8


@dataclass(frozen=True)
class RoleOccurrence:
    """文字列中の役職名の出現位置."""

    role: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.role)


def find_role_occurrences(text: str) -> list[RoleOccurrence]:
    """文字列中の役職名を先頭から順に列挙する.

    カーソル位置以降で最も早く出現する役職を採用し、同じ位置なら最長の役職を選ぶ。
    採用した役職の直後からカーソルを進めて繰り返す。

    Args:
        text: 空白除去済みの文字列

    Returns:
        出現順の役職リスト
    """
    occurrences: list[RoleOccurrence] = []
    cursor = 0
    while cursor < len(text):
        match = _ROLE_TITLE_RE.search(text, cursor)
        if match is None:
            break
        occurrences.append(RoleOccurrence(role=match.group(0), start=match.start()))
        cursor = match.end()
    return occurrences


def find_speaker_role(
    normalized: str, max_name_length: int = MAX_SPEAKER_NAME_LENGTH
) -> RoleOccurrence | None:
    """発言者行の先頭部分から「名前+役職」の役職を探す.

    役職ごとに行内の最初の出現位置を求め、最も早い位置の役職を採用する
    （同じ位置なら最長の役職）。最初の出現が行頭の役職は名前部分が空になる
    ため候補から外す。後方に同じ役職が再出現しても採用しない。
    名前部分は 1 文字以上 max_name_length 文字以下で、人名文字のみであること。

    Args:
        normalized: ○を除き空白を除去した発言者行

    Returns:
        採用した役職の出現位置。該当なしは None
    """
    best: RoleOccurrence | None = None
    for title in _TITLES_LONGEST_FIRST:
        start = normalized.find(title)
        if start <= 0:
            continue
        if best is None or start < best.start:
            best = RoleOccurrence(role=title, start=start)

    if best is None or best.start > max_name_length:
        return None
    if not NameNormalizer.is_speaker_name_text(normalized[: best.start]):
        return None
    return best


def match_role_suffix(normalized: str) -> tuple[str, str] | None:
    """末尾の役職名を分離する.

    Returns:
        (名前, 役職) のタプル。役職が見つからない、または名前が空なら None
    """
    for title in ROLE_TITLES:
        if normalized.endswith(title):
            name = normalized[: -len(title)]
            if name:
                return name, title
    return None
