"""出席者名から姓を推定するヒューリスティクス.

会議録 PDF の出席者名は「南 澤 克 彦」のように 1 文字ずつ空白で区切られることが多く、
姓名の境界は空白から判断できない。日本人の姓の文字数分布（2 文字姓が大半）に
基づいて推定するため、想定外の姓では誤推定する。
"""

import re

from src.domain.services.name_normalizer import NameNormalizer
from src.domain.services.role_titles import ROLE_TITLES


# 既知の 1 文字姓（この自治体の出席者名簿に合わせたもの）
ONE_CHAR_FAMILY_NAMES: frozenset[str] = frozenset(
    {
        "林",
        "森",
        "原",
        "関",
        "堀",
        "辻",
        "東",
        "西",
        "谷",
        "泉",
        "柳",
        "杉",
        "馬",
        "沢",
    }
)

# 名前の直後に続く組織名・未知役職の先頭に現れる語
_ORGANIZATION_BIGRAMS: frozenset[str] = frozenset(
    {
        "政策",
        "企画",
        "総務",
        "財政",
        "事務",
        "社会",
        "環境",
        "福祉",
        "保健",
        "健康",
        "子育",
        "教育",
        "学校",
        "生涯",
        "学習",
        "文化",
        "産業",
        "商工",
        "観光",
        "農林",
        "農業",
        "建設",
        "土木",
        "都市",
        "上下",
        "下水",
        "水道",
        "市民",
        "地域",
        "振興",
        "危機",
        "管理",
        "防災",
        "消防",
        "会計",
        "税務",
        "人事",
        "秘書",
        "情報",
        "議会",
        "選挙",
        "監査",
        "給食",
        "支所",
    }
)

# 名前の後ろを切る区切り文字
_NAME_TERMINATOR_RE = re.compile(r"[・･(（]")

# 「兼」+ 未知役職（「長」で終わる）
_CONCURRENT_UNKNOWN_ROLE_RE = re.compile(r"^兼[^長]{1,12}長")

_ASSISTANT_PREFIX = "補佐"
_CONCURRENT_PREFIX = "兼"

_MIN_NAME_LENGTH = 2


def extract_family_name(spaced_name: str) -> str:
    """空白区切りの名前から姓を推定する.

    例:
        "南 澤 克 彦" → "南澤"（1 文字ずつ 4 要素以上: 先頭 2 要素）
        "石 丸 伸" → "石丸"（1 文字ずつ 3 要素: 2 文字姓を優先）
        "林 太" → "林"（1 文字ずつ 2 要素: 1 文字姓 + 1 文字名）
        "南澤 克彦" → "南澤"（姓名で区切られている: 先頭要素）
        "南澤克彦" → "南澤克彦"（区切りなし: そのまま）
    """
    tokens = NameNormalizer.split_tokens(spaced_name)
    if len(tokens) <= 1:
        return NameNormalizer.strip_whitespace(spaced_name)

    if all(len(token) == 1 for token in tokens):
        if len(tokens) == 2:
            return tokens[0]
        return tokens[0] + tokens[1]

    return tokens[0]


def guess_family_name_from_normalized(name: str) -> str:
    """空白を含まない名前から姓を推定する.

    2 文字以下はそのまま、既知の 1 文字姓で始まる場合はその 1 文字、
    それ以外は先頭 2 文字を姓とする。
    """
    if len(name) <= 2:
        return name
    if name[0] in ONE_CHAR_FAMILY_NAMES:
        return name[0]
    return name[:2]


def _strip_role_prefix(name: str) -> str:
    """名前の先頭に付いた「補佐」「兼○○長」を除去する."""
    while True:
        if name.startswith(_ASSISTANT_PREFIX):
            name = name[len(_ASSISTANT_PREFIX) :]
            continue
        if name.startswith(_CONCURRENT_PREFIX):
            known = _leading_known_role(name[len(_CONCURRENT_PREFIX) :])
            if known:
                name = name[len(_CONCURRENT_PREFIX) + len(known) :]
                continue
            match = _CONCURRENT_UNKNOWN_ROLE_RE.match(name)
            if match:
                name = name[match.end() :]
                continue
        return name


def _leading_known_role(text: str) -> str | None:
    """先頭に一致する既知役職のうち最長のものを返す."""
    matches = [title for title in ROLE_TITLES if text.startswith(title)]
    if not matches:
        return None
    return max(matches, key=len)


def truncate_to_name(name: str) -> str:
    """役職の間に挟まった文字列から人名部分だけを取り出す.

    既知役職テーブルにない役職や組織名が名前の後ろに続く場合の補正で、
    確実な抽出ではなくベストエフォートのヒューリスティクス。

    例:
        "沖田伸二政策企画" → "沖田伸二"
        "補佐小野光基社会環境課" → "小野光基"
        "兼福祉事務所長井上和志" → "井上和志"
        "田中太郎（代理）" → "田中太郎"
    """
    name = _strip_role_prefix(name)

    terminator = _NAME_TERMINATOR_RE.search(name)
    if terminator:
        name = name[: terminator.start()]

    for index in range(_MIN_NAME_LENGTH, len(name) - 1):
        if name[index : index + 2] in _ORGANIZATION_BIGRAMS:
            return name[:index]
    return name
