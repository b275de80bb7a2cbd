"""発言者名 → canonical speaker の解決サービス.

出席者索引と自治体単位のエイリアス索引に対して、精度を優先した順序で
ルールを適用する。候補が複数考えられる場合は推測せず未解決として返す。
DB 非依存の純粋なドメインロジック。
"""

import re

from collections.abc import Mapping

from src.domain.services.attendee_index import AttendeeIndex
from src.domain.services.name_normalizer import normalize_alias
from src.domain.value_objects.raw_speech_segment import Confidence
from src.domain.value_objects.resolve_result import MatchStrategy, ResolveResult


# 括弧ヒント: "山本(数)" / "山本（数）"
_PAREN_HINT_RE = re.compile(r"^(.+)[（(](.+)[）)]$")

# 前方一致に使う姓の最小文字数
_MIN_PREFIX_FAMILY_LEN = 2


class SpeakerResolver:
    """発言者名を speaker_id に解決する.

    解決優先順位（最初に一致したものを採用）:
    1. フルネーム完全一致 → HIGH
    2. 姓完全一致（同姓がいない姓のみ）→ HIGH
    3. エイリアス完全一致 → HIGH
    4. 括弧ヒント（"山本(数)" → 山本 で始まり「数」を含むフルネーム）→ HIGH
    5. 姓の前方一致（候補が 1 人のみ）→ MEDIUM
    6. 未解決 → speaker_id=None, LOW
    """

    def __init__(
        self,
        attendee_index: AttendeeIndex,
        alias_index: Mapping[str, str] | None = None,
    ) -> None:
        self._attendees = attendee_index
        self._aliases: Mapping[str, str] = alias_index or {}

    def resolve(
        self, speaker_name: str, speaker_role: str | None = None
    ) -> ResolveResult:
        """発言者名を解決する.

        Args:
            speaker_name: 発言者名（役職分離済み、空白を含んでもよい）
            speaker_role: 役職（現在の解決ルールでは使用しない）

        Returns:
            解決結果。解決できなければ ResolveResult.unresolved()
        """
        norm = normalize_alias(speaker_name)
        if not norm:
            return ResolveResult.unresolved()

        # 1. フルネーム完全一致
        speaker_id = self._attendees.by_full_name.get(norm)
        if speaker_id:
            return self._result(speaker_id, norm, MatchStrategy.EXACT_FULLNAME)

        # 2. 姓完全一致
        speaker_id = self._attendees.by_family_name.get(norm)
        if speaker_id:
            return self._result(
                speaker_id,
                self._attendees.full_name_of(speaker_id),
                MatchStrategy.EXACT_FAMILY,
            )

        # 3. エイリアス完全一致
        speaker_id = self._aliases.get(norm)
        if speaker_id:
            return self._result(
                speaker_id,
                self._attendees.full_name_of(speaker_id),
                MatchStrategy.ALIAS_NORM,
            )

        # 4. 括弧ヒント
        paren_match = self._match_paren_hint(norm)
        if paren_match is not None:
            full_name, speaker_id = paren_match
            return self._result(speaker_id, full_name, MatchStrategy.PAREN_HINT)

        # 5. 姓の前方一致（1 人のみ）
        prefix_match = self._match_family_prefix(norm)
        if prefix_match is not None:
            full_name, speaker_id = prefix_match
            return self._result(
                speaker_id, full_name, MatchStrategy.PREFIX, Confidence.MEDIUM
            )

        return ResolveResult.unresolved()

    def _match_paren_hint(self, norm: str) -> tuple[str, str] | None:
        """「山本(数)」形式の名前をフルネームに照合する."""
        match = _PAREN_HINT_RE.match(norm)
        if match is None:
            return None
        base, hint = match.group(1), match.group(2)
        for full_name, speaker_id in self._attendees.by_full_name.items():
            if (
                full_name.startswith(base)
                and len(full_name) > len(base)
                and hint in full_name
            ):
                return full_name, speaker_id
        return None

    def _match_family_prefix(self, norm: str) -> tuple[str, str] | None:
        """名前が同姓のいない姓で始まる場合、その出席者に照合する.

        例: "佐々木政策企画" → 佐々木智之（姓「佐々木」が 1 人のみ）
        候補が 0 人または複数人なら None。
        """
        candidates: list[tuple[str, str]] = []
        for family_name, speaker_id in self._attendees.by_family_name.items():
            if len(family_name) < _MIN_PREFIX_FAMILY_LEN:
                continue
            if len(norm) <= len(family_name) or not norm.startswith(family_name):
                continue
            full_name = self._attendees.full_name_of(speaker_id)
            if full_name:
                candidates.append((full_name, speaker_id))

        if len(candidates) == 1:
            return candidates[0]
        return None

    @staticmethod
    def _result(
        speaker_id: str,
        full_name: str | None,
        strategy: MatchStrategy,
        confidence: Confidence = Confidence.HIGH,
    ) -> ResolveResult:
        return ResolveResult(
            speaker_id=speaker_id,
            full_name=full_name,
            confidence=confidence,
            match_strategy=strategy,
        )
