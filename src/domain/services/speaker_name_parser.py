"""発言者ラベルを名前と役職に分離する."""

from src.domain.services.name_normalizer import NameNormalizer
from src.domain.services.role_titles import match_role_suffix
from src.domain.value_objects.raw_speech_segment import Confidence, ParsedSpeakerName


def parse_speaker_name(raw_label: str) -> ParsedSpeakerName:
    """発言者ラベルから名前と役職を分離する.

    例: "大 下 議 長" → name="大下", role="議長", confidence=HIGH

    役職が見つからない場合は空白除去後のラベル全体を名前とし、
    confidence は MEDIUM（空文字なら LOW）とする。
    """
    normalized = NameNormalizer.strip_whitespace(raw_label)

    matched = match_role_suffix(normalized)
    if matched is not None:
        name, role = matched
        return ParsedSpeakerName(name=name, role=role, confidence=Confidence.HIGH)

    return ParsedSpeakerName(
        name=normalized,
        role="",
        confidence=Confidence.MEDIUM if normalized else Confidence.LOW,
    )
