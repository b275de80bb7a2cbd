"""会議録本文を発言者ごとの発言セグメントに分割するパーサー.

○で始まる発言者行を区切りとして、発言者ラベルと発言テキストを蓄積する。
蓄積状態は明示的な状態遷移テーブルで管理する。発言者の同定は行わない
（SpeakerResolver の責務）。
"""

import re

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from src.domain.services.name_normalizer import NAME_CHAR_CLASS, NameNormalizer
from src.domain.services.preamble_extractor import SPEECH_MARKER
from src.domain.services.role_titles import find_speaker_role
from src.domain.services.speaker_name_parser import parse_speaker_name
from src.domain.value_objects.page_text import PageText
from src.domain.value_objects.raw_speech_segment import (
    ParsedSpeakerName,
    RawSpeechSegment,
)


# 区切り行（"～～～～◯～～～～" 等）
_SEPARATOR_RE = re.compile(r"^[～~○◯\s]+$")

# ページ番号のみの行
_PAGE_NUMBER_RE = re.compile(r"^\s*[0-9]+\s*$")

# フォールバック: ○ + 短い名前のみ（役職なし、同じ行に発言なし）
_SPEAKER_FALLBACK_RE = re.compile(
    rf"^{SPEECH_MARKER}([{NAME_CHAR_CLASS}]{{1,10}}"
    rf"(?:\s+[{NAME_CHAR_CLASS}]{{1,5}})*)\s*$"
)


class PageLine(NamedTuple):
    """ページ番号付きの本文行."""

    text: str
    page_number: int


@dataclass(frozen=True)
class SpeakerLineMatch:
    """発言者行の解析結果.

    raw は原文の空白を保持した発言者ラベル、rest は同じ行に続く発言テキスト。
    """

    raw: str
    rest: str


class SpeechParserState(Enum):
    """発言蓄積の状態."""

    IDLE = "idle"
    SPEAKING = "speaking"


class LineEvent(Enum):
    """本文行の種別."""

    SEPARATOR = "separator"
    SPEAKER = "speaker"
    MARKER_TEXT = "marker_text"
    TEXT = "text"


class SpeechAction(Enum):
    """行に対して行う処理."""

    SKIP = "skip"
    START_SPEAKER = "start_speaker"
    APPEND = "append"
    DISCARD = "discard"


# (現在状態, 行種別) → (処理, 次状態)
SPEECH_TRANSITIONS: dict[
    tuple[SpeechParserState, LineEvent], tuple[SpeechAction, SpeechParserState]
] = {
    (SpeechParserState.IDLE, LineEvent.SEPARATOR): (
        SpeechAction.SKIP,
        SpeechParserState.IDLE,
    ),
    (SpeechParserState.IDLE, LineEvent.SPEAKER): (
        SpeechAction.START_SPEAKER,
        SpeechParserState.SPEAKING,
    ),
    # 最初の発言者より前のテキスト（前文の残り等）は捨てる
    (SpeechParserState.IDLE, LineEvent.MARKER_TEXT): (
        SpeechAction.DISCARD,
        SpeechParserState.IDLE,
    ),
    (SpeechParserState.IDLE, LineEvent.TEXT): (
        SpeechAction.DISCARD,
        SpeechParserState.IDLE,
    ),
    (SpeechParserState.SPEAKING, LineEvent.SEPARATOR): (
        SpeechAction.SKIP,
        SpeechParserState.SPEAKING,
    ),
    (SpeechParserState.SPEAKING, LineEvent.SPEAKER): (
        SpeechAction.START_SPEAKER,
        SpeechParserState.SPEAKING,
    ),
    # 発言者パターンに一致しない○行は発言本文の一部
    (SpeechParserState.SPEAKING, LineEvent.MARKER_TEXT): (
        SpeechAction.APPEND,
        SpeechParserState.SPEAKING,
    ),
    (SpeechParserState.SPEAKING, LineEvent.TEXT): (
        SpeechAction.APPEND,
        SpeechParserState.SPEAKING,
    ),
}


def flatten_pages(pages: Iterable[PageText]) -> list[PageLine]:
    """ページを行単位に展開し、各行のページ番号を保持する.

    ページ番号のみの行と空行は除去し、行末の空白を落とす。
    """
    result: list[PageLine] = []
    for page in pages:
        for line in page.text.split("\n"):
            if _PAGE_NUMBER_RE.match(line):
                continue
            trimmed = line.rstrip()
            if not trimmed:
                continue
            result.append(PageLine(text=trimmed, page_number=page.page_number))
    return result


def _restore_original_span(original: str, normalized_length: int) -> str:
    """空白除去後の先頭 N 文字に対応する原文部分（空白込み）を返す."""
    count = 0
    index = 0
    while index < len(original) and count < normalized_length:
        if not original[index].isspace():
            count += 1
        index += 1
    return original[:index]


def match_speaker_line(line: str) -> SpeakerLineMatch | None:
    """○で始まる行を発言者行として解析する.

    名前+役職で始まる行は役職の直後までを発言者ラベルとし、残りを同じ行の
    発言テキストとする。役職がない場合は「○+短い名前」だけの行のみ受け付ける。

    例:
        "○大 下 議 長" → raw="大 下 議 長", rest=""
        "○大下議長ただいまの出席議員は17名であります。"
            → raw="大下議長", rest="ただいまの出席議員は17名であります。"
    """
    if not line.startswith(SPEECH_MARKER) or len(line) <= 1:
        return None

    after = line[len(SPEECH_MARKER) :]
    normalized = NameNormalizer.strip_whitespace(after)

    occurrence = find_speaker_role(normalized)
    if occurrence is not None:
        raw = _restore_original_span(after, occurrence.end)
        return SpeakerLineMatch(raw=raw, rest=after[len(raw) :].strip())

    fallback = _SPEAKER_FALLBACK_RE.match(line)
    if fallback:
        return SpeakerLineMatch(raw=fallback.group(1).strip(), rest="")

    return None


def classify_speech_line(line: str) -> tuple[LineEvent, SpeakerLineMatch | None]:
    """本文 1 行を行種別に分類する."""
    if _SEPARATOR_RE.match(line):
        return LineEvent.SEPARATOR, None
    if line.startswith(SPEECH_MARKER):
        speaker = match_speaker_line(line)
        if speaker is not None:
            return LineEvent.SPEAKER, speaker
        return LineEvent.MARKER_TEXT, None
    return LineEvent.TEXT, None


@dataclass
class _SpeechAccumulator:
    """発言者ごとに本文行を蓄積し、セグメントとして確定させる."""

    segments: list[RawSpeechSegment] = field(default_factory=list)
    speaker_raw: str = ""
    speaker: ParsedSpeakerName | None = None
    lines: list[str] = field(default_factory=list)
    page_start: int = 0
    page_end: int = 0

    def start(self, match: SpeakerLineMatch, page_number: int) -> None:
        self.flush()
        self.speaker_raw = match.raw
        self.speaker = parse_speaker_name(match.raw)
        self.page_start = page_number
        self.page_end = page_number
        if match.rest:
            self.lines.append(match.rest)

    def append(self, line: str, page_number: int) -> None:
        self.lines.append(line)
        self.page_end = page_number

    def flush(self) -> None:
        if self.speaker is not None and self.lines:
            speech_text = "\n".join(self.lines).strip()
            if speech_text:
                self.segments.append(
                    RawSpeechSegment(
                        speaker_name_raw=self.speaker_raw,
                        speaker_name=self.speaker.name,
                        speaker_role=self.speaker.role,
                        speech_text=speech_text,
                        page_start=self.page_start,
                        page_end=self.page_end,
                        confidence=self.speaker.confidence,
                    )
                )
        self.lines = []


def parse_speeches(pages: Iterable[PageText]) -> list[RawSpeechSegment]:
    """会議録ページを発言者ごとの発言セグメントに分割する.

    Returns:
        文書の読み順に並んだ発言セグメント。発言者行がなければ空リスト
    """
    accumulator = _SpeechAccumulator()
    state = SpeechParserState.IDLE

    for line in flatten_pages(pages):
        event, speaker = classify_speech_line(line.text)
        action, state = SPEECH_TRANSITIONS[(state, event)]

        if action is SpeechAction.START_SPEAKER and speaker is not None:
            accumulator.start(speaker, line.page_number)
        elif action is SpeechAction.APPEND:
            accumulator.append(line.text, line.page_number)

    accumulator.flush()
    return accumulator.segments
