"""CLI commands for parsing meeting minutes"""

import asyncio
import json

from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

import click

from src.application.dtos.parse_minutes_dto import (
    ParseMinutesInputDTO,
    ParseMinutesOutputDTO,
)
from src.application.usecases.parse_minutes_usecase import ParseMinutesUseCase
from src.domain.entities.speaker import Speaker
from src.domain.services.attendee_parser import parse_attendees
from src.domain.services.session_info_deriver import (
    derive_meeting_title,
    group_documents_by_session,
    parse_date_from_url,
)
from src.domain.services.speaker_merge_planner import build_merge_groups
from src.domain.value_objects.page_text import PageText
from src.infrastructure.config.settings import get_settings
from src.infrastructure.importers.page_text_loader import (
    load_alias_entries,
    load_pages,
)
from src.infrastructure.persistence.in_memory_speaker_directory import (
    InMemorySpeakerDirectory,
)

from ..base import BaseCommand, with_error_handling


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_to_jsonable(v) for v in value]
    return value


def _output_to_dict(output: ParseMinutesOutputDTO) -> dict[str, Any]:
    return {
        "message": output.message,
        "attendee_count": output.attendee_count,
        "speech_count": output.speech_count,
        "matched_count": output.matched_count,
        "unmatched_count": output.unmatched_count,
        "review_count": output.review_count,
        "attendees": _to_jsonable([asdict(a) for a in output.attendees]),
        "speeches": _to_jsonable([asdict(s) for s in output.speeches]),
        "alias_candidates": _to_jsonable(
            [asdict(c) for c in output.alias_candidates]
        ),
    }


def _document_to_dict(url: str) -> dict[str, Any]:
    published_on = parse_date_from_url(url)
    return {
        "url": url,
        "title": derive_meeting_title(url),
        "published_on": published_on.isoformat() if published_on else None,
    }


def _speaker_to_dict(speaker: Speaker) -> dict[str, Any]:
    return {"id": speaker.id, "name": speaker.name, "role": speaker.role}


async def _register_documents(
    usecase: ParseMinutesUseCase,
    municipality_id: str,
    documents: list[list[PageText]],
    review_confidence_threshold: float,
) -> ParseMinutesOutputDTO | None:
    """文書を順にパースしてディレクトリに登録する. 失敗した文書の結果を返す."""
    for pages in documents:
        result = await usecase.execute(
            ParseMinutesInputDTO(
                municipality_id=municipality_id,
                pages=pages,
                review_confidence_threshold=review_confidence_threshold,
                register_aliases=True,
            )
        )
        if not result.success:
            return result
    return None


def _dump(data: Any, output: str | None) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
    else:
        click.echo(text)


class MinutesCommands(BaseCommand):
    """Commands for parsing meeting minutes"""

    @staticmethod
    @click.command("parse-minutes")
    @click.argument("pages", type=click.Path(exists=True, dir_okay=False))
    @click.option(
        "--aliases",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="登録済みエイリアスの JSON ファイル",
    )
    @click.option(
        "--municipality-id",
        default=None,
        help="自治体ID（省略時は設定値）",
    )
    @click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False),
        default=None,
        help="結果 JSON の出力先（省略時は標準出力）",
    )
    @with_error_handling
    def parse_minutes(
        pages: str,
        aliases: str | None,
        municipality_id: str | None,
        output: str | None,
    ):
        """会議録をパースし、出席者と発言者解決済みの発言を出力する

        PAGES はページテキストの JSON（[{"page": 1, "text": "..."}]）または
        フォームフィード区切りのテキストファイル。
        """
        settings = get_settings()
        municipality_id = municipality_id or settings.municipality_id

        page_texts = load_pages(pages, encoding=settings.default_encoding)
        alias_entries = (
            load_alias_entries(aliases, encoding=settings.default_encoding)
            if aliases
            else []
        )
        directory = InMemorySpeakerDirectory(
            (municipality_id, entry) for entry in alias_entries
        )
        usecase = ParseMinutesUseCase(directory)
        result = asyncio.run(
            usecase.execute(
                ParseMinutesInputDTO(
                    municipality_id=municipality_id,
                    pages=page_texts,
                    review_confidence_threshold=settings.review_confidence_threshold,
                )
            )
        )
        if not result.success:
            MinutesCommands.error(result.message)

        _dump(_output_to_dict(result), output)
        MinutesCommands.show_progress(
            f"出席者 {result.attendee_count}名, 発言 {result.speech_count}件 "
            f"(解決 {result.matched_count}件, 要確認 {result.review_count}件)"
        )
        if result.speech_count == 0:
            MinutesCommands.warning(result.message)

    @staticmethod
    @click.command("attendees")
    @click.argument("pages", type=click.Path(exists=True, dir_okay=False))
    @with_error_handling
    def attendees(pages: str):
        """会議録の前文から出席者一覧を出力する"""
        settings = get_settings()
        found = parse_attendees(load_pages(pages, encoding=settings.default_encoding))
        if not found:
            MinutesCommands.warning("出席者が見つかりません")
            return
        for attendee in found:
            seat = f"{attendee.seat_number:>3}番 " if attendee.seat_number else "      "
            click.echo(
                f"{seat}{attendee.full_name}\t{attendee.role}\t"
                f"{attendee.category.value}"
            )

    @staticmethod
    @click.command("merge-plan")
    @click.argument(
        "documents",
        nargs=-1,
        required=True,
        type=click.Path(exists=True, dir_okay=False),
    )
    @click.option(
        "--municipality-id",
        default=None,
        help="自治体ID（省略時は設定値）",
    )
    @click.option(
        "--output",
        "-o",
        type=click.Path(dir_okay=False),
        default=None,
        help="結果 JSON の出力先（省略時は標準出力）",
    )
    @with_error_handling
    def merge_plan(
        documents: tuple[str, ...],
        municipality_id: str | None,
        output: str | None,
    ):
        """複数の会議録から発言者一覧を作り、重複発言者の統合計画を出力する

        DOCUMENTS は parse-minutes と同じ形式のページテキストファイル。
        「山田太郎」と「山田太郎総務部長」のように名前が前方一致する発言者を
        統合候補として出力する（統合そのものは行わない）。
        """
        settings = get_settings()
        municipality_id = municipality_id or settings.municipality_id

        loaded = [
            load_pages(path, encoding=settings.default_encoding) for path in documents
        ]
        directory = InMemorySpeakerDirectory()
        failed = asyncio.run(
            _register_documents(
                ParseMinutesUseCase(directory),
                municipality_id,
                loaded,
                settings.review_confidence_threshold,
            )
        )
        if failed is not None:
            MinutesCommands.error(failed.message)

        speakers = asyncio.run(directory.list_speakers(municipality_id))
        groups = build_merge_groups(speakers)
        pending = directory.pending_candidates(municipality_id)
        _dump(
            {
                "speaker_count": len(speakers),
                "groups": [
                    {
                        "canonical": _speaker_to_dict(group.canonical),
                        "duplicates": [
                            _speaker_to_dict(s) for s in group.duplicates
                        ],
                    }
                    for group in groups
                ],
                "pending_aliases": [c.alias_norm for c in pending],
            },
            output,
        )
        MinutesCommands.show_progress(
            f"発言者 {len(speakers)}名, 統合グループ {len(groups)}件, "
            f"未確定エイリアス {len(pending)}件"
        )

    @staticmethod
    @click.command("session-info")
    @click.argument("urls", nargs=-1, required=True)
    @with_error_handling
    def session_info(urls: tuple[str, ...]):
        """会議録 URL から会議情報を導出し、会議ごとにまとめて出力する"""
        groups, unmatched = group_documents_by_session(list(urls))
        data = {
            "sessions": [
                {
                    "session_name": group.session.session_name,
                    "session_type": group.session.session_type.value,
                    "fiscal_year": group.session.fiscal_year,
                    "ordinal": group.session.ordinal,
                    "documents": [_document_to_dict(url) for url in group.urls],
                }
                for group in groups
            ],
            "unmatched": unmatched,
        }
        _dump(data, None)
        if unmatched:
            MinutesCommands.warning(f"会議情報を導出できない URL: {len(unmatched)}件")


def get_minutes_commands():
    """Get all minutes-related commands"""
    return [
        MinutesCommands.parse_minutes,
        MinutesCommands.attendees,
        MinutesCommands.merge_plan,
        MinutesCommands.session_info,
    ]
