"""和暦→西暦変換ユーティリティ.

会議録の URL や表題に現れる令和の元号年を西暦年に変換する。
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EraDefinition:
    """元号の定義"""

    name: str
    start_year: int  # 西暦での開始年（元年）


REIWA = EraDefinition(name="令和", start_year=2019)


def to_western_year(era_year: int, era: EraDefinition = REIWA) -> int:
    """元号年を西暦年に変換する

    例: 令和6年 → 2024

    Raises:
        ValueError: 元号年が 1 未満
    """
    if era_year < 1:
        raise ValueError(f"元号年は1以上である必要があります: {era.name}{era_year}年")
    return era.start_year + era_year - 1


def format_era_year(era_year: int, era: EraDefinition = REIWA) -> str:
    """元号年を表記する（例: "令和6年"）"""
    return f"{era.name}{era_year}年"
