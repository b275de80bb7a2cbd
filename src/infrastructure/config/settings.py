"""Application settings using pydantic-settings.

環境変数（プレフィックス GIKAI_）または .env ファイルから読み込む。
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file(start: Path | None = None) -> Path | None:
    """カレントディレクトリから親方向に .env を探す."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GIKAI_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # 発言者ディレクトリ
    municipality_id: str = "default"

    # これ未満の信頼度の発言は要確認とする
    review_confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)

    # 入力ファイル
    default_encoding: str = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """キャッシュを破棄して設定を読み直す."""
    get_settings.cache_clear()
    return get_settings()
