"""Domain exceptions."""

from typing import Any


class MinutesParserError(Exception):
    """会議録処理の基底例外."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DocumentLoadError(MinutesParserError):
    """ページテキストやエイリアスファイルを読み込めない場合の例外."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"ファイルを読み込めませんでした: {path} ({reason})",
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


class RepositoryError(MinutesParserError):
    """発言者ディレクトリへの読み書きに失敗した場合の例外."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"リポジトリ操作に失敗しました: {operation} ({reason})",
            details={"operation": operation, "reason": reason},
        )
        self.operation = operation
        self.reason = reason
