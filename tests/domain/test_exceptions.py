"""ドメイン例外のテスト."""

import pytest

from src.domain.exceptions import (
    DocumentLoadError,
    MinutesParserError,
    RepositoryError,
)


class TestDomainExceptions:
    def test_base_exception(self) -> None:
        error = MinutesParserError("失敗しました", {"key": "value"})

        assert str(error) == "失敗しました"
        assert error.message == "失敗しました"
        assert error.details == {"key": "value"}
        assert MinutesParserError("失敗しました").details == {}

    def test_document_load_error(self) -> None:
        error = DocumentLoadError("pages.json", "JSON が不正です")

        assert isinstance(error, MinutesParserError)
        assert error.path == "pages.json"
        assert error.reason == "JSON が不正です"
        assert "pages.json" in error.message
        assert error.details == {"path": "pages.json", "reason": "JSON が不正です"}

    def test_repository_error(self) -> None:
        with pytest.raises(MinutesParserError) as exc_info:
            raise RepositoryError("upsert_attendees", "件数不一致")

        assert exc_info.value.operation == "upsert_attendees"
        assert "upsert_attendees" in exc_info.value.message
