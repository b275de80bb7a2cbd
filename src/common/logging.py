"""ロギング設定.

structlog を標準 logging の上に載せ、`get_logger(name)` で取得したロガーから
`%` 形式のメッセージをそのまま出力できるようにする。
"""

import logging
import sys

from typing import Any

import structlog


_handler: logging.StreamHandler | None = None


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """structlog と標準 logging を初期化する.

    二回目以降の呼び出しではログレベルと出力先（現在の sys.stderr）のみ更新する。

    Args:
        level: ログレベル名（"DEBUG", "INFO" 等）
        json_output: True の場合 JSON 形式で出力する
    """
    global _handler

    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)

    if _handler is not None:
        _handler.setStream(sys.stderr)
        return

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(_handler)

    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """名前付きロガーを取得する."""
    return structlog.get_logger(name)
