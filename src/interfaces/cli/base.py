"""Base utilities shared by CLI commands."""

import functools
import sys

from collections.abc import Callable
from typing import Any, NoReturn

import click

from src.common.logging import get_logger
from src.domain.exceptions import MinutesParserError


logger = get_logger(__name__)


class BaseCommand:
    """Base class for CLI command groups."""

    @staticmethod
    def show_progress(message: str):
        """Show a progress message"""
        click.echo(message, err=True)

    @staticmethod
    def success(message: str):
        """Show a success message"""
        click.echo(click.style(f"✓ {message}", fg="green"), err=True)

    @staticmethod
    def warning(message: str):
        """Show a warning message"""
        click.echo(click.style(f"⚠️  {message}", fg="yellow"), err=True)

    @staticmethod
    def error(message: str, exit_code: int = 1) -> NoReturn:
        """Show an error message and exit"""
        click.echo(click.style(f"✗ {message}", fg="red"), err=True)
        sys.exit(exit_code)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """コマンド実行中の既知のエラーを整形して終了コード 1 で終了する."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except MinutesParserError as e:
            logger.debug("コマンド失敗: %s", e.details)
            BaseCommand.error(e.message)

    return wrapper
