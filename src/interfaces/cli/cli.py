"""Command line entry point (gikai)."""

import click

from src.common.logging import configure_logging
from src.infrastructure.config.settings import get_settings
from src.interfaces.cli.commands.minutes_commands import get_minutes_commands


@click.group()
@click.option("--log-level", default=None, help="ログレベル（省略時は設定値）")
def cli(log_level: str | None):
    """地方議会会議録パーサー"""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_output=settings.log_json,
    )


for command in get_minutes_commands():
    cli.add_command(command)


def main():
    cli(prog_name="gikai")


if __name__ == "__main__":
    main()
