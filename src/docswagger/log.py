"""Loguru sink configuration for the command line."""

import click
from loguru import logger

LOG_FORMAT = "{level: <8} | {name}:{line} - {message}"


def _stderr_sink(message) -> None:
    # Resolve stderr per message so the sink follows stream swaps.
    click.echo(message, err=True, nl=False)


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a stderr sink at `level`."""
    logger.remove()
    logger.add(_stderr_sink, level=level, format=LOG_FORMAT)
