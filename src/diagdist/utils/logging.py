# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Literal

from loguru import logger
from rich.console import Console

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"]

LOG_FORMAT = (
    "<green>{time:YYYY/MM/DD HH:mm:ss}</green> | {level.icon} - <level>{message}</level>"
)


def configure_logger(console: Console | None = None, level: LogLevel = "INFO") -> int:
    """Route loguru output through a rich console, replacing existing sinks."""
    console = console if console is not None else Console()
    logger.remove()
    return logger.add(
        lambda s: console.print(s, end=""),
        colorize=False,
        level=level,
        format=LOG_FORMAT,
    )


@contextmanager
def log_elapsed(message: str, level: LogLevel = "DEBUG") -> Iterator[None]:
    start = time.perf_counter()
    yield
    logger.log(level, f"{message} [{time.perf_counter() - start:.3f}s]")
