"""Logging setup for the Sumppi CLI."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "botocore", "boto3", "urllib3", "s3transfer")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    level: str = "WARNING",
) -> None:
    """Configure root logging.

    Console output goes to stderr through rich so it never mixes with
    command output on stdout.

    Args:
        verbose: Log at DEBUG regardless of ``level``
        log_file: Optional file that receives every record at DEBUG
        level: Console log level name when not verbose
    """
    console_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    console_handler.setLevel(console_level)
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    root.setLevel(logging.DEBUG if (verbose or log_file) else console_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
