"""
Logging for varset.

Everything human-readable goes to stderr: the rich console used for status
spinners and error messages, and the RichHandler behind every module logger.
Stdout is reserved for the tables and tracks the CLI writes, so piping
``varset separate -o -`` into another tool stays clean.
"""

import logging
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "console",
    "setup_logging",
    "timed",
    "log_call",
]

console = Console(stderr=True)

LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    """
    Route varset logging to the stderr console, and optionally to a file.

    Commands that print results (query, count, mask) run quiet, so only
    warnings such as skipped lines reach the terminal; --verbose wins over
    quiet and adds module paths to each line.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    # markup off: variant text may contain '[' and ']'
    handlers: list[logging.Handler] = [
        RichHandler(console=console, rich_tracebacks=True, markup=False, show_path=verbose)
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)


def _describe(value: Any) -> str:
    # stores and record lists log their size, not their contents
    if hasattr(value, "__len__") and not isinstance(value, (str, bytes)):
        return f"{type(value).__name__}[{len(value)}]"
    return repr(value)


@contextmanager
def timed(operation: str, logger: logging.Logger | None = None, level: int = logging.DEBUG):
    """
    Log the wall time of a block.

    Example:
        with timed(f"Loading variants from {path}", logger):
            store = SortedVariantStore.from_lines(read_lines(path), genome)
    """
    log = logger or logging.getLogger(__name__)
    start = time.perf_counter()
    try:
        yield
    finally:
        log.log(level, "%s took %.3fs", operation, time.perf_counter() - start)


def log_call(logger: logging.Logger | None = None) -> Callable:
    """
    Decorator logging a call, its sized arguments and its duration at DEBUG;
    a failure is logged at ERROR and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log = logger or logging.getLogger(func.__module__)
            if log.isEnabledFor(logging.DEBUG):
                described = ", ".join(_describe(a) for a in args)
                log.debug("%s(%s)", func.__name__, described)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error("%s failed: %s", func.__name__, e)
                raise
            log.debug("%s finished in %.3fs", func.__name__, time.perf_counter() - start)
            return result

        return wrapper

    return decorator
