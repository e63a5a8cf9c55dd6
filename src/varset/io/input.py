"""
Input Adapters: opening plain and compressed text sources.

Variant tables and genome indexes may be plain text, gzip (.gz) or bzip2
(.bz2) compressed, or arrive on standard input. This module resolves the
right decoder from the file extension and hands back decoded text lines.
"""

import bz2
import gzip
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

__all__ = ["STDIN_NAMES", "open_text", "read_lines"]

STDIN_NAMES = ("-", "stdin")


def open_text(path: Path | str | None) -> TextIO:
    """
    Open a text source for reading, choosing the decoder by extension.

    Args:
        path: File path. None, '-' or 'stdin' selects standard input.

    Returns:
        A text stream. Standard input is reopened so closing it is harmless.
    """
    if path is None or str(path) in STDIN_NAMES:
        return open(sys.stdin.fileno(), encoding="utf-8", closefd=False)

    suffix = Path(path).suffix.lower()
    if suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    if suffix == ".bz2":
        return bz2.open(path, "rt", encoding="utf-8")
    return open(path, encoding="utf-8")


def read_lines(path: Path | str | None) -> Iterator[str]:
    """Yield lines from a text source with line terminators removed."""
    if path is None or str(path) in STDIN_NAMES:
        # read through sys.stdin itself; it may be a stream without a descriptor
        for line in sys.stdin:
            yield line.rstrip("\r\n")
        return
    with open_text(path) as f:
        for line in f:
            yield line.rstrip("\r\n")

