"""
Output Writers: writing variant stores and tracks.

Output goes to a plain file, a gzip/bzip2 file chosen by extension, or
standard output for '-'.
"""

import bz2
import gzip
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .input import STDIN_NAMES
from .rle import write_rle

if TYPE_CHECKING:
    from ..variants.store import SortedVariantStore

__all__ = ["OutputWriter", "RleTrackWriter", "VariantSetWriter", "open_output"]


def open_output(path: Path | str | None) -> TextIO:
    """Open a text destination, compressing by extension; None or '-' is stdout."""
    if path is None or str(path) in STDIN_NAMES:
        return sys.stdout
    suffix = Path(path).suffix.lower()
    if suffix == ".gz":
        return gzip.open(path, "wt", encoding="utf-8")
    if suffix == ".bz2":
        return bz2.open(path, "wt", encoding="utf-8")
    return open(path, "w", encoding="utf-8")


class OutputWriter:
    """Base class for writers owning one output stream."""

    def __init__(self, path: Path | str | None):
        self.path = path
        self.file = open_output(path)

    def close(self):
        if self.file is not sys.stdout:
            self.file.close()
        else:
            self.file.flush()

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class VariantSetWriter(OutputWriter):
    """Writes a store as a VCF-like table: header, column definitions, records."""

    def write_store(self, store: "SortedVariantStore") -> int:
        """Write the whole store and return the number of records written."""
        count = 0
        for line in store.header_lines:
            self.file.write(f"{line}\n")
        if store.column_definitions:
            self.file.write(f"{store.column_definitions}\n")
        for record in store:
            self.file.write(record.to_line(store.genome))
            count += 1
        return count


class RleTrackWriter(OutputWriter):
    """Writes run-length encoded tracks, one after another."""

    def write_track(self, data, header: bool = True, value_label: str = "a0") -> int:
        return write_rle(self.file, data, header=header, value_label=value_label)
