"""
Run-length encoded track output.

A track is written as one line per run: '<run length>\\t<value>'. An
optional header line names the columns ('length\\t<value label>').
"""

from collections.abc import Callable
from typing import TextIO

import numpy as np

__all__ = ["write_rle"]


def write_rle(
    stream: TextIO,
    data,
    header: bool = False,
    value_label: str = "a0",
    float_format: Callable[[float], str] | None = None,
) -> int:
    """
    Write a sequence of values as runs.

    Args:
        stream: Text stream to write to.
        data: 1-D sequence or array. Booleans are written as 0/1.
        header: Write a 'length<TAB>label' line first.
        value_label: Name of the value column in the header.
        float_format: Optional formatter for each run value.

    Returns:
        Number of runs written. Empty data writes nothing, not even a header.
    """
    values = np.asarray(data)
    if values.size == 0:
        return 0
    if values.dtype == bool:
        values = values.astype(np.int8)

    # indexes where a new run begins
    starts = np.concatenate(([0], np.flatnonzero(values[1:] != values[:-1]) + 1))
    lengths = np.diff(np.concatenate((starts, [values.size])))

    out = []
    if header:
        out.append(f"length\t{value_label}\n")
    for length, value in zip(lengths.tolist(), values[starts].tolist()):
        text = float_format(value) if float_format is not None else str(value)
        out.append(f"{length}\t{text}\n")
    stream.write("".join(out))
    return len(starts)
