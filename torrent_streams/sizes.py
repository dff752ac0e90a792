from __future__ import annotations

"""Byte counts for humans who don't think in powers of 1024."""

from typing import Tuple

_UNITS: Tuple[str, ...] = ("Bytes", "KB", "MB", "GB", "TB", "PB")


def format_bytes(size: int, decimals: int = 2) -> str:
    """
    Render a byte count the way people say it out loud.

    Parameters
    ----------
    size : int
        Length in bytes; negative values are a caller bug.
    decimals : int, optional
        Maximum number of decimals kept, trailing zeros are dropped.

    Returns
    -------
    str
        ``"0 Bytes"``, ``"1 MB"``, ``"1.46 GB"`` and friends.

    Raises
    ------
    ValueError
        If ``size`` is negative.
    """

    if size < 0:
        raise ValueError(f"Byte count cannot be negative: {size}")
    if size == 0:
        return "0 Bytes"

    value = float(size)
    index = 0
    while value >= 1024 and index < len(_UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{value:.{max(0, decimals)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_UNITS[index]}"
