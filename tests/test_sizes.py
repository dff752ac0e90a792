from __future__ import annotations

import pytest

from torrent_streams.sizes import format_bytes


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1572864000, "1.46 GB"),
        (5 * 1024 ** 4, "5 TB"),
    ],
)
def test_format_bytes(size: int, expected: str) -> None:
    assert format_bytes(size) == expected


def test_format_bytes_decimals() -> None:
    assert format_bytes(1572864000, decimals=0) == "1 GB"


def test_format_bytes_rejects_negative() -> None:
    with pytest.raises(ValueError):
        format_bytes(-1)
