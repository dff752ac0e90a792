from __future__ import annotations

"""
Pytest configuration helpers.

Ensures the repository root is importable regardless of how pytest was invoked.
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from torrent_streams.locales import Language
from torrent_streams.models import TorrentCandidate, TorrentFile

GIB = 1024 ** 3
MIB = 1024 ** 2


@pytest.fixture
def movie_candidate() -> TorrentCandidate:
    return TorrentCandidate(
        source_name="ncore",
        source_id="12345",
        info_hash="0123456789abcdef0123456789abcdef01234567",
        name="Dune Part Two",
        language=Language.HU,
        files=(
            TorrentFile(name="sample.txt", length=1024),
            TorrentFile(name="Dune.Part.Two.2024.2160p.WEB-DL.mkv", length=3 * GIB // 2),
        ),
        seeders=42,
    )


@pytest.fixture
def show_candidate() -> TorrentCandidate:
    return TorrentCandidate(
        source_name="ncore",
        source_id="67890",
        info_hash="fedcba9876543210fedcba9876543210fedcba98",
        name="The Show S01",
        language=Language.EN,
        files=(
            TorrentFile(name="The.Show.S01E01.1080p.mkv", length=700 * MIB),
            TorrentFile(name="The.Show.S01E02.720p.mkv", length=500 * MIB),
        ),
        seeders=7,
    )
