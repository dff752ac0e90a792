from __future__ import annotations

"""
Convenience imports for the torrent_streams package.

Reach important stuff so downstream code can grab them
without complaining.
"""

from .config import AppConfig, ConfigError, ConfigLoader
from .description import DescriptionComposer
from .finder import StreamFinder
from .locales import DEFAULT_TABLES, Language, Locale, PresentationTables, VocabularyError
from .models import FileIndexError, StreamRecord, TorrentCandidate, TorrentFile, UserProfile
from .ranking import order_torrents, rate_list
from .source import TorrentSourceClient
from .streams import StreamRecordBuilder, StreamService

__all__ = [
    "AppConfig",
    "ConfigError",
    "ConfigLoader",
    "DescriptionComposer",
    "StreamFinder",
    "DEFAULT_TABLES",
    "Language",
    "Locale",
    "PresentationTables",
    "VocabularyError",
    "FileIndexError",
    "StreamRecord",
    "TorrentCandidate",
    "TorrentFile",
    "UserProfile",
    "order_torrents",
    "rate_list",
    "TorrentSourceClient",
    "StreamRecordBuilder",
    "StreamService",
]
