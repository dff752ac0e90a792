from __future__ import annotations

"""Tests for the StreamFinder, making sure the talent show stays honest."""

import unittest
from unittest.mock import MagicMock

from torrent_streams.finder import StreamFinder
from torrent_streams.locales import Language
from torrent_streams.models import TorrentCandidate, TorrentFile, UserProfile
from torrent_streams.streams import StreamRecordBuilder, StreamService


def _candidate(info_hash: str, language: Language, seeders: int = 1) -> TorrentCandidate:
    return TorrentCandidate(
        source_name="src",
        source_id=info_hash,
        info_hash=info_hash,
        name=f"Movie {info_hash}",
        language=language,
        files=(TorrentFile(name="Movie.1080p.mkv", length=2048),),
        seeders=seeders,
    )


class StreamFinderTests(unittest.TestCase):
    """Confirm that StreamFinder can spot a winner without night-vision goggles."""

    def setUp(self) -> None:
        self.service = StreamService(StreamRecordBuilder("https://addon.example"))

    def test_pick_streams_puts_preferred_language_first(self) -> None:
        candidates = [_candidate("aaa", Language.EN), _candidate("bbb", Language.HU), _candidate("ccc", Language.EN)]
        finder = StreamFinder(self.service, source_client=MagicMock())
        streams = finder.pick_streams(candidates, UserProfile(preferred_language=Language.HU), "tok", limit=2)
        self.assertEqual([stream.behavior_hints.binge_group for stream in streams], ["bbb", "aaa"])
        self.assertTrue(streams[0].description.startswith("⭐️ Ajánlott\n"))

    def test_pick_streams_empty(self) -> None:
        finder = StreamFinder(self.service)
        self.assertEqual(finder.pick_streams([], UserProfile(), "tok"), [])

    def test_find_candidates_delegates_to_client(self) -> None:
        mock_client = MagicMock()
        mock_client.search.return_value = [_candidate("aaa", Language.EN), _candidate("aaa", Language.HU)]
        finder = StreamFinder(self.service, mock_client)
        result = finder.find_candidates("tt1", season=1, episode=2)
        mock_client.search.assert_called_once_with("tt1", season=1, episode=2)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].language, Language.EN)

    def test_find_candidates_without_source(self) -> None:
        with self.assertRaises(RuntimeError):
            StreamFinder(self.service).find_candidates("tt1")


if __name__ == "__main__":
    unittest.main()
