from __future__ import annotations

"""Tests for stream records: URL building, hints and the service wrapper."""

from dataclasses import replace
from urllib.parse import unquote

import pytest

from torrent_streams.description import DescriptionComposer
from torrent_streams.locales import Language, Locale
from torrent_streams.models import FileIndexError, TorrentFile, UserProfile
from torrent_streams.resolutions import Resolution
from torrent_streams.streams import StreamRecordBuilder, StreamService, encode_segment


def _segments(url: str) -> list[str]:
    return url.split("/stream/play/", 1)[1].split("/")


def test_movie_stream_record(movie_candidate) -> None:
    builder = StreamRecordBuilder("https://addon.example/")
    record = builder.build(movie_candidate, is_recommended=False, device_token="device-1")

    assert record.url == (
        "https://addon.example/api/auth/device-1/stream/play/ncore/12345/"
        "0123456789abcdef0123456789abcdef01234567/1"
    )
    assert record.description == DescriptionComposer().compose(movie_candidate, False)
    assert record.to_dict()["behaviorHints"] == {
        "notWebReady": True,
        "bingeGroup": "0123456789abcdef0123456789abcdef01234567",
    }


def test_episode_stream_uses_episode_file_index(show_candidate) -> None:
    record = StreamRecordBuilder("https://addon.example").build(
        show_candidate, True, "tok", season=1, episode=2, locale=Locale.HU
    )
    assert _segments(record.url)[-1] == "1"
    assert record.description.startswith("⭐️ Ajánlott\n")
    assert record.behavior_hints.binge_group == show_candidate.info_hash


def test_dynamic_segments_round_trip(movie_candidate) -> None:
    odd = replace(movie_candidate, source_name="n core/hu", source_id="12?34#&=ü", info_hash="ab/cd%ef")
    record = StreamRecordBuilder("https://addon.example").build(odd, False, "tok")

    segments = _segments(record.url)
    assert len(segments) == 4
    assert [unquote(segment) for segment in segments] == ["n core/hu", "12?34#&=ü", "ab/cd%ef", "1"]


def test_encode_segment_matches_uri_component_rules() -> None:
    assert encode_segment("a b/c") == "a%20b%2Fc"
    assert encode_segment("keep-_.!~*'()") == "keep-_.!~*'()"
    assert encode_segment(3) == "3"


def test_bad_file_index_is_fatal(movie_candidate) -> None:
    empty = replace(movie_candidate, files=())
    with pytest.raises(FileIndexError):
        StreamRecordBuilder("https://addon.example").build(empty, False, "tok")


def test_candidate_is_left_alone(movie_candidate) -> None:
    before = replace(movie_candidate)
    StreamRecordBuilder("https://addon.example").build(movie_candidate, True, "tok")
    assert movie_candidate == before


def test_service_streams_for_flags_only_a_scoring_winner(movie_candidate, show_candidate) -> None:
    service = StreamService(StreamRecordBuilder("https://addon.example"))
    profile = UserProfile(preferred_language=Language.HU, preferred_resolutions=frozenset({Resolution.R2160P}))

    records = service.streams_for([show_candidate, movie_candidate], profile, "tok")

    assert [total for _, total in records] == [5, 0]
    first, second = (record for record, _ in records)
    assert first.behavior_hints.binge_group == movie_candidate.info_hash
    assert first.description.startswith("⭐️ Ajánlott\n")
    assert "⭐️" not in second.description


def test_service_streams_for_no_match_means_no_recommendation(show_candidate) -> None:
    service = StreamService(StreamRecordBuilder("https://addon.example"))
    profile = UserProfile(preferred_language=Language.HU)
    records = service.streams_for([show_candidate], profile, "tok", limit=3)
    assert len(records) == 1
    assert "⭐️" not in records[0][0].description


def test_service_limit_trims_output(movie_candidate, show_candidate) -> None:
    service = StreamService(StreamRecordBuilder("https://addon.example"))
    records = service.streams_for([movie_candidate, show_candidate], UserProfile(), "tok", limit=1)
    assert len(records) == 1


def test_service_order_and_convert(movie_candidate, show_candidate) -> None:
    service = StreamService(StreamRecordBuilder("https://addon.example"))
    profile = UserProfile(preferred_language=Language.EN)
    assert service.order_torrents([movie_candidate, show_candidate], profile) == [show_candidate, movie_candidate]

    record = service.convert_torrent_to_stream(
        show_candidate,
        is_recommended=True,
        device_token="tok",
        season=1,
        episode=1,
        preferred_language=Language.HU,
    )
    assert record.description.startswith("⭐️ Ajánlott\n")
    assert "The.Show.S01E01.1080p.mkv.1080p" in record.description


def test_extra_files_do_not_shift_movie_index(movie_candidate) -> None:
    padded = replace(movie_candidate, files=movie_candidate.files + (TorrentFile(name="extras.nfo", length=10),))
    record = StreamRecordBuilder("https://addon.example").build(padded, False, "tok")
    assert _segments(record.url)[-1] == "1"


def test_build_resolves_file_index_once(movie_candidate) -> None:
    calls = []

    class Counting(type(movie_candidate)):
        def get_media_file_index(self, season=None, episode=None) -> int:
            calls.append((season, episode))
            # A second answer would point the description at a different file.
            return 1 if len(calls) == 1 else 0

    counting = Counting(**{name: getattr(movie_candidate, name) for name in movie_candidate.__dataclass_fields__})
    record = StreamRecordBuilder("https://addon.example").build(counting, False, "tok")

    assert calls == [(None, None)]
    assert _segments(record.url)[-1] == "1"
    assert "Dune Part Two.4K" in record.description


def test_build_checks_index_before_composing(movie_candidate) -> None:
    class Broken(type(movie_candidate)):
        def get_media_file_index(self, season=None, episode=None) -> int:
            return 5

    broken = Broken(**{name: getattr(movie_candidate, name) for name in movie_candidate.__dataclass_fields__})
    with pytest.raises(FileIndexError):
        StreamRecordBuilder("https://addon.example").build(broken, False, "tok")


def test_device_token_is_encoded(movie_candidate) -> None:
    record = StreamRecordBuilder("https://addon.example").build(movie_candidate, False, "a/b?c")
    assert record.url.startswith("https://addon.example/api/auth/a%2Fb%3Fc/stream/play/")
    assert unquote(record.url.split("/api/auth/", 1)[1].split("/", 1)[0]) == "a/b?c"
