from __future__ import annotations

"""Tests for the candidate record and its capabilities."""

from dataclasses import FrozenInstanceError, replace

import pytest

from torrent_streams.config import ConfigError, ProfileConfig
from torrent_streams.locales import Language, Locale
from torrent_streams.models import (
    BehaviorHints,
    FileIndexError,
    StreamRecord,
    TorrentFile,
    UserProfile,
    is_episodic,
)
from torrent_streams.resolutions import Resolution


def test_movie_index_prefers_largest_video(movie_candidate) -> None:
    assert movie_candidate.get_media_file_index() == 1
    assert movie_candidate.get_media_file().name.endswith(".mkv")


def test_video_beats_bigger_non_video(movie_candidate) -> None:
    padded = replace(movie_candidate, files=movie_candidate.files + (TorrentFile("bonus.iso", 10 ** 12),))
    assert padded.get_media_file_index() == 1


def test_episode_index_matches_tag(show_candidate) -> None:
    assert show_candidate.get_media_file_index(season=1, episode=2) == 1
    assert show_candidate.get_media_file_index(season=1, episode=1) == 0


def test_missing_episode_falls_back_to_largest(show_candidate) -> None:
    assert show_candidate.get_media_file_index(season=3, episode=9) == 0


@pytest.mark.parametrize(
    ("name", "tag"),
    [
        ("Show.S02E10.mkv", (2, 10)),
        ("show s1e3 1080p.mkv", (1, 3)),
        ("Show 4x07.avi", (4, 7)),
        ("Movie.2019.mkv", None),
    ],
)
def test_episode_tag(name: str, tag) -> None:
    assert TorrentFile(name=name, length=1).episode_tag() == tag


def test_file_at_is_bounds_checked(movie_candidate) -> None:
    with pytest.raises(FileIndexError):
        movie_candidate.file_at(2)
    with pytest.raises(FileIndexError):
        movie_candidate.file_at(-1)
    assert issubclass(FileIndexError, IndexError)


def test_empty_torrent_has_no_media_file(movie_candidate) -> None:
    with pytest.raises(FileIndexError):
        replace(movie_candidate, files=()).get_media_file()


def test_candidates_are_frozen(movie_candidate) -> None:
    with pytest.raises(FrozenInstanceError):
        movie_candidate.seeders = 0


def test_resolution_capabilities(movie_candidate) -> None:
    resolution = movie_candidate.get_resolution(movie_candidate.get_media_file().name)
    assert resolution is Resolution.R2160P
    assert movie_candidate.display_resolution(resolution) == "4K UHD (2160p)"
    assert movie_candidate.display_resolution_only(resolution) == "4K"


def test_is_episodic_needs_both() -> None:
    assert is_episodic(1, 2)
    assert not is_episodic(1, None)
    assert not is_episodic(None, 2)
    assert not is_episodic(None, None)


def test_profile_from_config() -> None:
    profile = UserProfile.from_config(ProfileConfig(preferred_language="hu", preferred_resolutions=["1080p", "4k"]))
    assert profile.preferred_language is Language.HU
    assert profile.preferred_resolutions == frozenset({Resolution.R1080P, Resolution.R2160P})
    assert profile.locale is Locale.HU


def test_profile_from_config_rejects_garbage() -> None:
    with pytest.raises(ConfigError):
        UserProfile.from_config(ProfileConfig(preferred_language="xx"))
    with pytest.raises(ConfigError):
        UserProfile.from_config(ProfileConfig(preferred_resolutions=["potato"]))


def test_stream_record_wire_shape() -> None:
    record = StreamRecord(url="u", description="d\n", behavior_hints=BehaviorHints(binge_group="h"))
    assert record.to_dict() == {
        "url": "u",
        "description": "d\n",
        "behaviorHints": {"notWebReady": True, "bingeGroup": "h"},
    }
