from __future__ import annotations

"""
Data models for torrent_streams.

Short, sweet, and frozen solid. Candidates come from the torrent source and
nobody downstream gets to scribble on them.
"""

from dataclasses import dataclass, field
import re
from typing import Any, Dict, Optional, Tuple

from .config import ConfigError, ProfileConfig
from .locales import Language, Locale
from .resolutions import (
    Resolution,
    detect_resolution,
    display_resolution,
    display_resolution_only,
    parse_resolutions,
)

_EPISODE_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"s(?P<season>\d{1,2})[ ._-]?e(?P<episode>\d{1,3})(?!\d)", re.IGNORECASE),
    re.compile(r"(?<!\d)(?P<season>\d{1,2})x(?P<episode>\d{1,3})(?!\d)", re.IGNORECASE),
)

_VIDEO_EXTENSIONS = (".mkv", ".mp4", ".avi", ".m4v", ".mov", ".wmv", ".ts", ".webm")


class FileIndexError(IndexError):
    """Raised when a candidate points at a file it doesn't have."""


@dataclass(frozen=True)
class TorrentFile:
    """One file inside a torrent."""

    name: str
    length: int

    @property
    def is_video(self) -> bool:
        return self.name.lower().endswith(_VIDEO_EXTENSIONS)

    def episode_tag(self) -> Optional[Tuple[int, int]]:
        """Return ``(season, episode)`` when the file name carries one."""

        for pattern in _EPISODE_PATTERNS:
            match = pattern.search(self.name)
            if match:
                return int(match.group("season")), int(match.group("episode"))
        return None


def is_episodic(season: Optional[int], episode: Optional[int]) -> bool:
    """A request is about a show only when both halves of the address are known."""

    return bool(season) and bool(episode)


@dataclass(frozen=True)
class TorrentCandidate:
    """Represents a single torrent offered for playback."""

    source_name: str
    source_id: str
    info_hash: str
    name: str
    language: Language
    files: Tuple[TorrentFile, ...]
    seeders: int = 0
    is_speculated: bool = False

    def get_language(self) -> Language:
        return self.language

    def get_name(self) -> str:
        return self.name

    def get_seeders(self) -> int:
        return self.seeders

    def get_media_file_index(self, season: Optional[int] = None, episode: Optional[int] = None) -> int:
        """
        Pick the file that should actually be played.

        Parameters
        ----------
        season, episode : int, optional
            When both are given we hunt for the matching episode file first.

        Returns
        -------
        int
            Index into ``files``. For movies (or when no episode tag matches)
            this is the largest video file, falling back to the largest file.
            An empty torrent yields ``0``, which the bounds-checked accessor
            rejects.
        """

        if is_episodic(season, episode):
            for index, torrent_file in enumerate(self.files):
                if torrent_file.episode_tag() == (season, episode):
                    return index

        best_index = 0
        best_key: Tuple[bool, int] = (False, -1)
        for index, torrent_file in enumerate(self.files):
            key = (torrent_file.is_video, torrent_file.length)
            if key > best_key:
                best_index, best_key = index, key
        return best_index

    def file_at(self, index: int) -> TorrentFile:
        """
        Bounds-checked access to ``files``.

        Raises
        ------
        FileIndexError
            If ``index`` falls outside the file list. That means the candidate
            is corrupt or mismatched, so callers should let it propagate.
        """

        if not 0 <= index < len(self.files):
            raise FileIndexError(
                f"File index {index} out of range for torrent {self.info_hash} with {len(self.files)} files"
            )
        return self.files[index]

    def get_media_file(self, season: Optional[int] = None, episode: Optional[int] = None) -> TorrentFile:
        return self.file_at(self.get_media_file_index(season, episode))

    @staticmethod
    def get_resolution(file_name: str) -> Resolution:
        return detect_resolution(file_name)

    @staticmethod
    def display_resolution(resolution: Resolution) -> str:
        return display_resolution(resolution)

    @staticmethod
    def display_resolution_only(resolution: Resolution) -> str:
        return display_resolution_only(resolution)


@dataclass(frozen=True)
class UserProfile:
    """What the user told us they like. Read-only, owned by whoever stores users."""

    preferred_language: Language = Language.EN
    preferred_resolutions: frozenset[Resolution] = field(default_factory=frozenset)

    @property
    def locale(self) -> Locale:
        return self.preferred_language.locale

    @classmethod
    def from_config(cls, config: ProfileConfig) -> "UserProfile":
        """
        Build a profile from the config section.

        Raises
        ------
        ConfigError
            When the language or one of the resolutions isn't one we know.
        """

        try:
            return cls(
                preferred_language=Language.parse(config.preferred_language),
                preferred_resolutions=parse_resolutions(config.preferred_resolutions),
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid profile setting: {exc}") from exc


@dataclass(frozen=True)
class BehaviorHints:
    """Client playback hints attached to every stream."""

    binge_group: str
    not_web_ready: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"notWebReady": self.not_web_ready, "bingeGroup": self.binge_group}


@dataclass(frozen=True)
class StreamRecord:
    """A playable stream: where to fetch it, what to say about it, how to treat it."""

    url: str
    description: str
    behavior_hints: BehaviorHints

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialise to the wire shape clients expect.

        Returns
        -------
        dict[str, Any]
            ``{"url": ..., "description": ..., "behaviorHints": {...}}``
        """

        return {
            "url": self.url,
            "description": self.description,
            "behaviorHints": self.behavior_hints.to_dict(),
        }
