from __future__ import annotations

"""Resolution detection for torrent file names."""

from dataclasses import dataclass
from enum import Enum
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class Resolution(str, Enum):
    """Video resolutions we know how to spot in a file name."""

    R2160P = "2160p"
    R1440P = "1440p"
    R1080P = "1080p"
    R720P = "720p"
    R576P = "576p"
    R480P = "480p"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "Resolution":
        """
        Look up a resolution from its tag, e.g. ``"1080p"`` or ``"4k"``.

        Raises
        ------
        ValueError
            When the tag is not a resolution we recognise.
        """

        normalized = value.strip().lower()
        for pattern, resolution, _ in _RULES:
            if pattern.fullmatch(normalized):
                return resolution
        if normalized == cls.UNKNOWN.value:
            return cls.UNKNOWN
        raise ValueError(f"Unknown resolution: {value}")


@dataclass(frozen=True)
class ResolutionLabel:
    """How a resolution is shown to humans."""

    resolution: Resolution
    label: str
    short: str
    aliases: Sequence[str]


_LABELS: Tuple[ResolutionLabel, ...] = (
    ResolutionLabel(Resolution.R2160P, "4K UHD", "4K", ("2160p", "4k", "uhd")),
    ResolutionLabel(Resolution.R1440P, "QHD", "1440p", ("1440p", "2k", "qhd")),
    ResolutionLabel(Resolution.R1080P, "Full HD", "1080p", ("1080p", "1080i", "fhd")),
    ResolutionLabel(Resolution.R720P, "HD", "720p", ("720p", "hd")),
    ResolutionLabel(Resolution.R576P, "SD", "576p", ("576p", "576i")),
    ResolutionLabel(Resolution.R480P, "SD", "480p", ("480p", "480i", "sd", "dvdrip")),
)

_LABELS_BY_RESOLUTION: Dict[Resolution, ResolutionLabel] = {label.resolution: label for label in _LABELS}


def _build_alias_pattern(alias: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(alias)}(?![a-z0-9])", re.IGNORECASE)


_RULES: List[Tuple[re.Pattern[str], Resolution, bool]] = []
for _label in _LABELS:
    for _alias in _label.aliases:
        _RULES.append((_build_alias_pattern(_alias), _label.resolution, _alias[0].isdigit()))

# Explicit pixel counts ("720p") win over loose words ("hd", "sd").
_RULES.sort(key=lambda item: not item[2])


def detect_resolution(file_name: str) -> Resolution:
    """
    Guess the resolution of a release from its file name.

    Parameters
    ----------
    file_name : str
        Torrent file name, e.g. ``"Dune.Part.Two.2024.2160p.WEB-DL.mkv"``.

    Returns
    -------
    Resolution
        The first matching resolution, or ``Resolution.UNKNOWN``.
    """

    for pattern, resolution, _ in _RULES:
        if pattern.search(file_name):
            return resolution
    return Resolution.UNKNOWN


def display_resolution(resolution: Resolution) -> str:
    """Long form, e.g. ``"Full HD (1080p)"``."""

    label = _LABELS_BY_RESOLUTION.get(resolution)
    if label is None:
        return "Unknown quality"
    return f"{label.label} ({resolution.value})"


def display_resolution_only(resolution: Resolution) -> str:
    """Short tag, e.g. ``"1080p"`` or ``"4K"``."""

    label = _LABELS_BY_RESOLUTION.get(resolution)
    return label.short if label else "?"


def parse_resolutions(values: Optional[Iterable[str]]) -> frozenset[Resolution]:
    """Turn configuration strings into a set of resolutions."""

    if not values:
        return frozenset()
    return frozenset(Resolution.parse(value) for value in values)
