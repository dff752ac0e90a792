from __future__ import annotations

"""
Weighted multi-criteria ranking.

Every scorer gets one look at every candidate, the totals are summed, and
the crowd is lined up highest first. Equal scores keep their place in line.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .models import TorrentCandidate, UserProfile

T = TypeVar("T")

Scorer = Callable[[T], float]

LANGUAGE_MATCH_SCORE = 3
RESOLUTION_MATCH_SCORE = 2


def score_list(items: Sequence[T], scorers: Sequence[Scorer]) -> List[Tuple[T, float]]:
    """
    Score and order ``items``, keeping the totals.

    Parameters
    ----------
    items : Sequence[T]
        Candidates in their original order.
    scorers : Sequence[Callable[[T], float]]
        Pure scoring functions; each is called exactly once per item.

    Returns
    -------
    list[tuple[T, float]]
        ``(item, total)`` pairs, highest total first. Ties keep input order.
    """

    scored = [(item, sum(scorer(item) for scorer in scorers)) for item in items]
    # sorted() is stable, so equal totals stay in input order.
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def rate_list(items: Sequence[T], scorers: Sequence[Scorer]) -> List[T]:
    """
    Return a new list of ``items`` sorted by descending total score.

    Empty ``items`` gives an empty list; empty ``scorers`` gives the input
    order unchanged. Exceptions raised by a scorer propagate.
    """

    return [item for item, _ in score_list(items, scorers)]


def preference_scorers(
    profile: UserProfile,
    season: Optional[int] = None,
    episode: Optional[int] = None,
) -> List[Scorer]:
    """
    Build the scorers that encode a user's taste.

    Parameters
    ----------
    profile : UserProfile
        Preferred language and resolutions.
    season, episode : int, optional
        Used to pick the file whose resolution gets judged.

    Returns
    -------
    list[Callable[[TorrentCandidate], float]]
        Language match first (worth 3), then resolution match (worth 2).
    """

    def language_score(candidate: TorrentCandidate) -> float:
        return LANGUAGE_MATCH_SCORE if candidate.get_language() == profile.preferred_language else 0

    def resolution_score(candidate: TorrentCandidate) -> float:
        media_file = candidate.get_media_file(season, episode)
        resolution = candidate.get_resolution(media_file.name)
        return RESOLUTION_MATCH_SCORE if resolution in profile.preferred_resolutions else 0

    return [language_score, resolution_score]


def order_torrents(
    candidates: Sequence[TorrentCandidate],
    profile: UserProfile,
    season: Optional[int] = None,
    episode: Optional[int] = None,
) -> List[Tuple[TorrentCandidate, float]]:
    """Rank candidates by the user's preferences, keeping the totals for the caller."""

    ranked = score_list(candidates, preference_scorers(profile, season, episode))
    for position, (candidate, total) in enumerate(ranked[:5], start=1):
        logging.debug("Rank %d: %s | score=%s lang=%s", position, candidate.name, total, candidate.language.value)
    return ranked
