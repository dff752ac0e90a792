from __future__ import annotations

"""
High-level stream selection logic.

Listens to the torrent source, lets the ranker crown the winners and hands
them to the stream builder without breaking a sweat.
"""

import logging
from typing import List, Optional, Sequence

from .models import StreamRecord, TorrentCandidate, UserProfile
from .source import TorrentSourceClient, dedupe
from .streams import StreamService


class StreamFinder:
    """Wraps TorrentSourceClient and StreamService to go from a title to streams."""

    def __init__(self, service: StreamService, source_client: Optional[TorrentSourceClient] = None):
        """
        Parameters
        ----------
        service : StreamService
            Ranker and builder.
        source_client : TorrentSourceClient, optional
            Upstream source; only needed by ``find_candidates``.
        """

        self._service = service
        self._source = source_client

    def find_candidates(
        self,
        content_id: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> List[TorrentCandidate]:
        """
        Pull a fresh list of torrents for ``content_id``.

        Raises
        ------
        RuntimeError
            If the finder was built without a source client.
        """

        if self._source is None:
            raise RuntimeError("No torrent source configured")
        candidates = dedupe(self._source.search(content_id, season=season, episode=episode))
        logging.debug("Finder received %d candidates", len(candidates))
        return candidates

    def pick_streams(
        self,
        candidates: Sequence[TorrentCandidate],
        profile: UserProfile,
        device_token: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[StreamRecord]:
        """
        Rank candidates and build stream records for the best of them.

        Returns
        -------
        list[StreamRecord]
            Highest ranked first; empty when there was nothing to rank.
        """

        if not candidates:
            return []

        records = self._service.streams_for(
            candidates,
            profile,
            device_token,
            season=season,
            episode=episode,
            limit=limit,
        )
        if records:
            best, score = records[0]
            logging.debug("Best stream: %s | score=%s", best.behavior_hints.binge_group, score)
        return [record for record, _ in records]
