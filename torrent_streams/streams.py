from __future__ import annotations

"""Turning a ranked torrent into something a player can open."""

from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

from .description import DescriptionComposer
from .locales import Language, Locale
from .models import BehaviorHints, StreamRecord, TorrentCandidate, UserProfile
from .ranking import order_torrents

PLAY_PATH_TEMPLATE = "{base_url}/api/auth/{device_token}/stream/play/{source_name}/{source_id}/{info_hash}/{file_index}"


def encode_segment(value: object) -> str:
    """Percent-encode one path segment, slashes included."""

    return quote(str(value), safe="-_.!~*'()")


class StreamRecordBuilder:
    """Composes playback records from candidates."""

    def __init__(self, base_url: str, composer: Optional[DescriptionComposer] = None) -> None:
        """
        Parameters
        ----------
        base_url : str
            Public address of the addon; trailing slashes are dropped.
        composer : DescriptionComposer, optional
            Description writer, defaults to one using the stock tables.
        """

        self._base_url = base_url.rstrip("/")
        self._composer = composer or DescriptionComposer()

    def play_url(self, candidate: TorrentCandidate, device_token: str, file_index: int) -> str:
        """Every dynamic segment, the device token included, is percent-encoded on its own."""

        return PLAY_PATH_TEMPLATE.format(
            base_url=self._base_url,
            device_token=encode_segment(device_token),
            source_name=encode_segment(candidate.source_name),
            source_id=encode_segment(candidate.source_id),
            info_hash=encode_segment(candidate.info_hash),
            file_index=encode_segment(file_index),
        )

    def build(
        self,
        candidate: TorrentCandidate,
        is_recommended: bool,
        device_token: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        locale: Locale = Locale.DEFAULT,
    ) -> StreamRecord:
        """
        Build the stream record for ``candidate``.

        Returns
        -------
        StreamRecord
            Play URL, localized description, and hints that keep the web
            player out of it and group streams by info hash.

        Raises
        ------
        FileIndexError
            If the candidate resolves to a file it doesn't have.
        """

        file_index = candidate.get_media_file_index(season, episode)
        media_file = candidate.file_at(file_index)
        return StreamRecord(
            url=self.play_url(candidate, device_token, file_index),
            description=self._composer.compose(
                candidate, is_recommended, season, episode, locale, media_file=media_file
            ),
            behavior_hints=BehaviorHints(binge_group=candidate.info_hash),
        )


class StreamService:
    """Ranking and stream building behind one friendly face."""

    def __init__(self, builder: StreamRecordBuilder) -> None:
        self._builder = builder

    def order_torrents(
        self,
        torrents: Sequence[TorrentCandidate],
        profile: UserProfile,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> List[TorrentCandidate]:
        return [candidate for candidate, _ in order_torrents(torrents, profile, season, episode)]

    def convert_torrent_to_stream(
        self,
        torrent: TorrentCandidate,
        is_recommended: bool,
        device_token: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        preferred_language: Language = Language.EN,
    ) -> StreamRecord:
        return self._builder.build(
            torrent,
            is_recommended,
            device_token,
            season=season,
            episode=episode,
            locale=preferred_language.locale,
        )

    def streams_for(
        self,
        torrents: Sequence[TorrentCandidate],
        profile: UserProfile,
        device_token: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Tuple[StreamRecord, float]]:
        """
        Rank ``torrents`` and build records for the top ``limit`` of them.

        The first record is flagged recommended when it scored above zero,
        i.e. it matched at least one of the user's preferences.
        """

        ranked = order_torrents(torrents, profile, season, episode)
        if limit is not None:
            ranked = ranked[: max(0, limit)]

        records: List[Tuple[StreamRecord, float]] = []
        for position, (candidate, total) in enumerate(ranked):
            record = self._builder.build(
                candidate,
                is_recommended=position == 0 and total > 0,
                device_token=device_token,
                season=season,
                episode=episode,
                locale=profile.locale,
            )
            records.append((record, total))
        return records
