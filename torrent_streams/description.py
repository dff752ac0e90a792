from __future__ import annotations

"""
Human-readable stream descriptions.

A description is a stack of lines, each produced by its own little
function. Producers run in a fixed order and either say something or stay
quiet. The locale only swaps the words, never the shape.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .locales import DEFAULT_TABLES, Locale, PresentationTables, Vocabulary
from .models import TorrentCandidate, TorrentFile, is_episodic
from .sizes import format_bytes

SEEDERS_EMOJI = "👥"


@dataclass(frozen=True)
class DescriptionContext:
    """Everything a line producer may look at."""

    candidate: TorrentCandidate
    media_file: TorrentFile
    is_recommended: bool
    episodic: bool
    vocabulary: Vocabulary
    language_emoji: str


LineProducer = Callable[[DescriptionContext], Optional[str]]


def warning_line(context: DescriptionContext) -> Optional[str]:
    if not context.candidate.is_speculated:
        return None
    return context.vocabulary.warning_for(context.episodic)


def recommended_line(context: DescriptionContext) -> Optional[str]:
    if context.is_recommended and not context.candidate.is_speculated:
        return context.vocabulary.recommended
    return None


def type_line(context: DescriptionContext) -> str:
    candidate = context.candidate
    resolution = candidate.get_resolution(context.media_file.name)
    return " | ".join(
        (
            context.language_emoji,
            candidate.display_resolution(resolution),
            format_bytes(context.media_file.length),
        )
    )


def title_line(context: DescriptionContext) -> str:
    candidate = context.candidate
    title = context.media_file.name if context.episodic else candidate.get_name()
    resolution = candidate.get_resolution(context.media_file.name)
    return f"{title}.{candidate.display_resolution_only(resolution)}"


def seeders_line(context: DescriptionContext) -> str:
    return f"{SEEDERS_EMOJI} {context.candidate.get_seeders()}"


DEFAULT_LINE_PRODUCERS: Tuple[LineProducer, ...] = (
    warning_line,
    recommended_line,
    type_line,
    title_line,
    seeders_line,
)


class DescriptionComposer:
    """Folds line producers into a multi-line description."""

    def __init__(
        self,
        tables: PresentationTables = DEFAULT_TABLES,
        producers: Tuple[LineProducer, ...] = DEFAULT_LINE_PRODUCERS,
    ) -> None:
        """
        Parameters
        ----------
        tables : PresentationTables
            Validated vocabulary and emoji tables.
        producers : tuple
            Line producers in output order.
        """

        self._tables = tables
        self._producers = producers

    def build_context(
        self,
        candidate: TorrentCandidate,
        is_recommended: bool,
        season: Optional[int],
        episode: Optional[int],
        locale: Locale,
        media_file: Optional[TorrentFile] = None,
    ) -> DescriptionContext:
        """
        Gather the lookups once so producers stay trivial.

        ``media_file`` lets a caller that already resolved the file pass it
        in, so the description and the play URL talk about the same file.

        Raises
        ------
        FileIndexError
            When the resolved media file index is outside the file list.
        VocabularyError
            When the locale or the candidate's language has no table entry.
        """

        return DescriptionContext(
            candidate=candidate,
            media_file=media_file if media_file is not None else candidate.get_media_file(season, episode),
            is_recommended=is_recommended,
            episodic=is_episodic(season, episode),
            vocabulary=self._tables.vocabulary(locale),
            language_emoji=self._tables.language_emoji(candidate.get_language()),
        )

    def compose(
        self,
        candidate: TorrentCandidate,
        is_recommended: bool,
        season: Optional[int] = None,
        episode: Optional[int] = None,
        locale: Locale = Locale.DEFAULT,
        media_file: Optional[TorrentFile] = None,
    ) -> str:
        """
        Write the description for one candidate.

        Parameters
        ----------
        candidate : TorrentCandidate
            The torrent being described. Never modified.
        is_recommended : bool
            Caller's verdict; ignored for speculated sources.
        season, episode : int, optional
            Both present means we're describing an episode file.
        locale : Locale
            Which vocabulary to speak.
        media_file : TorrentFile, optional
            Already resolved media file; looked up from season/episode when omitted.

        Returns
        -------
        str
            Newline-terminated lines: warning, recommended, type, title, seeders.
        """

        context = self.build_context(candidate, is_recommended, season, episode, locale, media_file)
        lines: List[str] = []
        for producer in self._producers:
            line = producer(context)
            if line is not None:
                lines.append(line)
        return "".join(f"{line}\n" for line in lines)
