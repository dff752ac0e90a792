from __future__ import annotations

"""
Vocabulary and emoji tables for stream descriptions.

One table per locale, checked once when the process starts. Adding a
locale means adding a ``Vocabulary`` row here, nothing else.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .config import ConfigError


class VocabularyError(ConfigError):
    """Raised when a locale or language is missing from the presentation tables."""


class Locale(str, Enum):
    """Languages the descriptions can be written in."""

    DEFAULT = "default"
    HU = "hu"


class Language(str, Enum):
    """Audio/subtitle language of a torrent, and what users ask for."""

    EN = "en"
    HU = "hu"

    @classmethod
    def parse(cls, value: str) -> "Language":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown language: {value}") from exc

    @property
    def locale(self) -> Locale:
        """Locale used when talking to someone who prefers this language."""

        return Locale.HU if self is Language.HU else Locale.DEFAULT


MEDIA_TYPE_PLACEHOLDER = "{media_type}"


@dataclass(frozen=True)
class Vocabulary:
    """Every string a description needs for one locale."""

    warning: str
    recommended: str
    movie: str
    show: str

    def media_noun(self, episodic: bool) -> str:
        return self.show if episodic else self.movie

    def warning_for(self, episodic: bool) -> str:
        try:
            return self.warning.format(media_type=self.media_noun(episodic))
        except (KeyError, IndexError, ValueError) as exc:
            raise VocabularyError(f"Warning template is malformed: {exc!r}") from exc


DEFAULT_VOCABULARIES: Mapping[Locale, Vocabulary] = MappingProxyType(
    {
        Locale.DEFAULT: Vocabulary(
            warning="⚠️ Speculated source ⚠️\nThis might be a different {media_type}!",
            recommended="⭐️ Recommended",
            movie="movie",
            show="show",
        ),
        Locale.HU: Vocabulary(
            warning="⚠️ Bizonytalan forrás ⚠️\nEz lehet egy másik {media_type}!",
            recommended="⭐️ Ajánlott",
            movie="film",
            show="sorozat",
        ),
    }
)

DEFAULT_LANGUAGE_EMOJIS: Mapping[Language, str] = MappingProxyType(
    {
        Language.EN: "🇬🇧",
        Language.HU: "🇭🇺",
    }
)


@dataclass(frozen=True)
class PresentationTables:
    """
    Immutable lookup tables handed to the description composer.

    Parameters
    ----------
    vocabularies : Mapping[Locale, Vocabulary]
        One vocabulary per locale.
    language_emojis : Mapping[Language, str]
        Flag emoji per content language.
    """

    vocabularies: Mapping[Locale, Vocabulary] = field(default_factory=lambda: DEFAULT_VOCABULARIES)
    language_emojis: Mapping[Language, str] = field(default_factory=lambda: DEFAULT_LANGUAGE_EMOJIS)

    def validate(self) -> "PresentationTables":
        """
        Check that every locale and language has a complete entry.

        Returns
        -------
        PresentationTables
            ``self``, so loading and validating reads as one line.

        Raises
        ------
        VocabularyError
            Naming the first missing or blank key.
        """

        for locale in Locale:
            vocabulary = self.vocabulary(locale)
            for item in fields(Vocabulary):
                value = getattr(vocabulary, item.name)
                if not isinstance(value, str) or not value.strip():
                    raise VocabularyError(f"Vocabulary for locale '{locale.value}' has no '{item.name}' entry")
            if MEDIA_TYPE_PLACEHOLDER not in vocabulary.warning:
                raise VocabularyError(
                    f"Warning template for locale '{locale.value}' lacks the {MEDIA_TYPE_PLACEHOLDER} placeholder"
                )
            try:
                vocabulary.warning_for(True)
                vocabulary.warning_for(False)
            except VocabularyError as exc:
                raise VocabularyError(
                    f"Warning template for locale '{locale.value}' is malformed: {exc.__cause__!r}"
                ) from exc
        for language in Language:
            self.language_emoji(language)
        return self

    def vocabulary(self, locale: Locale) -> Vocabulary:
        try:
            return self.vocabularies[locale]
        except KeyError as exc:
            raise VocabularyError(f"No vocabulary for locale '{getattr(locale, 'value', locale)}'") from exc

    def language_emoji(self, language: Language) -> str:
        try:
            emoji = self.language_emojis[language]
        except KeyError as exc:
            raise VocabularyError(f"No emoji for language '{getattr(language, 'value', language)}'") from exc
        if not emoji:
            raise VocabularyError(f"Blank emoji for language '{language.value}'")
        return emoji


DEFAULT_TABLES = PresentationTables().validate()
