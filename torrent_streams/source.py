from __future__ import annotations

"""
Torrent source client logic.

This module asks the upstream torrent source what it has for a title and
turns the JSON it sends back into frozen candidates.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional

import requests

from .config import SourceConfig
from .locales import Language
from .models import TorrentCandidate, TorrentFile


def _safe_int(value) -> Optional[int]:
    """
    Coerce a value into an integer, shrugging off commas and weird types.

    Parameters
    ----------
    value : Any
        Seed count or file length from the listing.

    Returns
    -------
    int | None
        Parsed integer, or ``None`` if it wasn't meant to be.
    """

    try:
        return int(str(value).replace(",", ""))
    except (TypeError, ValueError):
        return None


def parse_candidate(item: Any) -> Optional[TorrentCandidate]:
    """
    Convert one listing entry into a TorrentCandidate.

    Returns
    -------
    TorrentCandidate | None
        ``None`` when required fields are missing or nonsense.
    """

    if not isinstance(item, dict):
        logging.warning("Skipping non-object torrent entry: %r", item)
        return None

    try:
        source_name = str(item["sourceName"])
        source_id = str(item["sourceId"])
        info_hash = str(item["infoHash"]).strip().lower()
        raw_files = item["files"]
    except KeyError as exc:
        logging.warning("Skipping torrent without %s: %r", exc.args[0], item.get("name"))
        return None

    try:
        language = Language.parse(str(item.get("language", Language.EN.value)))
    except ValueError:
        logging.warning("Skipping torrent %s with unknown language %r", info_hash, item.get("language"))
        return None

    files: List[TorrentFile] = []
    for raw_file in raw_files if isinstance(raw_files, list) else []:
        if not isinstance(raw_file, dict):
            continue
        length = _safe_int(raw_file.get("length"))
        name = raw_file.get("name")
        if not name or length is None or length < 0:
            continue
        files.append(TorrentFile(name=str(name), length=length))

    if not files:
        logging.warning("Skipping torrent %s with no usable files", info_hash)
        return None

    return TorrentCandidate(
        source_name=source_name,
        source_id=source_id,
        info_hash=info_hash,
        name=str(item.get("name") or files[0].name),
        language=language,
        files=tuple(files),
        seeders=_safe_int(item.get("seeders")) or 0,
        is_speculated=bool(item.get("isSpeculated", False)),
    )


def parse_candidates(payload: Any) -> List[TorrentCandidate]:
    """Accept either a bare list or ``{"torrents": [...]}`` and keep the entries that parse."""

    if isinstance(payload, dict):
        payload = payload.get("torrents", [])
    if not isinstance(payload, list):
        logging.warning("Torrent listing is not a list, got %s", type(payload).__name__)
        return []

    candidates: List[TorrentCandidate] = []
    for item in payload:
        candidate = parse_candidate(item)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def load_candidates_file(path: str | Path) -> List[TorrentCandidate]:
    """
    Read an offline listing from disk.

    Raises
    ------
    FileNotFoundError, json.JSONDecodeError
        Passed through; a broken local file is the caller's problem.
    """

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_candidates(payload)


class TorrentSourceClient:
    """Thin wrapper around requests.Session dedicated to the torrent source."""

    def __init__(self, config: SourceConfig):
        """
        Parameters
        ----------
        config : SourceConfig
            Endpoint and etiquette for the upstream source.
        """

        self.config = config
        self._session_local = threading.local()

    def _make_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": self.config.user_agent, "Accept": "application/json"})
        return session

    def _get_session(self) -> requests.Session:
        """
        Return a thread-local session instance.
        """

        session = getattr(self._session_local, "session", None)
        if session is None:
            session = self._make_session()
            self._session_local.session = session
        return session

    @staticmethod
    def _build_params(content_id: str, season: Optional[int], episode: Optional[int]) -> dict[str, str]:
        params = {"id": content_id}
        if season is not None:
            params["season"] = str(season)
        if episode is not None:
            params["episode"] = str(episode)
        return params

    def search(
        self,
        content_id: str,
        season: Optional[int] = None,
        episode: Optional[int] = None,
    ) -> List[TorrentCandidate]:
        """
        Ask the source for torrents of ``content_id`` (an IMDb id, usually).

        Returns
        -------
        list[TorrentCandidate]
            Candidates that survived parsing. Transport errors, non-200
            answers and non-JSON bodies are logged and give an empty list.
        """

        session = self._get_session()
        try:
            response = session.get(
                self.config.url,
                params=self._build_params(content_id, season, episode),
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            logging.error("Torrent source request failed: %s", exc)
            return []

        if response.status_code != 200:
            logging.warning("Torrent source status %s, head: %r", response.status_code, response.text[:600])
            return []

        try:
            payload = response.json()
        except ValueError:
            logging.warning("Torrent source non-JSON head: %r", response.text[:600])
            return []

        candidates = parse_candidates(payload)
        logging.debug("Torrent source returned %d candidates for %s", len(candidates), content_id)
        return candidates


def dedupe(candidates: Iterable[TorrentCandidate]) -> List[TorrentCandidate]:
    """Drop repeated info hashes, first one wins."""

    seen = set()
    unique: List[TorrentCandidate] = []
    for candidate in candidates:
        if candidate.info_hash in seen:
            continue
        seen.add(candidate.info_hash)
        unique.append(candidate)
    return unique
