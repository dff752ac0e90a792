from __future__ import annotations

"""
Configuration plumbing for torrent_streams.

Flips tables if anything looks shady.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; TorrentStreams/1.0)"
DEFAULT_REQUEST_TIMEOUT = 12.0
DEFAULT_LANGUAGE = "en"


class ConfigError(Exception):
    """Raised when configuration loading faceplants."""


@dataclass
class AddonConfig:
    """Where clients reach us. Every stream URL hangs off ``url``."""

    url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AddonConfig":
        """
        Build an instance from raw configuration data.

        Parameters
        ----------
        data : dict[str, Any]
            Chunk of config JSON scoped to the addon.

        Returns
        -------
        AddonConfig
            Base address with any trailing slash shaved off.

        Raises
        ------
        ConfigError
            If the URL is missing or blank; a stream URL without a host is just a rumour.
        """

        try:
            url = data["url"]
        except KeyError as exc:
            raise ConfigError(f"Missing addon setting: {exc.args[0]}") from exc

        url = str(url).strip().rstrip("/")
        if not url:
            raise ConfigError("Addon url must not be empty")
        return cls(url=url)


@dataclass
class SourceConfig:
    """Settings for the upstream torrent source, a.k.a. the talent scout."""

    url: str
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SourceConfig":
        """
        Build a SourceConfig from a JSON blob.

        Raises
        ------
        ConfigError
            If the endpoint URL is missing.
        """

        try:
            url = data["url"]
        except KeyError as exc:
            raise ConfigError(f"Missing source setting: {exc.args[0]}") from exc

        return cls(
            url=url,
            user_agent=data.get("user_agent", DEFAULT_USER_AGENT),
            request_timeout=float(data.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)),
        )


@dataclass
class ProfileConfig:
    """Default user preferences, used when the caller doesn't bring their own."""

    preferred_language: str = DEFAULT_LANGUAGE
    preferred_resolutions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ProfileConfig":
        if data is None:
            return cls()

        resolutions = data.get("preferred_resolutions", [])
        if isinstance(resolutions, str):
            resolutions = [item.strip() for item in resolutions.split(",") if item.strip()]
        if not isinstance(resolutions, list):
            raise ConfigError("profile.preferred_resolutions must be a list")

        return cls(
            preferred_language=str(data.get("preferred_language", DEFAULT_LANGUAGE)).lower(),
            preferred_resolutions=[str(item) for item in resolutions],
        )


@dataclass
class LoggingConfig:
    """Lightweight logging configuration for when INFO just isn't loud enough."""

    level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoggingConfig":
        """
        Create a logging config from a dict.

        Parameters
        ----------
        data : dict[str, Any] | None
            Optional logging section. ``None`` means we stick with INFO like responsible adults.
        """

        if data is None:
            return cls()
        return cls(level=str(data.get("level", "INFO")).upper())


@dataclass
class AppConfig:
    """Aggregate configuration: addon, source, profile and logging in one bundle."""

    addon: AddonConfig
    source: Optional[SourceConfig] = None
    profile: ProfileConfig = field(default_factory=ProfileConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """
        Stitch together the full configuration set from JSON.

        Parameters
        ----------
        data : dict[str, Any]
            Entire configuration payload.

        Returns
        -------
        AppConfig
            Everything the app needs to know, tied up in a dataclass bow.

        Raises
        ------
        ConfigError
            If the ``addon`` section is missing; every other section is optional.
        """

        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a JSON object")

        try:
            addon_data = data["addon"]
        except KeyError as exc:
            raise ConfigError(f"Missing top-level section: {exc.args[0]}") from exc

        source_data = data.get("source")

        return cls(
            addon=AddonConfig.from_dict(addon_data),
            source=SourceConfig.from_dict(source_data) if source_data is not None else None,
            profile=ProfileConfig.from_dict(data.get("profile")),
            logging=LoggingConfig.from_dict(data.get("logging")),
        )


class ConfigLoader:
    """Loads application configuration from JSON files and delivers it."""

    def __init__(self, path: str | Path):
        """
        Parameters
        ----------
        path : str | Path
            File system path where the config JSON resides, probably fell down the couch.
        """

        self.path = Path(path)

    def load(self) -> AppConfig:
        """
        Read and validate the configuration file.

        Raises
        ------
        ConfigError
            When the file is missing or invalid.
        """

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigError(f"Configuration file not found: {self.path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON configuration: {exc.msg}") from exc

        return AppConfig.from_dict(payload)

    @staticmethod
    def apply_overrides(config: AppConfig, overrides: dict[str, Any]) -> AppConfig:
        """
        Update the in-memory configuration with CLI overrides.

        Parameters
        ----------
        config : AppConfig
            The baseline configuration, straight from the JSON file.
        overrides : dict[str, Any]
            CLI overrides; ``None`` and empty values are ignored.

        Returns
        -------
        AppConfig
            The same object, adjusted in place just for this whim.
        """

        if overrides.get("addon_url"):
            config.addon.url = str(overrides["addon_url"]).rstrip("/")
        if overrides.get("source_url"):
            if config.source is None:
                config.source = SourceConfig(url=overrides["source_url"])
            else:
                config.source.url = overrides["source_url"]
        if overrides.get("language"):
            config.profile.preferred_language = str(overrides["language"]).lower()
        if overrides.get("resolutions"):
            config.profile.preferred_resolutions = list(overrides["resolutions"])

        return config
