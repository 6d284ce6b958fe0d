# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""
Unified Configuration Service - Single source of truth for tracker configuration

Configuration is assembled from three layers, lowest precedence first:
- Built-in defaults (the values the challenge was started with)
- ``config.json`` inside ``TRACKER_CONFIG_DIR`` (defaults to ``<project>/config``)
- Environment variables (``GUILD_ID``, ``THREADS_CHANNEL_ID``, ...)

Loading never raises: invalid values are logged and replaced by their default.
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Mapping, Optional, Tuple

import pytz

from services.exceptions import InvalidConfigValueError, MissingConfigError

logger = logging.getLogger('tracker.config_service')

DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_CAMPAIGN_START = date(2025, 10, 4)
DEFAULT_CHALLENGE_DAYS = 75

# Config key -> environment variable for channel/message identifiers
_ID_FIELDS: Dict[str, str] = {
    'guild_id': 'GUILD_ID',
    'threads_channel_id': 'THREADS_CHANNEL_ID',
    'statuses_channel_id': 'STATUSES_CHANNEL_ID',
    'statuses_message_id': 'STATUSES_MESSAGE_ID',
    'history_message_id': 'HISTORY_MESSAGE_ID',
    'cheat_day_ref_channel_id': 'CHEAT_DAY_REF_CHANNEL_ID',
    'cheat_day_ref_message_id': 'CHEAT_DAY_REF_MESSAGE_ID',
    'alarms_ref_channel_id': 'ALARMS_REF_CHANNEL_ID',
    'error_channel_id': 'ERROR_CHANNEL_ID',
}


@dataclass(frozen=True)
class RequirementSpec:
    """A requirement posted into every new daily entry thread."""
    name: str
    description: str = ""
    kind: str = "either"


@dataclass(frozen=True)
class TrackerConfig:
    """Effective tracker configuration."""
    guild_id: Optional[int] = None
    threads_channel_id: Optional[int] = None
    statuses_channel_id: Optional[int] = None
    statuses_message_id: Optional[int] = None
    history_message_id: Optional[int] = None
    cheat_day_ref_channel_id: Optional[int] = None
    cheat_day_ref_message_id: Optional[int] = None
    alarms_ref_channel_id: Optional[int] = None
    error_channel_id: Optional[int] = None
    timezone: str = DEFAULT_TIMEZONE
    campaign_start: date = DEFAULT_CAMPAIGN_START
    challenge_days: int = DEFAULT_CHALLENGE_DAYS
    check_interval: int = 60
    archived_page_size: int = 100
    archived_max_pages: int = 20
    private_threads: bool = True
    initial_cheat_days: int = 3
    debug_mode: bool = False
    requirements: Tuple[RequirementSpec, ...] = field(default_factory=tuple)

    def require(self, key: str) -> int:
        """Return the configured identifier for *key* or raise :class:`MissingConfigError`."""
        value = getattr(self, key, None)
        if not value:
            raise MissingConfigError(
                f"{key} is not configured",
                details={'key': key, 'env': _ID_FIELDS.get(key)},
            )
        return value


# ----------------------------------------------------------------------
# Value coercion helpers
# ----------------------------------------------------------------------
def _coerce_id(key: str, value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"{key} must be a numeric Discord id", details={'value': value})


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def _coerce_date(key: str, value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"{key} must be an ISO date (YYYY-MM-DD)", details={'value': value})


def _coerce_timezone(key: str, value: Any) -> str:
    name = str(value).strip()
    try:
        pytz.timezone(name)
    except pytz.exceptions.UnknownTimeZoneError:
        raise InvalidConfigValueError(f"{key} is not a known timezone", details={'value': value})
    return name


def _coerce_positive_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"{key} must be an integer", details={'value': value})
    if number <= 0:
        raise InvalidConfigValueError(f"{key} must be positive", details={'value': value})
    return number


def _parse_requirements(raw: Any) -> Tuple[RequirementSpec, ...]:
    if not isinstance(raw, list):
        raise InvalidConfigValueError("requirements must be a list", details={'value': raw})

    specs = []
    for item in raw:
        if not isinstance(item, dict) or not item.get('name'):
            logger.warning("Skipping requirement without a name: %r", item)
            continue
        specs.append(RequirementSpec(
            name=str(item['name']),
            description=str(item.get('description', '')),
            kind=str(item.get('kind', 'either')).lower(),
        ))
    return tuple(specs)


def _coerce_non_negative_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"{key} must be an integer", details={'value': value})
    if number < 0:
        raise InvalidConfigValueError(f"{key} must not be negative", details={'value': value})
    return number


_COERCERS = {
    'timezone': _coerce_timezone,
    'campaign_start': _coerce_date,
    'challenge_days': _coerce_positive_int,
    'check_interval': _coerce_positive_int,
    'archived_page_size': _coerce_positive_int,
    'archived_max_pages': _coerce_positive_int,
    'initial_cheat_days': _coerce_non_negative_int,
    'private_threads': lambda key, value: _coerce_bool(value),
    'debug_mode': lambda key, value: _coerce_bool(value),
    'requirements': lambda key, value: _parse_requirements(value),
}

# Environment overrides for non-id settings
_ENV_SETTINGS: Dict[str, str] = {
    'timezone': 'TRACKER_TIMEZONE',
    'campaign_start': 'TRACKER_CAMPAIGN_START',
    'check_interval': 'TRACKER_CHECK_INTERVAL',
    'private_threads': 'TRACKER_PRIVATE_THREADS',
    'debug_mode': 'TRACKER_DEBUG',
}


def build_config(raw: Mapping[str, Any], env: Optional[Mapping[str, str]] = None) -> TrackerConfig:
    """Merge *raw* file values with *env* overrides into a :class:`TrackerConfig`.

    Every field is converted on its own so one bad value only resets that field.
    """
    env = os.environ if env is None else env
    merged: Dict[str, Any] = dict(raw)

    for key, env_name in {**_ID_FIELDS, **_ENV_SETTINGS}.items():
        if env.get(env_name):
            merged[key] = env[env_name]

    values: Dict[str, Any] = {}
    for key, value in merged.items():
        try:
            if key in _ID_FIELDS:
                values[key] = _coerce_id(key, value)
            elif key in _COERCERS:
                values[key] = _COERCERS[key](key, value)
            else:
                logger.debug("Ignoring unknown config key '%s'", key)
        except InvalidConfigValueError as e:
            logger.warning("Invalid config value for '%s': %s. Using default.", key, e.message)

    return replace(TrackerConfig(), **values)


class ConfigService:
    """Configuration service - single source of truth for all tracker configuration.

    Use :func:`get_config_service` to obtain the shared instance.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        base_dir = os.environ.get("TRACKER_CONFIG_DIR")
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif base_dir:
            self.config_dir = Path(base_dir)
        else:
            self.config_dir = Path(__file__).resolve().parents[2] / "config"

        self.main_config_file = self.config_dir / "config.json"
        self._lock = Lock()
        self._cached: Optional[TrackerConfig] = None

    def get_config(self, force_reload: bool = False) -> TrackerConfig:
        """Return the effective configuration, loading it on first use."""
        with self._lock:
            if self._cached is None or force_reload:
                self._cached = build_config(self._load_json_file(self.main_config_file))
                logger.debug("Configuration loaded from %s", self.main_config_file)
            return self._cached

    def invalidate_cache(self) -> None:
        with self._lock:
            self._cached = None

    def get_bot_token(self) -> Optional[str]:
        """The bot token only ever comes from the environment."""
        token = os.environ.get("DISCORD_TOKEN", "").strip()
        return token or None

    def _load_json_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (IOError, OSError, json.JSONDecodeError) as e:
            logger.error("Could not read %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Config file %s does not contain a JSON object", path)
            return {}
        return data


_config_service: Optional[ConfigService] = None


def get_config_service() -> ConfigService:
    global _config_service
    if _config_service is None:
        _config_service = ConfigService()
    return _config_service


def reset_config_service() -> None:
    global _config_service
    _config_service = None


def load_config() -> TrackerConfig:
    """Convenience wrapper returning the cached configuration."""
    return get_config_service().get_config()
