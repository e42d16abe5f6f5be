"""
wordleoff.config — Configuration loading
=========================================

Settings come from three layers, later ones overriding earlier ones:

    1. JSON config file (``--config``)
    2. ``.env`` file in the working directory (loaded into the environment)
    3. Process environment variables (``WORDLEOFF_*``)

Example config.json:

    {
        "db_path": "sessions.db",
        "policy": {"max_players": 8, "connection_expire_seconds": 8}
    }
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .answers import AnswerSource, WordListAnswerSource, default_answer_source
from .errors import ConfigError
from .policy import SessionPolicy

logger = logging.getLogger("wordleoff.config")

# Environment variable -> top-level settings key
ENV_MAPPINGS = {
    "WORDLEOFF_DB_PATH": "db_path",
    "WORDLEOFF_LOG_FILE": "log_file",
    "WORDLEOFF_LOG_LEVEL": "log_level",
    "WORDLEOFF_SWEEP_INTERVAL_SECONDS": "sweep_interval_seconds",
    "WORDLEOFF_WORDS_PATH": "words_path",
}

# Environment variable -> policy key
POLICY_ENV_MAPPINGS = {
    "WORDLEOFF_MAX_PLAYERS": "max_players",
    "WORDLEOFF_MAX_GUESSES": "max_guesses",
    "WORDLEOFF_SESSION_EXPIRE_MINUTES": "session_expire_minutes",
    "WORDLEOFF_CONNECTION_EXPIRE_SECONDS": "connection_expire_seconds",
    "WORDLEOFF_PAST_ANSWERS_MAX_SIZE": "past_answers_max_size",
    "WORDLEOFF_RESTART_GRACE_SECONDS": "restart_grace_seconds",
    "WORDLEOFF_DISCONNECTED_PLAYERS_HOLD_SEAT": "disconnected_players_hold_seat",
    "WORDLEOFF_REJECT_JOIN_AFTER_FIRST_GUESS": "reject_join_after_first_guess",
}


class Settings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(extra="forbid")

    policy: SessionPolicy = Field(default_factory=SessionPolicy)
    db_path: str = "wordleoff.db"
    log_file: Optional[str] = "wordleoff.log"
    log_level: str = "INFO"
    sweep_interval_seconds: float = Field(default=5, gt=0)
    words_path: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def _read_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", ["config"])
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}", ["config"]) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object", ["config"])
    return data


def load_settings(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build settings from a config file and the environment.

    Args:
        config_path: Optional JSON config file
        env: Environment to read; defaults to ``os.environ`` after loading
            a ``.env`` file

    Raises:
        ConfigError: If the file is unreadable or any value is invalid
    """
    data = _read_config_file(config_path)
    policy: Dict[str, Any] = dict(data.pop("policy", None) or {})

    if env is None:
        load_dotenv()
        env = os.environ

    for env_key, key in ENV_MAPPINGS.items():
        if env_key in env:
            data[key] = env[env_key]
    for env_key, key in POLICY_ENV_MAPPINGS.items():
        if env_key in env:
            policy[key] = env[env_key]

    data["policy"] = policy
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise ConfigError(f"Invalid configuration: {fields}", fields) from e


def build_answer_source(settings: Settings) -> AnswerSource:
    """Answer source for the configured word list (bundled list by default)."""
    if settings.words_path:
        return WordListAnswerSource(settings.words_path)
    return default_answer_source()
