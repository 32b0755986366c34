"""
Configuration for LearnPath.

Settings are resolved from, lowest to highest precedence:
- built-in defaults
- an optional YAML file (learnpath.yaml in the working directory)
- LEARNPATH_* environment variables (a .env file is read first)
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)

ENV_PREFIX = "LEARNPATH_"
DEFAULT_CONFIG_FILE = Path("learnpath.yaml")
DEFAULT_DATA_DIR = Path.home() / ".learnpath"


class Settings(BaseModel):
    data_dir: Path = DEFAULT_DATA_DIR
    storage_backend: Literal["sqlite", "memory"] = "sqlite"
    storage_file: str = "progress.db"

    catalog_path: Path = Path("config/courses.config.json")
    quizzes_path: Path = Path("config/quizzes.config.json")

    key_prefix: str = "learnpath"
    video_completion_threshold: float = Field(0.9, gt=0, le=1)
    recent_courses_limit: int = Field(5, ge=1)
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        """Full path of the SQLite progress database."""
        return self.data_dir / self.storage_file

    @property
    def enrollment_key(self) -> str:
        return f"{self.key_prefix}_enrollment"

    @property
    def progress_key(self) -> str:
        return f"{self.key_prefix}_progress"

    @property
    def attempts_key(self) -> str:
        return f"{self.key_prefix}_quiz_attempts"


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def _read_env() -> dict[str, Any]:
    values = {}
    for field_name in Settings.model_fields:
        env_value = os.getenv(ENV_PREFIX + field_name.upper())
        if env_value is not None:
            values[field_name] = env_value
    return values


def load_settings(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
    **overrides: Any,
) -> Settings:
    """
    Load settings from YAML, environment, and explicit overrides.

    Args:
        config_path: YAML file to read (default: ./learnpath.yaml if present)
        env_file: .env file to load before reading the environment
        **overrides: Values that win over every other source

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist
        pydantic.ValidationError: If any value is invalid
    """
    load_dotenv(env_file)

    values: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        values.update(_read_yaml(config_path))
    elif DEFAULT_CONFIG_FILE.exists():
        values.update(_read_yaml(DEFAULT_CONFIG_FILE))

    values.update(_read_env())
    values.update(overrides)

    settings = Settings(**values)
    logger.debug(f"Loaded settings: backend={settings.storage_backend}, data_dir={settings.data_dir}")
    return settings
