"""YAML configuration loader with env var resolution and Pydantic validation.

Loads config from (priority order):
1. --config <path> CLI flag
2. ./docquery.yaml (working directory)
3. ~/.docquery/config.yaml (user home)

Environment variables override YAML: DOCQUERY_<SECTION>_<KEY>.
${VAR} references in YAML values resolve from environment at load time.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from docquery.models.filter_expr import FieldMeta, NormalizeOptions

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")
_ENV_PREFIX = "DOCQUERY_"


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Args:
        value: String potentially containing ${VAR} references.

    Returns:
        String with all ${VAR} references replaced by their env values.
        Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


class SearchConfig(BaseModel):
    """Defaults for search-parameter normalization."""

    no_regex: bool = False
    match_from_start: bool = False

    def to_options(self) -> NormalizeOptions:
        return NormalizeOptions(
            no_regex=self.no_regex, match_from_start=self.match_from_start
        )


class SortConfig(BaseModel):
    """Sort normalization defaults and the field schema."""

    locale: str = "en"
    fields: dict[str, FieldMeta] = Field(default_factory=dict)


class TextSearchConfig(BaseModel):
    """Fields searched by free-text queries."""

    fields: list[str] = []


class LoggingConfig(BaseModel):
    """Log level for the CLI."""

    level: str = "warning"

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        if value.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return value.lower()


class DocQueryConfig(BaseModel):
    """Top-level docquery configuration."""

    search: SearchConfig = SearchConfig()
    sort: SortConfig = SortConfig()
    text_search: TextSearchConfig = TextSearchConfig()
    logging: LoggingConfig = LoggingConfig()


def _find_config_file() -> Path | None:
    """Search for config file in standard locations.

    Returns:
        Path to config file if found, None otherwise.
    """
    candidates = [
        Path.cwd() / "docquery.yaml",
        Path.cwd() / "docquery.yml",
        Path.home() / ".docquery" / "config.yaml",
        Path.home() / ".docquery" / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _split_env_key(key: str) -> tuple[str, str] | None:
    """Map ``DOCQUERY_TEXT_SEARCH_FIELDS`` to ``("text_search", "fields")``.

    The longest matching section name wins, so ``text_search`` is never
    read as section ``text``.
    """
    if not key.startswith(_ENV_PREFIX):
        return None
    suffix = key[len(_ENV_PREFIX):].lower()
    for section in sorted(DocQueryConfig.model_fields, key=len, reverse=True):
        name = suffix.removeprefix(section + "_")
        if name != suffix and name:
            return section, name
    return None


def _env_value(value: str) -> str | bool:
    # All non-string config keys are booleans.
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay DOCQUERY_<SECTION>_<KEY> environment variables onto ``data``."""
    for key, value in os.environ.items():
        target = _split_env_key(key)
        if target is None:
            continue
        section, name = target
        if data.get(section) is None:
            data[section] = {}
        if isinstance(data[section], dict):
            data[section][name] = _env_value(value)
    return data


def load_config(config_path: str | None = None) -> DocQueryConfig:
    """Load docquery configuration from YAML file with env var resolution.

    Args:
        config_path: Explicit path to config file. If None, searches
            standard locations (cwd, then ~/.docquery/).

    Returns:
        Parsed and validated DocQueryConfig. Defaults (with environment
        overrides) when no config file is found.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        pydantic.ValidationError: If the merged config is invalid.
    """
    if config_path:
        path: Path | None = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()

    raw_data: dict[str, Any] = {}
    if path is not None:
        logger.info("Loading config from %s", path)
        with open(path) as f:
            raw_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults")

    data = _resolve_env_vars_recursive(raw_data)
    data = _apply_env_overrides(data)
    return DocQueryConfig(**data)
