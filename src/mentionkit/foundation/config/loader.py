"""mentionkit configuration management.

Loads configuration from .mentionkit/config.yaml with sensible defaults.
All settings can be overridden via environment variables (MENTIONKIT_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .mentionkit/config.yaml (project-local)
3. ~/.mentionkit/config.yaml (user-global)
4. Built-in defaults

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization.
"""


import logging
import os
import threading
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from mentionkit.foundation.errors import ErrorCode, config_error
from mentionkit.foundation.types.config import (
    EligibilityConfig,
    SearchConfig,
    TokenConfig,
    WorkspaceConfig,
)

logger = logging.getLogger(__name__)

_ENV_PREFIX = "MENTIONKIT_"

_SECTIONS: dict[str, type] = {
    "search": SearchConfig,
    "eligibility": EligibilityConfig,
    "workspace": WorkspaceConfig,
    "tokens": TokenConfig,
}


@dataclass(frozen=True, slots=True)
class MentionkitConfig:
    """Root configuration for mentionkit."""

    search: SearchConfig = field(default_factory=SearchConfig)
    """Ranking and coalescing."""

    eligibility: EligibilityConfig = field(default_factory=EligibilityConfig)
    """File size gate."""

    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    """Bundled filesystem workspace."""

    tokens: TokenConfig = field(default_factory=TokenConfig)
    """Token counting."""

    debug: bool = False
    """Enable debug logging by default."""


# Global config instance (lazy-loaded, thread-safe)
_config: MentionkitConfig | None = None
_config_lock = threading.Lock()


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce_env_value(value: str, default: Any) -> Any:
    """Coerce an environment string to the type of the field's default."""
    if isinstance(default, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(default, tuple):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    if isinstance(default, int):
        return int(value)
    if isinstance(default, float):
        return float(value)
    return value


def _apply_env_overrides(config_dict: dict) -> dict:
    """Apply environment variable overrides.

    Environment variables follow pattern: MENTIONKIT_SECTION_KEY. Field names
    are matched against the section dataclass, so keys containing
    underscores split correctly.

    Examples:
        MENTIONKIT_SEARCH_MAX_FILE_RESULTS=25
        MENTIONKIT_SEARCH_LOW_SCORING_SEGMENTS=bin,obj
        MENTIONKIT_DEBUG=true
    """
    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue

        path_str = key[len(_ENV_PREFIX):].lower()

        if path_str == "debug":
            config_dict["debug"] = value.lower() in ("true", "1", "yes")
            continue

        for section, section_type in _SECTIONS.items():
            if not path_str.startswith(section + "_"):
                continue
            name = path_str[len(section) + 1:]
            defaults = {f.name: f for f in fields(section_type)}
            if name not in defaults:
                break
            default = asdict(section_type())[name]
            try:
                config_dict[section][name] = _coerce_env_value(value, default)
            except ValueError as e:
                raise config_error(ErrorCode.CONFIG_INVALID, key=key, detail=str(e)) from e
            break

    return config_dict


def _build_section(name: str, data: Any) -> Any:
    """Construct one section dataclass, rejecting unknown keys."""
    section_type = _SECTIONS[name]
    if not isinstance(data, dict):
        raise config_error(
            ErrorCode.CONFIG_INVALID, key=name, detail="expected a mapping"
        )

    allowed = {f.name for f in fields(section_type)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise config_error(
            ErrorCode.CONFIG_INVALID,
            key=f"{name}.{unknown[0]}",
            detail="unknown setting",
        )

    # YAML gives lists, the dataclasses hold tuples
    values = {k: tuple(v) if isinstance(v, list) else v for k, v in data.items()}
    return section_type(**values)


def _dict_to_config(data: dict) -> MentionkitConfig:
    """Convert a dict to MentionkitConfig."""
    return MentionkitConfig(
        search=_build_section("search", data.get("search", {})),
        eligibility=_build_section("eligibility", data.get("eligibility", {})),
        workspace=_build_section("workspace", data.get("workspace", {})),
        tokens=_build_section("tokens", data.get("tokens", {})),
        debug=bool(data.get("debug", False)),
    )


def load_config(path: str | Path | None = None) -> MentionkitConfig:
    """Load configuration from file with defaults and env overrides.

    Built-in defaults are updated from the first config file that exists,
    in this order (files are not merged with each other):
    1. Explicit path if provided
    2. .mentionkit/config.yaml (project-local)
    3. ~/.mentionkit/config.yaml (user-global)

    Environment variables (MENTIONKIT_*) are applied on top.

    Args:
        path: Optional explicit config file path.

    Returns:
        The resulting MentionkitConfig instance.

    Raises:
        MentionError: CONFIG_INVALID for unknown keys or uncoercible values.
    """
    global _config

    config_dict: dict[str, Any] = {
        name: asdict(section_type()) for name, section_type in _SECTIONS.items()
    }
    config_dict["debug"] = False

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".mentionkit/config.yaml"),
        Path.home() / ".mentionkit" / "config.yaml",
    ])

    for config_path in config_paths:
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Skipping unreadable config %s: %s", config_path, e)
                continue
            if not isinstance(file_config, dict):
                raise config_error(
                    ErrorCode.CONFIG_INVALID,
                    key=str(config_path),
                    detail="top level must be a mapping",
                )
            _deep_update(config_dict, file_config)
            logger.debug("Loaded config from %s", config_path)
            break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)

    try:
        _config = _dict_to_config(config_dict)
    except TypeError as e:
        raise config_error(ErrorCode.CONFIG_INVALID, key="config", detail=str(e)) from e
    return _config


def get_config() -> MentionkitConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking.
    """
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None


def save_default_config(path: str | Path = ".mentionkit/config.yaml") -> Path:
    """Save a commented default configuration file.

    Args:
        path: Where to save the config.

    Returns:
        Path to the saved config file.
    """
    config_content = '''# mentionkit configuration
#
# Defaults live in mentionkit/foundation/types/config.py; edit the values
# you want to override.

search:
  # Default result caps
  max_file_results: 50
  max_symbol_results: 20

  # Files scoring at or below this are discarded (performance floor)
  fuzzy_threshold: -100000

  # Files under these directories rank low unless the query names them
  low_scoring_segments: ["bin"]
  low_score_penalty: 100000

  # Full workspace scans run at most once per window (seconds)
  find_files_throttle_seconds: 10.0

  # Remote searches wait for typing to go quiet (seconds)
  remote_debounce_seconds: 0.5

eligibility:
  # Files above this many bytes are never offered
  max_file_bytes: 1000000
  markdown_bytes_per_token: 3.5
  default_bytes_per_token: 4.5

workspace:
  # Glob patterns that may never be used as context
  ignore: []

  # Glob patterns of files that are listed but marked ignored
  flag: []

tokens:
  encoding: "cl100k_base"

debug: false
'''

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_content, encoding="utf-8")
    return path
