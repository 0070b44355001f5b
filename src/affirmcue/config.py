# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Configuration management for affirmcue.
Handles loading and saving matcher settings from a YAML config file.
"""

import copy
from pathlib import Path
from typing import Any, TypedDict

import yaml

CONFIG_FILENAME: str = ".affirmcue.yaml"


class MatchingSettings(TypedDict):
    """Type definition for matching configuration settings."""
    max_fuzzy_distance: int
    min_fuzzy_length: int
    window_slack: int
    min_stem_length: int


class Config(TypedDict):
    """Type definition for the complete configuration."""
    matching: MatchingSettings
    # Write the matcher trace to logs/matcher.log
    debug_log: bool
    log_level: str


# Default configuration values
DEFAULT_CONFIG: Config = {
    "matching": {
        # Single-character recognizer slips are tolerated
        "max_fuzzy_distance": 1,
        # Shorter words ("a", "at", "an") must match exactly or by stem
        "min_fuzzy_length": 4,
        # Extra tokens kept beyond the phrase length in the tail window
        "window_slack": 2,
        # Shortest stem left after stripping an inflection
        "min_stem_length": 3,
    },
    "debug_log": False,
    "log_level": "WARNING",
}


def get_config_path() -> Path:
    """Get the path to the config file in the current working directory."""
    return Path.cwd() / CONFIG_FILENAME


def _deep_merge(base, override):
    """
    Deep merge two dictionaries, with override taking precedence.
    Returns a new dictionary without modifying the originals.

    Args:
        base: Base dictionary to merge from.
        override: Dictionary with values that take precedence over base.

    Returns:
        New dictionary with merged values.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file, merged with defaults.

    Args:
        config_path: Optional path to config file. If None, uses default location.

    Returns:
        Configuration dictionary with all values (defaults + overrides from file).
    """
    if config_path is None:
        config_path = get_config_path()

    # Start with defaults
    config: dict[str, Any] = copy.deepcopy(dict(DEFAULT_CONFIG))

    if config_path.exists():
        try:
            with open(config_path, encoding='utf-8') as f:
                file_config: Any = yaml.safe_load(f)
                if isinstance(file_config, dict):
                    config = _deep_merge(config, file_config)
                elif file_config is not None:
                    print(f"Warning: Ignoring config in {config_path}: "
                          f"expected a mapping, got {type(file_config).__name__}")
        except (OSError, yaml.YAMLError) as e:
            print(f"Warning: Could not load config from {config_path}: {e}")

    return config  # type: ignore[return-value]


def save_config(config: Config, config_path: Path | None = None) -> bool:
    """
    Save configuration to file.

    Args:
        config: Configuration dictionary to save.
        config_path: Optional path to config file. If None, uses default location.

    Returns:
        True if save was successful, False otherwise.
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(dict(config), f, default_flow_style=False, sort_keys=False)
        return True
    except (OSError, yaml.YAMLError) as e:
        print(f"Error saving config to {config_path}: {e}")
        return False


def get_matching_settings(config: Config) -> MatchingSettings:
    """
    Extract matching settings from config, filling in any missing keys.

    Args:
        config: Configuration dictionary.

    Returns:
        Matching settings dictionary.
    """
    matching: Any = config.get("matching")
    if matching is None:
        matching = {}
    elif not isinstance(matching, dict):
        print(f"Warning: Ignoring matching settings: "
              f"expected a mapping, got {type(matching).__name__}")
        matching = {}
    return _deep_merge(
        DEFAULT_CONFIG["matching"],
        matching
    )  # type: ignore[return-value]
