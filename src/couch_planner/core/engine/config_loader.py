"""
YAML → program defaults loader.

Loads the default program from program.yaml (bundled with the package) and
optionally merges user overrides from ~/.couch-planner/program.yaml.

Usage:
    from couch_planner.core.engine.config_loader import default_settings_dict
    defaults = default_settings_dict()
    weeks = defaults["program_weeks"]

If the bundled YAML cannot be read, lookups fall back to the Python defaults
in config.py.  If the user override file exists but has parse errors, a
warning is issued and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import (
    DEFAULT_DAYS_PER_WEEK,
    DEFAULT_GOAL_DISTANCE_KM,
    DEFAULT_PROGRAM_WEEKS,
    DEFAULT_REST_DAYS,
    DEFAULT_RUNNING_SPEED_KMH,
    DEFAULT_STARTING_DISTANCE_KM,
    DEFAULT_WALKING_SPEED_KMH,
)

_PYTHON_DEFAULTS: dict[str, Any] = {
    "goal_distance_km": DEFAULT_GOAL_DISTANCE_KM,
    "starting_distance_km": DEFAULT_STARTING_DISTANCE_KM,
    "rest_days": list(DEFAULT_REST_DAYS),
    "program_weeks": DEFAULT_PROGRAM_WEEKS,
    "training_days_per_week": DEFAULT_DAYS_PER_WEEK,
    "walking_speed_kmh": DEFAULT_WALKING_SPEED_KMH,
    "running_speed_kmh": DEFAULT_RUNNING_SPEED_KMH,
}

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled program.yaml, or None if not found."""
    # config_loader.py lives at src/couch_planner/core/engine/config_loader.py
    candidate = Path(__file__).parent.parent.parent / "program.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.couch-planner/program.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".couch-planner" / "program.yaml"
    return p if p.exists() else None


def load_program_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge program configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/couch_planner/program.yaml
    2. User override (``user_path`` or ~/.couch-planner/program.yaml)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        try:
            config = _deep_merge(config, _load_yaml_file(bundled))
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"couch-planner: bundled program.yaml unreadable ({exc}); "
                "using Python defaults.",
                stacklevel=2,
            )

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None and user.exists():
        try:
            config = _deep_merge(config, _load_yaml_file(user))
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"couch-planner: ignoring {user} ({exc})",
                stacklevel=2,
            )

    return config


def default_settings_dict(user_path: Path | None = None) -> dict[str, Any]:
    """
    Default program settings (without a start date).

    Python defaults overlaid with the ``defaults`` section of the merged
    YAML configuration.
    """
    defaults = load_program_config(user_path).get("defaults", {})
    if not isinstance(defaults, dict):
        defaults = {}
    return _deep_merge(_PYTHON_DEFAULTS, defaults)
