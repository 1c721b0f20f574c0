"""
YAML → typed config loader.

Loads tunables from defaults.yaml (bundled with the package) and
optionally merges user overrides from ~/.workout-tracker/config.yaml.

Usage:
    from workout_tracker.core.engine.config_loader import load_app_config
    cfg = load_app_config()
    cutoff = cfg.get("day_boundary", {}).get("cutoff_hour", 4)

If the bundled YAML cannot be read, all getters return the Python defaults
from config.py (no crash). If the user override file exists but has parse
errors, a warning is emitted and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import BACKUP_REMINDER_DAYS, CATEGORY_PALETTE, DAY_CUTOFF_HOUR, STATS_WEEKS, TOP_N

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} on a missing or malformed file."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"workout-tracker: ignoring config file {path} ({exc})", stacklevel=2)
        return {}
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


def get_app_home() -> Path:
    """Directory for data and user config (WORKOUT_TRACKER_HOME or ~/.workout-tracker)."""
    override = os.environ.get("WORKOUT_TRACKER_HOME")
    if override:
        return Path(override).expanduser()
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / ".workout-tracker"


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled defaults.yaml, or None if not found."""
    candidate = Path(__file__).parent.parent.parent / "defaults.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return <app home>/config.yaml if it exists, else None."""
    p = get_app_home() / "config.yaml"
    return p if p.exists() else None


def load_app_config() -> dict[str, Any]:
    """
    Load and merge configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/workout_tracker/defaults.yaml
    2. User override at <app home>/config.yaml

    Returns:
        Merged dict of config sections. Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = _deep_merge(config, _load_yaml_file(bundled))

    user = get_user_yaml_path()
    if user is not None:
        user_cfg = _load_yaml_file(user)
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return config


def _int_setting(section: str, key: str, default: int, cfg: dict[str, Any] | None) -> int:
    cfg = load_app_config() if cfg is None else cfg
    section_cfg = cfg.get(section)
    value = section_cfg.get(key, default) if isinstance(section_cfg, dict) else default
    try:
        return int(value)
    except (TypeError, ValueError):
        warnings.warn(
            f"workout-tracker: {section}.{key}={value!r} is not an integer; using {default}",
            stacklevel=3,
        )
        return default


def get_day_cutoff_hour(cfg: dict[str, Any] | None = None) -> int:
    hour = _int_setting("day_boundary", "cutoff_hour", DAY_CUTOFF_HOUR, cfg)
    if not 0 <= hour <= 23:
        warnings.warn(
            f"workout-tracker: cutoff_hour={hour} outside 0..23; using {DAY_CUTOFF_HOUR}",
            stacklevel=2,
        )
        return DAY_CUTOFF_HOUR
    return hour


def get_palette(cfg: dict[str, Any] | None = None) -> tuple[str, ...]:
    cfg = load_app_config() if cfg is None else cfg
    display = cfg.get("display")
    palette = display.get("category_palette") if isinstance(display, dict) else None
    if isinstance(palette, list) and palette and all(isinstance(c, str) for c in palette):
        return tuple(palette)
    return CATEGORY_PALETTE


def get_stats_weeks(cfg: dict[str, Any] | None = None) -> int:
    return max(1, _int_setting("display", "stats_weeks", STATS_WEEKS, cfg))


def get_top_n(cfg: dict[str, Any] | None = None) -> int:
    return max(1, _int_setting("display", "top_n", TOP_N, cfg))


def get_backup_reminder_days(cfg: dict[str, Any] | None = None) -> int:
    return _int_setting("backup", "reminder_days", BACKUP_REMINDER_DAYS, cfg)
