"""Mindflow configuration loader.

Priority (high → low):
  1. CLI flags           (handled at call site — not in this module)
  2. Environment variables  (MINDFLOW_RESPECT_GIT, MINDFLOW_MAX_DEPTH, MINDFLOW_LOG_LEVEL)
  3. Per-project mindflow.yaml  (current directory)
  4. Global ~/.mindflow.yaml  (skipped when HOME is unset)
  5. Hardcoded defaults

Config files must never contain the authorization token; it lives in
``~/.mindflow`` and is written by ``mindflow login`` only.
All YAML reads use yaml.safe_load() — never yaml.load().
"""

from __future__ import annotations

import os
import re
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_GLOBAL_CONFIG_NAME: str = ".mindflow.yaml"
_PROJECT_CONFIG_NAME: str = "mindflow.yaml"

# Fields that suggest a credential — forbidden in every config layer.
# Matches: token, auth_token, api_key, apikey, api-key, secret, password, credential(s).
# Does NOT match legitimate keys like max_depth or respect_git.
_CREDENTIAL_RE: re.Pattern[str] = re.compile(
    r"api[_\-]?(?:key|secret)"
    r"|_token$"
    r"|^token$"
    r"|_secret$"
    r"|^secret$"
    r"|passw(?:ord|d)"
    r"|credential",
    re.IGNORECASE,
)

_KNOWN_SECTIONS: frozenset[str] = frozenset(["resolve", "logging"])

_LOG_LEVELS: frozenset[str] = frozenset(
    ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
)

_FALSE_VALUES: frozenset[str] = frozenset(["0", "false", "no", "off"])


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(ValueError):
    """Raised when a config file contains an invalid or forbidden value."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class ResolveCfg:
    """Path resolution settings (mindflow.yaml: resolve:).

    Attributes:
        respect_git: Use the git file list for directories inside a work tree.
        max_depth: Recursion limit for the plain directory walk.
        exclude: Glob patterns matched against every path component.
    """

    respect_git: bool = True
    max_depth: int = 64
    exclude: list[str] = field(default_factory=list)


@dataclass
class LoggingCfg:
    """Log output settings (mindflow.yaml: logging:)."""

    level: str = "WARNING"


@dataclass
class MindflowConfig:
    """Root configuration object, built by load_config() from merged YAML layers."""

    resolve: ResolveCfg = field(default_factory=ResolveCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------


def _check_no_credentials(data: dict[str, Any], source: Path) -> None:
    """Raise ConfigError if *data* contains any credential-like key names."""

    def _scan(obj: Any, path: str) -> None:
        if isinstance(obj, dict):
            for k, v in obj.items():
                full = f"{path}.{k}" if path else k
                if _CREDENTIAL_RE.search(str(k)):
                    raise ConfigError(
                        f"Config '{source}' contains a forbidden key '{full}'.\n"
                        "  Tokens are stored by 'mindflow login', not in config files.\n"
                        f"  Remove '{full}' from {source.name} and run:\n"
                        "    mindflow login"
                    )
                _scan(v, full)

    _scan(data, "")


def _warn_unknown_keys(data: dict[str, Any], source: Path) -> None:
    """Emit a UserWarning for unrecognised top-level keys."""
    for key in data:
        if key not in _KNOWN_SECTIONS:
            warnings.warn(
                f"Unknown config key '{key}' in '{source}' — ignored.",
                UserWarning,
                stacklevel=4,
            )


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config '{path}' is not valid YAML: {exc}") from None
    if not isinstance(raw, dict):
        raise ConfigError(f"Config '{path}' must be a mapping at the top level.")
    return raw


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_VALUES
    return bool(value)


def _parse_depth(value: Any) -> int:
    try:
        depth = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"resolve.max_depth must be an integer, got {value!r}") from None
    if depth < 0:
        raise ConfigError(f"resolve.max_depth must be >= 0, got {depth}")
    return depth


def _parse_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        allowed = ", ".join(sorted(_LOG_LEVELS))
        raise ConfigError(f"logging.level must be one of {allowed}, got {value!r}")
    return level


# ---------------------------------------------------------------------------
# Merge + build
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a new dict that is *base* deep-merged with *override*."""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _cfg_from_dict(data: dict[str, Any]) -> MindflowConfig:
    """Build a *MindflowConfig* from a merged raw YAML dict."""
    cfg = MindflowConfig()

    if "resolve" in data:
        r = data["resolve"] or {}
        exclude = r.get("exclude", cfg.resolve.exclude) or []
        if isinstance(exclude, str):
            exclude = [exclude]
        cfg.resolve = ResolveCfg(
            respect_git=_parse_bool(r.get("respect_git", cfg.resolve.respect_git)),
            max_depth=_parse_depth(r.get("max_depth", cfg.resolve.max_depth)),
            exclude=[str(p) for p in exclude],
        )

    if "logging" in data:
        lg = data["logging"] or {}
        cfg.logging = LoggingCfg(level=_parse_level(lg.get("level", cfg.logging.level)))

    return cfg


def _apply_env_overrides(cfg: MindflowConfig) -> MindflowConfig:
    """Apply MINDFLOW_* environment variable overrides (layer 2)."""
    if (respect := os.environ.get("MINDFLOW_RESPECT_GIT")) is not None:
        cfg.resolve.respect_git = _parse_bool(respect)
    if depth := os.environ.get("MINDFLOW_MAX_DEPTH"):
        cfg.resolve.max_depth = _parse_depth(depth)
    if level := os.environ.get("MINDFLOW_LOG_LEVEL"):
        cfg.logging.level = _parse_level(level)
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def default_global_config_path() -> Path | None:
    """Return ``$HOME/.mindflow.yaml``, or None when HOME is unset."""
    home = os.environ.get("HOME")
    if not home:
        return None
    return Path(home) / _GLOBAL_CONFIG_NAME


def load_config(
    project_dir: Path | None = None,
    *,
    global_config_path: Path | None = None,
) -> MindflowConfig:
    """Load and return a merged *MindflowConfig*.

    Applies layers in order: global → per-project → env vars.
    CLI flag overrides must be applied by the caller after this function.

    Args:
        project_dir: Directory to search for *mindflow.yaml*. Defaults to CWD.
        global_config_path: Override the global config path (for testing).

    Returns:
        Fully merged *MindflowConfig* with env var overrides applied.

    Raises:
        ConfigError: If a config file contains credential-like fields or
            an invalid value.
    """
    global_path = (
        global_config_path if global_config_path is not None else default_global_config_path()
    )
    search_dir = project_dir if project_dir is not None else Path.cwd()

    merged: dict[str, Any] = {}

    for path in (global_path, search_dir / _PROJECT_CONFIG_NAME):
        if path is None or not path.is_file():
            continue
        raw = _read_yaml(path)
        _check_no_credentials(raw, path)
        _warn_unknown_keys(raw, path)
        merged = _deep_merge(merged, raw)

    cfg = _cfg_from_dict(merged)
    return _apply_env_overrides(cfg)
