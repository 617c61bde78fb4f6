"""
Recommender settings: frozen pydantic sections plus the loader that fills them.

Layers, later ones winning:

    config/default.toml  ->  config/local.toml  ->  .env  ->  STOCKBOARD_REC_* variables

``.env`` only seeds variables that are not already set in the process, so a
real environment variable always beats the file. Callers get an ``AppConfig``
or one of its sections and never read the environment themselves.
"""

from __future__ import annotations

import math
import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class RecommenderConfig(BaseModel):
    """Hybrid (content + collaborative) scoring parameters.

    ``popularity_cap`` bounds the popularity feature dimension:
    ``min((views + 2 * likes) / popularity_cap, 1.0)``.

    ``candidate_multiplier`` controls how many candidates each source
    contributes before fusion (``limit * candidate_multiplier``).
    """

    model_config = ConfigDict(frozen=True)

    popularity_cap: float = 1000.0
    content_weight: float = 0.4
    collaborative_weight: float = 0.6
    default_limit: int = 10
    similar_limit: int = 5
    candidate_multiplier: int = 2
    renormalize: bool = False

    @field_validator("popularity_cap")
    @classmethod
    def validate_cap(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f"popularity_cap must be a positive finite number, got {v}.")
        return v

    @field_validator("content_weight", "collaborative_weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"Weights must be finite and non-negative, got {v}.")
        return v

    @field_validator("default_limit", "similar_limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Limits must be >= 0, got {v}.")
        return v

    @field_validator("candidate_multiplier")
    @classmethod
    def validate_multiplier(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"candidate_multiplier must be >= 1, got {v}.")
        return v


class TrendingConfig(BaseModel):
    """Time-decayed popularity ranking settings."""

    model_config = ConfigDict(frozen=True)

    time_window_hours: float = 24.0
    limit: int = 10

    @field_validator("time_window_hours")
    @classmethod
    def validate_window(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError(f"time_window_hours must be a positive finite number, got {v}.")
        return v

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"limit must be >= 0, got {v}.")
        return v


class InstrumentConfig(BaseModel):
    """Sector-affinity + performance weights for stock recommendations."""

    model_config = ConfigDict(frozen=True)

    sector_weight: float = 0.6
    performance_weight: float = 0.4
    limit: int = 5

    @model_validator(mode="after")
    def validate_weights(self) -> "InstrumentConfig":
        for name in ("sector_weight", "performance_weight"):
            v = getattr(self, name)
            if not math.isfinite(v) or v < 0:
                raise ValueError(f"{name} must be finite and non-negative, got {v}.")
        if self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}.")
        return self


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration: the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    recommender: RecommenderConfig = RecommenderConfig()
    trending: TrendingConfig = TrendingConfig()
    instruments: InstrumentConfig = InstrumentConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_DEFAULT_CONFIG = Path("config") / "default.toml"
_LOCAL_OVERRIDE = "local.toml"


def _find_project_root() -> Path:
    """Nearest ancestor of this package that holds ``pyproject.toml``.

    Falls back to the directory above the package for installs that ship
    without the project metadata file.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the validated ``AppConfig`` for this process.

    ``config_path`` replaces ``config/default.toml``; a ``local.toml`` next to
    whichever file is used is merged on top of it.

    Raises:
        FileNotFoundError: ``config_path`` (or the default file) is missing.
        pydantic.ValidationError: A merged value is out of range.
    """
    root = _find_project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / _DEFAULT_CONFIG
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = _read_toml(path)
    local_path = path.with_name(_LOCAL_OVERRIDE)
    if local_path.is_file():
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``base`` with ``override`` applied table by table."""
    merged = dict(base)
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            val = _deep_merge(current, val)
        merged[key] = val
    return merged


# Env var -> (section, key). Values stay strings; pydantic coerces them.
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "STOCKBOARD_REC_LOG_LEVEL": ("logging", "level"),
    "STOCKBOARD_REC_CONTENT_WEIGHT": ("recommender", "content_weight"),
    "STOCKBOARD_REC_COLLABORATIVE_WEIGHT": ("recommender", "collaborative_weight"),
}


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``STOCKBOARD_REC_*`` variables (and ``STOCKBOARD_REC_DEBUG``)."""
    for var, (section, key) in _ENV_OVERRIDES.items():
        if value := os.environ.get(var):
            raw.setdefault(section, {})[key] = value

    if debug := os.environ.get("STOCKBOARD_REC_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        recommender=RecommenderConfig(**raw.get("recommender", {})),
        trending=TrendingConfig(**raw.get("trending", {})),
        instruments=InstrumentConfig(**raw.get("instruments", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", False),
    )
