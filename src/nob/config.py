"""Configuration model and cached loading.

Resolution order for the config file:
1. ``--config`` CLI path
2. ``$NOB_CONFIG`` environment variable
3. ``nob.json`` in the current working directory
4. built-in defaults (no file)

Environment overrides are applied on top of whatever was loaded: ``$CC``
replaces the compiler, ``$NOB_VERBOSE`` turns on verbose logging and
``$NO_COLOR`` disables colored output.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_TIMESTAMPS = {
    "RimWorld OST.mp3": "rimworld.time",
    "RimWorld Royalty OST.mp3": "rimworld_royalty.time",
    "RimWorld Anomaly OST.mp3": "rimworld_anomaly.time",
}


class NobConfig(BaseModel):
    """Build and runtime settings."""

    cc: str = "cc"
    cflags: List[str] = Field(default_factory=lambda: ["-Wall", "-Wextra"])
    binary: str = "main"
    sources: List[str] = Field(default_factory=lambda: ["main.c"])
    inputs: List[str] = Field(default_factory=list)
    temp_capacity: int = 8 * 1024
    da_init_cap: int = 256
    color_log: bool = True
    verbose: bool = False
    timestamps: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TIMESTAMPS))
    config_path: Path | None = Field(default=None, exclude=True)

    @field_validator("temp_capacity", "da_init_cap")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("sources")
    @classmethod
    def has_sources(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one source is required")
        return v

    def rebuild_inputs(self) -> List[str]:
        """Sources followed by extra inputs, without duplicates."""

        seen: List[str] = []
        for path in [*self.sources, *self.inputs]:
            if path not in seen:
                seen.append(path)
        return seen


_CONFIG: NobConfig | None = None


def resolve_config_path(cli_path: Optional[Path] = None) -> Path | None:
    """Return the config file to load, or None when only defaults apply."""

    if cli_path:
        return cli_path

    env = os.getenv("NOB_CONFIG")
    if env:
        return Path(env).expanduser()

    local = Path.cwd() / "nob.json"
    if local.exists():
        return local

    return None


def _env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    cc = os.getenv("CC")
    if cc:
        data["cc"] = cc
    if os.getenv("NOB_VERBOSE"):
        data["verbose"] = True
    if os.getenv("NO_COLOR"):
        data["color_log"] = False
    return data


def reset() -> None:
    """Reset cached config (primarily for tests)."""

    global _CONFIG
    _CONFIG = None


def use(path: Path | str | None = None) -> NobConfig:
    """Load config from ``path`` (or fallback locations) and cache it."""

    global _CONFIG
    target = Path(path) if path is not None else None
    resolved = resolve_config_path(target)
    data: Dict[str, Any] = {}
    if resolved is not None:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    config_obj = NobConfig.model_validate(_env_overrides(data))
    config_obj.config_path = resolved
    _CONFIG = config_obj
    return config_obj


def ensure(path: Path | str | None = None) -> NobConfig:
    """Ensure a config is loaded, optionally overriding the path."""

    if path is not None:
        return use(path)
    if _CONFIG is None:
        return use(None)
    return _CONFIG


def require() -> NobConfig:
    """Return the cached config, loading it if necessary."""

    return ensure(None)


__all__ = [
    "DEFAULT_TIMESTAMPS",
    "NobConfig",
    "ensure",
    "require",
    "reset",
    "resolve_config_path",
    "use",
]
