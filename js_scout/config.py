# === FILE: js_scout/config.py ===
"""
Loading and validation of the JsScout crawl configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("ScoutConfig", "load_config", "merge_overrides")


class ScoutConfig(BaseModel):
    """Configuration for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    workers: int = Field(10, ge=1, description="Number of concurrent fetch workers.")
    timeout: float = Field(15.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent header.")
    verify_ssl: bool = Field(False, description="Verify TLS certificates.")
    input_file: Optional[Path] = Field(None, description="Seed URL list; stdin when unset.")

    @field_validator("user_agent", mode="before")
    def _blank_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScoutConfig:
    """
    Read YAML or JSON and return a validated ScoutConfig.
    Without a path the built-in defaults are used.
    """
    if path is None:
        return ScoutConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScoutConfig(**data)


def merge_overrides(cfg: ScoutConfig, **overrides: Any) -> ScoutConfig:
    """Return a new, re-validated config with the non-None *overrides* applied."""
    update = {k: v for k, v in overrides.items() if v is not None}
    if not update:
        return cfg
    return ScoutConfig(**{**cfg.model_dump(), **update})
