from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EXPECTO_CONFIG"


class Markers(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    subject: str = "▼"
    passed: str = "✓"
    failed: str = "✗"

    @model_validator(mode="after")
    def markers_must_be_distinct(self) -> Markers:
        if len({self.subject, self.passed, self.failed}) != 3:
            raise ValueError("subject, passed and failed markers must be distinct")
        for name, value in (
            ("subject", self.subject),
            ("passed", self.passed),
            ("failed", self.failed),
        ):
            if not value or value != value.strip():
                raise ValueError(f"marker '{name}' must be non-empty without surrounding spaces")
        return self


class ReportConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)
    indent: int = Field(default=2, ge=1, le=8)
    markers: Markers = Markers()
    max_value_length: int | None = Field(default=None, ge=8)


def load_config(path: Path) -> ReportConfig:
    """Load and validate a report config from a YAML file.

    ``${VAR}`` and ``${VAR:-default}`` references are expanded before parsing.
    An unset variable without a default raises ValueError naming it.
    Malformed YAML also raises ValueError.
    """
    text = path.read_text(encoding="utf-8")
    try:
        expanded = expandvars(text, nounset=True)
    except Exception as exc:
        raise ValueError(f"Config {path} references an unset environment variable: {exc}") from exc

    try:
        raw = yaml.safe_load(expanded) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Config {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(raw).__name__}")

    config = ReportConfig(**raw)
    logger.debug(f"Loaded report config from {path}: {config.model_dump()}")
    return config


@lru_cache(maxsize=1)
def default_config() -> ReportConfig:
    """Config named by ``$EXPECTO_CONFIG``, or the built-in defaults."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    return ReportConfig()
