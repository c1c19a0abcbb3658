"""Report settings model and YAML loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kubetop.constants.defaults import (
    CONFIG_PATH_DEFAULT,
    CONFIG_PATH_ENV,
    GROUP_BY_WORKLOAD_DEFAULT,
    HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT,
    WATERMARK_DEFAULT,
)
from kubetop.constants.limits import (
    HIGH_REPLICA_TRUNCATE_LIMIT,
    MAX_WORKERS,
    MAX_WORKERS_MAX,
    MAX_WORKERS_MIN,
    WATERMARK_MAX,
    WATERMARK_MIN,
)
from kubetop.constants.timeouts import REPORT_TIMEOUT_DEFAULT
from kubetop.errors import ConfigLoadError

logger = logging.getLogger(__name__)


class ReportSettings(BaseModel):
    """Report settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # Display
    watermark: float = Field(default=WATERMARK_DEFAULT, ge=WATERMARK_MIN, le=WATERMARK_MAX)

    # Cluster access
    context: str | None = None
    report_timeout_seconds: float = Field(default=REPORT_TIMEOUT_DEFAULT, gt=0)

    # Aggregation fan-out
    max_workers: int = Field(default=MAX_WORKERS, ge=MAX_WORKERS_MIN, le=MAX_WORKERS_MAX)

    # Ranking heuristics
    group_by_workload: bool = GROUP_BY_WORKLOAD_DEFAULT
    high_replica_name_fragments: list[str] = Field(
        default_factory=lambda: list(HIGH_REPLICA_NAME_FRAGMENTS_DEFAULT)
    )
    truncate_limit: int = Field(default=HIGH_REPLICA_TRUNCATE_LIMIT, ge=1)


def resolve_config_path(path: str | os.PathLike[str] | None = None) -> tuple[Path, bool]:
    """Return the settings file to read and whether it was explicitly requested."""
    if path:
        return Path(path).expanduser(), True
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser(), True
    return Path(CONFIG_PATH_DEFAULT).expanduser(), False


def load_settings(
    path: str | os.PathLike[str] | None = None,
    **overrides: Any,
) -> ReportSettings:
    """Load settings from YAML, then apply non-None overrides (CLI flags).

    An explicitly requested file must exist; the default location is optional.

    Raises:
        ConfigLoadError: If the file cannot be read, parsed, or validated.
    """
    config_path, explicit = resolve_config_path(path)
    data: dict[str, Any] = {}

    if config_path.exists():
        try:
            with config_path.open(encoding="utf-8") as handle:
                parsed = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"failed to read config {config_path}: {exc}") from exc
        if parsed is None:
            parsed = {}
        if not isinstance(parsed, dict):
            raise ConfigLoadError(f"config {config_path} must contain a mapping")
        data.update(parsed)
        logger.debug("Loaded settings from %s", config_path)
    elif explicit:
        raise ConfigLoadError(f"config file {config_path} does not exist")

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return ReportSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"invalid settings: {exc}") from exc
