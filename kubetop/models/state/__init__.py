"""Settings state models."""

from kubetop.models.state.app_settings import (
    ReportSettings,
    load_settings,
    resolve_config_path,
)

__all__ = ["ReportSettings", "load_settings", "resolve_config_path"]
