"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, load_overrides
from .runtime_settings import (
    Configuration,
    PlanSettings,
    RecordStoreSettings,
    RunSettings,
    ServerSettings,
    SuiteSettings,
    SyncOverrides,
)

__all__ = [
    "Configuration",
    "PlanSettings",
    "RecordStoreSettings",
    "RunSettings",
    "ServerSettings",
    "SuiteSettings",
    "SyncOverrides",
    "ConfigurationError",
    "load_configuration",
    "load_overrides",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
