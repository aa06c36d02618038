from .runtime_config import (
    OVERFLOW_POLICIES,
    DisplaySettings,
    LoggingSettings,
    MetricsSettings,
    RelaySettings,
    RuntimeConfig,
    build_runtime_config,
    get_runtime_config,
)

__all__ = [
    'OVERFLOW_POLICIES',
    'DisplaySettings',
    'LoggingSettings',
    'MetricsSettings',
    'RelaySettings',
    'RuntimeConfig',
    'build_runtime_config',
    'get_runtime_config',
]
