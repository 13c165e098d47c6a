from .loader import ConfigError, load_config, get_config, reload_config
from .schema import ChartCoreConfig, GeneratorConfig, IndicatorConfig, OutputConfig

__all__ = [
    "ConfigError",
    "load_config",
    "get_config",
    "reload_config",
    "ChartCoreConfig",
    "GeneratorConfig",
    "IndicatorConfig",
    "OutputConfig",
]
