"""Configuration domain exports."""

from .loader import ConfigurationError, load_configuration, registry_from_configuration
from .runtime_settings import ImporterConfiguration

__all__ = [
    "ConfigurationError",
    "ImporterConfiguration",
    "load_configuration",
    "registry_from_configuration",
]
