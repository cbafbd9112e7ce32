"""Settings, logging and tax parameter loading."""

from .settings import EngineSettings, get_settings
from .tax_config_loader import TaxConfigLoader, get_tax_parameters

__all__ = [
    "EngineSettings",
    "get_settings",
    "TaxConfigLoader",
    "get_tax_parameters",
]
