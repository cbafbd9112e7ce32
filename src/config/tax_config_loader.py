"""
Tax Configuration Loader.

Loads tax parameters from YAML configuration files:
- federal_{year}.yaml (required)
- states_{year}.yaml (state returns)
- local_{year}.yaml (city returns)

and validates them into TaxParameters. Floats in the YAML are read as
Decimal so rates like 0.0495 stay exact.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from config.parameters import TaxParameters
from forms.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config directory
CONFIG_DIR = Path(__file__).parent / "tax_parameters"


class _DecimalSafeLoader(yaml.SafeLoader):
    """SafeLoader that builds Decimal instead of float."""


def _construct_decimal(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> Decimal:
    return Decimal(loader.construct_scalar(node))


_DecimalSafeLoader.add_constructor("tag:yaml.org,2002:float", _construct_decimal)


@dataclass
class ConfigMetadata:
    """Metadata about a configuration file."""
    version: str
    tax_year: int
    effective_date: str
    source: str  # "IRS", "state", "local"
    irs_references: List[str] = field(default_factory=list)
    notes: str = ""


class TaxConfigLoader:
    """
    Loads and caches tax parameters per tax year.

    Scalar federal parameters can be overridden from the environment,
    with ``__`` separating nested keys:

        TAX_2025_STANDARD_DEDUCTION__S=16000
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else CONFIG_DIR
        self._parameters: Dict[int, TaxParameters] = {}
        self._metadata: Dict[str, ConfigMetadata] = {}

    def load(self, tax_year: int) -> TaxParameters:
        """Load (or return cached) parameters for a tax year."""
        if tax_year in self._parameters:
            return self._parameters[tax_year]

        federal = self._read(f"federal_{tax_year}.yaml", tax_year, required=True)
        federal = self._apply_env_overrides(federal, tax_year)
        states = self._read(f"states_{tax_year}.yaml", tax_year, required=False)
        localities = self._read(f"local_{tax_year}.yaml", tax_year, required=False)

        try:
            parameters = TaxParameters(
                tax_year=tax_year,
                federal=federal,
                states=states,
                localities=localities,
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid tax parameters for {tax_year} in {self.config_dir}: {e}"
            ) from e

        logger.info(
            "Loaded %s tax parameters: %d states, %d localities",
            tax_year, len(parameters.states), len(parameters.localities),
        )
        self._parameters[tax_year] = parameters
        return parameters

    def metadata(self, filename: str) -> Optional[ConfigMetadata]:
        return self._metadata.get(filename)

    def available_years(self) -> List[int]:
        years = []
        for path in self.config_dir.glob("federal_*.yaml"):
            suffix = path.stem.split("_", 1)[1]
            if suffix.isdigit():
                years.append(int(suffix))
        return sorted(years)

    def clear_cache(self) -> None:
        self._parameters.clear()
        self._metadata.clear()

    def _read(self, filename: str, tax_year: int, required: bool) -> Dict[str, Any]:
        path = self.config_dir / filename
        if not path.exists():
            if required:
                raise ConfigurationError(f"Missing tax parameter file {path}")
            logger.warning(f"No {filename} in {self.config_dir}, continuing without it")
            return {}

        logger.info(f"Loading tax config from {path}")
        with open(path, "r") as f:
            try:
                data = yaml.load(f, Loader=_DecimalSafeLoader) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Cannot parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping at the top level")

        raw_metadata = data.pop("_metadata", None)
        if raw_metadata:
            metadata = ConfigMetadata(**raw_metadata)
            if metadata.tax_year != tax_year:
                raise ConfigurationError(
                    f"{path} declares tax year {metadata.tax_year}, expected {tax_year}"
                )
            self._metadata[filename] = metadata
        return data

    def _apply_env_overrides(self, config: Dict[str, Any], tax_year: int) -> Dict[str, Any]:
        """Apply environment variable overrides to federal parameters."""
        prefix = f"TAX_{tax_year}_"

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            path = key[len(prefix):].lower().split("__")
            target = config
            for part in path[:-1]:
                node = target.get(part)
                if not isinstance(node, dict):
                    # Status keys are upper case in YAML
                    node = target.get(part.upper())
                if not isinstance(node, dict):
                    logger.warning(f"Ignoring override {key}: no section '{part}'")
                    break
                target = node
            else:
                leaf = path[-1]
                if leaf not in target and leaf.upper() in target:
                    leaf = leaf.upper()
                if leaf not in target:
                    logger.warning(f"Ignoring override {key}: unknown parameter '{leaf}'")
                    continue
                target[leaf] = yaml.load(value, Loader=_DecimalSafeLoader)
                logger.info(f"Override from env: {key}={value}")

        return config


_default_loader = TaxConfigLoader()


@lru_cache()
def get_tax_parameters(tax_year: int = 2025, config_dir: Optional[str] = None) -> TaxParameters:
    """Cached parameters for a year from the default or a given directory."""
    loader = TaxConfigLoader(Path(config_dir)) if config_dir else _default_loader
    return loader.load(tax_year)
