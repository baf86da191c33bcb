"""
Configuration for the quant analytics engine.
Defaults for the caller-facing knobs and policy constants, with optional
overrides from a YAML file and QUANT_* environment variables.
"""

import os
import logging
import yaml
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from analytics.calculations.regression import DEFAULT_CONFIDENCE_LEVEL
from analytics.calculations.volatility import ANNUALIZATION_FACTOR, DEFAULT_WINDOW
from analytics.calculations.risk_adjusted import ZERO_VARIANCE_SHARPE
from analytics.calculations.trend import TREND_SLOPE_THRESHOLD

# Load environment variables
load_dotenv()

# Set up logger
logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


@dataclass(frozen=True)
class QuantConfig:
    """Tunable parameters for quant analytics."""
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL
    rolling_window: int = DEFAULT_WINDOW
    forecast_days: int = 7
    trend_slope_threshold: float = TREND_SLOPE_THRESHOLD
    streak_window: int = 30
    streak_threshold: float = 10.0
    volatility_trend_window: int = 7
    annualization_factor: int = ANNUALIZATION_FACTOR
    zero_variance_sharpe: float = ZERO_VARIANCE_SHARPE
    min_network_size: int = 3

    def __post_init__(self):
        """Validate ranges."""
        if not 0 < self.confidence_level < 1:
            raise ConfigError(f"confidence_level must be in (0, 1), got {self.confidence_level}")

        for name in ('rolling_window', 'forecast_days', 'streak_window',
                     'volatility_trend_window', 'annualization_factor'):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")

        if self.trend_slope_threshold < 0:
            raise ConfigError("trend_slope_threshold must be non-negative")

        if self.streak_threshold < 0:
            raise ConfigError("streak_threshold must be non-negative")

        if self.min_network_size < 1:
            raise ConfigError("min_network_size must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary of all settings."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(name: str, raw: Any, template: Any) -> Any:
    """Convert a raw override to the type of the default value."""
    try:
        if isinstance(template, int) and not isinstance(template, bool):
            return int(raw)
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for {name}: {raw!r}")


def _env_overrides(defaults: QuantConfig) -> Dict[str, Any]:
    """Collect QUANT_<FIELD> environment overrides."""
    overrides = {}
    for f in fields(defaults):
        env_name = f"QUANT_{f.name.upper()}"
        raw = os.getenv(env_name)
        if raw is not None and raw != '':
            overrides[f.name] = _coerce(env_name, raw, getattr(defaults, f.name))
    return overrides


def load_quant_config(config_path: Optional[str] = None) -> QuantConfig:
    """
    Build a QuantConfig from defaults, an optional YAML file and the environment.

    Precedence: environment (QUANT_<FIELD>) > YAML file > defaults. The YAML
    file may hold the settings at top level or under a 'quant' key.

    Args:
        config_path: YAML path; falls back to QUANT_CONFIG_PATH when omitted

    Returns:
        Validated QuantConfig

    Raises:
        ConfigError: If the file is missing, malformed, or has invalid values
    """
    defaults = QuantConfig()
    settings: Dict[str, Any] = {}

    if config_path is None:
        config_path = os.getenv('QUANT_CONFIG_PATH')

    if config_path:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Quant config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse quant config: {e}")

        if not isinstance(loaded, dict):
            raise ConfigError("Quant config must be a mapping")

        section = loaded.get('quant', loaded)
        if not isinstance(section, dict):
            raise ConfigError("Quant config 'quant' section must be a mapping")

        known = {f.name for f in fields(defaults)}

        for key, value in section.items():
            if key not in known:
                logger.warning(f"Ignoring unknown quant config key: {key}")
                continue
            settings[key] = _coerce(key, value, getattr(defaults, key))

        logger.info(f"Loaded quant config from {config_path}")

    settings.update(_env_overrides(defaults))

    return replace(defaults, **settings)
