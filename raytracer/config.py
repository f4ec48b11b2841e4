"""Configuration loading.

Settings live in a YAML file (``config.yaml`` at the repository root by
default). The ``tolerance`` section overrides the comparison margin; the
remaining sections are read by the scripts.
"""

from __future__ import annotations

import logging
import numbers
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from raytracer.errors import ConfigurationError
from raytracer.tolerance import EPSILON, ULPS, FloatMargin

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file, DEFAULT_CONFIG_PATH if None

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the document is not a mapping
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    # An empty file loads as None
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}, got {type(config).__name__}"
        )

    logger.debug(f"Loaded configuration from {config_path}: sections={sorted(config)}")
    return config


def margin_from_config(config: Dict) -> FloatMargin:
    """Build the comparison margin from the ``tolerance`` section.

    Args:
        config: Configuration dictionary

    Returns:
        FloatMargin with the configured epsilon and ulps, falling back to
        EPSILON and ULPS

    Raises:
        ConfigurationError: If a value is negative or has the wrong type
    """
    section = config.get("tolerance") or {}
    if not isinstance(section, dict):
        raise ConfigurationError("tolerance section must be a mapping")

    try:
        epsilon = float(section.get("epsilon", EPSILON))
        ulps = section.get("ulps", ULPS)
        if ulps is not None and (isinstance(ulps, bool) or not isinstance(ulps, numbers.Integral)):
            raise ConfigurationError(f"ulps must be an integer or null, got {ulps!r}")
        return FloatMargin(epsilon, ulps)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid tolerance configuration: {e}") from e
