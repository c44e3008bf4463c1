"""
Configuration Management

Defaults below, overridden by config/config.yaml (or the file named by
SEQTHINK_CONFIG_PATH), then by SEQTHINK_<SECTION>_<KEY> env vars.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config" / "config.yaml"

DEFAULT_CONFIG = {
    "thinking": {
        "keyword_limit": 5,
        "semantic_overlap_threshold": 2,
    },
    "alignment": {
        "drift_threshold": 4,
        "low_alignment_threshold": 5,
    },
    "guidance": {
        "max_items": 2,
    },
    "recommendations": {
        "enabled": True,
    },
    "logging": {
        "level": "INFO",
    },
}

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")


def _coerce(raw: str, default):
    """Coerce an env string to the type of the default value."""
    if isinstance(default, bool):
        lowered = raw.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {raw}")
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, int):
        return int(raw)
    return raw


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from YAML, with env var overrides."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        env_path = os.getenv("SEQTHINK_CONFIG_PATH")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if config_path.exists():
        try:
            with open(config_path, 'r') as f:
                file_config = yaml.safe_load(f)
            if file_config:
                # Section-wise merge
                for section, values in file_config.items():
                    if section in config and isinstance(values, dict):
                        config[section].update(values)
                    else:
                        config[section] = values
            logger.info(f"Loaded config from {config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load {config_path}: {e}, using defaults")

    # Env var overrides (e.g., SEQTHINK_GUIDANCE_MAX_ITEMS=3)
    for section, values in config.items():
        if isinstance(values, dict):
            for key, default in values.items():
                env_key = f"SEQTHINK_{section.upper()}_{key.upper()}"
                env_val = os.getenv(env_key)
                if env_val:
                    try:
                        config[section][key] = _coerce(env_val, default)
                        logger.info(f"Config override: {env_key}={env_val}")
                    except ValueError:
                        logger.warning(f"Ignoring invalid override {env_key}={env_val}")

    return config
