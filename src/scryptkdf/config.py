"""Configuration loading utilities."""

from pathlib import Path
from typing import Any, Dict

import yaml

from scryptkdf.params import ScryptParams

RUNTIME_DEFAULTS: Dict[str, Any] = {
    "backend": "python",
    "device": "cpu",
    "batch_size": None,
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration parameters

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}

    return config


def params_from_config(config: Dict[str, Any]) -> ScryptParams:
    """
    Build ScryptParams from the "scrypt" section of a config.

    Args:
        config: Dictionary returned by load_config

    Returns:
        Validated ScryptParams

    Raises:
        KeyError: If the "scrypt" section or one of n, r, p is missing
        ScryptParameterError: If a value is out of range
    """
    return ScryptParams.from_dict(config["scrypt"])


def runtime_from_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Read the "runtime" section (backend, device, batch_size) with defaults.

    Args:
        config: Dictionary returned by load_config

    Returns:
        Dictionary with keys backend, device and batch_size

    Raises:
        ValueError: If the section contains unknown keys
    """
    section = config.get("runtime") or {}
    unknown = set(section) - set(RUNTIME_DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown runtime options: {sorted(unknown)}")
    runtime = dict(RUNTIME_DEFAULTS)
    runtime.update(section)
    return runtime
