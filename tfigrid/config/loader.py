"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union
from dataclasses import fields, is_dataclass

from .schema import (
    GridGenerationConfig, DomainConfig, CurveConfig, GridConfig,
    OutputConfig, LoggingConfig,
    coarse_preset, reference_preset, fine_preset,
)

SIDES = ('bottom', 'right', 'top', 'left')


def _merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Handle string representations of numbers (e.g., "3.0e0")
    if field_type in (float, 'float') and isinstance(value, (str, int)) and not isinstance(value, bool):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type in (int, 'int') and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a flat dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields
        kwargs[key] = _coerce_type(value, field_types[key])

    return cls(**kwargs)


def _curve_from_dict(side: str, data: Any) -> CurveConfig:
    """Build a CurveConfig from its flat YAML form {type: ..., <params>}."""
    if not isinstance(data, dict) or 'type' not in data:
        raise ValueError(f"Curve '{side}' needs a mapping with a 'type' key, got {data!r}")
    params = {k: v for k, v in data.items() if k != 'type'}
    return CurveConfig(type=str(data['type']), params=params)


def load_yaml(path: Union[str, Path]) -> GridGenerationConfig:
    """
    Load grid generation configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        GridGenerationConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> GridGenerationConfig:
    """
    Create GridGenerationConfig from a dictionary.

    Handles nested structures and applies defaults for missing values.
    Curves not listed under ``domain`` keep their defaults.
    """
    data = dict(data)

    # Check for preset
    preset = data.pop('preset', None)
    if preset:
        grid_preset = {
            'coarse': coarse_preset(),
            'reference': reference_preset(),
            'fine': fine_preset(),
        }.get(preset)
        if grid_preset is None:
            raise ValueError(f"Unknown preset '{preset}'")
        # Merge preset with any explicit grid overrides
        grid_data = data.get('grid') or {}
        preset_dict = {f.name: getattr(grid_preset, f.name) for f in fields(GridConfig)}
        data['grid'] = _merge_dict(preset_dict, grid_data)

    config_dict = {}

    if data.get('domain'):
        domain = DomainConfig()
        for side, curve_data in data['domain'].items():
            if side not in SIDES:
                raise ValueError(f"Unknown boundary side '{side}', expected one of {SIDES}")
            setattr(domain, side, _curve_from_dict(side, curve_data))
        config_dict['domain'] = domain

    if data.get('grid'):
        config_dict['grid'] = _dict_to_dataclass(GridConfig, data['grid'])

    if data.get('output'):
        config_dict['output'] = _dict_to_dataclass(OutputConfig, data['output'])

    if data.get('logging'):
        config_dict['logging'] = _dict_to_dataclass(LoggingConfig, data['logging'])

    return GridGenerationConfig(**config_dict)


def apply_cli_overrides(config: GridGenerationConfig, args) -> GridGenerationConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated GridGenerationConfig
    """
    config_dict = config.to_dict()

    # Map CLI args to config paths
    cli_mapping = {
        # Grid
        'nx': ('grid', 'nx'),
        'ny': ('grid', 'ny'),
        'stretching': ('grid', 'stretching'),

        # Output
        'output_dir': ('output', 'directory'),
        'filename': ('output', 'filename'),
        'plot3d': ('output', 'plot3d'),
        'plot': ('output', 'plot'),

        # Logging
        'log_level': ('logging', 'level'),
    }

    for cli_name, config_path in cli_mapping.items():
        if hasattr(args, cli_name):
            value = getattr(args, cli_name)
            if value is not None:
                target = config_dict
                for key in config_path[:-1]:
                    target = target[key]
                target[config_path[-1]] = value

    return from_dict(config_dict)


def save_yaml(config: GridGenerationConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
