"""
Configuration module for the grid generator.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    GridGenerationConfig,
    DomainConfig,
    CurveConfig,
    GridConfig,
    OutputConfig,
    LoggingConfig,
    coarse_preset,
    reference_preset,
    fine_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'GridGenerationConfig',
    'DomainConfig',
    'CurveConfig',
    'GridConfig',
    'OutputConfig',
    'LoggingConfig',
    # Presets
    'coarse_preset',
    'reference_preset',
    'fine_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]
