"""
Configuration schema for the grid generator.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
The defaults reproduce the reference case: a channel with a bump on the
bottom wall, meshed with 49 x 19 cells.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict


@dataclass
class CurveConfig:
    """One boundary curve: a type name from CURVE_TYPES plus its keyword arguments."""

    type: str = "hline"
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Flat form used in YAML files: {type: ..., <params>}."""
        return {'type': self.type, **self.params}


@dataclass
class DomainConfig:
    """The four boundary curves of the domain."""

    bottom: CurveConfig = field(default_factory=lambda: CurveConfig(
        type="bump", params={'x_start': -10.0, 'x_end': 5.0, 'y_offset': 0.0, 'breakpoint': -3.0}))
    right: CurveConfig = field(default_factory=lambda: CurveConfig(
        type="vline", params={'y_start': 0.0, 'y_end': 3.0, 'x': 5.0}))
    top: CurveConfig = field(default_factory=lambda: CurveConfig(
        type="hline", params={'x_start': -10.0, 'x_end': 5.0, 'y': 3.0}))
    left: CurveConfig = field(default_factory=lambda: CurveConfig(
        type="vline", params={'y_start': 0.0, 'y_end': 3.0, 'x': -10.0}))


@dataclass
class GridConfig:
    """Grid resolution and clustering."""

    nx: int = 49               # Divisions along bottom/top
    ny: int = 19               # Divisions along left/right
    stretching: float = 3.0    # tanh clustering factor toward the bottom wall


@dataclass
class OutputConfig:
    """Output configuration."""

    directory: str = "."
    filename: str = "grid.csv"
    plot3d: bool = False       # Also write <stem>.p3d
    plot: bool = False         # Also save <stem>.png


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    show_time: bool = True


@dataclass
class GridGenerationConfig:
    """Complete grid generation configuration."""

    domain: DomainConfig = field(default_factory=DomainConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to nested dictionary (curves in their flat YAML form)."""
        data = asdict(self)
        data['domain'] = {
            side: getattr(self.domain, side).to_dict()
            for side in ('bottom', 'right', 'top', 'left')
        }
        return data


# Preset configurations
def coarse_preset() -> GridConfig:
    """Coarse grid for quick checks."""
    return GridConfig(nx=12, ny=5)


def reference_preset() -> GridConfig:
    """Grid size of the reference case."""
    return GridConfig(nx=49, ny=19)


def fine_preset() -> GridConfig:
    """Fine grid with stronger clustering toward the bottom wall."""
    return GridConfig(nx=200, ny=80, stretching=3.5)
