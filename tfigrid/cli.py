"""
Command-line entry point: build the domain, generate the grid, export it.

Usage:
    tfigrid                                  # reference case, writes ./grid.csv
    tfigrid --config case.yaml
    tfigrid --nx 100 --ny 40 --output-dir out --plot3d --plot
    python -m tfigrid --save-config case.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from loguru import logger

from .config import GridGenerationConfig, load_yaml, apply_cli_overrides, save_yaml
from .grid import Domain, DomainError, build_curve
from .utils.logging import setup_logging


def build_domain(config: GridGenerationConfig) -> Domain:
    """Construct the four boundary curves and the domain from a configuration."""
    curves = {
        side: build_curve(getattr(config.domain, side))
        for side in ('bottom', 'right', 'top', 'left')
    }
    for side, curve in curves.items():
        logger.debug(f"  {side:<6}: {curve!r}")
    return Domain(stretching=config.grid.stretching, **curves)


def run(config: GridGenerationConfig) -> Domain:
    """Generate and export the grid described by a configuration."""
    logger.info("Building domain...")
    domain = build_domain(config)

    domain.generate_grid(config.grid.nx, config.grid.ny)

    out_dir = Path(config.output.directory)
    csv_path = out_dir / config.output.filename
    domain.write_grid(csv_path)

    if config.output.plot3d:
        domain.write_plot3d(csv_path.with_suffix('.p3d'))
    if config.output.plot:
        domain.plot(csv_path.with_suffix('.png'))

    return domain


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='tfigrid',
        description='Generate a structured grid by transfinite interpolation.',
    )
    parser.add_argument('--config', type=str, default=None,
                        help='YAML configuration file')
    parser.add_argument('--nx', type=int, default=None,
                        help='Divisions along bottom/top')
    parser.add_argument('--ny', type=int, default=None,
                        help='Divisions along left/right')
    parser.add_argument('--stretching', type=float, default=None,
                        help='tanh clustering factor')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Output directory')
    parser.add_argument('--filename', type=str, default=None,
                        help='CSV file name')
    parser.add_argument('--plot3d', action='store_true', default=None,
                        help='Also write a Plot3D file')
    parser.add_argument('--plot', action='store_true', default=None,
                        help='Also save a grid plot')
    parser.add_argument('--log-level', type=str, default=None,
                        help='DEBUG, INFO, WARNING, ...')
    parser.add_argument('--save-config', type=str, default=None,
                        help='Write the effective configuration to this YAML file')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_yaml(args.config) if args.config else GridGenerationConfig()
        config = apply_cli_overrides(config, args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        setup_logging(config.logging.level, config.logging.show_time)
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.save_config:
        save_yaml(config, args.save_config)
        logger.info(f"Configuration saved to {args.save_config}")

    try:
        run(config)
    except (DomainError, ValueError) as e:
        logger.error(f"Grid generation failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
