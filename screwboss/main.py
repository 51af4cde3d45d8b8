"""
Screw Boss Generator

CLI entry point with two modes:
  --init : Write a config YAML holding the reference assemblies
  (none) : Build every assembly in the config YAML and export STEP files
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
import logging

import yaml

from .config import Config, create_default_config, get_config_path
from .step_generator import batch_generate, save_generation_log, GenerationStatus


logger = logging.getLogger(__name__)


def run_init_mode(config_path: Path, force: bool = False) -> int:
    """
    Init mode (--init): Write the reference assemblies to a config YAML.
    """
    logger.info("=== Init Mode ===")

    if config_path.exists() and not force:
        logger.error(f"Config file already exists: {config_path}")
        logger.error("Use --force to overwrite it.")
        return 1

    config = create_default_config()
    config.save(config_path)
    logger.info(f"Config saved to: {config_path}")

    print(f"\n[Init Complete]")
    print(f"  Assemblies: {', '.join(config.assemblies)}")
    print(f"  Config file: {config_path}")
    print(f"\nEdit the config file to describe your bosses,")
    print(f"then run without --init to generate STEP files.")

    return 0


def run_generate_mode(config_path: Path, output_dir: Path,
                      allow_correction: bool = True,
                      log_path: Optional[Path] = None) -> int:
    """
    Generate mode (default): Build each assembly and export STEP files.
    """
    logger.info("=== Generate Mode ===")

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        logger.error("Run with --init first to generate a config file.")
        return 1

    try:
        config = Config.load(config_path)
    except (ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        logger.error(f"Invalid config {config_path}: {e}")
        return 1
    logger.info(f"Loaded config from: {config_path}")

    if not config.assemblies:
        logger.error(f"No assemblies defined in: {config_path}")
        return 1

    results = batch_generate(config, output_dir, allow_correction)

    if log_path is not None:
        save_generation_log(results, log_path)
        logger.info(f"Generation log saved to: {log_path}")

    success_count = sum(1 for r in results if r.status != GenerationStatus.FAILED)
    for name, result in zip(config.assemblies, results):
        if result.status == GenerationStatus.FAILED:
            logger.error(f"  {name} -> FAILED: {result.error_message}")

    print(f"\n[Generate Complete]")
    print(f"  Success: {success_count}/{len(results)}")
    print(f"  Output: {output_dir}")

    return 0 if success_count == len(results) else 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Screw Boss Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  --init  Write bosses.yaml with the reference assemblies
  (none)  Build every assembly in bosses.yaml and export STEP files

Examples:
  python -m screwboss.main --init         # Write bosses.yaml
  python -m screwboss.main                # Generate output/*.step
  python -m screwboss.main --no-correction --log output/log.json
"""
    )

    parser.add_argument(
        '--init',
        action='store_true',
        help='Write a config file with the reference assemblies'
    )
    parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite an existing config file in --init mode'
    )
    parser.add_argument(
        '--config',
        type=Path,
        default=get_config_path(),
        help='Config file path (default: bosses.yaml)'
    )
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('output'),
        help='Output directory for generated STEP files (default: output/)'
    )
    parser.add_argument(
        '--no-correction',
        action='store_true',
        help='Fail on invalid parameters instead of correcting them'
    )
    parser.add_argument(
        '--log',
        type=Path,
        default=None,
        help='Write a JSON generation log to this path'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )

    if args.init:
        return run_init_mode(args.config, args.force)
    return run_generate_mode(
        args.config, args.output_dir,
        allow_correction=not args.no_correction,
        log_path=args.log,
    )


if __name__ == '__main__':
    sys.exit(main())
