"""
Configuration module for fit tolerances and YAML-based boss definitions.

Handles the shared tolerance values, parameter range definitions and
reading/writing of config files describing one or more boss assemblies.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any
import logging

import yaml


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tolerances:
    """
    Fit tolerances shared by every negative feature generator.

    clearance is added to diameters for slide fits, interference for
    thread-forming fits (usually zero or negative).
    """
    clearance: float = 0.4
    interference: float = -0.1

    def to_dict(self) -> dict:
        return {
            'clearance': self.clearance,
            'interference': self.interference,
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Tolerances':
        d = d or {}
        return cls(
            clearance=float(d.get('clearance', cls.clearance)),
            interference=float(d.get('interference', cls.interference)),
        )


DEFAULT_TOLERANCES = Tolerances()

# Typical FDM first-layer-after-bridge thickness
DEFAULT_LAYER_HEIGHT = 0.2

# Thinnest side wall accepted around a bore
DEFAULT_MIN_WALL = 0.8


# Parameter range definitions per spec kind
PARAM_RANGES: Dict[str, Dict[str, Dict[str, Any]]] = {
    'boss': {
        'length': {'min': 0.5, 'max': 500.0, 'description': 'boss height L'},
        'width': {'min': 1.0, 'max': 500.0, 'description': 'cross-section width W'},
        'radius': {'min': 0.0, 'max': 250.0, 'description': 'vertical edge fillet R'},
    },
    'hole': {
        'diameter': {'min': 0.5, 'max': 100.0, 'description': 'nominal bore D'},
        'length': {'min': 0.5, 'max': 500.0, 'description': 'bore depth L'},
        'width': {'min': 0.0, 'max': 500.0, 'description': 'locating width W'},
    },
    'screw_head': {
        'diameter': {'min': 1.0, 'max': 100.0, 'description': 'head diameter D'},
        'height': {'min': 0.2, 'max': 100.0, 'description': 'head height H'},
        'pilot_diameter': {'min': 0.0, 'max': 100.0, 'description': 'pilot hole d'},
        'width': {'min': 0.0, 'max': 500.0, 'description': 'locating width W'},
        'length': {'min': 0.0, 'max': 500.0, 'description': 'boss height L'},
        'layer_height': {'min': 0.05, 'max': 1.0, 'description': 'print layer height'},
    },
    'nut_trap': {
        'flat_size': {'min': 1.0, 'max': 100.0, 'description': 'nut flat-to-flat F'},
        'height': {'min': 0.5, 'max': 100.0, 'description': 'nut height H'},
        'length': {'min': 0.0, 'max': 500.0, 'description': 'boss height L'},
        'width': {'min': 0.0, 'max': 500.0, 'description': 'locating width W'},
        'pilot_diameter': {'min': 0.0, 'max': 100.0, 'description': 'pilot hole d'},
        'layer_height': {'min': 0.05, 'max': 1.0, 'description': 'print layer height'},
        'angle': {'min': -360.0, 'max': 360.0, 'description': 'slot rotation a'},
    },
}


@dataclass
class Config:
    """Main configuration container for multiple boss assemblies."""
    version: str = "1.0"
    tolerances: Tolerances = field(default_factory=Tolerances)
    min_wall: float = DEFAULT_MIN_WALL
    assemblies: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'version': self.version,
            'tolerances': self.tolerances.to_dict(),
            'constraints': {'min_wall': self.min_wall},
            'assemblies': {k: v.to_dict() for k, v in self.assemblies.items()},
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Config':
        from .assembly import BossAssembly

        assemblies = {}
        for name, data in (d.get('assemblies') or {}).items():
            assemblies[name] = BossAssembly.from_dict(data)

        constraints = d.get('constraints') or {}
        return cls(
            version=str(d.get('version', '1.0')),
            tolerances=Tolerances.from_dict(d.get('tolerances')),
            min_wall=float(constraints.get('min_wall', DEFAULT_MIN_WALL)),
            assemblies=assemblies,
        )

    def save(self, path: Path) -> None:
        """Save config to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, allow_unicode=True,
                      default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """Load config from YAML file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} does not contain a mapping")
        config = cls.from_dict(data)
        logger.debug(f"Loaded {len(config.assemblies)} assemblies from {path}")
        return config

    def add_assembly(self, name: str, assembly) -> None:
        """Add or replace a named assembly."""
        self.assemblies[name] = assembly


def create_default_config() -> Config:
    """Create config holding the reference assemblies."""
    from .assembly import REFERENCE_ASSEMBLIES

    config = Config()
    for name, assembly in REFERENCE_ASSEMBLIES.items():
        config.add_assembly(name, assembly)
    return config


def get_config_path() -> Path:
    """Get default config file path."""
    return Path('bosses.yaml')
