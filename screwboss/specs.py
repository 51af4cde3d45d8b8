"""
Parameter records for the boss and its negative features.

All lengths in mm, angles in degrees. Records never validate themselves on
construction: the generators accept whatever they are given and degenerate
inputs give degenerate geometry. Call validate() to check a record before
building it.
"""

from dataclasses import dataclass, asdict
from typing import Tuple, List

from build123d import Part

from . import geometry
from .config import Tolerances, DEFAULT_TOLERANCES, DEFAULT_LAYER_HEIGHT


@dataclass
class BossSpec:
    """Boss solid parameters."""
    length: float          # L: height of the full-width core
    width: float           # W: square cross-section
    radius: float = 0.0    # R: vertical edge fillet
    floating: bool = False

    kind = 'boss'

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate parameters are within acceptable ranges."""
        errors = []

        if self.length <= 0:
            errors.append(f"length must be positive, got {self.length}")
        if self.width <= 0:
            errors.append(f"width must be positive, got {self.width}")
        if self.radius < 0:
            errors.append(f"radius must be >= 0, got {self.radius}")
        elif self.width > 0 and self.radius >= self.width / 2:
            errors.append(
                f"radius={self.radius} must be below half the width ({self.width / 2})"
            )

        return len(errors) == 0, errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'BossSpec':
        """Create from dictionary."""
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    def build(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return geometry.boss(**self.to_dict())


@dataclass
class HoleSpec:
    """
    Plain bore parameters, shared by clearance and interference holes.

    The fit tolerance is chosen by the operation the record is built with.
    """
    diameter: float        # D: nominal fastener diameter
    length: float          # L: depth, the boss height
    width: float = 0.0     # W: locating width of the boss
    floating: bool = False

    kind = 'hole'

    def validate(self) -> Tuple[bool, List[str]]:
        errors = []

        if self.diameter <= 0:
            errors.append(f"diameter must be positive, got {self.diameter}")
        if self.length <= 0:
            errors.append(f"length must be positive, got {self.length}")
        if self.width < 0:
            errors.append(f"width must be >= 0, got {self.width}")
        elif self.width > 0 and self.diameter >= self.width:
            errors.append(
                f"diameter={self.diameter} must be below the boss width ({self.width})"
            )

        return len(errors) == 0, errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'HoleSpec':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    def build_clearance(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return geometry.clearance_hole(**self.to_dict(), tolerances=tolerances)

    def build_interference(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return geometry.interference_hole(**self.to_dict(), tolerances=tolerances)


@dataclass
class HeadRecessSpec:
    """Screw head counterbore parameters."""
    diameter: float               # D: head diameter
    height: float                 # H: head height
    pilot_diameter: float = 0.0   # d: hole continuing above the head
    width: float = 0.0            # W: locating width of the boss
    length: float = 0.0           # L: boss height, needed when floating
    layer_height: float = DEFAULT_LAYER_HEIGHT
    floating: bool = False

    kind = 'screw_head'

    def validate(self) -> Tuple[bool, List[str]]:
        errors = []

        for name, value in [('diameter', self.diameter), ('height', self.height),
                            ('layer_height', self.layer_height)]:
            if value <= 0:
                errors.append(f"{name} must be positive, got {value}")
        for name, value in [('pilot_diameter', self.pilot_diameter),
                            ('width', self.width), ('length', self.length)]:
            if value < 0:
                errors.append(f"{name} must be >= 0, got {value}")

        if self.pilot_diameter >= self.diameter > 0:
            errors.append(
                f"pilot_diameter={self.pilot_diameter} must be below the head "
                f"diameter ({self.diameter})"
            )
        if self.width > 0 and self.diameter >= self.width:
            errors.append(
                f"diameter={self.diameter} must be below the boss width ({self.width})"
            )
        if self.floating and self.length <= 0:
            errors.append("length is required for a floating boss")

        return len(errors) == 0, errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'HeadRecessSpec':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    def build(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return geometry.screw_head_recess(**self.to_dict(), tolerances=tolerances)


@dataclass
class NutTrapSpec:
    """Nut trap parameters."""
    flat_size: float              # F: nut size across flats
    height: float                 # H: nut height
    length: float = 0.0           # L: boss height, pocket sits halfway up
    width: float = 0.0            # W: locating width of the boss
    pilot_diameter: float = 0.0   # d: hole continuing above the nut
    layer_height: float = DEFAULT_LAYER_HEIGHT
    angle: float = 0.0            # a: slot direction about Z
    floating: bool = False

    kind = 'nut_trap'

    def validate(self) -> Tuple[bool, List[str]]:
        errors = []

        for name, value in [('flat_size', self.flat_size), ('height', self.height),
                            ('layer_height', self.layer_height)]:
            if value <= 0:
                errors.append(f"{name} must be positive, got {value}")
        for name, value in [('pilot_diameter', self.pilot_diameter),
                            ('width', self.width), ('length', self.length)]:
            if value < 0:
                errors.append(f"{name} must be >= 0, got {value}")

        if self.pilot_diameter >= self.flat_size > 0:
            errors.append(
                f"pilot_diameter={self.pilot_diameter} must be below the flat "
                f"size ({self.flat_size})"
            )
        if self.length > 0 and self.height >= self.length:
            errors.append(
                f"height={self.height} must be below the boss length ({self.length})"
            )

        return len(errors) == 0, errors

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'NutTrapSpec':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})

    def build(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return geometry.nut_trap(**self.to_dict(), tolerances=tolerances)
