"""
Quality gate module for built boss solids.

Provides B-Rep validation, footprint checks against the boss parameters and
a minimum side wall check for the bores.
"""

from dataclasses import dataclass, field
from typing import Tuple, List
from enum import Enum
import logging

from .config import Tolerances, DEFAULT_TOLERANCES, DEFAULT_MIN_WALL
from .geometry import fit_diameter, nut_trap_layout


logger = logging.getLogger(__name__)

# Bounding box slack accepted by the footprint check
BBOX_TOLERANCE = 1e-3


class ValidationStatus(Enum):
    """Validation result status."""
    VALID = "valid"
    INVALID = "invalid"


@dataclass
class ValidationResult:
    """Result of shape validation."""
    status: ValidationStatus
    is_valid: bool
    errors: List[str]
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls(ValidationStatus.VALID, True, [], [])

    @classmethod
    def invalid(cls, errors: List[str]) -> 'ValidationResult':
        return cls(ValidationStatus.INVALID, False, errors, [])


def validate_shape(shape) -> ValidationResult:
    """
    Validate solid geometry.

    Checks:
    - Shape is not null
    - B-Rep validity
    - Exactly one solid with positive volume
    """
    errors = []
    warnings = []

    if shape is None:
        return ValidationResult.invalid(["Shape is null"])

    if hasattr(shape, 'wrapped'):
        try:
            from OCP.BRepCheck import BRepCheck_Analyzer
            analyzer = BRepCheck_Analyzer(shape.wrapped)
            if not analyzer.IsValid():
                errors.append("Shape B-Rep is invalid")
        except ImportError as e:
            warnings.append(f"Could not perform B-Rep check: {e}")

    solids = shape.solids()
    if len(solids) != 1:
        errors.append(f"Expected a single solid, got {len(solids)}")
    if shape.volume <= 0:
        errors.append(f"Volume must be positive, got {shape.volume}")

    if errors:
        result = ValidationResult.invalid(errors)
    else:
        result = ValidationResult.valid()
    result.warnings = warnings
    return result


def check_footprint(shape, boss) -> Tuple[bool, List[str]]:
    """
    Compare the bounding box of a built boss with its parameters.

    Returns (ok, messages). The footprint must be width x width with x, y
    starting at 0 and the top at z = length; the bottom is 0 for a grounded
    boss and -length for a floating one.
    """
    bbox = shape.bounding_box()
    bottom = -boss.length if boss.floating else 0.0
    expected = [
        ('min.X', bbox.min.X, 0.0),
        ('min.Y', bbox.min.Y, 0.0),
        ('max.X', bbox.max.X, boss.width),
        ('max.Y', bbox.max.Y, boss.width),
        ('min.Z', bbox.min.Z, bottom),
        ('max.Z', bbox.max.Z, boss.length),
    ]

    messages = [
        f"{name}={actual:.4f}, expected {target:.4f}"
        for name, actual, target in expected
        if abs(actual - target) > BBOX_TOLERANCE
    ]
    return len(messages) == 0, messages


def check_min_wall(assembly, tolerances: Tolerances = DEFAULT_TOLERANCES,
                   min_wall: float = DEFAULT_MIN_WALL) -> Tuple[bool, float]:
    """
    Check the thinnest side wall left between a bore and the boss faces.

    Uses the bore and nut pocket sizes only, so it is exact for features
    centred on the boss axis. Returns (ok, thinnest_wall).
    """
    from .assembly import FeatureKind

    width = assembly.boss.width
    thinnest = width / 2

    for feature in assembly.features:
        spec = feature.spec
        if feature.kind is FeatureKind.CLEARANCE:
            size = fit_diameter(spec.diameter, tolerances.clearance)
        elif feature.kind is FeatureKind.INTERFERENCE:
            size = fit_diameter(spec.diameter, tolerances.interference)
        elif feature.kind is FeatureKind.SCREW_HEAD:
            size = fit_diameter(spec.diameter, tolerances.clearance)
        else:
            # A hex corner faces the wall opposite the slot
            layout = nut_trap_layout(spec.flat_size, spec.height, tolerances=tolerances)
            size = layout.circumscribed_diameter
        thinnest = min(thinnest, (width - size) / 2)

    ok = thinnest >= min_wall
    if not ok:
        logger.warning(f"Thinnest wall {thinnest:.3f}mm is below {min_wall}mm")
    return ok, thinnest
