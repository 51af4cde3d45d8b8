"""
Auto-correction module for out-of-range boss parameters.

The generators never check their inputs. This module is the opt-in layer
that brings an assembly back into a buildable state, in three stages:
1. Parameter projection to PARAM_RANGES
2. Regularization of relative limits (fillet vs. width, bore vs. width, ...)
3. Fallback simplification (no fillet, no bridging)
"""

from dataclasses import dataclass, replace
from typing import Tuple, List
import logging

from .assembly import BossAssembly, Feature
from .config import PARAM_RANGES
from .specs import BossSpec, HoleSpec, HeadRecessSpec, NutTrapSpec


logger = logging.getLogger(__name__)

# Relative limits applied during regularization
MAX_FILLET_RATIO = 0.45       # radius / width
MAX_BORE_RATIO = 0.8          # bore or head diameter / width
MAX_PILOT_RATIO = 0.8         # pilot diameter / head diameter or nut flats
MAX_NUT_HEIGHT_RATIO = 0.5    # nut height / boss length


@dataclass
class CorrectionResult:
    """Result of auto-correction attempt."""
    success: bool
    original: BossAssembly
    corrected: BossAssembly
    corrections_applied: List[str]
    fallback_level: int  # 0=none, 1=projection, 2=regularization, 3=simplification


def project_to_bounds(value: float, bounds: Tuple[float, float]) -> Tuple[float, bool]:
    """
    Project value to within bounds.

    Returns (projected_value, was_modified).
    """
    min_val, max_val = bounds
    if value < min_val:
        return min_val, True
    elif value > max_val:
        return max_val, True
    return value, False


def project_spec(spec, label: str) -> Tuple[object, List[str]]:
    """Project every ranged field of one spec record."""
    corrections = []
    changes = {}

    for name, ranges in PARAM_RANGES[spec.kind].items():
        original = getattr(spec, name)
        projected, modified = project_to_bounds(original, (ranges['min'], ranges['max']))
        if modified:
            changes[name] = projected
            corrections.append(f"{label}.{name}: {original:.4f} -> {projected:.4f}")

    return replace(spec, **changes), corrections


def _clamp(spec, name: str, limit: float, label: str, reason: str,
           corrections: List[str]):
    value = getattr(spec, name)
    if value <= limit:
        return spec
    corrections.append(f"{label}.{name}: {value:.4f} -> {limit:.4f} ({reason})")
    return replace(spec, **{name: limit})


def regularize_spec(spec, label: str) -> Tuple[object, List[str]]:
    """Clamp the limits a record has relative to its own fields."""
    corrections = []

    if isinstance(spec, BossSpec):
        spec = _clamp(spec, 'radius', spec.width * MAX_FILLET_RATIO, label,
                      'fillet limit', corrections)
    elif isinstance(spec, HoleSpec):
        if spec.width > 0:
            spec = _clamp(spec, 'diameter', spec.width * MAX_BORE_RATIO, label,
                          'wall limit', corrections)
    elif isinstance(spec, HeadRecessSpec):
        if spec.width > 0:
            spec = _clamp(spec, 'diameter', spec.width * MAX_BORE_RATIO, label,
                          'wall limit', corrections)
        spec = _clamp(spec, 'pilot_diameter', spec.diameter * MAX_PILOT_RATIO, label,
                      'shoulder limit', corrections)
    elif isinstance(spec, NutTrapSpec):
        spec = _clamp(spec, 'pilot_diameter', spec.flat_size * MAX_PILOT_RATIO, label,
                      'shoulder limit', corrections)
        if spec.length > 0:
            spec = _clamp(spec, 'height', spec.length * MAX_NUT_HEIGHT_RATIO, label,
                          'boss limit', corrections)

    return spec, corrections


def _map_specs(assembly: BossAssembly, func) -> Tuple[BossAssembly, List[str]]:
    corrections = []

    boss, applied = func(assembly.boss, 'boss')
    corrections.extend(applied)

    features = []
    for i, feature in enumerate(assembly.features):
        spec, applied = func(feature.spec, f"{feature.kind.value}[{i}]")
        corrections.extend(applied)
        features.append(Feature(feature.kind, spec))

    return BossAssembly(boss=boss, features=features), corrections


def project_params(assembly: BossAssembly) -> CorrectionResult:
    """
    Project parameters to constraint bounds.

    Stage 1: Ensure all parameters are within valid ranges.
    """
    corrected, corrections = _map_specs(assembly, project_spec)
    return CorrectionResult(
        success=True,
        original=assembly,
        corrected=corrected,
        corrections_applied=corrections,
        fallback_level=1 if corrections else 0
    )


def regularize_geometry(assembly: BossAssembly) -> CorrectionResult:
    """
    Apply geometry regularization.

    Stage 2: Keep fillets, bores and pilots inside the solids they belong to.
    """
    corrected, corrections = _map_specs(assembly, regularize_spec)
    return CorrectionResult(
        success=True,
        original=assembly,
        corrected=corrected,
        corrections_applied=corrections,
        fallback_level=2 if corrections else 0
    )


def fallback_simplify(assembly: BossAssembly) -> CorrectionResult:
    """
    Fallback simplification for severely problematic parameters.

    Stage 3: Drop the fillet and the bridging caps, then drop any feature
    that is still invalid.
    """
    corrections = []

    boss = assembly.boss
    if boss.radius != 0:
        corrections.append(f"boss.radius: {boss.radius:.4f} -> 0.0000 (fallback)")
        boss = replace(boss, radius=0.0)

    features = []
    for i, feature in enumerate(assembly.features):
        label = f"{feature.kind.value}[{i}]"
        spec = feature.spec
        if getattr(spec, 'pilot_diameter', 0) > 0:
            corrections.append(f"{label}.pilot_diameter: -> 0.0000 (fallback)")
            spec = replace(spec, pilot_diameter=0.0)

        is_valid, errors = spec.validate()
        if not is_valid:
            corrections.append(f"{label}: dropped ({'; '.join(errors)})")
            continue
        features.append(Feature(feature.kind, spec))

    return CorrectionResult(
        success=boss.validate()[0],
        original=assembly,
        corrected=BossAssembly(boss=boss, features=features),
        corrections_applied=corrections,
        fallback_level=3
    )


def auto_correct(assembly: BossAssembly) -> CorrectionResult:
    """
    Full auto-correction pipeline.

    Applies corrections in stages:
    1. Parameter projection
    2. Geometry regularization
    3. Fallback simplification (if needed)
    """
    all_corrections = []
    max_level = 0

    result1 = project_params(assembly)
    current = result1.corrected
    all_corrections.extend(result1.corrections_applied)
    max_level = max(max_level, result1.fallback_level)

    result2 = regularize_geometry(current)
    current = result2.corrected
    all_corrections.extend(result2.corrections_applied)
    max_level = max(max_level, result2.fallback_level)

    is_valid, errors = current.validate()
    success = True

    if not is_valid:
        logger.warning(f"Still invalid after regularization: {errors}")
        result3 = fallback_simplify(current)
        current = result3.corrected
        all_corrections.extend(result3.corrections_applied)
        max_level = 3
        success = result3.success

    return CorrectionResult(
        success=success,
        original=assembly,
        corrected=current,
        corrections_applied=all_corrections,
        fallback_level=max_level
    )
