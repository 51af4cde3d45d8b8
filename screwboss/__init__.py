"""
Screw Boss - parametric mounting bosses for 3D printed parts
"""

from .config import Tolerances, DEFAULT_TOLERANCES, Config, PARAM_RANGES
from .orientation import Orientation
from .geometry import (
    boss,
    clearance_hole,
    interference_hole,
    screw_head_recess,
    nut_trap,
    head_recess_layout,
    nut_trap_layout,
)
from .specs import BossSpec, HoleSpec, HeadRecessSpec, NutTrapSpec
from .assembly import (
    BossAssembly,
    Feature,
    FeatureKind,
    build_assembly,
    REFERENCE_ASSEMBLIES,
)
from .step_generator import generate_step, batch_generate, GenerationStatus, GenerationResult
from .quality_gate import validate_shape, ValidationResult
from .auto_correction import auto_correct, CorrectionResult

__version__ = "0.1.0"

__all__ = [
    'Tolerances',
    'DEFAULT_TOLERANCES',
    'Config',
    'PARAM_RANGES',
    'Orientation',
    'boss',
    'clearance_hole',
    'interference_hole',
    'screw_head_recess',
    'nut_trap',
    'head_recess_layout',
    'nut_trap_layout',
    'BossSpec',
    'HoleSpec',
    'HeadRecessSpec',
    'NutTrapSpec',
    'BossAssembly',
    'Feature',
    'FeatureKind',
    'build_assembly',
    'REFERENCE_ASSEMBLIES',
    'generate_step',
    'batch_generate',
    'GenerationStatus',
    'GenerationResult',
    'validate_shape',
    'ValidationResult',
    'auto_correct',
    'CorrectionResult',
]
