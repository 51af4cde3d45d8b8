"""
STEP generator module - pipeline from boss assembly to STEP file.

Integrates parameter validation, auto-correction, geometry construction,
quality checks and STEP export.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List
from enum import Enum
import logging
import json
import time
from datetime import datetime

from build123d import export_step

from .assembly import BossAssembly, build_assembly
from .auto_correction import auto_correct, CorrectionResult
from .config import Config, Tolerances, DEFAULT_TOLERANCES, DEFAULT_MIN_WALL
from .quality_gate import (
    validate_shape,
    check_footprint,
    check_min_wall,
    ValidationResult,
)


logger = logging.getLogger(__name__)


class GenerationStatus(Enum):
    """Status of STEP generation."""
    SUCCESS = "success"
    SUCCESS_WITH_CORRECTION = "success_with_correction"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Result of STEP generation attempt."""
    status: GenerationStatus
    output_path: Optional[Path]
    assembly_used: BossAssembly
    correction_result: Optional[CorrectionResult]
    validation_result: Optional[ValidationResult]
    error_message: Optional[str]
    generation_time_ms: float

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            'status': self.status.value,
            'output_path': str(self.output_path) if self.output_path else None,
            'assembly': self.assembly_used.to_dict(),
            'corrections_applied': (
                self.correction_result.corrections_applied
                if self.correction_result else []
            ),
            'fallback_level': (
                self.correction_result.fallback_level
                if self.correction_result else 0
            ),
            'is_valid': (
                self.validation_result.is_valid
                if self.validation_result else False
            ),
            'warnings': (
                self.validation_result.warnings
                if self.validation_result else []
            ),
            'error': self.error_message,
            'generation_time_ms': self.generation_time_ms,
        }


def generate_step(
    assembly: BossAssembly,
    output_path: Path,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
    allow_correction: bool = True,
    min_wall: float = DEFAULT_MIN_WALL,
) -> GenerationResult:
    """
    Generate STEP file from a boss assembly.

    Pipeline:
    1. Validate/correct parameters
    2. Build geometry
    3. Validate shape
    4. Export STEP
    """
    start_time = time.perf_counter()

    def failed(message, used, correction=None, validation=None):
        logger.error(message)
        return GenerationResult(
            status=GenerationStatus.FAILED,
            output_path=None,
            assembly_used=used,
            correction_result=correction,
            validation_result=validation,
            error_message=message,
            generation_time_ms=(time.perf_counter() - start_time) * 1000
        )

    current = assembly
    correction_result = None

    # Stage 1: Parameter validation and correction
    is_valid, errors = assembly.validate()

    if not is_valid:
        if not allow_correction:
            return failed(f"Invalid parameters: {errors}", assembly)

        correction_result = auto_correct(assembly)
        if not correction_result.success:
            return failed(
                f"Parameters could not be corrected: {errors}",
                correction_result.corrected, correction_result,
            )
        current = correction_result.corrected
        logger.info(f"Applied corrections: {correction_result.corrections_applied}")

    # Stage 2: Build geometry
    try:
        part = build_assembly(current, tolerances)
    except Exception as e:
        return failed(f"Geometry construction failed: {e}", current, correction_result)

    # Stage 3: Validate shape
    validation_result = validate_shape(part)
    if not validation_result.is_valid:
        return failed(
            f"Shape validation failed: {validation_result.errors}",
            current, correction_result, validation_result,
        )

    footprint_ok, footprint_messages = check_footprint(part, current.boss)
    if not footprint_ok:
        validation_result.warnings.extend(footprint_messages)

    wall_ok, thinnest = check_min_wall(current, tolerances, min_wall)
    if not wall_ok:
        validation_result.warnings.append(
            f"Thinnest wall {thinnest:.3f}mm is below {min_wall}mm"
        )

    for warning in validation_result.warnings:
        logger.warning(warning)

    # Stage 4: Export STEP
    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        export_step(part, str(output_path))
        logger.info(f"STEP exported to: {output_path}")
    except Exception as e:
        return failed(
            f"STEP export failed: {e}", current, correction_result, validation_result
        )

    status = (
        GenerationStatus.SUCCESS_WITH_CORRECTION
        if correction_result and correction_result.corrections_applied
        else GenerationStatus.SUCCESS
    )

    return GenerationResult(
        status=status,
        output_path=output_path,
        assembly_used=current,
        correction_result=correction_result,
        validation_result=validation_result,
        error_message=None,
        generation_time_ms=(time.perf_counter() - start_time) * 1000
    )


def batch_generate(
    config: Config,
    output_dir: Path,
    allow_correction: bool = True,
) -> List[GenerationResult]:
    """Generate one STEP file per assembly in config."""
    results = []
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    total = len(config.assemblies)
    for i, (name, assembly) in enumerate(config.assemblies.items()):
        output_path = output_dir / f"{name}.step"
        result = generate_step(
            assembly,
            output_path,
            tolerances=config.tolerances,
            allow_correction=allow_correction,
            min_wall=config.min_wall,
        )
        results.append(result)

        logger.info(
            f"[{i+1}/{total}] {name}: {result.status.value} "
            f"({result.generation_time_ms:.1f}ms)"
        )

    success = sum(1 for r in results if r.status != GenerationStatus.FAILED)
    corrected = sum(
        1 for r in results
        if r.status == GenerationStatus.SUCCESS_WITH_CORRECTION
    )

    logger.info(
        f"Batch complete: {success}/{len(results)} success "
        f"({corrected} with correction)"
    )

    return results


def save_generation_log(
    results: List[GenerationResult],
    log_path: Path
) -> None:
    """Save generation results to JSON log."""
    log_data = {
        'timestamp': datetime.now().isoformat(),
        'total': len(results),
        'success': sum(1 for r in results if r.status != GenerationStatus.FAILED),
        'results': [r.to_dict() for r in results]
    }

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with open(log_path, 'w', encoding='utf-8') as f:
        json.dump(log_data, f, indent=2, ensure_ascii=False)
