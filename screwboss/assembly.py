"""
Assembly module: a boss together with the features cut from it.

The generators in geometry.py are leaves; this module packages the usual
caller flow of building a boss and subtracting each negative from it.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union
import logging

from build123d import Part

from .config import Tolerances, DEFAULT_TOLERANCES
from .specs import BossSpec, HoleSpec, HeadRecessSpec, NutTrapSpec


logger = logging.getLogger(__name__)

FeatureSpec = Union[HoleSpec, HeadRecessSpec, NutTrapSpec]


class FeatureKind(Enum):
    """Negative feature types."""
    CLEARANCE = "clearance"
    INTERFERENCE = "interference"
    SCREW_HEAD = "screw_head"
    NUT_TRAP = "nut_trap"


FEATURE_SPECS = {
    FeatureKind.CLEARANCE: HoleSpec,
    FeatureKind.INTERFERENCE: HoleSpec,
    FeatureKind.SCREW_HEAD: HeadRecessSpec,
    FeatureKind.NUT_TRAP: NutTrapSpec,
}

FEATURE_BUILDERS: Dict[FeatureKind, Callable[[FeatureSpec, Tolerances], Part]] = {
    FeatureKind.CLEARANCE: lambda spec, tol: spec.build_clearance(tol),
    FeatureKind.INTERFERENCE: lambda spec, tol: spec.build_interference(tol),
    FeatureKind.SCREW_HEAD: lambda spec, tol: spec.build(tol),
    FeatureKind.NUT_TRAP: lambda spec, tol: spec.build(tol),
}

# Fields a feature shares with the boss it is cut from
SHARED_FIELDS = ('width', 'length', 'floating')


@dataclass
class Feature:
    """A negative feature and the parameters it is built from."""
    kind: FeatureKind
    spec: FeatureSpec

    def build(self, tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
        return FEATURE_BUILDERS[self.kind](self.spec, tolerances)

    def to_dict(self) -> dict:
        d = {'type': self.kind.value}
        d.update(self.spec.to_dict())
        return d

    @classmethod
    def from_dict(cls, d: dict, boss: BossSpec = None) -> 'Feature':
        """
        Create from dictionary.

        Shared fields missing from d are taken from boss, so a config only
        has to state them once.
        """
        kind = FeatureKind(d['type'])
        values = {k: v for k, v in d.items() if k != 'type'}
        if boss is not None:
            for name in SHARED_FIELDS:
                values.setdefault(name, getattr(boss, name))
        return cls(kind, FEATURE_SPECS[kind].from_dict(values))


@dataclass
class BossAssembly:
    """A boss and the ordered list of features subtracted from it."""
    boss: BossSpec
    features: List[Feature] = field(default_factory=list)

    def add(self, kind: FeatureKind, spec: FeatureSpec) -> 'BossAssembly':
        self.features.append(Feature(kind, spec))
        return self

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate the boss and every feature."""
        is_valid, errors = self.boss.validate()
        errors = [f"boss: {e}" for e in errors]

        for i, feature in enumerate(self.features):
            ok, feature_errors = feature.spec.validate()
            errors.extend(f"{feature.kind.value}[{i}]: {e}" for e in feature_errors)

        return len(errors) == 0, errors

    def alignment_warnings(self) -> List[str]:
        """
        List features whose shared fields differ from the boss.

        Mismatches are allowed but position the cut somewhere else than the
        boss, which is rarely intended.
        """
        warnings = []
        for i, feature in enumerate(self.features):
            for name in SHARED_FIELDS:
                ours = getattr(feature.spec, name)
                theirs = getattr(self.boss, name)
                # A grounded head recess never looks at the boss length
                if (name == 'length' and isinstance(feature.spec, HeadRecessSpec)
                        and not feature.spec.floating):
                    continue
                if ours != theirs:
                    warnings.append(
                        f"{feature.kind.value}[{i}]: {name}={ours} differs from "
                        f"boss {name}={theirs}"
                    )
        return warnings

    def aligned(self) -> 'BossAssembly':
        """Copy with every feature's shared fields set from the boss."""
        shared = {name: getattr(self.boss, name) for name in SHARED_FIELDS}
        features = [Feature(f.kind, replace(f.spec, **shared)) for f in self.features]
        return BossAssembly(boss=replace(self.boss), features=features)

    def to_dict(self) -> dict:
        return {
            'boss': self.boss.to_dict(),
            'features': [f.to_dict() for f in self.features],
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'BossAssembly':
        boss = BossSpec.from_dict(d['boss'])
        features = [Feature.from_dict(f, boss) for f in d.get('features') or []]
        return cls(boss=boss, features=features)


def build_assembly(assembly: BossAssembly,
                   tolerances: Tolerances = DEFAULT_TOLERANCES) -> Part:
    """Build the boss and subtract every feature from it."""
    for warning in assembly.alignment_warnings():
        logger.warning(warning)

    part = assembly.boss.build(tolerances)
    for feature in assembly.features:
        part = part - feature.build(tolerances)

    logger.debug(
        f"Built assembly with {len(assembly.features)} feature(s), "
        f"volume={part.volume:.3f}"
    )
    return part


# M3 socket head cap screw and nut, 10mm boss
M3_DIAMETER = 3.0
M3_HEAD_DIAMETER = 5.4
M3_HEAD_HEIGHT = 3.0
M3_NUT_FLATS = 5.5
M3_NUT_HEIGHT = 2.4


def _reference_assemblies() -> Dict[str, BossAssembly]:
    grounded = BossSpec(length=10.0, width=10.0, radius=2.0)
    floating = BossSpec(length=10.0, width=10.0, radius=2.0, floating=True)

    shared = {'width': 10.0, 'length': 10.0}
    return {
        'm3_grounded': BossAssembly(grounded).add(
            FeatureKind.CLEARANCE, HoleSpec(M3_DIAMETER, **shared)
        ).add(
            FeatureKind.SCREW_HEAD,
            HeadRecessSpec(M3_HEAD_DIAMETER, M3_HEAD_HEIGHT, M3_DIAMETER, **shared),
        ),
        'm3_floating_nut': BossAssembly(floating).add(
            FeatureKind.CLEARANCE, HoleSpec(M3_DIAMETER, floating=True, **shared)
        ).add(
            FeatureKind.NUT_TRAP,
            NutTrapSpec(M3_NUT_FLATS, M3_NUT_HEIGHT, pilot_diameter=M3_DIAMETER,
                        floating=True, **shared),
        ),
    }


REFERENCE_ASSEMBLIES = _reference_assemblies()
