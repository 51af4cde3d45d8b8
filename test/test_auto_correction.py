import unittest

from screwboss.assembly import BossAssembly, FeatureKind, REFERENCE_ASSEMBLIES
from screwboss.auto_correction import (
    auto_correct,
    fallback_simplify,
    project_params,
    project_to_bounds,
    regularize_geometry,
)
from screwboss.specs import BossSpec, HoleSpec, HeadRecessSpec, NutTrapSpec


class TestProjection(unittest.TestCase):
    def test_project_to_bounds(self):
        self.assertEqual(project_to_bounds(5, (0, 10)), (5, False))
        self.assertEqual(project_to_bounds(-1, (0, 10)), (0, True))
        self.assertEqual(project_to_bounds(11, (0, 10)), (10, True))

    def test_project_params(self):
        assembly = BossAssembly(BossSpec(1000, 10)).add(
            FeatureKind.CLEARANCE, HoleSpec(0.1, 10, 10)
        )
        result = project_params(assembly)
        self.assertEqual(result.fallback_level, 1)
        self.assertEqual(result.corrected.boss.length, 500.0)
        self.assertEqual(result.corrected.features[0].spec.diameter, 0.5)
        self.assertEqual(len(result.corrections_applied), 2)
        # input untouched
        self.assertEqual(assembly.boss.length, 1000)


class TestRegularization(unittest.TestCase):
    def test_fillet_clamped(self):
        result = regularize_geometry(BossAssembly(BossSpec(10, 10, 6)))
        self.assertEqual(result.fallback_level, 2)
        self.assertAlmostEqual(result.corrected.boss.radius, 4.5)

    def test_feature_limits(self):
        assembly = BossAssembly(BossSpec(10, 10)).add(
            FeatureKind.CLEARANCE, HoleSpec(12, 10, 10)
        ).add(
            FeatureKind.SCREW_HEAD, HeadRecessSpec(5, 3, 6, width=10)
        ).add(
            FeatureKind.NUT_TRAP, NutTrapSpec(5.5, 8, length=10)
        )
        features = regularize_geometry(assembly).corrected.features
        self.assertAlmostEqual(features[0].spec.diameter, 8.0)
        self.assertAlmostEqual(features[1].spec.pilot_diameter, 4.0)
        self.assertAlmostEqual(features[2].spec.height, 5.0)

    def test_nothing_to_do(self):
        result = regularize_geometry(REFERENCE_ASSEMBLIES['m3_grounded'])
        self.assertEqual(result.fallback_level, 0)
        self.assertEqual(result.corrections_applied, [])


class TestFallback(unittest.TestCase):
    def test_drops_fillet_and_bridging(self):
        result = fallback_simplify(REFERENCE_ASSEMBLIES['m3_grounded'])
        self.assertTrue(result.success)
        self.assertEqual(result.corrected.boss.radius, 0.0)
        self.assertEqual(result.corrected.features[1].spec.pilot_diameter, 0.0)


class TestAutoCorrect(unittest.TestCase):
    def test_valid_assembly_unchanged(self):
        assembly = REFERENCE_ASSEMBLIES['m3_floating_nut']
        result = auto_correct(assembly)
        self.assertTrue(result.success)
        self.assertEqual(result.fallback_level, 0)
        self.assertEqual(result.corrected, assembly)

    def test_regularization_is_enough(self):
        assembly = BossAssembly(BossSpec(10, 10)).add(
            FeatureKind.CLEARANCE, HoleSpec(12, 10, 10)
        )
        result = auto_correct(assembly)
        self.assertTrue(result.success)
        self.assertEqual(result.fallback_level, 2)
        self.assertTrue(result.corrected.validate()[0])

    def test_unfixable_feature_dropped(self):
        assembly = BossAssembly(BossSpec(10, 10, 2, floating=True)).add(
            FeatureKind.CLEARANCE, HoleSpec(3, 10, 10, True)
        ).add(
            FeatureKind.SCREW_HEAD, HeadRecessSpec(5.4, 3, 3, width=10, floating=True)
        )
        result = auto_correct(assembly)
        self.assertTrue(result.success)
        self.assertEqual(result.fallback_level, 3)
        self.assertEqual(len(result.corrected.features), 1)
        self.assertIs(result.corrected.features[0].kind, FeatureKind.CLEARANCE)
        self.assertTrue(any("dropped" in c for c in result.corrections_applied))


if __name__ == '__main__':
    unittest.main()
