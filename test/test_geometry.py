import math
import unittest
import logging

from build123d import Vector

from screwboss.config import Tolerances, DEFAULT_TOLERANCES
from screwboss.geometry import (
    boss,
    circumscribed_diameter,
    clearance_hole,
    fit_diameter,
    head_recess_layout,
    interference_hole,
    nut_trap,
    nut_trap_layout,
    screw_head_recess,
    slot_reach,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("TestGeometry")

DELTA = 1e-3
C = DEFAULT_TOLERANCES.clearance
I = DEFAULT_TOLERANCES.interference


class BoxAssertions:
    def assertBounds(self, shape, lo, hi, delta=DELTA):
        bbox = shape.bounding_box()
        for axis, low, high in zip("XYZ", lo, hi):
            if low is not None:
                self.assertAlmostEqual(getattr(bbox.min, axis), low, delta=delta,
                                       msg=f"min.{axis}")
            if high is not None:
                self.assertAlmostEqual(getattr(bbox.max, axis), high, delta=delta,
                                       msg=f"max.{axis}")


class TestBoss(BoxAssertions, unittest.TestCase):
    def test_plain_boss_equals_cube(self):
        solid = boss(10, 10)
        self.assertBounds(solid, (0, 0, 0), (10, 10, 10))
        self.assertAlmostEqual(solid.volume, 1000.0, delta=DELTA)

    def test_footprint_and_height(self):
        for length, width, radius in [(10, 10, 2), (4, 7, 0), (25, 12, 5.5), (3, 3, 1.4)]:
            with self.subTest(length=length, width=width, radius=radius):
                self.assertBounds(
                    boss(length, width, radius), (0, 0, 0), (width, width, length)
                )

    def test_fillet_volume(self):
        solid = boss(10, 10, 2)
        expected = (100 - (4 - math.pi) * 4) * 10
        self.assertAlmostEqual(solid.volume, expected, delta=1e-2)

    def test_floating_boss_keeps_top(self):
        solid = boss(10, 10, floating=True)
        self.assertBounds(solid, (0, 0, -10), (10, 10, 10))
        height = solid.bounding_box().size.Z
        self.assertGreaterEqual(height, 10)

    def test_floating_boss_chamfer_volume(self):
        # Doubled body minus half of the lower half
        for length, width in [(10, 10), (10, 6), (4, 8)]:
            with self.subTest(length=length, width=width):
                solid = boss(length, width, floating=True)
                self.assertAlmostEqual(
                    solid.volume, 1.5 * width * width * length, delta=1e-2
                )

    def test_floating_boss_is_single_solid(self):
        solid = boss(10, 10, 2, floating=True)
        self.assertEqual(len(solid.solids()), 1)

    def test_floating_chamfer_side(self):
        solid = boss(10, 10, floating=True)
        # Chamfer removes the x = 0 side of the lower half
        self.assertFalse(solid.is_inside(Vector(0.5, 5, -5)))
        self.assertTrue(solid.is_inside(Vector(9.5, 5, -5)))
        self.assertTrue(solid.is_inside(Vector(0.5, 5, 5)))

    def test_narrow_floating_chamfer_is_steeper(self):
        # Slant joins (6, -10) and (0, 0): steeper than 45 degrees
        solid = boss(10, 6, floating=True)
        self.assertFalse(solid.is_inside(Vector(2.9, 3, -5)))
        self.assertTrue(solid.is_inside(Vector(3.1, 3, -5)))


class TestHoles(BoxAssertions, unittest.TestCase):
    def test_fit_diameter(self):
        self.assertAlmostEqual(fit_diameter(3, C), 3.4)
        self.assertAlmostEqual(fit_diameter(3, I), 3.0 + I)

    def test_clearance_diameter(self):
        hole = clearance_hole(3, 10, 10)
        size = hole.bounding_box().size
        self.assertAlmostEqual(size.X, 3 + C, delta=DELTA)
        self.assertAlmostEqual(size.Y, 3 + C, delta=DELTA)

    def test_interference_diameter(self):
        hole = interference_hole(3, 10, 10)
        self.assertAlmostEqual(hole.bounding_box().size.X, 3 + I, delta=DELTA)

    def test_clearance_not_smaller_than_interference(self):
        for diameter in (2, 3, 4, 5):
            clearance = clearance_hole(diameter, 10, 10).bounding_box().size.X
            interference = interference_hole(diameter, 10, 10).bounding_box().size.X
            self.assertGreaterEqual(clearance, interference)

    def test_custom_tolerances(self):
        tolerances = Tolerances(clearance=0.2, interference=0.0)
        self.assertAlmostEqual(
            clearance_hole(3, 10, tolerances=tolerances).bounding_box().size.X,
            3.2, delta=DELTA,
        )
        self.assertAlmostEqual(
            interference_hole(3, 10, tolerances=tolerances).bounding_box().size.X,
            3.0, delta=DELTA,
        )

    def test_grounded_bore_spans_boss(self):
        self.assertBounds(clearance_hole(3, 10, 10), (None, None, 0), (None, None, 10))

    def test_floating_bore_spans_boss(self):
        self.assertBounds(
            clearance_hole(3, 10, 10, floating=True), (None, None, -10), (None, None, 10)
        )

    def test_default_width_centres_on_axis(self):
        center = clearance_hole(3, 10).bounding_box().center()
        self.assertAlmostEqual(center.X, 0, delta=DELTA)
        self.assertAlmostEqual(center.Y, 0, delta=DELTA)

    def test_bores_stay_inside_boss(self):
        for floating in (False, True):
            for diameter in (3, 6, 9):
                for build in (clearance_hole, interference_hole):
                    with self.subTest(floating=floating, diameter=diameter,
                                      build=build.__name__):
                        bbox = build(diameter, 10, 10, floating=floating).bounding_box()
                        self.assertGreaterEqual(bbox.min.X, -DELTA)
                        self.assertGreaterEqual(bbox.min.Y, -DELTA)
                        self.assertLessEqual(bbox.max.X, 10 + DELTA)
                        self.assertLessEqual(bbox.max.Y, 10 + DELTA)


class TestScrewHeadRecess(BoxAssertions, unittest.TestCase):
    def test_layout_inflates_dimensions(self):
        layout = head_recess_layout(5.4, 3, 3)
        self.assertAlmostEqual(layout.diameter, 5.4 + C)
        self.assertAlmostEqual(layout.height, 3 + C)
        self.assertAlmostEqual(layout.pilot_diameter, 3 + C)
        self.assertEqual(layout.base_z, 0)

    def test_floating_recess_spans_boss_height(self):
        layout = head_recess_layout(5.4, 3, 3, length=10, floating=True)
        self.assertEqual(layout.height, 10)
        self.assertEqual(layout.base_z, -10)
        self.assertEqual(layout.top_z, 0)

    def test_grounded_recess_geometry(self):
        recess = screw_head_recess(5.4, 3, 3, width=10, length=10)
        top = 3 + C + 2 * 0.2
        self.assertBounds(recess, (5 - 2.9, 5 - 2.9, 0), (5 + 2.9, 5 + 2.9, top))

    def test_floating_recess_geometry(self):
        recess = screw_head_recess(5.4, 3, 3, width=10, length=10, floating=True)
        self.assertBounds(recess, (None, None, -10), (None, None, 0.4))

    def test_no_pilot_no_bridging(self):
        recess = screw_head_recess(5.4, 3, width=10)
        self.assertBounds(recess, (None, None, 0), (None, None, 3 + C))
        expected = math.pi * ((5.4 + C) / 2) ** 2 * (3 + C)
        self.assertAlmostEqual(recess.volume, expected, delta=1e-2)

    def test_bridging_layers(self):
        recess = screw_head_recess(5.4, 3, 3, width=10, layer_height=0.3)
        bare = screw_head_recess(5.4, 3, width=10, layer_height=0.3)
        self.assertAlmostEqual(recess.bounding_box().max.Z, 3 + C + 0.6, delta=DELTA)
        self.assertGreater(recess.volume, bare.volume)
        self.assertEqual(len(recess.solids()), 1)


class TestNutTrap(BoxAssertions, unittest.TestCase):
    def test_circumscribed_diameter(self):
        layout = nut_trap_layout(5.5, 2.4)
        expected = (5.5 + C) / math.cos(math.radians(30))
        self.assertAlmostEqual(layout.circumscribed_diameter, expected)
        self.assertAlmostEqual(circumscribed_diameter(1.0, 4), math.sqrt(2))

    def test_slot_reach(self):
        self.assertAlmostEqual(slot_reach(10, 5.9), 5 * math.sqrt(2))
        self.assertAlmostEqual(slot_reach(0, 5.9), 5.9)

    def test_layout_centre(self):
        self.assertEqual(nut_trap_layout(5.5, 2.4, length=10).center_z, 5)
        self.assertEqual(nut_trap_layout(5.5, 2.4, length=10, floating=True).center_z, 5)
        self.assertEqual(nut_trap_layout(5.5, 2.4).center_z, 0)

    def test_standalone_geometry(self):
        flats = 5.5 + C
        height = 2.4 + C
        corner = flats / math.cos(math.radians(30)) / 2
        trap = nut_trap(5.5, 2.4)
        self.assertBounds(
            trap, (-corner, -flats / 2, -height / 2), (flats, flats / 2, height / 2)
        )

    def test_bridging_above_pocket(self):
        height = 2.4 + C
        trap = nut_trap(5.5, 2.4, pilot_diameter=3, layer_height=0.2)
        self.assertBounds(trap, (None, None, -height / 2), (None, None, height / 2 + 0.4))
        self.assertEqual(len(trap.solids()), 1)

    def test_positioned_in_boss(self):
        height = 2.4 + C
        trap = nut_trap(5.5, 2.4, length=10, width=10)
        self.assertBounds(trap, (None, None, 5 - height / 2), (5 + 5 * math.sqrt(2), None, 5 + height / 2))

    def test_rotation_turns_the_slot(self):
        reach = 5 * math.sqrt(2)
        trap = nut_trap(5.5, 2.4, length=10, width=10, angle=90)
        self.assertAlmostEqual(trap.bounding_box().max.Y, 5 + reach, delta=DELTA)
        trap = nut_trap(5.5, 2.4, length=10, width=10, angle=180)
        self.assertAlmostEqual(trap.bounding_box().min.X, 5 - reach, delta=DELTA)

    def test_slot_reaches_a_side_wall(self):
        solid = boss(10, 10)
        for angle in (0, 45, 90, 180):
            with self.subTest(angle=angle):
                trap = nut_trap(5.5, 2.4, length=10, width=10, pilot_diameter=3,
                                angle=angle)
                inside = (solid & trap).volume
                outside = (trap - solid).volume
                logger.info(f"angle={angle}: inside={inside:.3f} outside={outside:.3f}")
                self.assertGreater(inside, 0)
                self.assertGreater(outside, 0)


if __name__ == '__main__':
    unittest.main()
