"""
Geometry module for screw boss generation using build123d.

Provides the boss solid and the four negative features (clearance hole,
interference hole, screw head recess, nut trap). Every generator is a pure
function of its flat parameters and returns a build123d Part; callers cut
the negatives from the boss with boolean difference.

Negatives share the boss reference frame: x, y in [0, W], the full-width
core spanning z in [0, L]. Pass the same W, L and floating flag to a
negative as to the boss it is cut from.
"""

from dataclasses import dataclass
import logging
import math

from build123d import Align, Box, Cylinder, Part, Pos, Rot

from .config import Tolerances, DEFAULT_TOLERANCES, DEFAULT_LAYER_HEIGHT
from .orientation import Orientation
from .primitives import bridging_cap, disc, regular_prism, rounded_prism


logger = logging.getLogger(__name__)

HEX_SIDES = 6


@dataclass(frozen=True)
class HeadRecessLayout:
    """Resolved dimensions of a screw head recess."""
    diameter: float        # counterbore diameter, tolerance included
    height: float          # counterbore depth
    pilot_diameter: float  # bridged-to pilot hole, tolerance included
    base_z: float          # open face of the recess
    layer_height: float

    @property
    def top_z(self) -> float:
        """Ceiling of the counterbore, where the bridging cap starts."""
        return self.base_z + self.height


@dataclass(frozen=True)
class NutTrapLayout:
    """Resolved dimensions of a nut trap."""
    flat_size: float                # across flats, tolerance included
    circumscribed_diameter: float   # across corners
    height: float                   # pocket height
    pilot_diameter: float
    slot_reach: float               # slot length from the nut centre
    center_z: float
    layer_height: float
    angle: float


def fit_diameter(diameter: float, tolerance: float) -> float:
    """Bore diameter for a fastener of nominal diameter and a fit tolerance."""
    return diameter + tolerance


def circumscribed_diameter(flat_size: float, sides: int = HEX_SIDES) -> float:
    """Corner-to-corner diameter of a regular polygon given across flats."""
    return flat_size / math.cos(math.radians(180 / sides))


def slot_reach(width: float, flat_size: float) -> float:
    """
    Slot length from the nut centre.

    Half the boss diagonal, so the slot leaves the boss in any direction,
    including towards a corner. Without a locating width the slot extends by
    one flat size.
    """
    if width > 0:
        return (width / 2) * math.sqrt(2)
    return flat_size


def head_recess_layout(
    diameter: float,
    height: float,
    pilot_diameter: float = 0.0,
    length: float = 0.0,
    layer_height: float = DEFAULT_LAYER_HEIGHT,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> HeadRecessLayout:
    """Compute the counterbore dimensions and placement."""
    orientation = Orientation.of(floating)
    c = tolerances.clearance

    recess_height = height + c
    if orientation.is_floating:
        # Nothing below the slant can hold a shoulder: recess the whole chamfer
        recess_height = length

    return HeadRecessLayout(
        diameter=diameter + c,
        height=recess_height,
        pilot_diameter=pilot_diameter + c if pilot_diameter > 0 else 0.0,
        base_z=orientation.base_z(length),
        layer_height=layer_height,
    )


def nut_trap_layout(
    flat_size: float,
    height: float,
    length: float = 0.0,
    width: float = 0.0,
    pilot_diameter: float = 0.0,
    layer_height: float = DEFAULT_LAYER_HEIGHT,
    angle: float = 0.0,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> NutTrapLayout:
    """Compute the nut pocket dimensions and placement."""
    orientation = Orientation.of(floating)
    c = tolerances.clearance
    flats = flat_size + c

    return NutTrapLayout(
        flat_size=flats,
        circumscribed_diameter=circumscribed_diameter(flats),
        height=height + c,
        pilot_diameter=pilot_diameter + c if pilot_diameter > 0 else 0.0,
        slot_reach=slot_reach(width, flats),
        center_z=orientation.core_mid_z(length),
        layer_height=layer_height,
        angle=angle,
    )


def boss(length: float, width: float, radius: float = 0.0,
         floating: bool = False) -> Part:
    """
    Build the boss solid.

    A width x width x length prism, x and y in [0, width], with the vertical
    edges filleted by radius. Grounded bosses span z in [0, length]. Floating
    bosses get a second length below z = 0 that is chamfered away on a
    diagonal plane, so they span [-length, length] with the top still at
    z = length. The slant runs from the bottom edge at x = width to x = 0 at
    z = 0, which makes a 45 degree chamfer only when width == length.
    """
    orientation = Orientation.of(floating)
    logger.debug(
        f"boss L={length} W={width} R={radius} orientation={orientation.value}"
    )

    body = rounded_prism(width, orientation.body_height(length), radius)
    wedge = orientation.chamfer(width, length)
    if wedge is not None:
        body = body - wedge

    return orientation.placement(length) * body


def _bore(diameter: float, length: float, width: float, floating: bool) -> Part:
    orientation = Orientation.of(floating)
    cylinder = Cylinder(diameter / 2, orientation.body_height(length))
    return Pos(width / 2, width / 2, orientation.bore_center_z(length)) * cylinder


def clearance_hole(
    diameter: float,
    length: float,
    width: float = 0.0,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> Part:
    """Slide-fit bore through a boss of the same length, width and orientation."""
    bore = fit_diameter(diameter, tolerances.clearance)
    logger.debug(f"clearance hole D={diameter} -> {bore} L={length} W={width}")
    return _bore(bore, length, width, floating)


def interference_hole(
    diameter: float,
    length: float,
    width: float = 0.0,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> Part:
    """Thread-forming bore through a boss of the same length, width and orientation."""
    bore = fit_diameter(diameter, tolerances.interference)
    logger.debug(f"interference hole D={diameter} -> {bore} L={length} W={width}")
    return _bore(bore, length, width, floating)


def screw_head_recess(
    diameter: float,
    height: float,
    pilot_diameter: float = 0.0,
    width: float = 0.0,
    length: float = 0.0,
    layer_height: float = DEFAULT_LAYER_HEIGHT,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> Part:
    """
    Counterbore for a screw head at the bottom of the boss.

    The recess opens on the face the boss is printed from, which for a
    floating boss is the bottom of the chamfer, and then spans the whole
    chamfer region. Above the counterbore sits a two-layer bridging cap
    narrowing down to pilot_diameter; without a pilot diameter no cap is
    emitted.
    """
    layout = head_recess_layout(
        diameter, height, pilot_diameter, length, layer_height, floating, tolerances
    )
    logger.debug(f"screw head recess {layout}")

    recess = disc(layout.diameter, layout.height)
    cap = bridging_cap(
        disc(layout.diameter, layout.layer_height),
        layout.pilot_diameter,
        layout.layer_height,
    )
    if cap is not None:
        recess = recess + Pos(0, 0, layout.height) * cap

    return Pos(width / 2, width / 2, layout.base_z) * recess


def nut_trap(
    flat_size: float,
    height: float,
    length: float = 0.0,
    width: float = 0.0,
    pilot_diameter: float = 0.0,
    layer_height: float = DEFAULT_LAYER_HEIGHT,
    angle: float = 0.0,
    floating: bool = False,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> Part:
    """
    Hexagonal nut pocket with a lateral insertion slot.

    The pocket is centred halfway up the boss core (at the origin when no
    length is given). The slot is as wide as the nut across flats and runs
    from the nut centre along +X before the whole feature is rotated by angle
    degrees about the vertical axis, so it can open on any side wall.
    """
    layout = nut_trap_layout(
        flat_size, height, length, width, pilot_diameter,
        layer_height, angle, floating, tolerances,
    )
    logger.debug(f"nut trap {layout}")

    radius = layout.circumscribed_diameter / 2
    slot_align = (Align.MIN, Align.CENTER, Align.MIN)

    def outline(thickness: float) -> Part:
        hexagon = regular_prism(radius, HEX_SIDES, thickness)
        slot = Box(layout.slot_reach, layout.flat_size, thickness, align=slot_align)
        return hexagon + slot

    trap = Pos(0, 0, -layout.height / 2) * outline(layout.height)
    cap = bridging_cap(
        outline(layout.layer_height), layout.pilot_diameter, layout.layer_height
    )
    if cap is not None:
        trap = trap + Pos(0, 0, layout.height / 2) * cap

    trap = Rot(0, 0, layout.angle) * trap
    return Pos(width / 2, width / 2, layout.center_z) * trap
