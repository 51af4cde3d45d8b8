"""
Solid primitives shared by the boss and feature generators.

Thin helpers over build123d algebra mode. Every helper returns a Part whose
placement is documented in its docstring so callers only apply one Pos/Rot.
"""

from typing import Optional
import math

from build123d import (
    Align,
    Box,
    Cylinder,
    Kind,
    Part,
    Plane,
    Polygon,
    Pos,
    Rectangle,
    extrude,
    offset,
)


# Overshoot used where a cutting tool must pass cleanly through a face
EPSILON = 0.01

MIN_ALIGN = (Align.MIN, Align.MIN, Align.MIN)
FLOOR_ALIGN = (Align.CENTER, Align.CENTER, Align.MIN)


def rounded_prism(width: float, height: float, radius: float = 0.0) -> Part:
    """
    Build a width x width x height prism with rounded vertical edges.

    The square section is shrunk by radius and offset back out with arc
    corners, which rounds the four vertical edges while leaving the top and
    bottom faces sharp. radius <= 0 gives a plain box.

    The min corner sits at the origin: x, y in [0, width], z in [0, height].
    """
    if radius <= 0:
        return Box(width, width, height, align=MIN_ALIGN)

    core = width - 2 * radius
    section = offset(Rectangle(core, core), amount=radius, kind=Kind.ARC)
    prism = extrude(section, amount=height, dir=(0, 0, 1))
    return Pos(width / 2, width / 2, 0) * prism


def regular_prism(circumradius: float, sides: int, height: float) -> Part:
    """
    Extrude a regular polygon given by its circumscribed radius.

    First vertex on +X, centred on the Z axis, z in [0, height].
    """
    step = 2 * math.pi / sides
    pts = [
        (circumradius * math.cos(i * step), circumradius * math.sin(i * step))
        for i in range(sides)
    ]
    return extrude(Polygon(*pts, align=None), amount=height, dir=(0, 0, 1))


def wedge_prism(run: float, rise: float, depth: float,
                overshoot: float = EPSILON) -> Part:
    """
    Right-triangle prism used to cut a chamfer.

    The triangle lies in XZ with legs along +X (run) and +Z (rise); its
    hypotenuse joins (run, 0, 0) and (0, 0, rise). It is swept along +Y over
    depth. The two legs and both Y ends are pushed out by overshoot so the
    cut does not leave coplanar slivers; the hypotenuse plane is unchanged.
    """
    e = overshoot
    # Points where the hypotenuse line crosses x = -e and z = -e
    far_x = run * (1 + e / rise) + e
    far_z = rise * (1 + e / run) + e

    triangle = Polygon((0, 0), (far_x, 0), (0, far_z), align=(Align.MIN, Align.MIN))
    prism = extrude(Plane.XZ * triangle, amount=depth + 2 * e, dir=(0, 1, 0))
    return Pos(-e, -e, -e) * prism


def bridging_cap(footprint: Part, pilot_diameter: float,
                 layer_height: float) -> Optional[Part]:
    """
    Two-layer bridging cap placed over a cavity.

    footprint is the cavity outline extruded one layer, z in [0, layer_height],
    centred on the pilot axis (the Z axis). Layer 1 keeps a pilot-wide strip of
    the footprint running along X so the printer bridges across Y anchored on
    the cavity walls; layer 2 is a pilot x pilot square that the next bridge
    closes down to the pilot hole.

    Returns None when there is no pilot hole to bridge towards.
    """
    if pilot_diameter <= 0:
        return None

    bbox = footprint.bounding_box()
    strip = Pos(bbox.center().X, 0, 0) * Box(
        bbox.size.X + 2 * EPSILON, pilot_diameter, layer_height, align=FLOOR_ALIGN
    )
    first = footprint & strip
    second = Pos(0, 0, layer_height) * Box(
        pilot_diameter, pilot_diameter, layer_height, align=FLOOR_ALIGN
    )
    return first + second


def disc(diameter: float, height: float) -> Part:
    """Cylinder standing on the XY plane, centred on the Z axis."""
    return Cylinder(diameter / 2, height, align=FLOOR_ALIGN)
