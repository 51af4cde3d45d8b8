"""
Print orientation strategies for bosses and their negative features.

A grounded boss stands on the print bed with its bottom face at z = 0. A
floating boss is printed against a vertical wall: its body is doubled
downwards and the lower half is chamfered away on a diagonal, so the full-width
core still spans [0, L] while the chamfer hangs in [-L, 0].

All placement arithmetic that depends on the floating flag lives here.
"""

from enum import Enum
from typing import Optional

from build123d import Location, Part, Pos

from .primitives import wedge_prism


class Orientation(Enum):
    """How a boss is oriented on the printer."""
    GROUNDED = "grounded"
    FLOATING = "floating"

    @classmethod
    def of(cls, floating: bool) -> 'Orientation':
        return cls.FLOATING if floating else cls.GROUNDED

    @property
    def is_floating(self) -> bool:
        return self is Orientation.FLOATING

    def body_height(self, length: float) -> float:
        """Height of the solid before trimming (core plus chamfer)."""
        return 2 * length if self.is_floating else length

    def base_z(self, length: float) -> float:
        """Z of the face the boss is printed from."""
        return -length if self.is_floating else 0.0

    def bore_center_z(self, length: float) -> float:
        """Centre of a bore spanning the whole body height."""
        return self.base_z(length) + self.body_height(length) / 2

    def core_mid_z(self, length: float) -> float:
        """Middle of the full-width core, [0, L] for both orientations."""
        return length / 2

    def placement(self, length: float) -> Location:
        """Transform moving a body built from z = 0 to its reference position."""
        return Pos(0, 0, self.base_z(length))

    def chamfer(self, width: float, length: float) -> Optional[Part]:
        """
        Wedge removed from the lower half of a doubled body, or None.

        The wedge spans x, y in [0, width] and z in [0, length] before
        placement; its slant meets the bottom at x = width and the top of the
        lower half at x = 0, which is 45 degrees when width == length.
        """
        if not self.is_floating:
            return None
        return wedge_prism(run=width, rise=length, depth=width)
