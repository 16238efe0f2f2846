#
#    Copyright (C) 2024-2025 The University of Sydney, Australia
#
#    This program is free software; you can redistribute it and/or modify it under
#    the terms of the GNU General Public License, version 2, as published by
#    the Free Software Foundation.
#
#    This program is distributed in the hope that it will be useful, but WITHOUT
#    ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
#    FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
#    for more details.
#
#    You should have received a copy of the GNU General Public License along
#    with this program; if not, write to Free Software Foundation, Inc.,
#    51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

"""
Placement requests and resolved bounds.

A placement is one of two variants:

* :class:`AbsolutePlacement`: four bounds in canvas coordinates, like
  ``annotation_custom(xmin=, xmax=, ymin=, ymax=)``.
* :class:`RelativePlacement`: an anchor point plus a size, all given as fractions of the
  canvas, like ``draw_plot(x=, y=, width=, height=)``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class Justification(Enum):
    """Named anchor points of a rectangle.

    Anchors are defined in normalized coordinates (0-1) where:
    - X: 0 = left, 1 = right
    - Y: 0 = bottom, 1 = top
    """

    BOTTOM_LEFT = "bottom_left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom_right"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    TOP_LEFT = "top_left"
    TOP = "top"
    TOP_RIGHT = "top_right"

    @property
    def hjust(self) -> float:
        return JUSTIFICATION_POSITIONS[self][0]

    @property
    def vjust(self) -> float:
        return JUSTIFICATION_POSITIONS[self][1]


# (hjust, vjust) of each anchor
JUSTIFICATION_POSITIONS = {
    Justification.BOTTOM_LEFT: (0.0, 0.0),
    Justification.BOTTOM: (0.5, 0.0),
    Justification.BOTTOM_RIGHT: (1.0, 0.0),
    Justification.LEFT: (0.0, 0.5),
    Justification.CENTER: (0.5, 0.5),
    Justification.RIGHT: (1.0, 0.5),
    Justification.TOP_LEFT: (0.0, 1.0),
    Justification.TOP: (0.5, 1.0),
    Justification.TOP_RIGHT: (1.0, 1.0),
}


def to_justification(value: Union[Justification, str]) -> Justification:
    if isinstance(value, Justification):
        return value
    return Justification(str(value).lower().replace("-", "_").replace(" ", "_"))


@dataclass(frozen=True)
class AbsolutePlacement:
    """Place a panel into a box given in canvas coordinates.

    An aspect-constrained panel is shrunk to fit the box and kept at `justification`
    (the centre of the box by default).
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    justification: Justification = Justification.CENTER

    def __post_init__(self):
        object.__setattr__(self, "justification", to_justification(self.justification))


@dataclass(frozen=True)
class RelativePlacement:
    """Place a panel with an anchor point and a size given as fractions of the canvas.

    `justification` tells which point of the panel sits at ``(x, y)``. The default
    (bottom left) matches ``cowplot::draw_plot``.
    """

    x: float
    y: float
    width: float
    height: float
    justification: Justification = Justification.BOTTOM_LEFT

    def __post_init__(self):
        object.__setattr__(self, "justification", to_justification(self.justification))


Placement = Union[AbsolutePlacement, RelativePlacement]


@dataclass(frozen=True)
class ResolvedBounds:
    """A rectangle in canvas coordinates"""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def anchor_point(
        self, justification: Union[Justification, str] = Justification.CENTER
    ) -> Tuple[float, float]:
        """return the canvas coordinates of a named point of this rectangle, e.g. "right" for the middle of the right edge"""
        j = to_justification(justification)
        return (
            self.x_min + j.hjust * self.width,
            self.y_min + j.vjust * self.height,
        )

    def contains(self, other, rel_tol=1e-9) -> bool:
        tol = rel_tol * max(abs(self.width), abs(self.height), 1.0)
        return (
            other.x_min >= self.x_min - tol
            and other.x_max <= self.x_max + tol
            and other.y_min >= self.y_min - tol
            and other.y_max <= self.y_max + tol
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.x_min, self.x_max, self.y_min, self.y_max
