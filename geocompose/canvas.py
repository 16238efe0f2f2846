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
The output drawing surface of a composition.

A :class:`Canvas` has a physical size (in inches, matplotlib's native unit) and a
coordinate system in which placements are expressed. Two coordinate systems are supported:

* ``absolute_data_space``: explicit x/y limits, such as ``xlim=(0, 3.3)`` and ``ylim=(0, 1)``.
  Panels must stay within the limits.
* ``relative_unit_square``: the unit square [0, 1] x [0, 1]. Panels may be drawn into the margins.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class CoordinateMode(Enum):
    ABSOLUTE_DATA_SPACE = "absolute_data_space"
    RELATIVE_UNIT_SQUARE = "relative_unit_square"


@dataclass(frozen=True)
class Canvas:
    """The coordinate space and physical extent of the output.

    Parameters
    ----------
    output_extent : tuple of float
        (width, height) of the output in inches.
    coordinate_mode : CoordinateMode or str, default "relative_unit_square"
        The coordinate system in which placements are expressed.
    xlim, ylim : tuple of float, default (0.0, 1.0)
        The coordinate limits. Ignored (forced to (0, 1)) in ``relative_unit_square`` mode.
    """

    output_extent: Tuple[float, float]
    coordinate_mode: CoordinateMode = CoordinateMode.RELATIVE_UNIT_SQUARE
    xlim: Tuple[float, float] = (0.0, 1.0)
    ylim: Tuple[float, float] = (0.0, 1.0)

    def __post_init__(self):
        mode = CoordinateMode(self.coordinate_mode)
        object.__setattr__(self, "coordinate_mode", mode)

        width, height = (float(v) for v in self.output_extent)
        if not (_positive(width) and _positive(height)):
            raise ValueError(
                f"The canvas output extent must be positive, got {self.output_extent}."
            )
        object.__setattr__(self, "output_extent", (width, height))

        if mode is CoordinateMode.RELATIVE_UNIT_SQUARE:
            xlim, ylim = (0.0, 1.0), (0.0, 1.0)
        else:
            xlim = tuple(float(v) for v in self.xlim)
            ylim = tuple(float(v) for v in self.ylim)
            for name, lim in (("xlim", xlim), ("ylim", ylim)):
                if len(lim) != 2 or not all(math.isfinite(v) for v in lim):
                    raise ValueError(f"The canvas {name} must be two finite numbers.")
                if lim[0] >= lim[1]:
                    raise ValueError(
                        f"The canvas {name} must be increasing, got {lim}."
                    )
        object.__setattr__(self, "xlim", xlim)
        object.__setattr__(self, "ylim", ylim)

    @classmethod
    def relative(cls, width, height):
        """create a canvas spanning the unit square, printed at `width` x `height` inches"""
        return cls((width, height), CoordinateMode.RELATIVE_UNIT_SQUARE)

    @classmethod
    def absolute(
        cls,
        xlim,
        ylim,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ):
        """create an equal-scaled data-space canvas.

        If only one of `width` or `height` is given, the other one is derived so that one
        data unit has the same physical length along both axes. If neither is given, one
        data unit is printed as one inch.
        """
        x_span = float(xlim[1]) - float(xlim[0])
        y_span = float(ylim[1]) - float(ylim[0])
        for name, lim, span in (("xlim", xlim, x_span), ("ylim", ylim, y_span)):
            if not _positive(span):
                raise ValueError(f"The canvas {name} must be increasing, got {tuple(lim)}.")
        if width is None and height is None:
            width, height = x_span, y_span
        elif width is None:
            width = height * x_span / y_span
        elif height is None:
            height = width * y_span / x_span
        return cls(
            (width, height), CoordinateMode.ABSOLUTE_DATA_SPACE, tuple(xlim), tuple(ylim)
        )

    @property
    def width(self) -> float:
        return self.output_extent[0]

    @property
    def height(self) -> float:
        return self.output_extent[1]

    @property
    def x_span(self) -> float:
        return self.xlim[1] - self.xlim[0]

    @property
    def y_span(self) -> float:
        return self.ylim[1] - self.ylim[0]

    @property
    def allows_overflow(self) -> bool:
        """panels may be drawn into the margins only on a relative canvas"""
        return self.coordinate_mode is CoordinateMode.RELATIVE_UNIT_SQUARE

    @property
    def units_per_inch(self) -> Tuple[float, float]:
        return self.x_span / self.width, self.y_span / self.height

    def aspect_in_canvas_units(self, physical_ratio: float) -> float:
        """convert an as-printed width/height ratio into a ratio of canvas coordinate spans"""
        x_upi, y_upi = self.units_per_inch
        return physical_ratio * x_upi / y_upi

    def point_to_figure_fraction(self, x, y) -> Tuple[float, float]:
        return (x - self.xlim[0]) / self.x_span, (y - self.ylim[0]) / self.y_span

    def to_figure_fraction(self, bounds) -> Tuple[float, float, float, float]:
        """convert resolved bounds into a matplotlib ``[left, bottom, width, height]`` rectangle"""
        left, bottom = self.point_to_figure_fraction(bounds.x_min, bounds.y_min)
        return (
            left,
            bottom,
            bounds.width / self.x_span,
            bounds.height / self.y_span,
        )

    def contains(self, bounds, rel_tol=1e-9) -> bool:
        """return True if the bounds lie within the canvas limits"""
        x_tol = rel_tol * self.x_span
        y_tol = rel_tol * self.y_span
        return (
            bounds.x_min >= self.xlim[0] - x_tol
            and bounds.x_max <= self.xlim[1] + x_tol
            and bounds.y_min >= self.ylim[0] - y_tol
            and bounds.y_max <= self.ylim[1] + y_tol
        )


def _positive(value) -> bool:
    return math.isfinite(value) and value > 0
