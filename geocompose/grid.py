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
Arrange an ordered collection of panels into rows or columns.

Exactly one of `row_count` or `column_count` is fixed, the other one follows from the
number of panels:

* with `row_count`, panels fill the rows from left to right, top row first. Inside each row
  the canvas width is shared between the panels in proportion to their `relative_sizes`.
  The canvas height is shared between the rows in proportion to the mean weight of the
  panels in each row.
* with `column_count`, panels fill the columns from top to bottom, left column first. Inside
  each column the canvas height is shared in proportion to `relative_sizes`, and the canvas
  width is shared between the columns in proportion to their mean weights.

For example, two panels with ``relative_sizes=[2.3, 1]`` on a canvas 3.3 units wide are
placed at x=[0, 2.3] and x=[2.3, 3.3], both in one row (``row_count=1``) and in two
columns (``column_count=2``).
"""

import logging
import math
import string
from dataclasses import dataclass
from enum import Enum
from itertools import accumulate
from numbers import Integral, Real
from typing import List, Optional, Sequence, Union

from .exceptions import InvalidGridSpec
from .placement import AbsolutePlacement, Justification

logger = logging.getLogger("geocompose")


class Alignment(Enum):
    NONE = "none"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True, eq=False)
class GridSpec:
    """How to lay out panels in a grid.

    Parameters
    ----------
    panels : sequence of Panel
        The panels, in layout order.
    row_count : int, optional
        The number of rows. Mutually exclusive with `column_count`.
    column_count : int, optional
        The number of columns. Mutually exclusive with `row_count`.
    relative_sizes : sequence of float, optional
        One positive weight per panel. Uniform if not given.
    alignment : Alignment or str, default "none"
        "vertical" lines up the panels of a row layout into columns, "horizontal" lines up
        the panels of a column layout into rows. The shared cell size at each position is
        the mean weight of the panels at that position.
    labels : "AUTO", "auto" or sequence of str, optional
        Sub-figure labels drawn at the top-left corner of each cell. "AUTO" gives A, B, C...
        and "auto" gives a, b, c...
    """

    panels: Sequence
    row_count: Optional[int] = None
    column_count: Optional[int] = None
    relative_sizes: Optional[Sequence[float]] = None
    alignment: Union[Alignment, str] = Alignment.NONE
    labels: Union[None, str, Sequence[str]] = None

    def __post_init__(self):
        object.__setattr__(self, "panels", tuple(self.panels))
        if self.relative_sizes is not None:
            object.__setattr__(self, "relative_sizes", tuple(self.relative_sizes))
        if self.labels is not None and not isinstance(self.labels, str):
            object.__setattr__(self, "labels", tuple(self.labels))

    @property
    def by_rows(self) -> bool:
        return self.row_count is not None


def validate_grid_spec(grid_spec: GridSpec):
    """check a GridSpec and return its alignment and the per-panel weights.

    Raises
    ------
    InvalidGridSpec
    """
    n = len(grid_spec.panels)
    if n == 0:
        raise InvalidGridSpec("A grid needs at least one panel.", field="panels")

    if (grid_spec.row_count is None) == (grid_spec.column_count is None):
        raise InvalidGridSpec(
            "Exactly one of row_count and column_count must be given.",
            field="row_count",
        )
    field = "row_count" if grid_spec.by_rows else "column_count"
    count = grid_spec.row_count if grid_spec.by_rows else grid_spec.column_count
    if isinstance(count, bool) or not isinstance(count, Integral) or count <= 0:
        raise InvalidGridSpec(
            f"{field} must be a positive integer, got {count!r}.", field=field
        )

    if grid_spec.relative_sizes is None:
        weights = (1.0,) * n
    else:
        weights = grid_spec.relative_sizes
        if len(weights) != n:
            raise InvalidGridSpec(
                f"Expected {n} relative sizes (one per panel), got {len(weights)}.",
                field="relative_sizes",
            )
        for i, w in enumerate(weights):
            if (
                isinstance(w, bool)
                or not isinstance(w, Real)
                or not math.isfinite(w)
                or w <= 0
            ):
                raise InvalidGridSpec(
                    f"Relative sizes must be positive numbers, got {w!r}.",
                    index=i,
                    field="relative_sizes",
                )
        weights = tuple(float(w) for w in weights)

    try:
        alignment = Alignment(
            grid_spec.alignment.value
            if isinstance(grid_spec.alignment, Alignment)
            else str(grid_spec.alignment).lower()
        )
    except ValueError:
        raise InvalidGridSpec(
            f"Unknown alignment {grid_spec.alignment!r}. Valid values are: none, vertical, horizontal.",
            field="alignment",
        )

    grid_labels(grid_spec)
    return alignment, weights


def arrange(grid_spec: GridSpec, canvas) -> List[AbsolutePlacement]:
    """Compute one placement per panel, in input order.

    This is a pure function of its inputs.

    Parameters
    ----------
    grid_spec : GridSpec
    canvas : Canvas
        Only the coordinate limits of the canvas are used.

    Returns
    -------
    list of AbsolutePlacement
        Cell boxes in canvas coordinates. Aspect-constrained panels are centred in their cells.
    """
    alignment, weights = validate_grid_spec(grid_spec)
    n = len(grid_spec.panels)
    by_rows = grid_spec.by_rows
    count = grid_spec.row_count if by_rows else grid_spec.column_count

    per_line = math.ceil(n / count)
    lines = [list(range(i, min(i + per_line, n))) for i in range(0, n, per_line)]

    along_span = canvas.x_span if by_rows else canvas.y_span
    across_span = canvas.y_span if by_rows else canvas.x_span

    # a line is as thick as the mean weight of its panels, unused lines get the overall mean
    line_weights = [sum(weights[i] for i in line) / len(line) for line in lines]
    line_weights += [sum(weights) / n] * (count - len(lines))
    across_edges = _partition(line_weights, across_span)

    aligned = (by_rows and alignment is Alignment.VERTICAL) or (
        not by_rows and alignment is Alignment.HORIZONTAL
    )
    if alignment is not Alignment.NONE and not aligned:
        logger.warning(
            f"The '{alignment.value}' alignment has no effect on a grid laid out by "
            + ("rows" if by_rows else "columns")
            + ". The cells of a line always share their edges."
        )

    shared_edges = None
    if aligned:
        shared = []
        for k in range(per_line):
            column = [weights[line[k]] for line in lines if k < len(line)]
            shared.append(sum(column) / len(column))
        shared_edges = _partition(shared, along_span)

    placements = []
    for line_no, line in enumerate(lines):
        edges = (
            shared_edges
            if shared_edges is not None
            else _partition([weights[i] for i in line], along_span)
        )
        for k in range(len(line)):
            if by_rows:
                placement = AbsolutePlacement(
                    canvas.xlim[0] + edges[k],
                    canvas.xlim[0] + edges[k + 1],
                    canvas.ylim[1] - across_edges[line_no + 1],
                    canvas.ylim[1] - across_edges[line_no],
                    Justification.CENTER,
                )
            else:
                placement = AbsolutePlacement(
                    canvas.xlim[0] + across_edges[line_no],
                    canvas.xlim[0] + across_edges[line_no + 1],
                    canvas.ylim[1] - edges[k + 1],
                    canvas.ylim[1] - edges[k],
                    Justification.CENTER,
                )
            placements.append(placement)

    logger.debug(
        f"arranged {n} panels into {len(lines)} {'rows' if by_rows else 'columns'}"
    )
    return placements


def grid_labels(grid_spec: GridSpec) -> List[Optional[str]]:
    """return the sub-figure label of each panel (None when the grid has no labels)"""
    n = len(grid_spec.panels)
    labels = grid_spec.labels
    if labels is None:
        return [None] * n
    if isinstance(labels, str):
        if labels == "AUTO":
            return [_auto_label(i, string.ascii_uppercase) for i in range(n)]
        if labels == "auto":
            return [_auto_label(i, string.ascii_lowercase) for i in range(n)]
        raise InvalidGridSpec(
            f"labels must be 'AUTO', 'auto' or a sequence of strings, got {labels!r}.",
            field="labels",
        )
    if len(labels) != n:
        raise InvalidGridSpec(
            f"Expected {n} labels (one per panel), got {len(labels)}.",
            field="labels",
        )
    return [None if l is None else str(l) for l in labels]


def _partition(weights, span):
    """split `span` into consecutive intervals proportional to `weights`; return the n+1 edges"""
    total = sum(weights)
    edges = [0.0] + [span * c / total for c in accumulate(weights)]
    edges[-1] = span
    return edges


def _auto_label(i, letters):
    # A..Z, AA, AB, ...
    label = ""
    i += 1
    while i > 0:
        i, r = divmod(i - 1, len(letters))
        label = letters[r] + label
    return label
