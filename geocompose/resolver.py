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
Turn placement requests into concrete canvas coordinates.

Aspect-constrained panels, such as maps in a true projection, cannot be stretched to
fill an arbitrary box. For those panels the resolver finds the largest rectangle with the
panel's aspect ratio that fits inside the requested box, and keeps it at the placement's
justification point. For example, a map with an aspect ratio of 2 requested into a square box
with ``justification="bottom_left"`` ends up in the lower half of the box.

The aspect ratio is a ratio of canvas coordinate spans. On a canvas whose units are not
printed at the same physical length along both axes, convert an as-printed ratio first with
:meth:`Canvas.aspect_in_canvas_units`, or create map panels with
``MapContent.to_panel(..., canvas=canvas)``.
"""

import logging
import math
from numbers import Real

from .exceptions import AspectRatioConflict, InvalidPlacement
from .placement import (
    AbsolutePlacement,
    RelativePlacement,
    ResolvedBounds,
    to_justification,
)

logger = logging.getLogger("geocompose")

# relative slack when deciding whether a shrunk dimension still fits
_FIT_TOLERANCE = 1e-12


def resolve(canvas, panel, placement, index=None) -> ResolvedBounds:
    """Resolve the final bounds of a panel on a canvas.

    Parameters
    ----------
    canvas : Canvas
        The canvas the panel is placed on.
    panel : Panel
        The panel to place. Only its `intrinsic_aspect_ratio` is used.
    placement : AbsolutePlacement or RelativePlacement
        Where and how large the panel should appear.
    index : int, optional
        The position of the panel in the caller's sequence, used in error messages.

    Returns
    -------
    ResolvedBounds
        The rectangle, in canvas coordinates, the panel will be drawn into.

    Raises
    ------
    InvalidPlacement
        If the placement is malformed, exceeds an ``absolute_data_space`` canvas or the
        panel's aspect ratio is not a positive number.
    AspectRatioConflict
        If no positive-area rectangle with the panel's aspect ratio fits in the requested box.
    """
    if isinstance(placement, AbsolutePlacement):
        requested = _absolute_bounds(placement, index)
    elif isinstance(placement, RelativePlacement):
        requested = _relative_bounds(canvas, placement, index)
    else:
        raise InvalidPlacement(
            f"Unsupported placement type: {type(placement).__name__}.",
            index=index,
            field="placement",
        )

    if not canvas.allows_overflow and not canvas.contains(requested):
        raise InvalidPlacement(
            f"The placement {requested.as_tuple()} exceeds the canvas limits xlim={canvas.xlim}, ylim={canvas.ylim}.",
            index=index,
            field="placement",
        )

    if panel.intrinsic_aspect_ratio is None:
        bounds = requested
    else:
        bounds = fit_aspect_ratio(
            requested,
            panel.intrinsic_aspect_ratio,
            placement.justification,
            index=index,
        )

    logger.debug(f"panel {panel.panel_id!r} resolved to {bounds.as_tuple()}")
    return bounds


def fit_aspect_ratio(
    requested, aspect_ratio, justification="center", index=None
) -> ResolvedBounds:
    """Return the largest rectangle inside `requested` whose width/height equals `aspect_ratio`.

    The rectangle shares the `justification` point of the requested box, e.g. with "top_left"
    both rectangles have the same top-left corner.
    """
    if (
        isinstance(aspect_ratio, bool)
        or not isinstance(aspect_ratio, Real)
        or not math.isfinite(aspect_ratio)
        or aspect_ratio <= 0
    ):
        raise InvalidPlacement(
            f"The intrinsic aspect ratio must be a positive number, got {aspect_ratio!r}.",
            index=index,
            field="intrinsic_aspect_ratio",
        )

    target = float(aspect_ratio)
    box_width, box_height = requested.width, requested.height

    candidates = []
    # keep the width, shrink the height
    height = box_width / target
    if height <= box_height * (1 + _FIT_TOLERANCE):
        candidates.append((box_width, min(height, box_height)))
    # keep the height, shrink the width
    width = box_height * target
    if width <= box_width * (1 + _FIT_TOLERANCE):
        candidates.append((min(width, box_width), box_height))

    candidates = [
        (w, h)
        for w, h in candidates
        if math.isfinite(w) and math.isfinite(h) and w > 0 and h > 0
    ]
    if not candidates:
        raise AspectRatioConflict(
            f"No rectangle with aspect ratio {aspect_ratio} and a positive area fits into {requested.as_tuple()}.",
            index=index,
            field="intrinsic_aspect_ratio",
        )
    width, height = max(candidates, key=lambda c: c[0] * c[1])

    j = to_justification(justification)
    anchor_x, anchor_y = requested.anchor_point(j)
    x_min = anchor_x - j.hjust * width
    y_min = anchor_y - j.vjust * height
    return ResolvedBounds(x_min, x_min + width, y_min, y_min + height)


def _absolute_bounds(placement, index):
    for name in ("x_min", "x_max", "y_min", "y_max"):
        _check_finite(getattr(placement, name), name, index)
    if placement.x_min >= placement.x_max:
        raise InvalidPlacement(
            f"x_min ({placement.x_min}) must be less than x_max ({placement.x_max}).",
            index=index,
            field="x_min",
        )
    if placement.y_min >= placement.y_max:
        raise InvalidPlacement(
            f"y_min ({placement.y_min}) must be less than y_max ({placement.y_max}).",
            index=index,
            field="y_min",
        )
    return ResolvedBounds(
        float(placement.x_min),
        float(placement.x_max),
        float(placement.y_min),
        float(placement.y_max),
    )


def _relative_bounds(canvas, placement, index):
    for name in ("x", "y", "width", "height"):
        value = getattr(placement, name)
        _check_finite(value, name, index)
        if value < 0:
            raise InvalidPlacement(
                f"The relative {name} must not be negative, got {value}.",
                index=index,
                field=name,
            )
    for name in ("width", "height"):
        if getattr(placement, name) == 0:
            raise InvalidPlacement(
                f"The relative {name} must be greater than zero.",
                index=index,
                field=name,
            )

    width = placement.width * canvas.x_span
    height = placement.height * canvas.y_span
    anchor_x = canvas.xlim[0] + placement.x * canvas.x_span
    anchor_y = canvas.ylim[0] + placement.y * canvas.y_span
    j = placement.justification
    x_min = anchor_x - j.hjust * width
    y_min = anchor_y - j.vjust * height
    return ResolvedBounds(x_min, x_min + width, y_min, y_min + height)


def _check_finite(value, name, index):
    if (
        isinstance(value, bool)
        or not isinstance(value, Real)
        or not math.isfinite(value)
    ):
        raise InvalidPlacement(
            f"{name} must be a finite number, got {value!r}.",
            index=index,
            field=name,
        )
