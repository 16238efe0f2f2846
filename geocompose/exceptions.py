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


class CompositionError(Exception):
    """base class of the errors raised while laying out or composing panels.

    Parameters
    ----------
    message : str
        The error description.
    index : int, optional
        The position of the offending panel (or connector/label) in its input sequence.
    field : str, optional
        The name of the offending field, such as "x_min" or "relative_sizes".
    """

    def __init__(self, message, index=None, field=None):
        self.index = index
        self.field = field
        context = []
        if index is not None:
            context.append(f"index {index}")
        if field is not None:
            context.append(f"field '{field}'")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class InvalidPlacement(CompositionError):
    """raise this exception when a placement is malformed or cannot be satisfied on the canvas."""


class InvalidGridSpec(CompositionError):
    """raise this exception when the weights, counts or labels of a grid are malformed."""


class UnknownPanelReference(CompositionError):
    """raise this exception when a connector or label refers to a panel which has not been placed."""

    def __init__(self, panel_id, index=None, field=None):
        self.panel_id = panel_id
        super().__init__(
            f"Panel '{panel_id}' is not part of this composition.",
            index=index,
            field=field,
        )


class AspectRatioConflict(CompositionError):
    """raise this exception when an aspect-constrained panel cannot fit any positive-area rectangle."""
