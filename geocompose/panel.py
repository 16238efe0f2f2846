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

from dataclasses import dataclass
from typing import Any, Optional

from .config import DEFAULT_THEME, Theme


@dataclass(frozen=True, eq=False)
class Panel:
    """An independently produced visual artifact (a map or a chart) to be placed into a composition.

    Panels are never modified by the compositor, so the same panel can be placed into
    several compositions.

    Parameters
    ----------
    panel_id : str
        The name used by connectors and labels to refer to this panel.
    content : object
        What to draw. The compositor never looks inside it; the render engine does.
        :class:`~geocompose.mapping.cartopy_render.CartopyRenderEngine` understands
        :class:`~geocompose.mapping.map_content.MapContent` objects and callables taking a matplotlib axes.
    intrinsic_aspect_ratio : float, optional
        The width/height ratio, in canvas units, the panel must keep. Leave it as None for
        panels which can be stretched freely. Use :meth:`for_canvas` to turn an as-printed
        ratio (such as the ratio of a projected map extent) into canvas units.
    theme : Theme, optional
        The styling of this panel. :data:`~geocompose.config.DEFAULT_THEME` if not given.
    """

    panel_id: str
    content: Any = None
    intrinsic_aspect_ratio: Optional[float] = None
    theme: Optional[Theme] = None

    @property
    def aspect_constrained(self) -> bool:
        return self.intrinsic_aspect_ratio is not None

    @property
    def effective_theme(self) -> Theme:
        return self.theme if self.theme is not None else DEFAULT_THEME

    def with_aspect_ratio(self, ratio: Optional[float]):
        """return a copy of this panel locked to another aspect ratio (None to unlock)"""
        return Panel(self.panel_id, self.content, ratio, self.theme)

    def for_canvas(self, canvas):
        """return a copy of this panel whose as-printed aspect ratio is kept on `canvas`.

        The panel's current ratio is taken as the printed width/height and converted into
        the canvas' coordinate units.
        """
        if self.intrinsic_aspect_ratio is None:
            return self
        return self.with_aspect_ratio(
            canvas.aspect_in_canvas_units(self.intrinsic_aspect_ratio)
        )
