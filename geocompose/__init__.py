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
Compose independently drawn maps and charts into one figure: world maps with inset maps,
side-by-side panels in a grid, and arrows linking an overview map to its insets.
"""

from .utils.log_utils import setup_logging
from .utils.version import get_distribution_version

__version__ = get_distribution_version()

setup_logging()
del setup_logging

from .canvas import Canvas, CoordinateMode
from .compositor import (
    CompositionPlan,
    CompositionResult,
    Compositor,
    Connector,
    Label,
    PanelAnchor,
)
from .config import DEFAULT_THEME, VOID_THEME, Theme, load_theme
from .exceptions import (
    AspectRatioConflict,
    CompositionError,
    InvalidGridSpec,
    InvalidPlacement,
    UnknownPanelReference,
)
from .export import export
from .geometry import frame_aspect_ratio, projection_aspect_ratio
from .grid import Alignment, GridSpec, arrange
from .layout_loader import Layout, load_layout, load_layout_string
from .mapping.cartopy_render import CartopyRenderEngine
from .mapping.map_content import MapContent, MapLayer
from .mapping.render_engine import RenderEngine
from .panel import Panel
from .placement import (
    AbsolutePlacement,
    Justification,
    RelativePlacement,
    ResolvedBounds,
)
from .resolver import resolve

__all__ = [
    # main classes
    "Canvas",
    "Panel",
    "Compositor",
    "GridSpec",
    "MapContent",
    "MapLayer",
    # placements and annotations
    "AbsolutePlacement",
    "RelativePlacement",
    "ResolvedBounds",
    "Justification",
    "Alignment",
    "Connector",
    "Label",
    "PanelAnchor",
    "CompositionPlan",
    "CompositionResult",
    "CoordinateMode",
    # rendering
    "RenderEngine",
    "CartopyRenderEngine",
    # configuration
    "Theme",
    "DEFAULT_THEME",
    "VOID_THEME",
    "load_theme",
    "Layout",
    "load_layout",
    "load_layout_string",
    # functions
    "arrange",
    "resolve",
    "export",
    "frame_aspect_ratio",
    "projection_aspect_ratio",
    # exceptions
    "CompositionError",
    "InvalidPlacement",
    "InvalidGridSpec",
    "UnknownPanelReference",
    "AspectRatioConflict",
]
