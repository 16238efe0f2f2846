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

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import geopandas as gpd
from geopandas.geodataframe import GeoDataFrame

from ..geometry import extent_aspect_ratio, frame_aspect_ratio, projection_aspect_ratio
from ..panel import Panel

logger = logging.getLogger("geocompose")


@dataclass(frozen=True, eq=False)
class MapLayer:
    """One GeoDataFrame drawn with one style.

    `style` holds the keyword arguments of `GeoDataFrame.plot`, such as
    ``{"facecolor": "lightgrey", "edgecolor": "black", "column": "pop_est"}``.
    """

    data: GeoDataFrame
    style: dict = field(default_factory=dict)

    @classmethod
    def read(cls, path, **style):
        """read a vector file (shapefile, GeoPackage, GeoJSON...) with `geopandas.read_file`"""
        return cls(gpd.read_file(path), style)


@dataclass(frozen=True, eq=False)
class MapContent:
    """The content of a map panel.

    Parameters
    ----------
    layers : sequence of MapLayer
        Drawn in order, the first layer at the bottom.
    projection : cartopy.crs.Projection, optional
        Draw the map on a Cartopy GeoAxes in this projection. Without a projection, the
        layers are drawn in their own CRS on plain matplotlib axes.
    extent : tuple of float, optional
        (x_min, x_max, y_min, y_max) of the map. In degrees when `projection` is set,
        otherwise in the units of the layers' CRS.
    title : str, optional
    """

    layers: Sequence[MapLayer] = ()
    projection: Optional[object] = None
    extent: Optional[Tuple[float, float, float, float]] = None
    title: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(self.layers))
        if self.extent is not None:
            object.__setattr__(self, "extent", tuple(float(v) for v in self.extent))

    @property
    def crs(self):
        """the CRS of the layers when the map has no projection"""
        for layer in self.layers:
            if layer.data.crs is not None:
                return layer.data.crs
        return None

    def aspect_ratio(self) -> float:
        """the width/height ratio the map must keep to be undistorted"""
        if self.projection is not None:
            return projection_aspect_ratio(self.projection, self.extent)
        if self.extent is not None:
            crs = self.crs
            return extent_aspect_ratio(
                self.extent, geographic=crs is not None and crs.is_geographic
            )
        if not self.layers:
            raise ValueError(
                "A map without a projection, an extent or any layer has no aspect ratio."
            )
        return frame_aspect_ratio(*[layer.data for layer in self.layers])

    def to_panel(self, panel_id, lock_aspect=True, theme=None, canvas=None) -> Panel:
        """Create a Panel showing this map.

        Parameters
        ----------
        panel_id : str
        lock_aspect : bool, default True
            Keep the map's aspect ratio wherever the panel is placed.
        theme : Theme, optional
        canvas : Canvas, optional
            The canvas the panel will be placed on. The map's ratio is converted into the
            canvas' coordinate units, so that the map is printed undistorted. Without a canvas,
            the ratio is used as is, which is only right on an equal-scaled canvas.
        """
        ratio = self.aspect_ratio() if lock_aspect else None
        logger.debug(f"map panel {panel_id!r}: aspect ratio {ratio}")
        panel = Panel(panel_id, self, ratio, theme)
        return panel.for_canvas(canvas) if canvas is not None else panel
