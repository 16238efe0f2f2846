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

import cartopy.crs as ccrs
from geopandas.geodataframe import GeoDataFrame
from matplotlib.figure import Figure
from matplotlib.patches import FancyArrowPatch

from .map_content import MapContent
from .render_engine import RenderEngine

logger = logging.getLogger("geocompose")

DEFAULT_CARTOPY_PROJECTION = ccrs.PlateCarree()

_HORIZONTAL_ALIGNMENT = {0.0: "left", 0.5: "center", 1.0: "right"}
_VERTICAL_ALIGNMENT = {0.0: "bottom", 0.5: "center", 1.0: "top"}


class CartopyRenderEngine(RenderEngine):
    """Use matplotlib and Cartopy to draw compositions.

    Every composition gets its own `matplotlib.figure.Figure` (pyplot is not used, so no
    figure is registered globally). Each panel becomes one axes created at the panel's resolved
    bounds; map panels with a projection become Cartopy GeoAxes.

    Panel contents can be:

    * a :class:`MapContent`: its layers are drawn with `GeoDataFrame.plot`,
    * a callable: it is called with the new axes and draws whatever it likes,
    * None: an empty axes is created.

    Parameters
    ----------
    dpi : float, default 100
        The resolution of the figure. :func:`~geocompose.export.export` can override it.
    """

    def __init__(self, dpi=100):
        self.dpi = dpi

    def render(self, content):
        """Return the (width, height) of a map's extent, None for other contents.

        Raises TypeError for contents this engine cannot draw.
        """
        if isinstance(content, MapContent):
            if content.extent is None:
                return None
            return (
                content.extent[1] - content.extent[0],
                content.extent[3] - content.extent[2],
            )
        if content is None or callable(content):
            return None
        raise TypeError(
            f"CartopyRenderEngine cannot draw panel content of type {type(content).__name__}. "
            + "Use a MapContent object or a callable taking a matplotlib axes."
        )

    def new_surface(self, canvas):
        return Figure(figsize=canvas.output_extent, dpi=self.dpi)

    def draw(self, surface, panel, canvas, bounds):
        rect = canvas.to_figure_fraction(bounds)
        content = panel.content
        theme = panel.effective_theme

        if isinstance(content, MapContent) and content.projection is not None:
            ax = surface.add_axes(rect, projection=content.projection)
        else:
            ax = surface.add_axes(rect)
        ax.set_label(str(panel.panel_id))

        if isinstance(content, MapContent):
            self._draw_map(ax, content)
        elif callable(content):
            content(ax)
        else:
            ax.set_xticks([])
            ax.set_yticks([])

        self._apply_theme(ax, theme, title=getattr(content, "title", None))
        logger.debug(f"panel {panel.panel_id!r} drawn at {rect}")
        return ax

    def draw_connector(self, surface, canvas, start, end, **style):
        style.setdefault("arrowstyle", "-|>")
        style.setdefault("mutation_scale", 12)
        style.setdefault("color", "black")
        style.setdefault("zorder", 10)
        arrow = FancyArrowPatch(
            canvas.point_to_figure_fraction(*start),
            canvas.point_to_figure_fraction(*end),
            transform=surface.transFigure,
            **style,
        )
        surface.add_artist(arrow)
        return arrow

    def draw_label(self, surface, canvas, label, point):
        style = dict(label.style)
        style.setdefault("zorder", 11)
        x, y = canvas.point_to_figure_fraction(*point)
        return surface.text(
            x,
            y,
            label.text,
            ha=_HORIZONTAL_ALIGNMENT[label.justification.hjust],
            va=_VERTICAL_ALIGNMENT[label.justification.vjust],
            transform=surface.transFigure,
            **style,
        )

    def plot_geo_data_frame(self, ax, gdf: GeoDataFrame, **kwargs):
        """Plot geometries in a GeoDataFrame object onto a map

        Parameters
        ----------
        ax : matplotlib.axes.Axes or cartopy.mpl.geoaxes.GeoAxes
            If the axes has a projection, the geometries are re-projected into it.
            Geometries without a CRS are taken as longitude/latitude.
        gdf : GeoDataFrame
            GeoPandas GeoDataFrame object
        """
        if hasattr(ax, "projection"):
            if "transform" in kwargs.keys():
                logger.warning(
                    "'transform' keyword argument is ignored by CartopyRenderEngine."
                )
                kwargs.pop("transform")
            if gdf.crs is None:
                gdf = gdf.set_crs(DEFAULT_CARTOPY_PROJECTION)
            gdf = gdf.to_crs(ax.projection)

        return gdf.plot(ax=ax, **kwargs)

    def _draw_map(self, ax, content: MapContent):
        projected = content.projection is not None
        crs = None if projected else content.crs
        for layer in content.layers:
            gdf = layer.data
            if crs is not None and gdf.crs is not None and gdf.crs != crs:
                gdf = gdf.to_crs(crs)
            self.plot_geo_data_frame(ax, gdf, **layer.style)

        if projected:
            if content.extent is None:
                ax.set_global()
            else:
                ax.set_extent(content.extent, crs=DEFAULT_CARTOPY_PROJECTION)
        elif content.extent is not None:
            ax.set_xlim(content.extent[0], content.extent[1])
            ax.set_ylim(content.extent[2], content.extent[3])

    @staticmethod
    def _apply_theme(ax, theme, title=None):
        ax.set_facecolor(theme.background)
        for spine in ax.spines.values():
            spine.set_edgecolor(theme.frame_color)
            spine.set_linewidth(theme.frame_linewidth)
            spine.set_visible(theme.frame_linewidth > 0)
        ax.tick_params(labelsize=theme.font_size)
        if theme.gridlines:
            if hasattr(ax, "projection"):
                ax.gridlines(color=theme.gridline_color, linewidth=0.5)
            else:
                ax.grid(True, color=theme.gridline_color, linewidth=0.5)
        if title:
            ax.set_title(title, fontsize=theme.title_size)
