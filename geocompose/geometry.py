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
Aspect ratios of map panels.

A map drawn in a true projection must keep the ratio between its projected width and height,
otherwise the map is distorted. The functions in this module compute that ratio from a Cartopy
projection or from the bounds of GeoPandas data, so that the panel can be created with the right
`intrinsic_aspect_ratio`.
"""

import logging
import math

import cartopy.crs as ccrs
import numpy as np
import shapely
from pyproj import CRS
from shapely.geometry import box

logger = logging.getLogger("geocompose")


def projection_aspect_ratio(projection, extent=None, resolution=1.0) -> float:
    """Return the width/height ratio of a map in the given projection.

    Parameters
    ----------
    projection : cartopy.crs.Projection
        The projection of the map.
    extent : tuple of float, optional
        (lon_min, lon_max, lat_min, lat_max) of the map, in degrees. If not given, the whole
        domain of the projection (``x_limits`` and ``y_limits``) is used.
    resolution : float, default 1.0
        The edges of the extent box are densified to this spacing (in degrees) before being
        projected, because straight lon/lat edges become curves in most projections.

    Returns
    -------
    float
    """
    if extent is None:
        x0, x1 = projection.x_limits
        y0, y1 = projection.y_limits
        return _ratio(x1 - x0, y1 - y0)

    lon_min, lon_max, lat_min, lat_max = extent
    outline = shapely.segmentize(
        box(lon_min, lat_min, lon_max, lat_max), max_segment_length=resolution
    )
    lons, lats = np.asarray(outline.exterior.coords).T
    points = projection.transform_points(ccrs.PlateCarree(), lons, lats)
    valid = np.isfinite(points[:, 0]) & np.isfinite(points[:, 1])
    if not np.any(valid):
        raise ValueError(
            f"The extent {extent} cannot be projected into {type(projection).__name__}."
        )
    xs = points[valid, 0]
    ys = points[valid, 1]
    return _ratio(xs.max() - xs.min(), ys.max() - ys.min())


def frame_aspect_ratio(*gdfs, crs=None) -> float:
    """Return the width/height ratio of the total bounds of one or more GeoDataFrames.

    Parameters
    ----------
    *gdfs : geopandas.GeoDataFrame
        The data shown in the map. All frames are converted to the CRS of the first frame
        (or to `crs`) before their bounds are combined.
    crs : optional
        Re-project the data into this CRS first, e.g. "EPSG:3338" for Alaska Albers.

    Unprojected (geographic) data is drawn with one degree of longitude shortened by the cosine
    of the middle latitude, as GeoPandas does, and the ratio accounts for that.
    """
    if not gdfs:
        raise ValueError("At least one GeoDataFrame is needed to compute an aspect ratio.")

    target_crs = crs if crs is not None else gdfs[0].crs
    bounds = []
    for gdf in gdfs:
        if target_crs is not None and gdf.crs is not None and gdf.crs != target_crs:
            gdf = gdf.to_crs(target_crs)
        bounds.append(gdf.total_bounds)
    bounds = np.asarray(bounds)
    minx, miny = np.nanmin(bounds[:, 0]), np.nanmin(bounds[:, 1])
    maxx, maxy = np.nanmax(bounds[:, 2]), np.nanmax(bounds[:, 3])

    geographic = target_crs is not None and _is_geographic(target_crs)
    return extent_aspect_ratio((minx, maxx, miny, maxy), geographic=geographic)


def extent_aspect_ratio(extent, geographic=False) -> float:
    """Return the width/height ratio of an (x_min, x_max, y_min, y_max) box.

    If `geographic` is True, the box is in degrees and the width is scaled by the cosine of
    the middle latitude.
    """
    x_min, x_max, y_min, y_max = extent
    width = x_max - x_min
    height = y_max - y_min
    if geographic:
        width *= math.cos(math.radians((y_min + y_max) / 2.0))
    return _ratio(width, height)


def _is_geographic(crs) -> bool:
    return CRS.from_user_input(crs).is_geographic


def _ratio(width, height) -> float:
    if not (
        math.isfinite(width) and math.isfinite(height) and width > 0 and height > 0
    ):
        raise ValueError(
            f"Cannot compute an aspect ratio from a degenerate extent (width={width}, height={height})."
        )
    ratio = float(width / height)
    logger.debug(f"aspect ratio: {ratio}")
    return ratio
