import math

import cartopy.crs as ccrs
import geopandas as gpd
import pytest

from geocompose import AbsolutePlacement, MapContent, MapLayer, VOID_THEME, resolve
from geocompose.geometry import (
    extent_aspect_ratio,
    frame_aspect_ratio,
    projection_aspect_ratio,
)

# test the aspect ratios of map panels
#
# projection_aspect_ratio()
# frame_aspect_ratio()
# extent_aspect_ratio()
# MapContent.to_panel()

# ========================================= <projection_aspect_ratio> =====================================


def test_global_plate_carree():
    assert projection_aspect_ratio(ccrs.PlateCarree()) == pytest.approx(2.0)


def test_plate_carree_extent():
    assert projection_aspect_ratio(ccrs.PlateCarree(), (0, 40, 0, 10)) == pytest.approx(4.0)


def test_mercator_stretches_latitudes():
    ratio = projection_aspect_ratio(ccrs.Mercator(), (-10, 10, 0, 60))
    assert 0 < ratio < 20 / 60, "Mercator should make high latitudes taller."


def test_conic_projection():
    ratio = projection_aspect_ratio(
        ccrs.AlbersEqualArea(central_longitude=-96, standard_parallels=(29.5, 45.5)),
        (-125, -66, 22, 50),
    )
    assert 1 < ratio < 3


# ========================================= <frame_aspect_ratio> =====================================


def test_geographic_frame(countries_gdf):
    # 60 degrees of longitude at 45N, 30 degrees of latitude
    expected = 60 * math.cos(math.radians(45)) / 30
    assert frame_aspect_ratio(countries_gdf) == pytest.approx(expected)


def test_frame_without_crs(countries_gdf):
    unknown = gpd.GeoDataFrame(geometry=list(countries_gdf.geometry))
    assert frame_aspect_ratio(unknown) == pytest.approx(2.0)


def test_projected_frame(countries_gdf):
    projected = countries_gdf.to_crs("EPSG:3857")
    assert frame_aspect_ratio(countries_gdf, crs="EPSG:3857") == pytest.approx(
        frame_aspect_ratio(projected)
    )


def test_several_frames(countries_gdf):
    west = countries_gdf.iloc[:1]
    east = countries_gdf.iloc[1:]
    assert frame_aspect_ratio(west, east) == pytest.approx(frame_aspect_ratio(countries_gdf))


def test_no_frame():
    with pytest.raises(ValueError):
        frame_aspect_ratio()


# ========================================= <extent_aspect_ratio> =====================================


@pytest.mark.parametrize(
    "extent, geographic, expected",
    [
        ((0, 4, 0, 2), False, 2.0),
        ((0, 20, 55, 65), True, 1.0),
        ((-180, 180, -90, 90), False, 2.0),
    ],
)
def test_extent_aspect_ratio(extent, geographic, expected):
    assert extent_aspect_ratio(extent, geographic) == pytest.approx(expected)


@pytest.mark.parametrize("extent", [(0, 0, 0, 1), (0, 1, 1, 0), (0, math.inf, 0, 1)])
def test_degenerate_extent(extent):
    with pytest.raises(ValueError):
        extent_aspect_ratio(extent)


# ========================================= <MapContent> =====================================


def test_map_content_panels(countries_gdf):
    content = MapContent([MapLayer(countries_gdf)], projection=ccrs.PlateCarree())
    panel = content.to_panel("world", theme=VOID_THEME)
    assert panel.intrinsic_aspect_ratio == pytest.approx(2.0)
    assert panel.aspect_constrained
    assert panel.content is content
    assert panel.effective_theme is VOID_THEME

    free = content.to_panel("free", lock_aspect=False)
    assert free.intrinsic_aspect_ratio is None
    assert not free.aspect_constrained


def test_map_panel_on_a_canvas(countries_gdf, relative_canvas, absolute_canvas):
    content = MapContent([MapLayer(countries_gdf)], projection=ccrs.PlateCarree())
    # a 2:1 map on a 10 x 6 inch unit-square canvas
    panel = content.to_panel("world", canvas=relative_canvas)
    assert panel.intrinsic_aspect_ratio == pytest.approx(1.2)
    bounds = resolve(relative_canvas, panel, AbsolutePlacement(0, 1, 0, 1))
    assert (bounds.width * 10) / (bounds.height * 6) == pytest.approx(2.0)

    # an equal-scaled canvas keeps the ratio as is
    equal_scaled = content.to_panel("world", canvas=absolute_canvas)
    assert equal_scaled.intrinsic_aspect_ratio == pytest.approx(2.0)
    free = content.to_panel("free", lock_aspect=False, canvas=relative_canvas)
    assert free.intrinsic_aspect_ratio is None


def test_map_content_extent(countries_gdf):
    content = MapContent([MapLayer(countries_gdf)], extent=[0, 20, 55, 65])
    assert content.extent == (0.0, 20.0, 55.0, 65.0)
    assert content.crs == countries_gdf.crs
    assert content.aspect_ratio() == pytest.approx(1.0)


def test_empty_map_content():
    with pytest.raises(ValueError):
        MapContent().aspect_ratio()
