#!/usr/bin/env python3
import cartopy.crs as ccrs
import geopandas as gpd
from cartopy.io import shapereader

from geocompose import Canvas, Compositor, GridSpec, MapContent, MapLayer, Theme, export

countries = gpd.read_file(
    shapereader.natural_earth(
        resolution="110m", category="cultural", name="admin_0_countries"
    )
)

# a 3.3 x 1 canvas: the world map takes 2.3 units, Africa the remaining unit
canvas = Canvas.absolute((0, 3.3), (0, 1), width=12)
theme = Theme(gridlines=True, frame_linewidth=0.5)
world = MapContent(
    [MapLayer(countries, {"column": "POP_EST", "cmap": "YlGnBu", "edgecolor": "0.3", "linewidth": 0.2})],
    projection=ccrs.Robinson(),
    title="Population",
).to_panel("world", theme=theme, canvas=canvas)
africa = MapContent(
    [MapLayer(countries[countries["CONTINENT"] == "Africa"], {"facecolor": "0.8", "edgecolor": "black"})],
    projection=ccrs.LambertAzimuthalEqualArea(central_longitude=20),
    extent=(-20, 55, -36, 38),
    title="Africa",
).to_panel("africa", theme=theme, canvas=canvas)

grid = GridSpec([world, africa], row_count=1, relative_sizes=[2.3, 1], labels="AUTO")
result = Compositor(theme=theme).compose_grid(canvas, grid)

output_file = "side_by_side_maps.pdf"
export(result, None, output_file)
print(f"Done! The {output_file} has been saved.")
