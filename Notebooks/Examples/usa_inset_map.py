#!/usr/bin/env python3
import cartopy.crs as ccrs
import geopandas as gpd
from cartopy.io import shapereader

from geocompose import (
    VOID_THEME,
    AbsolutePlacement,
    Canvas,
    Compositor,
    Connector,
    Label,
    MapContent,
    MapLayer,
    PanelAnchor,
    RelativePlacement,
    export,
)

# the Natural Earth states and provinces (downloaded and cached by Cartopy)
states = gpd.read_file(
    shapereader.natural_earth(
        resolution="50m", category="cultural", name="admin_1_states_provinces_lakes"
    )
)
states = states[states["admin"] == "United States of America"]
style = {"facecolor": "0.85", "edgecolor": "white", "linewidth": 0.4}

# map panels keep their printed aspect ratio on this 10 x 6 inch canvas
canvas = Canvas.relative(10, 6)

# each part of the country gets its own map in its own projection
contiguous = MapContent(
    [MapLayer(states[~states["name"].isin(["Alaska", "Hawaii"])], style)],
    projection=ccrs.AlbersEqualArea(
        central_longitude=-96, standard_parallels=(29.5, 45.5)
    ),
    extent=(-125, -66.5, 22, 50),
).to_panel("contiguous", theme=VOID_THEME, canvas=canvas)

inset_theme = VOID_THEME.replace(frame_linewidth=0.5, background="aliceblue")
alaska = MapContent(
    [MapLayer(states[states["name"] == "Alaska"], style)],
    projection=ccrs.AlbersEqualArea(central_longitude=-154, standard_parallels=(55, 65)),
    extent=(-170, -130, 51, 72),
).to_panel("alaska", theme=inset_theme, canvas=canvas)
hawaii = MapContent(
    [MapLayer(states[states["name"] == "Hawaii"], style)],
    projection=ccrs.AlbersEqualArea(central_longitude=-157, standard_parallels=(8, 18)),
    extent=(-161, -154, 18.5, 22.5),
).to_panel("hawaii", theme=inset_theme, canvas=canvas)

# the insets are shrunk to their maps' aspect ratios and kept in the lower-left corner
result = Compositor().compose(
    canvas,
    [
        (contiguous, AbsolutePlacement(0, 1, 0, 1)),
        (alaska, RelativePlacement(0.02, 0.02, 0.26, 0.3)),
        (hawaii, RelativePlacement(0.3, 0.02, 0.15, 0.15)),
    ],
    connectors=[
        Connector(
            PanelAnchor("hawaii", "top"),
            (0.3, 0.3),
            {"arrowstyle": "-", "color": "0.5", "linestyle": "--"},
        )
    ],
    labels=[Label("United States", (0.5, 0.98), "top", {"fontsize": 16})],
)

for panel_id, bounds in result.placements:
    print(f"{panel_id}: {bounds.as_tuple()}")

# save the composition as a .png file
output_file = "usa_inset_map.png"
export(result, "png", output_file, dpi=120)
print(f"Done! The {output_file} has been saved.")
