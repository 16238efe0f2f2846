import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import pytest
from shapely.geometry import box

import geocompose
from geocompose import (
    AbsolutePlacement,
    Canvas,
    Compositor,
    Panel,
    RelativePlacement,
)
from geocompose.mapping.render_engine import RenderEngine

## ==========================

# The examples below follow the usual inset-map layouts: a 10 x 6 inch relative canvas with
# an inset in the lower-left corner, and a 3.3 x 1 data-space canvas holding two maps side by side.
relative_canvas_extent = (10, 6)
absolute_canvas_limits = ((0, 3.3), (0, 1))
alaska_ratio = 0.42
aspect_ratios = (0.25, 0.42, 1.0, 1.7, 4.0)
relative_boxes = (
    # x, y, width, height
    (0.05, 0.05, 0.26, 0.26 * 10 / 6 * 0.42),
    (0.0, 0.0, 1.0, 1.0),
    (0.5, 0.25, 0.3, 0.6),
    (0.7, 0.7, 0.5, 0.5),  # spills over the top-right margin
)
justifications = ("bottom_left", "center", "top_right", "left", "top")
tolerance = 1e-9


class RecordingRenderEngine(RenderEngine):
    """A render engine which records the calls it receives instead of drawing"""

    def __init__(self):
        self.calls = []
        self.surfaces = 0

    def render(self, content):
        self.calls.append(("render", content))
        return None

    def new_surface(self, canvas):
        self.surfaces += 1
        self.calls.append(("new_surface", canvas))
        return []

    def draw(self, surface, panel, canvas, bounds):
        self.calls.append(("draw", panel.panel_id, bounds))
        surface.append(panel.panel_id)

    def draw_connector(self, surface, canvas, start, end, **style):
        self.calls.append(("connector", start, end, style))

    def draw_label(self, surface, canvas, label, point):
        self.calls.append(("label", label.text, point))

    def finalize(self, surface):
        return tuple(surface)

    def drawn(self):
        return [c[1] for c in self.calls if c[0] == "draw"]


@pytest.fixture
def recording_engine():
    return RecordingRenderEngine()


@pytest.fixture
def recording_compositor(recording_engine):
    return Compositor(recording_engine)


@pytest.fixture(scope="module")
def relative_canvas():
    return Canvas.relative(*relative_canvas_extent)


@pytest.fixture(scope="module")
def absolute_canvas():
    xlim, ylim = absolute_canvas_limits
    return Canvas.absolute(xlim, ylim, width=9.9)


@pytest.fixture(scope="module")
def free_panel():
    return Panel("free")


@pytest.fixture(scope="module")
def inset_panels():
    return [
        Panel("A"),
        Panel("B", intrinsic_aspect_ratio=alaska_ratio),
    ]


@pytest.fixture(scope="module")
def placed_inset_panels(inset_panels):
    main, inset = inset_panels
    return [
        (main, AbsolutePlacement(0, 1, 0, 1)),
        (inset, RelativePlacement(0.05, 0.05, 0.26, 0.4)),
    ]


@pytest.fixture(scope="module")
def countries_gdf():
    # two rectangles standing in for country outlines, in longitude/latitude
    return gpd.GeoDataFrame(
        {"name": ["west", "east"], "value": [1.0, 2.0]},
        geometry=[box(-20, 30, 0, 60), box(0, 30, 40, 60)],
        crs="EPSG:4326",
    )
