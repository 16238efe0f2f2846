import sys

import cartopy.crs as ccrs
import pytest
from conftest import RecordingRenderEngine

from geocompose import (
    CompositionError,
    CoordinateMode,
    InvalidGridSpec,
    MapContent,
    load_layout,
    load_layout_string,
)
from geocompose.__main__ import main
from geocompose.layout_loader import parse_projection

# test layout files and the command line
#
# load_layout()
# load_layout_string()
# Layout.plan()
# geocompose check
# geocompose render

GRID_LAYOUT = """
canvas:
  mode: absolute_data_space
  xlim: [0, 3.3]
  ylim: [0, 1]
  width: 9.9

theme:
  frame_linewidth: 0.5

panels:
  left:
  right:
    aspect_ratio: 1.0
    theme: {background: lightblue}

grid:
  panels: [left, right]
  row_count: 1
  relative_sizes: [2.3, 1]
  labels: AUTO

connectors:
  - start: {panel: left, anchor: right}
    end: {panel: right, anchor: left}
    style: {arrowstyle: "->"}

labels:
  - text: Two panels
    at: [1.65, 0.98]
    justification: top
"""

INSET_LAYOUT = """
canvas: {width: 10, height: 6}

panels:
  main:
    placement: {x_min: 0, x_max: 1, y_min: 0, y_max: 1}
  inset:
    aspect_ratio: 2
    placement: {x: 0.05, y: 0.05, width: 0.3, height: 0.3, justification: bottom_left}
"""

# ========================================= <load_layout_string> =====================================


def test_grid_layout():
    layout = load_layout_string(GRID_LAYOUT)
    assert layout.canvas.coordinate_mode is CoordinateMode.ABSOLUTE_DATA_SPACE
    assert layout.canvas.height == pytest.approx(3.0)
    assert [p.panel_id for p in layout.panels] == ["left", "right"]
    assert layout.theme.frame_linewidth == 0.5

    right = layout.panels[1]
    assert right.intrinsic_aspect_ratio == 1.0
    assert right.effective_theme.background == "lightblue"
    # the panel theme is merged over the layout theme
    assert right.effective_theme.frame_linewidth == 0.5

    engine = RecordingRenderEngine()
    plan = layout.plan(layout.compositor(engine))
    assert dict(plan.placements)["left"].as_tuple() == pytest.approx((0, 2.3, 0, 1))
    assert dict(plan.placements)["right"].as_tuple() == pytest.approx((2.3, 3.3, 0, 1))
    assert plan.connectors[0].start == pytest.approx((2.3, 0.5))
    assert plan.connectors[0].end == pytest.approx((2.3, 0.5))
    assert plan.connectors[0].style == {"arrowstyle": "->"}
    assert [l.label.text for l in plan.labels] == ["A", "B", "Two panels"]
    assert engine.surfaces == 0


def test_inset_layout():
    layout = load_layout_string(INSET_LAYOUT)
    assert layout.grid is None
    result = layout.compose(layout.compositor(RecordingRenderEngine()))
    assert [pid for pid, _ in result.placements] == ["main", "inset"]
    # an explicit aspect ratio is given in canvas units
    assert result.bounds_of("inset").as_tuple() == pytest.approx((0.05, 0.35, 0.05, 0.2))


def test_layout_errors_are_raised_when_planning():
    layout = load_layout_string(GRID_LAYOUT.replace("[2.3, 1]", "[1, -1]"))
    with pytest.raises(InvalidGridSpec):
        layout.plan(layout.compositor(RecordingRenderEngine()))
    assert issubclass(InvalidGridSpec, CompositionError)


@pytest.mark.parametrize(
    "text",
    [
        "just a string",
        "panels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {mode: absolute_data_space, xlim: [0, 1]}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {width: 10}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {width: 10, height: 6}\npanels: {a: {}}",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1}}}",
        "canvas: {width: 10, height: 6}\npanels: {a: {projection: Nowhere, placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {width: 10, height: 6}\npanels: {a: {extent: [0, 1, 2], placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {width: 10, height: 6}\npanels: {a: }\ngrid: {panels: [a, b], row_count: 1}",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\ngrid: {panels: [a], row_count: 1}",
        "canvas: {width: 10, height: 6}\ntheme: {colour: red}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\nconnectors: [{start: 5, end: [0, 0]}]",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\nlabels: {text: A}",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\nlabels: [{at: [0, 0]}]",
        "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\nconnectors: [5]",
    ],
)
def test_malformed_layouts(text):
    with pytest.raises(ValueError):
        load_layout_string(text)


PLACED = "canvas: {width: 10, height: 6}\npanels: {a: {placement: {x: 0, y: 0, width: 1, height: 1}}}\n"


@pytest.mark.parametrize(
    "text, key",
    [
        (PLACED + "labels: [{at: [0, 0]}]", "labels[0]: missing 'text'"),
        (PLACED + "labels: [{text: A, at: [0, 0]}, {text: B}]", "labels[1]: missing 'at'"),
        (PLACED + "labels: [A]", "labels[0]"),
        (PLACED + "connectors: [5]", "connectors[0]"),
        (PLACED + "connectors: [{start: [0, 0]}]", "connectors[0]: missing 'end'"),
    ],
)
def test_malformed_items_name_the_key(text, key):
    with pytest.raises(ValueError) as e:
        load_layout_string(text)
    assert type(e.value) is ValueError
    assert key in str(e.value)


def test_parse_projection():
    assert isinstance(parse_projection("Robinson"), ccrs.Robinson)
    albers = parse_projection(
        {"name": "AlbersEqualArea", "central_longitude": -96, "standard_parallels": [29.5, 45.5]}
    )
    assert isinstance(albers, ccrs.AlbersEqualArea)
    assert parse_projection(None) is None
    with pytest.raises(ValueError):
        # a CRS, but not a projection
        parse_projection("Geodetic")


# ========================================= <load_layout> =====================================


@pytest.fixture
def map_layout_file(tmp_path, countries_gdf):
    countries_gdf.to_file(tmp_path / "countries.geojson", driver="GeoJSON")
    path = tmp_path / "europe.yaml"
    path.write_text(
        """
canvas: {width: 8, height: 4}
panels:
  world:
    layers:
      - file: countries.geojson
        style: {facecolor: lightgrey, edgecolor: black}
    projection: PlateCarree
    title: World
    placement: {x_min: 0, x_max: 1, y_min: 0, y_max: 1}
  europe:
    layers:
      - file: countries.geojson
    extent: [-20, 40, 30, 60]
    lock_aspect: false
    placement: {x: 0.02, y: 0.02, width: 0.3, height: 0.4}
connectors:
  - start: {panel: europe, anchor: top_right}
    end: {panel: world, anchor: center}
"""
    )
    return path


def test_map_layout_file(map_layout_file):
    layout = load_layout(map_layout_file)
    world, europe = layout.panels
    assert isinstance(world.content, MapContent)
    assert len(world.content.layers) == 1
    assert world.content.layers[0].style == {"facecolor": "lightgrey", "edgecolor": "black"}
    # the 2:1 world map printed on an 8 x 4 inch canvas fills the unit square
    assert world.intrinsic_aspect_ratio == pytest.approx(1.0)
    assert europe.intrinsic_aspect_ratio is None
    assert europe.content.extent == (-20.0, 40.0, 30.0, 60.0)


# ========================================= <command line> =====================================


def test_check_command(tmp_path, monkeypatch, capsys):
    path = tmp_path / "grid.yaml"
    path.write_text(GRID_LAYOUT)
    monkeypatch.setattr(sys, "argv", ["geocompose", "check", str(path)])
    main()
    out = capsys.readouterr().out
    assert "absolute_data_space" in out
    assert "left: x=[0, 2.3] y=[0, 1]" in out
    assert "right: x=[2.3, 3.3] y=[0, 1]" in out
    assert "Connectors:" in out


def test_render_command(map_layout_file, tmp_path, monkeypatch, capsys):
    output = tmp_path / "europe.png"
    monkeypatch.setattr(
        sys, "argv", ["geocompose", "render", str(map_layout_file), "-o", str(output), "--dpi", "50"]
    )
    main()
    assert output.exists()
    assert "Done!" in capsys.readouterr().out


def test_version_option(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["geocompose", "-v"])
    with pytest.raises(SystemExit) as e:
        main()
    assert e.value.code == 0
    assert capsys.readouterr().out.strip()
