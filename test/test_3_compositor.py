import pytest
from matplotlib.figure import Figure
from matplotlib.patches import FancyArrowPatch

from geocompose import (
    AbsolutePlacement,
    AspectRatioConflict,
    CartopyRenderEngine,
    Compositor,
    Connector,
    GridSpec,
    InvalidPlacement,
    Label,
    MapContent,
    MapLayer,
    Panel,
    PanelAnchor,
    RelativePlacement,
    UnknownPanelReference,
)

# test the compositor
#
# Compositor.plan()
# Compositor.compose()
# Compositor.compose_grid()
# CartopyRenderEngine

# ========================================= <unknown references> =====================================


def test_connector_to_unknown_panel(recording_engine, relative_canvas, placed_inset_panels):
    compositor = Compositor(recording_engine)
    with pytest.raises(UnknownPanelReference) as e:
        compositor.compose(
            relative_canvas,
            placed_inset_panels,
            connectors=[Connector(PanelAnchor("A"), PanelAnchor("C"))],
        )
    assert e.value.panel_id == "C"
    assert e.value.field == "end"
    assert e.value.index == 0
    assert recording_engine.surfaces == 0, "Nothing should be drawn for an invalid composition."


def test_label_on_unknown_panel(recording_compositor, relative_canvas, placed_inset_panels):
    with pytest.raises(UnknownPanelReference) as e:
        recording_compositor.compose(
            relative_canvas,
            placed_inset_panels,
            labels=[Label("Hawaii", PanelAnchor("hawaii", "top_left"))],
        )
    assert e.value.field == "at"


# ========================================= <all or nothing> =====================================


def test_invalid_placement_draws_nothing(recording_engine, absolute_canvas):
    compositor = Compositor(recording_engine)
    placed_panels = [
        (Panel("left"), AbsolutePlacement(0, 2.3, 0, 1)),
        (Panel("right"), AbsolutePlacement(2.3, 3.5, 0, 1)),
    ]
    with pytest.raises(InvalidPlacement) as e:
        compositor.compose(absolute_canvas, placed_panels)
    assert e.value.index == 1
    assert recording_engine.surfaces == 0
    assert recording_engine.drawn() == []


def test_aspect_conflict_draws_nothing(recording_engine, relative_canvas):
    placed_panels = [
        (Panel("ok"), AbsolutePlacement(0, 1, 0, 1)),
        (Panel("sliver", intrinsic_aspect_ratio=1.7976931348623157e308), AbsolutePlacement(0, 1e-300, 0, 1)),
    ]
    with pytest.raises(AspectRatioConflict):
        Compositor(recording_engine).compose(relative_canvas, placed_panels)
    assert recording_engine.surfaces == 0


def test_duplicate_panel_id(recording_compositor, relative_canvas):
    panel = Panel("A")
    with pytest.raises(InvalidPlacement) as e:
        recording_compositor.plan(
            relative_canvas,
            [(panel, AbsolutePlacement(0, 1, 0, 1)), (panel, RelativePlacement(0, 0, 0.2, 0.2))],
        )
    assert e.value.field == "panel_id"


def test_invalid_endpoint(recording_compositor, relative_canvas, placed_inset_panels):
    with pytest.raises(InvalidPlacement) as e:
        recording_compositor.plan(
            relative_canvas,
            placed_inset_panels,
            connectors=[Connector((0, 0), "alaska")],
        )
    assert e.value.field == "end"


# ========================================= <drawing> =====================================


def test_draw_order(recording_engine, relative_canvas, placed_inset_panels):
    result = Compositor(recording_engine).compose(
        relative_canvas,
        placed_inset_panels,
        connectors=[Connector(PanelAnchor("B", "right"), (0.5, 0.5))],
        labels=[Label("USA", (0.5, 0.98), "top")],
    )
    kinds = [c[0] for c in recording_engine.calls if c[0] != "render"]
    assert kinds == ["new_surface", "draw", "draw", "connector", "label"]
    assert recording_engine.drawn() == ["A", "B"], "The inset should be drawn over the main map."
    assert result.artifact == ("A", "B")
    assert [pid for pid, _ in result.placements] == ["A", "B"]


def test_panel_anchor_endpoints(recording_compositor, relative_canvas, placed_inset_panels):
    plan = recording_compositor.plan(
        relative_canvas,
        placed_inset_panels,
        connectors=[
            Connector(PanelAnchor("B", "right", offset=(0.01, 0)), PanelAnchor("A", "center"))
        ],
    )
    inset = plan.bounds[1]
    x, y = inset.anchor_point("right")
    assert plan.connectors[0].start == pytest.approx((x + 0.01, y))
    assert plan.connectors[0].end == pytest.approx((0.5, 0.5))


def test_styled_items_are_hashable(recording_compositor, relative_canvas, placed_inset_panels):
    connector = Connector((0, 0), (1, 1), {"color": "red"})
    label = Label("A", (0, 0), style={"fontsize": 12})
    assert len({connector, label, Label("A", (0, 0))}) == 3
    assert connector != Connector((0, 0), (1, 1), {"color": "red"})

    plan = recording_compositor.plan(
        relative_canvas, placed_inset_panels, connectors=[connector], labels=[label]
    )
    assert len(set(plan.connectors) | set(plan.labels)) == 2
    assert hash(plan)


def test_plan_does_not_draw(recording_engine, relative_canvas, placed_inset_panels):
    plan = Compositor(recording_engine).plan(relative_canvas, placed_inset_panels)
    assert recording_engine.surfaces == 0
    assert [pid for pid, _ in plan.placements] == ["A", "B"]


def test_panels_are_not_modified(recording_compositor, relative_canvas, inset_panels):
    main, inset = inset_panels
    for placement in (RelativePlacement(0.05, 0.05, 0.26, 0.4), AbsolutePlacement(0, 0.5, 0, 0.5)):
        recording_compositor.compose(relative_canvas, [(inset, placement)])
    assert inset.intrinsic_aspect_ratio == 0.42
    assert inset.panel_id == "B"


def test_bounds_of(recording_compositor, relative_canvas, placed_inset_panels):
    result = recording_compositor.compose(relative_canvas, placed_inset_panels)
    assert result.bounds_of("A").as_tuple() == (0, 1, 0, 1)
    with pytest.raises(UnknownPanelReference):
        result.bounds_of("C")


def test_compose_grid(recording_engine, absolute_canvas):
    grid = GridSpec(
        [Panel("left"), Panel("right")], row_count=1, relative_sizes=[2.3, 1], labels="AUTO"
    )
    result = Compositor(recording_engine).compose_grid(absolute_canvas, grid)
    assert result.bounds_of("right").as_tuple() == pytest.approx((2.3, 3.3, 0, 1))
    labels = [c[1:] for c in recording_engine.calls if c[0] == "label"]
    assert [text for text, _ in labels] == ["A", "B"]
    assert labels[1][1] == pytest.approx((2.3, 1.0))


# ========================================= <CartopyRenderEngine> =====================================


def test_cartopy_render_engine(relative_canvas, placed_inset_panels):
    result = Compositor(CartopyRenderEngine()).compose(
        relative_canvas,
        placed_inset_panels,
        connectors=[Connector(PanelAnchor("B", "right"), (0.5, 0.5))],
        labels=[Label("USA", (0.5, 0.98), "top")],
    )
    fig = result.figure
    assert isinstance(fig, Figure)
    assert tuple(fig.get_size_inches()) == pytest.approx((10, 6))
    assert [ax.get_label() for ax in fig.axes] == ["A", "B"]

    inset = result.bounds_of("B")
    left, bottom, width, height = fig.axes[1].get_position().bounds
    assert (left, bottom, width, height) == pytest.approx(
        (inset.x_min, inset.y_min, inset.width, inset.height)
    )
    assert any(isinstance(a, FancyArrowPatch) for a in fig.artists)
    assert [t.get_text() for t in fig.texts] == ["USA"]


def test_map_panels(relative_canvas, countries_gdf):
    import cartopy.crs as ccrs
    from cartopy.mpl.geoaxes import GeoAxes

    world = MapContent(
        [MapLayer(countries_gdf, {"facecolor": "lightgrey", "edgecolor": "black"})],
        projection=ccrs.PlateCarree(),
        title="World",
    ).to_panel("world", canvas=relative_canvas)
    europe = MapContent([MapLayer(countries_gdf)], extent=(-20, 40, 30, 60)).to_panel("europe")
    chart = Panel("chart", lambda ax: ax.plot([0, 1], [0, 1]))

    result = Compositor().compose(
        relative_canvas,
        [
            (world, AbsolutePlacement(0, 1, 0, 1)),
            (europe, RelativePlacement(0.02, 0.02, 0.3, 0.3)),
            (chart, RelativePlacement(0.98, 0.02, 0.2, 0.2, "bottom_right")),
        ],
    )
    axes = result.figure.axes
    assert isinstance(axes[0], GeoAxes)
    assert not isinstance(axes[1], GeoAxes)
    assert axes[0].get_title() == "World"
    assert len(axes[2].lines) == 1


def test_unsupported_content(relative_canvas):
    compositor = Compositor(CartopyRenderEngine())
    with pytest.raises(TypeError):
        compositor.plan(relative_canvas, [(Panel("odd", content=42), AbsolutePlacement(0, 1, 0, 1))])
