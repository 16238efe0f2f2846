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
Compose independently produced panels onto one canvas.

A composition is validated as a whole before anything is drawn: if any placement,
connector or label is invalid, an exception is raised and no drawing surface is created.

Panels are drawn in the order they are given, so a later panel covers an earlier one where
they overlap (an inset map is placed after the main map). Connectors are drawn after all the
panels, and labels last.

.. code-block:: python
    :linenos:

    canvas = Canvas.relative(10, 6)
    result = Compositor().compose(
        canvas,
        [
            (mainland, AbsolutePlacement(0, 1, 0, 1)),
            (alaska, RelativePlacement(0.05, 0.05, 0.26, 0.3)),
        ],
        connectors=[Connector(PanelAnchor("alaska", "right"), (0.5, 0.5))],
    )
    export(result, "pdf", "usa.pdf")
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple, Union

from .config import DEFAULT_THEME
from .exceptions import InvalidPlacement, UnknownPanelReference
from .grid import arrange, grid_labels
from .placement import Justification, ResolvedBounds, to_justification
from .resolver import resolve

logger = logging.getLogger("geocompose")


@dataclass(frozen=True)
class PanelAnchor:
    """A point defined relative to a placed panel's resolved bounds.

    Parameters
    ----------
    panel_id : str
        The panel the point belongs to.
    anchor : Justification or str, default "center"
        The named point of the panel's rectangle, e.g. "right" for the middle of the right edge.
    offset : tuple of float, default (0, 0)
        Shift in canvas units added to the anchor point.
    """

    panel_id: str
    anchor: Union[Justification, str] = Justification.CENTER
    offset: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        object.__setattr__(self, "anchor", to_justification(self.anchor))


Endpoint = Union[PanelAnchor, Tuple[float, float]]


@dataclass(frozen=True, eq=False)
class Connector:
    """An arrow from `start` to `end`. Endpoints are canvas points or :class:`PanelAnchor` objects.

    `style` is passed to the render engine, e.g. ``{"arrowstyle": "->", "color": "0.3"}``.
    """

    start: Endpoint
    end: Endpoint
    style: Dict = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class Label:
    """A piece of text, such as a sub-figure label, whose `justification` point sits at `at`."""

    text: str
    at: Endpoint
    justification: Union[Justification, str] = Justification.TOP_LEFT
    style: Dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "justification", to_justification(self.justification))


@dataclass(frozen=True, eq=False)
class ResolvedConnector:
    start: Tuple[float, float]
    end: Tuple[float, float]
    style: Dict = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class ResolvedLabel:
    label: Label
    point: Tuple[float, float]


@dataclass(frozen=True)
class CompositionPlan:
    """The validated and resolved layout of a composition, before drawing"""

    canvas: object
    panels: Tuple
    bounds: Tuple[ResolvedBounds, ...]
    connectors: Tuple[ResolvedConnector, ...] = ()
    labels: Tuple[ResolvedLabel, ...] = ()

    @property
    def placements(self) -> Tuple[Tuple[str, ResolvedBounds], ...]:
        return tuple((p.panel_id, b) for p, b in zip(self.panels, self.bounds))


@dataclass(frozen=True)
class CompositionResult:
    """The merged output of a composition.

    Attributes
    ----------
    artifact : object
        What the render engine produced, a `matplotlib.figure.Figure` for
        :class:`~geocompose.mapping.cartopy_render.CartopyRenderEngine`.
    canvas : Canvas
    placements : tuple of (str, ResolvedBounds)
        The final bounds of every panel, in drawing order.
    connectors : tuple of ResolvedConnector
    """

    artifact: object
    canvas: object
    placements: Tuple[Tuple[str, ResolvedBounds], ...]
    connectors: Tuple[ResolvedConnector, ...] = ()

    @property
    def figure(self):
        return self.artifact

    def bounds_of(self, panel_id) -> ResolvedBounds:
        for pid, bounds in self.placements:
            if pid == panel_id:
                return bounds
        raise UnknownPanelReference(panel_id)


class Compositor(object):
    """Lay out panels, connectors and labels on a canvas and draw them with a render engine.

    Parameters
    ----------
    render_engine : RenderEngine, optional
        The engine which draws panel contents. A new
        :class:`~geocompose.mapping.cartopy_render.CartopyRenderEngine` is used by default.
    theme : Theme, optional
        Styling of the items which do not belong to a panel, such as grid labels.
    """

    def __init__(self, render_engine=None, theme=None):
        self.theme = theme if theme is not None else DEFAULT_THEME
        if render_engine is None:
            from .mapping.cartopy_render import CartopyRenderEngine

            render_engine = CartopyRenderEngine()
        self.render_engine = render_engine

    def plan(
        self,
        canvas,
        placed_panels: Sequence,
        connectors: Sequence[Connector] = (),
        labels: Sequence[Label] = (),
    ) -> CompositionPlan:
        """Validate and resolve a composition without drawing anything.

        Parameters
        ----------
        canvas : Canvas
        placed_panels : sequence of (Panel, Placement)
        connectors : sequence of Connector
        labels : sequence of Label

        Raises
        ------
        InvalidPlacement, AspectRatioConflict, UnknownPanelReference
        """
        panels = []
        bounds = []
        by_id = {}
        for index, (panel, placement) in enumerate(placed_panels):
            if panel.panel_id in by_id:
                raise InvalidPlacement(
                    f"Panel '{panel.panel_id}' is placed more than once in this composition.",
                    index=index,
                    field="panel_id",
                )
            resolved = resolve(canvas, panel, placement, index=index)
            size_hint = self.render_engine.render(panel.content)
            if size_hint is not None:
                logger.debug(f"panel {panel.panel_id!r} size hint: {size_hint}")
            by_id[panel.panel_id] = resolved
            panels.append(panel)
            bounds.append(resolved)

        resolved_connectors = []
        for index, connector in enumerate(connectors):
            resolved_connectors.append(
                ResolvedConnector(
                    _resolve_endpoint(connector.start, by_id, index, "start"),
                    _resolve_endpoint(connector.end, by_id, index, "end"),
                    dict(connector.style),
                )
            )

        resolved_labels = [
            ResolvedLabel(label, _resolve_endpoint(label.at, by_id, index, "at"))
            for index, label in enumerate(labels)
        ]

        return CompositionPlan(
            canvas,
            tuple(panels),
            tuple(bounds),
            tuple(resolved_connectors),
            tuple(resolved_labels),
        )

    def compose(
        self,
        canvas,
        placed_panels: Sequence,
        connectors: Sequence[Connector] = (),
        labels: Sequence[Label] = (),
    ) -> CompositionResult:
        """Compose panels onto a canvas.

        Parameters
        ----------
        canvas : Canvas
            The output surface.
        placed_panels : sequence of (Panel, Placement)
            Panels with their placements, in drawing order.
        connectors : sequence of Connector
            Arrows drawn over the panels.
        labels : sequence of Label
            Text drawn over the panels and connectors.

        Returns
        -------
        CompositionResult
        """
        plan = self.plan(canvas, placed_panels, connectors, labels)
        return self.draw(plan)

    def compose_grid(
        self,
        canvas,
        grid_spec,
        connectors: Sequence[Connector] = (),
        labels: Sequence[Label] = (),
    ) -> CompositionResult:
        """Arrange panels with a :class:`~geocompose.grid.GridSpec` and compose them.

        The grid's labels are drawn at the top-left corner of each cell.
        """
        placed_panels, cell_labels = self.grid_items(canvas, grid_spec)
        return self.compose(
            canvas, placed_panels, connectors, cell_labels + list(labels)
        )

    def grid_items(self, canvas, grid_spec):
        """return the (panel, placement) pairs and the cell labels of a grid"""
        placements = arrange(grid_spec, canvas)
        cell_labels = []
        for placement, text in zip(placements, grid_labels(grid_spec)):
            if text is None:
                continue
            cell_labels.append(
                Label(
                    text,
                    (placement.x_min, placement.y_max),
                    Justification.TOP_LEFT,
                    {
                        "fontsize": self.theme.label_size,
                        "fontweight": self.theme.label_weight,
                    },
                )
            )
        return list(zip(grid_spec.panels, placements)), cell_labels

    def draw(self, plan: CompositionPlan) -> CompositionResult:
        """Draw an already validated plan"""
        engine = self.render_engine
        canvas = plan.canvas
        surface = engine.new_surface(canvas)
        for panel, bounds in zip(plan.panels, plan.bounds):
            engine.draw(surface, panel, canvas, bounds)
        for connector in plan.connectors:
            engine.draw_connector(
                surface, canvas, connector.start, connector.end, **connector.style
            )
        for resolved in plan.labels:
            engine.draw_label(surface, canvas, resolved.label, resolved.point)
        artifact = engine.finalize(surface)

        logger.debug(
            f"composed {len(plan.panels)} panel(s), {len(plan.connectors)} connector(s) and {len(plan.labels)} label(s)"
        )
        return CompositionResult(
            artifact, canvas, plan.placements, plan.connectors
        )


def _resolve_endpoint(endpoint, by_id, index, field_name) -> Tuple[float, float]:
    if isinstance(endpoint, PanelAnchor):
        if endpoint.panel_id not in by_id:
            raise UnknownPanelReference(endpoint.panel_id, index=index, field=field_name)
        x, y = by_id[endpoint.panel_id].anchor_point(endpoint.anchor)
        return x + endpoint.offset[0], y + endpoint.offset[1]
    try:
        x, y = endpoint
        return float(x), float(y)
    except (TypeError, ValueError):
        raise InvalidPlacement(
            f"An endpoint must be a PanelAnchor or an (x, y) pair, got {endpoint!r}.",
            index=index,
            field=field_name,
        )
