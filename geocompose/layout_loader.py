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
Read compositions from YAML layout files.

YAML format:

.. code-block:: yaml

    canvas:
      mode: absolute_data_space        # or relative_unit_square (default)
      xlim: [0, 3.3]
      ylim: [0, 1]
      width: 9.9                       # inches; height is derived on an absolute canvas

    theme:                             # optional, see geocompose.config.Theme
      gridlines: true

    panels:
      contiguous:
        layers:
          - file: states.gpkg          # relative to the layout file
            style: {facecolor: lightgrey, edgecolor: black}
        projection: {name: AlbersEqualArea, central_longitude: -96}
        extent: [-125, -66, 22, 50]    # lon_min, lon_max, lat_min, lat_max
        lock_aspect: true              # default when the map has a projection or layers
        placement: {x_min: 0, x_max: 2.3, y_min: 0, y_max: 1}
      alaska:
        layers:
          - file: alaska.gpkg
        projection: {name: AlbersEqualArea, central_longitude: -154, standard_parallels: [55, 65]}
        placement: {x: 0.05, y: 0.05, width: 0.26, height: 0.3, justification: bottom_left}

    grid:                              # optional, instead of per-panel placements
      panels: [contiguous, alaska]
      row_count: 1
      relative_sizes: [2.3, 1]
      labels: AUTO

    connectors:
      - start: {panel: alaska, anchor: right}
        end: [0.5, 0.5]
        style: {arrowstyle: "->"}

    labels:
      - text: "United States"
        at: [0.5, 0.98]
        justification: top

Panels listed in the grid are drawn first, in grid order, then the panels with their own
placement, in file order.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

import cartopy.crs as ccrs
import yaml

from .canvas import Canvas, CoordinateMode
from .compositor import Compositor, Connector, Label, PanelAnchor
from .config import DEFAULT_THEME, Theme
from .grid import GridSpec
from .mapping.map_content import MapContent, MapLayer
from .panel import Panel
from .placement import AbsolutePlacement, RelativePlacement

logger = logging.getLogger("geocompose")

ABSOLUTE_KEYS = ("x_min", "x_max", "y_min", "y_max")
RELATIVE_KEYS = ("x", "y", "width", "height")


@dataclass
class Layout:
    """A composition read from a layout file"""

    canvas: Canvas
    panels: List[Panel]
    placements: dict = field(default_factory=dict)
    grid: Optional[GridSpec] = None
    connectors: List[Connector] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    theme: Theme = DEFAULT_THEME

    def compositor(self, render_engine=None) -> Compositor:
        return Compositor(render_engine, theme=self.theme)

    def items(self, compositor):
        """return the (panel, placement) pairs and all the labels, in drawing order"""
        placed_panels = []
        labels = []
        if self.grid is not None:
            placed_panels, labels = compositor.grid_items(self.canvas, self.grid)
        for panel in self.panels:
            if panel.panel_id in self.placements:
                placed_panels.append((panel, self.placements[panel.panel_id]))
        return placed_panels, labels + list(self.labels)

    def plan(self, compositor=None):
        compositor = compositor if compositor is not None else self.compositor()
        placed_panels, labels = self.items(compositor)
        return compositor.plan(self.canvas, placed_panels, self.connectors, labels)

    def compose(self, compositor=None):
        compositor = compositor if compositor is not None else self.compositor()
        placed_panels, labels = self.items(compositor)
        return compositor.compose(self.canvas, placed_panels, self.connectors, labels)


def load_layout(path) -> Layout:
    """Load a layout from a YAML file. Layer files are looked up relative to the layout file."""
    with open(path, "rt") as f:
        text = f.read()
    return load_layout_string(text, base_dir=os.path.dirname(os.path.abspath(path)))


def load_layout_string(text, base_dir=None) -> Layout:
    """Load a layout from a YAML string.

    Raises
    ------
    ValueError
        If the layout is malformed. The message names the offending key.
    """
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("A layout must be a YAML mapping.")
    base_dir = base_dir if base_dir is not None else os.getcwd()

    canvas = parse_canvas(_section(data, "canvas", dict, required=True))
    theme = Theme.from_dict(_section(data, "theme", dict))

    panel_data = _section(data, "panels", dict, required=True)
    panels = []
    placements = {}
    for panel_id, cfg in panel_data.items():
        cfg = cfg or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"panels.{panel_id}: expected a mapping.")
        panels.append(parse_panel(str(panel_id), cfg, base_dir, theme, canvas))
        if "placement" in cfg:
            placements[str(panel_id)] = parse_placement(
                cfg["placement"], f"panels.{panel_id}.placement"
            )

    by_id = {p.panel_id: p for p in panels}
    grid = None
    if "grid" in data:
        grid = parse_grid(_section(data, "grid", dict), by_id)
        in_both = [pid for pid in placements if pid in {p.panel_id for p in grid.panels}]
        if in_both:
            raise ValueError(
                f"Panel(s) {', '.join(in_both)} have a placement and are also in the grid."
            )
    elif not placements:
        raise ValueError("The layout has neither a grid nor any panel placement.")

    unplaced = [
        p.panel_id
        for p in panels
        if p.panel_id not in placements
        and (grid is None or p not in grid.panels)
    ]
    if unplaced:
        logger.warning(
            f"Panel(s) {', '.join(unplaced)} have no placement and will not be drawn."
        )

    connectors = []
    for i, c in enumerate(_section(data, "connectors", list) or []):
        if not isinstance(c, dict):
            raise ValueError(f"connectors[{i}]: expected a mapping with 'start' and 'end'.")
        for key in ("start", "end"):
            if key not in c:
                raise ValueError(f"connectors[{i}]: missing '{key}'.")
        connectors.append(
            Connector(
                parse_endpoint(c["start"], f"connectors[{i}].start"),
                parse_endpoint(c["end"], f"connectors[{i}].end"),
                dict(c.get("style") or {}),
            )
        )
    labels = []
    for i, l in enumerate(_section(data, "labels", list) or []):
        if not isinstance(l, dict):
            raise ValueError(f"labels[{i}]: expected a mapping with 'text' and 'at'.")
        for key in ("text", "at"):
            if key not in l:
                raise ValueError(f"labels[{i}]: missing '{key}'.")
        labels.append(
            Label(
                str(l["text"]),
                parse_endpoint(l["at"], f"labels[{i}].at"),
                l.get("justification", "top_left"),
                dict(l.get("style") or {}),
            )
        )

    return Layout(canvas, panels, placements, grid, connectors, labels, theme)


def parse_canvas(data) -> Canvas:
    mode = CoordinateMode(data.get("mode", CoordinateMode.RELATIVE_UNIT_SQUARE.value))
    width = data.get("width")
    height = data.get("height")
    if mode is CoordinateMode.ABSOLUTE_DATA_SPACE:
        if "xlim" not in data or "ylim" not in data:
            raise ValueError("canvas: an absolute_data_space canvas needs xlim and ylim.")
        return Canvas.absolute(data["xlim"], data["ylim"], width, height)
    if width is None or height is None:
        raise ValueError("canvas: a relative_unit_square canvas needs width and height.")
    return Canvas.relative(width, height)


def parse_projection(cfg):
    """build a cartopy projection from a class name, or from a mapping with a "name" and the projection's arguments"""
    if cfg is None:
        return None
    if isinstance(cfg, str):
        name, kwargs = cfg, {}
    else:
        kwargs = dict(cfg)
        name = kwargs.pop("name", None)
    projection_class = getattr(ccrs, str(name), None)
    if not (isinstance(projection_class, type) and issubclass(projection_class, ccrs.Projection)):
        raise ValueError(f"Unknown Cartopy projection: {name!r}.")
    if "standard_parallels" in kwargs:
        kwargs["standard_parallels"] = tuple(kwargs["standard_parallels"])
    return projection_class(**kwargs)


def parse_panel(panel_id, cfg, base_dir, theme=DEFAULT_THEME, canvas=None) -> Panel:
    """build a panel. Map panels keep their printed aspect ratio on `canvas`, an explicit
    "aspect_ratio" is given in canvas units."""
    layers = []
    for i, layer in enumerate(cfg.get("layers") or []):
        if "file" not in layer:
            raise ValueError(f"panels.{panel_id}.layers[{i}]: missing 'file'.")
        path = layer["file"]
        if not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        layers.append(MapLayer.read(path, **(layer.get("style") or {})))

    projection = parse_projection(cfg.get("projection"))
    extent = cfg.get("extent")
    if extent is not None and len(extent) != 4:
        raise ValueError(f"panels.{panel_id}.extent: expected four numbers.")

    panel_theme = theme
    if cfg.get("theme"):
        panel_theme = Theme.from_dict({**dataclasses.asdict(theme), **cfg["theme"]})

    if not layers and projection is None and extent is None:
        return Panel(panel_id, None, cfg.get("aspect_ratio"), panel_theme)

    content = MapContent(layers, projection, extent, cfg.get("title"))
    panel = content.to_panel(
        panel_id,
        lock_aspect=cfg.get("lock_aspect", True),
        theme=panel_theme,
        canvas=canvas,
    )
    if "aspect_ratio" in cfg:
        panel = panel.with_aspect_ratio(cfg["aspect_ratio"])
    return panel


def parse_placement(cfg, where):
    if not isinstance(cfg, dict):
        raise ValueError(f"{where}: expected a mapping.")
    kwargs = {}
    if "justification" in cfg:
        kwargs["justification"] = cfg["justification"]
    if all(k in cfg for k in ABSOLUTE_KEYS):
        return AbsolutePlacement(*(cfg[k] for k in ABSOLUTE_KEYS), **kwargs)
    if all(k in cfg for k in RELATIVE_KEYS):
        return RelativePlacement(*(cfg[k] for k in RELATIVE_KEYS), **kwargs)
    raise ValueError(
        f"{where}: expected either {', '.join(ABSOLUTE_KEYS)} or {', '.join(RELATIVE_KEYS)}."
    )


def parse_grid(cfg, by_id) -> GridSpec:
    ids = cfg.get("panels") or []
    missing = [pid for pid in ids if pid not in by_id]
    if missing:
        raise ValueError(f"grid.panels: unknown panel(s) {', '.join(map(str, missing))}.")
    return GridSpec(
        [by_id[pid] for pid in ids],
        row_count=cfg.get("row_count"),
        column_count=cfg.get("column_count"),
        relative_sizes=cfg.get("relative_sizes"),
        alignment=cfg.get("alignment", "none"),
        labels=cfg.get("labels"),
    )


def parse_endpoint(cfg, where):
    if isinstance(cfg, dict):
        if "panel" not in cfg:
            raise ValueError(f"{where}: missing 'panel'.")
        return PanelAnchor(
            str(cfg["panel"]),
            cfg.get("anchor", "center"),
            tuple(cfg.get("offset", (0.0, 0.0))),
        )
    if isinstance(cfg, (list, tuple)) and len(cfg) == 2:
        return float(cfg[0]), float(cfg[1])
    raise ValueError(f"{where}: expected a [x, y] point or a mapping with a 'panel'.")


def _section(data, key, kind, required=False):
    if key not in data or data[key] is None:
        if required:
            raise ValueError(f"The layout has no '{key}' section.")
        return None
    if not isinstance(data[key], kind):
        raise ValueError(f"{key}: expected a {'mapping' if kind is dict else 'list'}.")
    return data[key]
