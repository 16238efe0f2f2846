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
Explicit styling configuration.

A :class:`Theme` is passed to each :class:`~geocompose.panel.Panel` when it is created.
There is no process-wide "active theme": two panels in the same composition may carry
different themes, and a panel without a theme is drawn with :data:`DEFAULT_THEME`.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Optional

import yaml

logger = logging.getLogger("geocompose")


@dataclass(frozen=True)
class Theme:
    """Styling applied to a panel's axes by the render engine.

    Parameters
    ----------
    background : str, default "white"
        The face colour of the panel.
    frame_color : str, default "black"
        The colour of the panel border.
    frame_linewidth : float, default 0.8
        The width of the panel border. Use 0 to hide the border.
    gridlines : bool, default False
        Draw graticules (map panels) or grid lines (plain panels).
    gridline_color : str, default "0.8"
    font_size : float, default 9.0
        Size of tick labels and legends.
    title_size : float, default 11.0
    label_size : float, default 14.0
        Size of the sub-figure labels ("A", "B", ...).
    label_weight : str, default "bold"
    """

    background: str = "white"
    frame_color: str = "black"
    frame_linewidth: float = 0.8
    gridlines: bool = False
    gridline_color: str = "0.8"
    font_size: float = 9.0
    title_size: float = 11.0
    label_size: float = 14.0
    label_weight: str = "bold"

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        """create a Theme from a dictionary, such as a "theme" section of a layout file"""
        if not data:
            return cls()
        names = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - names)
        if unknown:
            raise ValueError(
                f"Unknown theme setting(s): {', '.join(unknown)}. Valid settings are: {', '.join(sorted(names))}."
            )
        return cls(**data)

    def replace(self, **changes):
        """return a copy of this theme with some settings changed"""
        return dataclasses.replace(self, **changes)


DEFAULT_THEME = Theme()

# bare map panels, like ggplot2's theme_void()
VOID_THEME = Theme(frame_linewidth=0.0, gridlines=False)


def load_theme(path) -> Theme:
    """load a Theme from a YAML file.

    The file may either contain the theme settings at the top level or in a "theme" section.
    """
    with open(path, "rt") as f:
        data = yaml.safe_load(f.read()) or {}
    if "theme" in data and isinstance(data["theme"], dict):
        data = data["theme"]
    logger.debug(f"theme loaded from {path}: {data}")
    return Theme.from_dict(data)
