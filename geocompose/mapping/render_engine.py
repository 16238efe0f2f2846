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

from abc import ABC, abstractmethod


class RenderEngine(ABC):
    """Abstract base class for drawing compositions.
    Do not use this base class directly. Use subclasses instead, such as :class:`CartopyRenderEngine`.

    The compositor calls :meth:`new_surface` once, then :meth:`draw` for each panel in order,
    :meth:`draw_connector` for each connector, :meth:`draw_label` for each label and finally
    :meth:`finalize`, whose return value becomes the artifact of the composition result.
    All coordinates passed to the engine are canvas coordinates.
    """

    def render(self, content):
        """Return an intrinsic (width, height) size hint of the content, or None if it has none"""
        return None

    @abstractmethod
    def new_surface(self, canvas):
        """Create an empty drawing surface for the canvas (abstract method)"""
        pass  # This is an abstract method, no implementation here.

    @abstractmethod
    def draw(self, surface, panel, canvas, bounds):
        """Draw the panel's content into the bounds rectangle (abstract method)"""
        pass  # This is an abstract method, no implementation here.

    @abstractmethod
    def draw_connector(self, surface, canvas, start, end, **style):
        """Draw an arrow between two points (abstract method)"""
        pass  # This is an abstract method, no implementation here.

    @abstractmethod
    def draw_label(self, surface, canvas, label, point):
        """Draw a text label at a point (abstract method)"""
        pass  # This is an abstract method, no implementation here.

    def finalize(self, surface):
        """Return the finished artifact"""
        return surface
