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

import logging
import os

logger = logging.getLogger("geocompose")


def supported_formats(result):
    """return the file formats the composition's figure can be saved as, e.g. ["eps", "pdf", "png", ...]"""
    return sorted(result.artifact.canvas.get_supported_filetypes().keys())


def export(result, format, path, dpi=300, **kwargs):
    """Save a composition result to a file.

    Parameters
    ----------
    result : CompositionResult
        The result of :meth:`Compositor.compose`.
    format : str or None
        The file format, such as "pdf" or "png". If None, it is taken from the extension of `path`.
    path : str or path-like
        The output file.
    dpi : float, default 300
        Resolution used for raster formats.
    **kwargs :
        Passed on to `matplotlib.figure.Figure.savefig`, e.g. ``transparent=True``.
    """
    if format is None:
        format = os.path.splitext(os.fspath(path))[1]
    format = str(format).lower().lstrip(".")
    if not format:
        raise ValueError(
            f"Unable to tell the output format of {path}. Give the format explicitly."
        )
    formats = supported_formats(result)
    if format not in formats:
        raise ValueError(
            f"Unsupported output format '{format}'. Supported formats are: {', '.join(formats)}."
        )

    result.artifact.savefig(path, format=format, dpi=dpi, **kwargs)
    logger.info(f"The composition has been saved to {path}.")
