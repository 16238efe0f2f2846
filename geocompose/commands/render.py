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

import argparse
import logging

from ..export import export
from ..layout_loader import load_layout

logger = logging.getLogger("geocompose")

help_str = "Compose the panels of a layout file and save the result."

__description__ = f"""{help_str}

Example usage: 
    - geocompose render usa.yaml -o usa.pdf
    - geocompose render usa.yaml -o usa.png --dpi 150
"""


def add_parser(subparser):
    """add 'render' command line argument parser"""
    render_cmd = subparser.add_parser(
        "render",
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    render_cmd.set_defaults(func=run_render)
    render_cmd.add_argument("layout", type=str, help="the YAML layout file")
    render_cmd.add_argument(
        "-o", "--output", type=str, dest="output", required=True, help="output file"
    )
    render_cmd.add_argument(
        "-f",
        "--format",
        type=str,
        dest="format",
        default=None,
        help="output format (default: from the output file extension)",
    )
    render_cmd.add_argument("--dpi", type=float, dest="dpi", default=300)


def run_render(args):
    layout = load_layout(args.layout)
    logger.debug(f"layout {args.layout}: {len(layout.panels)} panel(s)")
    result = layout.compose()
    export(result, args.format, args.output, dpi=args.dpi)
    print(f"Done! The composition has been saved to {args.output}.")
