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

from ..layout_loader import load_layout

help_str = "Validate a layout file and print where each panel goes, without drawing anything."

__description__ = f"""{help_str}

Example usage: 
    - geocompose check usa.yaml
"""


def add_parser(subparser):
    """add 'check' command line argument parser"""
    check_cmd = subparser.add_parser(
        "check",
        help=help_str,
        add_help=True,
        description=__description__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    check_cmd.set_defaults(func=run_check)
    check_cmd.add_argument("layout", type=str, help="the YAML layout file")


def run_check(args):
    plan = load_layout(args.layout).plan()
    canvas = plan.canvas
    print()
    print(
        f"Canvas: {canvas.coordinate_mode.value}, xlim={canvas.xlim}, ylim={canvas.ylim}, "
        + f"{canvas.width:g} x {canvas.height:g} in"
    )
    print()
    print("Panels:")
    for panel_id, bounds in plan.placements:
        print(
            f"    {panel_id}: x=[{bounds.x_min:.4g}, {bounds.x_max:.4g}] y=[{bounds.y_min:.4g}, {bounds.y_max:.4g}]"
        )
    if plan.connectors:
        print()
        print("Connectors:")
        for c in plan.connectors:
            print(f"    ({c.start[0]:.4g}, {c.start[1]:.4g}) -> ({c.end[0]:.4g}, {c.end[1]:.4g})")
    print()
