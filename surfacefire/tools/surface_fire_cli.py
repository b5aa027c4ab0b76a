"""Command-line surface fire calculation.

Usage::

    python -m surfacefire.tools.surface_fire_cli --config run.cfg [--target ros_head] [--all]
"""
import argparse
import sys

import pandas as pd

from surfacefire.calculator.blending import SurfaceFireCalculator
from surfacefire.exceptions import SurfaceFireError
from surfacefire.utilities.config_loader import load_surface_params

SUMMARY = (
    "ros_head", "ros_vector", "ros_back", "ros_flank", "head_dir_from_upslope",
    "effective_wind", "wind_limit_exceeded", "lw_ratio", "reaction_intensity",
    "heat_per_unit_area", "fli_head", "flame_head", "flame_vector",
    "fire_area", "fire_perimeter",
)


def results_table(calc: SurfaceFireCalculator, names) -> pd.DataFrame:
    rows = []
    for name in names:
        q = calc.registry.get(name)
        if q.items is not None:
            rows.append({"quantity": name, "value": q.active_label(), "unit": ""})
        else:
            rows.append({"quantity": name, "value": q.display_value, "unit": q.display_unit})
    return pd.DataFrame(rows)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute surface fire behavior for one or two fuel models")
    parser.add_argument("--config", type=str, help="Path to .cfg file")
    parser.add_argument("--target", type=str, default=None,
                        help="Compute only what this quantity depends on")
    parser.add_argument("--all", action="store_true", help="Print every computed quantity")
    parser.add_argument("--trace-folder", type=str, default=None,
                        help="Write a parquet trace of every step to this folder")

    args = parser.parse_args(argv)

    if not args.config:
        parser.error("No configuration file provided. Use --config to specify a .cfg file.")

    print(f"Loading surface fire params from {args.config}...")
    try:
        params = load_surface_params(args.config)
        if args.trace_folder is not None:
            params.trace_folder = args.trace_folder

        calc = SurfaceFireCalculator(params)
        values = calc.evaluate(args.target)
    except SurfaceFireError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.target is not None:
        names = [args.target]
    elif args.all:
        names = list(values)
    else:
        names = [n for n in SUMMARY if n in values]

    print(results_table(calc, names).to_string(index=False))

    trace_file = calc.trace.finish()
    if trace_file is not None:
        print(f"Trace written to {trace_file}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
