"""
main.py

Command-line entry point for the Random Seat Generator.

    python main.py                         # uses data/seat_config.json
    python main.py my_class.json --seed 42 --export output/seats.xlsx
"""

import argparse
import os
import sys
from dataclasses import replace
from typing import List, Optional
from seatgen.data_loader import load_seating_config, load_roster_csv
from seatgen.arranger import generate
from seatgen.seed import derive_seed, default_context_token, describe_seed
from seatgen.excel_exporter import ExcelExporter
from seatgen.errors import ConfigError, ArrangementUnsatisfiable

# --- Configuration ---
DATA_DIR = "data"
OUTPUT_DIR = "output"
CONFIG_FILE = os.path.join(DATA_DIR, "seat_config.json")
DEFAULT_EXPORT_FILE = os.path.join(OUTPUT_DIR, "Seat_Table.xlsx")


def _args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Random Seat Generator")
    p.add_argument("config", nargs="?", default=CONFIG_FILE, help="seating config JSON file")
    p.add_argument("--seed", default=None, help="explicit seed (integer or any text)")
    p.add_argument("--roster", default=None, help="CSV file with a Name column, replaces the config's names")
    p.add_argument("--context", default=None, help="context token used when no seed is given (default: today)")
    p.add_argument("--workers", type=int, default=1, help="threads used to evaluate attempts")
    p.add_argument("--export", nargs="?", const=DEFAULT_EXPORT_FILE, default=None,
                   help=f"write the result to .xlsx or .csv (default {DEFAULT_EXPORT_FILE})")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _args(argv)

    print("=" * 70)
    print("RANDOM SEAT GENERATOR".center(70))
    print("=" * 70)

    try:
        config = load_seating_config(args.config)
        if config is None:
            return 1

        if args.roster:
            config = replace(config, roster=tuple(load_roster_csv(args.roster)))
        if args.seed is not None:
            config = config.with_seed(args.seed)

        context = args.context or default_context_token()
        seed = derive_seed(config.seed, context)
        print(f"Seed: {seed} {describe_seed(config.seed)}")

        arrangement = generate(config, context_token=context, workers=args.workers)

    except ConfigError as e:
        print("\nFatal Error: invalid seating config:")
        for problem in e.problems:
            print(f"  - {problem}")
        return 1
    except ArrangementUnsatisfiable as e:
        print(f"\nFailed: {e}")
        print("Try another seed or relax the separation / eligibility rules.")
        for violation in e.violations:
            print(f"  - {violation}")
        return 1

    print()
    print(arrangement)

    if args.export:
        if not ExcelExporter(arrangement).export(args.export):
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
