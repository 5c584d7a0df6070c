# scripts/run_demo.py
import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import argparse
from pathlib import Path
import pandas as pd
from cavegen.experiments.sim import iterate, new_log, record
from cavegen.experiments.scenarios import PRESETS, FILLS, get_preset, initial_fill_factory
from cavegen.analysis.metrics import grid_metrics, metrics_from_log


def log(msg: str) -> None:
    print(f"[demo] {msg}", flush=True)


def print_map(grid) -> None:
    print("--- Current Map ---")
    for row in grid:
        print(" ".join(str(int(c)) for c in row) + " ")
    print("-------------------")


def main():
    ap = argparse.ArgumentParser(description="Cellular automaton + drunk agent map generation")
    ap.add_argument("--preset", default="reference", choices=sorted(PRESETS))
    ap.add_argument("--iterations", type=int, default=5)
    ap.add_argument("--height", type=int, default=10, help="map rows")
    ap.add_argument("--width", type=int, default=20, help="map columns")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--fill", default="empty", choices=FILLS)
    ap.add_argument("--density", type=float, default=0.45, help="occupied share for --fill noise")
    ap.add_argument("--outdir", default="outputs")
    ap.add_argument("--quiet", action="store_true", help="only print the final map")
    args = ap.parse_args()

    if args.height < 0 or args.width < 0 or args.iterations < 0:
        print("[demo] height, width and iterations must be >= 0", file=sys.stderr)
        sys.exit(2)

    ca, walk = get_preset(args.preset)
    fill = initial_fill_factory(args.fill, args.density)

    print("--- CELLULAR AUTOMATA AND DRUNK AGENT SIMULATION ---")
    rows = new_log()
    grid = None
    for t, grid, state in iterate(args.iterations, args.height, args.width, ca, walk,
                                  seed=args.seed, fill=fill):
        if t < 0:
            if not args.quiet:
                print("\nInitial map state:")
                print_map(grid)
            continue
        if not args.quiet:
            print(f"\n--- Iteration {t + 1} ---")
            print_map(grid)
        record(rows, t, grid, state)

    if args.quiet and grid is not None:
        print_map(grid)
    print("\n--- Simulation Finished ---")

    summary, df = metrics_from_log(rows)
    summary.update(grid_metrics(grid))
    OUT = Path(args.outdir); OUT.mkdir(parents=True, exist_ok=True)
    df.to_csv(OUT/f'log_{args.preset}.csv', index=False)
    pd.DataFrame([summary]).to_csv(OUT/f'summary_{args.preset}.csv', index=False)
    log(f"wrote {OUT/f'log_{args.preset}.csv'} ({summary['iterations']} iterations, "
        f"occupied={summary['occupied_fraction']:.3f}, rooms={summary['rooms']})")


if __name__ == "__main__":
    main()
