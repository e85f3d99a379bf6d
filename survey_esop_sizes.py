#!/usr/bin/env python3
"""
Minimum ESOP size of every Boolean function of n inputs.
Runs one exact synthesis per function in parallel and prints a histogram.
"""

import argparse
import multiprocessing as mp
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
import sys
import time

from esop_synthesis.config import SynthesisConfig
from esop_synthesis.solver import ExactESOPSynthesizer
from esop_synthesis.truth_tables import TruthTable
from esop_synthesis.verify import verify_esop


def table_for(index: int, num_vars: int) -> str:
    """Truth table string of the index-th function (minterm 0 = LSB of index)."""
    return "".join(str((index >> m) & 1) for m in range(1 << num_vars))


def try_function(args):
    """Synthesize one function. Run in separate process."""
    bits, max_cubes = args
    table = TruthTable.from_string(bits)
    config = SynthesisConfig(maximum_cubes=max_cubes)

    try:
        result = ExactESOPSynthesizer(table, config).synthesize()
    except Exception as e:
        return bits, None, f"Error: {e}"

    if not result.found:
        return bits, None, "NOT FOUND"

    esop = result.esops[0]
    valid, errors = verify_esop(table, esop)
    if not valid:
        return bits, None, f"INVALID - {errors[0]}"
    return bits, len(esop), esop.to_expr_str()


def main():
    parser = argparse.ArgumentParser(description="Survey minimum ESOP sizes")
    parser.add_argument("num_vars", type=int, nargs="?", default=3,
                        help="Number of inputs (default: 3)")
    parser.add_argument("--max-cubes", type=int, default=10)
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print every function's ESOP")
    args = parser.parse_args()

    if not 0 <= args.num_vars <= 3:
        print("Only n <= 3 is practical (2^(2^n) functions)", file=sys.stderr)
        return 1

    num_functions = 1 << (1 << args.num_vars)

    print("=" * 60)
    print(f"Exact ESOP sizes of all {num_functions} functions of {args.num_vars} inputs")
    print("=" * 60)
    print(f"Using {mp.cpu_count()} CPU cores")
    print()

    start_time = time.time()
    sizes = Counter()
    failures = []

    jobs = [(table_for(i, args.num_vars), args.max_cubes) for i in range(num_functions)]

    with ProcessPoolExecutor(max_workers=mp.cpu_count()) as executor:
        futures = {executor.submit(try_function, job): job for job in jobs}

        for future in as_completed(futures):
            bits, size, status = future.result()
            if size is None:
                failures.append((bits, status))
                print(f"  {bits}: {status}")
                continue

            sizes[size] += 1
            if args.verbose:
                print(f"  {bits}: {size} cubes  f = {status}")

    elapsed = time.time() - start_time

    print()
    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"Search time: {elapsed:.1f} seconds")
    print()
    print(f"{'Cubes':>5} | Functions")
    print("-" * 20)
    for size in sorted(sizes):
        print(f"{size:>5} | {sizes[size]}")

    if failures:
        print(f"\n{len(failures)} function(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
