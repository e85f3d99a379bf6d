"""Command-line interface for exact ESOP synthesis."""

import argparse
import logging
import sys

from .config import SynthesisConfig
from .errors import EncodingOverflow, InvalidInput
from .export import to_equations, to_pla, to_verilog
from .log import set_level
from .solver import ExactESOPSynthesizer
from .truth_tables import TruthTable, print_truth_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute minimum-cube ESOPs of a Boolean function",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  esop-synth 0110                 XOR of two inputs
  esop-synth 01-1 --all           Enumerate all minimal ESOPs
  esop-synth 6 --hex 2            Same table as 0110, given in hex
  esop-synth 0110 --dump-cnf      Also write 0x6-<k>.cnf for every k
  esop-synth 0110 --format pla    Output as ESOP-PLA
        """,
    )

    parser.add_argument(
        "table",
        help="Truth table, minterm 0 first ('0', '1', '-' per minterm)",
    )
    parser.add_argument(
        "--hex",
        type=int,
        metavar="NUM_VARS",
        help="Read TABLE as a hex string over NUM_VARS inputs",
    )
    parser.add_argument(
        "--config",
        help="JSON file with synthesis options (command-line flags override it)",
    )
    parser.add_argument(
        "--max-cubes",
        type=int,
        help="Upper bound on the number of cubes (default: 10)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Enumerate all minimal ESOPs instead of stopping at the first",
    )
    parser.add_argument(
        "--dump-cnf",
        action="store_true",
        help="Write the CNF of every bound to 0x<hex>-<k>.cnf",
    )
    parser.add_argument(
        "--dump-dir",
        help="Directory for --dump-cnf files (default: current directory)",
    )
    parser.add_argument(
        "--solver",
        help="PySAT solver name (default: glucose4)",
    )
    parser.add_argument(
        "--no-symmetry-breaking",
        action="store_true",
        help="Do not order cube slots lexicographically",
    )
    parser.add_argument(
        "--truth-table",
        action="store_true",
        help="Print the parsed truth table and exit",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "equations", "pla", "verilog"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser


def load_config(args) -> SynthesisConfig:
    """Merge the --config file with command-line overrides."""
    data = {}
    if args.config:
        data = vars(SynthesisConfig.from_json(args.config))

    if args.max_cubes is not None:
        data["maximum_cubes"] = args.max_cubes
    if args.all:
        data["one_esop"] = False
    if args.dump_cnf:
        data["dump_cnf"] = True
    if args.dump_dir:
        data["dump_directory"] = args.dump_dir
    if args.solver:
        data["solver_name"] = args.solver
    if args.no_symmetry_breaking:
        data["symmetry_breaking"] = False

    return SynthesisConfig.from_dict(data)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_level(logging.INFO)

    try:
        if args.hex is not None:
            table = TruthTable.from_hex(args.table, args.hex)
        else:
            table = TruthTable.from_string(args.table)

        if args.truth_table:
            print_truth_table(table)
            return 0

        config = load_config(args)
        solver = ExactESOPSynthesizer(table, config)
        result = solver.synthesize()
    except (InvalidInput, EncodingOverflow) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not result.found:
        print(f"No ESOP with at most {config.maximum_cubes} cubes", file=sys.stderr)
        return 1

    if args.format == "pla":
        print("\n\n".join(to_pla(esop, table.num_vars) for esop in result.esops))
    elif args.format == "verilog":
        print("\n\n".join(
            to_verilog(esop, table.num_vars, module_name=f"esop_{i}")
            for i, esop in enumerate(result.esops)
        ))
    elif args.format == "equations":
        print(to_equations(result))
    else:
        solver.print_result(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
