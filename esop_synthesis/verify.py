"""
Verification of synthesized ESOPs against their truth table.

Ensures each ESOP reproduces every specified output; don't cares are skipped.
"""

from .cube import Esop
from .solver import SynthesisResult
from .truth_tables import TruthTable, minterm_to_bits


def verify_esop(table: TruthTable, esop: Esop) -> tuple[bool, list[str]]:
    """
    Check an ESOP on every care minterm of a table.

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []

    for minterm in table.care_minterms():
        expected = table.value(minterm)
        actual = esop.evaluate(minterm)

        if actual != expected:
            errors.append(
                f"minterm {minterm}: expected {int(expected)}, got {int(actual)}"
            )

    return len(errors) == 0, errors


def verify_result(table: TruthTable, result: SynthesisResult) -> tuple[bool, list[str]]:
    """Verify every ESOP of a result; messages are prefixed with its index."""
    errors = []
    for i, esop in enumerate(result.esops):
        _, esop_errors = verify_esop(table, esop)
        errors.extend(f"ESOP {i}, {msg}" for msg in esop_errors)

    return len(errors) == 0, errors


def print_truth_table_comparison(table: TruthTable, esop: Esop) -> bool:
    """Print the table next to the ESOP's outputs."""
    n = table.num_vars
    print("Truth Table Verification")
    print("=" * 40)
    print(f"{'Minterm':>7} | {'bits':>{max(n, 4)}} | Expected | Actual | Match")
    print("-" * 40)

    all_match = True

    for minterm in range(table.num_minterms):
        bits = "".join(str(b) for b in reversed(minterm_to_bits(minterm, n)))
        expected = table.bits[minterm]
        actual = "1" if esop.evaluate(minterm) else "0"

        if expected == "-":
            match_str = "-"
        elif expected == actual:
            match_str = "."
        else:
            match_str = "X"
            all_match = False

        print(f"{minterm:>7} | {bits:>{max(n, 4)}} | {expected:>8} | {actual:>6} | {match_str}")

    print("-" * 40)
    print(f"All correct: {all_match}")
    return all_match
