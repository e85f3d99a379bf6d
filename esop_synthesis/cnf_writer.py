"""Writing clause sets as DIMACS CNF files."""

from pathlib import Path
from typing import Optional

from pysat.formula import CNF

from .truth_tables import TruthTable


def cnf_filename(table: TruthTable, num_cubes: int) -> str:
    """File name for the CNF of bound k: ``0x<hex>-<k>.cnf``."""
    return f"0x{table.hex_string()}-{num_cubes}.cnf"


def write_dimacs(clauses: list[list[int]], path, comments: Optional[list[str]] = None):
    """
    Write clauses in DIMACS format through PySAT.

    Args:
        clauses: Plain clauses over positive variable ids
        path: Output file path; parent directories are created
        comments: Comment lines, each starting with 'c'
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    formula = CNF(from_clauses=clauses)
    formula.to_file(str(path), comments=comments)
