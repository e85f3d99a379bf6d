"""
Translation of XOR clauses to plain CNF.

Short XORs are expanded directly: every assignment with the wrong parity
is excluded by one clause, 2^(m-1) clauses in all. Longer XORs are cut
with a fresh auxiliary variable a:

    x1 ^ ... ^ xm = p   becomes   x1 ^ ... ^ x(c-1) ^ a = 0
                                  a ^ xc ^ ... ^ xm = p
"""

from itertools import product

from .constraints import XorClause
from .encoding import VariableAllocator


def expand_xor(variables: list[int], parity: bool) -> list[list[int]]:
    """All clauses forbidding the assignments whose XOR is not parity."""
    if not variables:
        return [] if not parity else [[]]

    clauses = []
    for values in product((False, True), repeat=len(variables)):
        if sum(values) % 2 != int(parity):
            # Negate the forbidden assignment
            clauses.append([-v if val else v for v, val in zip(variables, values)])
    return clauses


def _cut_xor(variables: list[int], parity: bool, cutting_length: int,
             alloc: VariableAllocator, out: list[list[int]]):
    while len(variables) > cutting_length:
        aux = alloc.new_var()
        head = variables[:cutting_length - 1]
        out.extend(expand_xor(head + [aux], False))
        variables = [aux] + variables[cutting_length - 1:]
    out.extend(expand_xor(variables, parity))


def xor_clauses_to_cnf(
    xor_clauses: list[XorClause],
    sid: int,
    cutting_length: int = 4,
) -> tuple[list[list[int]], int]:
    """
    Translate XOR clauses into an equivalent set of plain clauses.

    Args:
        xor_clauses: Remaining parity constraints (typically after Gauss)
        sid: Next free variable id for auxiliaries
        cutting_length: Longest XOR expanded without an auxiliary (>= 3)

    Returns:
        Tuple of (clauses, next free variable id)
    """
    if cutting_length < 3:
        raise ValueError("cutting_length must be at least 3")

    alloc = VariableAllocator(sid)
    clauses: list[list[int]] = []
    for xor in xor_clauses:
        _cut_xor(list(xor.variables), xor.parity, cutting_length, alloc, clauses)

    return clauses, alloc.next_id
