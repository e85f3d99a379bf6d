"""
Gauss-Jordan elimination over GF(2) for XOR clauses.

Each XOR clause becomes a row: an int bitset over variable ids plus a
parity bit. The reduced system has the same solutions as the input.
"""

import logging
from typing import Optional

from .constraints import XorClause

logger = logging.getLogger(__name__)


def _to_row(xor: XorClause) -> tuple[int, int]:
    bits = 0
    for v in xor.variables:
        # x ^ x = 0, so a repeated variable drops out
        bits ^= 1 << v
    return bits, int(xor.parity)


def _from_row(bits: int, parity: int) -> XorClause:
    variables = []
    v = 0
    while bits:
        if bits & 1:
            variables.append(v)
        bits >>= 1
        v += 1
    return XorClause(tuple(variables), bool(parity))


def gauss_elimination(xor_clauses: list[XorClause]) -> Optional[list[XorClause]]:
    """
    Reduce a system of XOR clauses to reduced row echelon form.

    Rows that become 0 = 0 are dropped.

    Args:
        xor_clauses: The parity sub-system

    Returns:
        Equivalent, reduced XOR clauses, or None if some row reduced to
        0 = 1 (the system is unsatisfiable)
    """
    pivots: list[tuple[int, int, int]] = []  # (pivot bit, bits, parity)

    for xor in xor_clauses:
        bits, parity = _to_row(xor)
        for pivot, p_bits, p_parity in pivots:
            if bits & pivot:
                bits ^= p_bits
                parity ^= p_parity

        if not bits:
            if parity:
                logger.debug("xor system is inconsistent")
                return None
            continue

        pivot = bits & -bits  # Lowest set bit
        # Keep the system fully reduced: clear the new pivot from earlier rows
        for i, (q, q_bits, q_parity) in enumerate(pivots):
            if q_bits & pivot:
                pivots[i] = (q, q_bits ^ bits, q_parity ^ parity)
        pivots.append((pivot, bits, parity))

    reduced = [_from_row(bits, parity) for _, bits, parity in pivots]
    logger.debug("gauss: %d xor clauses -> %d", len(xor_clauses), len(reduced))
    return reduced
