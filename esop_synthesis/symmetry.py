"""
Symmetry breaking over interchangeable cube slots.

Permuting the cube slots of a model (together with the slots' Z variables
and the XOR auxiliaries they determine) gives another model, so we may
require the slot rows to be lexicographically non-decreasing. Exactly one
ordering of each set of rows survives, so satisfiability and the set of
ESOPs up to cube order are both kept.
"""

import logging

from .encoding import VariableAllocator

logger = logging.getLogger(__name__)


def lex_leq(a: list[int], b: list[int], alloc: VariableAllocator) -> list[list[int]]:
    """
    Clauses for a <=lex b, comparing bit vectors from the first position.

    e_i means "a and b agree on positions < i"; e_0 is implicitly true.
    """
    if len(a) != len(b):
        raise ValueError("rows must have equal length")

    clauses = []
    eq = None
    for i, (x, y) in enumerate(zip(a, b)):
        guard = [] if eq is None else [-eq]
        # Equal prefix: a_i <= b_i
        clauses.append(guard + [-x, y])

        if i + 1 == len(a):
            break
        nxt = alloc.new_var()
        # Equal prefix and a_i == b_i -> equal prefix up to i+1
        clauses.append(guard + [-x, -y, nxt])
        clauses.append(guard + [x, y, nxt])
        eq = nxt
    return clauses


def break_slot_symmetries(
    clauses: list[list[int]],
    rows: list[list[int]],
    sid: int,
) -> tuple[list[list[int]], int]:
    """
    Add lex-leader clauses ordering consecutive slot rows.

    Args:
        clauses: Current clause set (not modified)
        rows: Variable ids of each interchangeable slot, same length each
        sid: Next free variable id

    Returns:
        Tuple of (augmented clauses, next free variable id)
    """
    alloc = VariableAllocator(sid)
    extra = []
    for a, b in zip(rows, rows[1:]):
        if a:
            extra.extend(lex_leq(a, b, alloc))

    logger.debug("symmetry breaking: %d clauses over %d slots", len(extra), len(rows))
    return clauses + extra, alloc.next_id
