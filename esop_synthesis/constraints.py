"""
Constraint system for "the table equals the XOR of k cubes".

The system holds plain clauses and XOR clauses. XOR clauses are simplified
by gauss.py and translated to CNF by xor_cnf.py before solving.
"""

import logging
from dataclasses import dataclass, field

from pysat.formula import CNF

from .encoding import VariableAllocator, VariableEncoding
from .truth_tables import TruthTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class XorClause:
    """XOR of the variables must equal parity."""

    variables: tuple[int, ...]
    parity: bool


@dataclass
class ConstraintSystem:
    """Conjunction of plain clauses and XOR clauses."""

    clauses: list[list[int]] = field(default_factory=list)
    xor_clauses: list[XorClause] = field(default_factory=list)
    unsatisfiable: bool = False  # Set when a pass proves there is no model

    def add_clause(self, clause: list[int]):
        self.clauses.append(list(clause))

    def add_xor_clause(self, variables: list[int], parity: bool):
        self.xor_clauses.append(XorClause(tuple(variables), bool(parity)))

    def to_cnf(self) -> CNF:
        """Plain clauses as a PySAT formula (XOR clauses must be translated first)."""
        return CNF(from_clauses=self.clauses)


def build_constraints(table: TruthTable, num_cubes: int) -> tuple[ConstraintSystem, int]:
    """
    Encode "table == XOR of num_cubes cubes" for one bound k.

    For each care minterm m and slot j, Z(m, j) is pinned to "slot j covers m":
    - Z(m, j) -> no literal of slot j contradicts m
    - Z(m, j) or some literal of slot j contradicts m
    and the XOR of Z(m, 0..k-1) must equal the table value at m.

    Args:
        table: Function to represent
        num_cubes: Number of cube slots k

    Returns:
        Tuple of (constraint system, next free variable id)
    """
    n = table.num_vars
    k = num_cubes
    enc = VariableEncoding(n, k)
    care = table.care_minterms()
    enc.check_capacity(len(care))

    system = ConstraintSystem()
    alloc = VariableAllocator(enc.first_free_id)

    for sample, minterm in enumerate(care):
        z_vars = alloc.new_vars(k)
        assert z_vars[0] == enc.z(sample, 0)

        for j, z in enumerate(z_vars):
            for l in range(n):
                if (minterm >> l) & 1:
                    system.add_clause([-z, -enc.q(j, l)])
                else:
                    system.add_clause([-z, -enc.p(j, l)])

        for j, z in enumerate(z_vars):
            clause = [z]
            for l in range(n):
                if (minterm >> l) & 1:
                    clause.append(enc.q(j, l))
                else:
                    clause.append(enc.p(j, l))
            system.add_clause(clause)

        system.add_xor_clause(z_vars, table.value(minterm))

    logger.debug(
        "k=%d: %d clauses, %d xor clauses over %d care minterms",
        k, len(system.clauses), len(system.xor_clauses), len(care),
    )
    return system, alloc.next_id
