"""
Exact ESOP synthesis by bounded SAT search.

For k = 1, 2, ... the question "is the table the XOR of k cubes?" is
encoded as SAT (see constraints.py). The first k with a model gives the
minimum number of cubes; optionally every ESOP of that size is enumerated
by blocking each model under all permutations of the cube slots.
"""

import logging
from dataclasses import dataclass, field
from itertools import permutations
from pathlib import Path
from typing import Optional, Union

from pysat.solvers import Solver

from .cnf_writer import cnf_filename, write_dimacs
from .config import SynthesisConfig
from .constraints import ConstraintSystem, build_constraints
from .cube import Cube, Esop
from .encoding import VariableEncoding
from .errors import SolverFailure
from .gauss import gauss_elimination
from .symmetry import break_slot_symmetries
from .truth_tables import TruthTable
from .xor_cnf import xor_clauses_to_cnf

logger = logging.getLogger(__name__)


@dataclass
class BoundStats:
    """What happened while searching with k cubes."""

    num_cubes: int
    num_clauses: int = 0       # Clauses handed to the solver
    num_xor_clauses: int = 0   # XOR clauses left after Gauss elimination
    num_variables: int = 0
    solutions: int = 0
    cnf_file: Optional[str] = None

    @property
    def satisfiable(self) -> bool:
        return self.solutions > 0


@dataclass
class SynthesisResult:
    """Result of exact ESOP synthesis."""

    esops: list[Esop]
    num_cubes: Optional[int]   # Minimum k, or None if the bound was exhausted
    bounds: list[BoundStats] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.esops)


@dataclass(frozen=True)
class DecodedSlot:
    """One cube slot read back from a model."""

    cube: Optional[Cube]
    canceled: bool  # Both literals of some variable set: slot is inactive


def decode_slot(model: set[int], enc: VariableEncoding, j: int) -> DecodedSlot:
    """Read slot j's literals from the positive literals of a model."""
    literals = []
    for l in range(enc.num_vars):
        p_value = enc.p(j, l) in model
        q_value = enc.q(j, l) in model

        if p_value and q_value:
            return DecodedSlot(cube=None, canceled=True)
        elif p_value:
            literals.append((l, True))
        elif q_value:
            literals.append((l, False))

    return DecodedSlot(cube=Cube.from_literals(literals), canceled=False)


def extract_esop(model: set[int], enc: VariableEncoding) -> Esop:
    """Decode a model into the ESOP of its active slots, in slot order."""
    cubes = []
    for j in range(enc.num_cubes):
        slot = decode_slot(model, enc, j)
        if not slot.canceled:
            cubes.append(slot.cube)
    return Esop(tuple(cubes))


def blocking_clauses(model: set[int], enc: VariableEncoding) -> list[list[int]]:
    """
    One clause per permutation of the slots, each excluding the model's
    P/Q assignment with slot j moved to slot perm[j].
    """
    clauses = []
    n = enc.num_vars
    for perm in permutations(range(enc.num_cubes)):
        clause = []
        for j, target in enumerate(perm):
            for l in range(n):
                p_var, q_var = enc.p(target, l), enc.q(target, l)
                clause.append(-p_var if enc.p(j, l) in model else p_var)
                clause.append(-q_var if enc.q(j, l) in model else q_var)
        clauses.append(clause)
    return clauses


class ExactESOPSynthesizer:
    """
    Minimum-cube ESOP synthesis for one truth table.

    Uses:
    1. Clause + XOR encoding of "table == XOR of k cubes"
    2. Gauss elimination and XOR cutting to reach plain CNF
    3. Lex-leader symmetry breaking over cube slots
    4. Incremental SAT with permutation blocking for enumeration
    """

    def __init__(self, table: Union[TruthTable, str], config: Optional[SynthesisConfig] = None):
        if isinstance(table, str):
            table = TruthTable.from_string(table)
        self.table = table
        self.config = config if config is not None else SynthesisConfig()

    def synthesize(self) -> SynthesisResult:
        """
        Search k = 1 .. maximum_cubes and return the ESOPs of the first k
        that admits any.

        Returns:
            SynthesisResult; its esops list is empty if no ESOP exists
            within the bound
        """
        # No ON minterm: the empty ESOP (constant false) needs no cube slot,
        # and a 0-input table could not express it by canceling a slot
        if not self.table.on_set:
            logger.info("table has no ON minterm, returning the empty ESOP")
            return SynthesisResult(esops=[Esop()], num_cubes=0, bounds=[])

        bounds = []
        for k in range(1, self.config.maximum_cubes + 1):
            logger.info("bounded synthesis for k = %d", k)
            stats = BoundStats(num_cubes=k)
            bounds.append(stats)

            esops = self._search_bound(k, stats)
            if esops:
                logger.info("found %d ESOP(s) with %d cubes", len(esops), k)
                return SynthesisResult(esops=esops, num_cubes=k, bounds=bounds)

        logger.info("no ESOP with at most %d cubes", self.config.maximum_cubes)
        return SynthesisResult(esops=[], num_cubes=None, bounds=bounds)

    def _prepare(self, k: int, stats: BoundStats) -> ConstraintSystem:
        """Build, simplify and translate the constraints for k to plain CNF."""
        system, sid = build_constraints(self.table, k)

        reduced = gauss_elimination(system.xor_clauses)
        if reduced is None:
            system.unsatisfiable = True
            return system
        system.xor_clauses = reduced
        stats.num_xor_clauses = len(reduced)

        xor_cnf, sid = xor_clauses_to_cnf(reduced, sid, self.config.xor_cutting_length)
        system.clauses.extend(xor_cnf)
        system.xor_clauses = []

        if self.config.symmetry_breaking:
            enc = VariableEncoding(self.table.num_vars, k)
            system.clauses, sid = break_slot_symmetries(system.clauses, enc.slot_rows(), sid)

        stats.num_clauses = len(system.clauses)
        stats.num_variables = sid - 1

        if self.config.dump_cnf:
            stats.cnf_file = self._dump(system, k)

        return system

    def _dump(self, system: ConstraintSystem, k: int) -> str:
        path = Path(self.config.dump_directory) / cnf_filename(self.table, k)
        logger.info("write CNF file %s", path)
        write_dimacs(system.clauses, path, comments=[
            f"c exact ESOP synthesis for 0x{self.table.hex_string()}",
            f"c {self.table.num_vars} inputs, {k} cubes",
        ])
        return str(path)

    def _solve(self, solver: Solver) -> bool:
        if self.config.conflict_budget is None:
            return solver.solve()

        solver.conf_budget(self.config.conflict_budget)
        status = solver.solve_limited()
        if status is None:
            raise SolverFailure(
                f"solver gave up after {self.config.conflict_budget} conflicts"
            )
        return status

    def _search_bound(self, k: int, stats: BoundStats) -> list[Esop]:
        system = self._prepare(k, stats)
        if system.unsatisfiable:
            logger.debug("k=%d: xor system inconsistent", k)
            return []

        enc = VariableEncoding(self.table.num_vars, k)
        esops = []

        with Solver(name=self.config.solver_name, bootstrap_with=system.clauses) as solver:
            while self._solve(solver):
                model = {lit for lit in solver.get_model() if lit > 0}
                esop = extract_esop(model, enc)
                stats.solutions += 1

                # Constant false is the global minimum whenever it is reachable
                if not esop:
                    return [esop]

                esop = esop.canonical()
                if self.config.one_esop:
                    return [esop]

                esops.append(esop)
                logger.debug("k=%d: solution %d: %s", k, len(esops), esop.to_expr_str())

                blocking = blocking_clauses(model, enc)
                logger.debug("k=%d: adding %d blocking clauses", k, len(blocking))
                for clause in blocking:
                    solver.add_clause(clause)

        return esops

    def print_result(self, result: SynthesisResult):
        """Pretty-print a synthesis result."""
        print(f"\n{'=' * 60}")
        print(f"Exact ESOP synthesis: {self.table.bits}")
        print(f"{'=' * 60}")

        for stats in result.bounds:
            status = f"{stats.solutions} solution(s)" if stats.satisfiable else "UNSAT"
            print(f"  k = {stats.num_cubes}: {stats.num_clauses} clauses, "
                  f"{stats.num_variables} variables -> {status}")

        if not result.found:
            print(f"\nNo ESOP with at most {self.config.maximum_cubes} cubes")
            return

        print(f"\nMinimum cubes: {result.num_cubes}")
        for i, esop in enumerate(result.esops):
            print(f"  [{i}] f = {esop.to_expr_str()}  ({esop.num_literals} literals)")


def exact_synthesis_from_binary_string(binary: str, config=None) -> list[Esop]:
    """
    Compute minimum-cube ESOPs for a table given as a binary string.

    Args:
        binary: Table string, one character per minterm ('0', '1', '-')
        config: SynthesisConfig, a mapping of config keys, or None

    Returns:
        List of ESOPs (empty if none exists within maximum_cubes)
    """
    if config is None:
        config = SynthesisConfig()
    elif isinstance(config, dict):
        config = SynthesisConfig.from_dict(config)

    return ExactESOPSynthesizer(TruthTable.from_string(binary), config).synthesize().esops
