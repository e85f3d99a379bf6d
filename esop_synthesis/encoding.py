"""
Variable encoding for a k-cube ESOP over n inputs.

Ids are laid out contiguously so the same (n, k, table) always yields the
same CNF:

    1 .. n*k              P(j, l)  slot j has the positive literal x_l
    n*k+1 .. 2*n*k        Q(j, l)  slot j has the negative literal x_l'
    2*n*k+1 ..            Z(m, j)  slot j covers care minterm m, k per minterm
    after that            auxiliaries from XOR cutting and symmetry breaking

A slot with both P(j, l) and Q(j, l) set is canceled (it covers nothing).
"""

from dataclasses import dataclass

from .errors import EncodingOverflow

# Largest variable id PySAT's solvers accept (signed 32-bit literals)
MAX_VARIABLE_ID = 2**31 - 1


@dataclass
class VariableAllocator:
    """Next free constraint-variable id, passed explicitly between passes."""

    next_id: int = 1

    def new_var(self) -> int:
        v = self.next_id
        if v > MAX_VARIABLE_ID:
            raise EncodingOverflow(f"variable id {v} exceeds {MAX_VARIABLE_ID}")
        self.next_id += 1
        return v

    def new_vars(self, count: int) -> list[int]:
        return [self.new_var() for _ in range(count)]


@dataclass(frozen=True)
class VariableEncoding:
    """Maps (slot, variable, polarity) to SAT variable ids."""

    num_vars: int    # n
    num_cubes: int   # k

    def p(self, j: int, l: int) -> int:
        """Slot j has a positive literal on variable l."""
        return 1 + self.num_vars * j + l

    def q(self, j: int, l: int) -> int:
        """Slot j has a negative literal on variable l."""
        return 1 + self.num_vars * self.num_cubes + self.num_vars * j + l

    @property
    def first_free_id(self) -> int:
        """First id after the P/Q block, where Z variables start."""
        return 1 + 2 * self.num_vars * self.num_cubes

    def z(self, sample: int, j: int) -> int:
        """Z id for slot j of the sample-th care minterm (0-based)."""
        return self.first_free_id + sample * self.num_cubes + j

    def check_capacity(self, num_care_minterms: int):
        """Raise EncodingOverflow if the P/Q and Z blocks cannot be numbered."""
        last_id = self.first_free_id - 1 + num_care_minterms * self.num_cubes
        if last_id > MAX_VARIABLE_ID:
            raise EncodingOverflow(
                f"{self.num_vars} inputs with {self.num_cubes} cubes need "
                f"{last_id} variables, more than {MAX_VARIABLE_ID}"
            )

    def allocator(self) -> VariableAllocator:
        return VariableAllocator(self.first_free_id)

    def slot_row(self, j: int) -> list[int]:
        """All P ids of slot j followed by all Q ids."""
        return ([self.p(j, l) for l in range(self.num_vars)]
                + [self.q(j, l) for l in range(self.num_vars)])

    def slot_rows(self) -> list[list[int]]:
        return [self.slot_row(j) for j in range(self.num_cubes)]
