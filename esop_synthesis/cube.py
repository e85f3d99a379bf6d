"""
Cube and ESOP value types.

A cube is represented by its mask and polarity:
- mask: which variables appear in the product term (1 = appears)
- polarity: for variables that appear, 1 = positive literal, 0 = negated

Variable l is bit l of a minterm index, so x0 is the LSB.
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable, Iterator, Optional

from .errors import InvalidInput


@total_ordering
@dataclass(frozen=True)
class Cube:
    """A product term over up to 32 input variables."""

    mask: int = 0       # Which variables appear
    polarity: int = 0   # Positive literals among them

    def __post_init__(self):
        if self.mask < 0 or self.polarity < 0:
            raise InvalidInput("cube bits must be non-negative")
        if self.polarity & ~self.mask:
            raise InvalidInput(
                f"polarity {self.polarity:#x} sets variables outside mask {self.mask:#x}"
            )

    @classmethod
    def from_literals(cls, literals: Iterable[tuple[int, bool]]) -> "Cube":
        """Build a cube from (variable index, is positive) pairs."""
        mask = 0
        polarity = 0
        for var, positive in literals:
            bit = 1 << var
            if mask & bit and bool(polarity & bit) != positive:
                raise InvalidInput(f"variable {var} given with both polarities")
            mask |= bit
            if positive:
                polarity |= bit
        return cls(mask=mask, polarity=polarity)

    @property
    def num_literals(self) -> int:
        """Weight of the cube: the number of literals it mentions."""
        return bin(self.mask).count('1')

    @property
    def literals(self) -> list[tuple[int, bool]]:
        """(variable, is positive) pairs in variable order."""
        result = []
        var = 0
        mask = self.mask
        while mask:
            if mask & 1:
                result.append((var, bool((self.polarity >> var) & 1)))
            mask >>= 1
            var += 1
        return result

    def covers(self, minterm: int) -> bool:
        """Check if this cube evaluates to 1 on a given minterm."""
        return (minterm & self.mask) == self.polarity

    def sort_key(self) -> tuple[int, int, int]:
        return (self.num_literals, self.mask, self.polarity)

    def __lt__(self, other):
        if not isinstance(other, Cube):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_expr_str(self, var_names: Optional[list[str]] = None) -> str:
        """Convert to a product-term string such as ``x0'x2``."""
        literals = []
        for var, positive in self.literals:
            name = var_names[var] if var_names else f"x{var}"
            literals.append(name if positive else f"{name}'")

        return "".join(literals) if literals else "1"

    def __repr__(self):
        return f"Cube({self.to_expr_str()})"


@dataclass(frozen=True)
class Esop:
    """
    Exclusive-or sum of products: the parity of its cubes.

    Cube order is kept as given; two ESOPs that differ only by cube
    order compare unequal until both are canonicalized.
    """

    cubes: tuple[Cube, ...] = ()

    def __post_init__(self):
        # Accept any iterable of cubes
        object.__setattr__(self, "cubes", tuple(self.cubes))

    def __len__(self) -> int:
        return len(self.cubes)

    def __iter__(self) -> Iterator[Cube]:
        return iter(self.cubes)

    def __getitem__(self, index: int) -> Cube:
        return self.cubes[index]

    @property
    def num_literals(self) -> int:
        return sum(c.num_literals for c in self.cubes)

    def evaluate(self, minterm: int) -> bool:
        """Parity of the cubes covering the minterm."""
        value = False
        for cube in self.cubes:
            if cube.covers(minterm):
                value = not value
        return value

    def canonical(self) -> "Esop":
        """The same ESOP with cubes sorted by weight, then literal content."""
        return Esop(tuple(sorted(self.cubes)))

    def to_expr_str(self, var_names: Optional[list[str]] = None) -> str:
        """Render as ``x0'x1 ^ x0x1'``; the empty ESOP is ``0``."""
        if not self.cubes:
            return "0"
        return " ^ ".join(c.to_expr_str(var_names) for c in self.cubes)

    def __repr__(self):
        return f"Esop({self.to_expr_str()})"
