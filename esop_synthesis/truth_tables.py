"""
Truth tables for single-output Boolean functions.

A table is a string of 2^n characters, one per minterm:
- '1' = ON, '0' = OFF, '-' (or 'x', 'X', '*') = don't care

Character i is the output for minterm i, and input variable l is bit l
of i. For n = 2:

    minterm | x1 x0 | "0110"
    --------+-------+-------
       0    |  0  0 |   0
       1    |  0  1 |   1
       2    |  1  0 |   1
       3    |  1  1 |   0
"""

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidInput

# The cube bitsets and the encoding both assume at most 32 inputs
MAX_VARIABLES = 32

DONT_CARE_SYMBOLS = frozenset("-xX*")


def num_vars_for_length(length: int) -> int:
    """
    Derive the number of input variables from a table length.

    Raises:
        InvalidInput: if the length is not a power of two or needs more
            than MAX_VARIABLES inputs
    """
    if length <= 0 or length & (length - 1):
        raise InvalidInput(f"table length {length} is not a power of 2")
    num_vars = length.bit_length() - 1
    if num_vars > MAX_VARIABLES:
        raise InvalidInput(
            f"cube data structure cannot store more than {MAX_VARIABLES} variables "
            f"(table needs {num_vars})"
        )
    return num_vars


@dataclass(frozen=True)
class TruthTable:
    """Read-only, possibly incompletely-specified truth table."""

    bits: str
    num_vars: int

    @classmethod
    def from_string(cls, binary: str) -> "TruthTable":
        """Parse a table such as ``"01-1"``; whitespace and underscores are ignored."""
        cleaned = "".join(ch for ch in binary if not ch.isspace() and ch != "_")
        num_vars = num_vars_for_length(len(cleaned))

        normalized = []
        for i, ch in enumerate(cleaned):
            if ch in "01":
                normalized.append(ch)
            elif ch in DONT_CARE_SYMBOLS:
                normalized.append("-")
            else:
                raise InvalidInput(f"invalid symbol {ch!r} at minterm {i}")

        return cls(bits="".join(normalized), num_vars=num_vars)

    @classmethod
    def from_hex(cls, hex_string: str, num_vars: int) -> "TruthTable":
        """
        Parse a completely-specified table from hex, as printed by hex_string().

        The first hex digit holds minterms 0-3, with minterm 0 in its MSB.
        """
        if not 0 <= num_vars <= MAX_VARIABLES:
            raise InvalidInput(f"num_vars must be in [0, {MAX_VARIABLES}], got {num_vars}")
        digits = hex_string[2:] if hex_string.lower().startswith("0x") else hex_string
        try:
            value = int(digits, 16)
        except ValueError as e:
            raise InvalidInput(f"{hex_string!r} is not a hex string") from e

        length = 1 << num_vars
        width = max(length, 4)
        if value >> width:
            raise InvalidInput(f"{hex_string!r} has more than {length} bits")
        binary = format(value, f"0{width}b")
        if length < 4:
            # Short tables are left-aligned inside the single digit
            if int(binary[length:], 2):
                raise InvalidInput(f"{hex_string!r} has more than {length} bits")
            binary = binary[:length]
        return cls(bits=binary, num_vars=num_vars)

    @property
    def num_minterms(self) -> int:
        return len(self.bits)

    def value(self, minterm: int) -> Optional[bool]:
        """Output at a minterm, or None for don't care."""
        ch = self.bits[minterm]
        if ch == "-":
            return None
        return ch == "1"

    def is_dont_care(self, minterm: int) -> bool:
        return self.bits[minterm] == "-"

    def care_minterms(self) -> list[int]:
        """Minterms with a specified output, in increasing order."""
        return [m for m, ch in enumerate(self.bits) if ch != "-"]

    @property
    def on_set(self) -> set[int]:
        return {m for m, ch in enumerate(self.bits) if ch == "1"}

    @property
    def dc_set(self) -> set[int]:
        return {m for m, ch in enumerate(self.bits) if ch == "-"}

    def hex_string(self) -> str:
        """
        Hex form of the table used in CNF file names.

        Don't cares read as 0; tables shorter than 4 bits are padded on
        the right to one digit.
        """
        binary = "".join("1" if ch == "1" else "0" for ch in self.bits)
        if len(binary) < 4:
            binary = binary.ljust(4, "0")
        return format(int(binary, 2), f"0{len(binary) // 4}x")

    def __str__(self):
        return self.bits


def minterm_to_bits(minterm: int, num_vars: int) -> tuple[int, ...]:
    """Convert a minterm index to its bits (x0, x1, ...)."""
    return tuple((minterm >> l) & 1 for l in range(num_vars))


def bits_to_minterm(bits: tuple[int, ...]) -> int:
    """Convert bits (x0, x1, ...) back to a minterm index."""
    return sum(bit << l for l, bit in enumerate(bits))


def print_truth_table(table: TruthTable):
    """Print the table one minterm per row, highest variable first."""
    n = table.num_vars
    header = " ".join(f"x{l}" for l in reversed(range(n)))
    print(f"{'Minterm':>7} | {header} | f")
    print("-" * (14 + 3 * n))

    for m in range(table.num_minterms):
        bits = minterm_to_bits(m, n)
        row = " ".join(f"{b:>2}" for b in reversed(bits))
        print(f"{m:>7} | {row} | {table.bits[m]}")
