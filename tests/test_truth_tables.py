import pytest

from esop_synthesis.errors import InvalidInput
from esop_synthesis.truth_tables import (
    TruthTable,
    bits_to_minterm,
    minterm_to_bits,
    num_vars_for_length,
)


def test_parse_normalizes_dont_cares():
    table = TruthTable.from_string("0x1*")
    assert table.bits == "0-1-"
    assert table.num_vars == 2
    assert table.care_minterms() == [0, 2]
    assert table.on_set == {2}
    assert table.dc_set == {1, 3}
    assert table.value(0) is False
    assert table.value(2) is True
    assert table.value(1) is None
    assert table.is_dont_care(3)


def test_parse_ignores_separators():
    assert TruthTable.from_string("0110 1001").bits == "01101001"
    assert TruthTable.from_string("0110_1001").num_vars == 3


@pytest.mark.parametrize("bits", ["", "011", "011001", "0110x1"])
def test_length_must_be_power_of_two(bits):
    with pytest.raises(InvalidInput):
        TruthTable.from_string(bits)


def test_invalid_symbol():
    with pytest.raises(InvalidInput, match="invalid symbol"):
        TruthTable.from_string("01a0")


def test_variable_limit():
    assert num_vars_for_length(1) == 0
    assert num_vars_for_length(1 << 32) == 32
    with pytest.raises(InvalidInput, match="32 variables"):
        num_vars_for_length(1 << 33)


@pytest.mark.parametrize("bits, expected", [
    ("0110", "6"),
    ("01101001", "69"),
    ("01", "4"),
    ("1", "8"),
    ("0", "0"),
    ("1-1-", "a"),
    ("0000000000000001", "0001"),
])
def test_hex_string(bits, expected):
    assert TruthTable.from_string(bits).hex_string() == expected


@pytest.mark.parametrize("hex_string, num_vars, bits", [
    ("6", 2, "0110"),
    ("0x69", 3, "01101001"),
    ("4", 1, "01"),
    ("0001", 4, "0000000000000001"),
])
def test_from_hex(hex_string, num_vars, bits):
    table = TruthTable.from_hex(hex_string, num_vars)
    assert table.bits == bits
    assert table.num_vars == num_vars


@pytest.mark.parametrize("hex_string, num_vars", [
    ("7", 1),     # Bits past the 2-minterm table
    ("1ff", 2),
    ("zz", 2),
    ("6", 33),
])
def test_from_hex_rejects(hex_string, num_vars):
    with pytest.raises(InvalidInput):
        TruthTable.from_hex(hex_string, num_vars)


def test_minterm_bits_roundtrip():
    assert minterm_to_bits(6, 3) == (0, 1, 1)
    assert bits_to_minterm((0, 1, 1)) == 6
