import pytest
from hypothesis import given, settings, strategies as st, HealthCheck

import esop_synthesis.solver as solver_module
from esop_synthesis.config import SynthesisConfig
from esop_synthesis.cube import Cube, Esop
from esop_synthesis.encoding import VariableEncoding
from esop_synthesis.errors import InvalidInput, SolverFailure
from esop_synthesis.solver import (
    ExactESOPSynthesizer,
    blocking_clauses,
    decode_slot,
    exact_synthesis_from_binary_string,
    extract_esop,
)
from esop_synthesis.truth_tables import TruthTable
from esop_synthesis.verify import verify_esop, verify_result

X0 = Cube.from_literals([(0, True)])
X1 = Cube.from_literals([(1, True)])
NX0 = Cube.from_literals([(0, False)])
NX1 = Cube.from_literals([(1, False)])
NX0_X1 = Cube.from_literals([(0, False), (1, True)])
X0_NX1 = Cube.from_literals([(0, True), (1, False)])


def synthesize(bits, **options):
    table = TruthTable.from_string(bits)
    return ExactESOPSynthesizer(table, SynthesisConfig(**options)).synthesize()


# --- decoding -------------------------------------------------------------

def test_decode_slot_literals_and_cancel():
    enc = VariableEncoding(num_vars=3, num_cubes=2)
    model = {
        enc.p(0, 0), enc.q(0, 2),   # slot 0: x0 x2'
        enc.p(1, 1), enc.q(1, 1),   # slot 1: both literals on x1
    }
    slot0 = decode_slot(model, enc, 0)
    assert not slot0.canceled
    assert slot0.cube == Cube.from_literals([(0, True), (2, False)])

    slot1 = decode_slot(model, enc, 1)
    assert slot1.canceled
    assert slot1.cube is None

    assert extract_esop(model, enc) == Esop((slot0.cube,))


def test_extract_keeps_slot_order():
    enc = VariableEncoding(num_vars=2, num_cubes=2)
    model = {enc.p(0, 1), enc.q(1, 0)}
    assert extract_esop(model, enc).cubes == (X1, NX0)


def test_blocking_covers_every_permutation():
    enc = VariableEncoding(num_vars=2, num_cubes=3)
    model = {enc.p(0, 0), enc.q(2, 1)}
    clauses = blocking_clauses(model, enc)
    assert len(clauses) == 6
    assert all(len(c) == 2 * 2 * 3 for c in clauses)

    # Identity permutation negates the model itself
    identity = set(clauses[0])
    assert -enc.p(0, 0) in identity
    assert -enc.q(2, 1) in identity
    assert enc.p(1, 0) in identity


# --- bound search ---------------------------------------------------------

def test_xor_needs_two_cubes():
    result = synthesize("0110")
    assert result.num_cubes == 2
    assert len(result.esops) == 1
    assert [b.satisfiable for b in result.bounds] == [False, True]

    esop = result.esops[0]
    assert len(esop) == 2
    assert verify_esop(TruthTable.from_string("0110"), esop)[0]


@pytest.mark.parametrize("symmetry_breaking", [True, False])
def test_xor_enumerates_all_minimal_esops(symmetry_breaking):
    result = synthesize("0110", one_esop=False, symmetry_breaking=symmetry_breaking)
    found = {frozenset(e.cubes) for e in result.esops}
    assert found == {
        frozenset({X0, X1}),
        frozenset({NX0, NX1}),
        frozenset({NX0_X1, X0_NX1}),
    }
    assert len(result.esops) == 3
    # Canonical cube order
    assert all(e == e.canonical() for e in result.esops)


def test_bound_exhausted_is_empty_result():
    result = synthesize("0110", maximum_cubes=1)
    assert result.esops == []
    assert result.num_cubes is None
    assert not result.found
    assert len(result.bounds) == 1


@pytest.mark.parametrize("one_esop", [True, False])
@pytest.mark.parametrize("bits", ["0", "00", "0000", "00000000"])
def test_constant_false_is_empty_esop(bits, one_esop):
    result = synthesize(bits, one_esop=one_esop, maximum_cubes=1)
    assert result.esops == [Esop()]
    assert result.num_cubes == 0


def test_constant_true():
    assert synthesize("1").esops == [Esop((Cube(),))]
    assert synthesize("1111").esops == [Esop((Cube(),))]


def test_all_dont_care_needs_no_search(monkeypatch):
    monkeypatch.setattr(solver_module, "Solver", None)
    result = synthesize("----")
    assert result.esops == [Esop()]
    assert result.bounds == []


def test_zeros_and_dont_cares_give_empty_esop():
    assert synthesize("0-0-", one_esop=False).esops == [Esop()]


def test_three_input_parity_needs_three_cubes():
    result = synthesize("01101001", maximum_cubes=3)
    assert result.num_cubes == 3
    assert verify_result(TruthTable.from_string("01101001"), result)[0]


def test_dont_cares_can_shrink_the_answer():
    # With minterms 2 and 3 free the table is just x0
    assert synthesize("01--").num_cubes == 1
    assert synthesize("0110").num_cubes == 2


def test_invalid_input_fails_before_solving(monkeypatch):
    def explode(*args, **kwargs):
        raise AssertionError("solver must not be invoked")

    monkeypatch.setattr(solver_module, "Solver", explode)
    with pytest.raises(InvalidInput):
        exact_synthesis_from_binary_string("011")
    with pytest.raises(InvalidInput):
        ExactESOPSynthesizer("01x01")


def test_solver_budget_exhaustion_raises(monkeypatch):
    class GivesUp:
        def __init__(self, name=None, bootstrap_with=None):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def conf_budget(self, budget):
            self.budget = budget

        def solve_limited(self):
            return None

    monkeypatch.setattr(solver_module, "Solver", GivesUp)
    with pytest.raises(SolverFailure):
        synthesize("0110", conflict_budget=10)


def test_conflict_budget_with_real_solver():
    result = synthesize("0110", conflict_budget=100000)
    assert result.num_cubes == 2


def test_dump_cnf_writes_one_file_per_bound(tmp_path):
    result = synthesize("0110", dump_cnf=True, dump_directory=str(tmp_path))
    assert sorted(p.name for p in tmp_path.iterdir()) == ["0x6-1.cnf", "0x6-2.cnf"]
    assert result.bounds[1].cnf_file == str(tmp_path / "0x6-2.cnf")

    text = (tmp_path / "0x6-2.cnf").read_text()
    assert text.startswith("c ")
    header = next(line for line in text.splitlines() if line.startswith("p cnf"))
    _, _, num_vars, num_clauses = header.split()
    assert int(num_clauses) == result.bounds[1].num_clauses


def test_encoding_is_deterministic(tmp_path):
    first = tmp_path / "a"
    second = tmp_path / "b"
    synthesize("0110", dump_cnf=True, dump_directory=str(first))
    synthesize("0110", dump_cnf=True, dump_directory=str(second))
    assert (first / "0x6-2.cnf").read_text() == (second / "0x6-2.cnf").read_text()


def test_entry_point_accepts_config_mapping():
    esops = exact_synthesis_from_binary_string("0110", {"one_esop": False, "maximum_cubes": 4})
    assert len(esops) == 3
    assert exact_synthesis_from_binary_string("0110", {"maximum_cubes": 1}) == []


# --- properties -----------------------------------------------------------

tables = st.integers(1, 3).flatmap(
    lambda n: st.text(alphabet="01-", min_size=1 << n, max_size=1 << n)
)


@settings(max_examples=30, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(bits=tables)
def test_results_are_correct_and_minimal(bits):
    table = TruthTable.from_string(bits)
    result = synthesize(bits)
    assert result.found

    ok, errors = verify_result(table, result)
    assert ok, errors

    k = result.num_cubes
    if k and k > 1:
        assert not synthesize(bits, maximum_cubes=k - 1).found


@settings(max_examples=20, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(bits=st.integers(1, 2).flatmap(
    lambda n: st.text(alphabet="01-", min_size=1 << n, max_size=1 << n)
))
def test_enumeration_is_permutation_distinct(bits):
    table = TruthTable.from_string(bits)
    result = synthesize(bits, one_esop=False)
    assert verify_result(table, result)[0]

    canonical = [e.canonical() for e in result.esops]
    assert len(set(canonical)) == len(canonical)
    assert len({len(e) for e in result.esops}) == 1
