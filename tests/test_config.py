import json

import pytest

from esop_synthesis.config import SynthesisConfig
from esop_synthesis.errors import InvalidInput


def test_defaults():
    config = SynthesisConfig()
    assert config.maximum_cubes == 10
    assert config.dump_cnf is False
    assert config.one_esop is True


def test_from_dict_ignores_unknown_keys():
    config = SynthesisConfig.from_dict({"maximum_cubes": 3, "one_esop": 0, "verbose": True})
    assert config.maximum_cubes == 3
    assert config.one_esop is False


@pytest.mark.parametrize("options", [
    {"maximum_cubes": 0},
    {"maximum_cubes": "4"},
    {"maximum_cubes": True},
    {"xor_cutting_length": 2},
    {"conflict_budget": 0},
])
def test_invalid_values(options):
    with pytest.raises(InvalidInput):
        SynthesisConfig.from_dict(options)


def test_from_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"maximum_cubes": 4, "dump_cnf": True}))
    config = SynthesisConfig.from_json(path)
    assert config.maximum_cubes == 4
    assert config.dump_cnf is True


def test_from_json_rejects_non_objects(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(InvalidInput):
        SynthesisConfig.from_json(path)

    path.write_text("{not json")
    with pytest.raises(InvalidInput):
        SynthesisConfig.from_json(path)
