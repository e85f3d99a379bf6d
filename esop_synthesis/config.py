"""
Configuration for exact ESOP synthesis.

The recognized keys match the JSON configuration of the original tool
(``maximum_cubes``, ``dump_cnf``, ``one_esop``); the remaining fields
tune the SAT pipeline.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from .errors import InvalidInput

logger = logging.getLogger(__name__)


@dataclass
class SynthesisConfig:
    """Options for the bound-search driver."""

    maximum_cubes: int = 10        # Upper bound on k
    dump_cnf: bool = False         # Write each k's clause set before solving
    one_esop: bool = True          # Stop at the first minimal ESOP
    dump_directory: str = "."      # Where 0x<hex>-<k>.cnf files go
    solver_name: str = "glucose4"  # Any pysat.solvers.SolverNames entry
    symmetry_breaking: bool = True
    xor_cutting_length: int = 4    # Longest XOR expanded without an auxiliary
    conflict_budget: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise InvalidInput for values the driver cannot work with."""
        if isinstance(self.maximum_cubes, bool) or not isinstance(self.maximum_cubes, int):
            raise InvalidInput(f"maximum_cubes must be an integer, got {self.maximum_cubes!r}")
        if self.maximum_cubes < 1:
            raise InvalidInput(f"maximum_cubes must be positive, got {self.maximum_cubes}")
        if self.xor_cutting_length < 3:
            raise InvalidInput("xor_cutting_length must be at least 3")
        if self.conflict_budget is not None and self.conflict_budget < 1:
            raise InvalidInput("conflict_budget must be positive when set")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SynthesisConfig":
        """
        Build a config from a mapping, ignoring keys it does not know.

        Args:
            data: Mapping such as a parsed JSON object

        Returns:
            Validated configuration
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key in known:
                kwargs[key] = value
            else:
                logger.debug("ignoring unknown config key %r", key)

        for key in ("dump_cnf", "one_esop", "symmetry_breaking"):
            if key in kwargs:
                kwargs[key] = bool(kwargs[key])

        return cls(**kwargs)

    @classmethod
    def from_json(cls, path) -> "SynthesisConfig":
        """Load a config from a JSON file holding one object."""
        try:
            data = json.loads(Path(path).read_text())
        except json.JSONDecodeError as e:
            raise InvalidInput(f"{path}: not valid JSON ({e})") from e
        if not isinstance(data, dict):
            raise InvalidInput(f"{path}: expected a JSON object")
        return cls.from_dict(data)
