"""Exact minimum-cube ESOP synthesis using SAT."""

from .config import SynthesisConfig
from .cube import Cube, Esop
from .errors import ESOPError, EncodingOverflow, InvalidInput, SolverFailure
from .export import to_equations, to_pla, to_verilog
from .log import get_logger
from .solver import (
    ExactESOPSynthesizer,
    SynthesisResult,
    BoundStats,
    exact_synthesis_from_binary_string,
)
from .truth_tables import TruthTable
from .verify import verify_esop, verify_result

__all__ = [
    "SynthesisConfig",
    "Cube",
    "Esop",
    "ESOPError",
    "EncodingOverflow",
    "InvalidInput",
    "SolverFailure",
    "to_equations",
    "to_pla",
    "to_verilog",
    "get_logger",
    "ExactESOPSynthesizer",
    "SynthesisResult",
    "BoundStats",
    "exact_synthesis_from_binary_string",
    "TruthTable",
    "verify_esop",
    "verify_result",
]
__version__ = "0.1.0"
