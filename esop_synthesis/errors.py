"""Exception types raised by the ESOP synthesis core."""


class ESOPError(Exception):
    """Base class for all synthesis errors."""


class InvalidInput(ESOPError, ValueError):
    """Truth table or configuration rejected before any constraint is built."""


class EncodingOverflow(ESOPError, OverflowError):
    """Constraint-variable ids would leave the solver's literal range."""


class SolverFailure(ESOPError, RuntimeError):
    """The SAT solver stopped without a satisfiable/unsatisfiable answer."""
