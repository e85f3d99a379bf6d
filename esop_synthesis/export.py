"""
Export synthesized ESOPs to various formats (equations, PLA, Verilog).
"""

from typing import Optional

from .cube import Cube, Esop
from .solver import SynthesisResult


def default_var_names(num_vars: int) -> list[str]:
    return [f"x{l}" for l in range(num_vars)]


def to_equations(result: SynthesisResult, var_names: Optional[list[str]] = None) -> str:
    """
    Export synthesis result as Boolean equations, one per ESOP.

    Args:
        result: The synthesis result
        var_names: Names for x0, x1, ...

    Returns:
        Human-readable XOR-of-products equations
    """
    lines = []
    lines.append("Exact ESOP Equations")
    if not result.found:
        lines.append("No ESOP found within the cube bound")
        return "\n".join(lines)

    lines.append(f"Cubes: {result.num_cubes}")
    lines.append(f"Solutions: {len(result.esops)}")
    lines.append("")

    for i, esop in enumerate(result.esops):
        lines.append(f"  f{i} = {esop.to_expr_str(var_names)}")

    return "\n".join(lines)


def cube_to_pla(cube: Cube, num_vars: int) -> str:
    """PLA input plane for a cube, x0 first: '1', '0' or '-' per variable."""
    chars = []
    for l in range(num_vars):
        bit = 1 << l
        if cube.mask & bit:
            chars.append("1" if cube.polarity & bit else "0")
        else:
            chars.append("-")
    return "".join(chars)


def to_pla(esop: Esop, num_vars: int) -> str:
    """
    Export an ESOP in ESOP-PLA format (``.type esop``).

    Args:
        esop: The ESOP
        num_vars: Number of inputs

    Returns:
        PLA text with one product term per line
    """
    lines = []
    lines.append(f".i {num_vars}")
    lines.append(".o 1")
    lines.append(f".ilb {' '.join(default_var_names(num_vars))}")
    lines.append(".ob f")
    lines.append(f".p {len(esop)}")
    lines.append(".type esop")
    for cube in esop:
        lines.append(f"{cube_to_pla(cube, num_vars)} 1")
    lines.append(".e")
    return "\n".join(lines)


def cube_to_verilog(cube: Cube, var_names: list[str]) -> str:
    """Convert a cube to a Verilog expression."""
    terms = []
    for var, positive in cube.literals:
        terms.append(var_names[var] if positive else f"~{var_names[var]}")

    if not terms:
        return "1'b1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_verilog(esop: Esop, num_vars: int, module_name: str = "esop") -> str:
    """
    Export an ESOP as a Verilog module with input bus x and output f.

    Args:
        esop: The ESOP
        num_vars: Number of inputs
        module_name: Name for the Verilog module

    Returns:
        Verilog source code as string
    """
    var_names = [f"x[{l}]" for l in range(num_vars)]

    lines = []
    lines.append(f"// Exact ESOP with {len(esop)} cubes, {esop.num_literals} literals")
    lines.append("")
    lines.append(f"module {module_name} (")
    if num_vars:
        lines.append(f"    input  wire [{num_vars - 1}:0] x,")
    lines.append("    output wire f")
    lines.append(");")
    lines.append("")

    terms = [cube_to_verilog(cube, var_names) for cube in esop]
    expr = " ^ ".join(terms) if terms else "1'b0"
    lines.append(f"    assign f = {expr};")
    lines.append("")
    lines.append("endmodule")

    return "\n".join(lines)
