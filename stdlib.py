"""
Arbor Standard Library
Integer operators and the print primitive
"""

from typing import Callable, Dict
import operator

from utilities import binary_arithmetic_op, binary_comparison_op
from error_handling import ArborArithmeticError


# ============================================================================
# PRINT FUNCTIONS
# ============================================================================

def format_print_line(value: int) -> str:
  """Render a printed value the way the PRINT statement shows it"""
  return f"> {value}"


def stdout_sink(line: str) -> None:
  """Default output sink: one line on standard output"""
  print(line, flush=True)


def arbor_print(value: int, output: Callable[[str], None] = stdout_sink) -> int:
  """Emit a value through the output sink; printing always yields 0"""
  output(format_print_line(value))
  return 0


# ============================================================================
# ARITHMETIC
# ============================================================================

arbor_add = binary_arithmetic_op(operator.add)
arbor_sub = binary_arithmetic_op(operator.sub)
arbor_mul = binary_arithmetic_op(operator.mul)


def arbor_div(x: int, y: int) -> int:
  """Integer division truncating toward zero; division by zero is fatal"""
  if y == 0:
    raise ArborArithmeticError(
        f"Division by zero: {x} / 0", node_type="OPERATION")
  quotient = abs(x) // abs(y)
  return quotient if (x < 0) == (y < 0) else -quotient


# ============================================================================
# COMPARISON
# ============================================================================

arbor_eq = binary_comparison_op(operator.eq)
arbor_ne = binary_comparison_op(operator.ne)
arbor_lt = binary_comparison_op(operator.lt)
arbor_gt = binary_comparison_op(operator.gt)


# ============================================================================
# OPERATOR REGISTRY
# ============================================================================

ARITHMETIC_OPERATORS: Dict[str, Callable[[int, int], int]] = {
    '+': arbor_add,
    '-': arbor_sub,
    '*': arbor_mul,
    '/': arbor_div,
}

COMPARISON_OPERATORS: Dict[str, Callable[[int, int], int]] = {
    '==': arbor_eq,
    '!=': arbor_ne,
    '<': arbor_lt,
    '>': arbor_gt,
}
