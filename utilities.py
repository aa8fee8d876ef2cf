"""
Utilities module for the Arbor evaluator
Contains common helper functions shared by the tree, validator and interpreter
"""

from typing import Any, Callable, Dict, List

from error_handling import ArityMismatchError


# ==================== NODE SHAPE UTILITIES ====================

def is_node_dict(val: Any) -> bool:
  """
  Check if value looks like an expression node

  Args:
    val: Value to check

  Returns:
    True if val is a dict with a string 'type' tag and a 'value' key
  """
  return isinstance(val, dict) and isinstance(val.get('type'), str) and 'value' in val


def is_identifier(val: Any) -> bool:
  return isinstance(val, str) and len(val) > 0


def is_int_literal(val: Any) -> bool:
  """Plain ints only; bools are rejected even though they subclass int"""
  return isinstance(val, int) and not isinstance(val, bool)


def node_children(node: Dict) -> List[Dict]:
  """
  List the direct child nodes of a node in evaluation order

  Args:
    node: Expression node

  Returns:
    Child nodes (literals and identifiers are not children)
  """
  node_type = node['type']
  payload = node['value']

  if node_type in ("NUMBER", "VARIABLE"):
    return []
  elif node_type == "ASSIGNMENT":
    return [payload['expr']]
  elif node_type in ("OPERATION", "COMPARISON"):
    return [payload['left'], payload['right']]
  elif node_type == "IF":
    return [payload['condition'], payload['body']]
  elif node_type == "IF_ELSE":
    return [payload['condition'], payload['body'], payload['else_body']]
  elif node_type == "WHILE":
    return [payload['condition'], *payload['body']]
  elif node_type == "PRINT":
    return [payload]
  elif node_type in ("FUNCTION_DEF", "FUNCTION"):
    return list(payload['body'])
  elif node_type == "FUNCTION_CALL":
    return list(payload['args'])
  return []


# ==================== ERROR MESSAGE BUILDERS ====================

def arity_error(func_name: str, expected: int, got: int) -> ArityMismatchError:
  """
  Generate arity mismatch error

  Args:
    func_name: Function name
    expected: Number of declared parameters
    got: Number of supplied arguments

  Returns:
    ArityMismatchError with formatted message
  """
  return ArityMismatchError(
    f"{func_name} requires {expected} arguments, got {got}",
    node_type="FUNCTION_CALL",
    identifier=func_name
  )


# ==================== BINARY OPERATION FACTORIES ====================

def binary_comparison_op(op: Callable[[int, int], bool]) -> Callable[[int, int], int]:
  """
  Factory for binary comparison operations

  Args:
    op: Python operator function (e.g., operator.lt)

  Returns:
    Function that performs the comparison and yields 1 or 0

  Examples:
    arbor_lt = binary_comparison_op(operator.lt)
    arbor_lt(1, 2) -> 1
  """
  def comparison(x: int, y: int) -> int:
    return 1 if op(x, y) else 0

  return comparison


def binary_arithmetic_op(op: Callable[[int, int], int]) -> Callable[[int, int], int]:
  """
  Factory for binary arithmetic operations

  Args:
    op: Python operator function (e.g., operator.add)

  Returns:
    Function that performs the arithmetic operation on two ints
  """
  def arithmetic(x: int, y: int) -> int:
    return int(op(x, y))

  return arithmetic
