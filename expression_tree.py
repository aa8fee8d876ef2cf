"""
Arbor expression tree - node constructors
Every node is a tagged dictionary {'type': TAG, 'value': payload}
Required children are mandatory arguments and are checked on construction
"""

from typing import Any, Dict, Iterable, Sequence, Tuple

from error_handling import ArborNodeError
from stdlib import ARITHMETIC_OPERATORS, COMPARISON_OPERATORS
from utilities import is_node_dict, is_identifier, is_int_literal


NODE_TYPES = (
    "NUMBER",
    "VARIABLE",
    "ASSIGNMENT",
    "OPERATION",
    "COMPARISON",
    "IF",
    "IF_ELSE",
    "WHILE",
    "PRINT",
    "FUNCTION_DEF",
    "FUNCTION",
    "FUNCTION_CALL",
)


# ============================================================================
# ARGUMENT CHECKS
# ============================================================================

def _require_node(node: Any, role: str, owner: str) -> Dict:
  if node is None:
    raise ArborNodeError(f"{owner} requires a {role} expression, got None")
  if not is_node_dict(node):
    raise ArborNodeError(f"{owner} {role} must be an expression node, got {type(node).__name__}", node)
  return node


def _require_identifier(name: Any, role: str, owner: str) -> str:
  if not is_identifier(name):
    raise ArborNodeError(f"{owner} {role} must be a non-empty string, got {name!r}")
  return name


def _node_sequence(nodes: Iterable[Dict], role: str, owner: str) -> Tuple[Dict, ...]:
  if nodes is None:
    raise ArborNodeError(f"{owner} requires a {role} sequence, got None")
  return tuple(_require_node(node, role, owner) for node in nodes)


def _identifier_sequence(names: Iterable[str], role: str, owner: str) -> Tuple[str, ...]:
  if names is None or isinstance(names, str):
    raise ArborNodeError(f"{owner} requires a sequence of {role} names, got {names!r}")
  return tuple(_require_identifier(name, role, owner) for name in names)


# ============================================================================
# LITERALS AND VARIABLES
# ============================================================================

def make_number(value: int) -> Dict:
  """Integer literal"""
  if not is_int_literal(value):
    raise ArborNodeError(f"Number literal must be an int, got {value!r}")
  return {'type': "NUMBER", 'value': value}


def make_variable(name: str) -> Dict:
  """Read of a variable from the environment"""
  return {'type': "VARIABLE", 'value': _require_identifier(name, "identifier", "Variable")}


def make_assignment(name: str, expr: Dict) -> Dict:
  """Write of expr's value into the environment under name"""
  return {
      'type': "ASSIGNMENT",
      'value': {
          'name': _require_identifier(name, "identifier", "Assignment"),
          'expr': _require_node(expr, "right-hand", "Assignment")
      }
  }


# ============================================================================
# BINARY OPERATORS
# ============================================================================

def make_operation(op: str, left: Dict, right: Dict) -> Dict:
  """Arithmetic (+ - * /) or comparison (== != < >) node"""
  if op in ARITHMETIC_OPERATORS:
    node_type = "OPERATION"
  elif op in COMPARISON_OPERATORS:
    node_type = "COMPARISON"
  else:
    raise ArborNodeError(f"Unknown operator: {op!r}")

  return {
      'type': node_type,
      'value': {
          'op': op,
          'left': _require_node(left, "left", f"Operator {op}"),
          'right': _require_node(right, "right", f"Operator {op}")
      }
  }


def make_plus(left: Dict, right: Dict) -> Dict:
  return make_operation('+', left, right)


def make_minus(left: Dict, right: Dict) -> Dict:
  return make_operation('-', left, right)


def make_multiply(left: Dict, right: Dict) -> Dict:
  return make_operation('*', left, right)


def make_divide(left: Dict, right: Dict) -> Dict:
  return make_operation('/', left, right)


def make_equal(left: Dict, right: Dict) -> Dict:
  return make_operation('==', left, right)


def make_not_equal(left: Dict, right: Dict) -> Dict:
  return make_operation('!=', left, right)


def make_less(left: Dict, right: Dict) -> Dict:
  return make_operation('<', left, right)


def make_greater(left: Dict, right: Dict) -> Dict:
  return make_operation('>', left, right)


# ============================================================================
# CONTROL FLOW AND STATEMENTS
# ============================================================================

def make_if(condition: Dict, body: Dict) -> Dict:
  """Conditional with a single body expression and no else branch"""
  return {
      'type': "IF",
      'value': {
          'condition': _require_node(condition, "condition", "If"),
          'body': _require_node(body, "body", "If")
      }
  }


def make_if_else(condition: Dict, body: Dict, else_body: Dict) -> Dict:
  return {
      'type': "IF_ELSE",
      'value': {
          'condition': _require_node(condition, "condition", "IfElse"),
          'body': _require_node(body, "body", "IfElse"),
          'else_body': _require_node(else_body, "else body", "IfElse")
      }
  }


def make_while(condition: Dict, body: Sequence[Dict]) -> Dict:
  """Loop over an ordered body while condition is nonzero"""
  return {
      'type': "WHILE",
      'value': {
          'condition': _require_node(condition, "condition", "While"),
          'body': _node_sequence(body, "body", "While")
      }
  }


def make_print(expr: Dict) -> Dict:
  return {'type': "PRINT", 'value': _require_node(expr, "value", "Print")}


# ============================================================================
# FUNCTIONS
# ============================================================================

def make_function(params: Sequence[str], body: Sequence[Dict]) -> Dict:
  """Callable value stored in the environment's function table"""
  return {
      'type': "FUNCTION",
      'value': {
          'params': _identifier_sequence(params, "parameter", "Function"),
          'body': _node_sequence(body, "body", "Function")
      }
  }


def make_function_definition(name: str, params: Sequence[str], body: Sequence[Dict]) -> Dict:
  """
  Statement registering a function under name when evaluated

  The body tuple built here is the same object the FUNCTION value
  receives, so the definition and the stored callable share it.
  """
  return {
      'type': "FUNCTION_DEF",
      'value': {
          'name': _require_identifier(name, "name", "FunctionDefinition"),
          'params': _identifier_sequence(params, "parameter", "FunctionDefinition"),
          'body': _node_sequence(body, "body", "FunctionDefinition")
      }
  }


def make_function_call(name: str, args: Sequence[Dict]) -> Dict:
  return {
      'type': "FUNCTION_CALL",
      'value': {
          'name': _require_identifier(name, "name", "FunctionCall"),
          'args': _node_sequence(args, "argument", "FunctionCall")
      }
  }


def function_from_definition(definition: Dict) -> Dict:
  """Build the FUNCTION value for a FUNCTION_DEF node, sharing its body"""
  payload = definition['value']
  return {
      'type': "FUNCTION",
      'value': {
          'params': payload['params'],
          'body': payload['body']
      }
  }
