"""
Arbor Structural Analysis - Pure Functional Style
Checks that a program handed to the interpreter is a well-formed, acyclic tree
"""

from typing import Any, Dict, List, Optional

from error_handling import ArborSemanticsError
from expression_tree import NODE_TYPES
from stdlib import ARITHMETIC_OPERATORS, COMPARISON_OPERATORS
from utilities import is_node_dict, is_identifier, is_int_literal, node_children


# ============================================================================
# DATA STRUCTURES
# ============================================================================

def make_program_summary() -> Dict:
  """Create an empty summary of what a program touches"""
  return {
      'node_count': 0,
      'node_types': {},
      'assigned_variables': [],
      'defined_functions': [],
      'called_functions': []
  }


def _note_unique(items: List[str], name: str) -> None:
  if name not in items:
    items.append(name)


# ============================================================================
# SHAPE CHECKS
# ============================================================================

def _require_keys(payload: Any, keys: List[str], path: str) -> None:
  if not isinstance(payload, dict):
    raise ArborSemanticsError(f"Payload must be a dict, got {type(payload).__name__}", path)
  for key in keys:
    if payload.get(key) is None:
      raise ArborSemanticsError(f"Missing required field '{key}'", path)


def _require_name(name: Any, path: str) -> None:
  if not is_identifier(name):
    raise ArborSemanticsError(f"Expected identifier, got {name!r}", path)


def _require_sequence(payload: Dict, key: str, path: str) -> None:
  if not isinstance(payload[key], (list, tuple)):
    raise ArborSemanticsError(f"Field '{key}' must be a sequence, got {type(payload[key]).__name__}", path)


def check_node_shape(node: Any, path: str) -> None:
  """Check a single node's tag and payload, not its children"""
  if not is_node_dict(node):
    raise ArborSemanticsError(f"Not an expression node: {node!r}", path)

  node_type = node['type']
  payload = node['value']

  if node_type not in NODE_TYPES:
    raise ArborSemanticsError(f"Unknown node type: {node_type}", path)

  if node_type == "NUMBER":
    if not is_int_literal(payload):
      raise ArborSemanticsError(f"Number literal must be an int, got {payload!r}", path)
  elif node_type == "VARIABLE":
    _require_name(payload, path)
  elif node_type == "ASSIGNMENT":
    _require_keys(payload, ['name', 'expr'], path)
    _require_name(payload['name'], path)
  elif node_type in ("OPERATION", "COMPARISON"):
    _require_keys(payload, ['op', 'left', 'right'], path)
    table = ARITHMETIC_OPERATORS if node_type == "OPERATION" else COMPARISON_OPERATORS
    if payload['op'] not in table:
      raise ArborSemanticsError(f"Operator {payload['op']!r} is not valid for {node_type}", path)
  elif node_type == "IF":
    _require_keys(payload, ['condition', 'body'], path)
  elif node_type == "IF_ELSE":
    _require_keys(payload, ['condition', 'body', 'else_body'], path)
  elif node_type == "WHILE":
    _require_keys(payload, ['condition', 'body'], path)
    _require_sequence(payload, 'body', path)
  elif node_type == "PRINT":
    if payload is None:
      raise ArborSemanticsError("Print requires a value expression", path)
  elif node_type in ("FUNCTION_DEF", "FUNCTION"):
    keys = ['name', 'params', 'body'] if node_type == "FUNCTION_DEF" else ['params', 'body']
    _require_keys(payload, keys, path)
    _require_sequence(payload, 'params', path)
    _require_sequence(payload, 'body', path)
    if node_type == "FUNCTION_DEF":
      _require_name(payload['name'], path)
    for param in payload['params']:
      _require_name(param, path)
  elif node_type == "FUNCTION_CALL":
    _require_keys(payload, ['name', 'args'], path)
    _require_name(payload['name'], path)
    _require_sequence(payload, 'args', path)


# ============================================================================
# TREE WALK
# ============================================================================

def validate_node(node: Any, summary: Optional[Dict] = None, path: str = "program",
                  ancestors: Optional[set] = None, debug: bool = False) -> Dict:
  """
  Validate a node and its whole subtree

  Args:
      node: Root of the subtree
      summary: Summary dict to accumulate into (a fresh one if None)
      path: Human readable location used in error messages
      ancestors: ids of the nodes on the path from the root
      debug: Print each visited node

  Returns:
      The summary dict

  Raises:
      ArborSemanticsError if the subtree is malformed or contains a cycle
  """
  if summary is None:
    summary = make_program_summary()
  if ancestors is None:
    ancestors = set()

  check_node_shape(node, path)

  node_id = id(node)
  if node_id in ancestors:
    raise ArborSemanticsError(f"Cycle detected: {node['type']} node is its own ancestor", path)

  if debug:
    print(f"Validating: {path} {node['type']}")

  node_type = node['type']
  summary['node_count'] += 1
  summary['node_types'][node_type] = summary['node_types'].get(node_type, 0) + 1

  payload = node['value']
  if node_type == "ASSIGNMENT":
    _note_unique(summary['assigned_variables'], payload['name'])
  elif node_type == "FUNCTION_DEF":
    _note_unique(summary['defined_functions'], payload['name'])
  elif node_type == "FUNCTION_CALL":
    _note_unique(summary['called_functions'], payload['name'])

  ancestors.add(node_id)
  try:
    for i, child in enumerate(node_children(node)):
      validate_node(child, summary, f"{path}/{node_type}[{i}]", ancestors, debug)
  finally:
    ancestors.discard(node_id)

  return summary


def validate_program(nodes: List[Dict], debug: bool = False) -> Dict:
  """Validate every top-level statement of a program"""
  if isinstance(nodes, dict):
    raise ArborSemanticsError("Program must be a sequence of statements, got a single node")

  summary = make_program_summary()
  for i, node in enumerate(nodes):
    validate_node(node, summary, f"statement[{i}]", set(), debug)
  return summary


def create_validator(debug: bool = False):
  """Factory function returning a validator"""
  return type('Validator', (), {
      'validate': lambda self, nodes: validate_program(nodes, debug),
      'validate_node': lambda self, node: validate_node(node, debug=debug)
  })()
