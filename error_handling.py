"""
Error handling for the Arbor evaluator with structured error records
Pure functional style - classes only where raise/except needs them
"""

from typing import Any, Dict, Optional


UNDEFINED_VARIABLE = "UndefinedVariable"
UNDEFINED_FUNCTION = "UndefinedFunction"
ARITY_MISMATCH = "ArityMismatch"
ARITHMETIC_ERROR = "ArithmeticError"
CANCELLED = "Cancelled"
RECURSION_LIMIT = "RecursionLimit"


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_runtime_error(
    kind: str,
    message: str,
    node_type: Optional[str] = None,
    identifier: Optional[str] = None,
    env_snapshot: Optional[Dict] = None,
    statement_index: Optional[int] = None
) -> Dict:
  """Create an immutable runtime error structure"""
  return {
      'kind': kind,
      'message': message,
      'node_type': node_type,
      'identifier': identifier,
      'env_snapshot': env_snapshot,
      'statement_index': statement_index
  }


def format_runtime_error(error: Dict) -> str:
  """Format runtime error as string"""
  error_msg = f"{error['kind']}: {error['message']}"

  details = []
  if error['node_type']:
    details.append(f"node {error['node_type']}")
  if error['identifier'] is not None:
    details.append(f"identifier '{error['identifier']}'")
  if error['statement_index'] is not None:
    details.append(f"statement #{error['statement_index']}")

  if details:
    error_msg += f" ({', '.join(details)})"

  return error_msg


def with_statement_index(error: Dict, index: int) -> Dict:
  """Return a copy of the error record tagged with a top-level statement index"""
  return {**error, 'statement_index': index}


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class ArborRuntimeError(Exception):
  """Fatal evaluation error; aborts the current program run"""
  kind = "RuntimeError"

  def __init__(self, message: str, node_type: Optional[str] = None,
               identifier: Optional[str] = None, env_snapshot: Optional[Dict] = None):
    self.message = message
    self.error = make_runtime_error(
        self.kind, message, node_type, identifier, env_snapshot)
    super().__init__(message)

  @property
  def node_type(self) -> Optional[str]:
    return self.error['node_type']

  @property
  def identifier(self) -> Optional[str]:
    return self.error['identifier']

  @property
  def statement_index(self) -> Optional[int]:
    return self.error['statement_index']

  def at_statement(self, index: int) -> 'ArborRuntimeError':
    """Record which top-level statement was running when this error fired"""
    self.error = with_statement_index(self.error, index)
    return self

  def __str__(self) -> str:
    return format_runtime_error(self.error)


class UndefinedVariableError(ArborRuntimeError):
  """Lookup of an identifier that has no variable binding"""
  kind = UNDEFINED_VARIABLE


class UndefinedFunctionError(ArborRuntimeError):
  """Call of a name that has no function definition"""
  kind = UNDEFINED_FUNCTION


class ArityMismatchError(ArborRuntimeError):
  """Argument count does not match the function's parameter count"""
  kind = ARITY_MISMATCH


class ArborArithmeticError(ArborRuntimeError, ArithmeticError):
  """Integer division by zero"""
  kind = ARITHMETIC_ERROR


class EvaluationCancelled(ArborRuntimeError):
  """Cancellation hook fired or the step budget ran out"""
  kind = CANCELLED


class RecursionDepthExceeded(ArborRuntimeError, RecursionError):
  """Nesting of calls or expressions went past the host recursion limit"""
  kind = RECURSION_LIMIT


class ArborNodeError(Exception):
  """Malformed node at construction time or unknown node tag at dispatch"""

  def __init__(self, message: str, node: Any = None):
    self.message = message
    self.node = node
    self.statement_index: Optional[int] = None
    super().__init__(message)

  def at_statement(self, index: int) -> 'ArborNodeError':
    self.statement_index = index
    return self

  def __str__(self) -> str:
    if self.statement_index is not None:
      return f"{self.message} (statement #{self.statement_index})"
    return self.message


class ArborSemanticsError(Exception):
  """Structural problem found while validating a program tree"""

  def __init__(self, message: str, path: Optional[str] = None):
    self.message = message
    self.path = path
    super().__init__(message)

  def __str__(self) -> str:
    if self.path:
      return f"{self.message} (at {self.path})"
    return self.message
