"""
Arbor Environment - the single mutable binding store of a program run
Two flat tables, no parent chain: variables (name -> int) and functions (name -> FUNCTION)
"""

from typing import Dict, Optional

from error_handling import UndefinedVariableError, UndefinedFunctionError


# ============================================================================
# DATA STRUCTURES
# ============================================================================

def make_environment(variables: Optional[Dict[str, int]] = None,
                     functions: Optional[Dict[str, Dict]] = None) -> Dict:
  """Create an environment with the given initial bindings"""
  return {
      'variables': dict(variables) if variables else {},
      'functions': dict(functions) if functions else {}
  }


def env_snapshot(env: Dict) -> Dict:
  """Shallow copy of both tables, safe to keep after the run continues"""
  return {
      'variables': dict(env['variables']),
      'functions': dict(env['functions'])
  }


# ============================================================================
# VARIABLE OPERATIONS
# ============================================================================

def env_has_variable(env: Dict, name: str) -> bool:
  return name in env['variables']


def env_lookup_variable(env: Dict, name: str) -> int:
  """Look up a variable; absence is fatal"""
  if name not in env['variables']:
    raise UndefinedVariableError(
        f"Undefined variable: {name}",
        node_type="VARIABLE",
        identifier=name,
        env_snapshot=env_snapshot(env))
  return env['variables'][name]


def env_set_variable(env: Dict, name: str, value: int) -> int:
  """Insert or overwrite a variable binding in place"""
  env['variables'][name] = value
  return value


# ============================================================================
# FUNCTION OPERATIONS
# ============================================================================

def env_has_function(env: Dict, name: str) -> bool:
  return name in env['functions']


def env_lookup_function(env: Dict, name: str) -> Dict:
  """Look up a function definition; absence is fatal"""
  if name not in env['functions']:
    raise UndefinedFunctionError(
        f"Undefined function: {name}",
        node_type="FUNCTION_CALL",
        identifier=name,
        env_snapshot=env_snapshot(env))
  return env['functions'][name]


def env_define_function(env: Dict, name: str, function: Dict) -> Dict:
  """Insert or replace a function binding in place"""
  env['functions'][name] = function
  return function


def env_clear(env: Dict) -> Dict:
  """Drop every binding while keeping the environment's identity"""
  env['variables'].clear()
  env['functions'].clear()
  return env
