"""
Arbor Interpreter - Tree-walking evaluator
Nodes are tagged dictionaries; evaluation reduces each to an int
One mutable environment is threaded through every call; side effects
(assignment, function definition, printing) happen at the nodes that own them
"""

from typing import Callable, Dict, List, Optional
import sys

from environment import (
  make_environment,
  env_lookup_variable,
  env_set_variable,
  env_lookup_function,
  env_define_function,
  env_snapshot,
  env_clear,
)
from error_handling import (
  ArborNodeError,
  ArborRuntimeError,
  EvaluationCancelled,
  RecursionDepthExceeded,
)
from expression_tree import function_from_definition
from stdlib import ARITHMETIC_OPERATORS, COMPARISON_OPERATORS, arbor_print, stdout_sink
from utilities import arity_error


# ============================================================================
# EXECUTION CONTEXT
# ============================================================================

def make_execution_context(output: Optional[Callable[[str], None]] = None,
                           should_cancel: Optional[Callable[[], bool]] = None,
                           max_steps: Optional[int] = None) -> Dict:
  """
  Create an execution context for one program run

  Args:
      output: Sink receiving each printed line (stdout if None)
      should_cancel: Polled before each loop iteration and function-body statement
      max_steps: Budget of such checkpoints before the run is aborted
  """
  return {
      'output': output or stdout_sink,
      'should_cancel': should_cancel,
      'max_steps': max_steps,
      'steps': 0
  }


def checkpoint(context: Dict, node_type: str) -> None:
  """Cooperative cancellation point for long-running constructs"""
  context['steps'] += 1

  should_cancel = context['should_cancel']
  if should_cancel is not None and should_cancel():
    raise EvaluationCancelled(
        f"Evaluation cancelled after {context['steps']} steps", node_type=node_type)

  max_steps = context['max_steps']
  if max_steps is not None and context['steps'] > max_steps:
    raise EvaluationCancelled(
        f"Step budget of {max_steps} exhausted", node_type=node_type)


# ============================================================================
# DISPATCH
# ============================================================================

def eval_ast(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """
  Evaluate an AST node against env and return its integer value.
  env is mutated in place and never replaced.
  """
  if context is None:
    context = make_execution_context()

  if debug:
    print(f"Evaluating: {ast_node['type']}")

  node_type = ast_node['type']

  if node_type == "NUMBER":
    return eval_number(ast_node, env, debug, context)
  elif node_type == "VARIABLE":
    return eval_variable(ast_node, env, debug, context)
  elif node_type == "ASSIGNMENT":
    return eval_assignment(ast_node, env, debug, context)
  elif node_type == "OPERATION":
    return eval_operation(ast_node, env, debug, context)
  elif node_type == "COMPARISON":
    return eval_comparison(ast_node, env, debug, context)
  elif node_type == "IF":
    return eval_if(ast_node, env, debug, context)
  elif node_type == "IF_ELSE":
    return eval_if_else(ast_node, env, debug, context)
  elif node_type == "WHILE":
    return eval_while(ast_node, env, debug, context)
  elif node_type == "PRINT":
    return eval_print(ast_node, env, debug, context)
  elif node_type == "FUNCTION_DEF":
    return eval_function_def(ast_node, env, debug, context)
  elif node_type == "FUNCTION":
    return eval_function(ast_node, env, debug, context)
  elif node_type == "FUNCTION_CALL":
    return eval_function_call(ast_node, env, debug, context)
  else:
    raise ArborNodeError(f"Unknown node type: {node_type}", ast_node)


# ============================================================================
# LITERALS AND VARIABLES
# ============================================================================

def eval_number(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate number literal"""
  return ast_node['value']


def eval_variable(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate variable by looking it up in the environment"""
  return env_lookup_variable(env, ast_node['value'])


def eval_assignment(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate right-hand side, store it, and yield the stored value"""
  value_dict = ast_node['value']
  name = value_dict['name']

  value = eval_ast(value_dict['expr'], env, debug, context)
  env_set_variable(env, name, value)

  if debug:
    print(f"  {name} = {value}")

  return value


# ============================================================================
# OPERATORS
# ============================================================================

def eval_operation(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate arithmetic: left operand, then right operand, then the operator"""
  value_dict = ast_node['value']
  op = value_dict['op']

  left_val = eval_ast(value_dict['left'], env, debug, context)
  right_val = eval_ast(value_dict['right'], env, debug, context)

  if op in ARITHMETIC_OPERATORS:
    return ARITHMETIC_OPERATORS[op](left_val, right_val)
  else:
    raise ArborNodeError(f"Unknown arithmetic operator: {op}", ast_node)


def eval_comparison(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate comparison to 1 or 0"""
  value_dict = ast_node['value']
  op = value_dict['op']

  left_val = eval_ast(value_dict['left'], env, debug, context)
  right_val = eval_ast(value_dict['right'], env, debug, context)

  if op in COMPARISON_OPERATORS:
    return COMPARISON_OPERATORS[op](left_val, right_val)
  else:
    raise ArborNodeError(f"Unknown comparison operator: {op}", ast_node)


# ============================================================================
# CONTROL FLOW
# ============================================================================

def eval_if(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate body only when the condition is nonzero; otherwise 0"""
  value_dict = ast_node['value']

  if eval_ast(value_dict['condition'], env, debug, context):
    return eval_ast(value_dict['body'], env, debug, context)
  return 0


def eval_if_else(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  value_dict = ast_node['value']

  if eval_ast(value_dict['condition'], env, debug, context):
    return eval_ast(value_dict['body'], env, debug, context)
  else:
    return eval_ast(value_dict['else_body'], env, debug, context)


def eval_while(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Run the body while the condition holds; the loop itself yields 0"""
  if context is None:
    context = make_execution_context()

  value_dict = ast_node['value']
  condition = value_dict['condition']
  body = value_dict['body']

  while True:
    checkpoint(context, "WHILE")
    if not eval_ast(condition, env, debug, context):
      break
    for expr in body:
      eval_ast(expr, env, debug, context)

  return 0


def eval_print(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate the value and emit it as a '> n' line"""
  if context is None:
    context = make_execution_context()

  value = eval_ast(ast_node['value'], env, debug, context)
  return arbor_print(value, context['output'])


# ============================================================================
# FUNCTIONS
# ============================================================================

def run_function_body(function: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate a function's body in order and yield the last value (0 if empty)"""
  if context is None:
    context = make_execution_context()

  result = 0
  for expr in function['value']['body']:
    checkpoint(context, "FUNCTION")
    result = eval_ast(expr, env, debug, context)
  return result


def eval_function_def(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Register the function under its name, replacing any earlier definition"""
  name = ast_node['value']['name']
  env_define_function(env, name, function_from_definition(ast_node))

  if debug:
    params = ', '.join(ast_node['value']['params'])
    print(f"  Defined function: {name}({params})")

  return 0


def eval_function(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """Evaluate a function value on its own: run the body without binding anything"""
  return run_function_body(ast_node, env, debug, context)


def eval_function_call(ast_node: Dict, env: Dict, debug: bool = False, context: Optional[Dict] = None) -> int:
  """
  Evaluate function application.

  Parameters are bound positionally into the one global variable table,
  so they stay visible after the call and a nested call to the same
  function overwrites them.
  """
  value_dict = ast_node['value']
  name = value_dict['name']
  arg_asts = value_dict['args']

  function = env_lookup_function(env, name)
  params = function['value']['params']

  if len(arg_asts) != len(params):
    raise arity_error(name, len(params), len(arg_asts))

  arg_values = [eval_ast(arg, env, debug, context) for arg in arg_asts]

  for param, arg_value in zip(params, arg_values):
    env_set_variable(env, param, arg_value)

  if debug:
    bound = ', '.join(f"{p}={v}" for p, v in zip(params, arg_values))
    print(f"  Calling {name}({bound})")

  return run_function_body(function, env, debug, context)


# ============================================================================
# PROGRAM EVALUATION
# ============================================================================

def eval_program(ast_nodes: List[Dict], env: Dict, debug: bool = False,
                 context: Optional[Dict] = None) -> List[int]:
  """
  Evaluate top-level statements in order against one shared environment.
  Returns the value of each statement. The first error aborts the run and
  is re-raised with the failing statement's index recorded.
  """
  if context is None:
    context = make_execution_context()

  results = []
  for index, ast_node in enumerate(ast_nodes):
    try:
      results.append(eval_ast(ast_node, env, debug, context))
    except (ArborRuntimeError, ArborNodeError) as e:
      e.at_statement(index)
      raise
    except RecursionError as e:
      raise RecursionDepthExceeded(
          f"Evaluation nested deeper than the host recursion limit ({sys.getrecursionlimit()})",
          node_type=ast_node['type']).at_statement(index) from e

  return results


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False,
                       output: Optional[Callable[[str], None]] = None,
                       should_cancel: Optional[Callable[[], bool]] = None,
                       max_steps: Optional[int] = None,
                       environment: Optional[Dict] = None):
  """Factory function returning an interpreter bound to one environment"""
  env = environment if environment is not None else make_environment()

  def new_context() -> Dict:
    return make_execution_context(output, should_cancel, max_steps)

  def interpret(ast_nodes: List[Dict]) -> List[int]:
    return eval_program(ast_nodes, env, debug, new_context())

  def interpret_program(ast_nodes: List[Dict]) -> Dict[str, int]:
    eval_program(ast_nodes, env, debug, new_context())
    return env_snapshot(env)['variables']

  def evaluate(ast_node: Dict) -> int:
    return eval_ast(ast_node, env, debug, new_context())

  return type('Interpreter', (), {
      'interpret': lambda self, ast_nodes: interpret(ast_nodes),
      'interpret_program': lambda self, ast_nodes: interpret_program(ast_nodes),
      'evaluate': lambda self, ast_node: evaluate(ast_node),
      'reset': lambda self: env_clear(env),
      'environment': env,
      'debug': debug
  })()


def create_debug_interpreter(**kwargs):
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, **kwargs)
