"""
Structural validation tests
"""

import pytest

from expression_tree import (
  make_number,
  make_variable,
  make_assignment,
  make_plus,
  make_if,
  make_while,
  make_print,
  make_function_definition,
  make_function_call,
)
from semantics import validate_program, validate_node, create_validator
from error_handling import ArborSemanticsError


class TestValidProgram:

  def test_summary(self):
    program = [
        make_assignment("x", make_number(1)),
        make_function_definition("f", ["a"], [make_print(make_variable("a"))]),
        make_function_call("f", [make_plus(make_variable("x"), make_number(2))]),
    ]
    summary = validate_program(program)
    assert summary['node_count'] == 9
    assert summary['assigned_variables'] == ["x"]
    assert summary['defined_functions'] == ["f"]
    assert summary['called_functions'] == ["f"]
    assert summary['node_types']['NUMBER'] == 2

  def test_shared_subtree_is_not_a_cycle(self):
    shared = make_plus(make_number(1), make_number(2))
    tree = make_plus(shared, shared)
    summary = validate_node(tree)
    assert summary['node_count'] == 7

  def test_validator_factory(self):
    validator = create_validator()
    assert validator.validate([make_number(1)])['node_count'] == 1


class TestInvalidProgram:

  def test_cycle_detected(self):
    inner = make_print(make_number(1))
    outer = make_if(make_number(1), inner)
    inner['value'] = outer
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([outer])
    assert "Cycle" in exc_info.value.message

  def test_unknown_tag(self):
    with pytest.raises(ArborSemanticsError):
      validate_program([{'type': "GOTO", 'value': 3}])

  def test_hand_built_node_missing_field(self):
    node = {'type': "ASSIGNMENT", 'value': {'name': "x"}}
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([node])
    assert "expr" in exc_info.value.message

  def test_bad_operator_for_tag(self):
    node = {'type': "COMPARISON", 'value': {'op': '+', 'left': make_number(1), 'right': make_number(2)}}
    with pytest.raises(ArborSemanticsError):
      validate_program([node])

  def test_bad_child_inside_loop(self):
    loop = make_while(make_number(0), [make_number(1)])
    loop['value']['body'] = (make_number(1), "not a node")
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([loop])
    assert "statement[0]/WHILE[2]" in str(exc_info.value)

  def test_single_node_is_not_a_program(self):
    with pytest.raises(ArborSemanticsError):
      validate_program(make_number(1))

  def test_loop_body_must_be_sequence(self):
    loop = make_while(make_number(0), [make_number(1)])
    loop['value']['body'] = 5
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([loop])
    assert "'body' must be a sequence" in exc_info.value.message

  def test_function_params_must_be_sequence(self):
    definition = make_function_definition("f", ["a"], [])
    definition['value']['params'] = 7
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([definition])
    assert "'params' must be a sequence" in exc_info.value.message

  def test_function_body_must_be_sequence(self):
    definition = make_function_definition("f", [], [])
    definition['value']['body'] = 3
    with pytest.raises(ArborSemanticsError):
      validate_program([definition])

  def test_call_args_must_be_sequence(self):
    call = make_function_call("f", [])
    call['value']['args'] = 2
    with pytest.raises(ArborSemanticsError) as exc_info:
      validate_program([call])
    assert "'args' must be a sequence" in exc_info.value.message
