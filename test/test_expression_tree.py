"""
Construction tests for Arbor expression nodes
"""

import pytest

from expression_tree import (
  make_number,
  make_variable,
  make_assignment,
  make_operation,
  make_plus,
  make_less,
  make_if,
  make_if_else,
  make_while,
  make_print,
  make_function,
  make_function_definition,
  make_function_call,
  function_from_definition,
)
from error_handling import ArborNodeError


class TestNodeShapes:
  """Constructors produce tagged dictionaries"""

  def test_number(self):
    assert make_number(4) == {'type': "NUMBER", 'value': 4}

  def test_operator_tags(self):
    assert make_plus(make_number(1), make_number(2))['type'] == "OPERATION"
    assert make_less(make_number(1), make_number(2))['type'] == "COMPARISON"

  def test_sequences_are_tuples(self):
    body = [make_print(make_number(1))]
    loop = make_while(make_number(0), body)
    assert isinstance(loop['value']['body'], tuple)

    call = make_function_call("f", [make_number(1), make_number(2)])
    assert call['value']['args'] == (make_number(1), make_number(2))

  def test_sequence_is_copied_from_caller_list(self):
    body = [make_print(make_number(1))]
    loop = make_while(make_number(0), body)
    body.append(make_print(make_number(2)))
    assert len(loop['value']['body']) == 1

  def test_function_from_definition_shares_body(self):
    definition = make_function_definition("f", ["x"], [make_variable("x")])
    function = function_from_definition(definition)
    assert function['type'] == "FUNCTION"
    assert function['value']['body'] is definition['value']['body']
    assert function['value']['params'] == ("x",)

  def test_function_value(self):
    function = make_function(["a", "b"], [])
    assert function['value'] == {'params': ("a", "b"), 'body': ()}


class TestConstructionErrors:
  """Required children are mandatory"""

  def test_number_rejects_non_int(self):
    with pytest.raises(ArborNodeError):
      make_number("3")
    with pytest.raises(ArborNodeError):
      make_number(True)
    with pytest.raises(ArborNodeError):
      make_number(1.5)

  def test_identifier_must_be_string(self):
    with pytest.raises(ArborNodeError):
      make_variable("")
    with pytest.raises(ArborNodeError):
      make_assignment(None, make_number(1))

  def test_missing_child(self):
    with pytest.raises(ArborNodeError):
      make_assignment("x", None)
    with pytest.raises(ArborNodeError):
      make_plus(make_number(1), None)
    with pytest.raises(ArborNodeError):
      make_if(None, make_number(1))
    with pytest.raises(ArborNodeError):
      make_if_else(make_number(1), make_number(1), None)
    with pytest.raises(ArborNodeError):
      make_print(None)

  def test_child_must_be_node(self):
    with pytest.raises(ArborNodeError):
      make_plus(1, make_number(2))

  def test_unknown_operator(self):
    with pytest.raises(ArborNodeError):
      make_operation('%', make_number(1), make_number(2))

  def test_sequence_required(self):
    with pytest.raises(ArborNodeError):
      make_while(make_number(1), None)
    with pytest.raises(ArborNodeError):
      make_while(make_number(1), [None])

  def test_parameter_names(self):
    with pytest.raises(ArborNodeError):
      make_function_definition("f", "ab", [])
    with pytest.raises(ArborNodeError):
      make_function_definition("f", ["a", 2], [])
    with pytest.raises(ArborNodeError):
      make_function_call("", [])
