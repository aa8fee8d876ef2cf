"""
Test configuration for Arbor evaluator tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from environment import make_environment
from interpreter import make_execution_context


@pytest.fixture
def env():
  """Fresh, empty environment for each test"""
  return make_environment()


@pytest.fixture
def lines():
  """List collecting printed lines"""
  return []


@pytest.fixture
def context(lines):
  """Execution context whose output sink appends to `lines`"""
  return make_execution_context(output=lines.append)
