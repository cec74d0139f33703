"""
Test configuration for Stacklet tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_parser
from interpreter import create_interpreter


@pytest.fixture
def parser():
  """Provide a fresh parser for each test"""
  return create_parser()


@pytest.fixture
def evaluator():
  """Provide a fresh evaluator for each test"""
  return create_interpreter()


@pytest.fixture
def run(parser, evaluator):
  """Parse and evaluate source text on the per-test parser and evaluator"""
  def run_text(text):
    return evaluator.evaluate(parser.parse_string(text))
  return run_text
