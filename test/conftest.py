"""
Test configuration for Arith tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from interpreter import create_interpreter


@pytest.fixture
def interp():
  """Provide a fresh interpreter with an empty environment"""
  return create_interpreter()
