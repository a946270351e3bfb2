"""
Pytest configuration and shared fixtures for genpp tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from genpp import GenericBlockExpander, GenppConfig, TypeTable


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def small_table():
    """Two-entry type table: 1 -> long, 2 -> float."""
    return TypeTable.from_pairs([(1, "long"), (2, "float")])


@pytest.fixture
def expander(small_table):
    """Expander with default markers over the small table."""
    return GenericBlockExpander(small_table, GenppConfig())


@pytest.fixture
def example_lines():
    """A single generic block with a two-space indented open marker."""
    return [
        "  GENERICLOOP(x.type)\n",
        "  generic *p = x.data;\n",
        "ENDGENERICLOOP\n",
    ]


@pytest.fixture
def example_expected():
    """Expansion of example_lines over small_table."""
    return [
        "  switch (x.type) {\n",
        "  case 1:\n",
        "     {\n",
        "     long *p = x.data;\n",
        "     } break;\n",
        "  case 2:\n",
        "     {\n",
        "     float *p = x.data;\n",
        "     } break;\n",
        "  default:\n",
        '     croak("Not a known data type code=%d", x.type);\n',
        "  }\n",
    ]


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory so no genpp.toml is discovered."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Helper Functions
# =============================================================================

def case_labels(lines):
    """Case label values of every emitted case, in order."""
    labels = []
    for line in lines:
        stripped = line.strip()
        if stripped.startswith("case ") and stripped.endswith(":"):
            labels.append(stripped[len("case "):-1])
    return labels


def default_count(lines):
    return sum(1 for line in lines if line.strip() == "default:")
