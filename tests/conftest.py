"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local codeseek package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of codeseek modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("codeseek"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo any configure_logging() a test performed."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
