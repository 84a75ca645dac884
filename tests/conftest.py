import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'fsmkit' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from fsmkit.core.audit import reset_stdlib_logging_for_tests
from fsmkit.core.state import clear_spec_cache


@pytest.fixture(autouse=True)
def _isolate_fsmkit(monkeypatch):
    """Drop FSMKIT_* env vars, cached tables and installed log handlers."""
    for key in list(os.environ):
        if key.startswith("FSMKIT_"):
            monkeypatch.delenv(key, raising=False)
    clear_spec_cache()
    yield
    clear_spec_cache()
    reset_stdlib_logging_for_tests()
