"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Use real I/O but to temp locations
- Should be deterministic
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from repositories import JsonRepository, configure_backend


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """JSON repository rooted in a temp directory."""
    return JsonRepository(base_path=temp_dir)


@pytest.fixture
def client(temp_dir):
    """Flask test client backed by a temp data directory."""
    configure_backend("json", base_path=temp_dir)
    import app

    app.app.config["TESTING"] = True
    with app.app.test_client() as c:
        yield c
    configure_backend("json")
