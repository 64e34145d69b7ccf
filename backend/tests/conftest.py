"""
Pytest configuration and fixtures
"""
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Keep test runs off the filesystem
os.environ.setdefault("LOG_FILE_ENABLED", "false")

from starlette.requests import Request

from dc_agent.core.source_config import CONFIG_HEADER


@pytest.fixture
def make_request():
    """Build a bare Starlette request carrying the given config header values"""

    def _make(*values: str, extra_headers: Optional[List[Tuple[str, str]]] = None) -> Request:
        headers = [(CONFIG_HEADER.encode("latin-1"), v.encode("latin-1")) for v in values]
        for name, value in extra_headers or []:
            headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": headers,
        }
        return Request(scope)

    return _make


@pytest.fixture(scope="session")
def app():
    from dc_agent.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
def client(app):
    """Create test client"""
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client
