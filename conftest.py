"""
pytest configuration for Dev Toolkit.
Points the config directory at a temporary folder and provides a Flask test client.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path so tests run from a plain checkout
sys.path.insert(0, str(Path(__file__).parent / "src"))

from devtoolkit.config.settings import reload_config
from devtoolkit.bridge.rate_limiter import reset_rate_limiter
from devtoolkit.api.overwatch import reset_service_manager


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Isolate every test from the user's real config, keys and services."""
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv('DEVTOOLKIT_CONFIG_DIR', str(directory))
    reload_config()
    reset_rate_limiter()
    reset_service_manager()

    yield directory

    reload_config()
    reset_rate_limiter()
    reset_service_manager()


@pytest.fixture
def app():
    from devtoolkit.main import create_app
    flask_app = create_app()
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client for endpoint tests."""
    return app.test_client()
