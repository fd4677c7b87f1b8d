import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from restful_formats.utils.media import FormatNegotiator, FormatRegistryConfig  # noqa: E402


def pytest_configure(config):
    # Add custom markers for test organization
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "negotiation: mark test as testing format negotiation"
    )
    config.addinivalue_line(
        "markers", "mapping: mark test as testing data mapping"
    )


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set environment variables for tests.

    This fixture pins the settings read by ``Settings()`` so that a
    developer's own environment or .env file cannot leak into tests.
    """
    monkeypatch.setenv("RESTFUL_PRETTY_PRINT", "true")
    monkeypatch.setenv("RESTFUL_PRETTY_PRINT_KEY", "prettyPrint")
    monkeypatch.setenv("RESTFUL_XML_ROOT_ELEMENT", "root")
    monkeypatch.setenv("RESTFUL_XML_ITEM_ELEMENT", "item")
    monkeypatch.delenv("RESTFUL_JSONP_KEY", raising=False)

    # Logging
    monkeypatch.setenv("RESTFUL_LOG_LEVEL", "INFO")

    yield


class DummyHandler:
    """Minimal handler used where only registry behaviour matters."""

    def __init__(self, settings=None):
        self.settings = settings

    def encode(self, data, pretty_print=True, **options):
        return repr(data).encode("utf-8")

    def decode(self, payload):
        return payload


@pytest.fixture
def dummy_handler():
    return DummyHandler


@pytest.fixture
def json_xml_negotiator():
    """Negotiator with only JSON and XML registered, JSON first."""
    return FormatNegotiator(
        FormatRegistryConfig(
            formats={
                "application/json": DummyHandler,
                "application/xml": DummyHandler,
            }
        )
    )


@pytest.fixture
def sample_tree():
    return {
        "name": "a",
        "tags": ["x", "y"],
        "owner": {"id": "7", "roles": ["admin", "dev"]},
    }
